"""Widget-kind compatibility for catalog fields.

Each widget kind can only bind fields of one value type. The lookup is closed:
a new widget kind needs one row here and a matching branch in the widget
render dispatch (`dashboard.widgets.render`).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from .dto import FieldDescriptor, ValueType

KIND_VALUE_TYPES: Final[dict[str, ValueType]] = {
    "stat-card": "number",
    "kpi-card": "number",
    "table": "array",
    "bar-chart": "object",
    "line-chart": "object",
    "pie-chart": "object",
    "area-chart": "object",
}


def accepted_value_type(kind: str) -> ValueType | None:
    """Return the value type a widget kind binds, or None for unknown kinds."""

    return KIND_VALUE_TYPES.get(kind)


def is_compatible(field: FieldDescriptor, kind: str) -> bool:
    """Return True when `field` can be bound by a widget of `kind`."""

    expected = accepted_value_type(kind)
    return expected is None or field.value_type == expected


def filter_for(catalog: Sequence[FieldDescriptor], kind: str) -> tuple[FieldDescriptor, ...]:
    """Narrow a catalog to the fields a widget kind can bind.

    Args:
        catalog: Field catalog to filter.
        kind: Widget kind. Unknown kinds keep every field.

    Returns:
        Matching descriptors in catalog order.
    """

    return tuple(field for field in catalog if is_compatible(field, kind))
