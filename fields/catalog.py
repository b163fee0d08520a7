"""Field catalog extraction for nested business records.

The catalog is a flat, ordered tuple of FieldDescriptor values produced by a
depth-first walk of the record. The walk stops early at recognized aggregate
keys (e.g. `byQuarter`), whether they hold a mapping or a list, so the catalog
stays small and chart-ready instead of exploding into one leaf per nested
scalar.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Final, cast

from .dto import FieldDescriptor, FieldFormat
from .nodes import Node, classify, is_whole_number

logger = logging.getLogger(__name__)

PATH_SEPARATOR: Final[str] = "."
LABEL_SEPARATOR: Final[str] = " > "

AGGREGATE_KEYS: Final[frozenset[str]] = frozenset(
    {
        "byQuarter",
        "byCategory",
        "byProduct",
        "demographics",
        "categories",
        "kpis",
        "targets",
    }
)

CURRENCY_KEYWORDS: Final[tuple[str, ...]] = ("price", "revenue", "sales", "cost", "expense")
PERCENTAGE_KEYWORDS: Final[tuple[str, ...]] = ("rate", "percentage", "growth", "retention")


def build_catalog(record: object) -> tuple[FieldDescriptor, ...]:
    """Build the field catalog for a business record.

    Args:
        record: Arbitrary tree of mappings, sequences and scalars. Only a
            mapping root yields fields; anything else yields an empty catalog.

    Returns:
        FieldDescriptor entries in depth-first key order.
    """

    root = classify(record)
    if root.kind != "mapping":
        return ()
    fields = tuple(_walk_mapping(root, path="", label=""))
    logger.debug("Built field catalog with %d fields.", len(fields))
    return fields


def infer_format(key: str, value: object) -> FieldFormat:
    """Infer a display format for a numeric leaf from its own key name.

    Args:
        key: Leaf key (not the full path).
        value: Numeric leaf value.

    Returns:
        The inferred FieldFormat.
    """

    lowered = key.lower()
    if any(keyword in lowered for keyword in CURRENCY_KEYWORDS):
        return "currency"
    if any(keyword in lowered for keyword in PERCENTAGE_KEYWORDS):
        return "percentage"
    if is_whole_number(value):
        return "integer"
    return "decimal"


def catalog_index(catalog: Sequence[FieldDescriptor]) -> dict[str, FieldDescriptor]:
    """Return catalog entries keyed by field id."""

    return {field.id: field for field in catalog}


def _walk(node: Node, *, key: str, path: str, label: str) -> list[FieldDescriptor]:
    if node.kind == "mapping":
        return _walk_mapping(node, path=path, label=label)
    if node.kind == "sequence":
        if not node.value:
            return []
        return [FieldDescriptor(id=path, label=label, path=path, value_type="array")]
    if node.scalar_kind == "number":
        return [
            FieldDescriptor(
                id=path,
                label=label,
                path=path,
                value_type="number",
                format=infer_format(key, node.value),
            )
        ]
    if node.scalar_kind == "string":
        return [FieldDescriptor(id=path, label=label, path=path, value_type="string")]
    # None, booleans and other opaque scalars are not addressable fields.
    return []


def _walk_mapping(node: Node, *, path: str, label: str) -> list[FieldDescriptor]:
    value = cast(Mapping[object, object], node.value)

    out: list[FieldDescriptor] = []
    for raw_key, child_value in value.items():
        key = str(raw_key)
        child_path = f"{path}{PATH_SEPARATOR}{key}" if path else key
        child_label = f"{label}{LABEL_SEPARATOR}{key}" if label else key
        child = classify(child_value)
        if child.kind in ("mapping", "sequence") and key in AGGREGATE_KEYS:
            out.append(FieldDescriptor(id=child_path, label=child_label, path=child_path, value_type="object"))
            continue
        out.extend(_walk(child, key=key, path=child_path, label=child_label))
    return out
