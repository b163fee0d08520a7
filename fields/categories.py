"""Category grouping, search and selection for the field selection panel.

Categories are derived from the first path segment of each field and are never
persisted. Selections are immutable; every change returns a new selection.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Literal

from .catalog import LABEL_SEPARATOR
from .dto import FieldDescriptor

CategoryState = Literal["all", "some", "none"]


def group_by_category(catalog: Iterable[FieldDescriptor]) -> dict[str, tuple[FieldDescriptor, ...]]:
    """Group catalog fields by category, preserving first-seen category order."""

    grouped: dict[str, list[FieldDescriptor]] = {}
    for field in catalog:
        grouped.setdefault(field.category, []).append(field)
    return {category: tuple(fields) for category, fields in grouped.items()}


def search_fields(catalog: Iterable[FieldDescriptor], term: str) -> tuple[FieldDescriptor, ...]:
    """Return fields whose label contains `term` (case-insensitive).

    An empty or blank term matches every field.
    """

    needle = term.strip().lower()
    return tuple(field for field in catalog if needle in field.label.lower())


def category_title(category: str) -> str:
    """Return a display title for a category (first letter upper-cased)."""

    return category[:1].upper() + category[1:]


def short_label(field: FieldDescriptor) -> str:
    """Return the field label without its leading category segment."""

    return LABEL_SEPARATOR.join(field.label.split(LABEL_SEPARATOR)[1:])


@dataclass(frozen=True, slots=True)
class FieldSelection:
    """An ordered set of selected field ids.

    Args:
        field_ids: Selected ids in selection order (no duplicates).
    """

    field_ids: tuple[str, ...] = ()

    def __contains__(self, field_id: object) -> bool:
        return field_id in self.field_ids

    def __len__(self) -> int:
        return len(self.field_ids)

    def toggle(self, field_id: str) -> FieldSelection:
        """Select `field_id` if unselected, otherwise deselect it."""

        if field_id in self.field_ids:
            return FieldSelection(tuple(existing for existing in self.field_ids if existing != field_id))
        return FieldSelection((*self.field_ids, field_id))

    def select_all(self, fields: Sequence[FieldDescriptor]) -> FieldSelection:
        """Add every field in `fields`, keeping existing selections first."""

        added = tuple(field.id for field in fields if field.id not in self.field_ids)
        return FieldSelection((*self.field_ids, *dict.fromkeys(added)))

    def deselect_all(self, fields: Sequence[FieldDescriptor]) -> FieldSelection:
        """Remove every field in `fields` from the selection."""

        removed = {field.id for field in fields}
        return FieldSelection(tuple(field_id for field_id in self.field_ids if field_id not in removed))

    def set_category(self, fields: Sequence[FieldDescriptor], *, selected: bool) -> FieldSelection:
        """Select or deselect all fields of a category in one step."""

        return self.select_all(fields) if selected else self.deselect_all(fields)

    def state_for(self, fields: Sequence[FieldDescriptor]) -> CategoryState:
        """Return whether all, some or none of `fields` are selected.

        An empty field group reports "all", matching an every() check over no
        items.
        """

        selected = sum(1 for field in fields if field.id in self.field_ids)
        if selected == len(fields):
            return "all"
        if selected:
            return "some"
        return "none"
