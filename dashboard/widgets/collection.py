"""Ordered, uniquely-keyed widget collections.

`WidgetCollection` is immutable: every mutator returns a new collection and
leaves the receiver untouched, so callers can keep previous values for undo.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .schema import WidgetModel

logger = logging.getLogger(__name__)


class DuplicateWidgetIdError(ValueError):
    """Raised when a collection would contain two widgets with the same id."""

    def __init__(self, *, widget_id: str) -> None:
        """Initialize the error.

        Args:
            widget_id: The id that already exists in the collection.
        """

        super().__init__(f"Widget id {widget_id!r} already exists in the collection.")
        self.widget_id = widget_id


@dataclass(frozen=True, slots=True)
class WidgetCollection:
    """Widgets in render order, keyed by id.

    Args:
        widgets: Widgets in render order. Ids must be unique.

    Raises:
        DuplicateWidgetIdError: When two widgets share an id.
    """

    widgets: tuple[WidgetModel, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for widget in self.widgets:
            if widget.id in seen:
                raise DuplicateWidgetIdError(widget_id=widget.id)
            seen.add(widget.id)

    @classmethod
    def of(cls, widgets: Iterable[WidgetModel]) -> WidgetCollection:
        """Build a collection from any iterable of widgets."""

        return cls(tuple(widgets))

    def __iter__(self) -> Iterator[WidgetModel]:
        return iter(self.widgets)

    def __len__(self) -> int:
        return len(self.widgets)

    def __contains__(self, widget_id: object) -> bool:
        return any(widget.id == widget_id for widget in self.widgets)

    def ids(self) -> tuple[str, ...]:
        """Return widget ids in render order."""

        return tuple(widget.id for widget in self.widgets)

    def get(self, widget_id: str) -> WidgetModel | None:
        """Return the widget with `widget_id`, or None when absent."""

        for widget in self.widgets:
            if widget.id == widget_id:
                return widget
        return None

    def index_of(self, widget_id: str) -> int | None:
        """Return the position of `widget_id`, or None when absent."""

        for idx, widget in enumerate(self.widgets):
            if widget.id == widget_id:
                return idx
        return None

    def append(self, widget: WidgetModel) -> WidgetCollection:
        """Return a collection with `widget` added at the end.

        Raises:
            DuplicateWidgetIdError: When `widget.id` is already present.
        """

        if widget.id in self:
            raise DuplicateWidgetIdError(widget_id=widget.id)
        return WidgetCollection((*self.widgets, widget))

    def remove(self, widget_id: str) -> WidgetCollection:
        """Return a collection without `widget_id` (no-op when absent)."""

        if widget_id not in self:
            return self
        return WidgetCollection(tuple(widget for widget in self.widgets if widget.id != widget_id))

    def update(self, widget: WidgetModel) -> WidgetCollection:
        """Replace the widget sharing `widget.id`, keeping its position.

        Returns the receiver unchanged when the id is absent.
        """

        if widget.id not in self:
            return self
        return WidgetCollection(tuple(widget if existing.id == widget.id else existing for existing in self.widgets))

    def reorder(self, moved_id: str, target_id: str) -> WidgetCollection:
        """Move `moved_id` to the position currently held by `target_id`.

        The moved widget is taken out and reinserted at the target's former
        index; all other widgets keep their relative order. Unknown ids and
        `moved_id == target_id` leave the collection unchanged.
        """

        if moved_id == target_id:
            return self
        old_index = self.index_of(moved_id)
        new_index = self.index_of(target_id)
        if old_index is None or new_index is None:
            logger.debug("Ignoring reorder of %r onto %r: id not in collection.", moved_id, target_id)
            return self
        items = list(self.widgets)
        moved = items.pop(old_index)
        items.insert(new_index, moved)
        return WidgetCollection(tuple(items))
