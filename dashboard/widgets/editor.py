"""Widget editor drafts.

A draft holds the widget being edited plus the pending changes. Saving yields
the edited widget (same id); cancelling yields the original unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .schema import WidgetHeight, WidgetKind, WidgetModel, WidgetWidth, config_kinds


@dataclass(frozen=True, slots=True)
class WidgetDraft:
    """Pending edits for a single widget.

    Args:
        original: Widget as it was when editing started.
        title: Pending title.
        kind: Pending kind.
        bound_fields: Pending ordered field paths.
        width: Pending width.
        height: Pending height.
    """

    original: WidgetModel
    title: str
    kind: WidgetKind
    bound_fields: tuple[str, ...]
    width: WidgetWidth
    height: WidgetHeight

    @classmethod
    def start(cls, widget: WidgetModel) -> WidgetDraft:
        """Begin editing `widget`."""

        return cls(
            original=widget,
            title=widget.title,
            kind=widget.kind,
            bound_fields=widget.bound_fields,
            width=widget.width,
            height=widget.height,
        )

    def toggle_field(self, path: str) -> WidgetDraft:
        """Bind `path` at the end, or unbind it if already bound."""

        if path in self.bound_fields:
            fields = tuple(existing for existing in self.bound_fields if existing != path)
        else:
            fields = (*self.bound_fields, path)
        return replace(self, bound_fields=fields)

    def with_fields(self, paths: tuple[str, ...]) -> WidgetDraft:
        """Replace the pending bound fields, dropping repeated paths."""

        return replace(self, bound_fields=tuple(dict.fromkeys(paths)))

    def with_title(self, title: str) -> WidgetDraft:
        return replace(self, title=title)

    def with_kind(self, kind: WidgetKind) -> WidgetDraft:
        return replace(self, kind=kind)

    def with_size(self, *, width: WidgetWidth, height: WidgetHeight) -> WidgetDraft:
        return replace(self, width=width, height=height)

    @property
    def is_dirty(self) -> bool:
        """Return True when the draft differs from the original widget."""

        return self.save() != self.original

    def save(self) -> WidgetModel:
        """Return the edited widget, keeping the original id and config.

        A config variant that no longer matches the pending kind is dropped.
        """

        config = self.original.config
        if config is not None and self.kind not in config_kinds(config):
            config = None
        return replace(
            self.original,
            title=self.title,
            kind=self.kind,
            bound_fields=self.bound_fields,
            width=self.width,
            height=self.height,
            config=config,
        )

    def cancel(self) -> WidgetModel:
        """Discard pending edits and return the original widget."""

        return self.original
