"""Schema types for dashboard widgets.

A widget binds one or more catalog field paths to a presentation kind. Widget
values are immutable; edits produce new values with the same id.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, replace
from typing import Final, Literal, get_args

WidgetKind = Literal[
    "bar-chart",
    "line-chart",
    "pie-chart",
    "area-chart",
    "stat-card",
    "table",
    "kpi-card",
]

WidgetWidth = Literal[1, 2, 3, 4]
WidgetHeight = Literal[1, 2, 3]

WIDGET_KINDS: Final[tuple[str, ...]] = get_args(WidgetKind)
CHART_KINDS: Final[frozenset[str]] = frozenset({"bar-chart", "line-chart", "pie-chart", "area-chart"})
WIDGET_WIDTHS: Final[tuple[int, ...]] = get_args(WidgetWidth)
WIDGET_HEIGHTS: Final[tuple[int, ...]] = get_args(WidgetHeight)

DEFAULT_WIDTH: Final[WidgetWidth] = 2
DEFAULT_HEIGHT: Final[WidgetHeight] = 2


@dataclass(frozen=True, slots=True)
class ChartOptions:
    """Overrides for bar/line/pie/area chart widgets.

    Args:
        value_label: Optional legend/tooltip label for the plotted values.
    """

    value_label: str | None = None


@dataclass(frozen=True, slots=True)
class StatCardOptions:
    """Overrides for stat-card widgets."""

    label: str | None = None


@dataclass(frozen=True, slots=True)
class KpiCardOptions:
    """Overrides for kpi-card widgets.

    Args:
        label: Label shown under the primary value.
        target_label: Label prefix shown before the target value.
    """

    label: str | None = None
    target_label: str | None = None


@dataclass(frozen=True, slots=True)
class TableOptions:
    """Overrides for table widgets.

    Args:
        columns: Explicit column subset/order; None uses the first row's keys.
        max_rows: Optional cap on the number of rendered rows.
    """

    columns: tuple[str, ...] | None = None
    max_rows: int | None = None


WidgetConfig = ChartOptions | StatCardOptions | KpiCardOptions | TableOptions


def config_kinds(config: WidgetConfig) -> frozenset[str]:
    """Return the widget kinds a config variant applies to."""

    if isinstance(config, ChartOptions):
        return CHART_KINDS
    if isinstance(config, StatCardOptions):
        return frozenset({"stat-card"})
    if isinstance(config, KpiCardOptions):
        return frozenset({"kpi-card"})
    return frozenset({"table"})


@dataclass(frozen=True, slots=True)
class WidgetModel:
    """A single dashboard widget.

    Args:
        id: Unique identifier within a collection.
        kind: Presentation kind.
        title: Title shown on the widget (also drives value formatting).
        bound_fields: Ordered field paths; index 0 is the primary value and
            index 1 is the target for kpi-card widgets.
        width: Grid columns spanned (1-4).
        height: Grid rows spanned (1-3).
        config: Optional kind-specific overrides.
    """

    id: str
    kind: WidgetKind
    title: str
    bound_fields: tuple[str, ...] = ()
    width: WidgetWidth = DEFAULT_WIDTH
    height: WidgetHeight = DEFAULT_HEIGHT
    config: WidgetConfig | None = None

    @property
    def primary_field(self) -> str | None:
        """Return the first bound path, if any."""

        return self.bound_fields[0] if self.bound_fields else None

    @property
    def secondary_field(self) -> str | None:
        """Return the second bound path (kpi-card target), if any."""

        return self.bound_fields[1] if len(self.bound_fields) > 1 else None

    def with_changes(self, **changes: object) -> WidgetModel:
        """Return a copy with the given attributes replaced (id is kept)."""

        return replace(self, **changes)  # type: ignore[arg-type]


_id_lock = threading.Lock()
_last_stamp = 0


def new_widget_id(*, now_ns: int | None = None) -> str:
    """Return a time-stamped widget id.

    Generated stamps are strictly increasing within the process so two ids
    created within the same clock tick never collide.

    Args:
        now_ns: Optional timestamp (nanoseconds) for deterministic ids.
    """

    global _last_stamp
    if now_ns is not None:
        return f"widget-{now_ns}"
    with _id_lock:
        _last_stamp = max(time.time_ns(), _last_stamp + 1)
        stamp = _last_stamp
    return f"widget-{stamp}"


def create_widget(kind: WidgetKind, title: str, *, now_ns: int | None = None) -> WidgetModel:
    """Create a new, unbound widget with the default size.

    Args:
        kind: Widget kind.
        title: Widget title.
        now_ns: Optional timestamp used for the generated id.

    Returns:
        A WidgetModel with width=2, height=2 and no bound fields.
    """

    return WidgetModel(id=new_widget_id(now_ns=now_ns), kind=kind, title=title)
