"""Render dispatch from widgets to presentation requests.

`render_widget` resolves a widget's bound fields against the business record
and returns a kind-specific request for the external chart/table renderer.
Missing or malformed data never raises; it produces a request with no data.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from fields.formatting import format_value
from fields.nodes import is_number
from fields.resolve import last_segment, resolve

from .schema import ChartOptions, KpiCardOptions, StatCardOptions, TableOptions, WidgetModel

logger = logging.getLogger(__name__)

CHART_HEIGHT_TALL: Final[int] = 300
CHART_HEIGHT_SHORT: Final[int] = 150


@dataclass(frozen=True, slots=True)
class ChartPoint:
    """A single `(category, value)` pair for a chart.

    Args:
        label: Category label (the key in the source mapping).
        value: Numeric value, or None when the entry is not a number.
        display: Value formatted with the widget title rules.
    """

    label: str
    value: float | None
    display: object | None


@dataclass(frozen=True, slots=True)
class ChartRequest:
    """Bar/line/pie/area chart payload."""

    widget_id: str
    kind: str
    title: str
    height_px: int
    points: tuple[ChartPoint, ...] = ()
    value_label: str | None = None

    @property
    def has_data(self) -> bool:
        return bool(self.points)

    def as_json(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "widgetId": self.widget_id,
            "title": self.title,
            "heightPx": self.height_px,
            "valueLabel": self.value_label,
            "hasData": self.has_data,
            "data": [{"name": p.label, "value": p.value, "display": p.display} for p in self.points],
        }


@dataclass(frozen=True, slots=True)
class StatCardRequest:
    """Single formatted value with a short label."""

    widget_id: str
    title: str
    label: str
    value: object | None = None
    display: object | None = None
    kind: str = "stat-card"

    @property
    def has_data(self) -> bool:
        return self.value is not None

    def as_json(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "widgetId": self.widget_id,
            "title": self.title,
            "label": self.label,
            "hasData": self.has_data,
            "value": self.value,
            "display": self.display,
        }


@dataclass(frozen=True, slots=True)
class KpiCardRequest:
    """Stat-card payload plus an optional target and clamped progress."""

    widget_id: str
    title: str
    label: str
    value: object | None = None
    display: object | None = None
    target: float | None = None
    target_display: object | None = None
    target_label: str = "Target"
    percentage: float | None = None
    kind: str = "kpi-card"

    @property
    def has_data(self) -> bool:
        return self.value is not None

    @property
    def has_target(self) -> bool:
        return self.target is not None

    def as_json(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "widgetId": self.widget_id,
            "title": self.title,
            "label": self.label,
            "hasData": self.has_data,
            "value": self.value,
            "display": self.display,
            "target": self.target,
            "targetDisplay": self.target_display,
            "targetLabel": self.target_label,
            "percentage": self.percentage,
        }


@dataclass(frozen=True, slots=True)
class TableRequest:
    """Rows of display cells aligned to `columns`."""

    widget_id: str
    title: str
    columns: tuple[str, ...] = ()
    rows: tuple[tuple[object | None, ...], ...] = ()
    kind: str = "table"

    @property
    def has_data(self) -> bool:
        return bool(self.rows)

    def as_json(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "widgetId": self.widget_id,
            "title": self.title,
            "hasData": self.has_data,
            "columns": list(self.columns),
            "rows": [list(row) for row in self.rows],
        }


@dataclass(frozen=True, slots=True)
class UnsupportedRequest:
    """Placeholder for widget kinds the renderer does not know."""

    widget_id: str
    kind: str
    title: str
    message: str = "Unsupported widget type"

    @property
    def has_data(self) -> bool:
        return False

    def as_json(self) -> dict[str, object]:
        return {
            "kind": "unsupported",
            "widgetKind": self.kind,
            "widgetId": self.widget_id,
            "title": self.title,
            "hasData": False,
            "message": self.message,
        }


RenderRequest = ChartRequest | StatCardRequest | KpiCardRequest | TableRequest | UnsupportedRequest

_Resolver = Callable[[str | None], object | None]


def render_widget(
    widget: WidgetModel,
    record: object,
    *,
    catalog_ids: Collection[str] | None = None,
) -> RenderRequest:
    """Build the render request for a single widget.

    Args:
        widget: Widget to render.
        record: Business record the bound paths are resolved against.
        catalog_ids: Optional set of field ids in the current catalog. When
            given, bound paths outside the catalog render as "no data".

    Returns:
        A kind-specific RenderRequest.
    """

    def lookup(path: str | None) -> object | None:
        if path is None:
            return None
        if catalog_ids is not None and path not in catalog_ids:
            logger.debug("Widget %s is bound to %r, which is not in the catalog.", widget.id, path)
            return None
        return resolve(record, path)

    builder = RENDERERS.get(widget.kind)
    if builder is None:
        return UnsupportedRequest(widget_id=widget.id, kind=str(widget.kind), title=widget.title)
    return builder(widget, lookup)


def render_widgets(
    widgets: Iterable[WidgetModel],
    record: object,
    *,
    catalog_ids: Collection[str] | None = None,
) -> tuple[RenderRequest, ...]:
    """Render widgets in order; each widget is rendered independently."""

    return tuple(render_widget(widget, record, catalog_ids=catalog_ids) for widget in widgets)


def _render_chart(widget: WidgetModel, lookup: _Resolver) -> ChartRequest:
    data = lookup(widget.primary_field)
    value_label = widget.config.value_label if isinstance(widget.config, ChartOptions) else None
    points: tuple[ChartPoint, ...] = ()
    if isinstance(data, Mapping):
        points = tuple(
            ChartPoint(
                label=str(name),
                value=float(value) if is_number(value) else None,  # type: ignore[arg-type]
                display=format_value(value, widget_title=widget.title) if is_number(value) else None,
            )
            for name, value in data.items()
        )
    return ChartRequest(
        widget_id=widget.id,
        kind=widget.kind,
        title=widget.title,
        height_px=CHART_HEIGHT_TALL if widget.height > 1 else CHART_HEIGHT_SHORT,
        points=points,
        value_label=value_label,
    )


def _primary_label(widget: WidgetModel, override: str | None) -> str:
    if override:
        return override
    path = widget.primary_field
    return last_segment(path) if path else ""


def _render_stat_card(widget: WidgetModel, lookup: _Resolver) -> StatCardRequest:
    value = lookup(widget.primary_field)
    override = widget.config.label if isinstance(widget.config, StatCardOptions) else None
    return StatCardRequest(
        widget_id=widget.id,
        title=widget.title,
        label=_primary_label(widget, override),
        value=value,
        display=None if value is None else format_value(value, widget_title=widget.title),
    )


def _render_kpi_card(widget: WidgetModel, lookup: _Resolver) -> KpiCardRequest:
    value = lookup(widget.primary_field)
    options = widget.config if isinstance(widget.config, KpiCardOptions) else KpiCardOptions()

    target: float | None = None
    percentage: float | None = None
    raw_target = lookup(widget.secondary_field)
    if is_number(raw_target) and raw_target != 0:
        target = float(raw_target)  # type: ignore[arg-type]
        if is_number(value):
            percentage = min(100.0, 100.0 * float(value) / target)  # type: ignore[arg-type]

    return KpiCardRequest(
        widget_id=widget.id,
        title=widget.title,
        label=_primary_label(widget, options.label),
        value=value,
        display=None if value is None else format_value(value, widget_title=widget.title),
        target=target,
        target_display=None if target is None else format_value(raw_target, widget_title=widget.title),
        target_label=options.target_label or "Target",
        percentage=percentage,
    )


def _render_table(widget: WidgetModel, lookup: _Resolver) -> TableRequest:
    data = lookup(widget.primary_field)
    options = widget.config if isinstance(widget.config, TableOptions) else TableOptions()
    if not _is_row_sequence(data):
        return TableRequest(widget_id=widget.id, title=widget.title)

    rows_source = list(data)  # type: ignore[call-overload]
    first = rows_source[0]
    columns = options.columns if options.columns is not None else tuple(str(key) for key in first)
    if options.max_rows is not None and options.max_rows >= 1:
        rows_source = rows_source[: options.max_rows]

    rows = tuple(
        tuple(_table_cell(row, column, widget_title=widget.title) for column in columns) for row in rows_source
    )
    return TableRequest(widget_id=widget.id, title=widget.title, columns=columns, rows=rows)


def _is_row_sequence(data: object) -> bool:
    if not isinstance(data, Sequence) or isinstance(data, (str, bytes, bytearray)):
        return False
    return bool(data) and isinstance(data[0], Mapping)


def _table_cell(row: object, column: str, *, widget_title: str) -> object | None:
    if not isinstance(row, Mapping):
        return None
    value = row.get(column)
    if is_number(value):
        return format_value(value, widget_title=widget_title)
    return value


RENDERERS: Final[dict[str, Callable[[WidgetModel, _Resolver], RenderRequest]]] = {
    "bar-chart": _render_chart,
    "line-chart": _render_chart,
    "pie-chart": _render_chart,
    "area-chart": _render_chart,
    "stat-card": _render_stat_card,
    "kpi-card": _render_kpi_card,
    "table": _render_table,
}
