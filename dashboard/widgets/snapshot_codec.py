"""Snapshot encoding/decoding helpers for widget collections."""

from __future__ import annotations

import logging
from typing import Any, Final, cast

from .collection import WidgetCollection
from .schema import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    WIDGET_HEIGHTS,
    WIDGET_WIDTHS,
    ChartOptions,
    KpiCardOptions,
    StatCardOptions,
    TableOptions,
    WidgetConfig,
    WidgetModel,
)

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION: Final[str] = "widget_layout_v1"


def encode_widget(widget: WidgetModel) -> dict[str, Any]:
    """Encode a WidgetModel into a JSON-serializable dictionary."""

    payload: dict[str, Any] = {
        "id": widget.id,
        "type": widget.kind,
        "title": widget.title,
        "fields": list(widget.bound_fields),
        "width": widget.width,
        "height": widget.height,
    }
    if widget.config is not None:
        payload["config"] = _encode_config(widget.config)
    return payload


def encode_collection(collection: WidgetCollection) -> dict[str, Any]:
    """Encode a WidgetCollection into a JSON-serializable dictionary.

    Args:
        collection: Collection to encode.

    Returns:
        Dict payload with a version marker and widgets in render order.
    """

    return {
        "version": SNAPSHOT_VERSION,
        "widgets": [encode_widget(widget) for widget in collection],
    }


def decode_widget(payload: dict[str, Any]) -> WidgetModel:
    """Decode a WidgetModel from a stored payload dictionary.

    Raises:
        ValueError: When the id is missing.
    """

    widget_id = str(payload.get("id") or "").strip()
    if not widget_id:
        raise ValueError("Widget payload is missing an id.")
    fields_raw = payload.get("fields") or ()
    kind = str(payload.get("type") or "")
    return WidgetModel(
        id=widget_id,
        kind=kind,  # type: ignore[arg-type]
        title=str(payload.get("title") or ""),
        bound_fields=tuple(str(path) for path in fields_raw) if isinstance(fields_raw, (list, tuple)) else (),
        width=_parse_choice(payload.get("width"), WIDGET_WIDTHS, default=DEFAULT_WIDTH),  # type: ignore[arg-type]
        height=_parse_choice(payload.get("height"), WIDGET_HEIGHTS, default=DEFAULT_HEIGHT),  # type: ignore[arg-type]
        config=_decode_config(payload.get("config")),
    )


def decode_collection(payload: dict[str, Any]) -> WidgetCollection:
    """Decode a WidgetCollection from a stored payload dictionary.

    Decoding is best-effort: malformed widgets and repeated ids are dropped
    (the first occurrence of an id wins).

    Args:
        payload: Payload previously produced by `encode_collection`.

    Returns:
        WidgetCollection in stored order.
    """

    widgets: list[WidgetModel] = []
    seen: set[str] = set()
    for raw in payload.get("widgets") or ():
        if not isinstance(raw, dict):
            continue
        try:
            widget = decode_widget(cast(dict[str, Any], raw))
        except ValueError:
            logger.warning("Dropping malformed widget payload: %r", raw)
            continue
        if widget.id in seen:
            logger.warning("Dropping duplicate widget id %r from snapshot.", widget.id)
            continue
        seen.add(widget.id)
        widgets.append(widget)
    return WidgetCollection(tuple(widgets))


def _encode_config(config: WidgetConfig) -> dict[str, Any]:
    if isinstance(config, ChartOptions):
        return {"variant": "chart", "value_label": config.value_label}
    if isinstance(config, StatCardOptions):
        return {"variant": "stat", "label": config.label}
    if isinstance(config, KpiCardOptions):
        return {"variant": "kpi", "label": config.label, "target_label": config.target_label}
    return {
        "variant": "table",
        "columns": None if config.columns is None else list(config.columns),
        "max_rows": config.max_rows,
    }


def _decode_config(value: object) -> WidgetConfig | None:
    """Best-effort config decoding; unknown variants are dropped."""

    if not isinstance(value, dict):
        return None
    variant = value.get("variant")
    if variant == "chart":
        return ChartOptions(value_label=_parse_str(value.get("value_label")))
    if variant == "stat":
        return StatCardOptions(label=_parse_str(value.get("label")))
    if variant == "kpi":
        return KpiCardOptions(
            label=_parse_str(value.get("label")),
            target_label=_parse_str(value.get("target_label")),
        )
    if variant == "table":
        columns_raw = value.get("columns")
        columns = tuple(str(c) for c in columns_raw) if isinstance(columns_raw, list) else None
        return TableOptions(columns=columns, max_rows=_parse_int(value.get("max_rows")))
    return None


def _parse_str(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _parse_int(value: object) -> int | None:
    """Best-effort int parsing for snapshot payloads."""

    if value is None or value == "":
        return None
    try:
        return int(str(value))
    except ValueError:
        return None


def _parse_choice(value: object, choices: tuple[int, ...], *, default: int) -> int:
    parsed = _parse_int(value)
    if parsed is None or parsed not in choices:
        return default
    return parsed
