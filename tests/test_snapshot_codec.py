"""Tests for widget layout snapshot encoding/decoding."""

from __future__ import annotations

import json
import logging

import pytest

from dashboard.persistence import LayoutPersistence
from dashboard.widgets.collection import WidgetCollection
from dashboard.widgets.palette import default_collection
from dashboard.widgets.schema import ChartOptions, KpiCardOptions, TableOptions, WidgetModel
from dashboard.widgets.snapshot_codec import (
    SNAPSHOT_VERSION,
    decode_collection,
    decode_widget,
    encode_collection,
    encode_widget,
)

pytestmark = pytest.mark.unit


def test_encode_widget_shape() -> None:
    """Encoded widgets use the stored key names."""

    widget = WidgetModel(
        id="t",
        kind="table",
        title="Top Selling Products",
        bound_fields=("products.topSelling",),
        width=4,
        height=3,
        config=TableOptions(columns=("name",), max_rows=5),
    )
    assert encode_widget(widget) == {
        "id": "t",
        "type": "table",
        "title": "Top Selling Products",
        "fields": ["products.topSelling"],
        "width": 4,
        "height": 3,
        "config": {"variant": "table", "columns": ["name"], "max_rows": 5},
    }


def test_collection_survives_a_json_round_trip() -> None:
    """Encoded layouts are JSON-serializable and decode to the same layout."""

    collection = default_collection().append(
        WidgetModel(
            id="k",
            kind="kpi-card",
            title="Customers vs Goal",
            bound_fields=("customers.total",),
            config=KpiCardOptions(label="Now", target_label="Goal"),
        )
    )
    payload = json.loads(json.dumps(encode_collection(collection)))
    assert payload["version"] == SNAPSHOT_VERSION
    assert decode_collection(payload) == collection


def test_decode_is_best_effort(caplog: pytest.LogCaptureFixture) -> None:
    """Bad sizes clamp, unknown configs drop, and bad or repeated ids are skipped."""

    payload = {
        "version": SNAPSHOT_VERSION,
        "widgets": [
            {"id": "a", "type": "bar-chart", "title": "A", "fields": ["x"], "width": "9", "height": None},
            {"id": "", "type": "stat-card", "title": "Nameless"},
            "not a widget",
            {"id": "a", "type": "table", "title": "Duplicate"},
            {"id": "b", "type": "line-chart", "title": "B", "width": "3", "config": {"variant": "gauge"}},
            {"id": "c", "type": "area-chart", "title": "C", "fields": "x", "config": {"variant": "chart"}},
        ],
    }
    with caplog.at_level(logging.WARNING, logger="dashboard.widgets.snapshot_codec"):
        collection = decode_collection(payload)

    assert collection.ids() == ("a", "b", "c")
    first = collection.get("a")
    assert first is not None
    assert (first.title, first.width, first.height, first.bound_fields) == ("A", 2, 2, ("x",))
    second = collection.get("b")
    assert second is not None
    assert (second.width, second.config) == (3, None)
    third = collection.get("c")
    assert third is not None
    assert third.bound_fields == ()
    assert third.config == ChartOptions(value_label=None)
    assert "duplicate widget id 'a'" in caplog.text


def test_decode_widget_requires_an_id() -> None:
    """A widget payload without an id cannot be decoded."""

    with pytest.raises(ValueError, match="missing an id"):
        decode_widget({"type": "table"})


def test_decode_empty_payload() -> None:
    """Missing widget lists decode to an empty layout."""

    assert decode_collection({}) == WidgetCollection()


def test_persistence_stub_logs_and_returns_payload(caplog: pytest.LogCaptureFixture) -> None:
    """Saving returns the payload that would be sent to a backend."""

    with caplog.at_level(logging.INFO, logger="dashboard.persistence"):
        payload = LayoutPersistence().save(default_collection(), ("revenue.total",))

    assert payload["version"] == SNAPSHOT_VERSION
    assert len(payload["widgets"]) == 6
    assert payload["selected_fields"] == ["revenue.total"]
    assert "Saving layout with 6 widgets and 1 selected fields." in caplog.text
