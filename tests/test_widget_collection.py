"""Tests for widget creation and WidgetCollection mutations."""

from __future__ import annotations

import pytest

from dashboard.widgets.collection import DuplicateWidgetIdError, WidgetCollection
from dashboard.widgets.palette import (
    DEFAULT_WIDGETS,
    TEMPLATE_BY_KIND,
    WIDGET_TEMPLATES,
    default_collection,
    widget_from_template,
)
from dashboard.widgets.schema import WIDGET_KINDS, WidgetModel, create_widget, new_widget_id

pytestmark = pytest.mark.unit


def _widget(widget_id: str, title: str | None = None) -> WidgetModel:
    return WidgetModel(id=widget_id, kind="stat-card", title=title or widget_id.upper())


def _collection(*ids: str) -> WidgetCollection:
    return WidgetCollection.of(_widget(widget_id) for widget_id in ids)


def test_create_widget_uses_defaults() -> None:
    """New widgets are 2x2, unbound, with a time-stamped id."""

    widget = create_widget("bar-chart", "Bar Chart", now_ns=1700000000000000000)
    assert widget.id == "widget-1700000000000000000"
    assert (widget.width, widget.height) == (2, 2)
    assert widget.bound_fields == ()
    assert widget.config is None


def test_generated_ids_are_unique_even_within_one_clock_tick() -> None:
    """Consecutive ids never collide."""

    ids = [new_widget_id() for _ in range(50)]
    assert len(set(ids)) == 50
    assert all(widget_id.startswith("widget-") for widget_id in ids)


def test_palette_offers_one_template_per_kind() -> None:
    """The palette covers every widget kind exactly once."""

    assert [template.kind for template in WIDGET_TEMPLATES] == list(WIDGET_KINDS)
    assert TEMPLATE_BY_KIND["kpi-card"].title == "KPI Card"

    widget = widget_from_template(TEMPLATE_BY_KIND["table"], now_ns=5)
    assert (widget.id, widget.kind, widget.title) == ("widget-5", "table", "Table")


def test_default_layout_binds_catalog_paths(catalog) -> None:
    """Every starter widget is bound to a field of the sample catalog."""

    paths = {field.path for field in catalog}
    collection = default_collection()
    assert collection.ids() == tuple(widget.id for widget in DEFAULT_WIDGETS)
    assert len(collection) == 6
    for widget in collection:
        assert set(widget.bound_fields) <= paths


def test_append_adds_at_end_and_rejects_duplicate_ids() -> None:
    """Appending a present id surfaces DuplicateWidgetIdError."""

    collection = _collection("a", "b").append(_widget("c"))
    assert collection.ids() == ("a", "b", "c")

    with pytest.raises(DuplicateWidgetIdError) as excinfo:
        collection.append(_widget("b", title="Other"))
    assert excinfo.value.widget_id == "b"
    assert isinstance(excinfo.value, ValueError)


def test_constructing_with_duplicate_ids_raises() -> None:
    """Ids are unique at all times, including construction."""

    with pytest.raises(DuplicateWidgetIdError):
        WidgetCollection((_widget("a"), _widget("a")))


def test_remove_is_idempotent() -> None:
    """Removing twice equals removing once; absent ids are a no-op."""

    collection = _collection("a", "b", "c")
    once = collection.remove("b")
    assert once.ids() == ("a", "c")
    assert once.remove("b") == once
    assert collection.remove("zzz") is collection


def test_update_replaces_in_place() -> None:
    """Updates keep the widget's position; unknown ids are ignored."""

    collection = _collection("a", "b", "c")
    updated = collection.update(_widget("b", title="Renamed"))
    assert updated.ids() == ("a", "b", "c")
    assert updated.get("b").title == "Renamed"  # type: ignore[union-attr]
    assert collection.update(_widget("zzz")) is collection


@pytest.mark.parametrize(
    ("moved", "target", "expected"),
    [
        ("a", "c", ("b", "c", "a", "d")),
        ("d", "a", ("d", "a", "b", "c")),
        ("b", "c", ("a", "c", "b", "d")),
        ("c", "b", ("a", "c", "b", "d")),
    ],
)
def test_reorder_moves_to_the_target_position(moved: str, target: str, expected: tuple[str, ...]) -> None:
    """The moved widget lands at the target's former index."""

    reordered = _collection("a", "b", "c", "d").reorder(moved, target)
    assert reordered.ids() == expected
    assert sorted(reordered.ids()) == ["a", "b", "c", "d"]


@pytest.mark.parametrize(("first", "second"), [("a", "b"), ("b", "c"), ("c", "d"), ("d", "c")])
def test_reorder_then_reverse_restores_order_for_adjacent_members(first: str, second: str) -> None:
    """Swapping neighbours twice returns to the original order."""

    collection = _collection("a", "b", "c", "d")
    assert collection.reorder(first, second).reorder(second, first) == collection


@pytest.mark.parametrize(("moved", "target"), [("a", "a"), ("a", "zzz"), ("zzz", "a"), ("", "")])
def test_reorder_with_same_or_unknown_ids_is_a_noop(moved: str, target: str) -> None:
    """Invalid reorders leave the collection unchanged."""

    collection = _collection("a", "b", "c")
    assert collection.reorder(moved, target) is collection


def test_mutators_never_modify_the_receiver() -> None:
    """Every mutation returns a new collection."""

    collection = _collection("a", "b", "c")
    collection.append(_widget("d"))
    collection.remove("a")
    collection.update(_widget("b", title="Renamed"))
    collection.reorder("a", "c")
    assert collection.ids() == ("a", "b", "c")
    assert collection.get("b").title == "B"  # type: ignore[union-attr]


def test_lookup_helpers() -> None:
    """Membership, lookup and index helpers agree."""

    collection = _collection("a", "b")
    assert "a" in collection
    assert "zzz" not in collection
    assert collection.index_of("b") == 1
    assert collection.index_of("zzz") is None
    assert collection.get("zzz") is None


def test_reorder_reverse_of_distant_members_follows_move_semantics() -> None:
    """Reversing a move across a gap re-applies the move rule, not an undo."""

    collection = _collection("a", "b", "c")
    moved = collection.reorder("a", "c")
    assert moved.ids() == ("b", "c", "a")
    assert moved.reorder("c", "a").ids() == ("b", "a", "c")
