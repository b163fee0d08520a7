"""Tests for catalog grouping, search and field selection."""

from __future__ import annotations

import pytest

from fields.catalog import build_catalog
from fields.categories import FieldSelection, category_title, group_by_category, search_fields, short_label

pytestmark = pytest.mark.unit


def test_group_by_category_keeps_first_seen_order(catalog) -> None:
    """Categories follow the order their first field appears in."""

    grouped = group_by_category(catalog)
    assert list(grouped) == ["id", "name", "revenue", "expenses", "customers", "products", "performance"]
    assert [field.path for field in grouped["revenue"]] == [
        "revenue.total",
        "revenue.byQuarter",
        "revenue.byProduct",
    ]


def test_search_matches_labels_case_insensitively(catalog) -> None:
    """Search looks at labels and ignores case."""

    matches = search_fields(catalog, "QUARTER")
    assert [field.path for field in matches] == ["revenue.byQuarter", "expenses.byQuarter"]
    assert search_fields(catalog, "  ") == catalog
    assert search_fields(catalog, "no such field") == ()


def test_short_label_and_category_title() -> None:
    """Short labels drop the category segment; titles capitalize it."""

    (field,) = build_catalog({"revenue": {"region": {"north": 1}}})
    assert short_label(field) == "region > north"
    assert category_title("revenue") == "Revenue"
    assert category_title("") == ""


def test_toggle_adds_then_removes_preserving_order() -> None:
    """Toggling twice restores the previous selection."""

    selection = FieldSelection().toggle("a").toggle("b").toggle("c")
    assert selection.field_ids == ("a", "b", "c")
    assert selection.toggle("b").field_ids == ("a", "c")
    assert selection.toggle("b").toggle("b").field_ids == ("a", "c", "b")
    assert "a" in selection
    assert len(selection) == 3


def test_category_select_and_state(catalog) -> None:
    """Selecting a category reports all/some/none for that group."""

    revenue = group_by_category(catalog)["revenue"]
    selection = FieldSelection()
    assert selection.state_for(revenue) == "none"

    selection = selection.toggle("revenue.total")
    assert selection.state_for(revenue) == "some"

    selection = selection.set_category(revenue, selected=True)
    assert selection.state_for(revenue) == "all"
    assert selection.field_ids == ("revenue.total", "revenue.byQuarter", "revenue.byProduct")

    selection = selection.set_category(revenue, selected=False)
    assert selection.field_ids == ()


def test_selection_is_immutable() -> None:
    """Selection changes return new values."""

    original = FieldSelection(("a",))
    original.toggle("b")
    assert original.field_ids == ("a",)
    assert FieldSelection().state_for(()) == "all"
