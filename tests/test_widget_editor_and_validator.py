"""Tests for widget editing drafts and widget validation."""

from __future__ import annotations

import pytest

from dashboard.widgets.collection import WidgetCollection
from dashboard.widgets.editor import WidgetDraft
from dashboard.widgets.palette import default_collection
from dashboard.widgets.schema import (
    ChartOptions,
    KpiCardOptions,
    StatCardOptions,
    TableOptions,
    WidgetModel,
)
from dashboard.widgets.validator import validate_collection, validate_widget

pytestmark = pytest.mark.unit


def _stat(**changes) -> WidgetModel:
    widget = WidgetModel(id="w1", kind="stat-card", title="Total Revenue", bound_fields=("revenue.total",))
    return widget.with_changes(**changes)


def test_draft_toggle_field_appends_and_removes() -> None:
    """Toggling keeps selection order."""

    draft = WidgetDraft.start(_stat(bound_fields=()))
    draft = draft.toggle_field("a").toggle_field("b").toggle_field("c").toggle_field("a")
    assert draft.bound_fields == ("b", "c")


def test_draft_save_keeps_id_and_cancel_restores_original() -> None:
    """Saving yields the edited widget; cancelling yields the original."""

    original = _stat()
    draft = WidgetDraft.start(original).with_title("Revenue").with_size(width=4, height=1)
    assert draft.is_dirty

    saved = draft.save()
    assert saved.id == original.id
    assert (saved.title, saved.width, saved.height) == ("Revenue", 4, 1)
    assert draft.cancel() is original
    assert original.title == "Total Revenue"


def test_untouched_draft_is_not_dirty() -> None:
    """A draft with no edits saves to an equal widget."""

    draft = WidgetDraft.start(_stat())
    assert not draft.is_dirty
    assert draft.save() == _stat()


def test_draft_with_fields_drops_repeats() -> None:
    """Pending fields never repeat a path."""

    draft = WidgetDraft.start(_stat()).with_fields(("a", "b", "a"))
    assert draft.bound_fields == ("a", "b")


def test_save_keeps_chart_config_between_chart_kinds() -> None:
    """Chart options survive a change to another chart kind."""

    chart = WidgetModel(id="c", kind="bar-chart", title="Chart", config=ChartOptions(value_label="USD"))
    assert WidgetDraft.start(chart).with_kind("line-chart").save().config == ChartOptions(value_label="USD")
    assert WidgetDraft.start(chart).with_kind("table").save().config is None


def test_valid_widget_has_no_errors_or_warnings(catalog) -> None:
    """A well-formed widget bound to a compatible field is clean."""

    result = validate_widget(_stat(), catalog=catalog)
    assert result.is_valid
    assert result.errors == ()
    assert result.warnings == ()


def test_default_layout_is_valid(catalog) -> None:
    """The starter layout validates cleanly against the sample catalog."""

    result = validate_collection(default_collection(), catalog=catalog)
    assert result.is_valid
    assert result.warnings == ()


def test_structural_problems_are_errors(catalog) -> None:
    """Blank title, bad sizes, unknown kinds and repeats are errors."""

    widget = WidgetModel(
        id="bad",
        kind="gauge",  # type: ignore[arg-type]
        title="  ",
        bound_fields=("revenue.total", "revenue.total"),
        width=5,  # type: ignore[arg-type]
        height=0,  # type: ignore[arg-type]
    )
    result = validate_widget(widget, catalog=catalog)
    assert not result.is_valid
    joined = "\n".join(result.errors)
    assert "title must be a non-empty string" in joined
    assert "kind is not a supported value" in joined
    assert "width must be one of" in joined
    assert "height must be one of" in joined
    assert "must not repeat a path" in joined


@pytest.mark.parametrize(
    ("kind", "config"),
    [
        ("stat-card", ChartOptions()),
        ("kpi-card", StatCardOptions()),
        ("table", KpiCardOptions()),
        ("bar-chart", TableOptions()),
    ],
)
def test_config_variant_must_match_kind(catalog, kind: str, config) -> None:
    """A config variant attached to another kind is an error."""

    widget = WidgetModel(id="w", kind=kind, title="Widget", config=config)  # type: ignore[arg-type]
    result = validate_widget(widget, catalog=catalog)
    assert not result.is_valid
    assert "does not apply to kind" in result.errors[0]


def test_table_max_rows_must_be_positive(catalog) -> None:
    """max_rows below one is rejected."""

    widget = WidgetModel(
        id="t",
        kind="table",
        title="Top Selling Products",
        bound_fields=("products.topSelling",),
        config=TableOptions(max_rows=0),
    )
    result = validate_widget(widget, catalog=catalog)
    assert result.errors == ("Widget[t].config.max_rows must be at least 1.",)


def test_unknown_and_incompatible_fields_are_warnings(catalog) -> None:
    """Bad bindings render as no data, so they only warn."""

    widget = _stat(bound_fields=("customers.demographics.age", "revenue.byQuarter"))
    result = validate_widget(widget, catalog=catalog)
    assert result.is_valid
    assert "references unknown field 'customers.demographics.age'" in result.warnings[0]
    assert "expects 'number'" in result.warnings[1]


def test_unbound_widget_warns(catalog) -> None:
    """A widget without fields is valid but flagged."""

    result = validate_widget(_stat(bound_fields=()), catalog=catalog)
    assert result.is_valid
    assert result.warnings == ("Widget[w1] has no bound fields.",)


def test_validate_collection_merges_results(catalog) -> None:
    """Collection validation aggregates every widget's problems."""

    collection = WidgetCollection((_stat(), _stat(id="w2", title="")))
    result = validate_collection(collection, catalog=catalog)
    assert not result.is_valid
    assert result.errors == ("Widget[w2].title must be a non-empty string.",)
