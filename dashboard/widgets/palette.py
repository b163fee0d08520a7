"""Built-in widget templates and the starter dashboard layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .collection import WidgetCollection
from .schema import WidgetKind, WidgetModel, create_widget


@dataclass(frozen=True, slots=True)
class WidgetTemplate:
    """A palette entry a user picks to start a new widget.

    Args:
        kind: Widget kind created from the template.
        title: Default title for the new widget.
        description: Short description shown in the palette.
    """

    kind: WidgetKind
    title: str
    description: str

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""

        return {"kind": self.kind, "title": self.title, "description": self.description}


WIDGET_TEMPLATES: Final[tuple[WidgetTemplate, ...]] = (
    WidgetTemplate(kind="bar-chart", title="Bar Chart", description="Compare values across categories"),
    WidgetTemplate(kind="line-chart", title="Line Chart", description="Show trends over time"),
    WidgetTemplate(kind="pie-chart", title="Pie Chart", description="Display proportion of categories"),
    WidgetTemplate(kind="area-chart", title="Area Chart", description="Visualize volume over time"),
    WidgetTemplate(kind="stat-card", title="Stat Card", description="Display a single important metric"),
    WidgetTemplate(kind="table", title="Table", description="Show detailed data in rows and columns"),
    WidgetTemplate(kind="kpi-card", title="KPI Card", description="Track performance against targets"),
)

TEMPLATE_BY_KIND: Final[dict[str, WidgetTemplate]] = {template.kind: template for template in WIDGET_TEMPLATES}


def widget_from_template(template: WidgetTemplate, *, now_ns: int | None = None) -> WidgetModel:
    """Create a fresh, unbound widget from a palette template."""

    return create_widget(template.kind, template.title, now_ns=now_ns)


DEFAULT_WIDGETS: Final[tuple[WidgetModel, ...]] = (
    WidgetModel(
        id="revenue-overview",
        kind="bar-chart",
        title="Revenue by Quarter",
        bound_fields=("revenue.byQuarter",),
        width=2,
        height=2,
    ),
    WidgetModel(
        id="expenses-overview",
        kind="pie-chart",
        title="Expenses by Category",
        bound_fields=("expenses.byCategory",),
        width=2,
        height=2,
    ),
    WidgetModel(
        id="total-revenue",
        kind="stat-card",
        title="Total Revenue",
        bound_fields=("revenue.total",),
        width=1,
        height=1,
    ),
    WidgetModel(
        id="total-customers",
        kind="stat-card",
        title="Total Customers",
        bound_fields=("customers.total",),
        width=1,
        height=1,
    ),
    WidgetModel(
        id="product-categories",
        kind="pie-chart",
        title="Products by Category",
        bound_fields=("products.categories",),
        width=2,
        height=2,
    ),
    WidgetModel(
        id="top-products",
        kind="table",
        title="Top Selling Products",
        bound_fields=("products.topSelling",),
        width=2,
        height=2,
    ),
)


def default_collection() -> WidgetCollection:
    """Return the starter dashboard layout."""

    return WidgetCollection(DEFAULT_WIDGETS)
