"""Widget configuration model and rendering dispatch.

Dashboards are driven by `WidgetModel` objects held in an ordered
`WidgetCollection`. This package contains the schema, collection, editor,
validation, render dispatch and snapshot codec used by the dashboard views.
"""
