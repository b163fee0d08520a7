"""URL configuration for dashboard views."""

from __future__ import annotations

from django.urls import path

from dashboard import views

app_name = "dashboard"

urlpatterns = [
    path("", views.dashboard, name="dashboard"),
    path("api/fields/", views.fields_api, name="fields_api"),
    path("api/fields/selection/", views.field_selection, name="field_selection"),
    path("api/palette/", views.palette, name="palette"),
    path("api/widgets/", views.widgets_api, name="widgets_api"),
    path("api/widgets/reorder/", views.widget_reorder, name="widget_reorder"),
    path("api/widgets/<str:widget_id>/", views.widget_detail, name="widget_detail"),
    path("api/widgets/<str:widget_id>/delete/", views.widget_delete, name="widget_delete"),
    path("api/widgets/<str:widget_id>/render/", views.widget_render, name="widget_render"),
    path("api/layout/save/", views.layout_save, name="layout_save"),
]
