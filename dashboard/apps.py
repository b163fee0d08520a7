"""App configuration for the dashboard Django app."""

from __future__ import annotations

from django.apps import AppConfig


class DashboardConfig(AppConfig):
    """Configuration for the `dashboard` app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "dashboard"

    def ready(self) -> None:
        """Reset the memoized record when its setting changes (tests)."""

        from django.core.signals import setting_changed

        from dashboard.record import reset_record_cache_on_setting_change

        setting_changed.connect(reset_record_cache_on_setting_change, dispatch_uid="dashboard_record_reset")
