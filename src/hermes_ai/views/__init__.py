from hermes_ai.views.dashboard import DEFAULT_DASHBOARD_LIMIT, DashboardView, dashboard
from hermes_ai.views.export import HEADER, export_csv, export_filename, render_csv
from hermes_ai.views.trending import (
    APP_PRESET,
    STANDALONE_PRESET,
    TrendingPreset,
    TrendingView,
    trending,
)

__all__ = [
    "APP_PRESET",
    "DEFAULT_DASHBOARD_LIMIT",
    "DashboardView",
    "HEADER",
    "STANDALONE_PRESET",
    "TrendingPreset",
    "TrendingView",
    "dashboard",
    "export_csv",
    "export_filename",
    "render_csv",
    "trending",
]
