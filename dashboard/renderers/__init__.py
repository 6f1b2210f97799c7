"""
Renderers - HTML for the dashboard page and its widget panels.
"""

from dashboard.renderers.page import DashboardPageRenderer
from dashboard.renderers.widgets import WidgetRenderer

__all__ = ["DashboardPageRenderer", "WidgetRenderer"]
