"""Dashboard presentation: formatting, view model, controller and Streamlit app."""

from .controller import DashboardController
from .view_model import build_view_model, export_csv

__all__ = ["DashboardController", "build_view_model", "export_csv"]
