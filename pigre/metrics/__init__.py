"""
Metrics and Presentation Data

This module provides:
- Derived views (category distribution, flow split) of the last result
- CSV export of ledger and recent events
- Dashboard snapshot generation
"""

from .views import (
    CategorySlice,
    CategoryBreakdown,
    FlowSplit,
    DerivedViews
)
from .export import EXPORT_HEADERS, export_csv, export_filename
from .dashboard import DashboardData, DashboardGenerator

__all__ = [
    "CategorySlice",
    "CategoryBreakdown",
    "FlowSplit",
    "DerivedViews",
    "EXPORT_HEADERS",
    "export_csv",
    "export_filename",
    "DashboardData",
    "DashboardGenerator"
]
