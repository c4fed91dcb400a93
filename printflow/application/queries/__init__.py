"""
Query services for read models and analytics.

Query services pull snapshots from the repositories and hand them to the
pure read-model functions, applying the configured thresholds.
"""

from .dashboard_queries import DashboardQueryService

__all__ = ["DashboardQueryService"]
