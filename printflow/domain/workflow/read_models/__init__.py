"""
Read models for workflow progress, risk and workload analytics.

All functions are pure and recompute from the snapshots passed in.
"""

from .bottlenecks import StageBottleneck, compute_bottlenecks
from .common import (
    UNASSIGNED,
    UNKNOWN,
    client_display_name,
    days_until,
    employee_display_name,
    index_by_id,
    job_display_name,
    percentage,
)
from .dashboard import (
    ActivityEntry,
    DashboardMetrics,
    DeadlineAlert,
    DetailedStats,
    TaskStats,
    compute_dashboard_metrics,
    compute_deadline_alerts,
    compute_detailed_stats,
    compute_recent_activity,
)
from .employee_workload import (
    EmployeeWorkload,
    compute_employee_workload,
    compute_team_workload,
)
from .job_progress import (
    JobProgress,
    StageTimelineEntry,
    compute_job_progress,
    compute_stage_timeline,
)
from .risk import (
    TaskRisk,
    classify_task,
    is_job_at_risk,
    is_job_overdue,
    is_task_at_risk,
    is_task_overdue,
    prioritize_tasks,
)

__all__ = [
    "ActivityEntry",
    "DashboardMetrics",
    "DeadlineAlert",
    "DetailedStats",
    "EmployeeWorkload",
    "JobProgress",
    "StageBottleneck",
    "StageTimelineEntry",
    "TaskRisk",
    "TaskStats",
    "UNASSIGNED",
    "UNKNOWN",
    "classify_task",
    "compute_bottlenecks",
    "compute_dashboard_metrics",
    "compute_deadline_alerts",
    "compute_detailed_stats",
    "compute_employee_workload",
    "compute_job_progress",
    "compute_recent_activity",
    "compute_stage_timeline",
    "compute_team_workload",
    "client_display_name",
    "days_until",
    "employee_display_name",
    "index_by_id",
    "is_job_at_risk",
    "is_job_overdue",
    "is_task_at_risk",
    "is_task_overdue",
    "job_display_name",
    "percentage",
    "prioritize_tasks",
]
