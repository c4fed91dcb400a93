"""
Dashboard read models.

Aggregate metrics, detailed statistics, deadline alerts and the recent
activity feed. Every function is a pure computation over the snapshots it is
given; lookups are built per call and missing references are rendered as
"Unknown" or "Unassigned".
"""

from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from ..entities.client import Client
from ..entities.employee import Employee
from ..entities.job import Job
from ..entities.task import Task
from ..value_objects.enums import Stage, TaskStatus
from .common import (
    UNKNOWN,
    client_display_name,
    employee_display_name,
    ensure_utc,
    index_by_id,
    job_display_name,
    percentage,
    resolve_now,
)
from .employee_workload import EmployeeWorkload, compute_team_workload
from .risk import is_job_overdue, is_task_overdue

DEFAULT_ALERT_WINDOW_DAYS = 3
DEFAULT_ACTIVITY_LIMIT = 20
_ACTIVITY_PER_KIND = 10


class DashboardMetrics(BaseModel):
    """Headline numbers for the production dashboard."""

    total_jobs: int = 0
    active_jobs: int = 0
    completed_jobs: int = 0
    overdue_jobs: int = 0
    total_tasks: int = 0
    completed_tasks: int = 0
    overall_progress: int = Field(ge=0, le=100, default=0)


class TaskStats(BaseModel):
    total: int = 0
    pending: int = 0
    in_queue: int = 0
    in_progress: int = 0
    completed: int = 0
    delayed: int = 0
    unassigned: int = 0
    overdue: int = 0


class DetailedStats(BaseModel):
    """Breakdowns used by the reports view."""

    jobs: DashboardMetrics
    tasks: TaskStats
    job_types: dict[str, int] = Field(default_factory=dict)
    stages: dict[str, int] = Field(default_factory=dict)
    employees: list[EmployeeWorkload] = Field(default_factory=list)


class DeadlineAlert(BaseModel):
    """A job or task due within the alert window."""

    id: UUID
    kind: Literal["job", "task"]
    title: str
    deadline: datetime
    status: str
    is_overdue: bool
    stage: Stage | None = None
    job_label: str | None = None
    employee_name: str | None = None
    client_name: str | None = None


class ActivityEntry(BaseModel):
    """One line of the recent activity feed."""

    id: str
    kind: Literal["job_created", "task_completed"]
    title: str
    description: str
    timestamp: datetime


def compute_dashboard_metrics(
    jobs: Iterable[Job], tasks: Iterable[Task], now: datetime | None = None
) -> DashboardMetrics:
    now = resolve_now(now)
    jobs = list(jobs)
    tasks = list(tasks)

    completed_jobs = sum(1 for job in jobs if job.status.is_terminal)
    completed_tasks = sum(1 for task in tasks if task.is_complete)

    return DashboardMetrics(
        total_jobs=len(jobs),
        active_jobs=len(jobs) - completed_jobs,
        completed_jobs=completed_jobs,
        overdue_jobs=sum(1 for job in jobs if is_job_overdue(job, now)),
        total_tasks=len(tasks),
        completed_tasks=completed_tasks,
        overall_progress=percentage(completed_tasks, len(tasks)),
    )


def compute_detailed_stats(
    jobs: Iterable[Job],
    tasks: Iterable[Task],
    employees: Iterable[Employee],
    now: datetime | None = None,
) -> DetailedStats:
    now = resolve_now(now)
    jobs = list(jobs)
    tasks = list(tasks)

    by_status = Counter(task.status for task in tasks)
    task_stats = TaskStats(
        total=len(tasks),
        pending=by_status[TaskStatus.PENDING],
        in_queue=by_status[TaskStatus.IN_QUEUE],
        in_progress=by_status[TaskStatus.IN_PROGRESS],
        completed=by_status[TaskStatus.COMPLETED],
        delayed=by_status[TaskStatus.DELAYED],
        unassigned=sum(1 for task in tasks if task.employee_id is None),
        overdue=sum(1 for task in tasks if is_task_overdue(task, now)),
    )

    return DetailedStats(
        jobs=compute_dashboard_metrics(jobs, tasks, now),
        tasks=task_stats,
        job_types=dict(Counter(job.job_type_label for job in jobs)),
        stages=dict(Counter(task.stage.value for task in tasks)),
        employees=compute_team_workload(employees, tasks, now),
    )


def compute_deadline_alerts(
    jobs: Iterable[Job],
    tasks: Iterable[Task],
    employees: Iterable[Employee] = (),
    now: datetime | None = None,
    window_days: int = DEFAULT_ALERT_WINDOW_DAYS,
    clients: Iterable[Client] = (),
) -> list[DeadlineAlert]:
    """
    Open jobs and tasks due within ``window_days`` (overdue ones included), soonest first.

    Job alerts carry the client name when the job references a client.
    """
    now = resolve_now(now)
    horizon = now + timedelta(days=window_days)
    jobs = list(jobs)
    jobs_by_id = index_by_id(jobs)
    employees_by_id = index_by_id(employees)
    clients_by_id = index_by_id(clients)

    alerts: list[DeadlineAlert] = []

    for job in jobs:
        if job.status.is_terminal or ensure_utc(job.delivery_deadline) > horizon:
            continue
        alerts.append(
            DeadlineAlert(
                id=job.id,
                kind="job",
                title=f"Job: {job.display_name}",
                deadline=job.delivery_deadline,
                status=job.status.value,
                is_overdue=is_job_overdue(job, now),
                job_label=job.display_name,
                client_name=client_display_name(job.client_id, clients_by_id),
            )
        )

    for task in tasks:
        if task.is_complete or ensure_utc(task.deadline) > horizon:
            continue
        alerts.append(
            DeadlineAlert(
                id=task.id,
                kind="task",
                title=f"Task: {task.stage.value}",
                deadline=task.deadline,
                status=task.status.value,
                is_overdue=is_task_overdue(task, now),
                stage=task.stage,
                job_label=job_display_name(jobs_by_id.get(task.job_id)),
                employee_name=employee_display_name(task.employee_id, employees_by_id),
            )
        )

    return sorted(alerts, key=lambda alert: ensure_utc(alert.deadline))


def compute_recent_activity(
    jobs: Iterable[Job],
    tasks: Iterable[Task],
    employees: Iterable[Employee] = (),
    limit: int = DEFAULT_ACTIVITY_LIMIT,
) -> list[ActivityEntry]:
    """Newest job creations and task completions, most recent first."""
    jobs = list(jobs)
    jobs_by_id = index_by_id(jobs)
    employees_by_id = index_by_id(employees)

    recent_jobs = sorted(jobs, key=lambda job: ensure_utc(job.created_at), reverse=True)
    entries = [
        ActivityEntry(
            id=f"job-{job.id}",
            kind="job_created",
            title=f"New job created: {job.display_name}",
            description=f"#{job.sequence_number} • {job.quantity}",
            timestamp=job.created_at,
        )
        for job in recent_jobs[:_ACTIVITY_PER_KIND]
    ]

    def completed_at(task: Task) -> datetime:
        return ensure_utc(task.updated_at or task.created_at)

    completed_tasks = sorted(
        (task for task in tasks if task.is_complete), key=completed_at, reverse=True
    )
    for task in completed_tasks[:_ACTIVITY_PER_KIND]:
        job = jobs_by_id.get(task.job_id)
        job_type = job.job_type_label if job else UNKNOWN
        entries.append(
            ActivityEntry(
                id=f"task-{task.id}",
                kind="task_completed",
                title=f"Task completed: {task.stage.value}",
                description=(
                    f"Job: {job_type} • "
                    f"{employee_display_name(task.employee_id, employees_by_id)}"
                ),
                timestamp=completed_at(task),
            )
        )

    entries.sort(key=lambda entry: ensure_utc(entry.timestamp), reverse=True)
    return entries[:limit]
