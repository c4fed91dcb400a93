"""
Overdue and at-risk classification for jobs and tasks.

Overdue: the deadline is strictly in the past and the record is not in a
terminal status. At risk: not terminal, not overdue, and the deadline is at
most ``at_risk_days`` whole days away. Overdue takes precedence.
"""

from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ..entities.job import Job
from ..entities.task import Task
from ..value_objects.enums import TaskStatus
from .common import days_until, ensure_utc, resolve_now

DEFAULT_AT_RISK_DAYS = 1


class TaskRisk(BaseModel):
    """Risk classification of a single task."""

    task_id: UUID
    is_overdue: bool
    is_at_risk: bool
    days_until_deadline: int


def is_task_overdue(task: Task, now: datetime | None = None) -> bool:
    now = resolve_now(now)
    return ensure_utc(task.deadline) < now and not task.status.is_terminal


def is_task_at_risk(
    task: Task, now: datetime | None = None, at_risk_days: int = DEFAULT_AT_RISK_DAYS
) -> bool:
    now = resolve_now(now)
    if task.status.is_terminal or is_task_overdue(task, now):
        return False
    return days_until(task.deadline, now) <= at_risk_days


def is_job_overdue(job: Job, now: datetime | None = None) -> bool:
    now = resolve_now(now)
    return ensure_utc(job.delivery_deadline) < now and not job.status.is_terminal


def is_job_at_risk(
    job: Job, now: datetime | None = None, at_risk_days: int = DEFAULT_AT_RISK_DAYS
) -> bool:
    now = resolve_now(now)
    if job.status.is_terminal or is_job_overdue(job, now):
        return False
    return days_until(job.delivery_deadline, now) <= at_risk_days


def classify_task(
    task: Task, now: datetime | None = None, at_risk_days: int = DEFAULT_AT_RISK_DAYS
) -> TaskRisk:
    now = resolve_now(now)
    return TaskRisk(
        task_id=task.id,
        is_overdue=is_task_overdue(task, now),
        is_at_risk=is_task_at_risk(task, now, at_risk_days),
        days_until_deadline=days_until(task.deadline, now),
    )


def prioritize_tasks(tasks: Iterable[Task], now: datetime | None = None) -> list[Task]:
    """Order tasks for the work queue: overdue, then in progress, then the rest."""
    now = resolve_now(now)

    def rank(task: Task) -> int:
        if is_task_overdue(task, now):
            return 0
        if task.status == TaskStatus.IN_PROGRESS:
            return 1
        return 2

    return sorted(tasks, key=rank)
