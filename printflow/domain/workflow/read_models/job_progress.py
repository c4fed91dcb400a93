"""
Job progress read model.

Completion percentage, deadline risk and the current stage of one job, plus
a per-stage timeline comparing allocated and spent hours.
"""

from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ..entities.job import Job
from ..entities.task import Task
from ..value_objects.enums import Stage, TaskStatus
from .common import days_until, hours_between, percentage, resolve_now
from .risk import (
    DEFAULT_AT_RISK_DAYS,
    is_job_at_risk,
    is_job_overdue,
    is_task_at_risk,
    is_task_overdue,
)


class JobProgress(BaseModel):
    """Progress snapshot for one job."""

    job_id: UUID
    percent: int = Field(ge=0, le=100)
    is_overdue: bool
    is_at_risk: bool
    current_stage: Stage | None = None
    completed_tasks: int = Field(ge=0, default=0)
    total_tasks: int = Field(ge=0, default=0)
    days_remaining: int = 0

    @property
    def is_complete(self) -> bool:
        return self.total_tasks > 0 and self.completed_tasks == self.total_tasks


class StageTimelineEntry(BaseModel):
    """Allocated versus spent time for one stage task."""

    task_id: UUID
    stage: Stage
    sequence_in_job: int
    status: TaskStatus
    deadline: datetime
    hours_allocated: int
    hours_spent: int
    time_efficiency: int
    is_delayed: bool
    is_overdue: bool
    is_at_risk: bool


def _job_tasks(job: Job, tasks: Iterable[Task]) -> list[Task]:
    return sorted(
        (task for task in tasks if task.job_id == job.id),
        key=lambda t: t.sequence_in_job,
    )


def compute_job_progress(
    job: Job,
    tasks: Iterable[Task],
    now: datetime | None = None,
    at_risk_days: int = DEFAULT_AT_RISK_DAYS,
) -> JobProgress:
    """
    Summarize a job's progress from its tasks.

    Tasks belonging to other jobs are ignored, so the full task snapshot may
    be passed. A job without tasks is 0% complete.
    """
    now = resolve_now(now)
    job_tasks = _job_tasks(job, tasks)
    completed = sum(1 for task in job_tasks if task.is_complete)

    current_stage = next(
        (task.stage for task in job_tasks if not task.is_complete), None
    )

    return JobProgress(
        job_id=job.id,
        percent=percentage(completed, len(job_tasks)),
        is_overdue=is_job_overdue(job, now),
        is_at_risk=is_job_at_risk(job, now, at_risk_days),
        current_stage=current_stage,
        completed_tasks=completed,
        total_tasks=len(job_tasks),
        days_remaining=days_until(job.delivery_deadline, now),
    )


def compute_stage_timeline(
    job: Job,
    tasks: Iterable[Task],
    now: datetime | None = None,
    at_risk_days: int = DEFAULT_AT_RISK_DAYS,
) -> list[StageTimelineEntry]:
    """Per-stage timing of a job's tasks in sequence order."""
    now = resolve_now(now)
    entries = []

    for task in _job_tasks(job, tasks):
        allocated = hours_between(task.created_at, task.deadline)
        if task.is_complete and task.updated_at is not None:
            spent = hours_between(task.created_at, task.updated_at)
        elif task.is_active:
            spent = hours_between(task.created_at, now)
        else:
            spent = 0

        if allocated > 0:
            efficiency = min(100, round((allocated - spent) / allocated * 100))
        else:
            efficiency = 100

        entries.append(
            StageTimelineEntry(
                task_id=task.id,
                stage=task.stage,
                sequence_in_job=task.sequence_in_job,
                status=task.status,
                deadline=task.deadline,
                hours_allocated=allocated,
                hours_spent=spent,
                time_efficiency=efficiency,
                is_delayed=spent > allocated,
                is_overdue=is_task_overdue(task, now),
                is_at_risk=is_task_at_risk(task, now, at_risk_days),
            )
        )

    return entries
