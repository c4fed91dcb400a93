"""Stage bottleneck read model: where overdue and at-risk tasks pile up."""

from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ..entities.job import Job
from ..entities.task import Task
from ..value_objects.enums import Stage
from .common import SECONDS_PER_DAY, ensure_utc, index_by_id, resolve_now
from .risk import DEFAULT_AT_RISK_DAYS, is_task_at_risk, is_task_overdue


class StageBottleneck(BaseModel):
    """Overdue/at-risk concentration for one stage."""

    stage: Stage
    at_risk_count: int = Field(ge=0, default=0)
    overdue_count: int = Field(ge=0, default=0)
    affected_job_ids: list[UUID] = Field(default_factory=list)
    average_delay_days: float = Field(ge=0.0, default=0.0)

    @property
    def affected_job_count(self) -> int:
        return len(self.affected_job_ids)


def compute_bottlenecks(
    tasks: Iterable[Task],
    jobs: Iterable[Job],
    now: datetime | None = None,
    at_risk_days: int = DEFAULT_AT_RISK_DAYS,
) -> list[StageBottleneck]:
    """
    Group overdue or at-risk tasks by stage.

    ``at_risk_count`` counts every flagged task of the stage. Affected job ids
    are distinct and limited to jobs present in ``jobs``; tasks whose job is
    missing from the snapshot still count. Results are ordered by count,
    highest first, then by stage order.
    """
    now = resolve_now(now)
    jobs_by_id = index_by_id(jobs)

    bottlenecks: dict[Stage, StageBottleneck] = {}
    delays: dict[Stage, list[float]] = {}

    for task in tasks:
        overdue = is_task_overdue(task, now)
        if not overdue and not is_task_at_risk(task, now, at_risk_days):
            continue

        entry = bottlenecks.setdefault(task.stage, StageBottleneck(stage=task.stage))
        entry.at_risk_count += 1
        if overdue:
            entry.overdue_count += 1
            delay = (now - ensure_utc(task.deadline)).total_seconds() / SECONDS_PER_DAY
            delays.setdefault(task.stage, []).append(delay)

        if task.job_id in jobs_by_id and task.job_id not in entry.affected_job_ids:
            entry.affected_job_ids.append(task.job_id)

    for stage, stage_delays in delays.items():
        bottlenecks[stage].average_delay_days = round(
            sum(stage_delays) / len(stage_delays), 1
        )

    return sorted(
        bottlenecks.values(),
        key=lambda b: (-b.at_risk_count, b.stage.position),
    )
