"""
Deadline Allocator

Spreads a job's lead time evenly across its stages at day granularity.

    total_days     = max(1, ceil(delivery - creation, in days))
    per_stage_days = max(1, floor(total_days / number_of_stages))
    deadline(i)    = creation + i * per_stage_days days      (i is 1-based)

Computed deadlines are capped at the later of the delivery deadline and
``creation + 1 day``, so a short or past-due job gets degenerate same-day
deadlines instead of a schedule running past delivery.

Explicit overrides win over the computed value for their stage. Overrides are
checked for presence only, so a caller may produce a schedule that is not
monotonic or ends after delivery; ``find_schedule_violations`` reports such
schedules without rejecting them.
"""

import math
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta

from ...shared.base import ensure_utc
from ..value_objects.enums import Stage

SECONDS_PER_DAY = 24 * 60 * 60


def total_days_between(creation_time: datetime, delivery_deadline: datetime) -> int:
    """Whole days of lead time, rounded up and never less than one."""
    seconds = (ensure_utc(delivery_deadline) - ensure_utc(creation_time)).total_seconds()
    return max(1, math.ceil(seconds / SECONDS_PER_DAY))


def per_stage_days(total_days: int, stage_count: int) -> int:
    """Days given to each stage, never less than one."""
    if stage_count <= 0:
        return max(1, total_days)
    return max(1, total_days // stage_count)


def _resolve_overrides(
    overrides: Mapping[Stage | str, datetime | None] | None,
) -> dict[Stage, datetime]:
    resolved: dict[Stage, datetime] = {}
    for key, value in (overrides or {}).items():
        if not value:
            continue
        stage = Stage.parse(key)
        if stage is not None:
            resolved[stage] = ensure_utc(value)
    return resolved


def allocate(
    stages: Sequence[Stage],
    creation_time: datetime,
    delivery_deadline: datetime,
    overrides: Mapping[Stage | str, datetime | None] | None = None,
) -> dict[Stage, datetime]:
    """
    Compute one target deadline per stage.

    Args:
        stages: Stages in workflow order
        creation_time: When the job was created
        delivery_deadline: When the job must be delivered (may be in the past)
        overrides: Optional explicit deadlines keyed by stage or stage name

    Returns:
        Mapping of stage to deadline, in the order of ``stages``
    """
    if not stages:
        return {}

    creation_time = ensure_utc(creation_time)
    delivery_deadline = ensure_utc(delivery_deadline)
    step = timedelta(
        days=per_stage_days(
            total_days_between(creation_time, delivery_deadline), len(stages)
        )
    )
    latest = max(delivery_deadline, creation_time + timedelta(days=1))
    explicit = _resolve_overrides(overrides)

    schedule: dict[Stage, datetime] = {}
    for position, stage in enumerate(stages, start=1):
        computed = min(creation_time + position * step, latest)
        schedule[stage] = explicit.get(stage, computed)
    return schedule


def find_schedule_violations(
    schedule: Mapping[Stage, datetime],
    stages: Sequence[Stage],
    delivery_deadline: datetime,
) -> list[str]:
    """Describe soft-invariant breaches: decreasing deadlines or deadlines past delivery."""
    delivery_deadline = ensure_utc(delivery_deadline)
    violations: list[str] = []
    previous: tuple[Stage, datetime] | None = None

    for stage in stages:
        deadline = schedule.get(stage)
        if deadline is None:
            continue
        deadline = ensure_utc(deadline)
        if previous is not None and deadline < previous[1]:
            violations.append(
                f"{stage.value} deadline {deadline.isoformat()} is earlier than "
                f"{previous[0].value} deadline {previous[1].isoformat()}"
            )
        if deadline > delivery_deadline:
            violations.append(
                f"{stage.value} deadline {deadline.isoformat()} is after delivery "
                f"deadline {delivery_deadline.isoformat()}"
            )
        previous = (stage, deadline)

    return violations
