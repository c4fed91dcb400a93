"""Helpers shared by the workflow read models."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import TypeVar
from uuid import UUID

from ...shared.base import Entity, ensure_utc, utcnow
from ..entities.client import Client
from ..entities.employee import Employee
from ..entities.job import Job

UNKNOWN = "Unknown"
UNASSIGNED = "Unassigned"

SECONDS_PER_DAY = 24 * 60 * 60
SECONDS_PER_HOUR = 60 * 60

EntityT = TypeVar("EntityT", bound=Entity)


def resolve_now(now: datetime | None) -> datetime:
    return ensure_utc(now) if now is not None else utcnow()


def days_until(deadline: datetime, now: datetime) -> int:
    """Whole days from ``now`` to ``deadline``, truncated toward zero."""
    seconds = (ensure_utc(deadline) - ensure_utc(now)).total_seconds()
    return int(seconds / SECONDS_PER_DAY)


def hours_between(start: datetime, end: datetime) -> int:
    """Whole hours from ``start`` to ``end``, truncated toward zero."""
    seconds = (ensure_utc(end) - ensure_utc(start)).total_seconds()
    return int(seconds / SECONDS_PER_HOUR)


def percentage(part: int, whole: int) -> int:
    """``part / whole`` as a percentage rounded half up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def index_by_id(records: Iterable[EntityT]) -> dict[UUID, EntityT]:
    """Build an id -> record index local to the caller."""
    return {record.id: record for record in records}


def job_display_name(job: Job | None) -> str:
    """Label for a job reference; "Unknown" when the job is missing."""
    if job is None:
        return UNKNOWN
    return job.display_name


def employee_display_name(
    employee_id: UUID | None, employees_by_id: Mapping[UUID, Employee]
) -> str:
    """Label for an assignment: the employee's name, "Unassigned" or "Unknown"."""
    if employee_id is None:
        return UNASSIGNED
    employee = employees_by_id.get(employee_id)
    return employee.name if employee else UNKNOWN


def client_display_name(
    client_id: UUID | None, clients_by_id: Mapping[UUID, Client]
) -> str | None:
    """The client's name, ``None`` when the job has no client, "Unknown" when it is missing."""
    if client_id is None:
        return None
    client = clients_by_id.get(client_id)
    return client.name if client else UNKNOWN
