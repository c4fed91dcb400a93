"""Domain events raised by the production workflow."""

from uuid import UUID

from ..shared.base import DomainEvent
from .value_objects.enums import JobStatus, TaskStatus


class TasksGenerated(DomainEvent):
    """Event raised when a job's stage tasks have been created."""

    job_id: UUID
    task_ids: list[UUID]
    stage_count: int


class JobStatusChanged(DomainEvent):
    """Event raised when a job moves to a new status."""

    job_id: UUID
    old_status: JobStatus
    new_status: JobStatus


class TaskStatusChanged(DomainEvent):
    """Event raised when a task moves to a new status."""

    task_id: UUID
    job_id: UUID
    old_status: TaskStatus
    new_status: TaskStatus
    remarks: str | None = None


class TaskAssignmentChanged(DomainEvent):
    """Event raised when a task is assigned, reassigned or unassigned."""

    task_id: UUID
    job_id: UUID
    old_employee_id: UUID | None
    new_employee_id: UUID | None
