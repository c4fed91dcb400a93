"""Task entity: the per-stage unit of work for one job."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from ...shared.base import Entity, UtcDatetime
from ..value_objects.enums import Stage, TaskStatus


class Task(Entity):
    """
    Task entity representing a single production stage of a job.

    Tasks belong to exactly one job and are identified within it by their
    sequence number, which follows stage order. The employee reference is
    non-owning and may be cleared at any time.
    """

    job_id: UUID
    sequence_in_job: int = Field(ge=1)
    stage: Stage
    department_id: UUID | None = None
    employee_id: UUID | None = None
    deadline: UtcDatetime
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    remarks: str | None = Field(None, max_length=1000)
    delay_comment: str | None = Field(None, max_length=1000)

    @field_validator("remarks", "delay_comment")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None

    def is_valid(self) -> bool:
        """Validate business rules."""
        return self.sequence_in_job >= 1

    @property
    def is_complete(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    @property
    def is_active(self) -> bool:
        return self.status == TaskStatus.IN_PROGRESS

    @property
    def is_assigned(self) -> bool:
        return self.employee_id is not None

    def change_status(
        self,
        new_status: TaskStatus,
        remarks: str | None = None,
        when: datetime | None = None,
    ) -> TaskStatus:
        """Set a new status and return the previous one."""
        old_status = self.status
        self.status = new_status
        if remarks is not None:
            if new_status == TaskStatus.DELAYED:
                self.delay_comment = remarks
            else:
                self.remarks = remarks
        self.mark_updated(when)
        return old_status

    def assign(self, employee_id: UUID | None, when: datetime | None = None) -> UUID | None:
        """Assign (or with ``None`` unassign) an employee; returns the previous one."""
        previous = self.employee_id
        self.employee_id = employee_id
        self.mark_updated(when)
        return previous
