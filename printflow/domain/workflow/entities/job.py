"""Job aggregate root for a print order moving through production."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from ...shared.base import AggregateRoot, UtcDatetime
from ..events import JobStatusChanged
from ..value_objects.common import Quantity, StageSpecification
from ..value_objects.enums import JobStatus, JobType, Stage


class Job(AggregateRoot):
    """
    Job aggregate root representing one print order.

    A job owns its tasks (one per production stage). Its delivery deadline is
    the target the stage deadlines are interpolated towards; individual stage
    deadlines may be overridden through ``stage_deadlines``.
    """

    sequence_number: int = Field(default=0, ge=0)
    job_type: JobType | str
    quantity: Quantity = Field(default=Quantity(value=1))
    client_id: UUID | None = None
    description: str | None = Field(None, max_length=500)
    delivery_deadline: UtcDatetime
    status: JobStatus = Field(default=JobStatus.PENDING)

    # Explicit per-stage deadline overrides, keyed by stage name
    stage_deadlines: dict[str, UtcDatetime | None] = Field(default_factory=dict)
    specifications: list[StageSpecification] = Field(default_factory=list)

    @field_validator("job_type")
    @classmethod
    def coerce_job_type(cls, v: JobType | str) -> JobType | str:
        """Known job types become ``JobType``; anything else is kept verbatim."""
        try:
            return JobType(v)
        except ValueError:
            return v

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, v):
        if isinstance(v, int):
            return Quantity(value=v)
        return v

    @field_validator("stage_deadlines", mode="before")
    @classmethod
    def normalize_stage_keys(cls, v):
        if not v:
            return {}
        return {
            (key.value if isinstance(key, Stage) else str(key)): value
            for key, value in dict(v).items()
        }

    def is_valid(self) -> bool:
        """Validate business rules."""
        return self.quantity.value > 0

    @property
    def is_terminal(self) -> bool:
        """Check if the job is completed or delivered."""
        return self.status.is_terminal

    @property
    def job_type_label(self) -> str:
        """Plain name of the job type, for known and custom types alike."""
        return self.job_type.value if isinstance(self.job_type, JobType) else self.job_type

    @property
    def display_name(self) -> str:
        """Human readable label for the job."""
        return self.description or self.job_type_label

    def specification_for(self, stage: Stage) -> StageSpecification | None:
        """Latest specification recorded for a stage, if any."""
        matching = [spec for spec in self.specifications if spec.stage == stage]
        if not matching:
            return None
        return max(matching, key=lambda spec: spec.version)

    def change_status(
        self, new_status: JobStatus, when: datetime | None = None
    ) -> JobStatus:
        """Set a new status, record a ``JobStatusChanged`` event and return the old status."""
        old_status = self.status
        self.status = new_status
        self.mark_updated(when)
        self.add_domain_event(
            JobStatusChanged(
                aggregate_id=self.id,
                job_id=self.id,
                old_status=old_status,
                new_status=new_status,
            )
        )
        return old_status
