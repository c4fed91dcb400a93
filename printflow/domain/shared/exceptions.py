"""
Domain Exceptions

Errors raised at the persistence/orchestration seam. The workflow analytics
never raise: degenerate and malformed inputs resolve to documented values.
"""

from enum import Enum
from uuid import UUID


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when input to the workflow seam fails validation."""

    def __init__(
        self,
        field_name: str,
        value: str | int | float | bool | None,
        message: str,
        error_code: str | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"

        details: dict[str, str | int | bool | None] = {
            "field": field_name,
            "value": str(value) if value is not None else None,
            "error_code": self.error_code,
        }
        super().__init__(
            f"Validation failed for field '{field_name}': {message}",
            ErrorType.VALIDATION,
            details,
        )


class NotFoundError(DomainError):
    """Base class for missing-record errors."""

    entity_type = "record"

    def __init__(self, entity_id: UUID) -> None:
        details = {f"{self.entity_type}_id": str(entity_id), "entity_type": self.entity_type}
        super().__init__(
            f"{self.entity_type.capitalize()} not found: {entity_id}",
            ErrorType.NOT_FOUND,
            details,
        )
        self.entity_id = entity_id


class JobNotFoundError(NotFoundError):
    """Raised when a job is not found."""

    entity_type = "job"


class TaskNotFoundError(NotFoundError):
    """Raised when a task is not found."""

    entity_type = "task"


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee is not found."""

    entity_type = "employee"


class DuplicateTaskError(DomainError):
    """Raised when a (job, sequence) pair is persisted twice."""

    def __init__(self, job_id: UUID, sequence_in_job: int) -> None:
        super().__init__(
            f"Task sequence {sequence_in_job} already exists for job {job_id}",
            ErrorType.CONFLICT,
            {"job_id": str(job_id), "sequence_in_job": sequence_in_job},
        )
        self.job_id = job_id
        self.sequence_in_job = sequence_in_job
