"""Common value objects for the workflow domain."""

from pydantic import Field, field_validator

from ...shared.base import ValueObject
from .enums import Stage


class Quantity(ValueObject):
    """Number of units ordered on a job."""

    value: int = Field(gt=0)

    def __str__(self) -> str:
        return f"{self.value:,} units"


class StageSpecification(ValueObject):
    """
    Versioned key/value record describing how one stage should be run.

    Pre-press specs, printing info and similar per-stage details are captured
    here instead of as free-form blobs. The workflow core carries them along
    without interpreting them.
    """

    stage: Stage
    version: int = Field(default=1, ge=1)
    values: dict[str, str] = Field(default_factory=dict)

    @field_validator("values")
    @classmethod
    def strip_keys(cls, v: dict[str, str]) -> dict[str, str]:
        cleaned = {}
        for key, value in v.items():
            key = key.strip()
            if not key:
                raise ValueError("Specification keys cannot be blank")
            cleaned[key] = value
        return cleaned

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.values.get(key, default)
