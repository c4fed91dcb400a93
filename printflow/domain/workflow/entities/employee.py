"""Employee and department entities."""

from uuid import UUID

from pydantic import Field, field_validator

from ...shared.base import Entity
from ..value_objects.enums import EmployeeRole


class Department(Entity):
    """A shop department; production stages resolve to departments by name."""

    name: str = Field(min_length=1, max_length=100)

    def is_valid(self) -> bool:
        return bool(self.name)


class Employee(Entity):
    """Shop-floor employee who can be assigned tasks."""

    name: str = Field(min_length=1, max_length=100)
    department_id: UUID | None = None
    role: EmployeeRole | str = EmployeeRole.PRINTER
    email: str | None = Field(None, max_length=255)

    @field_validator("role")
    @classmethod
    def coerce_role(cls, v: EmployeeRole | str) -> EmployeeRole | str:
        try:
            return EmployeeRole(v)
        except ValueError:
            return v

    def is_valid(self) -> bool:
        return bool(self.name)
