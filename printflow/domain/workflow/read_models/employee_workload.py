"""Employee workload and efficiency read model."""

from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ..entities.employee import Employee
from ..entities.task import Task
from ..value_objects.enums import EmployeeRole, TaskStatus
from .common import percentage, resolve_now
from .risk import is_task_overdue


class EmployeeWorkload(BaseModel):
    """Task counts and completion ratio for one employee."""

    employee_id: UUID
    name: str
    role: EmployeeRole | str
    active: int = Field(ge=0, default=0)
    completed: int = Field(ge=0, default=0)
    overdue: int = Field(ge=0, default=0)
    total: int = Field(ge=0, default=0)
    efficiency_percent: int = Field(ge=0, le=100, default=0)

    @property
    def open_tasks(self) -> int:
        """Assigned tasks that are not completed yet."""
        return self.total - self.completed


def compute_employee_workload(
    employee: Employee, tasks: Iterable[Task], now: datetime | None = None
) -> EmployeeWorkload:
    """
    Partition the employee's assigned tasks.

    Active means in progress; overdue excludes completed tasks. Efficiency is
    the completed share of all assigned tasks, 0 when nothing is assigned.
    """
    now = resolve_now(now)
    assigned = [task for task in tasks if task.employee_id == employee.id]
    completed = sum(1 for task in assigned if task.status == TaskStatus.COMPLETED)

    return EmployeeWorkload(
        employee_id=employee.id,
        name=employee.name,
        role=employee.role,
        active=sum(1 for task in assigned if task.status == TaskStatus.IN_PROGRESS),
        completed=completed,
        overdue=sum(1 for task in assigned if is_task_overdue(task, now)),
        total=len(assigned),
        efficiency_percent=percentage(completed, len(assigned)),
    )


def compute_team_workload(
    employees: Iterable[Employee], tasks: Iterable[Task], now: datetime | None = None
) -> list[EmployeeWorkload]:
    """Workload for every employee, in the order given."""
    now = resolve_now(now)
    tasks = list(tasks)
    return [compute_employee_workload(employee, tasks, now) for employee in employees]
