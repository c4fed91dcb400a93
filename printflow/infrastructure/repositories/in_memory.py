"""
In-memory repositories.

Dictionary-backed implementations of the workflow repository contracts, used
by tests and by hosts that keep the record set in process. Stored entities
are copies, so callers mutate their own instances and persist through
``update``.
"""

from collections.abc import Iterable
from uuid import UUID

from printflow.core.observability import get_logger
from printflow.domain.shared.exceptions import (
    DuplicateTaskError,
    JobNotFoundError,
    TaskNotFoundError,
)
from printflow.domain.workflow.entities.client import Client
from printflow.domain.workflow.entities.employee import Department, Employee
from printflow.domain.workflow.entities.job import Job
from printflow.domain.workflow.entities.task import Task
from printflow.domain.workflow.repositories import (
    ClientRepository,
    DepartmentRepository,
    EmployeeRepository,
    JobRepository,
    TaskRepository,
)

logger = get_logger(__name__)


class InMemoryJobRepository(JobRepository):
    def __init__(self) -> None:
        self._jobs: dict[UUID, Job] = {}
        self._next_sequence = 1

    def add(self, job: Job) -> Job:
        stored = job.model_copy(deep=True)
        stored.sequence_number = self._next_sequence
        self._next_sequence += 1
        self._jobs[stored.id] = stored
        job.sequence_number = stored.sequence_number
        return stored.model_copy(deep=True)

    def get_by_id(self, job_id: UUID) -> Job | None:
        job = self._jobs.get(job_id)
        return job.model_copy(deep=True) if job else None

    def get_all(self) -> list[Job]:
        return [
            job.model_copy(deep=True)
            for job in sorted(self._jobs.values(), key=lambda j: j.sequence_number)
        ]

    def update(self, job: Job) -> Job:
        if job.id not in self._jobs:
            raise JobNotFoundError(job.id)
        self._jobs[job.id] = job.model_copy(deep=True)
        return job

    def delete(self, job_id: UUID) -> bool:
        return self._jobs.pop(job_id, None) is not None


class InMemoryTaskRepository(TaskRepository):
    def __init__(self) -> None:
        self._tasks: dict[UUID, Task] = {}
        self._keys: dict[tuple[UUID, int], UUID] = {}

    def add_many(self, tasks: list[Task]) -> list[Task]:
        seen: set[tuple[UUID, int]] = set()
        for task in tasks:
            key = (task.job_id, task.sequence_in_job)
            if key in self._keys or key in seen:
                logger.warning(
                    "duplicate_task_rejected",
                    job_id=str(task.job_id),
                    sequence_in_job=task.sequence_in_job,
                )
                raise DuplicateTaskError(task.job_id, task.sequence_in_job)
            seen.add(key)

        for task in tasks:
            self._tasks[task.id] = task.model_copy(deep=True)
            self._keys[(task.job_id, task.sequence_in_job)] = task.id
        return [task.model_copy(deep=True) for task in tasks]

    def get_by_id(self, task_id: UUID) -> Task | None:
        task = self._tasks.get(task_id)
        return task.model_copy(deep=True) if task else None

    def get_by_job_id(self, job_id: UUID) -> list[Task]:
        return sorted(
            (t.model_copy(deep=True) for t in self._tasks.values() if t.job_id == job_id),
            key=lambda t: t.sequence_in_job,
        )

    def get_all(self) -> list[Task]:
        return [task.model_copy(deep=True) for task in self._tasks.values()]

    def update(self, task: Task) -> Task:
        if task.id not in self._tasks:
            raise TaskNotFoundError(task.id)
        self._tasks[task.id] = task.model_copy(deep=True)
        return task

    def delete_by_job_id(self, job_id: UUID) -> int:
        doomed = [task for task in self._tasks.values() if task.job_id == job_id]
        for task in doomed:
            del self._tasks[task.id]
            del self._keys[(task.job_id, task.sequence_in_job)]
        return len(doomed)


class InMemoryEmployeeRepository(EmployeeRepository):
    def __init__(self, employees: Iterable[Employee] = ()) -> None:
        self._employees: dict[UUID, Employee] = {e.id: e for e in employees}

    def add(self, employee: Employee) -> Employee:
        self._employees[employee.id] = employee
        return employee

    def get_by_id(self, employee_id: UUID) -> Employee | None:
        return self._employees.get(employee_id)

    def get_all(self) -> list[Employee]:
        return list(self._employees.values())

    def delete(self, employee_id: UUID) -> bool:
        return self._employees.pop(employee_id, None) is not None


class InMemoryDepartmentRepository(DepartmentRepository):
    def __init__(self, departments: Iterable[Department] = ()) -> None:
        self._departments: dict[UUID, Department] = {d.id: d for d in departments}

    def add(self, department: Department) -> Department:
        self._departments[department.id] = department
        return department

    def get_all(self) -> list[Department]:
        return list(self._departments.values())


class InMemoryClientRepository(ClientRepository):
    def __init__(self, clients: Iterable[Client] = ()) -> None:
        self._clients: dict[UUID, Client] = {c.id: c for c in clients}

    def add(self, client: Client) -> Client:
        self._clients[client.id] = client
        return client

    def get_all(self) -> list[Client]:
        return list(self._clients.values())
