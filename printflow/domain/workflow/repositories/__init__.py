"""
Repository interfaces for the workflow domain.

Defines the contract the persistence collaborator must implement. The
contract is synchronous: the workflow core never blocks or suspends.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from ..entities.client import Client
from ..entities.employee import Department, Employee
from ..entities.job import Job
from ..entities.task import Task


class JobRepository(ABC):
    """Abstract repository interface for Job entities."""

    @abstractmethod
    def add(self, job: Job) -> Job:
        """
        Store a new job, assigning its display sequence number.

        Returns:
            Stored job entity
        """
        pass

    @abstractmethod
    def get_by_id(self, job_id: UUID) -> Job | None:
        pass

    @abstractmethod
    def get_all(self) -> list[Job]:
        pass

    @abstractmethod
    def update(self, job: Job) -> Job:
        """
        Persist changes to an existing job.

        Raises:
            JobNotFoundError: If the job doesn't exist
        """
        pass

    @abstractmethod
    def delete(self, job_id: UUID) -> bool:
        """Delete a job. Returns False when it did not exist."""
        pass


class TaskRepository(ABC):
    """
    Abstract repository interface for Task entities.

    Implementations must reject a second task with the same
    (job id, sequence) pair by raising ``DuplicateTaskError``.
    """

    @abstractmethod
    def add_many(self, tasks: list[Task]) -> list[Task]:
        pass

    @abstractmethod
    def get_by_id(self, task_id: UUID) -> Task | None:
        pass

    @abstractmethod
    def get_by_job_id(self, job_id: UUID) -> list[Task]:
        pass

    @abstractmethod
    def get_all(self) -> list[Task]:
        pass

    @abstractmethod
    def update(self, task: Task) -> Task:
        pass

    @abstractmethod
    def delete_by_job_id(self, job_id: UUID) -> int:
        """Delete all tasks of a job. Returns the number removed."""
        pass


class EmployeeRepository(ABC):
    """Abstract repository interface for Employee entities."""

    @abstractmethod
    def add(self, employee: Employee) -> Employee:
        pass

    @abstractmethod
    def get_by_id(self, employee_id: UUID) -> Employee | None:
        pass

    @abstractmethod
    def get_all(self) -> list[Employee]:
        pass

    @abstractmethod
    def delete(self, employee_id: UUID) -> bool:
        pass


class DepartmentRepository(ABC):
    """Abstract repository interface for Department entities."""

    @abstractmethod
    def add(self, department: Department) -> Department:
        pass

    @abstractmethod
    def get_all(self) -> list[Department]:
        pass


class ClientRepository(ABC):
    """Abstract repository interface for Client entities."""

    @abstractmethod
    def add(self, client: Client) -> Client:
        pass

    @abstractmethod
    def get_all(self) -> list[Client]:
        pass


__all__ = [
    "ClientRepository",
    "DepartmentRepository",
    "EmployeeRepository",
    "JobRepository",
    "TaskRepository",
]
