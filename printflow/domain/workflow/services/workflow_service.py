"""
Workflow Service

Orchestrates the persistence collaborator around the workflow core: creating
a job triggers task generation exactly once, and status / assignment updates
are applied to stored jobs and tasks. Errors are raised here, at the seam; the
analytics never raise.
"""

from datetime import datetime
from uuid import UUID

from printflow.core.config import settings
from printflow.core.observability import get_logger

from ...shared.base import DomainEvent, ensure_utc, utcnow
from ...shared.exceptions import (
    EmployeeNotFoundError,
    JobNotFoundError,
    TaskNotFoundError,
    ValidationError,
)
from ..entities.job import Job
from ..entities.task import Task
from ..events import TaskAssignmentChanged, TasksGenerated, TaskStatusChanged
from ..repositories import (
    DepartmentRepository,
    EmployeeRepository,
    JobRepository,
    TaskRepository,
)
from ..value_objects.enums import JobStatus, JobType, TaskStatus
from .task_generator import TaskGenerator

logger = get_logger(__name__)


class WorkflowService:
    """
    Service for creating jobs and applying task updates.

    Domain events raised by each operation are collected in ``events`` for
    the host to publish.
    """

    def __init__(
        self,
        job_repository: JobRepository,
        task_repository: TaskRepository,
        employee_repository: EmployeeRepository,
        department_repository: DepartmentRepository,
        task_generator: TaskGenerator | None = None,
    ) -> None:
        """
        Initialize the workflow service.

        Args:
            job_repository: Job data access interface
            task_repository: Task data access interface
            employee_repository: Employee data access interface
            department_repository: Department data access interface
            task_generator: Generator to use (defaults to the configured stage policy)
        """
        self._job_repository = job_repository
        self._task_repository = task_repository
        self._employee_repository = employee_repository
        self._department_repository = department_repository
        self._task_generator = task_generator or TaskGenerator(settings.STAGE_POLICY)
        self.events: list[DomainEvent] = []

    def create_job(
        self,
        job_type: JobType | str,
        quantity: int,
        delivery_deadline: datetime,
        description: str | None = None,
        client_id: UUID | None = None,
        stage_deadlines: dict[str, datetime | None] | None = None,
        now: datetime | None = None,
    ) -> tuple[Job, list[Task]]:
        """
        Validate and store a new job, then generate its stage tasks.

        Raises:
            ValidationError: If quantity is not positive or the delivery
                deadline is not in the future
        """
        now = ensure_utc(now) if now else utcnow()

        if quantity <= 0:
            raise ValidationError("quantity", quantity, "Quantity must be positive")
        if ensure_utc(delivery_deadline) <= now:
            raise ValidationError(
                "delivery_deadline",
                delivery_deadline.isoformat(),
                "Delivery deadline must be in the future",
                "DEADLINE_NOT_IN_FUTURE",
            )

        job = Job(
            job_type=job_type,
            quantity=quantity,
            delivery_deadline=delivery_deadline,
            description=description,
            client_id=client_id,
            stage_deadlines=stage_deadlines or {},
            created_at=now,
        )
        job = self._job_repository.add(job)
        logger.info(
            "job_created",
            job_id=str(job.id),
            sequence_number=job.sequence_number,
            job_type=job.job_type_label,
        )
        return job, self.generate_tasks_for_job(job)

    def generate_tasks_for_job(self, job: Job) -> list[Task]:
        """
        Generate and store the job's tasks unless it already has some.

        Returns:
            The job's tasks in sequence order
        """
        existing = self._task_repository.get_by_job_id(job.id)
        if existing:
            logger.info(
                "task_generation_skipped", job_id=str(job.id), existing=len(existing)
            )
            return existing

        tasks = self._task_generator.generate(
            job, self._department_repository.get_all(), existing
        )
        stored = self._task_repository.add_many(tasks)
        if stored:
            job.add_domain_event(
                TasksGenerated(
                    aggregate_id=job.id,
                    job_id=job.id,
                    task_ids=[task.id for task in stored],
                    stage_count=len(stored),
                )
            )
            self._publish(job)
        return stored

    def update_task_status(
        self,
        task_id: UUID,
        status: TaskStatus,
        remarks: str | None = None,
        now: datetime | None = None,
    ) -> Task:
        """
        Move a task to a new status.

        Raises:
            TaskNotFoundError: If the task doesn't exist
            ValidationError: If the status is not a known task status
        """
        task = self._get_task(task_id)
        old_status = task.change_status(_parse_status(TaskStatus, status), remarks, now)
        self._task_repository.update(task)

        self.events.append(
            TaskStatusChanged(
                aggregate_id=task.job_id,
                task_id=task.id,
                job_id=task.job_id,
                old_status=old_status,
                new_status=task.status,
                remarks=remarks,
            )
        )
        logger.info(
            "task_status_changed",
            task_id=str(task.id),
            old_status=old_status.value,
            new_status=task.status.value,
        )
        return task

    def update_job_status(
        self, job_id: UUID, status: JobStatus, now: datetime | None = None
    ) -> Job:
        """
        Move a job to a new status.

        Raises:
            JobNotFoundError: If the job doesn't exist
            ValidationError: If the status is not a known job status
        """
        job = self._job_repository.get_by_id(job_id)
        if job is None:
            raise JobNotFoundError(job_id)

        old_status = job.change_status(_parse_status(JobStatus, status), now)
        self._publish(job)
        self._job_repository.update(job)

        logger.info(
            "job_status_changed",
            job_id=str(job.id),
            old_status=old_status.value,
            new_status=job.status.value,
        )
        return job

    def assign_task(
        self, task_id: UUID, employee_id: UUID | None, now: datetime | None = None
    ) -> Task:
        """
        Assign a task to an employee, or unassign it with ``None``.

        Raises:
            TaskNotFoundError: If the task doesn't exist
            EmployeeNotFoundError: If the employee doesn't exist
        """
        task = self._get_task(task_id)
        if employee_id is not None and self._employee_repository.get_by_id(employee_id) is None:
            raise EmployeeNotFoundError(employee_id)

        previous = task.assign(employee_id, now)
        self._task_repository.update(task)

        self.events.append(
            TaskAssignmentChanged(
                aggregate_id=task.job_id,
                task_id=task.id,
                job_id=task.job_id,
                old_employee_id=previous,
                new_employee_id=employee_id,
            )
        )
        logger.info(
            "task_assignment_changed",
            task_id=str(task.id),
            old_employee_id=str(previous) if previous else None,
            new_employee_id=str(employee_id) if employee_id else None,
        )
        return task

    def delete_job(self, job_id: UUID) -> int:
        """
        Delete a job together with its tasks.

        Returns:
            Number of tasks removed

        Raises:
            JobNotFoundError: If the job doesn't exist
        """
        if not self._job_repository.delete(job_id):
            raise JobNotFoundError(job_id)
        removed = self._task_repository.delete_by_job_id(job_id)
        logger.info("job_deleted", job_id=str(job_id), tasks_removed=removed)
        return removed

    def delete_employee(self, employee_id: UUID) -> int:
        """
        Delete an employee and clear their task assignments.

        Returns:
            Number of tasks that were unassigned

        Raises:
            EmployeeNotFoundError: If the employee doesn't exist
        """
        if not self._employee_repository.delete(employee_id):
            raise EmployeeNotFoundError(employee_id)

        cleared = 0
        for task in self._task_repository.get_all():
            if task.employee_id == employee_id:
                previous = task.assign(None)
                self._task_repository.update(task)
                self.events.append(
                    TaskAssignmentChanged(
                        aggregate_id=task.job_id,
                        task_id=task.id,
                        job_id=task.job_id,
                        old_employee_id=previous,
                        new_employee_id=None,
                    )
                )
                cleared += 1

        logger.info("employee_deleted", employee_id=str(employee_id), tasks_unassigned=cleared)
        return cleared

    def _get_task(self, task_id: UUID) -> Task:
        task = self._task_repository.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def _publish(self, job: Job) -> None:
        # Drained before the job is stored so persisted copies carry no pending events
        self.events.extend(job.get_domain_events())
        job.clear_domain_events()


def _parse_status(status_type, value):
    try:
        return status_type(value)
    except ValueError as e:
        raise ValidationError(
            "status", str(value), f"Unknown status '{value}'", "INVALID_STATUS"
        ) from e
