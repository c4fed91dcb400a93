"""
Task Generator

Materializes one pending, unassigned task per stage for a newly created job,
seeded with the allocated stage deadlines. Persisting the result is left to
the caller.
"""

from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

from printflow.core.observability import get_logger

from ..entities.employee import Department
from ..entities.job import Job
from ..entities.task import Task
from ..value_objects.enums import Stage, StagePolicy, TaskStatus
from .deadline_allocator import allocate, find_schedule_violations
from .stage_catalog import department_name_for, stages_for

logger = get_logger(__name__)


class TaskGenerator:
    """Builds the stage task list for a job under a given stage policy."""

    def __init__(self, policy: StagePolicy = StagePolicy.FULL) -> None:
        self.policy = policy

    def generate(
        self,
        job: Job,
        departments: Iterable[Department] = (),
        existing_tasks: Iterable[Task] = (),
    ) -> list[Task]:
        """
        Create the tasks for a job.

        Args:
            job: Job to generate tasks for
            departments: Departments used to resolve each stage's department
            existing_tasks: Tasks already stored for the job; their stages and
                sequence numbers are skipped

        Returns:
            New tasks in stage order (empty when nothing is left to generate)
        """
        stages = stages_for(job.job_type, self.policy)
        if not stages:
            logger.info("no_stages_for_job", job_id=str(job.id), job_type=job.job_type_label)
            return []

        if job.delivery_deadline <= job.created_at:
            logger.warning(
                "delivery_deadline_not_after_creation",
                job_id=str(job.id),
                created_at=job.created_at.isoformat(),
                delivery_deadline=job.delivery_deadline.isoformat(),
            )

        schedule = allocate(
            stages, job.created_at, job.delivery_deadline, job.stage_deadlines
        )
        violations = find_schedule_violations(schedule, stages, job.delivery_deadline)
        if violations:
            logger.warning(
                "stage_schedule_violations", job_id=str(job.id), violations=violations
            )

        department_ids = _index_departments(departments)
        taken_stages = set()
        taken_sequences = set()
        for task in existing_tasks:
            if task.job_id == job.id:
                taken_stages.add(task.stage)
                taken_sequences.add(task.sequence_in_job)

        tasks: list[Task] = []
        for sequence, stage in enumerate(stages, start=1):
            if stage in taken_stages or sequence in taken_sequences:
                logger.debug(
                    "skipping_existing_stage_task",
                    job_id=str(job.id),
                    stage=stage.value,
                    sequence_in_job=sequence,
                )
                continue
            tasks.append(
                Task(
                    job_id=job.id,
                    sequence_in_job=sequence,
                    stage=stage,
                    department_id=department_ids.get(department_name_for(stage).lower()),
                    employee_id=None,
                    deadline=schedule[stage],
                    status=TaskStatus.PENDING,
                )
            )

        logger.info(
            "tasks_generated",
            job_id=str(job.id),
            policy=self.policy.value,
            generated=len(tasks),
            skipped=len(stages) - len(tasks),
        )
        return tasks


def _index_departments(departments: Iterable[Department]) -> dict[str, UUID]:
    return {department.name.strip().lower(): department.id for department in departments}


def generate_tasks_for_job(
    job: Job,
    departments: Iterable[Department] = (),
    policy: StagePolicy = StagePolicy.FULL,
) -> list[Task]:
    """Generate the stage tasks for a job with a one-off generator."""
    return TaskGenerator(policy).generate(job, departments)


def stage_deadline_pairs(tasks: Iterable[Task]) -> list[tuple[Stage, datetime]]:
    """(stage, deadline) pairs in sequence order."""
    return [(task.stage, task.deadline) for task in sorted(tasks, key=lambda t: t.sequence_in_job)]
