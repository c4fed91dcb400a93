"""Shared fixtures for the workflow core tests."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from printflow.domain.workflow.entities import Department, Employee, Job, Task
from printflow.domain.workflow.services.stage_catalog import all_stages
from printflow.domain.workflow.value_objects.enums import (
    EmployeeRole,
    JobType,
    Stage,
    TaskStatus,
)
from printflow.infrastructure.repositories import (
    InMemoryDepartmentRepository,
    InMemoryEmployeeRepository,
    InMemoryJobRepository,
    InMemoryTaskRepository,
)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for analytics tests."""
    return datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_job():
    """Factory for jobs created at T0 unless told otherwise."""

    def _make(
        job_type=JobType.BOOKLET,
        created_at=T0,
        delivery_deadline=None,
        **kwargs,
    ) -> Job:
        return Job(
            job_type=job_type,
            quantity=kwargs.pop("quantity", 500),
            created_at=created_at,
            delivery_deadline=delivery_deadline or created_at + timedelta(days=8),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_task():
    """Factory for tasks; pass ``job`` or ``job_id``."""

    def _make(
        job=None,
        sequence_in_job=1,
        stage=None,
        deadline=None,
        status=TaskStatus.PENDING,
        created_at=T0,
        **kwargs,
    ) -> Task:
        job_id = kwargs.pop("job_id", None) or (job.id if job else uuid4())
        return Task(
            job_id=job_id,
            sequence_in_job=sequence_in_job,
            stage=stage or all_stages()[(sequence_in_job - 1) % len(Stage)],
            deadline=deadline or created_at + timedelta(days=sequence_in_job),
            status=status,
            created_at=created_at,
            **kwargs,
        )

    return _make


@pytest.fixture
def departments() -> list[Department]:
    """One department per stage, named after it."""
    return [Department(name=stage.value) for stage in all_stages()]


@pytest.fixture
def employee() -> Employee:
    return Employee(name="Ayesha Khan", role=EmployeeRole.PRINTER)


@pytest.fixture
def repositories(departments, employee):
    """In-memory repositories seeded with departments and one employee."""
    return {
        "job_repository": InMemoryJobRepository(),
        "task_repository": InMemoryTaskRepository(),
        "employee_repository": InMemoryEmployeeRepository([employee]),
        "department_repository": InMemoryDepartmentRepository(departments),
    }
