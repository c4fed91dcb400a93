"""Tests for the dashboard query service."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from printflow.application.queries import DashboardQueryService
from printflow.core.config import Settings
from printflow.domain.shared.exceptions import EmployeeNotFoundError, JobNotFoundError
from printflow.domain.workflow.entities.client import Client
from printflow.domain.workflow.services.task_generator import TaskGenerator
from printflow.domain.workflow.services.workflow_service import WorkflowService
from printflow.domain.workflow.value_objects.enums import JobType, Stage, TaskStatus
from printflow.infrastructure.repositories import InMemoryClientRepository

NOW = datetime(2024, 5, 6, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def workflow(repositories) -> WorkflowService:
    return WorkflowService(**repositories, task_generator=TaskGenerator())


@pytest.fixture
def query_settings() -> Settings:
    return Settings(
        AT_RISK_THRESHOLD_DAYS=2,
        DEADLINE_ALERT_WINDOW_DAYS=5,
        RECENT_ACTIVITY_LIMIT=3,
    )


@pytest.fixture
def queries(repositories, query_settings) -> DashboardQueryService:
    return DashboardQueryService(
        repositories["job_repository"],
        repositories["task_repository"],
        repositories["employee_repository"],
        query_settings,
    )


@pytest.fixture
def booklet(workflow):
    """Eight-day booklet job created at NOW."""
    return workflow.create_job(
        JobType.BOOKLET, 300, NOW + timedelta(days=8), description="Yearbook", now=NOW
    )


class TestDashboardQueryService:
    """Test that queries read fresh snapshots and apply configured thresholds."""

    def test_metrics_reflect_updates(self, workflow, queries, booklet):
        _, tasks = booklet
        assert queries.get_dashboard_metrics(NOW).overall_progress == 0

        workflow.update_task_status(tasks[0].id, TaskStatus.COMPLETED, now=NOW)
        workflow.update_task_status(tasks[1].id, TaskStatus.COMPLETED, now=NOW)

        metrics = queries.get_dashboard_metrics(NOW)
        assert metrics.completed_tasks == 2
        assert metrics.overall_progress == 25

    def test_job_progress_uses_configured_threshold(self, queries, booklet):
        job, _ = booklet
        later = NOW + timedelta(days=6)

        progress = queries.get_job_progress(job.id, later)

        assert progress.days_remaining == 2
        assert progress.is_at_risk
        assert progress.current_stage == Stage.PRE_PRESS

    def test_missing_job(self, queries):
        with pytest.raises(JobNotFoundError):
            queries.get_job_progress(uuid4())
        with pytest.raises(JobNotFoundError):
            queries.get_stage_timeline(uuid4())

    def test_all_job_progress(self, workflow, queries, booklet):
        workflow.create_job(JobType.CARTON, 50, NOW + timedelta(days=4), now=NOW)
        assert len(queries.get_all_job_progress(NOW)) == 2

    def test_stage_timeline(self, queries, booklet):
        job, _ = booklet
        entries = queries.get_stage_timeline(job.id, NOW)
        assert [entry.stage for entry in entries][0] == Stage.PRE_PRESS
        assert len(entries) == 8

    def test_bottlenecks(self, queries, booklet):
        later = NOW + timedelta(days=3, hours=1)

        bottlenecks = queries.get_bottlenecks(later)

        by_stage = {b.stage: b for b in bottlenecks}
        # Pre-Press to Cutting are past due, Folding to QC due within two days
        assert set(by_stage) == {
            Stage.PRE_PRESS,
            Stage.PRINTING,
            Stage.CUTTING,
            Stage.FOLDING,
            Stage.BINDING,
            Stage.QC,
        }
        assert by_stage[Stage.CUTTING].overdue_count == 1
        assert by_stage[Stage.BINDING].overdue_count == 0

    def test_workload(self, workflow, queries, employee, booklet):
        _, tasks = booklet
        workflow.assign_task(tasks[0].id, employee.id)
        workflow.update_task_status(tasks[0].id, TaskStatus.COMPLETED)

        assert queries.get_employee_workload(employee.id, NOW).efficiency_percent == 100
        assert [w.employee_id for w in queries.get_team_workload(NOW)] == [employee.id]
        with pytest.raises(EmployeeNotFoundError):
            queries.get_employee_workload(uuid4())

    def test_deadline_alerts_use_configured_window(self, queries, booklet):
        alerts = queries.get_deadline_alerts(NOW)
        assert [alert.stage for alert in alerts] == [
            Stage.PRE_PRESS,
            Stage.PRINTING,
            Stage.CUTTING,
            Stage.FOLDING,
            Stage.BINDING,
        ]

    def test_deadline_alerts_name_job_clients(self, repositories, query_settings, workflow):
        client = Client(name="Harbor Books")
        queries = DashboardQueryService(
            repositories["job_repository"],
            repositories["task_repository"],
            repositories["employee_repository"],
            query_settings,
            client_repository=InMemoryClientRepository([client]),
        )
        known, _ = workflow.create_job(
            JobType.FLYERS, 100, NOW + timedelta(days=2), client_id=client.id, now=NOW
        )
        missing, _ = workflow.create_job(
            JobType.FLYERS, 100, NOW + timedelta(days=3), client_id=uuid4(), now=NOW
        )
        walk_in, _ = workflow.create_job(
            JobType.FLYERS, 100, NOW + timedelta(days=4), now=NOW
        )

        names = {
            alert.id: alert.client_name
            for alert in queries.get_deadline_alerts(NOW)
            if alert.kind == "job"
        }

        assert names == {known.id: "Harbor Books", missing.id: "Unknown", walk_in.id: None}

    def test_recent_activity_uses_configured_limit(self, workflow, queries, booklet):
        for _ in range(4):
            workflow.create_job(JobType.FLYERS, 100, NOW + timedelta(days=2), now=NOW)
        assert len(queries.get_recent_activity()) == 3

    def test_detailed_stats(self, queries, booklet):
        stats = queries.get_detailed_stats(NOW)
        assert stats.tasks.pending == 8
        assert stats.tasks.unassigned == 8
        assert stats.job_types == {"Booklet": 1}

    def test_task_queue(self, workflow, queries, employee, booklet):
        _, tasks = booklet
        workflow.update_task_status(tasks[0].id, TaskStatus.COMPLETED)
        workflow.update_task_status(tasks[4].id, TaskStatus.IN_PROGRESS)
        workflow.assign_task(tasks[6].id, employee.id)

        later = NOW + timedelta(days=2, hours=12)
        queue = queries.get_task_queue(now=later)

        assert [task.id for task in queue[:2]] == [tasks[1].id, tasks[4].id]
        assert tasks[0].id not in {task.id for task in queue}
        assert [task.id for task in queries.get_task_queue(employee.id, later)] == [
            tasks[6].id
        ]
