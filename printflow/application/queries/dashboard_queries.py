"""
Dashboard query service for operational views.

Combines job, task and employee snapshots from the repositories into the
dashboard, reports, alerts and activity projections. Nothing is cached:
every call recomputes from a fresh snapshot.
"""

from datetime import datetime
from uuid import UUID

from printflow.core.config import Settings, settings as default_settings
from printflow.core.observability import get_logger
from printflow.domain.shared.exceptions import EmployeeNotFoundError, JobNotFoundError
from printflow.domain.workflow.entities.task import Task
from printflow.domain.workflow.read_models import (
    ActivityEntry,
    DashboardMetrics,
    DeadlineAlert,
    DetailedStats,
    EmployeeWorkload,
    JobProgress,
    StageBottleneck,
    StageTimelineEntry,
    compute_bottlenecks,
    compute_dashboard_metrics,
    compute_deadline_alerts,
    compute_detailed_stats,
    compute_employee_workload,
    compute_job_progress,
    compute_recent_activity,
    compute_stage_timeline,
    compute_team_workload,
    prioritize_tasks,
)
from printflow.domain.workflow.read_models.common import resolve_now
from printflow.domain.workflow.repositories import (
    ClientRepository,
    EmployeeRepository,
    JobRepository,
    TaskRepository,
)

logger = get_logger(__name__)


class DashboardQueryService:
    """
    Query service for dashboard data and operational views.

    Thresholds (at-risk days, alert window, activity feed length) come from
    ``Settings`` so hosts can tune them without code changes.
    """

    def __init__(
        self,
        job_repository: JobRepository,
        task_repository: TaskRepository,
        employee_repository: EmployeeRepository,
        settings: Settings | None = None,
        client_repository: ClientRepository | None = None,
    ) -> None:
        self._job_repository = job_repository
        self._task_repository = task_repository
        self._employee_repository = employee_repository
        self._client_repository = client_repository
        self._settings = settings or default_settings

    @property
    def at_risk_days(self) -> int:
        return self._settings.AT_RISK_THRESHOLD_DAYS

    def get_dashboard_metrics(self, now: datetime | None = None) -> DashboardMetrics:
        """
        Get headline job and task counts.

        Returns:
            DashboardMetrics computed from the current snapshot
        """
        return compute_dashboard_metrics(
            self._job_repository.get_all(), self._task_repository.get_all(), now
        )

    def get_detailed_stats(self, now: datetime | None = None) -> DetailedStats:
        return compute_detailed_stats(
            self._job_repository.get_all(),
            self._task_repository.get_all(),
            self._employee_repository.get_all(),
            now,
        )

    def get_job_progress(self, job_id: UUID, now: datetime | None = None) -> JobProgress:
        """
        Get progress for one job.

        Raises:
            JobNotFoundError: If the job doesn't exist
        """
        job = self._job_repository.get_by_id(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return compute_job_progress(
            job, self._task_repository.get_by_job_id(job_id), now, self.at_risk_days
        )

    def get_all_job_progress(self, now: datetime | None = None) -> list[JobProgress]:
        now = resolve_now(now)
        tasks = self._task_repository.get_all()
        return [
            compute_job_progress(job, tasks, now, self.at_risk_days)
            for job in self._job_repository.get_all()
        ]

    def get_stage_timeline(
        self, job_id: UUID, now: datetime | None = None
    ) -> list[StageTimelineEntry]:
        """
        Get allocated versus spent time for each stage of a job.

        Raises:
            JobNotFoundError: If the job doesn't exist
        """
        job = self._job_repository.get_by_id(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return compute_stage_timeline(
            job, self._task_repository.get_by_job_id(job_id), now, self.at_risk_days
        )

    def get_bottlenecks(self, now: datetime | None = None) -> list[StageBottleneck]:
        bottlenecks = compute_bottlenecks(
            self._task_repository.get_all(),
            self._job_repository.get_all(),
            now,
            self.at_risk_days,
        )
        if bottlenecks:
            logger.debug(
                "bottlenecks_detected",
                stages=[b.stage.value for b in bottlenecks],
            )
        return bottlenecks

    def get_employee_workload(
        self, employee_id: UUID, now: datetime | None = None
    ) -> EmployeeWorkload:
        """
        Get workload for one employee.

        Raises:
            EmployeeNotFoundError: If the employee doesn't exist
        """
        employee = self._employee_repository.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return compute_employee_workload(employee, self._task_repository.get_all(), now)

    def get_team_workload(self, now: datetime | None = None) -> list[EmployeeWorkload]:
        return compute_team_workload(
            self._employee_repository.get_all(), self._task_repository.get_all(), now
        )

    def get_deadline_alerts(self, now: datetime | None = None) -> list[DeadlineAlert]:
        clients = self._client_repository.get_all() if self._client_repository else ()
        return compute_deadline_alerts(
            self._job_repository.get_all(),
            self._task_repository.get_all(),
            self._employee_repository.get_all(),
            now,
            self._settings.DEADLINE_ALERT_WINDOW_DAYS,
            clients=clients,
        )

    def get_recent_activity(self) -> list[ActivityEntry]:
        return compute_recent_activity(
            self._job_repository.get_all(),
            self._task_repository.get_all(),
            self._employee_repository.get_all(),
            self._settings.RECENT_ACTIVITY_LIMIT,
        )

    def get_task_queue(
        self, employee_id: UUID | None = None, now: datetime | None = None
    ) -> list[Task]:
        """
        Get open tasks in work-queue order, optionally for one employee.

        Completed tasks are left out; overdue tasks come first, then tasks in
        progress, then the rest.
        """
        tasks = [
            task
            for task in self._task_repository.get_all()
            if not task.is_complete
            and (employee_id is None or task.employee_id == employee_id)
        ]
        return prioritize_tasks(tasks, now)
