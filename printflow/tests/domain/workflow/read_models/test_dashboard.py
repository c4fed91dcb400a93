"""Tests for dashboard metrics, detailed stats, deadline alerts and activity."""

from datetime import timedelta
from uuid import uuid4

from printflow.domain.workflow.entities import Client, Employee
from printflow.domain.workflow.read_models import (
    UNASSIGNED,
    UNKNOWN,
    compute_dashboard_metrics,
    compute_deadline_alerts,
    compute_detailed_stats,
    compute_recent_activity,
    employee_display_name,
    index_by_id,
    job_display_name,
)
from printflow.domain.workflow.value_objects.enums import (
    JobStatus,
    JobType,
    Stage,
    TaskStatus,
)


class TestDashboardMetrics:
    """Test headline metrics."""

    def test_counts_and_progress(self, make_job, make_task, now):
        open_job = make_job(delivery_deadline=now + timedelta(days=3))
        late_job = make_job(delivery_deadline=now - timedelta(days=1), status=JobStatus.QC)
        done_job = make_job(delivery_deadline=now - timedelta(days=1), status=JobStatus.DELIVERED)
        tasks = [
            make_task(open_job, 1, status=TaskStatus.COMPLETED),
            make_task(open_job, 2),
            make_task(late_job, 1, status=TaskStatus.COMPLETED),
        ]

        metrics = compute_dashboard_metrics([open_job, late_job, done_job], tasks, now)

        assert metrics.total_jobs == 3
        assert metrics.active_jobs == 2
        assert metrics.completed_jobs == 1
        assert metrics.overdue_jobs == 1
        assert metrics.total_tasks == 3
        assert metrics.completed_tasks == 2
        assert metrics.overall_progress == 67

    def test_empty_system(self, now):
        metrics = compute_dashboard_metrics([], [], now)
        assert metrics.overall_progress == 0
        assert metrics.active_jobs == 0


class TestDetailedStats:
    def test_breakdowns(self, make_job, make_task, employee, now):
        carton = make_job(job_type=JobType.CARTON)
        custom = make_job(job_type="Posters")
        tasks = [
            make_task(carton, 1, status=TaskStatus.IN_QUEUE, employee_id=employee.id),
            make_task(carton, 2, status=TaskStatus.DELAYED),
            make_task(custom, 2, status=TaskStatus.COMPLETED, employee_id=employee.id),
        ]

        stats = compute_detailed_stats([carton, custom], tasks, [employee], now)

        assert stats.tasks.total == 3
        assert stats.tasks.in_queue == 1
        assert stats.tasks.delayed == 1
        assert stats.tasks.completed == 1
        assert stats.tasks.pending == 0
        assert stats.tasks.unassigned == 1
        assert stats.tasks.overdue == 2
        assert stats.job_types == {"Carton": 1, "Posters": 1}
        assert stats.stages == {"Pre-Press": 1, "Printing": 2}
        assert stats.jobs.total_jobs == 2
        assert [w.employee_id for w in stats.employees] == [employee.id]
        assert stats.employees[0].efficiency_percent == 50


class TestDeadlineAlerts:
    """Test the upcoming-deadline feed."""

    def test_window_and_order(self, make_job, make_task, employee, now):
        job = make_job(
            description="Annual report",
            delivery_deadline=now + timedelta(days=2),
        )
        far_job = make_job(delivery_deadline=now + timedelta(days=10))
        soon = make_task(
            job, 3, deadline=now + timedelta(hours=6), employee_id=employee.id
        )
        late = make_task(job, 2, deadline=now - timedelta(hours=6))
        done = make_task(job, 1, deadline=now, status=TaskStatus.COMPLETED)
        far = make_task(job, 4, deadline=now + timedelta(days=5))

        alerts = compute_deadline_alerts(
            [job, far_job], [soon, late, done, far], [employee], now
        )

        assert [alert.id for alert in alerts] == [late.id, soon.id, job.id]
        assert alerts[0].is_overdue
        assert alerts[0].employee_name == UNASSIGNED
        assert alerts[1].employee_name == employee.name
        assert alerts[1].job_label == "Annual report"
        assert alerts[1].title == "Task: Cutting"
        assert alerts[1].stage == Stage.CUTTING
        assert alerts[2].kind == "job"
        assert alerts[2].title == "Job: Annual report"

    def test_missing_references_render_as_unknown(self, make_task, now):
        task = make_task(
            job_id=uuid4(), employee_id=uuid4(), deadline=now + timedelta(days=1)
        )

        (alert,) = compute_deadline_alerts([], [task], [], now)

        assert alert.job_label == UNKNOWN
        assert alert.employee_name == UNKNOWN

    def test_job_alerts_carry_client_name(self, make_job, now):
        client = Client(name="Harbor Books")
        known = make_job(client_id=client.id, delivery_deadline=now + timedelta(days=1))
        missing = make_job(client_id=uuid4(), delivery_deadline=now + timedelta(days=2))
        walk_in = make_job(delivery_deadline=now + timedelta(days=3))

        alerts = compute_deadline_alerts(
            [known, missing, walk_in], [], [], now, clients=[client]
        )

        assert [alert.client_name for alert in alerts] == ["Harbor Books", UNKNOWN, None]

    def test_terminal_jobs_are_skipped(self, make_job, now):
        job = make_job(delivery_deadline=now, status=JobStatus.COMPLETED)
        assert compute_deadline_alerts([job], [], [], now) == []

    def test_custom_window(self, make_job, now):
        job = make_job(delivery_deadline=now + timedelta(days=5))
        assert compute_deadline_alerts([job], [], [], now) == []
        assert len(compute_deadline_alerts([job], [], [], now, window_days=7)) == 1


class TestRecentActivity:
    """Test the recent activity feed."""

    def test_merges_jobs_and_completions_newest_first(
        self, make_job, make_task, employee, now
    ):
        job = make_job(created_at=now - timedelta(days=3), quantity=1000)
        job.sequence_number = 7
        completed = make_task(
            job, 1, status=TaskStatus.COMPLETED, employee_id=employee.id
        )
        completed.updated_at = now - timedelta(days=1)
        open_task = make_task(job, 2)

        feed = compute_recent_activity([job], [completed, open_task], [employee])

        assert [entry.kind for entry in feed] == ["task_completed", "job_created"]
        assert feed[0].title == "Task completed: Pre-Press"
        assert feed[0].description == f"Job: Booklet • {employee.name}"
        assert feed[1].id == f"job-{job.id}"
        assert feed[1].description == "#7 • 1,000 units"

    def test_orphaned_completion_uses_unknown(self, make_task, now):
        task = make_task(job_id=uuid4(), status=TaskStatus.COMPLETED)

        (entry,) = compute_recent_activity([], [task])

        assert entry.description == f"Job: {UNKNOWN} • {UNASSIGNED}"

    def test_limit_and_per_kind_cap(self, make_job, now):
        jobs = [make_job(created_at=now - timedelta(hours=i)) for i in range(15)]

        assert len(compute_recent_activity(jobs, [])) == 10
        assert len(compute_recent_activity(jobs, [], limit=4)) == 4
        newest = compute_recent_activity(jobs, [], limit=1)[0]
        assert newest.id == f"job-{jobs[0].id}"


class TestLookups:
    def test_index_by_id(self, employee):
        other = Employee(name="Zara", role="QC")
        index = index_by_id([employee, other])

        assert index == {employee.id: employee, other.id: other}

    def test_display_names(self, make_job, employee):
        job = make_job(job_type=JobType.POUCH_FOLDER)

        assert job_display_name(job) == "Pouch Folder"
        assert job_display_name(None) == UNKNOWN
        assert employee_display_name(None, {}) == UNASSIGNED
        assert employee_display_name(uuid4(), {}) == UNKNOWN
        assert employee_display_name(employee.id, {employee.id: employee}) == employee.name
