"""Tests for stage bottleneck aggregation."""

from datetime import timedelta
from uuid import uuid4

from printflow.domain.workflow.read_models import compute_bottlenecks
from printflow.domain.workflow.value_objects.enums import Stage, TaskStatus


class TestComputeBottlenecks:
    """Test grouping of overdue and at-risk tasks by stage."""

    def test_groups_flagged_tasks_by_stage(self, make_job, make_task, now):
        job_a, job_b = make_job(), make_job()
        tasks = [
            make_task(job_a, 2, stage=Stage.PRINTING, deadline=now - timedelta(days=2)),
            make_task(job_b, 2, stage=Stage.PRINTING, deadline=now + timedelta(hours=5)),
            make_task(job_a, 6, stage=Stage.QC, deadline=now - timedelta(days=1)),
            make_task(job_b, 6, stage=Stage.QC, deadline=now + timedelta(days=4)),
        ]

        bottlenecks = compute_bottlenecks(tasks, [job_a, job_b], now)

        assert [b.stage for b in bottlenecks] == [Stage.PRINTING, Stage.QC]
        printing, qc = bottlenecks
        assert printing.at_risk_count == 2
        assert printing.overdue_count == 1
        assert set(printing.affected_job_ids) == {job_a.id, job_b.id}
        assert printing.affected_job_count == 2
        assert printing.average_delay_days == 2.0
        assert qc.at_risk_count == 1
        assert qc.affected_job_ids == [job_a.id]

    def test_affected_jobs_are_distinct(self, make_job, make_task, now):
        job = make_job()
        tasks = [
            make_task(job, 2, stage=Stage.PRINTING, deadline=now - timedelta(days=1)),
            make_task(job, 3, stage=Stage.PRINTING, deadline=now - timedelta(days=3)),
        ]

        (printing,) = compute_bottlenecks(tasks, [job], now)

        assert printing.at_risk_count == 2
        assert printing.affected_job_ids == [job.id]
        assert printing.average_delay_days == 2.0

    def test_unknown_jobs_count_but_are_not_listed(self, make_task, now):
        task = make_task(job_id=uuid4(), deadline=now - timedelta(hours=2))

        (entry,) = compute_bottlenecks([task], [], now)

        assert entry.at_risk_count == 1
        assert entry.affected_job_ids == []

    def test_completed_and_distant_tasks_are_ignored(self, make_job, make_task, now):
        job = make_job()
        tasks = [
            make_task(job, 1, deadline=now - timedelta(days=3), status=TaskStatus.COMPLETED),
            make_task(job, 2, deadline=now + timedelta(days=10)),
        ]
        assert compute_bottlenecks(tasks, [job], now) == []

    def test_ties_are_ordered_by_stage(self, make_job, make_task, now):
        job = make_job()
        tasks = [
            make_task(job, 8, stage=Stage.DISPATCH, deadline=now - timedelta(days=1)),
            make_task(job, 1, stage=Stage.PRE_PRESS, deadline=now - timedelta(days=1)),
        ]

        stages = [b.stage for b in compute_bottlenecks(tasks, [job], now)]

        assert stages == [Stage.PRE_PRESS, Stage.DISPATCH]

    def test_empty_snapshot(self, now):
        assert compute_bottlenecks([], [], now) == []
