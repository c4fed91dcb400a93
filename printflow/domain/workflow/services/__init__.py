from .deadline_allocator import allocate, find_schedule_violations
from .stage_catalog import all_stages, department_name_for, stages_for
from .task_generator import TaskGenerator, generate_tasks_for_job

__all__ = [
    "TaskGenerator",
    "all_stages",
    "allocate",
    "department_name_for",
    "find_schedule_violations",
    "generate_tasks_for_job",
    "stages_for",
]
