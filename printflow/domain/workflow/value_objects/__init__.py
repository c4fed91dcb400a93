from .common import Quantity, StageSpecification
from .enums import (
    EmployeeRole,
    JobStatus,
    JobType,
    Stage,
    StagePolicy,
    TaskStatus,
)

__all__ = [
    "EmployeeRole",
    "JobStatus",
    "JobType",
    "Quantity",
    "Stage",
    "StagePolicy",
    "StageSpecification",
    "TaskStatus",
]
