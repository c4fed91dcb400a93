"""Domain enums for the print production workflow."""

from enum import Enum


class Stage(str, Enum):
    """Production stage, declared in workflow order."""

    PRE_PRESS = "Pre-Press"
    PRINTING = "Printing"
    CUTTING = "Cutting"
    FOLDING = "Folding"
    BINDING = "Binding"
    QC = "QC"
    PACKAGING = "Packaging"
    DISPATCH = "Dispatch"

    @property
    def position(self) -> int:
        """1-based position of the stage in the workflow."""
        return list(Stage).index(self) + 1

    @property
    def job_status(self) -> "JobStatus":
        """Job status a job carries while it sits in this stage."""
        return JobStatus(self.value.lower())

    @classmethod
    def parse(cls, value: "Stage | str") -> "Stage | None":
        """Resolve a stage from its enum, value or case-insensitive name."""
        if isinstance(value, Stage):
            return value
        normalized = str(value).strip().lower()
        for stage in cls:
            if stage.value.lower() == normalized or stage.name.lower() == normalized:
                return stage
        return None


class JobType(str, Enum):
    """Kinds of print jobs accepted by the shop."""

    CARTON = "Carton"
    BOOKLET = "Booklet"
    POUCH_FOLDER = "Pouch Folder"
    FLYERS = "Flyers"
    BUSINESS_CARDS = "Business Cards"
    BROCHURES = "Brochures"


class JobStatus(str, Enum):
    """Job status enumeration."""

    PENDING = "pending"
    PRE_PRESS = "pre-press"
    PRINTING = "printing"
    CUTTING = "cutting"
    FOLDING = "folding"
    BINDING = "binding"
    QC = "qc"
    PACKAGING = "packaging"
    DISPATCH = "dispatch"
    DELIVERED = "delivered"
    COMPLETED = "completed"

    @property
    def is_terminal(self) -> bool:
        """Check if job status is terminal."""
        return self in {JobStatus.COMPLETED, JobStatus.DELIVERED}


class TaskStatus(str, Enum):
    """Task status enumeration."""

    PENDING = "pending"
    IN_QUEUE = "in-queue"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    DELAYED = "delayed"

    @property
    def is_terminal(self) -> bool:
        """Check if task status is terminal."""
        return self == TaskStatus.COMPLETED


class EmployeeRole(str, Enum):
    """Shop-floor roles."""

    DESIGNER = "Designer"
    PRINTER = "Printer"
    BINDER = "Binder"
    QC = "QC"
    PACKAGING = "Packaging"
    LOGISTICS = "Logistics"


class StagePolicy(str, Enum):
    """How the stage catalog picks stages for a job."""

    FULL = "full"  # every job type gets every stage
    BY_JOB_TYPE = "by_job_type"  # legacy per-type subset
