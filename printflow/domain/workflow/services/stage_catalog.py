"""
Stage Catalog

Static, ordered list of production stages and the rule that picks the stages
a job goes through. Two policies are available: ``StagePolicy.FULL`` (every
job type gets the full sequence, the current behaviour) and
``StagePolicy.BY_JOB_TYPE`` (the legacy per-type subsets).
"""

from ..value_objects.enums import JobType, Stage, StagePolicy

_ALL_STAGES: tuple[Stage, ...] = tuple(Stage)

_FLAT_WORK = (
    Stage.PRE_PRESS,
    Stage.PRINTING,
    Stage.CUTTING,
    Stage.QC,
    Stage.PACKAGING,
    Stage.DISPATCH,
)
_FOLDED_WORK = (
    Stage.PRE_PRESS,
    Stage.PRINTING,
    Stage.CUTTING,
    Stage.FOLDING,
    Stage.QC,
    Stage.PACKAGING,
    Stage.DISPATCH,
)

_STAGES_BY_JOB_TYPE: dict[JobType, tuple[Stage, ...]] = {
    JobType.CARTON: _FOLDED_WORK,
    JobType.BOOKLET: _ALL_STAGES,
    JobType.POUCH_FOLDER: _FOLDED_WORK,
    JobType.FLYERS: _FLAT_WORK,
    JobType.BUSINESS_CARDS: _FLAT_WORK,
    JobType.BROCHURES: _FOLDED_WORK,
}


def all_stages() -> tuple[Stage, ...]:
    """Canonical ordered stage list."""
    return _ALL_STAGES


def stages_for(
    job_type: JobType | str, policy: StagePolicy = StagePolicy.FULL
) -> tuple[Stage, ...]:
    """
    Ordered stages a job of the given type goes through.

    Unrecognized job types fall back to the full list under either policy.
    """
    if policy != StagePolicy.BY_JOB_TYPE:
        return _ALL_STAGES

    try:
        known_type = JobType(job_type)
    except ValueError:
        return _ALL_STAGES
    return _STAGES_BY_JOB_TYPE.get(known_type, _ALL_STAGES)


def department_name_for(stage: Stage) -> str:
    """Name of the department responsible for a stage."""
    return stage.value
