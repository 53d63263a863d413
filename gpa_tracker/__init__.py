"""
GPA tracker: grading standards, GPA aggregation and target planning.

    from gpa_tracker import resolve, aggregate, by_semester

    ng = resolve("ng")
    overall = aggregate(courses, ng)
    per_semester = aggregate(courses, ng, group_by=by_semester)
"""

__version__ = "1.0.0"

from .backend_logic import (
    AggregateResult,
    ClassificationResult,
    CourseRecord,
    TargetOutcome,
    TargetResult,
    aggregate,
    by_semester,
    clamp_score,
    classify,
    classify_target_outcome,
    evaluate_target,
    round_half_up,
    score_from_letter,
    solve_required_average,
)
from .errors import (
    DuplicateCourse,
    GpaTrackerError,
    InvalidInput,
    InvalidScore,
    UnknownGrade,
    UnknownStandard,
)
from .standards import Band, GradingStandard, STANDARDS, available_standards, resolve

__all__ = [
    "__version__",
    "AggregateResult",
    "Band",
    "ClassificationResult",
    "CourseRecord",
    "GradingStandard",
    "STANDARDS",
    "TargetOutcome",
    "TargetResult",
    "aggregate",
    "available_standards",
    "by_semester",
    "clamp_score",
    "classify",
    "classify_target_outcome",
    "evaluate_target",
    "resolve",
    "round_half_up",
    "score_from_letter",
    "solve_required_average",
    "DuplicateCourse",
    "GpaTrackerError",
    "InvalidInput",
    "InvalidScore",
    "UnknownGrade",
    "UnknownStandard",
]
