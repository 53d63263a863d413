import math
import numbers
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

import numpy as np

from .errors import InvalidInput, InvalidScore, UnknownGrade
from .standards import GradingStandard


# ------------------------
# Result types
# ------------------------
@dataclass(frozen=True)
class CourseRecord:
    id: int
    group_key: str
    code: str
    score: int
    units: int


@dataclass(frozen=True)
class ClassificationResult:
    label: str
    points: float


@dataclass(frozen=True)
class AggregateResult:
    total_units: float
    total_quality_points: float
    gpa: float


class TargetOutcome(Enum):
    ACHIEVABLE = "achievable"
    UNREACHABLE = "unreachable"
    ALREADY_EXCEEDED = "already_exceeded"


@dataclass(frozen=True)
class TargetResult:
    outcome: TargetOutcome
    required: float
    max_points: float


# ------------------------
# Core logic
# ------------------------
def round_half_up(x: float, places: int = 2) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(x)).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp_score(value: float) -> float:
    if value < 0:
        return 0
    if value > 100:
        return 100
    return value


def _is_number(value) -> bool:
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and not math.isnan(value)
    )


def classify(score: float, standard: GradingStandard) -> ClassificationResult:
    """
    Map a score in [0, 100] to (label, points) under `standard`.

    Bands are scanned high to low and the first one whose min_score is at or
    below the score wins. Out-of-range scores must be clamped by the caller.
    """
    if not _is_number(score):
        raise InvalidScore(f"Score must be a number (got {score!r}).")
    if not 0 <= score <= 100:
        raise InvalidScore(f"Score must be between 0 and 100 (got {score}).")

    for band in standard.bands:
        if score >= band.min_score:
            return ClassificationResult(label=band.label, points=band.points)

    # unreachable for a validated standard: the last band starts at 0
    raise InvalidScore(f"No band in {standard.id!r} covers {score}.")


def score_from_letter(letter: str, standard: GradingStandard) -> int:
    token = str(letter).strip().upper()
    try:
        return standard.letter_to_score[token]
    except KeyError:
        raise UnknownGrade(
            f'The grade "{str(letter).strip()}" is not valid for the {standard.name} grading system.'
        ) from None


def by_semester(record: CourseRecord) -> str:
    return record.group_key


_YEAR_TERM = re.compile(r"^\s*(\d+)\.(\d+)\s*$")


def group_sort_key(key: str) -> Tuple[int, int, int, str]:
    """
    Order "year.term" keys numerically, so "10.1" follows "9.2".

    Keys that are not year.term sort after all of them, lexicographically.
    """
    match = _YEAR_TERM.match(key)
    if match:
        return (0, int(match.group(1)), int(match.group(2)), key)
    return (1, 0, 0, key)


def _points_and_units(records: Iterable[CourseRecord], standard: GradingStandard) -> np.ndarray:
    """
    returns: Nx2 numpy array -> [points, units]
    """
    rows = [(classify(r.score, standard).points, r.units) for r in records]
    if not rows:
        return np.zeros((0, 2), dtype=float)
    return np.array(rows, dtype=float)


def _summarise(pu: np.ndarray) -> AggregateResult:
    if pu.size == 0:
        return AggregateResult(total_units=0.0, total_quality_points=0.0, gpa=0.0)

    points = pu[:, 0]
    units = pu[:, 1]
    total_units = float(units.sum())
    total_qp = float(np.dot(points, units))
    gpa = total_qp / total_units if total_units > 0 else 0.0
    return AggregateResult(total_units=total_units, total_quality_points=total_qp, gpa=gpa)


def aggregate(
    records: Iterable[CourseRecord],
    standard: GradingStandard,
    group_by: Optional[Callable[[CourseRecord], str]] = None,
) -> Union[AggregateResult, Dict[str, AggregateResult]]:
    """
    Credit-weighted GPA over `records`.

    Each record contributes units * points quality points. Without
    `group_by` a single AggregateResult is returned; with it, a dict of
    group key -> AggregateResult ordered by group_sort_key.
    """
    records = list(records)
    if group_by is None:
        return _summarise(_points_and_units(records, standard))

    groups: Dict[str, list] = {}
    for record in records:
        groups.setdefault(group_by(record), []).append(record)

    return {
        key: _summarise(_points_and_units(groups[key], standard))
        for key in sorted(groups, key=group_sort_key)
    }


def _require_number(value, name: str) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInput(f"Please enter both a target GPA and next term's units ({name} is missing).")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} must be a number (got {value!r}).") from None
    if isinstance(value, bool) or math.isnan(number) or math.isinf(number):
        raise InvalidInput(f"{name} must be a number (got {value!r}).")
    return number


def solve_required_average(current_total_units: float,
                           current_total_quality_points: float,
                           target_gpa: float,
                           next_units: float) -> float:
    """
    Average points per unit needed over `next_units` to reach `target_gpa`.

    The result is not clamped: above max points means unreachable, below 0
    means the target is already exceeded (see classify_target_outcome).
    """
    target = _require_number(target_gpa, "Target GPA")
    nxt = _require_number(next_units, "Next units")
    if nxt <= 0:
        raise InvalidInput(f"Next term's units must be positive (got {next_units}).")

    Ua = current_total_units
    Qa = current_total_quality_points
    return (target * (Ua + nxt) - Qa) / nxt


def classify_target_outcome(required: float, standard: GradingStandard) -> TargetResult:
    if required > standard.max_points:
        outcome = TargetOutcome.UNREACHABLE
    elif required < 0:
        outcome = TargetOutcome.ALREADY_EXCEEDED
    else:
        outcome = TargetOutcome.ACHIEVABLE
    return TargetResult(outcome=outcome, required=required, max_points=standard.max_points)


def evaluate_target(records: Iterable[CourseRecord],
                    standard: GradingStandard,
                    target_gpa: float,
                    next_units: float) -> TargetResult:
    overall = aggregate(records, standard)
    required = solve_required_average(
        current_total_units=overall.total_units,
        current_total_quality_points=overall.total_quality_points,
        target_gpa=target_gpa,
        next_units=next_units,
    )
    return classify_target_outcome(required, standard)
