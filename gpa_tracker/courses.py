"""
Course-list workflow used by the UI.

The engine never stores or assigns ids; this module owns those rules:
turning a raw score-or-letter entry into a clamped integer score, rejecting
duplicates, and handing back a new list on every change.
"""

import math
import time
from typing import List, Optional, Sequence, Tuple

from .backend_logic import CourseRecord, clamp_score, round_half_up, score_from_letter
from .errors import DuplicateCourse, InvalidInput
from .standards import GradingStandard

ALL_SEMESTERS = "all"


def semester_options(duration_years: float, terms_per_year: int) -> List[Tuple[str, str]]:
    """
    (key, label) pairs for every term of a programme, e.g. ("1.2", "Year 1 - Term 2").
    """
    if duration_years <= 0 or terms_per_year <= 0:
        raise InvalidInput("Programme duration and terms per year must be positive.")

    options = []
    for year in range(1, math.ceil(duration_years) + 1):
        for term in range(1, int(terms_per_year) + 1):
            options.append((f"{year}.{term}", f"Year {year} - Term {term}"))
    return options


def _parse_number(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def parse_score_input(raw, standard: GradingStandard) -> int:
    """
    Numeric text is rounded half up and clamped to [0, 100]; anything else is
    looked up as a letter grade of `standard`.
    """
    text = "" if raw is None else str(raw).strip()
    if not text:
        raise InvalidInput("Please enter a score (0-100) or a letter grade.")

    number = _parse_number(text)
    if number is None:
        return score_from_letter(text, standard)
    return int(round_half_up(clamp_score(number), 0))


def _parse_units(raw) -> int:
    text = "" if raw is None else str(raw).strip()
    if not text:
        raise InvalidInput("Please enter the course units.")
    number = _parse_number(text)
    if number is None or number != int(number):
        raise InvalidInput(f"Units must be a whole number (got {text!r}).")
    if number <= 0:
        raise InvalidInput("Units must be positive.")
    return int(number)


def next_course_id(records: Sequence[CourseRecord], now: Optional[float] = None) -> int:
    """Millisecond creation timestamp, bumped past every id already in use."""
    stamp = int((time.time() if now is None else now) * 1000)
    if records:
        stamp = max(stamp, max(r.id for r in records) + 1)
    return stamp


def is_duplicate(records: Sequence[CourseRecord], code: str, group_key: str) -> bool:
    return any(r.code == code and r.group_key == group_key for r in records)


def add_course(records: Sequence[CourseRecord],
               group_key: str,
               code: str,
               units,
               raw_score,
               standard: GradingStandard,
               now: Optional[float] = None) -> List[CourseRecord]:
    code = (code or "").strip().upper()
    group_key = (group_key or "").strip()
    if not code or not group_key:
        raise InvalidInput("Please fill in all details!")

    if is_duplicate(records, code, group_key):
        raise DuplicateCourse(f"You have already added {code} to semester {group_key}.")

    score = parse_score_input(raw_score, standard)
    unit_count = _parse_units(units)

    course = CourseRecord(
        id=next_course_id(records, now),
        group_key=group_key,
        code=code,
        score=score,
        units=unit_count,
    )
    return list(records) + [course]


def delete_course(records: Sequence[CourseRecord], course_id: int) -> List[CourseRecord]:
    return [r for r in records if r.id != course_id]


def filter_by_semester(records: Sequence[CourseRecord],
                       group_key: Optional[str] = None) -> List[CourseRecord]:
    if group_key is None or group_key == ALL_SEMESTERS:
        return list(records)
    return [r for r in records if r.group_key == group_key]
