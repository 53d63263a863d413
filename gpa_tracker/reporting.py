"""
Tables and colour policy for the presentation layer.

Everything here is derived from the engine's plain results; nothing is
rendered. The UI decides how to draw the frames and the chart spec.
"""

from typing import Sequence

import altair as alt
import pandas as pd

from .backend_logic import (
    CourseRecord,
    aggregate,
    by_semester,
    classify,
    group_sort_key,
    round_half_up,
)
from .config import (
    HONOURS_RATIO,
    SCORE_COLOUR_THRESHOLDS,
    STATUS_GREEN_RATIO,
    STATUS_ORANGE_RATIO,
)
from .standards import GradingStandard

COURSE_COLUMNS = ["ID", "Semester", "Code", "Units", "Score", "Grade", "Points", "Quality Points"]
SUMMARY_COLUMNS = ["Semester", "Units", "Quality Points", "GPA", "Status"]
TREND_COLUMN = "GPA Trend"


def gpa_status(gpa: float, max_points: float) -> str:
    if gpa >= max_points * STATUS_GREEN_RATIO:
        return "green"
    if gpa >= max_points * STATUS_ORANGE_RATIO:
        return "orange"
    return "red"


def score_status(score: float, standard: GradingStandard) -> str:
    green, orange = SCORE_COLOUR_THRESHOLDS.get(standard.id, (60, 40))
    if score >= green:
        return "green"
    if score >= orange:
        return "orange"
    return "red"


def is_honours_level(gpa: float, max_points: float) -> bool:
    return gpa >= max_points * HONOURS_RATIO


def course_table(records: Sequence[CourseRecord], standard: GradingStandard) -> pd.DataFrame:
    rows = []
    for r in sorted(records, key=lambda r: group_sort_key(r.group_key)):
        result = classify(r.score, standard)
        rows.append({
            "ID": r.id,
            "Semester": r.group_key,
            "Code": r.code,
            "Units": r.units,
            "Score": r.score,
            "Grade": result.label,
            "Points": result.points,
            "Quality Points": round_half_up(r.units * result.points, 2),
        })
    return pd.DataFrame(rows, columns=COURSE_COLUMNS)


def semester_summary(records: Sequence[CourseRecord], standard: GradingStandard) -> pd.DataFrame:
    groups = aggregate(records, standard, group_by=by_semester)
    rows = [
        {
            "Semester": key,
            "Units": result.total_units,
            "Quality Points": round_half_up(result.total_quality_points, 2),
            "GPA": round_half_up(result.gpa, 2),
            "Status": gpa_status(result.gpa, standard.max_points),
        }
        for key, result in groups.items()
    ]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def gpa_trend(records: Sequence[CourseRecord], standard: GradingStandard) -> pd.DataFrame:
    """Semester GPA series indexed by semester key, in semester order."""
    groups = aggregate(records, standard, group_by=by_semester)
    trend = pd.DataFrame(
        {TREND_COLUMN: [round_half_up(g.gpa, 2) for g in groups.values()]},
        index=pd.Index(list(groups.keys()), name="Semester", dtype=object),
    )
    return trend


def trend_chart(records: Sequence[CourseRecord], standard: GradingStandard) -> alt.Chart:
    """Line chart of semester GPA, y-axis fixed from 0 to the scale's max points."""
    data = gpa_trend(records, standard).reset_index()
    return alt.Chart(data).mark_line(point=True).encode(
        x=alt.X("Semester:N", sort=list(data["Semester"]), title="Semester"),
        y=alt.Y(
            f"{TREND_COLUMN}:Q",
            title="GPA",
            scale=alt.Scale(domain=[0, standard.max_points]),
        ),
        tooltip=["Semester", TREND_COLUMN],
    )
