import logging
import math
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from .backend_logic import CourseRecord, clamp_score, round_half_up
from .courses import is_duplicate, next_course_id

logger = logging.getLogger(__name__)

# ------------------------
# CSV / JSON helpers
# ------------------------
# Field names match the browser app's saved "myGrades" list.
COLUMNS = ["id", "semester", "code", "score", "unit"]

_ALIASES = {
    "units": "unit",
    "credits": "unit",
    "group_key": "semester",
    "term": "semester",
}


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    renames = {k: v for k, v in _ALIASES.items() if k in df.columns and v not in df.columns}
    if renames:
        df = df.rename(columns=renames)
    return df


def records_to_frame(records: Sequence[CourseRecord]) -> pd.DataFrame:
    rows = [
        {"id": r.id, "semester": r.group_key, "code": r.code, "score": r.score, "unit": r.units}
        for r in records
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def frame_to_records(df: pd.DataFrame) -> List[CourseRecord]:
    """
    Rows missing a semester, code, score or unit are skipped, scores are
    clamped to 0-100 and units that are not positive whole numbers are
    dropped. A repeated code in the same semester keeps the first row only.
    Rows without an id get a fresh one.
    """
    df = _normalise_cols(df)
    required = {"semester", "code", "score", "unit"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected: {', '.join(COLUMNS)}.")

    records: List[CourseRecord] = []
    skipped = 0
    duplicates = 0
    for _, row in df.iterrows():
        semester = row.get("semester")
        code = row.get("code")
        score = row.get("score")
        unit = row.get("unit")
        if pd.isna(semester) or pd.isna(code) or pd.isna(score) or pd.isna(unit):
            skipped += 1
            continue
        try:
            score = float(score)
            unit = float(unit)
        except (TypeError, ValueError):
            skipped += 1
            continue
        if not math.isfinite(unit) or unit != int(unit) or unit <= 0:
            skipped += 1
            continue

        code = str(code).strip().upper()
        group_key = _semester_text(semester)
        if is_duplicate(records, code, group_key):
            duplicates += 1
            continue

        raw_id = row.get("id")
        if raw_id is None or pd.isna(raw_id):
            course_id = next_course_id(records)
        else:
            course_id = int(raw_id)

        records.append(CourseRecord(
            id=course_id,
            group_key=group_key,
            code=code,
            score=int(round_half_up(clamp_score(score), 0)),
            units=int(unit),
        ))

    if skipped:
        logger.warning("Skipped %d incomplete or invalid course rows", skipped)
    if duplicates:
        logger.warning("Skipped %d repeated courses (same code and semester)", duplicates)
    return records


def _semester_text(value) -> str:
    # pandas reads "1.2" back as the float 1.2
    if isinstance(value, float):
        return repr(value)
    return str(value).strip()


def read_upload(uploaded_file, filename: str = "") -> pd.DataFrame:
    """Read a CSV or a JSON export (list of course objects) into a frame."""
    name = (filename or getattr(uploaded_file, "name", "") or "").lower()
    if name.endswith(".json"):
        df = pd.read_json(uploaded_file, orient="records", dtype={"semester": str})
    else:
        df = pd.read_csv(uploaded_file, dtype={"semester": str})
    return _normalise_cols(df)


def save_records(records: Sequence[CourseRecord], path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    records_to_frame(records).to_csv(path, index=False)
    logger.info("Saved %d courses to %s", len(records), path)
    return path


def load_records(path: Union[str, Path]) -> List[CourseRecord]:
    path = Path(path)
    if not path.exists():
        logger.info("No saved courses at %s", path)
        return []
    records = frame_to_records(pd.read_csv(path, dtype={"semester": str}))
    logger.info("Loaded %d courses from %s", len(records), path)
    return records


def to_csv_bytes(records: Sequence[CourseRecord]) -> bytes:
    return records_to_frame(records).to_csv(index=False).encode("utf-8")
