"""
Profile settings: who the student is and how their programme is laid out.

Saved as a small JSON file so the chosen grading standard, programme length
and term system survive a restart. Unknown or malformed values fall back to
the defaults in config.
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Union

from .config import (
    DEFAULT_PROGRAM_DURATION,
    DEFAULT_STANDARD_ID,
    DEFAULT_TERMS_PER_YEAR,
    DURATION_CHOICES,
    TERMS_PER_YEAR_CHOICES,
)
from .standards import STANDARDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Profile:
    name: str = ""
    school: str = ""
    standard_id: str = DEFAULT_STANDARD_ID
    duration: float = DEFAULT_PROGRAM_DURATION
    terms_per_year: int = DEFAULT_TERMS_PER_YEAR


def profile_from_dict(data: dict) -> Profile:
    default = Profile()

    standard_id = data.get("standard_id", default.standard_id)
    if not isinstance(standard_id, str) or standard_id not in STANDARDS:
        logger.warning("Unknown grading standard %r in profile, using %s", standard_id, default.standard_id)
        standard_id = default.standard_id

    try:
        duration = float(data.get("duration", default.duration))
    except (TypeError, ValueError):
        duration = default.duration
    if duration not in DURATION_CHOICES:
        duration = default.duration

    try:
        terms = int(data.get("terms_per_year", default.terms_per_year))
    except (TypeError, ValueError):
        terms = default.terms_per_year
    if terms not in TERMS_PER_YEAR_CHOICES.values():
        terms = default.terms_per_year

    return Profile(
        name=str(data.get("name") or ""),
        school=str(data.get("school") or ""),
        standard_id=standard_id,
        duration=duration,
        terms_per_year=terms,
    )


def save_profile(profile: Profile, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(profile), f, indent=2)
    logger.info("Saved profile to %s", path)
    return path


def load_profile(path: Union[str, Path]) -> Profile:
    path = Path(path)
    if not path.exists():
        return Profile()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring unreadable profile %s: %s", path, e)
        return Profile()
    if not isinstance(data, dict):
        logger.warning("Ignoring profile %s: expected an object", path)
        return Profile()
    return profile_from_dict(data)
