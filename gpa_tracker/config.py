"""
Configuration constants for the GPA tracker.

Defaults for the profile form, the colour policy applied by the
presentation layer, and where the course list is stored between sessions.
"""

import os
from pathlib import Path

# ------------------------
# Profile defaults
# ------------------------
DEFAULT_STANDARD_ID = "ng"
DEFAULT_PROGRAM_DURATION = 4.0
DURATION_CHOICES = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]

# Semesters, trimesters or quarters
TERMS_PER_YEAR_CHOICES = {
    "Semesters (2 per year)": 2,
    "Trimesters (3 per year)": 3,
    "Quarters (4 per year)": 4,
}
DEFAULT_TERMS_PER_YEAR = 2

# ------------------------
# Colour policy (fractions of a standard's max points)
# ------------------------
STATUS_GREEN_RATIO = 0.7
STATUS_ORANGE_RATIO = 0.5
HONOURS_RATIO = 0.9

STATUS_COLOURS = {
    "green": "#00b894",
    "orange": "#fdcb6e",
    "red": "#ff7675",
}

# Score thresholds (green, orange) used to colour a course's grade.
SCORE_COLOUR_THRESHOLDS = {
    "ng": (60, 40),
    "ui_special": (60, 40),
    "poly": (60, 40),
    "uk": (60, 40),
    "us": (80, 60),
    "in": (60, 40),
}

# ------------------------
# Storage
# ------------------------
DATA_FILE_ENV = "GPA_TRACKER_DATA"
DEFAULT_DATA_FILE = Path.home() / ".gpa_tracker" / "courses.csv"


def data_file_path() -> Path:
    """Location of the saved course list, overridable via GPA_TRACKER_DATA."""
    override = os.environ.get(DATA_FILE_ENV)
    if override:
        return Path(override).expanduser()
    return DEFAULT_DATA_FILE


def profile_file_path() -> Path:
    """Profile settings live next to the course list."""
    return data_file_path().with_name("profile.json")
