from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from .config import DEFAULT_STANDARD_ID
from .errors import UnknownStandard


# ------------------------
# Standard definitions
# ------------------------
@dataclass(frozen=True)
class Band:
    min_score: int
    points: float
    label: str


@dataclass(frozen=True)
class GradingStandard:
    """
    A national grading standard.

    bands: (min_score, points, label) sorted high to low; the last band
           starts at 0 so every score in [0, 100] lands in exactly one band.
    letter_to_score: uppercase letter token -> representative score, used to
           turn a letter input into a score before classification. These are
           literal values and are not derived from the bands.
    """
    id: str
    name: str
    max_points: float
    bands: Tuple[Band, ...]
    letter_to_score: Mapping[str, int] = field(compare=False)
    letter_hint: str = ""

    def __post_init__(self):
        if not self.bands:
            raise ValueError(f"Standard {self.id!r} has no bands.")
        thresholds = [b.min_score for b in self.bands]
        if any(hi <= lo for hi, lo in zip(thresholds, thresholds[1:])):
            raise ValueError(
                f"Standard {self.id!r} band thresholds must be strictly decreasing (got {thresholds})."
            )
        if thresholds[-1] != 0:
            raise ValueError(f"Standard {self.id!r} lowest band must start at 0.")
        if thresholds[0] > 100:
            raise ValueError(f"Standard {self.id!r} top band starts above 100.")
        for token, score in self.letter_to_score.items():
            if token != token.strip().upper():
                raise ValueError(f"Letter token {token!r} must be trimmed and uppercase.")
            if not 0 <= score <= 100:
                raise ValueError(f"Letter {token!r} maps outside 0-100 (got {score}).")
        object.__setattr__(self, "letter_to_score", MappingProxyType(dict(self.letter_to_score)))

    @property
    def labels(self) -> List[str]:
        return [b.label for b in self.bands]


def _bands(rows) -> Tuple[Band, ...]:
    return tuple(Band(min_score, points, label) for min_score, points, label in rows)


# ------------------------
# Catalog
# ------------------------
_CATALOG = (
    GradingStandard(
        id="ng",
        name="Nigeria (5.0)",
        max_points=5,
        bands=_bands([
            (70, 5, "A"),
            (60, 4, "B"),
            (50, 3, "C"),
            (45, 2, "D"),
            (40, 1, "E"),
            (0, 0, "F"),
        ]),
        letter_to_score={"A": 70, "B": 60, "C": 50, "D": 45, "E": 40, "F": 0},
        letter_hint="A, B, C...",
    ),
    GradingStandard(
        id="ui_special",
        name="Special / PG (7.0)",
        max_points=7,
        bands=_bands([
            (70, 7, "A"),
            (65, 6, "A-"),
            (60, 5, "B+"),
            (55, 4, "B"),
            (50, 3, "B-"),
            (45, 2, "C+"),
            (40, 1, "C"),
            (0, 0, "F"),
        ]),
        letter_to_score={
            "A": 70, "A-": 65, "B+": 60, "B": 55,
            "B-": 50, "C+": 45, "C": 40, "F": 0,
        },
        letter_hint="A, A-, B+...",
    ),
    GradingStandard(
        id="poly",
        name="Polytechnic (4.0)",
        max_points=4,
        bands=_bands([
            (75, 4.00, "A"),
            (70, 3.50, "AB"),
            (65, 3.25, "B"),
            (60, 3.00, "BC"),
            (55, 2.75, "C"),
            (50, 2.50, "CD"),
            (45, 2.25, "D"),
            (40, 2.00, "E"),
            (0, 0.00, "F"),
        ]),
        letter_to_score={
            "A": 75, "AB": 70, "B": 65, "BC": 60, "C": 55,
            "CD": 50, "D": 45, "E": 40, "F": 0,
        },
        letter_hint="A, AB, B...",
    ),
    GradingStandard(
        id="uk",
        name="United Kingdom (4.0)",
        max_points=4,
        bands=_bands([
            (70, 4.00, "1st"),
            (60, 3.33, "2:1"),
            (50, 2.67, "2:2"),
            (40, 2.00, "3rd"),
            (0, 0.00, "Fail"),
        ]),
        # midpoints rather than band floors, kept as-is
        letter_to_score={"1ST": 75, "2:1": 65, "2:2": 55, "3RD": 45, "FAIL": 0},
        letter_hint="1st, 2:1...",
    ),
    GradingStandard(
        id="us",
        name="United States (4.0)",
        max_points=4,
        bands=_bands([
            (90, 4.0, "A"),
            (80, 3.0, "B"),
            (70, 2.0, "C"),
            (60, 1.0, "D"),
            (0, 0.0, "F"),
        ]),
        letter_to_score={"A": 90, "B": 80, "C": 70, "D": 60, "F": 0},
        letter_hint="A, B, C...",
    ),
    GradingStandard(
        id="in",
        name="India (10.0)",
        max_points=10,
        bands=_bands([
            (80, 10, "O"),
            (70, 9, "A+"),
            (60, 8, "A"),
            (55, 7, "B+"),
            (50, 6, "B"),
            (45, 5, "C"),
            (40, 4, "P"),
            (0, 0, "F"),
        ]),
        letter_to_score={
            "O": 80, "A+": 70, "A": 60, "B+": 55,
            "B": 50, "C": 45, "P": 40, "F": 0,
        },
        letter_hint="O, A+, A...",
    ),
)

STANDARDS: Mapping[str, GradingStandard] = MappingProxyType({s.id: s for s in _CATALOG})


def resolve(standard_id: str) -> GradingStandard:
    try:
        return STANDARDS[standard_id]
    except (KeyError, TypeError):
        raise UnknownStandard(
            f"Unknown grading standard {standard_id!r}. Expected one of: {sorted(STANDARDS)}."
        ) from None


def available_standards() -> List[GradingStandard]:
    return list(_CATALOG)


def default_standard() -> GradingStandard:
    return resolve(DEFAULT_STANDARD_ID)


def standard_names() -> Dict[str, str]:
    """Display name -> id, in catalog order (for a selectbox)."""
    return {s.name: s.id for s in _CATALOG}
