import pytest

from gpa_tracker.backend_logic import classify
from gpa_tracker.errors import UnknownStandard
from gpa_tracker.standards import (
    STANDARDS,
    Band,
    GradingStandard,
    available_standards,
    default_standard,
    resolve,
    standard_names,
)

ALL_IDS = ["ng", "ui_special", "poly", "uk", "us", "in"]


def test_catalog_has_the_six_standards_in_order():
    assert [s.id for s in available_standards()] == ALL_IDS
    assert set(STANDARDS) == set(ALL_IDS)


@pytest.mark.parametrize("standard_id,max_points", [
    ("ng", 5), ("ui_special", 7), ("poly", 4), ("uk", 4), ("us", 4), ("in", 10),
])
def test_max_points(standard_id, max_points):
    assert resolve(standard_id).max_points == max_points


@pytest.mark.parametrize("bad", ["", "NG", "ui", "xx", None])
def test_resolve_rejects_unknown_ids(bad):
    with pytest.raises(UnknownStandard):
        resolve(bad)


def test_unknown_standard_is_a_value_error():
    with pytest.raises(ValueError):
        resolve("fr")


def test_default_standard_is_nigeria():
    assert default_standard().id == "ng"


def test_standard_names_map_to_ids():
    names = standard_names()
    assert list(names.values()) == ALL_IDS
    assert names["Nigeria (5.0)"] == "ng"


@pytest.mark.parametrize("standard", available_standards(), ids=ALL_IDS)
def test_thresholds_strictly_decrease_down_to_zero(standard):
    thresholds = [b.min_score for b in standard.bands]
    assert thresholds == sorted(thresholds, reverse=True)
    assert len(set(thresholds)) == len(thresholds)
    assert thresholds[-1] == 0


@pytest.mark.parametrize("standard", available_standards(), ids=ALL_IDS)
def test_every_integer_score_falls_in_exactly_one_band(standard):
    for score in range(0, 101):
        matches = [
            b for i, b in enumerate(standard.bands)
            if score >= b.min_score and (i == 0 or score < standard.bands[i - 1].min_score)
        ]
        assert len(matches) == 1
        assert classify(score, standard).label == matches[0].label


@pytest.mark.parametrize("standard", available_standards(), ids=ALL_IDS)
def test_letter_tokens_are_uppercase_and_in_range(standard):
    for token, score in standard.letter_to_score.items():
        assert token == token.strip().upper()
        assert 0 <= score <= 100


def test_letter_table_is_read_only():
    with pytest.raises(TypeError):
        resolve("ng").letter_to_score["Z"] = 10


def test_uk_letter_table_keeps_midpoints():
    assert dict(resolve("uk").letter_to_score) == {
        "1ST": 75, "2:1": 65, "2:2": 55, "3RD": 45, "FAIL": 0,
    }


def test_poly_bands_exact():
    assert [(b.min_score, b.points, b.label) for b in resolve("poly").bands] == [
        (75, 4.00, "A"), (70, 3.50, "AB"), (65, 3.25, "B"), (60, 3.00, "BC"),
        (55, 2.75, "C"), (50, 2.50, "CD"), (45, 2.25, "D"), (40, 2.00, "E"),
        (0, 0.00, "F"),
    ]


def test_standard_rejects_unsorted_bands():
    with pytest.raises(ValueError):
        GradingStandard(
            id="bad", name="Bad", max_points=4,
            bands=(Band(50, 2, "C"), Band(60, 3, "B"), Band(0, 0, "F")),
            letter_to_score={},
        )


def test_standard_rejects_gap_at_bottom():
    with pytest.raises(ValueError):
        GradingStandard(
            id="bad", name="Bad", max_points=4,
            bands=(Band(60, 3, "B"), Band(10, 0, "F")),
            letter_to_score={},
        )


def test_standard_rejects_lowercase_letter_tokens():
    with pytest.raises(ValueError):
        GradingStandard(
            id="bad", name="Bad", max_points=4,
            bands=(Band(50, 4, "A"), Band(0, 0, "F")),
            letter_to_score={"a": 50},
        )
