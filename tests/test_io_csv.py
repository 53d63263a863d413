import io
import json

import pandas as pd
import pytest

from gpa_tracker.backend_logic import CourseRecord
from gpa_tracker.io_csv import (
    COLUMNS,
    frame_to_records,
    load_records,
    read_upload,
    records_to_frame,
    save_records,
    to_csv_bytes,
)

RECORDS = [
    CourseRecord(id=1700000000001, group_key="1.1", code="MTH101", score=72, units=3),
    CourseRecord(id=1700000000002, group_key="1.2", code="PHY102", score=55, units=2),
    CourseRecord(id=1700000000003, group_key="2.10", code="GST201", score=0, units=1),
]


def test_save_then_load_keeps_every_field(tmp_path):
    path = tmp_path / "nested" / "courses.csv"
    save_records(RECORDS, path)
    assert load_records(path) == RECORDS


def test_semester_keys_stay_text(tmp_path):
    path = tmp_path / "courses.csv"
    save_records(RECORDS, path)
    assert [r.group_key for r in load_records(path)] == ["1.1", "1.2", "2.10"]


def test_load_missing_file_is_empty(tmp_path):
    assert load_records(tmp_path / "nothing.csv") == []


def test_save_empty_list_round_trips(tmp_path):
    path = tmp_path / "courses.csv"
    save_records([], path)
    assert load_records(path) == []


def test_frame_columns_match_storage_names():
    df = records_to_frame(RECORDS)
    assert list(df.columns) == COLUMNS
    assert df.loc[0, "unit"] == 3
    assert df.loc[0, "semester"] == "1.1"


def test_to_csv_bytes_has_header():
    text = to_csv_bytes(RECORDS).decode("utf-8")
    assert text.splitlines()[0] == "id,semester,code,score,unit"


def test_frame_to_records_cleans_rows():
    df = pd.DataFrame([
        {"ID": 1, " Semester ": "1.1", "Code": "mth101", "Score": 130, "Units": 3},
        {"ID": 2, " Semester ": "1.1", "Code": "phy101", "Score": -5, "Units": 2},
        {"ID": 3, " Semester ": "1.1", "Code": "chm101", "Score": None, "Units": 2},
        {"ID": 4, " Semester ": "1.1", "Code": "bio101", "Score": 60, "Units": 0},
        {"ID": 5, " Semester ": "1.1", "Code": "gst101", "Score": 64.5, "Units": 1},
        {"ID": 6, " Semester ": "1.2", "Code": "eng101", "Score": 70, "Units": 0.5},
        {"ID": 7, " Semester ": "1.2", "Code": "eng102", "Score": 70, "Units": 2.9},
    ])
    records = frame_to_records(df)
    assert [(r.code, r.score, r.units) for r in records] == [
        ("MTH101", 100, 3),
        ("PHY101", 0, 2),
        ("GST101", 65, 1),
    ]
    assert all(r.units > 0 for r in records)


def test_frame_to_records_assigns_missing_ids():
    df = pd.DataFrame([
        {"semester": "1.1", "code": "A1", "score": 50, "unit": 1},
        {"semester": "1.1", "code": "A2", "score": 60, "unit": 1},
    ])
    records = frame_to_records(df)
    assert len({r.id for r in records}) == 2


def test_frame_to_records_requires_columns():
    with pytest.raises(ValueError, match="Missing columns"):
        frame_to_records(pd.DataFrame([{"code": "A1", "score": 50}]))


def test_read_upload_csv():
    data = io.StringIO("id,semester,code,score,unit\n1,1.2,MTH102,66,3\n")
    records = frame_to_records(read_upload(data, "courses.csv"))
    assert records == [CourseRecord(id=1, group_key="1.2", code="MTH102", score=66, units=3)]


def test_read_upload_browser_json_export():
    saved = [
        {"id": 1712345678901, "semester": "1.1", "code": "GST111", "score": 70, "unit": 2},
        {"id": 1712345678902, "semester": "1.2", "code": "MTH112", "score": 48, "unit": 3},
    ]
    upload = io.StringIO(json.dumps(saved))
    records = frame_to_records(read_upload(upload, "myGrades.json"))
    assert records == [
        CourseRecord(id=1712345678901, group_key="1.1", code="GST111", score=70, units=2),
        CourseRecord(id=1712345678902, group_key="1.2", code="MTH112", score=48, units=3),
    ]


def test_frame_to_records_keeps_first_of_repeated_courses():
    df = pd.DataFrame([
        {"id": 1, "semester": "1.1", "code": "A1", "score": 50, "unit": 2},
        {"id": 2, "semester": "1.1", "code": " a1", "score": 80, "unit": 3},
        {"id": 3, "semester": "1.2", "code": "A1", "score": 60, "unit": 2},
    ])
    records = frame_to_records(df)
    assert [(r.id, r.group_key, r.code, r.score) for r in records] == [
        (1, "1.1", "A1", 50),
        (3, "1.2", "A1", 60),
    ]
