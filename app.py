import logging

import streamlit as st

from gpa_tracker.backend_logic import TargetOutcome, aggregate, evaluate_target, group_sort_key
from gpa_tracker.config import (
    DURATION_CHOICES,
    STATUS_COLOURS,
    TERMS_PER_YEAR_CHOICES,
    data_file_path,
    profile_file_path,
)
from gpa_tracker.courses import (
    ALL_SEMESTERS,
    add_course,
    delete_course,
    filter_by_semester,
    semester_options,
)
from gpa_tracker.errors import DuplicateCourse, GpaTrackerError
from gpa_tracker.io_csv import frame_to_records, load_records, read_upload, save_records, to_csv_bytes
from gpa_tracker.profile import Profile, load_profile, save_profile
from gpa_tracker.reporting import (
    course_table,
    gpa_status,
    is_honours_level,
    score_status,
    semester_summary,
    trend_chart,
)
from gpa_tracker.standards import resolve, standard_names

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title="GPA Tracker | Semester & Cumulative GPA",
    page_icon="🎓",
    layout="wide",
)

st.markdown(
    """
    <style>
    .summary-card {
        display: inline-block;
        min-width: 120px;
        padding: 12px 16px;
        margin: 0 8px 8px 0;
        border-radius: 14px;
        background: rgba(255, 255, 255, 0.05);
        text-align: center;
    }
    .summary-sem { font-size: 13px; opacity: 0.8; }
    .summary-gpa { font-size: 24px; font-weight: 800; }
    </style>
    """,
    unsafe_allow_html=True
)

st.title("🎓 GPA Tracker")
st.write(
    "Enter your courses with a score (0-100) or a letter grade. Your semester GPA, "
    "cumulative GPA and GPA trend are recalculated under the grading standard you choose."
)

DATA_FILE = data_file_path()

if "courses" not in st.session_state:
    try:
        st.session_state["courses"] = load_records(DATA_FILE)
    except (OSError, ValueError) as e:
        logger.error("Could not load saved courses from %s: %s", DATA_FILE, e)
        st.session_state["courses"] = []
        st.error(f"Saved courses could not be loaded: {e}")


def persist(courses):
    st.session_state["courses"] = courses
    try:
        save_records(courses, DATA_FILE)
    except OSError as e:
        logger.error("Could not save courses to %s: %s", DATA_FILE, e)
        st.warning(f"Courses could not be saved to {DATA_FILE}: {e}")


# ------------------------
# Profile (sidebar)
# ------------------------
PROFILE_FILE = profile_file_path()
STANDARD_OPTIONS = standard_names()
standard_ids = list(STANDARD_OPTIONS.values())
terms_by_label = TERMS_PER_YEAR_CHOICES
term_values = list(terms_by_label.values())

if "profile" not in st.session_state:
    try:
        st.session_state["profile"] = load_profile(PROFILE_FILE)
    except OSError as e:
        logger.error("Could not load profile from %s: %s", PROFILE_FILE, e)
        st.session_state["profile"] = Profile()

saved_profile = st.session_state["profile"]

with st.sidebar:
    st.header("Profile")
    student_name = st.text_input("Name", value=saved_profile.name)
    student_school = st.text_input("School", value=saved_profile.school)
    duration = st.selectbox(
        "Programme duration (years)",
        DURATION_CHOICES,
        index=DURATION_CHOICES.index(saved_profile.duration),
        format_func=lambda d: f"{d:g}",
    )
    term_label = st.selectbox(
        "Term system",
        list(terms_by_label.keys()),
        index=term_values.index(saved_profile.terms_per_year),
    )
    standard_label = st.selectbox(
        "Grading standard",
        list(STANDARD_OPTIONS.keys()),
        index=standard_ids.index(saved_profile.standard_id),
    )

profile = Profile(
    name=student_name,
    school=student_school,
    standard_id=STANDARD_OPTIONS[standard_label],
    duration=duration,
    terms_per_year=terms_by_label[term_label],
)
if profile != saved_profile:
    st.session_state["profile"] = profile
    try:
        save_profile(profile, PROFILE_FILE)
    except OSError as e:
        logger.error("Could not save profile to %s: %s", PROFILE_FILE, e)
        st.warning(f"Profile could not be saved to {PROFILE_FILE}: {e}")

standard = resolve(profile.standard_id)
semesters = semester_options(profile.duration, profile.terms_per_year)
semester_labels = dict(semesters)

# ------------------------
# Add course form
# ------------------------
with st.form("add_course_form", clear_on_submit=True):
    st.subheader("1. Add a course")
    c1, c2, c3, c4 = st.columns([2, 2, 1, 2])
    with c1:
        semester = st.selectbox(
            "Semester",
            [key for key, _ in semesters],
            format_func=lambda k: semester_labels.get(k, k),
        )
    with c2:
        code = st.text_input("Course code")
    with c3:
        units = st.text_input("Units")
    with c4:
        raw_score = st.text_input(
            "Score or grade",
            placeholder=f"Score (0-100) or Grade ({standard.letter_hint})",
        )
    submitted = st.form_submit_button("Add course", type="primary")

if submitted:
    try:
        courses = add_course(
            st.session_state["courses"],
            group_key=semester,
            code=code,
            units=units,
            raw_score=raw_score,
            standard=standard,
        )
    except DuplicateCourse as e:
        st.warning(f"⚠️ Duplicate warning: {e}")
    except GpaTrackerError as e:
        st.error(str(e))
    else:
        persist(courses)

courses = st.session_state["courses"]

# ------------------------
# Course table
# ------------------------
st.markdown("---")
st.subheader("2. Your courses")

if len(courses) == 0:
    st.info("📭 No courses added yet. Select a semester and add your first course above!")
else:
    present = sorted({c.group_key for c in courses}, key=group_sort_key)
    filter_key = st.selectbox(
        "Show",
        [ALL_SEMESTERS] + present,
        format_func=lambda k: "Show all semesters" if k == ALL_SEMESTERS else semester_labels.get(k, f"Semester {k}"),
    )
    shown = filter_by_semester(courses, filter_key)
    table = course_table(shown, standard)
    table["Status"] = [score_status(s, standard) for s in table["Score"]]
    st.dataframe(table.drop(columns=["ID"]), use_container_width=True, hide_index=True)

    d1, d2 = st.columns([3, 1])
    with d1:
        by_id = {c.id: c for c in courses}
        to_delete = st.selectbox(
            "Delete a course",
            list(by_id.keys()),
            format_func=lambda i: f"{by_id[i].code} ({by_id[i].group_key})",
        )
        if st.button("Delete course"):
            persist(delete_course(courses, to_delete))
            st.rerun()
    with d2:
        confirm = st.checkbox("I understand this cannot be undone")
        if st.button("Clear all data", disabled=not confirm):
            persist([])
            st.rerun()

# ------------------------
# Results
# ------------------------
overall = aggregate(courses, standard)
status = gpa_status(overall.gpa, standard.max_points)

st.markdown("---")
st.subheader("3. Results")

m1, m2, m3 = st.columns(3)
with m1:
    st.markdown(
        f'<div class="summary-sem">Cumulative GPA</div>'
        f'<div class="summary-gpa" style="color: {STATUS_COLOURS[status]};">{overall.gpa:.2f}</div>',
        unsafe_allow_html=True,
    )
with m2:
    st.metric("Max scale", f"{standard.max_points:.2f}")
with m3:
    st.metric("Total units", f"{overall.total_units:g}")

if courses and is_honours_level(overall.gpa, standard.max_points):
    st.success("🎉 Outstanding! You're in the top band of this scale.")

summary = semester_summary(courses, standard)
if len(summary) > 0:
    cards = "".join(
        f'<div class="summary-card"><div class="summary-sem">Year {row.Semester}</div>'
        f'<div class="summary-gpa" style="color: {STATUS_COLOURS[row.Status]};">{row.GPA:.2f}</div></div>'
        for row in summary.itertuples(index=False)
    )
    st.markdown(cards, unsafe_allow_html=True)

    st.markdown("**GPA trend**")
    st.altair_chart(trend_chart(courses, standard), use_container_width=True)

# ------------------------
# Target GPA
# ------------------------
st.markdown("---")
st.subheader("4. Target GPA")

with st.form("target_form"):
    t1, t2 = st.columns(2)
    with t1:
        target_gpa = st.number_input(
            "Target cumulative GPA",
            min_value=0.0,
            max_value=float(standard.max_points),
            value=None,
            step=0.1,
        )
    with t2:
        next_units = st.number_input("Units next semester", min_value=0, value=None, step=1)
    st.caption(f"Current CGPA: {overall.gpa:.2f}")
    run_target = st.form_submit_button("Calculate")

if run_target:
    try:
        result = evaluate_target(courses, standard, target_gpa, next_units)
    except GpaTrackerError as e:
        st.error(str(e))
    else:
        if result.outcome is TargetOutcome.UNREACHABLE:
            st.error(
                f"⚠️ Impossible! You need **{result.required:.2f}** (Max is {result.max_points:g})."
            )
        elif result.outcome is TargetOutcome.ALREADY_EXCEEDED:
            st.success("🎉 You're already above this target!")
        else:
            st.info(f"🎯 Aim for **{result.required:.2f}** next semester.")

# ------------------------
# Import / export
# ------------------------
st.markdown("---")
st.subheader("5. Backup")

b1, b2 = st.columns(2)
with b1:
    st.download_button(
        "Download courses (CSV)",
        data=to_csv_bytes(courses),
        file_name="courses.csv",
        mime="text/csv",
    )
with b2:
    upload = st.file_uploader("Import courses (CSV or JSON)", type=["csv", "json"])
    if upload is not None and st.button("Replace my courses with this file"):
        try:
            imported = frame_to_records(read_upload(upload, upload.name))
        except ValueError as e:
            st.error(f"Import error: {e}")
        else:
            persist(imported)
            st.success(f"Imported {len(imported)} courses.")
            st.rerun()

st.caption(f"Courses are saved locally to {DATA_FILE}.")
