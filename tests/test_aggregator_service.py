"""
Tests for the student and faculty read-side views
"""
import pandas as pd
import pytest

from services.aggregator_service import (
    export_marks_sheet,
    get_assignment_progress,
    get_student_view,
    render_marks_sheet,
)
from services.assignment_service import create_assignment
from services.exceptions import ValidationError
from services.ledger_service import submit_marks


def enter(seeded, assignment_key, date, username, faculty="fac1", **fields):
    return submit_marks(
        seeded[assignment_key], date,
        [{"student_id": seeded["students"][username], **fields}],
        entered_by=seeded[faculty]
    )


class TestStudentView:

    def test_groups_by_lab_with_sorted_sessions(self, ctx, seeded):
        enter(seeded, "assignment", "2025-01-27", "1003", marks=20)
        enter(seeded, "assignment", "2025-01-06", "1003", Pr=5, PE=5, P=10, R=5, C=5)
        enter(seeded, "batch_assignment", "2025-01-08", "1003", faculty="fac2", marks=15)

        labs = get_student_view(seeded["students"]["1003"])

        assert [lab["lab_code"] for lab in labs] == ["CSL37", "CSL38"]
        ds_lab = labs[0]
        assert ds_lab["faculty_name"] == "Asha Rao"
        assert ds_lab["day_of_week"] == "Monday"
        assert [s["date"] for s in ds_lab["sessions"]] == ["2025-01-06", "2025-01-27"]
        assert ds_lab["sessions"][0]["entered_by"] == "Asha Rao"
        assert ds_lab["sessions"][0]["marks"] == 30
        assert ds_lab["sessions_marked"] == 2
        assert ds_lab["sessions_scheduled"] == 8
        assert ds_lab["completion"] == 0.25
        assert ds_lab["total_marks"] == 50

    def test_sessions_of_same_lab_merge_across_assignments(self, ctx, seeded):
        second = create_assignment(
            lab_id=seeded["lab"], faculty_id=seeded["fac2"], section="A",
            academic_year="2024-25", semester_type="Even",
            start_date="2025-01-01", end_date="2025-01-31", day_of_week="Friday"
        )
        enter(seeded, "assignment", "2025-01-13", "1001", marks=10)
        submit_marks(second.assignment_id, "2025-01-10",
                     [{"student_id": seeded["students"]["1001"], "marks": 12}],
                     entered_by=seeded["fac2"])

        labs = get_student_view(seeded["students"]["1001"])

        assert len(labs) == 1
        assert [s["date"] for s in labs[0]["sessions"]] == ["2025-01-10", "2025-01-13"]
        assert labs[0]["sessions_scheduled"] == 8 + 5

    def test_no_marks_yet(self, ctx, seeded):
        assert get_student_view(seeded["students"]["1002"]) == []


class TestFacultyViews:

    def test_progress_per_week(self, ctx, seeded):
        enter(seeded, "assignment", "2025-01-06", "1001", marks=10)
        enter(seeded, "assignment", "2025-01-06", "1002", marks=10)

        weeks = get_assignment_progress(seeded["assignment"])

        assert len(weeks) == 8
        assert weeks[0] == {
            "week_number": 1, "date": "2025-01-06",
            "marked": 2, "roster_size": 5, "completion": 0.4
        }
        assert weeks[1]["marked"] == 0

    def test_marks_sheet(self, ctx, seeded):
        enter(seeded, "assignment", "2025-01-06", "1001", Pr=5, PE=4, P=8, R=5, C=3)
        enter(seeded, "assignment", "2025-01-13", "1001", marks=10)

        df = export_marks_sheet(seeded["assignment"])

        assert list(df["Username"]) == ["1001", "1002", "1003", "1004", "1005"]
        assert df.columns[2] == "Week 1 (2025-01-06)"
        assert df.columns[-1] == "Total"
        assert df.loc[0, "Total"] == 35
        assert pd.isna(df.loc[1, "Week 1 (2025-01-06)"])

    def test_render_csv(self, ctx, seeded):
        output = render_marks_sheet(export_marks_sheet(seeded["assignment"]), "csv")

        assert output.read().decode().startswith("Username,Name,Week 1 (2025-01-06)")

    def test_render_unknown_format(self, ctx, seeded):
        with pytest.raises(ValidationError):
            render_marks_sheet(export_marks_sheet(seeded["assignment"]), "pdf")
