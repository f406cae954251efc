import io
import logging

import pandas as pd

from extensions import db
from models import Lab, MarkLedger
from services.assignment_service import get_assignment
from services.exceptions import ValidationError
from services.ledger_service import week_view
from services.roster_service import resolve_students
from services.rubric import display_number
from services.user_service import get_user

logger = logging.getLogger(__name__)


def _ratio(part, whole):
    if not whole:
        return 0.0
    return round(part / whole, 4)


def get_student_view(student_id):
    """A student's marks grouped by lab, sessions oldest first.

    Grouping is by lab, not by assignment: sessions from every assignment of
    the same lab are merged into one list.
    """
    student = get_user(student_id)
    ledgers = (
        MarkLedger.query
        .filter_by(student_id=student.user_id)
        .order_by(MarkLedger.assignment_id.asc())
        .all()
    )

    groups = {}
    for ledger in ledgers:
        assignment = ledger.assignment
        lab = db.session.get(Lab, assignment.lab_id) if assignment else None
        if lab is None:
            logger.warning("Skipping ledger %s: assignment or lab missing", ledger.ledger_id)
            continue

        summary = groups.get(lab.lab_id)
        if summary is None:
            faculty = assignment.faculty
            summary = groups[lab.lab_id] = {
                "lab_id": lab.lab_id,
                "lab_code": lab.lab_code,
                "lab_name": lab.lab_name,
                "faculty_name": faculty.name if faculty else None,
                "day_of_week": assignment.day_of_week,
                "sessions": [],
                "scheduled": set()
            }

        summary["scheduled"].update(assignment.generated_dates)
        for week in ledger.weeks:
            session = week_view(week, assignment)
            session["entered_by"] = week.enterer.name if week.enterer else None
            session["assignment_id"] = assignment.assignment_id
            summary["sessions"].append(session)

    labs = []
    for summary in groups.values():
        scheduled = summary.pop("scheduled")
        sessions = sorted(summary["sessions"], key=lambda s: s["date"])
        marked = {s["date"] for s in sessions if s["T"] is not None}
        summary["sessions"] = sessions
        summary["sessions_marked"] = len(marked)
        summary["sessions_scheduled"] = len(scheduled)
        summary["completion"] = _ratio(len(marked), len(scheduled))
        summary["total_marks"] = display_number(
            sum(s["T"] for s in sessions if s["T"] is not None)
        )
        labs.append(summary)

    return sorted(labs, key=lambda lab: lab["lab_code"])


def _ledger_totals(assignment_id):
    """{student_id: {session_date: T}} for one assignment."""
    totals = {}
    for ledger in MarkLedger.query.filter_by(assignment_id=assignment_id).all():
        totals[ledger.student_id] = {
            w.session_date: w.total for w in ledger.weeks if w.total is not None
        }
    return totals


def get_assignment_progress(assignment_id, faculty_id=None):
    assignment = get_assignment(assignment_id, faculty_id=faculty_id)
    roster = resolve_students(assignment.assignment_id)
    totals = _ledger_totals(assignment.assignment_id)

    weeks = []
    for number, day in assignment.weeks:
        marked = sum(1 for s in roster if day in totals.get(s.user_id, {}))
        weeks.append({
            "week_number": number,
            "date": day.isoformat(),
            "marked": marked,
            "roster_size": len(roster),
            "completion": _ratio(marked, len(roster))
        })
    return weeks


def export_marks_sheet(assignment_id, faculty_id=None):
    """Marks sheet with one row per roster student and one column per week."""
    assignment = get_assignment(assignment_id, faculty_id=faculty_id)
    roster = resolve_students(assignment.assignment_id)
    totals = _ledger_totals(assignment.assignment_id)

    week_columns = [
        (f"Week {number} ({day.isoformat()})", day)
        for number, day in assignment.weeks
    ]

    records = []
    for student in roster:
        marks = totals.get(student.user_id, {})
        record = {"Username": student.username, "Name": student.name}
        for column, day in week_columns:
            record[column] = display_number(marks.get(day))
        record["Total"] = display_number(sum(marks.values()))
        records.append(record)

    columns = ["Username", "Name"] + [c for c, _ in week_columns] + ["Total"]
    return pd.DataFrame(records, columns=columns)


def render_marks_sheet(df, file_format="csv"):
    output = io.BytesIO()
    if file_format == "excel":
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Marks")
    elif file_format == "csv":
        df.to_csv(output, index=False)
    else:
        raise ValidationError(f"Unsupported export format: {file_format!r}")
    output.seek(0)
    return output
