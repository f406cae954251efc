"""Per-student, per-assignment mark ledger.

Each (student, assignment) pair owns at most one MarkLedger row, and each
ledger owns at most one WeekEntry per session date. Both are backed by unique
constraints, so submitting the same marks again updates in place.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from extensions import db
from models import MarkLedger, WeekEntry
from services.assignment_service import get_assignment
from services.exceptions import ConflictError, NotFoundError, PortalError, StorageError, ValidationError
from services.roster_service import resolve_students
from services.rubric import COLUMNS, COMPONENTS, compute_total, parse_mark_fields, rubric_view
from services.schedule_service import parse_day
from utils.dates import utcnow
from utils.validators import parse_id

logger = logging.getLogger(__name__)


class SubmissionResult:
    def __init__(self, assignment_id, session_date, week):
        self.assignment_id = assignment_id
        self.session_date = session_date
        self.week_number = week
        self.saved = []
        self.failed = []

    def fail(self, student_id, error):
        self.failed.append({
            "student_id": student_id,
            "error": error.message,
            "category": error.category
        })

    def to_dict(self):
        return {
            "assignment_id": self.assignment_id,
            "date": self.session_date.isoformat(),
            "week_number": self.week_number,
            "saved": len(self.saved),
            "saved_students": self.saved,
            "failed": self.failed
        }


def submit_marks(assignment_id, session_date, entries, entered_by,
                 section=None, batch=None, faculty_id=None):
    """Upsert one session's marks for a batch of students.

    Every student is committed on its own, so one bad row is reported in
    ``failed`` without discarding the others. Nothing is retried.
    """
    assignment = get_assignment(assignment_id, faculty_id=faculty_id)
    day = parse_day(session_date)
    week = assignment.week_of(day)
    if week is None:
        raise ValidationError(f"{day.isoformat()} is not a scheduled session for this lab")
    if not entries or not isinstance(entries, list):
        raise ValidationError("No mark entries provided")

    assignment_key = assignment.assignment_id
    roster_ids = {s.user_id for s in resolve_students(assignment_key, section, batch)}

    result = SubmissionResult(assignment_key, day, week)
    for entry in entries:
        entry = entry if isinstance(entry, dict) else {}
        student_id = entry.get("student_id")
        try:
            student_id = parse_id(student_id, "student_id")
            if student_id not in roster_ids:
                raise NotFoundError("Student is not on the roster for this lab")
            fields = parse_mark_fields(entry)
            _upsert_week(student_id, assignment_key, day, fields, entered_by)
            db.session.commit()
        except PortalError as exc:
            db.session.rollback()
            result.fail(student_id, exc)
        except IntegrityError:
            # Lost a race with another submission for the same student and date
            db.session.rollback()
            result.fail(student_id, ConflictError("Marks changed concurrently; reload and resubmit"))
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Storage failure saving marks for student %s", student_id)
            result.fail(student_id, StorageError("Could not save marks"))
        else:
            result.saved.append(student_id)

    logger.info(
        "Week %d (%s) of assignment %s: saved %d, rejected %d",
        week, day.isoformat(), assignment_key, len(result.saved), len(result.failed)
    )
    for failure in result.failed:
        logger.warning("Marks rejected for student %s: %s", failure["student_id"], failure["error"])
    return result


def _upsert_week(student_id, assignment_id, day, fields, entered_by):
    ledger = (
        MarkLedger.query
        .filter_by(student_id=student_id, assignment_id=assignment_id)
        .with_for_update()
        .first()
    )
    if ledger is None:
        ledger = MarkLedger(
            student_id=student_id,
            assignment_id=assignment_id,
            entered_by=entered_by
        )
        db.session.add(ledger)

    week = next((w for w in ledger.weeks if w.session_date == day), None)
    if week is None:
        week = WeekEntry(session_date=day, entered_by=entered_by)
        ledger.weeks.append(week)

    supplied = [key for key in COMPONENTS if key in fields]
    for key in supplied:
        setattr(week, COLUMNS[key], fields[key])

    if "T" in fields:
        week.total = fields["T"]
    elif supplied:
        week.total = compute_total({key: getattr(week, COLUMNS[key]) for key in COMPONENTS})

    now = utcnow()
    week.entered_by = entered_by
    week.updated_at = now
    ledger.updated_at = now
    return week


def week_view(week, assignment):
    row = {
        "date": week.session_date.isoformat(),
        "week_number": assignment.week_of(week.session_date),
        "entered_by": week.entered_by,
        "updated_at": week.updated_at.isoformat() if week.updated_at else None
    }
    row.update(rubric_view(week.fields()))
    return row


def get_history(assignment_id, faculty_id=None):
    """Every week entry of an assignment as flat rows, oldest session first."""
    assignment = get_assignment(assignment_id, faculty_id=faculty_id)

    rows = []
    for ledger in MarkLedger.query.filter_by(assignment_id=assignment.assignment_id).all():
        student = ledger.student
        for week in ledger.weeks:
            row = {
                "student_id": ledger.student_id,
                "student": {
                    "name": student.name if student else None,
                    "username": student.username if student else None
                }
            }
            row.update(week_view(week, assignment))
            rows.append(row)

    rows.sort(key=lambda r: (r["date"], r["student"]["username"] or ""))
    return rows


def get_ledger(student_id, assignment_id):
    """One student's week entries for one assignment, oldest first."""
    assignment = get_assignment(assignment_id)
    ledger = MarkLedger.query.filter_by(
        student_id=parse_id(student_id, "student_id"),
        assignment_id=assignment.assignment_id
    ).first()
    if ledger is None:
        return []
    return [week_view(w, assignment) for w in ledger.weeks]
