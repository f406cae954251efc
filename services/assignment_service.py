import logging

from extensions import db
from models import Lab, LabAssignment, LabSession, User
from services.exceptions import NotFoundError, ValidationError
from services.lab_service import get_lab
from services.schedule_service import generate_dates, normalize_weekday, parse_day
from services.storage import commit
from services.user_service import normalize_batch
from utils.validators import parse_id, required

logger = logging.getLogger(__name__)

SEMESTER_TYPES = ("Odd", "Even")


def create_assignment(lab_id, faculty_id, section, academic_year, semester_type,
                      start_date, end_date, day_of_week, batch=None):
    """Bind a lab to a faculty member for one section and materialise its schedule.

    The generated session dates are written once here and define week numbering
    for the lifetime of the assignment.
    """
    lab_id = parse_id(lab_id, "lab_id")
    faculty_id = parse_id(faculty_id, "faculty_id")
    section = required(section, "section").upper()
    academic_year = required(academic_year, "academic_year")
    semester_type = required(semester_type, "semester_type").capitalize()
    if semester_type not in SEMESTER_TYPES:
        raise ValidationError(f"Invalid semester_type: {semester_type!r}")
    batch = normalize_batch(batch, allow_all=True)
    day_of_week = normalize_weekday(day_of_week)
    start = parse_day(start_date, "start_date")
    end = parse_day(end_date, "end_date")

    lab = get_lab(lab_id)
    faculty = db.session.get(User, faculty_id)
    if not faculty or faculty.role != "faculty":
        raise NotFoundError("Faculty not found")

    dates = generate_dates(start, end, day_of_week)

    assignment = LabAssignment(
        lab_id=lab.lab_id,
        faculty_id=faculty.user_id,
        section=section,
        batch=batch,
        academic_year=academic_year,
        semester_type=semester_type,
        start_date=start,
        end_date=end,
        day_of_week=day_of_week
    )
    assignment.sessions = [
        LabSession(week_number=number, session_date=day)
        for number, day in enumerate(dates, start=1)
    ]
    db.session.add(assignment)
    commit("create lab assignment")

    logger.info(
        "Assigned lab %s to %s for section %s (%s): %d sessions",
        lab.lab_code, faculty.username, section, batch, len(dates)
    )
    return assignment


def get_assignment(assignment_id, faculty_id=None):
    """Fetch an assignment; with faculty_id, only one that faculty owns."""
    assignment = db.session.get(LabAssignment, parse_id(assignment_id, "assignment_id"))
    if not assignment:
        raise NotFoundError("Lab assignment not found")
    if faculty_id is not None and assignment.faculty_id != faculty_id:
        raise NotFoundError("Lab assignment not found")
    return assignment


def get_lab_for(assignment):
    lab = db.session.get(Lab, assignment.lab_id)
    if not lab:
        raise NotFoundError(f"Lab {assignment.lab_id} referenced by assignment not found")
    return lab


def list_assignments():
    assignments = LabAssignment.query.order_by(LabAssignment.assignment_id.asc()).all()
    return [describe_assignment(a) for a in assignments]


def list_assignments_for_faculty(faculty_id):
    assignments = (
        LabAssignment.query
        .filter_by(faculty_id=faculty_id)
        .order_by(LabAssignment.assignment_id.asc())
        .all()
    )
    return [describe_assignment(a) for a in assignments]


def describe_assignment(assignment):
    # Lab and faculty are resolved here, at read time
    lab = db.session.get(Lab, assignment.lab_id)
    faculty = db.session.get(User, assignment.faculty_id)
    dates = assignment.generated_dates

    return {
        "assignment_id": assignment.assignment_id,
        "lab": lab.to_dict() if lab else None,
        "faculty": {
            "user_id": faculty.user_id,
            "name": faculty.name,
            "username": faculty.username
        } if faculty else None,
        "section": assignment.section,
        "batch": assignment.batch,
        "academic_year": assignment.academic_year,
        "semester_type": assignment.semester_type,
        "start_date": assignment.start_date.isoformat(),
        "end_date": assignment.end_date.isoformat(),
        "day_of_week": assignment.day_of_week,
        "generated_dates": [d.isoformat() for d in dates],
        "weeks": [
            {"week_number": number, "date": d.isoformat()}
            for number, d in assignment.weeks
        ]
    }
