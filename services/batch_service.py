"""Offline maintenance: split every (semester, section) roster into two batches.

Run by hand through ``flask assign-batches``; never on the request path.
Running it again over the same students gives the same assignment.
"""
import logging

from extensions import db
from models import User
from services.exceptions import ValidationError
from services.storage import commit
from services.user_service import BATCHES

logger = logging.getLogger(__name__)


def roster_sort_key(student):
    # Numeric usernames (register numbers) sort numerically, others by name
    username = str(student.username or "")
    if username.isdigit():
        return (0, int(username), "", "")
    return (1, 0, student.name or "", username)


def split_counts(size, give_extra_to="Batch-2"):
    if give_extra_to not in BATCHES:
        raise ValidationError(f"Invalid batch: {give_extra_to!r}")
    first = size // 2
    if size % 2 == 1 and give_extra_to == "Batch-1":
        first += 1
    return first, size - first


def split_batches(give_extra_to="Batch-2"):
    groups = (
        db.session.query(User.semester, User.section)
        .filter(User.role == "student")
        .distinct()
        .order_by(User.semester.asc(), User.section.asc())
        .all()
    )

    summary = []
    for semester, section in groups:
        students = User.query.filter_by(role="student", semester=semester, section=section).all()
        if not students:
            continue
        students.sort(key=roster_sort_key)

        first, second = split_counts(len(students), give_extra_to)
        for index, student in enumerate(students):
            student.batch = "Batch-1" if index < first else "Batch-2"

        summary.append({
            "semester": semester,
            "section": section,
            "total": len(students),
            "Batch-1": first,
            "Batch-2": second
        })
        logger.info(
            "Semester %s section %s: %d students, Batch-1 %d, Batch-2 %d",
            semester, section, len(students), first, second
        )

    commit("assign batches")
    return summary
