import logging

from extensions import db
from models import Lab
from services.exceptions import NotFoundError, ValidationError
from services.storage import commit
from utils.validators import parse_semester, required

logger = logging.getLogger(__name__)


def create_lab(lab_code, lab_name, semester, department):
    lab = Lab(
        lab_code=required(lab_code, "lab_code").upper(),
        lab_name=required(lab_name, "lab_name"),
        semester=parse_semester(semester),
        department=required(department, "department")
    )
    db.session.add(lab)
    commit("create lab")
    logger.info("Created lab %s (semester %s)", lab.lab_code, lab.semester)
    return lab


def bulk_create_labs(rows):
    created, failed = [], []
    for index, row in enumerate(rows or []):
        row = row or {}
        try:
            created.append(create_lab(
                lab_code=row.get("lab_code"),
                lab_name=row.get("lab_name"),
                semester=row.get("semester"),
                department=row.get("department"),
            ))
        except ValidationError as exc:
            failed.append({"row": index, "lab_code": row.get("lab_code"), "error": exc.message})
    return created, failed


def list_labs(semester=None):
    q = Lab.query
    if semester not in (None, ""):
        q = q.filter_by(semester=parse_semester(semester))
    return q.order_by(Lab.semester.asc(), Lab.lab_code.asc()).all()


def get_lab(lab_id):
    lab = db.session.get(Lab, lab_id)
    if not lab:
        raise NotFoundError("Lab not found")
    return lab
