import logging

from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from extensions import db
from models import LabAssignment, MarkLedger, User
from models.user import ROLES
from services.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from services.storage import commit
from utils.validators import parse_id, parse_semester, required

logger = logging.getLogger(__name__)

BATCHES = ("Batch-1", "Batch-2")


def normalize_batch(batch, allow_all=False):
    """Map user input onto Batch-1 / Batch-2, or the "all batches" value.

    Students store None for all batches; assignments store "All".
    """
    value = str(batch).strip() if batch is not None else ""
    if value == "" or value.lower() == "all":
        return "All" if allow_all else None
    for name in BATCHES:
        if value.lower() == name.lower():
            return name
    raise ValidationError(f"Invalid batch: {batch!r}")


def create_user(name, username, password, role, department=None,
                semester=None, section=None, batch=None):
    name = required(name, "name")
    username = required(username, "username")
    password = required(password, "password")
    role = required(role, "role").lower()
    if role not in ROLES:
        raise ValidationError(f"Invalid role: {role!r}")

    if role == "student":
        semester = parse_semester(semester)
        section = required(section, "section").upper()
        batch = normalize_batch(batch)
    else:
        semester = parse_semester(semester) if semester not in (None, "") else None
        section = str(section).strip().upper() if section else None
        batch = None

    if User.query.filter_by(username=username).first():
        raise ConflictError("Username already exists")

    user = User(
        name=name,
        username=username,
        password_hash=generate_password_hash(password),
        role=role,
        department=department,
        semester=semester,
        section=section,
        batch=batch,
        is_active=True
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise ConflictError("Username already exists") from exc
    logger.info("Created %s user %s", role, username)
    return user


def bulk_create_users(rows):
    """Create each row independently; a bad row does not stop the rest."""
    created, failed = [], []
    for index, row in enumerate(rows or []):
        row = row or {}
        try:
            user = create_user(
                name=row.get("name"),
                username=row.get("username"),
                password=row.get("password"),
                role=row.get("role"),
                department=row.get("department"),
                semester=row.get("semester"),
                section=row.get("section"),
                batch=row.get("batch"),
            )
            created.append(user)
        except (ValidationError, ConflictError) as exc:
            failed.append({"row": index, "username": row.get("username"), "error": exc.message})
    if failed:
        logger.warning("Bulk user import: %d created, %d rejected", len(created), len(failed))
    return created, failed


def list_users(role=None):
    q = User.query
    if role:
        q = q.filter_by(role=role)
    return q.order_by(User.role.asc(), User.username.asc()).all()


def get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def get_profile(user_id):
    return get_user(user_id).to_dict()


def delete_user(user_id, acting_user_id):
    if parse_id(user_id, "user_id") == parse_id(acting_user_id, "user_id"):
        raise ConflictError("Cannot delete your own account")

    user = get_user(user_id)

    if LabAssignment.query.filter_by(faculty_id=user.user_id).first():
        raise ConflictError("User still has lab assignments")
    if MarkLedger.query.filter(
        (MarkLedger.student_id == user.user_id) | (MarkLedger.entered_by == user.user_id)
    ).first():
        raise ConflictError("User still has mark records")

    username = user.username
    db.session.delete(user)
    commit("delete user")
    logger.info("Deleted user %s", username)


def update_password(user_id, current_password, new_password):
    user = get_user(user_id)
    if not current_password or not check_password_hash(user.password_hash, current_password):
        raise AuthorizationError("Current password is incorrect")
    new_password = required(new_password, "new_password")

    user.password_hash = generate_password_hash(new_password)
    commit("update password")
    logger.info("Password updated for %s", user.username)
