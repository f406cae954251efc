from models import User
from services.assignment_service import get_assignment, get_lab_for
from services.user_service import normalize_batch


def resolve_batch_filter(override, assignment_batch):
    """Pick the batch a roster is filtered on, or None for every batch.

    An explicit override wins unless it is "All"; otherwise the assignment's
    own batch applies unless that is "All".
    """
    chosen = normalize_batch(override)
    if chosen:
        return chosen
    return normalize_batch(assignment_batch)


def resolve_students(assignment_id, section=None, batch=None, faculty_id=None):
    assignment = get_assignment(assignment_id, faculty_id=faculty_id)
    lab = get_lab_for(assignment)

    target_section = (str(section).strip().upper() if section else "") or assignment.section
    batch_filter = resolve_batch_filter(batch, assignment.batch)

    q = User.query.filter_by(
        role="student",
        semester=lab.semester,
        section=target_section,
        is_active=True
    )
    if batch_filter:
        # Students without a batch attend every batch's sessions
        q = q.filter((User.batch == batch_filter) | (User.batch.is_(None)))

    return q.order_by(User.username.asc()).all()
