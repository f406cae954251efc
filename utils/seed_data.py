import logging

from models.user import User
from services.user_service import create_user

logger = logging.getLogger(__name__)


def seed_admin(username, password, name="Administrator", department=None):
    """Create the first admin account unless that username already exists."""
    existing = User.query.filter_by(username=username).first()
    if existing:
        logger.info("Admin %s already present", username)
        return existing, False

    user = create_user(
        name=name,
        username=username,
        password=password,
        role="admin",
        department=department
    )
    return user, True
