import logging

from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from services.exceptions import StorageError

logger = logging.getLogger(__name__)


def commit(action):
    """Commit the session or roll back and raise StorageError. Never retries."""
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Storage failure while trying to %s", action)
        raise StorageError(f"Could not {action}") from exc
