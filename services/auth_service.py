from werkzeug.security import check_password_hash

from models.user import User


def authenticate_user(username: str, password: str):
    user = User.query.filter_by(username=username).first()

    if not user:
        return None

    if not check_password_hash(user.password_hash, password):
        return None

    if user.is_active is False:
        return None

    return user
