from functools import wraps

from flask_login import current_user

from services.exceptions import AuthenticationError, AuthorizationError


def role_required(*roles):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            # 1. Check if user is logged in
            if not current_user.is_authenticated:
                raise AuthenticationError("Login required")

            # 2. Check if user has one of the allowed roles
            if current_user.role not in roles:
                raise AuthorizationError("Access Denied: You do not have the required role.")

            return func(*args, **kwargs)
        return wrapper
    return decorator
