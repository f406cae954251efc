class PortalError(Exception):
    """Base class for every failure an operation reports to its caller."""

    status_code = 500
    category = "error"

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        payload = {"error": self.message, "category": self.category}
        if self.details:
            payload.update(self.details)
        return payload


class ValidationError(PortalError):
    status_code = 400
    category = "validation"


class InvalidRangeError(ValidationError):
    pass


class InvalidWeekdayError(ValidationError):
    pass


class NotFoundError(PortalError):
    status_code = 404
    category = "not_found"


class ConflictError(PortalError):
    status_code = 409
    category = "conflict"


class AuthorizationError(PortalError):
    status_code = 403
    category = "authorization"


class StorageError(PortalError):
    status_code = 500
    category = "storage"


class AuthenticationError(PortalError):
    status_code = 401
    category = "authentication"
