class ServiceError(Exception):
    """Business-rule rejection, rendered as ``{"error": message}`` with ``status_code``."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = 400


class Forbidden(ServiceError):
    status_code = 403


class NotFound(ServiceError):
    # also used for "exists but not yours" so existence never leaks
    status_code = 404


class Conflict(ServiceError):
    status_code = 409


class InternalError(ServiceError):
    status_code = 500
