"""Domain errors raised by the services and rendered by the API error handler."""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed or missing input, size limits, unresolvable room type name."""
    status_code = 400


class ForbiddenError(AppError):
    """The caller is not the owner of the resource."""
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Uniqueness violation reported by the database."""
    status_code = 409
