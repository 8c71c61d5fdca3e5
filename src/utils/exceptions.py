"""
Domain Exceptions
Errors raised by the service layer and translated to HTTP responses in src.main
"""

from fastapi import status


class ExpenseSystemError(Exception):
    """Base class for errors with a stable, user-facing message"""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ForbiddenError(ExpenseSystemError):
    """Caller lacks the required membership or role"""
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class NotFoundError(ExpenseSystemError):
    """Referenced entity does not exist or is outside the caller's organization"""
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ValidationFailedError(ExpenseSystemError):
    """Malformed input that passed schema parsing"""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation"


class InvalidStateError(ExpenseSystemError):
    """State-machine precondition violated"""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_state"


class ConflictError(ExpenseSystemError):
    """Uniqueness violation (duplicate member, duplicate category name)"""
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
