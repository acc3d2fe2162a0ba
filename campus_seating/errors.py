"""
Error taxonomy shared by the service layer and the HTTP API.

Every error carries a safe, user-facing message and the HTTP status the API
renders it with. No internal identifiers or stack traces go into messages.
"""
from campus_seating.constants import (
    INVALID_CREDENTIALS_MESSAGE,
    UNPAID_FEE_MESSAGE,
)


class SeatingError(Exception):
    statusCode = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SeatingError):
    """Missing or malformed request fields."""
    statusCode = 400


class AuthError(SeatingError):
    statusCode = 401


class InvalidCredentials(AuthError):
    statusCode = 401

    def __init__(self, message: str = INVALID_CREDENTIALS_MESSAGE):
        super().__init__(message)


class UnpaidFeeError(AuthError):
    """Credentials matched but the student has not paid the bus fee."""
    statusCode = 403

    def __init__(self, message: str = UNPAID_FEE_MESSAGE):
        super().__init__(message)


class InvalidAttendanceError(SeatingError):
    statusCode = 400


class RouteNotFoundError(SeatingError):
    statusCode = 404

    def __init__(self, message: str = "Route not found"):
        super().__init__(message)


class RouteCapacityError(SeatingError):
    statusCode = 409
