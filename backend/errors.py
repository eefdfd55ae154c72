# Tagged error types shared by repositories, services and the HTTP layer
from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    INVALID_INPUT = "invalid_input"
    INTERNAL = "internal"


class SafetyNetError(Exception):
    """Base error carrying an explicit kind. The API maps kind -> HTTP status."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(SafetyNetError):
    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(SafetyNetError):
    kind = ErrorKind.ALREADY_EXISTS


class InvalidInputError(SafetyNetError):
    kind = ErrorKind.INVALID_INPUT


STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.INTERNAL: 500,
}
