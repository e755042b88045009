"""
Service-level error taxonomy.

Services raise these; ``campushub.main`` turns them into ``{message}`` JSON
responses with the matching HTTP status. The wire format stays
message-based, ``ErrorKind`` is for callers that want to branch on it.
"""

import enum


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    FORBIDDEN = "forbidden"
    STORE_FAILURE = "store_failure"


HTTP_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.STORE_FAILURE: 500,
}


class ServiceError(Exception):
    kind: ErrorKind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]


class NotFound(ServiceError):
    kind = ErrorKind.NOT_FOUND


class BadRequest(ServiceError):
    kind = ErrorKind.BAD_REQUEST


class Forbidden(ServiceError):
    kind = ErrorKind.FORBIDDEN


class StoreFailure(ServiceError):
    """The database raised; the driver's message is forwarded as-is."""

    kind = ErrorKind.STORE_FAILURE
