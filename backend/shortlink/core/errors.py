# shortlink/core/errors.py
"""
Error taxonomy for the identity & alias authorization layer.

Validation and authorization failures are raised as typed errors so the
HTTP layer can translate them into user-facing responses. Storage failures
wrap the underlying ORM error (available as ``__cause__``).
"""


class ShortlinkError(Exception):
    """Base error. ``code`` is a stable machine-readable identifier."""

    code = "ERROR"
    status_code = 400
    default_message = "request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(ShortlinkError):
    """Bad credentials, missing session or stale session."""

    code = "UNAUTHORIZED"
    status_code = 401
    default_message = "unauthorized"


class Forbidden(ShortlinkError):
    """Authenticated, but not allowed to act on the target."""

    code = "FORBIDDEN"
    status_code = 403
    default_message = "forbidden"


class Conflict(ShortlinkError):
    code = "CONFLICT"
    status_code = 409
    default_message = "record already exists"


class InvalidName(ShortlinkError):
    code = "INVALID_NAME"
    status_code = 400
    default_message = "invalid name"


class InvalidTarget(ShortlinkError):
    code = "INVALID_TARGET"
    status_code = 400
    default_message = "not a valid url"


class NotFound(ShortlinkError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "not found"


class StorageFailure(ShortlinkError):
    """The persistence layer failed. Never retried here."""

    code = "STORAGE_FAILURE"
    status_code = 500
    default_message = "server error"


class EncodingError(ShortlinkError):
    """Password hashing failed internally."""

    code = "ENCODING_ERROR"
    status_code = 500
    default_message = "server error"
