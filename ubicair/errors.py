"""Error types raised by the backend client and form validation."""


class ApiError(RuntimeError):
    """Base class for anything that goes wrong talking to the backend."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(ApiError):
    """The backend could not be reached (DNS, refused connection, timeout)."""


class HttpError(ApiError):
    """The backend answered with a non-2xx status."""


class MalformedResponseError(ApiError):
    """The body was not the JSON envelope we expect."""


class NotAuthenticatedError(ApiError):
    """An authenticated endpoint was called without an active session."""


class ValidationError(ValueError):
    """Client-side form validation failed. ``errors`` maps field -> message."""

    def __init__(self, errors):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = dict(errors)
