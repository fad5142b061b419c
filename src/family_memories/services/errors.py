"""Error taxonomy shared by services and the HTTP layer."""


class MemoriesError(Exception):
    """Base error with an HTTP status and a client-safe message."""

    status_code = 500

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationFailed(MemoriesError):
    """Input rejected before any remote call."""

    status_code = 400


class AuthenticationFailed(MemoriesError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class NotFound(MemoriesError):
    """Requested album or asset does not exist."""

    status_code = 404


class UpstreamFailed(MemoriesError):
    """Media store or geocoder failure."""

    status_code = 500


class Unavailable(MemoriesError):
    """Media store unreachable during a health check."""

    status_code = 503


def describe(exc: BaseException) -> str:
    """Return a short internal description of an exception."""
    return f"{type(exc).__name__}: {exc}".strip()
