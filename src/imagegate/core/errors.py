"""Error taxonomy for the gateway.

Every error carries an HTTP ``status_code`` and a ``public_message``.  The
public message is what the API layer returns to callers; the exception's
``str()`` is the detailed form that only goes to the server log.
"""

from __future__ import annotations

GENERIC_FAILURE = "Request failed. Please try again."


class GatewayError(Exception):
    """Base class for all gateway errors."""

    status_code: int = 500

    def __init__(self, message: str, *, public_message: str | None = None) -> None:
        super().__init__(message)
        self.public_message = public_message or GENERIC_FAILURE


class ValidationError(GatewayError):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message, public_message=message)


class ConfigurationError(GatewayError):
    """A required setting (usually a provider credential) is missing."""


class UpstreamFailure(GatewayError):
    """The upstream provider returned a non-2xx status or could not be reached.

    Attributes:
        upstream_status: HTTP status returned by the provider, or ``None`` for
            transport failures.
        body: Raw response text.  Logged, never returned to callers.
    """

    def __init__(
        self,
        message: str,
        *,
        upstream_status: int | None = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status
        self.body = body


class MalformedResponseError(UpstreamFailure):
    """The provider answered 2xx but the expected field path was missing."""


class AllProvidersFailedError(UpstreamFailure):
    """Every configured credential was tried and failed.

    ``last_failure`` is the failure observed on the final attempt; its
    upstream status is copied onto this error.
    """

    def __init__(self, attempts: int, last_failure: UpstreamFailure) -> None:
        super().__init__(
            f"All {attempts} provider attempt(s) failed; last error: {last_failure}",
            upstream_status=last_failure.upstream_status,
            body=last_failure.body,
        )
        self.attempts = attempts
        self.last_failure = last_failure
