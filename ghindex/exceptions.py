"""ghindex exception classes."""


class GHIndexError(Exception):
    """Base exception for all ghindex errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(GHIndexError):
    """Raised when client configuration is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class PreconditionError(GHIndexError):
    """Raised when a credential-gated operation is called without a token."""

    def __init__(self, message: str) -> None:
        super().__init__("CREDENTIAL_REQUIRED", message)


class ValidationError(GHIndexError):
    """Raised on invalid arguments (granularity, metric, item type...)."""

    def __init__(self, message: str) -> None:
        super().__init__("VALIDATION_ERROR", message)


class UpstreamError(GHIndexError):
    """
    Raised when the GitHub API answers with a non-success status, reports
    GraphQL errors, or cannot be reached at all.

    ``status`` is None when no HTTP response was received.
    """

    def __init__(
        self,
        status: int | None,
        message: str,
        body: str | None = None,
        code: str = "UPSTREAM_ERROR",
    ) -> None:
        super().__init__(code, message)
        self.status = status
        self.body = body


class RateLimitedError(UpstreamError):
    """Raised when GitHub reports the rate limit as exhausted."""

    def __init__(
        self,
        status: int,
        message: str,
        reset_at: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(status, message, body, code="RATE_LIMITED")
        self.reset_at = reset_at
