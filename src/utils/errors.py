"""Custom exception hierarchy for the Tarkov Search API.

All application exceptions inherit from :class:`TarkovSearchError`, which
carries an optional ``provider_name`` so error handlers can identify which
upstream service (e.g. "tarkov_graphql", "ban_check") caused the failure,
and a ``status_code`` used by the error-handling middleware when the
exception crosses the HTTP boundary.

The hierarchy mirrors the request path:

    TarkovSearchError  (base -- catch-all for any application error)
    +-- InputValidationError  (malformed or missing request identity)
    +-- NotFoundError         (upstream affirmatively reported absence)
    +-- UpstreamError         (hard-path upstream failure)
    +-- UnauthorizedError     (admin credential mismatch)
    +-- RateLimitError        (client exceeded its request window)
    +-- ConfigurationError    (startup / invalid settings)

Soft-path upstream failures never surface as exceptions at the boundary;
the resilient fetch gateway converts them into degraded results.
"""


class TarkovSearchError(Exception):
    """Base exception for all Tarkov Search API errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which upstream service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[ban_check] Request timed out``.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Request errors
# ---------------------------------------------------------------------------

class InputValidationError(TarkovSearchError):
    """Raised when request input is missing or malformed.

    Raised before any cache or upstream interaction, so no state is mutated.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request parameters",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class NotFoundError(TarkovSearchError):
    """Raised when the upstream provider reports that the entity does not exist."""

    status_code = 404

    def __init__(
        self,
        message: str = "Resource not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UnauthorizedError(TarkovSearchError):
    """Raised when an admin operation is attempted with a wrong credential."""

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RateLimitError(TarkovSearchError):
    """Raised when a client exceeds its request ceiling for the current window."""

    status_code = 429

    def __init__(
        self,
        message: str = "Too many requests from this IP, please try again later.",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Upstream / configuration errors
# ---------------------------------------------------------------------------

class UpstreamError(TarkovSearchError):
    """Raised when an upstream call fails on a hard-path lookup.

    Covers timeouts, transport errors, non-success status codes, malformed
    payloads and explicit GraphQL error envelopes.  Never retried.
    """

    def __init__(
        self,
        message: str = "Upstream service request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(TarkovSearchError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
