"""Utility modules for the Tarkov Search API.

- **cache_keys** -- namespaced, collision-free cache keys per request class.
- **errors** -- exception hierarchy rooted at TarkovSearchError; each error
  carries the HTTP status the middleware answers with.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **validators** -- username, search query and parameter validation.
"""

from src.utils.errors import (
    ConfigurationError,
    InputValidationError,
    NotFoundError,
    RateLimitError,
    TarkovSearchError,
    UnauthorizedError,
    UpstreamError,
)
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "InputValidationError",
    "NotFoundError",
    "RateLimitError",
    "TarkovSearchError",
    "UnauthorizedError",
    "UpstreamError",
    "configure_logging",
    "get_logger",
]
