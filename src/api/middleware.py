"""API middleware -- CORS, request logging, rate limiting, and error handling.

Starlette middleware is a stack (last added, first executed).  In
``create_app`` the order of ``add_middleware`` calls yields:

    Client → CORS → RequestLogging → RateLimit → ErrorHandling → route

so every request, including rejected ones, is logged with its final
status, and rate limiting runs before any cache or upstream work.

Framework-level errors (unknown paths, query parameter validation) are
converted into the same ``{success: false, error}`` envelope by the
handlers registered in :func:`configure_exception_handlers`.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from src.api.schemas import ErrorResponse
from src.services.rate_limiter import RateDecision, SlidingWindowRateLimiter
from src.utils.errors import RateLimitError, TarkovSearchError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def _error_body(message: str, **extra: str) -> dict:
    return ErrorResponse(error=message, **extra).model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Explicit list of allowed origins.  Defaults to ``["*"]``.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Rate Limiting
# ---------------------------------------------------------------------------


def client_identity(request: Request) -> str:
    """Rate-limit identity of the caller: its remote address."""
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Admit or reject each request through a :class:`SlidingWindowRateLimiter`.

    Admitted responses carry ``RateLimit-Limit``, ``RateLimit-Remaining``
    and ``RateLimit-Reset`` headers; rejections are answered with 429 and a
    ``Retry-After`` header without reaching the route.
    """

    def __init__(self, app: ASGIApp, limiter: SlidingWindowRateLimiter) -> None:
        super().__init__(app)
        self._limiter = limiter

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        decision = self._limiter.check(client_identity(request))
        if not decision.allowed:
            exc = RateLimitError()
            response: Response = JSONResponse(
                status_code=exc.status_code,
                content=_error_body(exc.message),
            )
            response.headers["Retry-After"] = str(decision.reset_in_seconds)
        else:
            response = await call_next(request)
        _apply_rate_headers(response, decision)
        return response


def _apply_rate_headers(response: Response, decision: RateDecision) -> None:
    response.headers["RateLimit-Limit"] = str(decision.limit)
    response.headers["RateLimit-Remaining"] = str(decision.remaining)
    response.headers["RateLimit-Reset"] = str(decision.reset_in_seconds)


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Convert raised errors into the JSON error envelope.

    ``TarkovSearchError`` subclasses keep their message and map to their
    ``status_code``.  Anything else becomes a 500 whose message is only
    exposed when ``expose_details`` is set (development).  Stack traces are
    logged server-side only.
    """

    def __init__(self, app: ASGIApp, expose_details: bool = False) -> None:
        super().__init__(app)
        self._expose_details = expose_details

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except TarkovSearchError as exc:
            log = _logger.error if exc.status_code >= 500 else _logger.info
            log(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                status=exc.status_code,
                path=str(request.url.path),
            )
            return JSONResponse(
                status_code=exc.status_code,
                content=_error_body(exc.message),
            )
        except Exception as exc:
            _logger.exception(
                "unhandled_error",
                error_type=type(exc).__name__,
                path=str(request.url.path),
            )
            message = str(exc) if self._expose_details else "Internal server error"
            return JSONResponse(status_code=500, content=_error_body(message))


# ---------------------------------------------------------------------------
# Framework exception handlers
# ---------------------------------------------------------------------------


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        content = _error_body(
            "Endpoint not found",
            path=str(request.url.path),
            method=request.method,
        )
    else:
        content = _error_body(str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
        message = f"Invalid parameter '{field}': {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request parameters"
    return JSONResponse(status_code=400, content=_error_body(message))


def configure_exception_handlers(app: FastAPI) -> None:
    """Render unknown paths and parameter validation errors as envelopes."""
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
