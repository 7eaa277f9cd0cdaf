"""RFC 7807 Problem Details exception handlers for FastAPI.

Translates domain exceptions into standardized HTTP responses following
RFC 7807 Problem Details for HTTP APIs. All handlers return responses with
Content-Type: application/problem+json.

A missing cart manager, price system or checkout manager is a server-side
configuration problem, not a client error, so ``UnsupportedError`` and
``InvalidConfigError`` map to 500 while still reporting the offending keys.

Usage:
    from vitrine.infra.fastapi.error_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from vitrine.foundation.domain.exceptions import (
    ConflictError,
    DomainError,
    InvalidConfigError,
    NotFoundError,
    UnsupportedError,
    ValidationError,
)

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response model.

    Extension fields:
    - error_code: Machine-readable error code for client handling
    - context: Structured debugging information
    """

    type: str = Field(..., description="URI reference identifying problem type")
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., ge=400, le=599, description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation")
    instance: str | None = Field(
        default=None,
        description="URI reference to specific occurrence (request path)",
    )
    error_code: str | None = Field(default=None, description="Machine-readable error code")
    context: dict[str, Any] | None = Field(
        default=None,
        description="Structured debugging information",
    )


_SENSITIVE_PATTERNS = [
    (
        re.compile(r"postgresql(\+\w+)?://[^@]*@[^/\s]*"),
        "postgresql://[REDACTED]@[REDACTED]",
    ),
    (
        re.compile(r"password\s*=\s*['\"]?[^'\"\s]+['\"]?", re.IGNORECASE),
        "password=[REDACTED]",
    ),
]

_SENSITIVE_KEYS = frozenset({"password", "secret", "token", "api_key", "credential"})


def _create_problem_response(problem: ProblemDetail) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        media_type=PROBLEM_MEDIA_TYPE,
    )


def _sanitize_context(context: dict[str, Any] | None) -> dict[str, Any] | None:
    """Drop sensitive keys and make values JSON-safe."""
    if not context:
        return None

    sanitized = {
        key: _sanitize_value(value)
        for key, value in context.items()
        if key.lower() not in _SENSITIVE_KEYS
    }
    return sanitized or None


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, str):
        result = value
        for pattern, replacement in _SENSITIVE_PATTERNS:
            result = pattern.sub(replacement, result)
        return result
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return str(value)


def _problem(
    request: Request,
    exc: DomainError,
    *,
    slug: str,
    title: str,
    status: int,
) -> JSONResponse:
    problem = ProblemDetail(
        type=f"/errors/{slug}",
        title=title,
        status=status,
        detail=_sanitize_value(str(exc)),
        instance=str(request.url.path),
        error_code=exc.error_code,
        context=_sanitize_context(exc.context),
    )
    return _create_problem_response(problem)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Translate NotFoundError to 404."""
    return _problem(request, exc, slug="not-found", title="Resource Not Found", status=404)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Translate ValidationError to 422."""
    return _problem(request, exc, slug="validation-error", title="Validation Error", status=422)


async def conflict_error_handler(request: Request, exc: ConflictError) -> JSONResponse:
    """Translate ConflictError to 409."""
    return _problem(request, exc, slug="conflict", title="Conflict", status=409)


async def unsupported_error_handler(request: Request, exc: UnsupportedError) -> JSONResponse:
    """Translate UnsupportedError (service not configured) to 500."""
    logger.error(
        "commerce_service_not_configured",
        extra={"path": str(request.url.path), "error_context": exc.context},
    )
    return _problem(
        request, exc, slug="not-configured", title="Service Not Configured", status=500
    )


async def invalid_config_handler(request: Request, exc: InvalidConfigError) -> JSONResponse:
    """Translate InvalidConfigError to 500."""
    logger.error(
        "framework_config_invalid",
        extra={"path": str(request.url.path), "error_context": exc.context},
    )
    return _problem(
        request, exc, slug="invalid-config", title="Invalid Configuration", status=500
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate generic DomainError to 400 Bad Request (fallback)."""
    return _problem(request, exc, slug="domain-error", title="Bad Request", status=400)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Translate FastAPI's RequestValidationError to 422."""
    errors = [
        {
            "loc": list(error.get("loc", [])),
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    problem = ProblemDetail(
        type="/errors/request-validation-error",
        title="Request Validation Error",
        status=422,
        detail="Request validation failed",
        instance=str(request.url.path),
        error_code="REQUEST_VALIDATION_ERROR",
        context={"errors": errors},
    )
    return _create_problem_response(problem)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler: log full details, return a sanitized 500."""
    logger.exception(
        "unhandled_exception",
        extra={
            "path": str(request.url.path),
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
    )

    if getattr(request.app, "debug", False):
        detail = f"{type(exc).__name__}: {exc}"
        context: dict[str, Any] | None = {"exception_type": type(exc).__name__}
    else:
        detail = "An internal error occurred."
        context = None

    problem = ProblemDetail(
        type="/errors/internal-error",
        title="Internal Server Error",
        status=500,
        detail=detail,
        instance=str(request.url.path),
        error_code="INTERNAL_ERROR",
        context=context,
    )
    return _create_problem_response(problem)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on a FastAPI application.

    Handlers, most specific first:
    1. NotFoundError -> 404
    2. ValidationError -> 422
    3. ConflictError -> 409
    4. UnsupportedError -> 500
    5. InvalidConfigError -> 500
    6. DomainError -> 400 (base class fallback)
    7. RequestValidationError -> 422 (Pydantic)
    8. Exception -> 500 (catch-all)
    """
    # Starlette's handler typing is stricter than the handlers need
    app.add_exception_handler(NotFoundError, not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ConflictError, conflict_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(UnsupportedError, unsupported_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(InvalidConfigError, invalid_config_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        request_validation_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
