"""Error Handlers — map every failure to the {"error": {...}} JSON envelope.

Invariants:
    - PokedexError → its own http_status and to_response() body
    - RequestValidationError (malformed JSON, wrong field types, non-int path) → 400,
      same status as a domain BadRequest so clients see one "invalid input" code
    - Anything else → 500 INTERNAL_ERROR, never leaking the exception text

Design Decisions:
    - Three handlers: use-case errors, pydantic shape errors, catch-all
    - Extracted from main.py
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pokedex.core.errors import ErrorCategory, ErrorSeverity, PokedexError

logger = logging.getLogger(__name__)


def error_body(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **extra,
) -> dict:
    """Envelope shared by handlers that have no PokedexError to serialize."""
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }


async def _on_pokedex_error(request: Request, exc: PokedexError) -> JSONResponse:
    # 4xx are the caller's problem: info, not error
    level = logging.ERROR if exc.http_status >= 500 else logging.INFO
    logger.log(
        level, f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "pokemon_number": exc.context.pokemon_number,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _on_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.info(
        f"Rejected malformed request on {request.url.path}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def _on_unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=True, extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the global error handlers on the FastAPI app."""
    app.add_exception_handler(PokedexError, _on_pokedex_error)
    app.add_exception_handler(RequestValidationError, _on_validation_error)
    app.add_exception_handler(Exception, _on_unhandled)
