"""Exception handlers for the stub discovery API.

Every error leaves the API as an ``ErrorResponse`` body. Domain errors pick
their status from ``STATUS_CODE_MAP``; anything unmapped is a client error.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront_discovery.domain.errors import DomainError, ValidationError
from storefront_discovery.entrypoints.http.error_responses import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

STATUS_CODE_MAP: dict[str, int] = {
    "VALIDATION_ERROR": 422,  # HTTP_422_UNPROCESSABLE_CONTENT
    "INVALID_REQUEST": status.HTTP_400_BAD_REQUEST,
    "NETWORK_ERROR": status.HTTP_502_BAD_GATEWAY,
    "SERVER_ERROR": status.HTTP_502_BAD_GATEWAY,
}


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _field_errors(exc: DomainError) -> list[ErrorDetail] | None:
    if not isinstance(exc, ValidationError) or not exc.errors:
        return None
    return [
        ErrorDetail(field=e["field"], message=e["message"], code=e.get("code"))
        for e in exc.errors
    ]


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error; 5xx codes are logged as errors, the rest at info."""
    status_code = STATUS_CODE_MAP.get(exc.error_code, status.HTTP_400_BAD_REQUEST)
    log = logger.error if status_code >= 500 else logger.info
    log(
        "Discovery request failed",
        extra={
            "error_code": exc.error_code,
            "reason": exc.message,
            "context": exc.context,
            "path": request.url.path,
        },
    )

    body = ErrorResponse(detail=exc.message, code=exc.error_code, errors=_field_errors(exc))
    return _error_response(status_code, body)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report query-string violations (``minPrice=abc``, ``limit=500``) by wire name."""
    errors = [
        ErrorDetail(
            # loc is ("query", "<alias>"); keep the parameter name only
            field=".".join(str(part) for part in error["loc"] if part not in ("query", "body")),
            message=error["msg"],
            code=error["type"],
        )
        for error in exc.errors()
    ]
    logger.info(
        "Rejected discovery query",
        extra={"fields": [e.field for e in errors], "path": request.url.path},
    )

    body = ErrorResponse(
        detail="Invalid request parameters", code="VALIDATION_ERROR", errors=errors
    )
    return _error_response(422, body)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Hide unexpected failures behind a generic 500, with the traceback in the log."""
    logger.error(
        "Unexpected error in discovery API",
        exc_info=exc,
        extra={"error_type": type(exc).__name__, "path": request.url.path},
    )

    body = ErrorResponse(detail="An unexpected error occurred", code="INTERNAL_ERROR")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
