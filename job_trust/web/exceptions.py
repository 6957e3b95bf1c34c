"""Exception handlers mapping trust errors to JSON responses."""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from job_trust.errors import TrustError

logger = logging.getLogger("job_trust.web")


def _error_response(status_code: int, message, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": message,
            "type": error_type,
        },
    )


async def trust_error_handler(request: Request, exc: TrustError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Error in %s: %s", request.url.path, exc, exc_info=True)
    else:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return _error_response(exc.status_code, str(exc), exc.__class__.__name__)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", []) if part != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg"))
    return _error_response(400, "; ".join(messages) or "Invalid request", "ValidationError")


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error in %s", request.url.path)
    return _error_response(500, "Internal server error", "InternalError")
