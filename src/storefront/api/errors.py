"""Map storefront error kinds onto HTTP responses in the API envelope."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.shared.exceptions import (
    EmptyCartError,
    InsufficientStockError,
    InvalidTransitionError,
    error_message,
)

logger = structlog.get_logger(__name__)

# Handlers are looked up along the exception MRO
_STATUS_BY_ERROR = {
    InsufficientStockError: 409,
    InvalidTransitionError: 409,
    EmptyCartError: 400,
    ObjectNotFoundError: 404,
    ValidationError: 400,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _handler_for(status_code: int):
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        message = error_message(exc)
        logger.info(
            "Request rejected",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            error_type=type(exc).__name__,
            error=message,
        )
        return error_response(status_code, message)

    return handle


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    message = "; ".join(details) or "Invalid request"
    logger.info("Malformed request", method=request.method, path=request.url.path, error=message)
    return error_response(400, message)


def register_error_handlers(app: FastAPI) -> None:
    for error_class, status_code in _STATUS_BY_ERROR.items():
        app.add_exception_handler(error_class, _handler_for(status_code))
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
