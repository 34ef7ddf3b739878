from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from launchpad.api.middleware import REQUEST_ID_HEADER
from launchpad.core.exceptions import BaseAPIException
from launchpad.core.logging import LogContext

logger = LogContext(__name__)


def status_error_code(status_code: int) -> str:
    """UPPER_SNAKE name of an HTTP status, e.g. 404 -> NOT_FOUND"""
    try:
        return HTTPStatus(status_code).name
    except ValueError:
        return f"HTTP_ERROR_{status_code}"


def error_response(
    request: Request, status_code: int, error_code: str, message: Any, **fields: Any
) -> JSONResponse:
    """
    Build the JSON error envelope shared by every handler

    Extra keyword fields are added to the body as-is. The request id is
    echoed in both the body and the X-Request-ID header.
    """
    request_id = getattr(request.state, "request_id", None)
    body: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status_code,
        "error_code": error_code,
        "message": message,
        "path": request.url.path,
        "request_id": request_id,
        **fields,
    }

    response = JSONResponse(status_code=status_code, content=jsonable_encoder(body))
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def api_exception_handler(request: Request, exc: BaseAPIException) -> JSONResponse:
    extra = {"error_code": exc.error_code, **(exc.additional_info or {})}
    if exc.status_code >= 500:
        logger.error(f"Request failed: {exc.detail}", extra=extra)
    else:
        logger.info(f"Request rejected: {exc.detail}", extra=extra)

    fields = {"additional_info": exc.additional_info} if exc.additional_info else {}
    return error_response(
        request, exc.status_code, exc.error_code, exc.detail, **fields
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(
        request, exc.status_code, status_error_code(exc.status_code), exc.detail
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Query parameters such as page_size outside their bounds end up here"""
    return error_response(
        request,
        422,
        "VALIDATION_ERROR",
        "Request validation error",
        errors=exc.errors(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        extra={"error_type": type(exc).__name__, "error": str(exc)},
        exc_info=exc,
    )
    return error_response(
        request,
        500,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
        type=type(exc).__name__,
    )


def setup_error_handlers(app: FastAPI) -> None:
    # BaseAPIException subclasses HTTPException, the more specific handler wins
    app.add_exception_handler(BaseAPIException, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
