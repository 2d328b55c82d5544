"""Rendering of errors into the ``{success: false, error: {...}}`` envelope.

protean's exceptions carry snake_case field names; details keys go out in the
camelCase the wire format uses, e.g. ``items.0.product_name`` becomes
``items.0.productName``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from orders.exceptions import InternalError, OrderingError

logger = structlog.get_logger(__name__)

_HTTP_CODES = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def camelize(name: str) -> str:
    """``product_name`` -> ``productName``; dotted paths are converted per segment."""
    segments = []
    for segment in str(name).split("."):
        if segment.startswith("_"):
            segments.append(segment)
            continue
        head, *rest = segment.split("_")
        segments.append(head + "".join(part[:1].upper() + part[1:] for part in rest))
    return ".".join(segments)


def camelize_messages(messages) -> dict:
    if not isinstance(messages, dict):
        messages = {"_entity": messages}
    details = {}
    for field, errors in messages.items():
        details.setdefault(camelize(field), []).extend(errors if isinstance(errors, list) else [errors])
    return details


def error_response(status_code: int, error: dict, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error}, headers=headers)


def _rejected(request: Request, code: str, status_code: int) -> None:
    logger.info("Request rejected", path=request.url.path, method=request.method, code=code, status_code=status_code)


async def ordering_error_handler(request: Request, exc: OrderingError) -> JSONResponse:
    _rejected(request, exc.code, exc.status_code)
    return error_response(exc.status_code, exc.to_dict())


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    _rejected(request, "VALIDATION_ERROR", 400)
    return error_response(
        400,
        {"code": "VALIDATION_ERROR", "message": "Validation failed", "details": camelize_messages(exc.messages)},
    )


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:  # noqa: ARG001
    _rejected(request, "ORDER_NOT_FOUND", 404)
    return error_response(404, {"code": "ORDER_NOT_FOUND", "message": "Order not found"})


async def invalid_operation_handler(request: Request, exc: InvalidOperationError) -> JSONResponse:
    _rejected(request, "INVALID_OPERATION", 400)
    return error_response(400, {"code": "INVALID_OPERATION", "message": str(exc)})


def _request_error_key(error: dict) -> str:
    loc = [str(part) for part in error.get("loc", ())]
    if loc and loc[0] == "body":
        loc = loc[1:]
    if error.get("type") == "json_invalid" or not loc:
        return "body"
    return ".".join(loc)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = {}
    for error in exc.errors():
        details.setdefault(camelize(_request_error_key(error)), []).append(error["msg"])
    _rejected(request, "VALIDATION_ERROR", 400)
    return error_response(400, {"code": "VALIDATION_ERROR", "message": "Validation failed", "details": details})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # noqa: ARG001
    code = _HTTP_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")
    return error_response(exc.status_code, {"code": code, "message": str(exc.detail)}, headers=exc.headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method, error=str(exc))
    return error_response(500, InternalError().to_dict())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderingError, ordering_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(InvalidOperationError, invalid_operation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
