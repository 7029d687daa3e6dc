"""Exception handlers rendering failures into the error envelope"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from university_erp.api.dependencies import get_request_id
from university_erp.config import settings
from university_erp.domain.exceptions import DomainException
from university_erp.infrastructure.observability.logging import log_request_error

HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "AUTHENTICATION_ERROR",
    403: "AUTHORIZATION_ERROR",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
}


def error_response(status_code: int, code: str, message: str, details=None, headers=None) -> JSONResponse:
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": False, "error": error}),
        headers=headers,
    )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    log_request_error(get_request_id(request), request.method, request.url.path, exc.status_code, exc.code, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return error_response(exc.status_code, exc.code, exc.message, exc.details, headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"field": ".".join(str(part) for part in error["loc"] if part != "body"), "message": error["msg"]}
        for error in exc.errors()
    ]
    log_request_error(get_request_id(request), request.method, request.url.path, 400, "VALIDATION_ERROR", "Validation failed")
    return error_response(400, "VALIDATION_ERROR", "Validation failed", details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = f"Route {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail)
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    log_request_error(get_request_id(request), request.method, request.url.path, exc.status_code, code, message)
    return error_response(exc.status_code, code, message, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log_request_error(
        get_request_id(request), request.method, request.url.path, 500, "INTERNAL_ERROR", str(exc), exc_info=exc
    )
    message = "Internal server error" if settings.is_production else str(exc)
    return error_response(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
