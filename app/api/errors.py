# app/api/errors.py
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.common import ApiResponse
from app.domain.errors import STATUS_CODES, ServiceError
from app.utils.logging import get_logger

logger = get_logger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def _envelope(status_code: int, message: str, errors: list[str] | None = None) -> JSONResponse:
    body = ApiResponse.error(message, errors, status_code=status_code)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def validation_messages(errors) -> list[str]:
    """Bledy pydantic -> lista komunikatow, jeden na pole."""
    messages = []
    for err in errors:
        msg = err.get("msg", "")
        if msg.startswith(_VALUE_ERROR_PREFIX):
            #komunikat z naszych regul, bez nazwy pola
            messages.append(msg[len(_VALUE_ERROR_PREFIX):])
        else:
            loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
            messages.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return messages


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code = STATUS_CODES[exc.kind]
    logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return _envelope(status_code, exc.message, exc.errors)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _envelope(400, "Validation failed", validation_messages(exc.errors()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    #404 dla nieznanych tras, 405 itp. tez w kopercie
    response = _envelope(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return _envelope(500, "An unexpected error occurred")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
