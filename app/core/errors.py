from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.logger import logger


class AppError(HTTPException):
    """
    Base of the API error taxonomy.

    Subclasses HTTPException so routers can keep re-raising it untouched
    while the registered handler renders the uniform error body:
    ``{"type": kind, "error": message, "detail": detail}``.
    """

    kind: str = "ServerError"
    status_code_default: int = 500

    def __init__(self, message: str, detail: Optional[Any] = None) -> None:
        super().__init__(status_code=self.status_code_default, detail=message)
        self.message = message
        self.extra = detail

    def to_body(self) -> dict[str, Any]:
        return {"type": self.kind, "error": self.message, "detail": self.extra}


class NotFoundError(AppError):
    kind = "NotFound"
    status_code_default = 404


class ValidationError(AppError):
    kind = "ValidationError"
    status_code_default = 422


class ConflictError(AppError):
    kind = "Conflict"
    status_code_default = 409


class UnauthorizedError(AppError):
    kind = "Unauthorized"
    status_code_default = 401

    def __init__(self, message: str, detail: Optional[Any] = None) -> None:
        super().__init__(message, detail)
        self.headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(AppError):
    kind = "Forbidden"
    status_code_default = 403


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("[Errors] %s %s -> %s", request.method, request.url.path, exc.message)
    else:
        logger.debug("[Errors] %s %s -> %s %s", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=exc.headers)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kinds = {
        401: "Unauthorized",
        403: "Forbidden",
        404: "NotFound",
        409: "Conflict",
        422: "ValidationError",
    }
    kind = kinds.get(exc.status_code, "ServerError" if exc.status_code >= 500 else "BadRequest")
    return JSONResponse(
        status_code=exc.status_code,
        content={"type": kind, "error": str(exc.detail), "detail": None},
        headers=getattr(exc, "headers", None),
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={"type": "ValidationError", "error": "Invalid request", "detail": errors},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("[Errors] unhandled %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"type": "ServerError", "error": "Unexpected error", "detail": None},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
