from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from doc_library.exceptions import DocLibraryError, FileMissing

logger = logging.getLogger(__name__)


def error_response(status: int, message: str, kind: str | None = None) -> JSONResponse:
    content = {"message": message}
    if kind:
        content["kind"] = kind
    return JSONResponse(status_code=status, content=content)


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # drop the "body"/"query" prefix FastAPI puts on every location
        loc = [str(p) for p in err.get("loc", ())][1:]
        parts.append(f"{'.'.join(loc) or 'body'}: {err.get('msg', 'invalid')}")
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    """Translate library errors into ``{message, kind}`` JSON responses."""

    @app.exception_handler(DocLibraryError)
    async def handle_library_error(request: Request, exc: DocLibraryError):
        extra = {"http_method": request.method, "path": request.url.path, "status_code": exc.status_code}
        if exc.status_code >= 500 or isinstance(exc, FileMissing):
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}", extra=extra)
        else:
            logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}", extra=extra)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return error_response(400, _describe_validation(exc), "validation_error")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        kind = "not_found" if exc.status_code == 404 else None
        return error_response(exc.status_code, str(exc.detail), kind)
