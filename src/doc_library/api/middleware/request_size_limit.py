from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from doc_library.exceptions import FileTooLarge


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject bodies whose declared Content-Length is over ``max_bytes``.

    Answers with the same ``file_too_large`` error the document service
    raises. Only a coarse guard; the service still counts streamed bytes.
    """

    def __init__(self, app, max_bytes: int):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request, call_next):
        length = request.headers.get("content-length")
        try:
            size = int(length) if length is not None else None
        except ValueError:
            size = None
        if size is not None and size > self.max_bytes:
            exc = FileTooLarge("Request body exceeds allowed size.")
            return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
        return await call_next(request)
