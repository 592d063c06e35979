import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error that maps straight onto an HTTP response with an ``{"error": ...}`` body."""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.status = status


def error_response(message: str, status: int = 400) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


async def api_error_handler(request: Request, exc: ApiError):
    return error_response(exc.message, exc.status)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # surface the first problem only; clients show a single message
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        msg = first.get("msg", "Invalid request")
        message = f"{loc}: {msg}" if loc else msg
    else:
        message = "Invalid request"
    logger.warning("rejected %s %s: %s", request.method, request.url.path, message)
    return error_response(message, 400)
