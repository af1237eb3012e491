import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def _envelope(status_code: int, message: str, **extra) -> JSONResponse:
    body = {"success": False, "message": message}
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    fields: list[str] = []
    for err in exc.errors():
        # loc looks like ("body", "artworkIds", 0); drop the "body"/"query" prefix
        loc = [str(part) for part in err.get("loc", ())[1:]]
        name = ".".join(loc) or "body"
        if name not in fields:
            fields.append(name)
    return "Missing or invalid required fields: " + ", ".join(fields)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Render HTTPException in the API envelope.

    A dict detail (e.g. {"message": ..., "error": ...}) is merged into
    the body; anything else becomes the message.
    """
    headers = getattr(exc, "headers", None)
    if isinstance(exc.detail, dict):
        detail = dict(exc.detail)
        message = str(detail.pop("message", ""))
        response = _envelope(exc.status_code, message, **detail)
    else:
        response = _envelope(exc.status_code, str(exc.detail))
    if headers:
        response.headers.update(headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _envelope(status.HTTP_400_BAD_REQUEST, _describe_validation_errors(exc))


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return _envelope(status.HTTP_409_CONFLICT, "Conflict with existing data")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-shaped error handlers on `app`."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
