"""
Centralized error translation for FastAPI.

Every exception that escapes a route is turned into an ErrorResponse
body with the exception's own status code, plus exactly one log record:
- status >= 500: ERROR with the traceback attached
- 400 <= status < 500: WARNING with method, path, status and message

Classification uses only what the exception declares about itself.
Anything that does not declare a usable 4xx/5xx status is answered with
a generic 500 so no internal details reach the client.
"""

import logging
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.domain.tickets.errors import HelpdeskError
from app.shared.errors.schemas import ErrorResponse

logger = logging.getLogger(__name__)

HTTP_422 = 422
HTTP_500 = 500

GENERIC_MESSAGE = "Internal server error"
GENERIC_ERROR = "InternalServerError"


def _utc_timestamp() -> str:
    """Return the current UTC time as ISO-8601 with milliseconds and 'Z'."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _request_path(request: Request) -> str:
    """Return the request path with its query string, as sent.

    raw_path keeps percent-encoding intact; servers that do not provide
    it only give us the decoded path.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.decode("latin-1").split("?", 1)[0]
    else:
        path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return path


def _status_phrase(status_code: int) -> str:
    """Return the standard reason phrase, or "Error" for unknown codes."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _detail_message(detail, status_code: int) -> str:
    """Flatten an HTTPException detail into a single message."""
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, (list, tuple)) and detail:
        return ", ".join(str(part) for part in detail)
    if isinstance(detail, dict) and detail.get("message"):
        return str(detail["message"])
    return _status_phrase(status_code)


def _validation_message(exc: RequestValidationError) -> str:
    """Join pydantic validation errors as 'loc: msg' pairs."""
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg', 'invalid')}")
    return ", ".join(parts) or "Validation failed"


def classify_exception(exc: BaseException) -> tuple[int, str, str]:
    """Return (status_code, message, error_name) declared by an exception.

    Exceptions without a usable 4xx/5xx status fall back to a generic 500.
    """
    if isinstance(exc, RequestValidationError):
        return HTTP_422, _validation_message(exc), type(exc).__name__

    if isinstance(exc, StarletteHTTPException):
        status_code = exc.status_code
        message = _detail_message(exc.detail, status_code)
    elif isinstance(exc, HelpdeskError):
        status_code = exc.status_code
        message = exc.message or _status_phrase(status_code)
    else:
        return HTTP_500, GENERIC_MESSAGE, GENERIC_ERROR

    if not isinstance(status_code, int) or not 400 <= status_code <= 599:
        return HTTP_500, GENERIC_MESSAGE, GENERIC_ERROR
    return status_code, message, type(exc).__name__


def build_error_response(
    request: Request, status_code: int, message: str, error: str
) -> ErrorResponse:
    """Build the error body for a request; timestamp is taken now."""
    return ErrorResponse(
        status_code=status_code,
        timestamp=_utc_timestamp(),
        path=_request_path(request),
        method=request.method,
        message=message,
        error=error,
    )


def translate_exception(request: Request, exc: BaseException) -> JSONResponse:
    """Convert an exception into a JSON error response and log it once.

    Args:
        request: The request whose handling failed.
        exc: The exception raised downstream.

    Returns:
        A JSONResponse carrying the ErrorResponse body.
    """
    status_code, message, error = classify_exception(exc)
    body = build_error_response(request, status_code, message, error)

    if status_code >= HTTP_500:
        logger.error(
            "%s %s - %d",
            body.method,
            body.path,
            status_code,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    else:
        logger.warning(
            "%s %s - %d: %s", body.method, body.path, status_code, message
        )

    headers = getattr(exc, "headers", None) if status_code < HTTP_500 else None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True),
        headers=headers,
    )


class ErrorTranslationMiddleware(BaseHTTPMiddleware):
    """Outermost handler for exceptions no registered handler claimed.

    Sits at the top of the handler pipeline so unexpected failures
    anywhere downstream still produce an ErrorResponse.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return translate_exception(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """Install error translation on the FastAPI application.

    Registers the translator for HTTP, validation and domain errors and
    adds ErrorTranslationMiddleware for everything else.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP errors raised by routes, routing and rate limiting."""
        return translate_exception(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request payloads rejected by schema validation."""
        return translate_exception(request, exc)

    @app.exception_handler(HelpdeskError)
    async def handle_helpdesk_error(
        request: Request, exc: HelpdeskError
    ) -> JSONResponse:
        """Handle domain errors; they carry their own status code."""
        return translate_exception(request, exc)

    app.add_middleware(ErrorTranslationMiddleware)
