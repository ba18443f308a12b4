"""Map every error kind onto the ``{success: false, message, error}`` envelope."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from canteen.config import get_settings
from canteen.exceptions import AuthError, ConflictError, DependencyError, ForbiddenError, NotFoundError

logger = structlog.get_logger(__name__)

_STATUS_BY_ERROR = [
    (ValidationError, 400),
    (ConflictError, 400),
    (InvalidOperationError, 400),
    (AuthError, 401),
    (ForbiddenError, 403),
    (NotFoundError, 404),
    (ObjectNotFoundError, 404),
    (DependencyError, 500),
]


def first_message(messages, default="Request failed") -> str:
    """Pick a human-readable sentence out of a field-keyed message dict."""
    if isinstance(messages, dict):
        for field, value in messages.items():
            text = value[0] if isinstance(value, list | tuple) and value else value
            text = str(text)
            # Protean's own field errors read "is required"; prefix the field
            if text[:1].islower() and not field.startswith("_"):
                return f"{field} {text}"
            return text
    if isinstance(messages, list | tuple) and messages:
        return str(messages[0])
    if messages:
        return str(messages)
    return default


def error_response(status_code: int, message: str, error=None) -> JSONResponse:
    body = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return JSONResponse(status_code=status_code, content=body)


def _messages_of(exc):
    messages = getattr(exc, "messages", None)
    if messages is not None:
        return messages
    # Plain Protean exceptions such as ObjectNotFoundError keep their payload in args
    if exc.args and isinstance(exc.args[0], dict | list):
        return exc.args[0]
    return str(exc)


def _domain_error_handler(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        messages = _messages_of(exc)
        log = logger.error if status_code >= 500 else logger.info
        log("Request rejected", path=request.url.path, status_code=status_code, error=str(messages))
        return error_response(status_code, first_message(messages), messages)

    return handler


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid request")
    details = [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in errors]
    return error_response(400, message, details)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    detail = None if get_settings().is_production else str(exc)
    return error_response(500, "Internal server error", detail)


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class, status_code in _STATUS_BY_ERROR:
        app.add_exception_handler(exc_class, _domain_error_handler(status_code))
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
