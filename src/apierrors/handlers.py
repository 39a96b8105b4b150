"""Exception handlers that answer every failure with the standard envelope.

Usage:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/users/{user_id}")
    async def get_user(user_id: int) -> User:
        raise ErrorBuilder("user not found").set_category("NotFound").set_status_code(404).build()
"""

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from apierrors.config import Settings
from apierrors.exceptions import APIError, ErrorBuilder, is_validation_error, new_error
from apierrors.logging import configure_logging, get_logger
from apierrors.responses import error_response

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
REQUEST_VALIDATION_MESSAGE = "Request validation failed"


def _http_category(status_code: int) -> str:
    """Reason phrase without spaces, e.g. 404 -> "NotFound"."""
    try:
        return HTTPStatus(status_code).phrase.replace(" ", "").replace("-", "")
    except ValueError:
        return "HTTPError"


def from_request_validation(exc: RequestValidationError) -> APIError:
    """Convert FastAPI's validation failure into a validation error.

    Only the first reported problem is kept; its location's last element
    becomes ``paramName``.
    """
    errors = exc.errors()
    if not errors:
        return ErrorBuilder.validation(REQUEST_VALIDATION_MESSAGE).build()

    first = errors[0]
    builder = ErrorBuilder.validation(str(first.get("msg") or REQUEST_VALIDATION_MESSAGE))
    loc = first.get("loc") or ()
    if loc:
        builder.set_param_name(str(loc[-1]))
    return builder.build()


def from_http_exception(exc: StarletteHTTPException) -> APIError:
    """Convert a Starlette/FastAPI ``HTTPException``, keeping its status code."""
    return (
        ErrorBuilder(str(exc.detail))
        .set_category(_http_category(exc.status_code))
        .set_status_code(exc.status_code)
        .build()
    )


def register_error_handlers(
    app: FastAPI,
    settings: Settings | None = None,
    *,
    configure_logs: bool = False,
) -> None:
    """Register the envelope-producing exception handlers on ``app``.

    Args:
        app: The FastAPI application instance.
        settings: Overrides the settings read from ``APIERRORS_*`` environment
            variables (and a .env file in the working directory, if present).
        configure_logs: Also attach a stdout handler to the ``apierrors``
            logger. Leave off when the host configures logging itself.
    """
    settings = settings or Settings()
    if configure_logs:
        configure_logging(settings)

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> Response:
        """Respond with the error's own category and status."""
        if is_validation_error(exc):
            logger.warning(
                "validation_error", error=exc.message, param_name=exc.param_name, path=request.url.path
            )
        else:
            logger.error(
                "api_error",
                error=exc.message,
                category=exc.category,
                status_code=exc.status_code,
                path=request.url.path,
            )
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
        """Return 400 naming the first offending parameter."""
        error = from_request_validation(exc)
        logger.warning(
            "request_validation_error", error=error.message, param_name=error.param_name, path=request.url.path
        )
        return error_response(error)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        """Keep the exception's status code and headers (e.g. Allow on 405)."""
        response = error_response(from_http_exception(exc))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        """Log unhandled exceptions and answer with a generic 500.

        - Logs full exception with traceback
        - Message text is passed through unless settings.hide_internal_errors is set
        """
        logger.exception("unhandled_exception", path=request.url.path, method=request.method)
        if settings.hide_internal_errors:
            return error_response(new_error(INTERNAL_ERROR_MESSAGE))
        return error_response(exc)
