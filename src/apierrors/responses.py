"""Write errors to Starlette responses using the standard envelope."""

from starlette.responses import Response

from apierrors.exceptions import ClassifiedError, as_api_error
from apierrors.schemas.error import ErrorResponse

JSON_MEDIA_TYPE = "application/json"


def render(err: ClassifiedError) -> bytes:
    """Serialize a classified error to the envelope's JSON bytes."""
    return ErrorResponse(error=err.category, message=err.message, param_name=err.param_name).to_json()


def write_response(response: Response, err: object) -> None:
    """Write ``err`` onto ``response`` as a JSON error.

    Errors that are not classified are wrapped as a generic internal error
    (500, "InternalServerError") carrying their message text.
    """
    error = as_api_error(err)

    response.headers["content-type"] = JSON_MEDIA_TYPE
    response.status_code = error.status_code

    body = render(error)
    response.body = body
    response.headers["content-length"] = str(len(body))


def error_response(err: object) -> Response:
    """Build a new response carrying ``err``."""
    response = Response()
    write_response(response, err)
    return response
