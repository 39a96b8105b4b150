"""Classified errors raised by services and caught by handlers.

Services raise ``APIError`` to signal a failure with a known category and HTTP
status. Anything else that reaches the response layer is treated as a generic
internal error. Both end up in the same envelope:
{"error": "<category>", "message": "...", "paramName": "..."}.

Values are immutable once built. Use ``ErrorBuilder`` to chain options before
the value escapes::

    raise ErrorBuilder.validation("name is required").set_param_name("name").build()
"""

from typing import Protocol, Self, runtime_checkable

INTERNAL_SERVER_ERROR = "InternalServerError"
VALIDATION = "Validation"

HTTP_400 = 400
HTTP_500 = 500


@runtime_checkable
class ClassifiedError(Protocol):
    """Anything exposing the fields needed to render the error envelope."""

    @property
    def message(self) -> str: ...

    @property
    def category(self) -> str: ...

    @property
    def status_code(self) -> int: ...

    @property
    def param_name(self) -> str | None: ...


class APIError(Exception):
    """Error with a category, HTTP status code and optional parameter name."""

    def __init__(
        self,
        message: str,
        category: str = INTERNAL_SERVER_ERROR,
        status_code: int = HTTP_500,
        param_name: str | None = None,
    ) -> None:
        self._message = message
        self._category = category
        self._status_code = status_code
        self._param_name = param_name
        super().__init__(message)

    @classmethod
    def builder(cls, message: str) -> "ErrorBuilder":
        return ErrorBuilder(message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def category(self) -> str:
        return self._category

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def param_name(self) -> str | None:
        return self._param_name

    def to_builder(self) -> "ErrorBuilder":
        """Start a builder seeded with this error's fields."""
        builder = ErrorBuilder(self._message).set_category(self._category).set_status_code(self._status_code)
        if self._param_name is not None:
            builder.set_param_name(self._param_name)
        return builder

    def __str__(self) -> str:
        return self._message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self._message!r}, category={self._category!r}, "
            f"status_code={self._status_code!r}, param_name={self._param_name!r})"
        )


class ErrorBuilder:
    """Accumulates options for an ``APIError``.

    Setters overwrite unconditionally and return the builder so calls can be
    chained. ``build()`` returns a new immutable error each time it is called;
    later setter calls never affect errors already built.
    """

    def __init__(self, message: str) -> None:
        self._message = message
        self._category = INTERNAL_SERVER_ERROR
        self._status_code = HTTP_500
        self._param_name: str | None = None

    @classmethod
    def validation(cls, message: str) -> Self:
        """Builder preset to the Validation category and a 400 status."""
        return cls(message).set_category(VALIDATION).set_status_code(HTTP_400)

    def set_category(self, category: str) -> Self:
        self._category = category
        return self

    def set_status_code(self, status_code: int) -> Self:
        # No range check: callers own the choice of HTTP status.
        self._status_code = status_code
        return self

    def set_param_name(self, param_name: str) -> Self:
        self._param_name = param_name
        return self

    def build(self) -> APIError:
        return APIError(
            self._message,
            category=self._category,
            status_code=self._status_code,
            param_name=self._param_name,
        )


def new_error(message: str) -> APIError:
    """Return a generic internal error (500, "InternalServerError")."""
    return ErrorBuilder(message).build()


def new_validation_error(message: str) -> APIError:
    """Return a validation error (400, "Validation")."""
    return ErrorBuilder.validation(message).build()


def as_api_error(err: object) -> APIError:
    """Return ``err`` as an ``APIError``, wrapping unclassified errors.

    Values that already expose the classified-error fields keep them.
    Everything else becomes a generic internal error carrying ``str(err)``.
    """
    if isinstance(err, APIError):
        return err
    if isinstance(err, ClassifiedError):
        return APIError(
            err.message,
            category=err.category,
            status_code=err.status_code,
            param_name=err.param_name,
        )
    return new_error(str(err))


def is_validation_error(err: object) -> bool:
    """Report whether ``err`` was caused by invalid caller input.

    Either a 400 status or the "Validation" category is enough on its own.
    Unclassified values, including ``None``, are never validation errors.
    """
    if not isinstance(err, ClassifiedError):
        return False
    return err.status_code == HTTP_400 or err.category == VALIDATION
