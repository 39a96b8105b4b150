"""Factory functions for creating errors in tests."""

from apierrors.exceptions import APIError, ErrorBuilder


def make_error(
    *,
    message: str = "Oops",
    category: str = "Error",
    status_code: int = 400,
    param_name: str | None = "Name",
) -> APIError:
    builder = ErrorBuilder(message).set_category(category).set_status_code(status_code)
    if param_name is not None:
        builder.set_param_name(param_name)
    return builder.build()


class ForeignError(Exception):
    """Error from another library that exposes the classified-error fields."""

    def __init__(self, message: str, category: str, status_code: int, param_name: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.status_code = status_code
        self.param_name = param_name
