"""Error response schema.

All error responses use the same flat envelope:
{"error": "<category>", "message": "...", "paramName": "..."}.
``paramName`` is left out entirely when the error has no parameter name.
"""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Envelope returned by every error response."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    error: str
    message: str
    param_name: str | None = Field(default=None, alias="paramName")

    def to_json(self) -> bytes:
        """Compact JSON with keys in envelope order and no null ``paramName``."""
        return self.model_dump_json(by_alias=True, exclude_none=True).encode()
