from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Error handling settings loaded from environment variables.

    Fields are read from ``APIERRORS_``-prefixed env vars (case-insensitive),
    e.g. APIERRORS_LOG_LEVEL, so the host application's own LOG_LEVEL and
    friends never leak in. A .env file in the working directory is read too.
    """

    # Level for the apierrors logger when the library configures it
    log_level: str = "INFO"

    # Replace messages of unexpected exceptions with a fixed string in responses.
    # Classified errors (APIError) always keep their message.
    hide_internal_errors: bool = False

    model_config = SettingsConfigDict(
        env_prefix="APIERRORS_",
        env_file=".env",  # Load from .env in development
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )
