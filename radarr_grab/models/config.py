"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_FETCH_RETRIES = 2
DEFAULT_TIMEOUT = 60
DEFAULT_RETRY_DELAY = 0.0


class GrabConfig(BaseModel):
    """A validated configuration model for the application."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Radarr connection
    radarr_url: str
    api_key: str

    # Workflow settings
    fetch_retries: int = DEFAULT_FETCH_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    timeout: int = DEFAULT_TIMEOUT

    # Internal fields not loaded from INI file
    config_path: str = Field(..., repr=False)

    @field_validator("radarr_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Requires an http(s) base URL and drops any trailing slash."""
        if not v:
            raise ValueError("Radarr URL cannot be empty.")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Radarr URL must start with http:// or https://, got: {v}")
        return v.rstrip("/")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        if not v:
            raise ValueError(
                "API key is not configured. Find it under Settings > General in Radarr."
            )
        return v

    @field_validator("fetch_retries")
    @classmethod
    def validate_retries(cls, v: int) -> int:
        """Keeps the retry count bounded."""
        if v < 0 or v > 10:
            raise ValueError("Fetch retries must be between 0 and 10.")
        return v

    @field_validator("retry_delay")
    @classmethod
    def validate_retry_delay(cls, v: float) -> float:
        """Seconds to wait between empty release searches."""
        if v < 0 or v > 60:
            raise ValueError("Retry delay must be between 0 and 60 seconds.")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 1 or v > 300:
            raise ValueError("Timeout must be between 1 and 300 seconds.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
