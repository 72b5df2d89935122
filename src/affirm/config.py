"""Diagnostic configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AffirmSettings(BaseSettings):
    """Settings controlling how failure diagnostics are rendered.

    Loads from environment variables automatically:
        AFFIRM_MAX_VALUE_LENGTH, AFFIRM_INCLUDE_TRACE, AFFIRM_TRACE_DEPTH
    """

    max_value_length: int = Field(
        default=0,
        ge=0,
        description="Truncate rendered operand values to this many characters (0 disables truncation)",
    )
    include_trace: bool = Field(default=True, description="Include the 'Error Trace' section in diagnostics")
    trace_depth: int = Field(default=10, ge=1, description="Maximum number of call-site entries in a trace")

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="AFFIRM_",
    )


@lru_cache(maxsize=1)
def get_settings() -> AffirmSettings:
    """Return the process-wide settings, loading them on first use."""
    return AffirmSettings()
