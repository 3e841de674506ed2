from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_lowercase

class Settings(BaseSettings):
    """
    logkit settings loaded from the environment (and an optional .env file).
    """

    # Sink selection: "console" writes straight to stdout/stderr,
    # "logging" forwards every line to a stdlib logger configured by builder.py.
    LOG_SINK: Literal["console", "logging"] = "console"

    # Stdlib backend (only used when LOG_SINK == "logging")
    LOG_LOGGER_NAME: str = "logkit.output"
    LOG_COLOR: bool = False
    LOG_TIMESTAMPS: bool = False

    # Integrations
    LOG_REQUEST_HEADERS: bool = False   # headers may carry credentials; redacted when enabled
    LOG_SQL_PARAMS: bool = True

    # --- Validators ---
    @field_validator("LOG_SINK", mode="before")
    def normalize_lowercase(cls, v: str | None) -> str | None:
        """
        Normalize LOG_SINK to lowercase.
        """
        return to_lowercase(v)

    # --- Config ---
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # the .env file is usually shared with the host application
        extra="ignore",
    )

# get_settings() takes no arguments and always returns the same settings from the environment,
# so it is cached. Call get_settings.cache_clear() after changing the environment in tests.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
