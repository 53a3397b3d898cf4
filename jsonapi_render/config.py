"""Process-wide JSON:API settings loaded from the environment."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class JSONAPISettings(BaseSettings):
    """Serializer defaults and error-path options.

    Frozen after construction; build one instance at startup and share it.
    """

    model_config = SettingsConfigDict(
        env_prefix="JSONAPI_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    json_generator: Literal["compact", "pretty"] = "compact"
    json_error_generator: Literal["compact", "pretty"] = "pretty"
    logger_progname: str = "jsonapi_render"
    jsonapi_version: str | None = "1.0"
    base_url: str | None = None
    not_found_placeholder: str = "Not Found"


@lru_cache
def get_settings() -> JSONAPISettings:
    return JSONAPISettings()
