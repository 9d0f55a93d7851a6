"""Application configuration and environment management."""
from __future__ import annotations

import logging
import os
from functools import lru_cache

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ConfigDict, field_validator


load_dotenv()

DEFAULT_BASE_URL = "http://source.icu-project.org/repos/icu/data/trunk/tzdata/icu/"
DEFAULT_ENTRY_SUFFIX = "/be/zoneinfo.res"
DEFAULT_LOCAL_FILENAME = "zoneinfo.res"


class Settings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    app_name: str = Field(default="ICU Time Zone Updater", description="Human readable app name")

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Directory listing that names every published tz data version",
    )
    entry_suffix: str = Field(
        default=DEFAULT_ENTRY_SUFFIX,
        description="Path appended to base_url + version to locate a version's resource file",
    )
    local_filename: str = Field(
        default=DEFAULT_LOCAL_FILENAME,
        description="Local tz resource file, relative to the working directory",
    )

    request_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    user_agent: str = Field(default="tzsource/1.0", description="User-Agent sent with listing requests")

    log_level: str = Field(default="INFO", description="Level for the tzsource logger")
    message_pane_capacity: int = Field(default=100, gt=0, description="Warnings kept per discovery pass")

    select_latest_on_discovery: bool = Field(
        default=False,
        description="Select the newest remote version once a discovery pass finishes",
    )

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, value: str) -> str:
        value = value.strip()
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError(f"Invalid base URL '{value}': {exc}") from exc
        if url.scheme not in {"http", "https"}:
            raise ValueError(f"Unsupported base URL scheme '{url.scheme}'")
        if not value.endswith("/"):
            value = f"{value}/"
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        value_upper = value.strip().upper()
        if not isinstance(logging.getLevelName(value_upper), int):
            raise ValueError(f"Unknown log level '{value}'")
        return value_upper


_ENV_MAPPING = {
    "APP_NAME": "app_name",
    "TZSOURCE_BASE_URL": "base_url",
    "TZSOURCE_ENTRY_SUFFIX": "entry_suffix",
    "TZSOURCE_LOCAL_FILENAME": "local_filename",
    "TZSOURCE_REQUEST_TIMEOUT": "request_timeout",
    "TZSOURCE_USER_AGENT": "user_agent",
    "TZSOURCE_LOG_LEVEL": "log_level",
    "TZSOURCE_MESSAGE_PANE_CAPACITY": "message_pane_capacity",
    "TZSOURCE_SELECT_LATEST": "select_latest_on_discovery",
}


def _load_settings() -> Settings:
    data: dict[str, object] = {}
    for env_name, field_name in _ENV_MAPPING.items():
        if env_name not in os.environ:
            continue
        data[field_name] = os.environ[env_name]
    return Settings(**data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return _load_settings()
