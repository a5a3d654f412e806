"""Pydantic-based configuration helpers for the Swarm review bot."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from .swarm.client import SwarmSettings

DEFAULT_SWARM_API_URL = "https://swarm.soma.salesforce.com/api/v9"
DEFAULT_CREDENTIALS_FILE = Path.home() / "blt" / "config.blt"

_CREDENTIAL_KEYS = {
    "p4.user": "SWARM_USERNAME",
    "p4.password": "SWARM_PASSWORD",
}


class AppSettings(BaseModel):
    """Settings required to run the Slack bot and reach the Swarm API."""

    bot_token: str = Field(..., alias="SLACK_BOT_TOKEN")
    signing_secret: str = Field(..., alias="SLACK_SIGNING_SECRET")
    app_token: str | None = Field(None, alias="SLACK_APP_TOKEN")
    swarm_api_url: str = Field(DEFAULT_SWARM_API_URL, alias="SWARM_API_URL")
    swarm_web_url: str | None = Field(None, alias="SWARM_WEB_URL")
    swarm_username: str = Field(..., alias="SWARM_USERNAME")
    swarm_password: str = Field(..., alias="SWARM_PASSWORD")
    swarm_timeout_seconds: float = Field(2.5, alias="SWARM_TIMEOUT_SECONDS")
    swarm_page_size: int = Field(5, alias="SWARM_PAGE_SIZE")
    port: int = Field(3000, alias="PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("app_token", "swarm_web_url", mode="before")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("swarm_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("swarm_timeout_seconds", "swarm_page_size")
    @classmethod
    def _ensure_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Swarm timeout and page size must be greater than zero")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level '{value}'")
        return level

    def swarm(self) -> SwarmSettings:
        """Return the connection settings handed to the Swarm client."""

        return SwarmSettings(
            base_url=self.swarm_api_url,
            username=self.swarm_username,
            password=self.swarm_password,
            timeout=self.swarm_timeout_seconds,
            page_size=self.swarm_page_size,
        )


def read_credentials_file(path: Path) -> Dict[str, str]:
    """Parse a properties-style credentials file into Swarm env var names.

    Only the ``p4.user`` and ``p4.password`` keys are picked up; comments and
    unrelated keys are ignored.
    """

    credentials: Dict[str, str] = {}
    with path.open("r", encoding="utf-8") as fp:
        for raw_line in fp:
            line = raw_line.strip()
            if not line or line.startswith(("#", "!")):
                continue
            separator = "=" if "=" in line else ":"
            key, _, value = line.partition(separator)
            env_name = _CREDENTIAL_KEYS.get(key.strip())
            if env_name:
                credentials[env_name] = value.strip()
    return credentials


def _with_file_credentials(environ: Mapping[str, str]) -> Dict[str, str]:
    values = dict(environ)
    if values.get("SWARM_USERNAME") and values.get("SWARM_PASSWORD"):
        return values

    path = Path(values.get("SWARM_CREDENTIALS_FILE") or DEFAULT_CREDENTIALS_FILE).expanduser()
    if not path.is_file():
        return values

    for key, value in read_credentials_file(path).items():
        values.setdefault(key, value)
    return values


def _format_missing(fields: Iterable[str]) -> str:
    """Return a human-friendly comma-separated list of missing env vars."""

    unique: List[str] = []
    for field in fields:
        if field not in unique:
            unique.append(field)
    return ", ".join(unique)


@lru_cache()
def get_settings() -> AppSettings:
    """Fetch and cache settings from environment variables."""

    try:
        return AppSettings.model_validate(_with_file_credentials(os.environ))
    except ValidationError as exc:
        missing = [str(error["loc"][0]) for error in exc.errors() if error["type"] == "missing"]
        if not missing:
            raise RuntimeError(f"Invalid configuration: {exc}") from exc
        message = (
            "Missing required environment variables: "
            f"{_format_missing(missing)}"
        )
        raise RuntimeError(message) from exc
