"""Parsing helpers for the bot's slash commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import ValidationError


class AppCommand(Enum):
    UNKNOWN = "unknown"
    HELLO = "/hello"
    USER = "/user"
    CHANGELIST = "/changelist"

    @classmethod
    def lookup(cls, command: str | None) -> "AppCommand":
        try:
            return cls((command or "").strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class SlashCommand:
    command: AppCommand
    text: str
    user_name: str
    channel_name: str


def parse_slash_command(payload: dict) -> SlashCommand:
    return SlashCommand(
        command=AppCommand.lookup(payload.get("command")),
        text=(payload.get("text") or "").strip(),
        user_name=payload.get("user_name") or "",
        channel_name=payload.get("channel_name") or "",
    )


def require_argument(text: str, prompt: str) -> str:
    """Return *text* or raise :class:`ValidationError` carrying *prompt*."""

    if not text.strip():
        raise ValidationError(prompt)
    return text.strip()


def parse_review_number(text: str) -> int | None:
    """Return the review number in *text*, or ``None`` when it is not numeric."""

    cleaned = text.strip().lstrip("#")
    if not (cleaned.isascii() and cleaned.isdigit()):
        return None
    return int(cleaned)
