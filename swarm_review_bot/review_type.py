"""Author/participant filter that governs which reviews the Home tab lists."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping


class ReviewType(Enum):
    """Home tab filter mode, rebuilt from the selector on every interaction."""

    AUTHOR = ("Author", "I'm author")
    PARTICIPANT = ("Participant", "I'm participant")
    UNDEFINED = ("", "")

    def __init__(self, value_label: str, description: str) -> None:
        self.option_value = value_label
        self.description = description

    @classmethod
    def selectable(cls) -> tuple["ReviewType", ...]:
        return (cls.AUTHOR, cls.PARTICIPANT)

    @classmethod
    def from_selection(cls, value: str | None) -> "ReviewType":
        """Map a selector value to a mode, defaulting to ``AUTHOR`` when unset."""

        cleaned = (value or "").strip().lower()
        if not cleaned:
            return cls.AUTHOR
        for member in cls.selectable():
            if cleaned in (member.option_value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unsupported review type '{value}'.")

    @classmethod
    def selected_in(cls, body: Mapping[str, Any]) -> "ReviewType":
        """Return the mode picked in a ``block_actions`` payload."""

        actions = body.get("actions") or []
        selected = actions[0].get("selected_option") if actions else None
        value = selected.get("value") if isinstance(selected, dict) else None
        return cls.from_selection(value)
