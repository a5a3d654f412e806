"""Immutable records describing the Block Kit layouts the bot renders.

Composition code builds trees of these records; :mod:`.serialize` turns them
into the JSON Slack expects. Keeping the two apart lets view builders be
compared and tested without touching the wire format.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class PlainText:
    text: str
    emoji: bool = False


@dataclass(frozen=True)
class Markdown:
    text: str


@dataclass(frozen=True)
class Image:
    image_url: str
    alt_text: str


@dataclass(frozen=True)
class Button:
    text: str
    action_id: str
    value: str | None = None
    style: str | None = None


@dataclass(frozen=True)
class Option:
    text: str
    value: str


@dataclass(frozen=True)
class StaticSelect:
    action_id: str
    options: Tuple[Option, ...]
    initial_option: Option | None = None


@dataclass(frozen=True)
class Divider:
    pass


@dataclass(frozen=True)
class Section:
    text: Markdown
    accessory: Image | StaticSelect | None = None


@dataclass(frozen=True)
class Context:
    elements: Tuple[Image | Markdown, ...]


@dataclass(frozen=True)
class Actions:
    elements: Tuple[Button, ...]


Block = Union[Divider, Section, Context, Actions]


@dataclass(frozen=True)
class View:
    type: str
    blocks: Tuple[Block, ...]
    title: str | None = None
    callback_id: str | None = None
    notify_on_close: bool | None = None
