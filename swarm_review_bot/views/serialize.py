"""Serialise view records into Slack Block Kit JSON."""

from __future__ import annotations

from functools import singledispatch
from typing import Any, Dict, Iterable, List

from .blocks import (
    Actions,
    Button,
    Context,
    Divider,
    Image,
    Markdown,
    Option,
    PlainText,
    Section,
    StaticSelect,
    View,
)


@singledispatch
def serialize(node: Any) -> Dict[str, Any]:
    raise TypeError(f"Cannot serialise {type(node).__name__} as Block Kit JSON.")


def serialize_blocks(blocks: Iterable[Any]) -> List[Dict[str, Any]]:
    return [serialize(block) for block in blocks]


@serialize.register
def _(node: PlainText) -> Dict[str, Any]:
    return {"type": "plain_text", "text": node.text, "emoji": node.emoji}


@serialize.register
def _(node: Markdown) -> Dict[str, Any]:
    return {"type": "mrkdwn", "text": node.text}


@serialize.register
def _(node: Image) -> Dict[str, Any]:
    return {"type": "image", "image_url": node.image_url, "alt_text": node.alt_text}


@serialize.register
def _(node: Button) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "type": "button",
        "text": serialize(PlainText(node.text, emoji=True)),
        "action_id": node.action_id,
    }
    if node.value is not None:
        payload["value"] = node.value
    if node.style is not None:
        payload["style"] = node.style
    return payload


@serialize.register
def _(node: Option) -> Dict[str, Any]:
    return {"text": serialize(PlainText(node.text)), "value": node.value}


@serialize.register
def _(node: StaticSelect) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "type": "static_select",
        "action_id": node.action_id,
        "options": [serialize(option) for option in node.options],
    }
    if node.initial_option is not None:
        payload["initial_option"] = serialize(node.initial_option)
    return payload


@serialize.register
def _(node: Divider) -> Dict[str, Any]:
    return {"type": "divider"}


@serialize.register
def _(node: Section) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"type": "section", "text": serialize(node.text)}
    if node.accessory is not None:
        payload["accessory"] = serialize(node.accessory)
    return payload


@serialize.register
def _(node: Context) -> Dict[str, Any]:
    return {"type": "context", "elements": [serialize(element) for element in node.elements]}


@serialize.register
def _(node: Actions) -> Dict[str, Any]:
    return {"type": "actions", "elements": [serialize(element) for element in node.elements]}


@serialize.register
def _(node: View) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"type": node.type}
    if node.callback_id is not None:
        payload["callback_id"] = node.callback_id
    if node.title is not None:
        payload["title"] = serialize(PlainText(node.title, emoji=True))
    if node.notify_on_close is not None:
        payload["notify_on_close"] = node.notify_on_close
    payload["blocks"] = serialize_blocks(node.blocks)
    return payload
