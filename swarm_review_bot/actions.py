"""Encoding and decoding of the action identifiers embedded in review buttons."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .errors import ParseError

CHANGE_REVIEW_TYPE_ACTION_ID = "change_review_type"

_ACTION_ID_RE = re.compile(r"^[a-z]+_[0-9]+$")


class ReviewOperation(str, Enum):
    DETAILS = "details"
    APPROVE = "approve"
    DECLINE = "decline"


DETAILS_ACTION_PATTERN = re.compile(rf"^{ReviewOperation.DETAILS.value}_[0-9]+$")
DECISION_ACTION_PATTERN = re.compile(
    rf"^({ReviewOperation.APPROVE.value}|{ReviewOperation.DECLINE.value})_[0-9]+$"
)


@dataclass(frozen=True)
class ActionIdentifier:
    """Parsed routing token carried by a review button."""

    operation: ReviewOperation
    review_id: int

    def encode(self) -> str:
        return encode_action_id(self.operation, self.review_id)


def encode_action_id(operation: ReviewOperation | str, review_id: int) -> str:
    """Return the ``<operation>_<review id>`` token for a button."""

    op = ReviewOperation(operation)
    if isinstance(review_id, bool) or not isinstance(review_id, int) or review_id < 0:
        raise ValueError(f"Review id must be a non-negative integer, got {review_id!r}.")
    return f"{op.value}_{review_id}"


def decode_action_id(raw_value: str) -> ActionIdentifier:
    """Parse an action identifier produced by :func:`encode_action_id`."""

    if not isinstance(raw_value, str) or not _ACTION_ID_RE.fullmatch(raw_value):
        raise ParseError(f"Malformed action identifier: {raw_value!r}")

    operation, _, key = raw_value.partition("_")
    try:
        op = ReviewOperation(operation)
    except ValueError as exc:
        raise ParseError(f"Unknown review operation: {operation!r}") from exc

    return ActionIdentifier(operation=op, review_id=int(key))
