"""Builders for review and user layouts shown in messages and modals."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Callable, List, Tuple

from ..actions import ReviewOperation, encode_action_id
from ..swarm.models import Review, User
from .blocks import Actions, Block, Button, Context, Divider, Image, Markdown, Section, View

REVIEW_MODAL_CALLBACK_ID = "pullrequest-details"

UNKNOWN = "Unknown"

SWARM_BEE_IMAGE_URL = (
    "https://swarm.workshop.perforce.com/view/guest/perforce_software/slack/main/images/60x60-Helix-Bee.png"
)
CHANGELIST_ICON_URL = "https://api.slack.com/img/blocks/bkb_template_images/task-icon.png"


def format_date(epoch_millis: int | None) -> str:
    """Render an epoch-millisecond timestamp as an ISO date in UTC."""

    if epoch_millis is None:
        return UNKNOWN
    return datetime.fromtimestamp(epoch_millis / 1000, tz=UTC).date().isoformat()


def _or_unknown(value: str | None) -> str:
    if value is None:
        return UNKNOWN
    cleaned = value.strip()
    return cleaned or UNKNOWN


def _format_value(value: Any) -> str:
    if isinstance(value, dict):
        if not value:
            return "none"
        return ", ".join(str(key) for key in value)
    if isinstance(value, (list, tuple)):
        if not value:
            return "none"
        return ", ".join(str(item) for item in value)
    return str(value).strip()


def _status(review: Review) -> str:
    if review.state_label:
        return f"{review.state_label} (`{review.state}`)"
    return f"`{review.state}`"


def _optional_date(epoch_millis: int | None) -> str | None:
    return None if epoch_millis is None else format_date(epoch_millis)


# Order here is the order lines appear in the details modal.
REVIEW_DETAIL_FIELDS: Tuple[Tuple[str, Callable[[Review], Any]], ...] = (
    ("ID", lambda review: review.id),
    ("Author", lambda review: review.author),
    ("Description", lambda review: review.description),
    ("Status", _status),
    ("Deploy status", lambda review: review.deploy_status),
    ("Test status", lambda review: review.test_status),
    ("Commit status", lambda review: review.commit_status),
    ("Commits", lambda review: review.commits),
    ("Changes", lambda review: review.changes),
    ("Comments", lambda review: review.comments),
    ("Participants", lambda review: review.participants),
    ("Created", lambda review: _optional_date(review.created)),
    ("Last updated", lambda review: _optional_date(review.updated)),
)

USER_SUMMARY_FIELDS: Tuple[Tuple[str, Callable[[User], Any]], ...] = (
    ("Username", lambda user: user.username),
    ("Email", lambda user: user.email),
    ("Full Name", lambda user: user.full_name),
    ("Reviews", lambda user: ", ".join(user.reviews)),
)


def _change_list_link(review: Review, link_base: str | None) -> str:
    if not link_base:
        return f"`{review.id}`"
    return f"<{link_base.rstrip('/')}/{review.id}|:link: {review.id}>"


def _action_row(review: Review) -> Actions:
    buttons: List[Button] = [
        Button(
            text="View Details",
            action_id=encode_action_id(ReviewOperation.DETAILS, review.id),
            value=encode_action_id(ReviewOperation.DETAILS, review.id),
        )
    ]

    if review.needs_decision:
        for operation, label, style in (
            (ReviewOperation.APPROVE, "Approve", "primary"),
            (ReviewOperation.DECLINE, "Decline", "danger"),
        ):
            identifier = encode_action_id(operation, review.id)
            buttons.append(Button(text=label, action_id=identifier, value=identifier, style=style))

    return Actions(elements=tuple(buttons))


def render_compact_review(review: Review, *, link_base: str | None = None) -> List[Block]:
    """Return the list-row layout for *review*.

    Approve and Decline buttons are only offered while the review state starts
    with ``needs`` (``needsReview``, ``needsRevision``).
    """

    summary = "\n".join(
        [
            f"*Change List:* {_change_list_link(review, link_base)}",
            f"*Description:* {_or_unknown(review.description)}",
            f"*Status:* {_or_unknown(review.state_label or review.state)}",
        ]
    )
    submitted = f"Submitted by: *{_or_unknown(review.author)}* on {format_date(review.created)}"

    return [
        Divider(),
        Section(
            text=Markdown(summary),
            accessory=Image(image_url=SWARM_BEE_IMAGE_URL, alt_text="Helix Swarm Bee"),
        ),
        Context(
            elements=(
                Image(image_url=CHANGELIST_ICON_URL, alt_text="Changelist"),
                Markdown(submitted),
            )
        ),
        _action_row(review),
    ]


def render_review_detail(review: Review) -> Section:
    """Return every populated review field as ``*Label:* value`` lines."""

    lines = []
    for label, getter in REVIEW_DETAIL_FIELDS:
        value = getter(review)
        if value is None:
            continue
        lines.append(f"*{label}:* {_format_value(value)}")
    return Section(text=Markdown("\n".join(lines)))


def render_user_summary(user: User) -> Section:
    lines = [f"*{label}:* {getter(user) or ''}" for label, getter in USER_SUMMARY_FIELDS]
    return Section(text=Markdown("\n".join(lines)))


def build_review_modal(review: Review) -> View:
    """Wrap the detail layout in the modal opened by "View Details"."""

    return View(
        type="modal",
        callback_id=REVIEW_MODAL_CALLBACK_ID,
        title="Review Details",
        notify_on_close=False,
        blocks=(render_review_detail(review),),
    )
