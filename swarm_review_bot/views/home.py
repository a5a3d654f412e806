"""Builders for the Slack App Home tab."""

from __future__ import annotations

from typing import List

from ..actions import CHANGE_REVIEW_TYPE_ACTION_ID
from ..review_type import ReviewType
from ..swarm.models import ReviewsData
from .blocks import Block, Divider, Markdown, Option, Section, StaticSelect, View
from .reviews import UNKNOWN, render_compact_review


def _option(review_type: ReviewType) -> Option:
    return Option(text=review_type.description, value=review_type.option_value)


def _review_type_selector(review_type: ReviewType) -> Section:
    options = tuple(_option(member) for member in ReviewType.selectable())
    initial = _option(review_type) if review_type in ReviewType.selectable() else None
    return Section(
        text=Markdown("*Review request type:*"),
        accessory=StaticSelect(
            action_id=CHANGE_REVIEW_TYPE_ACTION_ID,
            options=options,
            initial_option=initial,
        ),
    )


def format_totals(reviews_data: ReviewsData) -> str:
    last_seen = UNKNOWN if reviews_data.last_seen is None else str(reviews_data.last_seen)
    total = reviews_data.total_count or 0
    return f"Last seen: {last_seen}\tTotal reviews: {total}"


def render_home_surface(
    review_type: ReviewType,
    reviews_data: ReviewsData | None,
    *,
    link_base: str | None = None,
) -> List[Block]:
    """Return the Home tab blocks for *review_type*.

    Without reviews the tab shrinks to the selector and a trailing divider.
    """

    blocks: List[Block] = [_review_type_selector(review_type)]

    if reviews_data is not None and reviews_data.reviews:
        blocks.append(Section(text=Markdown("*Review requests*")))
        for review in reviews_data.reviews:
            blocks.extend(render_compact_review(review, link_base=link_base))
        blocks.append(Divider())
        blocks.append(Section(text=Markdown(format_totals(reviews_data))))

    blocks.append(Divider())
    return blocks


def build_home_view(
    review_type: ReviewType,
    reviews_data: ReviewsData | None,
    *,
    link_base: str | None = None,
) -> View:
    return View(
        type="home",
        blocks=tuple(render_home_surface(review_type, reviews_data, link_base=link_base)),
    )
