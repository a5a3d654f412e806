"""Tests for the review and user layout builders."""

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:  # pragma: no cover
    sys.path.insert(0, str(ROOT))

from swarm_review_bot.swarm.models import Review, User  # noqa: E402
from swarm_review_bot.views import (  # noqa: E402
    Actions,
    Context,
    Divider,
    Section,
    build_review_modal,
    format_date,
    render_compact_review,
    render_review_detail,
    render_user_summary,
    serialize,
    serialize_blocks,
)

REVIEW_PAYLOAD = {
    "id": 12345,
    "author": "jdoe",
    "description": "Fix flaky checkout test\n",
    "state": "needsReview",
    "stateLabel": "Needs Review",
    "deployStatus": None,
    "testStatus": "pass",
    "commitStatus": [],
    "commits": [],
    "changes": [12344],
    "comments": [2, 0],
    "participants": {"jdoe": [], "asmith": {"vote": 1}},
    "pending": True,
    "created": 1700000000000,
    "updated": 1700086400000,
}


def _review(**overrides) -> Review:
    payload = dict(REVIEW_PAYLOAD)
    payload.update(overrides)
    return Review.model_validate(payload)


def _action_ids(blocks) -> list[str]:
    actions = [block for block in blocks if isinstance(block, Actions)]
    assert len(actions) == 1
    return [button.action_id for button in actions[0].elements]


def _detail_labels(section: Section) -> list[str]:
    return [line.split(":*", 1)[0].lstrip("*") for line in section.text.text.split("\n")]


def test_format_date_uses_utc_iso_dates():
    assert format_date(1700000000000) == "2023-11-14"
    assert format_date(None) == "Unknown"


def test_compact_review_layout():
    blocks = render_compact_review(_review())

    assert [type(block) for block in blocks] == [Divider, Section, Context, Actions]
    summary = blocks[1].text.text
    assert "*Change List:* `12345`" in summary
    assert "*Description:* Fix flaky checkout test" in summary
    assert "*Status:* Needs Review" in summary
    assert blocks[1].accessory.alt_text == "Helix Swarm Bee"
    assert blocks[2].elements[1].text == "Submitted by: *jdoe* on 2023-11-14"


@pytest.mark.parametrize("state", ["needsReview", "needsRevision"])
def test_compact_review_offers_decisions_while_review_is_needed(state):
    blocks = render_compact_review(_review(state=state))

    assert _action_ids(blocks) == ["details_12345", "approve_12345", "decline_12345"]
    styles = [button.style for button in blocks[-1].elements]
    assert styles == [None, "primary", "danger"]


@pytest.mark.parametrize("state", ["approved", "rejected", "archived", "NeedsReview", "reviewNeeded"])
def test_compact_review_only_offers_details_otherwise(state):
    blocks = render_compact_review(_review(state=state))

    assert _action_ids(blocks) == ["details_12345"]
    assert blocks[-1].elements[0].text == "View Details"


def test_compact_review_renders_unknown_for_missing_fields():
    review = Review.model_validate({"id": 7, "state": "approved"})

    blocks = render_compact_review(review)

    assert "*Description:* Unknown" in blocks[1].text.text
    assert "*Status:* approved" in blocks[1].text.text
    assert blocks[2].elements[1].text == "Submitted by: *Unknown* on Unknown"


def test_compact_review_links_change_list_when_link_base_given():
    blocks = render_compact_review(_review(), link_base="https://swarm.example.com/reviews/")

    assert "<https://swarm.example.com/reviews/12345|:link: 12345>" in blocks[1].text.text


def test_compact_review_is_deterministic():
    assert render_compact_review(_review()) == render_compact_review(_review())
    assert serialize_blocks(render_compact_review(_review())) == serialize_blocks(render_compact_review(_review()))


def test_review_detail_lists_fields_in_fixed_order():
    section = render_review_detail(_review())

    assert _detail_labels(section) == [
        "ID",
        "Author",
        "Description",
        "Status",
        "Test status",
        "Commit status",
        "Commits",
        "Changes",
        "Comments",
        "Participants",
        "Created",
        "Last updated",
    ]
    text = section.text.text
    assert "*ID:* 12345" in text
    assert "*Status:* Needs Review (`needsReview`)" in text
    assert "*Commits:* none" in text
    assert "*Comments:* 2, 0" in text
    assert "*Participants:* jdoe, asmith" in text
    assert "*Created:* 2023-11-14" in text
    assert "*Last updated:* 2023-11-15" in text


def test_review_detail_omits_absent_fields():
    section = render_review_detail(Review.model_validate({"id": 7, "state": "approved"}))

    assert _detail_labels(section) == ["ID", "Status"]
    assert section.text.text == "*ID:* 7\n*Status:* `approved`"
    assert "Deploy status" not in section.text.text
    assert "Last updated" not in section.text.text


def test_review_modal_has_no_decision_buttons():
    modal = serialize(build_review_modal(_review()))

    assert modal["type"] == "modal"
    assert modal["callback_id"] == "pullrequest-details"
    assert modal["title"]["text"] == "Review Details"
    assert modal["notify_on_close"] is False
    assert [block["type"] for block in modal["blocks"]] == ["section"]
    assert "approve_" not in str(modal)
    assert "decline_" not in str(modal)


def test_user_summary_always_renders_all_fields():
    full = render_user_summary(
        User.model_validate({"User": "jdoe", "Email": "jdoe@example.com", "FullName": "J Doe", "Reviews": [5, 6]})
    )
    empty = render_user_summary(User.model_validate({"User": "ghost"}))

    assert full.text.text.split("\n") == [
        "*Username:* jdoe",
        "*Email:* jdoe@example.com",
        "*Full Name:* J Doe",
        "*Reviews:* 5, 6",
    ]
    assert empty.text.text.split("\n") == [
        "*Username:* ghost",
        "*Email:* ",
        "*Full Name:* ",
        "*Reviews:* ",
    ]


def test_review_detail_shows_none_for_present_empty_collections():
    review = Review.model_validate({"id": 7, "state": "approved", "commits": [], "participants": []})
    section = render_review_detail(review)

    assert _detail_labels(section) == ["ID", "Status", "Commits", "Participants"]
    assert "*Commits:* none" in section.text.text
    assert "*Participants:* none" in section.text.text
