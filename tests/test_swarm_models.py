"""Tests for the Swarm payload models."""

from pathlib import Path
import sys

import pytest
from pydantic import ValidationError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from swarm_review_bot.swarm.models import Review, ReviewDetails, ReviewsData, User  # noqa: E402


def test_review_parses_swarm_payload():
    review = Review.model_validate(
        {
            "id": 12345,
            "author": "jdoe",
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
            "updated": None,
            "groups": ["ignored"],
        }
    )

    assert review.id == 12345
    assert review.state_label == "Needs Review"
    assert review.test_status == "pass"
    assert review.changes == [12344]
    assert list(review.participants) == ["jdoe", "asmith"]
    assert review.updated is None
    assert review.needs_decision is True


def test_review_only_requires_id_and_state():
    review = Review.model_validate({"id": 1, "state": "approved"})

    assert review.author is None
    assert review.commits is None
    assert review.participants is None
    assert review.needs_decision is False

    with pytest.raises(ValidationError):
        Review.model_validate({"id": 1})
    with pytest.raises(ValidationError):
        Review.model_validate({"state": "approved"})


def test_review_accepts_empty_participant_list():
    review = Review.model_validate({"id": 1, "state": "approved", "participants": [], "commits": []})

    assert review.participants == {}
    assert review.commits == []


def test_review_keeps_null_collections_absent():
    review = Review.model_validate({"id": 1, "state": "approved", "commits": None, "participants": None})

    assert review.commits is None
    assert review.participants is None


def test_review_is_immutable():
    review = Review.model_validate({"id": 1, "state": "approved"})

    with pytest.raises(ValidationError):
        review.state = "rejected"


def test_review_details_unwraps_envelope():
    details = ReviewDetails.model_validate({"review": {"id": 3, "state": "needsRevision"}})

    assert details.review.id == 3


def test_reviews_data_defaults_and_order():
    data = ReviewsData.model_validate(
        {"reviews": [{"id": 9, "state": "approved"}, {"id": 2, "state": "needsReview"}]}
    )

    assert [review.id for review in data.reviews] == [9, 2]
    assert data.total_count is None
    assert data.last_seen is None

    assert ReviewsData.model_validate({"reviews": None}).reviews == []


@pytest.mark.parametrize(
    "payload",
    [
        {"User": "jdoe", "Email": "jdoe@example.com", "FullName": "J Doe", "Reviews": [1, 2]},
        {"user": "jdoe", "email": "jdoe@example.com", "fullname": "J Doe", "reviews": ["1", "2"]},
        {"username": "jdoe", "email": "jdoe@example.com", "fullName": "J Doe", "reviews": [1, "2"]},
    ],
)
def test_user_accepts_alternate_field_names(payload):
    user = User.model_validate(payload)

    assert user.username == "jdoe"
    assert user.email == "jdoe@example.com"
    assert user.full_name == "J Doe"
    assert user.reviews == ["1", "2"]


def test_user_fields_are_optional():
    user = User.model_validate({})

    assert user.username is None
    assert user.reviews == []


@pytest.mark.parametrize("value", ["123", 123])
def test_user_wraps_single_review_value(value):
    user = User.model_validate({"username": "jdoe", "reviews": value})

    assert user.reviews == ["123"]
