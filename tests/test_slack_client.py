"""Unit tests for the Slack WebClient wrapper."""

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from swarm_review_bot.slack_client import SlackClient  # noqa: E402
from swarm_review_bot.views import Divider, View  # noqa: E402


class DummyWebClient:
    def __init__(self):
        self.calls = []

    def views_open(self, **kwargs):
        self.calls.append(("open", kwargs))
        return {"ok": True}

    def views_update(self, **kwargs):
        self.calls.append(("update", kwargs))
        return {"ok": True}

    def views_publish(self, **kwargs):
        self.calls.append(("publish", kwargs))
        return {"ok": True}


VIEW = View(type="home", blocks=(Divider(),))
SERIALISED = {"type": "home", "blocks": [{"type": "divider"}]}


def test_requires_token_or_client():
    with pytest.raises(ValueError):
        SlackClient()


def test_open_modal_serialises_view():
    dummy = DummyWebClient()
    client = SlackClient(client=dummy)

    response = client.open_modal(trigger_id="123.456", view=VIEW)

    assert dummy.calls == [("open", {"trigger_id": "123.456", "view": SERIALISED})]
    assert response["ok"] is True
    assert client.client is dummy


def test_update_view_targets_view_id():
    dummy = DummyWebClient()

    SlackClient(client=dummy).update_view(view_id="V123", view=VIEW)

    assert dummy.calls == [("update", {"view_id": "V123", "view": SERIALISED})]


def test_publish_home_targets_user():
    dummy = DummyWebClient()

    SlackClient(client=dummy).publish_home(user_id="U123", view=VIEW)

    assert dummy.calls == [("publish", {"user_id": "U123", "view": SERIALISED})]
