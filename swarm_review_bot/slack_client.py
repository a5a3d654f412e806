"""Thin wrapper around the Slack WebClient for publishing view records."""

from __future__ import annotations

from typing import Any, Mapping

from slack_sdk import WebClient

from .views import View, serialize


class SlackClient:
    """Serialise :class:`View` records and hand them to the WebClient."""

    def __init__(self, *, token: str | None = None, client: WebClient | None = None) -> None:
        if client is None and token is None:
            raise ValueError("Either an instantiated client or a bot token must be provided.")

        self._client = client or WebClient(token=token)

    @property
    def client(self) -> WebClient:
        """Expose the underlying WebClient for advanced use cases."""

        return self._client

    def open_modal(self, *, trigger_id: str, view: View) -> Mapping[str, Any]:
        """Open *view* as a modal for the interaction behind *trigger_id*."""

        return self._client.views_open(trigger_id=trigger_id, view=serialize(view))

    def update_view(self, *, view_id: str, view: View) -> Mapping[str, Any]:
        """Replace the contents of an already published view in place."""

        return self._client.views_update(view_id=view_id, view=serialize(view))

    def publish_home(self, *, user_id: str, view: View) -> Mapping[str, Any]:
        return self._client.views_publish(user_id=user_id, view=serialize(view))
