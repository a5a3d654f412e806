"""HTTP client for the read-only subset of the Helix Swarm REST API."""

from __future__ import annotations

from http.cookiejar import DefaultCookiePolicy
from typing import Any, Mapping
from urllib.parse import quote

import requests
import structlog
from pydantic import BaseModel, ConfigDict, ValidationError
from requests.auth import HTTPBasicAuth

from ..errors import NotFoundError, UpstreamError
from ..review_type import ReviewType
from .models import Review, ReviewDetails, ReviewsData, User

_LIST_FILTERS = {
    ReviewType.AUTHOR: "author",
    ReviewType.PARTICIPANT: "participants",
}


def stateless_session() -> requests.Session:
    """Return a pooled session whose cookie jar never stores a cookie."""

    session = requests.Session()
    session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
    return session


class SwarmSettings(BaseModel):
    """Connection settings for a single Swarm server."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    username: str
    password: str
    timeout: float = 2.5
    page_size: int = 5


class SwarmClient:
    """Issue authenticated GET requests against Swarm and decode the results.

    The client holds no per-call state, so one instance (and its pooled
    ``requests.Session``) is shared by every Slack handler. The default
    session refuses cookies, so a Swarm session cookie set for one caller is
    never replayed for another.
    """

    def __init__(self, settings: SwarmSettings, *, session: requests.Session | None = None) -> None:
        self._settings = settings
        self._session = session or stateless_session()
        self._auth = HTTPBasicAuth(settings.username, settings.password)

    @property
    def settings(self) -> SwarmSettings:
        return self._settings

    def fetch_review(self, review_id: int | str) -> Review:
        """Return the review with *review_id* or raise :class:`NotFoundError`."""

        payload = self._get(f"reviews/{quote(str(review_id), safe='')}")
        if not isinstance(payload, dict) or payload.get("review") is None:
            raise NotFoundError(f"Review {review_id} not found.")
        return self._validate(ReviewDetails, payload).review

    def fetch_review_list(self, review_type: ReviewType, actor_username: str) -> ReviewsData:
        """Return the first page of reviews *actor_username* authored or joins."""

        field = _LIST_FILTERS.get(review_type, _LIST_FILTERS[ReviewType.AUTHOR])
        payload = self._get(
            "reviews",
            params={"max": self._settings.page_size, field: actor_username},
        )
        if not isinstance(payload, dict):
            raise UpstreamError("Unexpected review list payload.")
        return self._validate(ReviewsData, payload)

    def fetch_user(self, username: str) -> User:
        """Return the Swarm user named *username* or raise :class:`NotFoundError`."""

        payload = self._get("users", params={"users": username})
        if isinstance(payload, dict):
            payload = [payload]
        if not isinstance(payload, list):
            raise UpstreamError("Unexpected user payload.")
        if not payload:
            raise NotFoundError(f"User {username} not found.")
        return self._validate(User, payload[0])

    def _get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        url = f"{self._settings.base_url}/{path}"
        log = structlog.get_logger().bind(url=url, params=dict(params or {}))

        try:
            response = self._session.get(
                url,
                params=params,
                auth=self._auth,
                timeout=self._settings.timeout,
                headers={"Accept": "application/json"},
            )
        except requests.Timeout as exc:
            log.warning("swarm_request_timeout", timeout=self._settings.timeout)
            raise UpstreamError("Swarm request timed out.") from exc
        except requests.RequestException as exc:
            log.warning("swarm_request_failed", error=str(exc))
            raise UpstreamError("Swarm is unreachable.") from exc

        status_code = response.status_code
        log.info("swarm_request", status_code=status_code)

        if status_code >= 500:
            raise UpstreamError(f"Swarm answered with HTTP {status_code}.", status_code=status_code)
        if not response.ok or not response.content:
            raise NotFoundError(f"Swarm has no resource at {path}.")

        try:
            payload = response.json()
        except ValueError as exc:
            log.warning("swarm_response_undecodable", status_code=status_code)
            raise UpstreamError("Swarm returned malformed JSON.", status_code=status_code) from exc

        if payload is None:
            raise NotFoundError(f"Swarm has no resource at {path}.")
        return payload

    @staticmethod
    def _validate(model, payload: Any):
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            structlog.get_logger().warning("swarm_payload_invalid", model=model.__name__, errors=exc.error_count())
            raise UpstreamError(f"Swarm returned an invalid {model.__name__} payload.") from exc
