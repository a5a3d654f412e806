"""Routing of Slack commands, block actions and Home tab events to Swarm."""

from __future__ import annotations

from uuid import uuid4

import structlog
from slack_sdk.errors import SlackApiError
from structlog.contextvars import bind_contextvars, unbind_contextvars

from .actions import ReviewOperation, decode_action_id
from .commands import AppCommand, SlashCommand, parse_review_number, parse_slash_command, require_argument
from .errors import NotFoundError, ParseError, UpstreamError, ValidationError
from .review_type import ReviewType
from .slack_client import SlackClient
from .swarm.client import SwarmClient
from .swarm.models import ReviewsData
from .views import (
    build_home_view,
    build_review_modal,
    render_compact_review,
    render_user_summary,
    serialize_blocks,
)

HOME_TAB = "home"

USER_PROMPT = ":exclamation: Please type username"
CHANGELIST_PROMPT = ":exclamation: Please provide change list number you want to review"
USER_NOT_FOUND = ":warning: User Not Found!"
REVIEW_NOT_FOUND = ":warning: Review Not Found!"
COMMAND_NOT_SUPPORTED = ":warning: Command not supported!"
SWARM_UNAVAILABLE = ":x: Unable to reach Swarm right now."
REVIEWS_UNAVAILABLE = "Error retrieving reviews"
ACTION_FAILED = "Unable to process this action."


def ack_error(ack, message: str, *, status: int = 500) -> None:
    """Acknowledge with *message* and a non-success HTTP status."""

    response = ack(text=message)
    if response is not None:
        response.status = status


def _slack_error_code(exc: SlackApiError) -> str:
    response = getattr(exc, "response", None)
    return response.get("error") if response is not None else str(exc)


class InteractionDispatcher:
    """Turn one inbound Slack interaction into Swarm lookups and a UI effect.

    Nothing is remembered between calls: the review type shown on the Home
    tab is re-read from each payload and the review id travels inside the
    button's action identifier.
    """

    def __init__(self, *, swarm: SwarmClient, actor_username: str, link_base: str | None = None) -> None:
        self._swarm = swarm
        self._actor_username = actor_username
        self._link_base = link_base

    def handle_command(self, *, ack, command: dict, logger) -> None:
        trace_id = str(uuid4())
        bind_contextvars(trace_id=trace_id)
        log = structlog.get_logger().bind(trace_id=trace_id)

        try:
            parsed = parse_slash_command(command)
            log = log.bind(command=parsed.command.value, user_name=parsed.user_name)
            log.info(
                "slash_command_received",
                raw_command=command.get("command"),
                channel_name=parsed.channel_name,
            )

            if parsed.command is AppCommand.HELLO:
                ack(text=f":wave: Hello {parsed.user_name}!")
            elif parsed.command is AppCommand.USER:
                self._find_user(ack, parsed, log, logger)
            elif parsed.command is AppCommand.CHANGELIST:
                self._find_review(ack, parsed, log, logger)
            else:
                ack(text=COMMAND_NOT_SUPPORTED)
                log.info("slash_command_unsupported")
        finally:
            unbind_contextvars("trace_id")

    def _find_user(self, ack, parsed: SlashCommand, log, logger) -> None:
        try:
            username = require_argument(parsed.text, USER_PROMPT)
        except ValidationError as exc:
            ack(text=str(exc))
            log.info("slash_command_missing_argument")
            return

        try:
            user = self._swarm.fetch_user(username)
        except NotFoundError:
            ack(text=USER_NOT_FOUND)
            log.info("swarm_user_missing", username=username)
            return
        except UpstreamError as exc:
            log.error("swarm_user_fetch_failed", username=username, error=str(exc))
            logger.error("Failed to fetch Swarm user", extra={"username": username, "error": str(exc)})
            ack_error(ack, SWARM_UNAVAILABLE)
            return

        ack(text=f"Swarm user {username}", blocks=serialize_blocks([render_user_summary(user)]))
        log.info("swarm_user_rendered", username=username)

    def _find_review(self, ack, parsed: SlashCommand, log, logger) -> None:
        try:
            argument = require_argument(parsed.text, CHANGELIST_PROMPT)
        except ValidationError as exc:
            ack(text=str(exc))
            log.info("slash_command_missing_argument")
            return

        review_id = parse_review_number(argument)
        if review_id is None:
            ack(text=REVIEW_NOT_FOUND)
            log.info("swarm_review_id_invalid", argument=argument)
            return

        log = log.bind(review_id=review_id)
        try:
            review = self._swarm.fetch_review(review_id)
        except NotFoundError:
            ack(text=REVIEW_NOT_FOUND)
            log.info("swarm_review_missing")
            return
        except UpstreamError as exc:
            log.error("swarm_review_fetch_failed", error=str(exc))
            logger.error("Failed to fetch Swarm review", extra={"review_id": review_id, "error": str(exc)})
            ack_error(ack, SWARM_UNAVAILABLE)
            return

        blocks = render_compact_review(review, link_base=self._link_base)
        ack(text=f"Review {review.id}", blocks=serialize_blocks(blocks))
        log.info("swarm_review_rendered", state=review.state)

    def handle_review_details(self, *, ack, body: dict, client, logger) -> None:
        trace_id = str(uuid4())
        bind_contextvars(trace_id=trace_id)
        log = structlog.get_logger().bind(trace_id=trace_id)

        try:
            actions = body.get("actions") or []
            action_id = actions[0].get("action_id", "") if actions else ""
            try:
                identifier = decode_action_id(action_id)
            except ParseError:
                log.error("review_action_unparseable", action_id=action_id)
                logger.error("Received malformed review action identifier", extra={"action_id": action_id})
                ack_error(ack, ACTION_FAILED)
                return

            if identifier.operation is not ReviewOperation.DETAILS:
                log.error("review_action_misrouted", action_id=action_id)
                ack_error(ack, ACTION_FAILED)
                return

            log = log.bind(review_id=identifier.review_id, user_id=body.get("user", {}).get("id"))
            try:
                review = self._swarm.fetch_review(identifier.review_id)
            except NotFoundError:
                ack(text=REVIEW_NOT_FOUND)
                log.info("swarm_review_missing")
                return
            except UpstreamError as exc:
                log.error("swarm_review_fetch_failed", error=str(exc))
                logger.error(
                    "Failed to fetch Swarm review for details modal",
                    extra={"review_id": identifier.review_id, "error": str(exc)},
                )
                ack_error(ack, SWARM_UNAVAILABLE)
                return

            trigger_id = body.get("trigger_id")
            if not trigger_id:
                ack_error(ack, ACTION_FAILED)
                log.warning("review_details_missing_trigger")
                return

            try:
                SlackClient(client=client).open_modal(trigger_id=trigger_id, view=build_review_modal(review))
            except SlackApiError as exc:
                error_code = _slack_error_code(exc)
                log.error("review_details_open_failed", error=error_code)
                logger.error("Failed to open review details modal", extra={"error": error_code})
                ack_error(ack, ACTION_FAILED)
                return

            ack()
            log.info("review_details_opened")
        finally:
            unbind_contextvars("trace_id")

    def handle_review_decision(self, *, ack, body: dict, logger) -> None:
        """Acknowledge Approve/Decline clicks; the Swarm client is read-only."""

        trace_id = str(uuid4())
        bind_contextvars(trace_id=trace_id)
        log = structlog.get_logger().bind(trace_id=trace_id)

        try:
            actions = body.get("actions") or []
            action_id = actions[0].get("action_id", "") if actions else ""
            try:
                identifier = decode_action_id(action_id)
            except ParseError:
                log.error("review_action_unparseable", action_id=action_id)
                logger.error("Received malformed review action identifier", extra={"action_id": action_id})
                ack_error(ack, ACTION_FAILED)
                return

            ack()
            log.info(
                "review_decision_unsupported",
                operation=identifier.operation.value,
                review_id=identifier.review_id,
                user_id=body.get("user", {}).get("id"),
            )
        finally:
            unbind_contextvars("trace_id")

    def handle_review_type_change(self, *, ack, body: dict, client, logger) -> None:
        trace_id = str(uuid4())
        bind_contextvars(trace_id=trace_id)
        log = structlog.get_logger().bind(trace_id=trace_id, user_id=body.get("user", {}).get("id"))

        try:
            try:
                review_type = ReviewType.selected_in(body)
            except ValueError:
                ack_error(ack, ACTION_FAILED)
                log.warning("review_type_invalid")
                return

            log = log.bind(review_type=review_type.name)
            view_id = (body.get("view") or {}).get("id")
            if not view_id:
                ack_error(ack, ACTION_FAILED)
                log.warning("review_type_missing_view")
                return

            try:
                reviews_data = self._fetch_review_list(review_type, log)
            except UpstreamError as exc:
                log.error("swarm_review_list_failed", error=str(exc))
                logger.error("Failed to fetch Swarm reviews", extra={"review_type": review_type.name})
                ack_error(ack, REVIEWS_UNAVAILABLE)
                return

            view = build_home_view(review_type, reviews_data, link_base=self._link_base)
            try:
                SlackClient(client=client).update_view(view_id=view_id, view=view)
            except SlackApiError as exc:
                error_code = _slack_error_code(exc)
                log.error("app_home_update_failed", error=error_code)
                logger.error("Failed to update App Home view", extra={"error": error_code})
                ack_error(ack, ACTION_FAILED)
                return

            ack()
            log.info("app_home_updated", review_count=len(reviews_data.reviews) if reviews_data else 0)
        finally:
            unbind_contextvars("trace_id")

    def handle_app_home_opened(self, *, event: dict, client, logger) -> None:
        """Publish the Home tab the first time a user opens it.

        Bolt acknowledges events before listeners run, so failures here are
        only logged.
        """

        trace_id = str(uuid4())
        bind_contextvars(trace_id=trace_id)
        event = event or {}
        user_id = event.get("user")
        log = structlog.get_logger().bind(trace_id=trace_id, user_id=user_id)

        try:
            log.info("app_home_opened", tab=event.get("tab"))

            if event.get("tab") != HOME_TAB:
                log.info("app_home_publish_skipped", reason="not_home_tab")
                return
            if event.get("view"):
                log.info("app_home_publish_skipped", reason="view_exists")
                return

            try:
                reviews_data = self._fetch_review_list(ReviewType.AUTHOR, log)
            except UpstreamError as exc:
                log.error("swarm_review_list_failed", error=str(exc))
                logger.error("Failed to fetch Swarm reviews for App Home", extra={"user_id": user_id})
                return

            view = build_home_view(ReviewType.AUTHOR, reviews_data, link_base=self._link_base)
            try:
                SlackClient(client=client).publish_home(user_id=user_id, view=view)
            except SlackApiError as exc:
                error_code = _slack_error_code(exc)
                log.error("app_home_publish_failed", error=error_code)
                logger.error(
                    "Failed to publish App Home view",
                    extra={"user_id": user_id, "error": error_code},
                )
                return

            log.info("app_home_published", review_count=len(reviews_data.reviews) if reviews_data else 0)
        finally:
            unbind_contextvars("trace_id")

    def _fetch_review_list(self, review_type: ReviewType, log) -> ReviewsData | None:
        try:
            return self._swarm.fetch_review_list(review_type, self._actor_username)
        except NotFoundError:
            log.info("swarm_review_list_missing", review_type=review_type.name)
            return None
