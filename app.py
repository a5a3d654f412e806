"""Application entry point for the Swarm review Slack bot."""

from __future__ import annotations

import re
from pathlib import Path
from uuid import uuid4

from flask import Flask, jsonify, request

from slack_bolt import App as SlackApp
from slack_bolt.adapter.flask import SlackRequestHandler

import structlog

from swarm_review_bot.actions import (
    CHANGE_REVIEW_TYPE_ACTION_ID,
    DECISION_ACTION_PATTERN,
    DETAILS_ACTION_PATTERN,
)
from swarm_review_bot.config import AppSettings, get_settings
from swarm_review_bot.dispatcher import InteractionDispatcher
from swarm_review_bot.logging_config import configure_logging
from swarm_review_bot.swarm import SwarmClient

SLASH_COMMAND_PATTERN = re.compile(r"^/.*")


def _create_bolt_app(settings: AppSettings) -> SlackApp:
    """Initialise the Slack Bolt application using validated settings."""

    return SlackApp(
        token=settings.bot_token,
        signing_secret=settings.signing_secret,
        token_verification_enabled=False,
    )


def _create_dispatcher(settings: AppSettings) -> InteractionDispatcher:
    return InteractionDispatcher(
        swarm=SwarmClient(settings.swarm()),
        actor_username=settings.swarm_username,
        link_base=settings.swarm_web_url,
    )


def _register_error_handlers(flask_app: Flask) -> None:
    """Register a JSON error handler that attaches a trace identifier."""

    @flask_app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):  # type: ignore[override]
        trace_id = str(uuid4())
        flask_app.logger.exception(
            "Unhandled application error", extra={"trace_id": trace_id}, exc_info=error
        )
        response = jsonify({"error": "internal_server_error", "trace_id": trace_id})
        response.status_code = 500
        return response


def _register_command_handlers(bolt_app: SlackApp, dispatcher: InteractionDispatcher) -> None:
    @bolt_app.command(SLASH_COMMAND_PATTERN)
    def handle_command(ack, command, logger):
        dispatcher.handle_command(ack=ack, command=command, logger=logger)


def _register_action_handlers(bolt_app: SlackApp, dispatcher: InteractionDispatcher) -> None:
    @bolt_app.action(DETAILS_ACTION_PATTERN)
    def handle_review_details(ack, body, client, logger):
        dispatcher.handle_review_details(ack=ack, body=body, client=client, logger=logger)

    @bolt_app.action(DECISION_ACTION_PATTERN)
    def handle_review_decision(ack, body, logger):
        dispatcher.handle_review_decision(ack=ack, body=body, logger=logger)

    @bolt_app.action(CHANGE_REVIEW_TYPE_ACTION_ID)
    def handle_review_type_change(ack, body, client, logger):
        dispatcher.handle_review_type_change(ack=ack, body=body, client=client, logger=logger)


def _register_home_handlers(bolt_app: SlackApp, dispatcher: InteractionDispatcher) -> None:
    @bolt_app.event("app_home_opened")
    def handle_app_home(event, client, logger):
        dispatcher.handle_app_home_opened(event=event, client=client, logger=logger)


def create_bolt_app(settings: AppSettings, dispatcher: InteractionDispatcher | None = None) -> SlackApp:
    """Build the Bolt app with every listener registered."""

    bolt_app = _create_bolt_app(settings)
    dispatcher = dispatcher or _create_dispatcher(settings)

    _register_command_handlers(bolt_app, dispatcher)
    _register_action_handlers(bolt_app, dispatcher)
    _register_home_handlers(bolt_app, dispatcher)
    return bolt_app


_LOGGING_CONFIGURED = False


def _ensure_logging(settings: AppSettings) -> None:
    global _LOGGING_CONFIGURED
    if not _LOGGING_CONFIGURED:
        configure_logging(settings.log_level)
        _LOGGING_CONFIGURED = True


def _load_version() -> str:
    version_file = Path(__file__).resolve().parent / "VERSION"
    if version_file.exists():
        return version_file.read_text(encoding="utf-8").strip()
    return "unknown"


def create_app(bolt_app: SlackApp | None = None) -> Flask:
    """Create and configure the Flask application."""

    settings = get_settings()
    _ensure_logging(settings)

    bolt_app = bolt_app or create_bolt_app(settings)
    handler = SlackRequestHandler(bolt_app)

    flask_app = Flask(__name__)
    flask_app.config["APP_VERSION"] = _load_version()
    flask_app.logger.setLevel(settings.log_level)

    _register_error_handlers(flask_app)

    @flask_app.route("/slack/events", methods=["POST"])
    def slack_events():
        # Bolt verifies the signature and builds the ack, status included.
        return handler.handle(request)

    @flask_app.route("/healthz", methods=["GET"])
    def healthz():
        health: dict[str, object] = {"ok": True}
        health["version"] = flask_app.config.get("APP_VERSION", "unknown")
        try:
            get_settings()
            health["config"] = "valid"
        except Exception as exc:  # pragma: no cover - settings were valid at startup
            health["config"] = "invalid"
            health["config_error"] = str(exc)
            health["ok"] = False

        status = 200 if health["ok"] else 503
        return jsonify(health), status

    return flask_app


def main() -> None:  # pragma: no cover - manual execution helper
    settings = get_settings()
    _ensure_logging(settings)
    log = structlog.get_logger()

    if settings.app_token:
        from slack_bolt.adapter.socket_mode import SocketModeHandler

        log.info("socket_mode_starting")
        SocketModeHandler(create_bolt_app(settings), settings.app_token).start()
        return

    log.info("http_listener_starting", port=settings.port)
    create_app().run(host="0.0.0.0", port=settings.port)


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    main()
