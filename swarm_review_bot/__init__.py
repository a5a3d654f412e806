"""Slack bot for browsing Helix Swarm code reviews."""

from .config import AppSettings, get_settings  # noqa: F401
from .dispatcher import InteractionDispatcher  # noqa: F401
from .logging_config import configure_logging  # noqa: F401
from .review_type import ReviewType  # noqa: F401
from .swarm import SwarmClient, SwarmSettings  # noqa: F401

__all__ = [
    "AppSettings",
    "get_settings",
    "InteractionDispatcher",
    "configure_logging",
    "ReviewType",
    "SwarmClient",
    "SwarmSettings",
]
