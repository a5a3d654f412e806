"""Read-only client and record models for the Helix Swarm API."""

from .client import SwarmClient, SwarmSettings
from .models import Review, ReviewDetails, ReviewsData, User

__all__ = [
    "SwarmClient",
    "SwarmSettings",
    "Review",
    "ReviewDetails",
    "ReviewsData",
    "User",
]
