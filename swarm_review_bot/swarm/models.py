"""Pydantic models describing the Swarm API payloads the bot reads."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class _SwarmRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Review(_SwarmRecord):
    id: int
    state: str
    author: str | None = None
    description: str | None = None
    state_label: str | None = Field(None, alias="stateLabel")
    type: str | None = None
    deploy_status: str | None = Field(None, alias="deployStatus")
    test_status: str | None = Field(None, alias="testStatus")
    commit_status: str | List[str] | Dict[str, Any] | None = Field(None, alias="commitStatus")
    commits: List[int] | None = None
    changes: List[int] | None = None
    comments: List[int] | None = None
    participants: Dict[str, Any] | None = None
    pending: bool | None = None
    created: int | None = None
    updated: int | None = None

    @field_validator("participants", mode="before")
    @classmethod
    def _coerce_participants(cls, value):
        """Swarm serialises an empty participant map as ``[]``."""

        if isinstance(value, list):
            return {str(name): {} for name in value}
        return value

    @property
    def needs_decision(self) -> bool:
        return self.state.startswith("needs")


class ReviewDetails(_SwarmRecord):
    """Envelope returned by ``GET /reviews/{id}``."""

    review: Review


class ReviewsData(_SwarmRecord):
    """One page of a review list query, in the order Swarm returned it."""

    reviews: List[Review] = Field(default_factory=list)
    total_count: int | None = Field(None, alias="totalCount", ge=0)
    last_seen: int | None = Field(None, alias="lastSeen")

    @field_validator("reviews", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value


class User(_SwarmRecord):
    username: str | None = Field(None, validation_alias=AliasChoices("username", "user", "User"))
    type: str | None = Field(None, validation_alias=AliasChoices("type", "Type"))
    email: str | None = Field(None, validation_alias=AliasChoices("email", "Email"))
    full_name: str | None = Field(
        None, validation_alias=AliasChoices("fullName", "fullname", "FullName", "full_name")
    )
    reviews: List[str] = Field(default_factory=list, validation_alias=AliasChoices("reviews", "Reviews"))

    @field_validator("reviews", mode="before")
    @classmethod
    def _stringify_reviews(cls, value):
        if value is None:
            return []
        if isinstance(value, (str, int)):
            value = [value]
        return [str(item) for item in value]
