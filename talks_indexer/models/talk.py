"""Talk model and its private/public index projections.

Every talk is written to the private index with its private data folded
into `data`. Only approved talks reach the public index, and never with
their private data.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class TalkStatus(str, Enum):
    """Lifecycle states reported by the talk source."""

    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    DRAFT = "DRAFT"
    HISTORIC = "HISTORIC"


PUBLIC_STATUSES = frozenset({TalkStatus.APPROVED.value})


def is_public_status(status: str) -> bool:
    """True if talks in this status belong in the public index."""
    return status in PUBLIC_STATUSES


class Speaker(BaseModel):
    """A speaker attached to a talk."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    data: dict[str, Any] = Field(default_factory=dict)
    private_data: Optional[dict[str, Any]] = Field(
        default_factory=dict,
        alias="privateData",
        description="Email, residence and other admin-only attributes",
    )

    def to_private(self) -> "Speaker":
        merged = {**self.data, **(self.private_data or {})}
        return self.model_copy(update={"data": merged, "private_data": {}})

    def to_public(self) -> "Speaker":
        return self.model_copy(update={"data": dict(self.data), "private_data": None})


class Talk(BaseModel):
    """A talk (session) submitted to a conference."""

    model_config = ConfigDict(populate_by_name=True)

    id: str

    # ===== CONFERENCE LINK =====
    conference_id: str = Field(alias="conferenceId")
    conference_slug: str = Field(default="", alias="conferenceSlug")
    conference_name: str = Field(
        default="",
        alias="conferenceName",
        description="Denormalized for display/search",
    )

    status: str = TalkStatus.SUBMITTED.value

    # ===== OPEN FIELDS =====
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Public-safe fields: title, abstract, schedule...",
    )
    private_data: Optional[dict[str, Any]] = Field(
        default_factory=dict,
        alias="privateData",
        description="Submitter, committee feedback, internal notes",
    )
    speakers: list[Speaker] = Field(default_factory=list)

    created: Optional[datetime] = None
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")

    @property
    def is_public(self) -> bool:
        return is_public_status(self.status)

    def to_private(self) -> "Talk":
        """Projection for the private index: private data wins on key collision."""
        merged = {**self.data, **(self.private_data or {})}
        return self.model_copy(
            update={
                "data": merged,
                "private_data": {},
                "speakers": [s.to_private() for s in self.speakers],
            }
        )

    def to_public(self) -> "Talk":
        """Projection for the public index: private data dropped entirely."""
        return self.model_copy(
            update={
                "data": dict(self.data),
                "private_data": None,
                "speakers": [s.to_public() for s in self.speakers],
            }
        )


def talk_to_document(talk: Talk) -> dict:
    """Convert Talk to a search document (camelCase keys, no None values)."""
    return talk.model_dump(by_alias=True, mode="json", exclude_none=True)


def prepare_private_talks(talks: list[Talk]) -> list[Talk]:
    return [talk.to_private() for talk in talks]


def filter_public_talks(talks: list[Talk]) -> list[Talk]:
    """Keep approved talks only, with private data removed."""
    return [talk.to_public() for talk in talks if talk.is_public]
