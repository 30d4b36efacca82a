"""Data models for the talks indexer."""

from talks_indexer.models.conference import Conference
from talks_indexer.models.result import ReindexResult
from talks_indexer.models.talk import (
    PUBLIC_STATUSES,
    Speaker,
    Talk,
    TalkStatus,
    filter_public_talks,
    is_public_status,
    prepare_private_talks,
    talk_to_document,
)

__all__ = [
    "Conference",
    "PUBLIC_STATUSES",
    "ReindexResult",
    "Speaker",
    "Talk",
    "TalkStatus",
    "filter_public_talks",
    "is_public_status",
    "prepare_private_talks",
    "talk_to_document",
]
