"""Search index backends for the private and public talk indexes."""

from talks_indexer.indexers.elasticsearch import ElasticsearchIndex
from talks_indexer.indexers.mappings import (
    TALK_PRIVATE_INDEX_MAPPING,
    TALK_PRIVATE_INDEX_SETTINGS,
    TALK_PUBLIC_INDEX_MAPPING,
    TALK_PUBLIC_INDEX_SETTINGS,
)

__all__ = [
    "ElasticsearchIndex",
    "TALK_PRIVATE_INDEX_MAPPING",
    "TALK_PRIVATE_INDEX_SETTINGS",
    "TALK_PUBLIC_INDEX_MAPPING",
    "TALK_PUBLIC_INDEX_SETTINGS",
]
