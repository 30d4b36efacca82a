"""Interfaces between the orchestrator and its collaborators."""

from typing import Any, Protocol

from talks_indexer.models import Conference, ReindexResult, Talk


class ConferenceProvider(Protocol):
    async def get_conferences(self) -> list[Conference]: ...


class TalkSource(ConferenceProvider, Protocol):
    """Read-only access to conferences and talks.

    `get_talk` raises TalkNotFoundError for unknown ids; every other
    failure is a SourceError.
    """

    async def get_talks(self, conference_id: str) -> list[Talk]: ...

    async def get_talk(self, talk_id: str) -> Talk: ...


class SearchIndex(Protocol):
    """Index lifecycle and bulk writes against a search engine."""

    async def bulk_index(self, index_name: str, talks: list[Talk]) -> None: ...

    async def delete_index(self, index_name: str) -> None: ...

    async def create_index(self, index_name: str, mapping: dict[str, Any]) -> None: ...

    async def index_exists(self, index_name: str) -> bool: ...


class Indexer(Protocol):
    """The reindex operations exposed to the API and CLI."""

    async def reindex_all(self) -> ReindexResult: ...

    async def reindex_conference(self, slug: str) -> ReindexResult: ...

    async def reindex_talk(self, talk_id: str) -> ReindexResult: ...
