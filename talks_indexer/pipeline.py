"""Reindex orchestration: fetch talks, project them, write both indexes."""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from rich.console import Console

from talks_indexer.config import Config, SearchBackend
from talks_indexer.errors import ConferenceNotFoundError, IndexerError
from talks_indexer.indexers import (
    TALK_PRIVATE_INDEX_MAPPING,
    TALK_PRIVATE_INDEX_SETTINGS,
    TALK_PUBLIC_INDEX_MAPPING,
    TALK_PUBLIC_INDEX_SETTINGS,
    ElasticsearchIndex,
)
from talks_indexer.indexers.algolia import AlgoliaIndex, get_algolia_client
from talks_indexer.models import (
    Conference,
    ReindexResult,
    Talk,
    filter_public_talks,
    prepare_private_talks,
)
from talks_indexer.ports import SearchIndex, TalkSource
from talks_indexer.sources import MoresleepClient

console = Console()


class IndexerService:
    """Keeps the private and public talk indexes in sync with the talk source.

    Holds no state between calls besides index names and mappings, so every
    operation is safe to retry. Concurrent calls are not serialized.
    """

    def __init__(
        self,
        source: TalkSource,
        search_index: SearchIndex,
        private_index: str,
        public_index: str,
        private_mapping: dict[str, Any],
        public_mapping: dict[str, Any],
    ):
        self.source = source
        self.search_index = search_index
        self.private_index = private_index
        self.public_index = public_index
        self.private_mapping = private_mapping
        self.public_mapping = public_mapping

    @classmethod
    def from_config(
        cls,
        config: Config,
        source: TalkSource,
        search_index: SearchIndex,
        private_mapping: dict[str, Any],
        public_mapping: dict[str, Any],
    ) -> "IndexerService":
        return cls(
            source,
            search_index,
            private_index=config.index.private,
            public_index=config.index.public,
            private_mapping=private_mapping,
            public_mapping=public_mapping,
        )

    async def reindex_all(self) -> ReindexResult:
        """Rebuild both indexes from every conference.

        1. Fetch conferences (fatal on failure, nothing touched yet)
        2. Delete and recreate both indexes
        3. Fetch talks per conference, skipping conferences that fail
        4. Write private projections, then approved public projections
        """
        console.print("\n[bold cyan]Starting full reindex of all conferences[/bold cyan]")

        try:
            conferences = await self.source.get_conferences()
        except IndexerError as e:
            raise e.wrap("failed to fetch conferences") from e
        console.print(f"[dim]Fetched {len(conferences)} conferences[/dim]")

        try:
            await self._recreate_index(self.private_index)
        except IndexerError as e:
            raise e.wrap("failed to recreate private index") from e
        try:
            await self._recreate_index(self.public_index)
        except IndexerError as e:
            raise e.wrap("failed to recreate public index") from e

        result = ReindexResult(scope="all")
        all_talks: list[Talk] = []

        for conf in conferences:
            try:
                talks = await self.source.get_talks(conf.id)
            except Exception as e:
                console.print(
                    f"[red]Failed to fetch talks for conference "
                    f"'{conf.name}' ({conf.id}): {e}[/red]"
                )
                result.skipped_conferences.append(conf.id)
                continue

            console.print(f"  [dim]{conf.name} ({conf.id}): {len(talks)} talks[/dim]")
            all_talks.extend(talks)

        if not all_talks:
            console.print("[yellow]No talks found to index[/yellow]")
            return result

        await self._write_projections(all_talks, result)
        console.print(
            f"[green]Full reindex complete: {result.private_count} private, "
            f"{result.public_count} public[/green]"
        )
        return result

    async def reindex_conference(self, slug: str) -> ReindexResult:
        """Upsert the talks of one conference without touching the others."""
        console.print(f"[cyan]Reindexing conference '{slug}'...[/cyan]")

        conference = await self._find_conference(slug)

        try:
            talks = await self.source.get_talks(conference.id)
        except IndexerError as e:
            raise e.wrap(f"failed to fetch talks for conference {slug}") from e
        console.print(f"[dim]Fetched {len(talks)} talks for {conference.name} ({conference.id})[/dim]")

        await self._ensure_indexes()

        result = ReindexResult(scope=f"conference:{slug}")
        await self._write_projections(talks, result)
        console.print(
            f"[green]Conference '{slug}' reindexed: {result.private_count} private, "
            f"{result.public_count} public[/green]"
        )
        return result

    async def reindex_talk(self, talk_id: str) -> ReindexResult:
        """Upsert a single talk; the public index only sees it if approved.

        A talk that was approved and no longer is keeps its stale public
        document until the next full reindex.
        """
        console.print(f"[cyan]Reindexing talk {talk_id}...[/cyan]")

        try:
            talk = await self.source.get_talk(talk_id)
        except IndexerError as e:
            raise e.wrap(f"failed to fetch talk {talk_id}") from e

        await self._ensure_indexes()

        result = ReindexResult(scope=f"talk:{talk_id}")
        await self._write(self.private_index, [talk.to_private()], "private")
        result.private_count = 1

        if talk.is_public:
            await self._write(self.public_index, [talk.to_public()], "public")
            result.public_count = 1
            console.print(f"[green]Talk {talk_id} reindexed (private + public)[/green]")
        else:
            console.print(
                f"[green]Talk {talk_id} reindexed (private only, status {talk.status})[/green]"
            )
        return result

    async def _find_conference(self, slug: str) -> Conference:
        try:
            conferences = await self.source.get_conferences()
        except IndexerError as e:
            raise e.wrap("failed to fetch conferences") from e

        for conf in conferences:
            if conf.slug == slug:
                return conf
        raise ConferenceNotFoundError(f"conference not found with slug: {slug}", identifier=slug)

    async def _write_projections(self, talks: list[Talk], result: ReindexResult) -> None:
        # Private first; a failed private write never reaches the public index
        private_talks = prepare_private_talks(talks)
        await self._write(self.private_index, private_talks, "private")
        result.private_count = len(private_talks)

        public_talks = filter_public_talks(talks)
        console.print(f"[dim]Approved for public index: {len(public_talks)} of {len(talks)}[/dim]")
        await self._write(self.public_index, public_talks, "public")
        result.public_count = len(public_talks)

    async def _write(self, index_name: str, talks: list[Talk], label: str) -> None:
        try:
            await self.search_index.bulk_index(index_name, talks)
        except IndexerError as e:
            raise e.wrap(f"failed to index to {label} index {index_name}") from e

    async def _ensure_indexes(self) -> None:
        try:
            await self._ensure_index_exists(self.private_index)
        except IndexerError as e:
            raise e.wrap("failed to ensure private index exists") from e
        try:
            await self._ensure_index_exists(self.public_index)
        except IndexerError as e:
            raise e.wrap("failed to ensure public index exists") from e

    async def _recreate_index(self, index_name: str) -> None:
        """Delete (absence is fine) and create the index with its mapping."""
        try:
            await self.search_index.delete_index(index_name)
        except IndexerError as e:
            raise e.wrap(f"failed to delete index {index_name}") from e

        try:
            await self.search_index.create_index(index_name, self.mapping_for(index_name))
        except IndexerError as e:
            raise e.wrap(f"failed to create index {index_name}") from e

    async def _ensure_index_exists(self, index_name: str) -> None:
        try:
            exists = await self.search_index.index_exists(index_name)
        except IndexerError as e:
            raise e.wrap(f"failed to check if index {index_name} exists") from e

        if exists:
            return
        console.print(f"[dim]Creating missing index '{index_name}'[/dim]")
        try:
            await self.search_index.create_index(index_name, self.mapping_for(index_name))
        except IndexerError as e:
            raise e.wrap(f"failed to create index {index_name}") from e

    def mapping_for(self, index_name: str) -> dict[str, Any]:
        if index_name == self.private_index:
            return self.private_mapping
        return self.public_mapping


@asynccontextmanager
async def open_indexer_service(config: Config) -> AsyncIterator[IndexerService]:
    """Wire the moresleep source and configured search backend into a service.

    HTTP clients are closed when the context exits.
    """
    if config.search_backend == SearchBackend.ALGOLIA:
        search_index = AlgoliaIndex(get_algolia_client(config.algolia))
        private_mapping, public_mapping = TALK_PRIVATE_INDEX_SETTINGS, TALK_PUBLIC_INDEX_SETTINGS
    else:
        search_index = ElasticsearchIndex.from_config(config.elasticsearch)
        private_mapping, public_mapping = TALK_PRIVATE_INDEX_MAPPING, TALK_PUBLIC_INDEX_MAPPING

    source = MoresleepClient.from_config(config.moresleep)

    try:
        if isinstance(search_index, ElasticsearchIndex):
            await search_index.connect()
        yield IndexerService.from_config(
            config, source, search_index, private_mapping, public_mapping
        )
    finally:
        await source.aclose()
        await search_index.aclose()
