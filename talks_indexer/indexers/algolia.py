"""Algolia search index for talks."""

from typing import Any

from algoliasearch.http.exceptions import AlgoliaException
from algoliasearch.search.client import SearchClient
from rich.console import Console

from talks_indexer.config import AlgoliaConfig
from talks_indexer.errors import BulkIndexError, ConfigError, SearchIndexError
from talks_indexer.models import Talk, talk_to_document

console = Console()


def get_algolia_client(config: AlgoliaConfig) -> SearchClient:
    """Get Algolia client from the configured credentials."""
    if not config.is_configured:
        raise ConfigError(
            "ALGOLIA_APP_ID and ALGOLIA_API_KEY must be set in environment"
        )

    return SearchClient(config.app_id, config.api_key)


def talk_to_algolia(talk: Talk) -> dict:
    """Convert Talk to Algolia record."""
    record = talk_to_document(talk)
    record["objectID"] = talk.id
    return record


class AlgoliaIndex:
    """Index lifecycle and batch writes against an Algolia application.

    Index "mappings" for this backend are Algolia index settings.
    """

    def __init__(self, client: SearchClient, wait_for_tasks: bool = True):
        self.client = client
        self.wait_for_tasks = wait_for_tasks

    async def aclose(self) -> None:
        await self.client.close()

    async def bulk_index(self, index_name: str, talks: list[Talk]) -> None:
        if not talks:
            console.print(f"[dim]No talks to index in '{index_name}'[/dim]")
            return

        records = [talk_to_algolia(talk) for talk in talks]
        try:
            await self.client.save_objects(
                index_name, records, wait_for_tasks=self.wait_for_tasks
            )
        except AlgoliaException as e:
            raise BulkIndexError(f"batch save error: {e}", identifier=index_name) from e

        console.print(f"[green]Indexed {len(records)} talks to '{index_name}'[/green]")

    async def delete_index(self, index_name: str) -> None:
        try:
            response = await self.client.delete_index(index_name)
            if self.wait_for_tasks:
                await self.client.wait_for_task(index_name, response.task_id)
        except AlgoliaException as e:
            if getattr(e, "status_code", None) == 404:
                console.print(f"[dim]Index '{index_name}' does not exist (already deleted)[/dim]")
                return
            raise SearchIndexError(f"delete index error: {e}", identifier=index_name) from e
        console.print(f"[yellow]Deleted index '{index_name}'[/yellow]")

    async def create_index(self, index_name: str, mapping: dict[str, Any]) -> None:
        # Algolia creates indexes implicitly; setting settings materializes it
        try:
            response = await self.client.set_settings(index_name, mapping)
            if self.wait_for_tasks:
                await self.client.wait_for_task(index_name, response.task_id)
        except AlgoliaException as e:
            raise SearchIndexError(f"create index error: {e}", identifier=index_name) from e
        console.print(f"[cyan]Created index '{index_name}'[/cyan]")

    async def index_exists(self, index_name: str) -> bool:
        try:
            return await self.client.index_exists(index_name)
        except AlgoliaException as e:
            raise SearchIndexError(f"index exists check error: {e}", identifier=index_name) from e
