"""Elasticsearch search index over the REST API."""

import json
from typing import Any, Optional

import httpx
from rich.console import Console

from talks_indexer.config import ServiceCredentials
from talks_indexer.errors import BulkIndexError, SearchIndexError
from talks_indexer.models import Talk, talk_to_document

console = Console()

DEFAULT_TIMEOUT = 30.0


class ElasticsearchIndex:
    """Index lifecycle and bulk writes against one Elasticsearch cluster."""

    def __init__(
        self,
        url: str,
        auth: Optional[tuple[str, str]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url.rstrip("/")
        self.authenticated = auth is not None
        self._client = http_client or httpx.AsyncClient(
            base_url=self.url,
            auth=auth,
            timeout=DEFAULT_TIMEOUT,
        )

    @classmethod
    def from_config(cls, config: ServiceCredentials) -> "ElasticsearchIndex":
        return cls(config.url, auth=config.auth)

    async def __aenter__(self) -> "ElasticsearchIndex":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise SearchIndexError(f"{method} {path} failed: {e}") from e

    async def connect(self) -> None:
        """Verify the cluster answers on its root endpoint."""
        response = await self._request("GET", "/")
        if response.is_error:
            raise SearchIndexError(
                f"elasticsearch connection error: {response.status_code} - {response.text}"
            )
        console.print(
            f"[dim]Connected to Elasticsearch at {self.url} "
            f"(authenticated: {self.authenticated})[/dim]"
        )

    async def bulk_index(self, index_name: str, talks: list[Talk]) -> None:
        """Upsert talks by id with one `_bulk` request.

        Raises:
            BulkIndexError: on a transport/HTTP error, or when the response
                reports errors for any document.
        """
        if not talks:
            console.print(f"[dim]No talks to index in '{index_name}'[/dim]")
            return

        lines = []
        for talk in talks:
            lines.append(json.dumps({"index": {"_index": index_name, "_id": talk.id}}))
            lines.append(json.dumps(talk_to_document(talk)))
        payload = "\n".join(lines) + "\n"

        try:
            response = await self._client.post(
                "/_bulk",
                params={"refresh": "true"},
                headers={"Content-Type": "application/x-ndjson"},
                content=payload,
            )
        except httpx.HTTPError as e:
            raise BulkIndexError(f"failed to execute bulk request: {e}", identifier=index_name) from e

        if response.is_error:
            raise BulkIndexError(
                f"bulk index error: {response.status_code} - {response.text}",
                identifier=index_name,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise BulkIndexError(f"failed to parse bulk response: {e}", identifier=index_name) from e

        if not isinstance(body, dict):
            raise BulkIndexError(
                f"unexpected bulk response: {type(body).__name__}", identifier=index_name
            )
        if body.get("errors"):
            raise BulkIndexError(
                "bulk index had errors: " + "; ".join(_bulk_item_errors(body)),
                identifier=index_name,
            )

        console.print(f"[green]Indexed {len(talks)} talks to '{index_name}'[/green]")

    async def delete_index(self, index_name: str) -> None:
        response = await self._request("DELETE", f"/{index_name}")
        if response.status_code == 404:
            console.print(f"[dim]Index '{index_name}' does not exist (already deleted)[/dim]")
            return
        if response.is_error:
            raise SearchIndexError(
                f"delete index error: {response.status_code} - {response.text}",
                identifier=index_name,
            )
        console.print(f"[yellow]Deleted index '{index_name}'[/yellow]")

    async def create_index(self, index_name: str, mapping: dict[str, Any]) -> None:
        response = await self._request("PUT", f"/{index_name}", json=mapping)
        if response.is_error:
            raise SearchIndexError(
                f"create index error: {response.status_code} - {response.text}",
                identifier=index_name,
            )
        console.print(f"[cyan]Created index '{index_name}'[/cyan]")

    async def index_exists(self, index_name: str) -> bool:
        response = await self._request("HEAD", f"/{index_name}")
        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        raise SearchIndexError(
            f"index exists check error: {response.status_code} - {response.text}",
            identifier=index_name,
        )


def _bulk_item_errors(body: dict) -> list[str]:
    """Describe each failed item of a `_bulk` response."""
    details = []
    for item in body.get("items", []):
        for action, result in item.items():
            status = result.get("status", 0)
            if status >= 400:
                error = result.get("error") or {}
                details.append(
                    f"{action} failed for doc {result.get('_id')} (status {status}): "
                    f"{error.get('type')} - {error.get('reason')}"
                )
    return details
