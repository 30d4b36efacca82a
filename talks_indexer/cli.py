"""CLI for the talks indexer."""

import asyncio
import logging
from typing import Awaitable, Callable

import typer
from rich.console import Console
from rich.table import Table

from talks_indexer.config import Config, HttpConfig, load_config
from talks_indexer.errors import ConfigError, IndexerError, NotFoundError
from talks_indexer.models import ReindexResult
from talks_indexer.pipeline import IndexerService, open_indexer_service
from talks_indexer.sources import MoresleepClient

# Exit code for "nothing to reindex": unknown conference slug or talk id
EXIT_NOT_FOUND = 3

app = typer.Typer(
    name="talks-indexer",
    help="Sync conference talks from moresleep into private and public search indexes",
    add_completion=False,
)
console = Console()


def _load_config() -> Config:
    try:
        return load_config()
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _run_operation(
    operation: Callable[[IndexerService], Awaitable[ReindexResult]],
    timeout: float,
) -> ReindexResult:
    """Run one reindex operation, with an optional deadline in seconds."""
    config = _load_config()

    async def run() -> ReindexResult:
        async with open_indexer_service(config) as service:
            if timeout > 0:
                return await asyncio.wait_for(operation(service), timeout)
            return await operation(service)

    try:
        return asyncio.run(run())
    except asyncio.TimeoutError:
        console.print(f"[red]Error: reindex did not finish within {timeout}s[/red]")
        raise typer.Exit(1)
    except NotFoundError as e:
        console.print(f"[yellow]Not found: {e}[/yellow]")
        raise typer.Exit(EXIT_NOT_FOUND)
    except IndexerError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def print_result(result: ReindexResult) -> None:
    console.print(f"\n[bold green]Reindex complete ({result.scope})[/bold green]")
    console.print(f"  Private documents: {result.private_count}")
    console.print(f"  Public documents: {result.public_count}")
    if result.skipped_conferences:
        console.print(
            f"  [yellow]Skipped conferences: {', '.join(result.skipped_conferences)}[/yellow]"
        )


TIMEOUT_OPTION = typer.Option(0.0, "--timeout", "-t", help="Abort after N seconds (0 = no deadline)")


@app.command()
def reindex(timeout: float = TIMEOUT_OPTION):
    """Delete, recreate and refill both indexes from every conference."""
    result = _run_operation(lambda service: service.reindex_all(), timeout)
    print_result(result)


@app.command("reindex-conference")
def reindex_conference(
    slug: str = typer.Argument(..., help="Conference slug, e.g. javazone2024"),
    timeout: float = TIMEOUT_OPTION,
):
    """Reindex the talks of one conference (indexes are kept, not rebuilt)."""
    result = _run_operation(lambda service: service.reindex_conference(slug), timeout)
    print_result(result)


@app.command("reindex-talk")
def reindex_talk(
    talk_id: str = typer.Argument(..., help="Talk (session) id"),
    timeout: float = TIMEOUT_OPTION,
):
    """Reindex a single talk."""
    result = _run_operation(lambda service: service.reindex_talk(talk_id), timeout)
    print_result(result)


@app.command()
def conferences():
    """List the conferences known to moresleep."""
    config = _load_config()

    async def fetch():
        async with MoresleepClient.from_config(config.moresleep) as client:
            return await client.get_conferences()

    try:
        items = asyncio.run(fetch())
    except IndexerError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Conferences ({len(items)})")
    table.add_column("Slug", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("ID", style="dim")
    for conf in items:
        table.add_row(conf.slug, conf.name, conf.id)
    console.print(table)


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind host (default: HTTP_HOST env var)"),
    port: int = typer.Option(None, "--port", "-p", help="Bind port (default: HTTP_PORT env var)"),
):
    """Run the HTTP API (reindex routes only in development mode)."""
    import uvicorn

    from talks_indexer.api import create_app

    config = _load_config()
    logging.basicConfig(
        level=logging.DEBUG if config.is_development else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    http = HttpConfig(host=host or config.http.host, port=port or config.http.port)
    console.print(f"[cyan]Starting talks indexer API on {http.addr} ({config.mode.value})[/cyan]")
    console.print(
        f"[dim]Indexes: private={config.index.private} public={config.index.public} "
        f"backend={config.search_backend.value}[/dim]"
    )
    uvicorn.run(
        create_app(config),
        host=http.host,
        port=http.port,
    )


if __name__ == "__main__":
    app()
