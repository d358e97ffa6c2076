"""smogmap CLI application using Typer.

Runs one enrichment pass from the terminal or serves the HTTP API.
"""

import asyncio
import json

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from smogmap.api import configure_logging
from smogmap.enrichment import CitiesEnvelope, EnrichmentEntry
from smogmap.shared import SharedInfrastructure
from smogmap_config import get_settings

app = typer.Typer(
    name="smogmap",
    help="Pollution-monitored cities enriched with Wikipedia summaries",
    no_args_is_help=True,
)
console = Console()


async def _enrich(country: str, page: int, limit: int) -> CitiesEnvelope:
    infra = SharedInfrastructure.create(get_settings())
    try:
        return await infra.pipeline.enrich(country=country, page=page, limit=limit)
    finally:
        await infra.aclose()


def _render_table(envelope: CitiesEnvelope) -> Table:
    table = Table(
        title=(
            f"Page {envelope.page}/{envelope.total_pages}: "
            f"{envelope.valid_city_count} cities from {envelope.total} records"
        )
    )
    table.add_column("City", style="cyan", no_wrap=True)
    table.add_column("Pollution", justify="right")
    table.add_column("Description")
    for city in envelope.cities:
        description = city.description
        if len(description) > 80:
            description = description[:77] + "..."
        table.add_row(
            city.name,
            "-" if city.pollution is None else str(city.pollution),
            description,
        )
    return table


@app.command()
def cities(
    country: str = typer.Option(None, "--country", "-c", help="Country code"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Pollution API page"),
    limit: int = typer.Option(100, "--limit", "-l", min=1, help="Records per page"),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON envelope"),
) -> None:
    """List the cities of one pollution page with their descriptions."""
    settings = get_settings()
    configure_logging(settings.log_level)

    envelope = asyncio.run(_enrich(country or settings.default_country, page, limit))

    if as_json:
        console.print_json(json.dumps(envelope.model_dump(mode="json", by_alias=True)))
        return
    console.print(_render_table(envelope))


async def _describe(name: str) -> EnrichmentEntry:
    infra = SharedInfrastructure.create(get_settings())
    try:
        return await infra.pipeline.describe(name)
    finally:
        await infra.aclose()


@app.command()
def describe(name: str = typer.Argument(..., help="City name")) -> None:
    """Print the description of one city."""
    settings = get_settings()
    configure_logging(settings.log_level)

    entry = asyncio.run(_describe(name))

    console.print(f"[bold cyan]{name}[/bold cyan]")
    console.print(entry.description)
    if entry.thumbnail:
        console.print(f"[dim]{entry.thumbnail}[/dim]")


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address"),
    port: int = typer.Option(None, "--port", help="Bind port"),
) -> None:
    """Serve the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "smogmap.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level=settings.log_level.lower(),
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
