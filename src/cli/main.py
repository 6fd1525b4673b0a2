"""Arena CLI (Typer + Rich).

Thin layer: builds the datasource from settings, delegates to the
aggregation core and renders the result. Core errors are shown as distinct
messages and exit with status 1.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, TypeVar

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console

from adapters.arena_datasource import HttpArenaDatasource
from adapters.json_exporter import entities_to_json, export_entities_json
from cli import doctor
from cli.ui_components import (
    build_games_table,
    build_registration_panel,
    build_tournament_panel,
    build_tournaments_table,
    build_user_panel,
    print_banner,
)
from core.config import AppSettings
from core.errors import MissingLinkError, NotFoundError, TransportError
from core.logging_setup import setup_logging
from core.mappers import Mappers
from core.services.aggregator import Aggregator

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Browse tournaments, registrations and games.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def build_datasource(settings: AppSettings) -> HttpArenaDatasource:
    return HttpArenaDatasource.from_settings(settings)


def _fetch(action: Callable[[HttpArenaDatasource], Awaitable[T]]) -> T:
    settings = AppSettings()
    setup_logging(settings.log_level)

    async def runner() -> T:
        async with build_datasource(settings) as ds:
            return await action(ds)

    try:
        return asyncio.run(runner())
    except (MissingLinkError, ValidationError) as exc:
        _console.print(f"[red]Malformed API response:[/red] {exc}")
    except NotFoundError as exc:
        _console.print(f"[yellow]Not found:[/yellow] {exc.url}")
    except TransportError as exc:
        _console.print(f"[red]API error:[/red] {exc}")
    except ValueError as exc:
        # Non-numeric ids and similar values the mappers cannot convert.
        _console.print(f"[red]Malformed API response:[/red] {exc}")
    raise typer.Exit(code=1)


def _emit_json(entities: BaseModel | list, output: Path | None) -> None:
    if output is not None:
        path = export_entities_json(entities=entities, output_path=output)
        _console.print(f"[green]Saved JSON to:[/green] {path}")
        return
    typer.echo(entities_to_json(entities), nl=False)


@app.command()
def tournament(
    tournament_id: int = typer.Argument(..., help="Tournament id."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a panel."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write JSON to this file."),
) -> None:
    """Show a tournament with its game and admin."""

    result = _fetch(lambda ds: Aggregator(ds).get_tournament(tournament_id))
    if as_json or output is not None:
        _emit_json(result, output)
    else:
        _console.print(build_tournament_panel(result))


@app.command()
def registration(
    registration_id: int = typer.Argument(..., help="Registration id."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a panel."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write JSON to this file."),
) -> None:
    """Show a registration with its user, tournament and game."""

    result = _fetch(lambda ds: Aggregator(ds).get_registration(registration_id))
    if as_json or output is not None:
        _emit_json(result, output)
    else:
        _console.print(build_registration_panel(result))


@app.command()
def user(
    user_id: str = typer.Argument(..., help="User id."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a panel."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write JSON to this file."),
) -> None:
    """Show a user."""

    async def action(ds: HttpArenaDatasource):
        return Mappers().user.from_remote(await ds.get_user_by_id(user_id))

    result = _fetch(action)
    if as_json or output is not None:
        _emit_json(result, output)
    else:
        _console.print(build_user_panel(result))


@app.command()
def games(
    page: int = typer.Option(0, "--page", min=0, help="Page number (0-based)."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write JSON to this file."),
) -> None:
    """List all games."""

    async def action(ds: HttpArenaDatasource):
        return Mappers().game.from_remote_page(await ds.get_all_games(page))

    result = _fetch(action)
    if as_json or output is not None:
        _emit_json(result, output)
    else:
        _console.print(build_games_table(result, title=f"Games (page {page})"))


@app.command()
def showcase(
    page: int = typer.Option(0, "--page", min=0, help="Page number (0-based)."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write JSON to this file."),
) -> None:
    """List showcase tournaments, fully resolved."""

    async def action(ds: HttpArenaDatasource):
        return await Aggregator(ds).tournaments_page(await ds.get_showcase_tournaments(page))

    result = _fetch(action)
    if as_json or output is not None:
        _emit_json(result, output)
    else:
        print_banner(_console)
        _console.print(build_tournaments_table(result, title=f"Showcase (page {page})"))


def run() -> None:
    app()
