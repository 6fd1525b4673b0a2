"""Rich UI components for the CLI.

Why separate components:
- Keeps command logic apart from rendering details.
- Tables and panels are reused by several commands.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Game, Registration, Tournament, User


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in --json mode)."""

    title = Text("ARENA", style="bold cyan")
    subtitle = Text("Tournaments • Registrations • Games", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_games_table(games: Sequence[Game], *, title: str = "Games") -> Table:
    table = Table(title=title)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Modes", style="white")
    table.add_column("Image", style="magenta")
    for game in games:
        table.add_row(game.name, ", ".join(game.available_modes) or "-", game.image or "-")
    return table


def build_tournaments_table(tournaments: Sequence[Tournament], *, title: str = "Tournaments") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Game", style="green")
    table.add_column("Mode", style="white")
    table.add_column("Players", style="white", justify="right")
    table.add_column("Admin", style="magenta")
    for t in tournaments:
        table.add_row(
            str(t.id),
            t.title,
            t.game.name,
            t.mode or "-",
            str(t.players_number),
            t.admin.nickname or t.admin.id,
        )
    return table


def build_tournament_panel(tournament: Tournament) -> Panel:
    body = Text()
    body.append(f"{tournament.title}\n", style="bold")
    if tournament.description:
        body.append(tournament.description.strip() + "\n\n")
    body.append(f"Game: {tournament.game.name}\n")
    body.append(f"Mode: {tournament.mode or '-'}\n")
    body.append(f"Players: {tournament.players_number}\n")
    body.append(f"Admin: {tournament.admin.nickname or tournament.admin.id}", style="dim")
    return Panel(body, title=Text(f"Tournament #{tournament.id}", style="bold yellow"), border_style="yellow")


def build_registration_panel(registration: Registration) -> Panel:
    body = Text()
    body.append(f"User: {registration.user.nickname or registration.user.id}\n")
    body.append(f"Tournament: {registration.tournament.title} (#{registration.tournament.id})\n")
    body.append(f"Game: {registration.tournament.game.name}\n")
    body.append(f"Outcome: {registration.outcome or 'pending'}", style="dim")
    return Panel(
        body,
        title=Text(f"Registration #{registration.id}", style="bold yellow"),
        border_style="yellow",
    )


def build_user_panel(user: User) -> Panel:
    body = Text()
    body.append(f"{user.nickname or '-'}\n", style="bold")
    if user.email:
        body.append(f"{user.email}\n")
    body.append(f"Subscriber: {'yes' if user.is_subscriber else 'no'}")
    if user.image:
        body.append(f"\nImage: {user.image}", style="dim")
    return Panel(body, title=Text(f"User {user.id}", style="bold yellow"), border_style="yellow")
