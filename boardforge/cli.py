"""Command line helpers for BoardForge."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from random import Random

from aiogram import Bot, Dispatcher
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from .app import BoardApp
from .config import BoardForgeConfig
from .diagnostics.simulator import GameSimulator
from .game.session import GameSession, MatchOutcome
from .telegram import build_router
from .validators import validate_config

console = Console()

QUIT_COMMANDS = {"q", "quit", "exit"}


def render_field(session: GameSession) -> Table:
    table = Table(title=session.info.text or "", show_header=True, show_lines=True)
    table.add_column("")
    for x in range(session.field.size):
        table.add_column(str(x), justify="center")
    for y, line in enumerate(session.field.rows):
        cells = []
        for cell in line:
            if cell.has_win_class_name():
                cells.append(f"[bold green]{cell.content}[/bold green]")
            elif cell.is_active:
                cells.append("[dim]·[/dim]")
            else:
                cells.append(cell.content)
        table.add_row(str(y), *cells)
    return table


def parse_move(raw: str) -> tuple[int, int] | None:
    """Accept ``x y`` or ``x,y``."""
    parts = raw.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def run_play() -> None:
    parser = argparse.ArgumentParser(description="Play tic-tac-toe in the terminal")
    parser.add_argument("--size", type=int, default=None, help="Field size (defaults to BOARDFORGE_FIELD_SIZE or 3)")
    args = parser.parse_args()

    config = BoardForgeConfig.from_env()
    if args.size is not None:
        config.board.size = args.size
    _exit_on_invalid(config)

    session = GameSession(config)
    session.add_finish_handler(_announce)
    session.click_button()
    try:
        while True:
            console.print(render_field(session))
            if not session.is_running:
                answer = Prompt.ask("Play again?", choices=["y", "n"], default="y")
                if answer != "y":
                    break
                session.click_button()
                continue
            raw = Prompt.ask("Move (x y, or q to quit)").strip().lower()
            if raw in QUIT_COMMANDS:
                break
            move = parse_move(raw)
            if move is None or not session.click_cell(*move):
                console.print("[red]That cell is not available.[/red]")
    finally:
        session.close()


def _announce(outcome: MatchOutcome) -> None:
    if outcome.is_draw:
        console.print(f"[yellow]Draw after {outcome.moves} moves.[/yellow]")
    else:
        console.print(f"[bold green]{outcome.winner} wins in {outcome.moves} moves![/bold green]")


def run_simulate() -> None:
    parser = argparse.ArgumentParser(description="BoardForge random self-play")
    parser.add_argument("--rounds", type=int, default=1000, help="Number of rounds to play")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    config = BoardForgeConfig.from_env()
    _exit_on_invalid(config)
    result = GameSimulator(config, rng=Random(args.seed)).simulate(rounds=args.rounds)

    table = Table(title=f"{result.rounds} rounds on a {config.board.size}x{config.board.size} field")
    table.add_column("Result")
    table.add_column("Rounds", justify="right")
    for name, wins in sorted(result.wins.items()):
        table.add_row(f"{name} wins", str(wins))
    table.add_row("Draws", str(result.draws))
    console.print(table)
    console.print(f"Average moves per round: {result.average_moves:.2f}")


def run_validate() -> None:
    argparse.ArgumentParser(description="Validate BOARDFORGE_* environment configuration").parse_args()
    try:
        config = BoardForgeConfig.from_env()
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)
    _exit_on_invalid(config)
    console.print("Configuration is valid ✅")


def run_bot() -> None:
    argparse.ArgumentParser(description="Run the BoardForge Telegram bot").parse_args()
    logging.basicConfig(level=logging.INFO)
    config = BoardForgeConfig.from_env()
    _exit_on_invalid(config)
    if not config.bot_token:
        console.print("[red]BOARDFORGE_BOT_TOKEN is not set.[/red]")
        sys.exit(1)
    asyncio.run(_run_polling(config))


async def _run_polling(config: BoardForgeConfig) -> None:
    app = BoardApp(config)
    await app.init_backend()
    bot = Bot(config.bot_token)
    dp = Dispatcher()
    dp.include_router(build_router(app))
    console.print(f"[bold green]BoardForge ready![/bold green] storage={config.storage.backend}")
    try:
        await dp.start_polling(bot)
    finally:
        await app.shutdown()


def _exit_on_invalid(config: BoardForgeConfig) -> None:
    issues = validate_config(config)
    if not issues:
        return
    console.print("[red]Configuration errors:[/red]")
    for issue in issues:
        console.print(f"- {issue}")
    sys.exit(1)
