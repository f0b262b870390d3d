"""Keyboard helpers mirroring the playing field."""

from __future__ import annotations

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from ..game.session import GameSession

CALLBACK_PREFIX = "boardforge"
TOGGLE_CALLBACK = f"{CALLBACK_PREFIX}:toggle"
EMPTY_CELL_TEXT = "·"


def cell_callback(x: int, y: int) -> str:
    return f"{CALLBACK_PREFIX}:cell:{x}:{y}"


def parse_cell_callback(data: str | None) -> tuple[int, int] | None:
    """Return ``(x, y)`` for a cell callback, ``None`` for anything else."""
    if not data:
        return None
    parts = data.split(":")
    if len(parts) != 4 or parts[0] != CALLBACK_PREFIX or parts[1] != "cell":
        return None
    try:
        x, y = int(parts[2]), int(parts[3])
    except ValueError:
        return None
    if x < 0 or y < 0:
        return None
    return x, y


def field_keyboard(session: GameSession) -> InlineKeyboardMarkup:
    rows = [
        [
            InlineKeyboardButton(text=cell.content or EMPTY_CELL_TEXT, callback_data=cell_callback(x, y))
            for x, cell in enumerate(line)
        ]
        for y, line in enumerate(session.field.rows)
    ]
    toggle_text = "▶️ Start" if session.button.state == "start" else "⏹ Stop"
    rows.append([InlineKeyboardButton(text=toggle_text, callback_data=TOGGLE_CALLBACK)])
    return InlineKeyboardMarkup(inline_keyboard=rows)
