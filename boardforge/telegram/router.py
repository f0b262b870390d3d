"""Factory wiring game sessions into an aiogram router."""

from __future__ import annotations

import logging
from typing import Sequence

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from ..app import BoardApp
from ..exceptions import UnknownSession
from ..game.session import GameSession
from ..storage.base import MatchRecord
from .api_utils import safe_board_refresh, safe_callback_answer, safe_message_answer
from .keyboards import CALLBACK_PREFIX, TOGGLE_CALLBACK, field_keyboard, parse_cell_callback

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Tic-tac-toe for two players sharing this chat.\n"
    "/play opens a new board, /stop closes it, /history lists finished rounds."
)


def build_router(app: BoardApp) -> Router:
    router = Router()

    @router.message(Command("start", "help"))
    async def handle_help(message: Message) -> None:
        await safe_message_answer(message, HELP_TEXT)

    @router.message(Command("play"))
    async def handle_play(message: Message) -> None:
        session = app.new_session(message.chat.id)
        await safe_message_answer(message, render_board_text(session), reply_markup=field_keyboard(session))

    @router.message(Command("stop"))
    async def handle_stop(message: Message) -> None:
        try:
            app.drop_session(message.chat.id)
        except UnknownSession:
            await safe_message_answer(message, "No board is open. Use /play to start one.")
            return
        await safe_message_answer(message, "Board closed.")

    @router.message(Command("history"))
    async def handle_history(message: Message) -> None:
        records = await app.history(message.chat.id)
        await safe_message_answer(message, format_history(records))

    @router.callback_query(F.data.startswith(f"{CALLBACK_PREFIX}:"))
    async def handle_board_press(callback: CallbackQuery) -> None:
        chat_id = callback.message.chat.id if callback.message else None
        if chat_id is None:
            return
        try:
            session = app.session_for(chat_id)
        except UnknownSession:
            await safe_callback_answer(callback, "This board is closed. Use /play.", show_alert=True)
            return

        previous = session.outcome
        accepted = press(session, callback.data)
        if not accepted:
            await safe_callback_answer(callback, "Not available right now.")
            return

        outcome = session.outcome
        if outcome is not None and outcome is not previous:
            await app.record_outcome(chat_id, outcome)
        await safe_board_refresh(callback.message, render_board_text(session), field_keyboard(session))
        await safe_callback_answer(callback)

    return router


def press(session: GameSession, data: str | None) -> bool:
    """Translate callback data into a native click; False when nothing listened."""
    if data == TOGGLE_CALLBACK:
        return session.click_button()
    position = parse_cell_callback(data)
    if position is None:
        logger.debug("Ignoring unknown callback data %r", data)
        return False
    return session.click_cell(*position)


def render_board_text(session: GameSession) -> str:
    return session.info.text or ""


def format_history(records: Sequence[MatchRecord]) -> str:
    if not records:
        return "No finished rounds yet."
    lines = []
    for record in records:
        result = "draw" if record.is_draw else f"{record.winner} won"
        lines.append(
            f"• {record.finished_at:%Y-%m-%d %H:%M} {record.field_size}x{record.field_size}: "
            f"{result} in {record.moves} moves"
        )
    return "\n".join(lines)
