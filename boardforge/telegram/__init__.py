"""Telegram front end built on aiogram."""

from .api_utils import safe_api_call, safe_board_refresh, safe_callback_answer, safe_message_answer
from .keyboards import field_keyboard, parse_cell_callback
from .router import build_router

__all__ = [
    "build_router",
    "field_keyboard",
    "parse_cell_callback",
    "safe_api_call",
    "safe_board_refresh",
    "safe_callback_answer",
    "safe_message_answer",
]
