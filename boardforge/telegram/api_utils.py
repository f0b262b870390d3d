"""Wrappers that keep Telegram API failures away from game state."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar

from aiogram.exceptions import (
    TelegramAPIError,
    TelegramBadRequest,
    TelegramForbiddenError,
    TelegramRetryAfter,
)
from aiogram.types import CallbackQuery, InlineKeyboardMarkup, Message

P = ParamSpec("P")
T = TypeVar("T")

logger = logging.getLogger(__name__)

UNCHANGED_MARKER = "message is not modified"


def is_unchanged(exc: TelegramAPIError) -> bool:
    """True for the error Telegram returns when an edit would not change the message."""
    return isinstance(exc, TelegramBadRequest) and UNCHANGED_MARKER in str(exc).lower()


def _retry_delay(exc: TelegramRetryAfter) -> float:
    return float(getattr(exc, "retry_after", 0) or 1.0)


def _log_refusal(label: str, exc: TelegramAPIError) -> None:
    if isinstance(exc, TelegramForbiddenError):
        logger.info("Telegram call '%s' forbidden, the bot is probably blocked", label)
    elif is_unchanged(exc):
        logger.debug("Telegram call '%s' skipped, board unchanged", label)
    elif isinstance(exc, TelegramBadRequest):
        logger.warning("Telegram call '%s' bad request: %s", label, exc)
    else:
        logger.error("Telegram call '%s' failed: %s", label, exc, exc_info=True)


async def safe_api_call(
    label: str,
    func: Callable[P, Awaitable[T]],
    *args: P.args,
    retries: int = 3,
    **kwargs: P.kwargs,
) -> T | None:
    """Await a Bot API call; ``None`` when it failed or was refused.

    Flood-control errors are retried up to ``retries`` times after the delay
    Telegram asks for. Every other API error is logged once and swallowed.
    """
    for attempt in range(1, retries + 1):
        try:
            return await func(*args, **kwargs)
        except TelegramRetryAfter as exc:
            if attempt == retries:
                logger.warning("Telegram call '%s' gave up after %s rate-limited attempts", label, attempt)
                return None
            delay = _retry_delay(exc)
            logger.info("Telegram call '%s' rate limited, retrying in %.1f s (%s/%s)", label, delay, attempt, retries)
            await asyncio.sleep(delay)
        except TelegramAPIError as exc:
            _log_refusal(label, exc)
            return None
    return None


async def safe_message_answer(message: Message | None, text: str, **kwargs: Any) -> bool:
    if not message:
        return False
    return (await safe_api_call("message.answer", message.answer, text, **kwargs)) is not None


async def safe_board_refresh(message: Any, text: str, keyboard: InlineKeyboardMarkup) -> bool:
    """Redraw a board message in place.

    Presses on boards Telegram no longer lets the bot touch (deleted or too
    old messages arrive as ``InaccessibleMessage``) are skipped. An edit that
    would leave the board as it is counts as a successful refresh.
    """
    if not isinstance(message, Message):
        return False

    async def edit() -> bool:
        try:
            await message.edit_text(text, reply_markup=keyboard)
        except TelegramBadRequest as exc:
            if not is_unchanged(exc):
                raise
            logger.debug("Board refresh skipped, nothing changed")
        return True

    return bool(await safe_api_call("board.refresh", edit))


async def safe_callback_answer(
    callback: CallbackQuery | None,
    text: str | None = None,
    *,
    show_alert: bool = False,
) -> bool:
    if not callback:
        return False
    params: dict[str, object] = {"show_alert": show_alert}
    if text is not None:
        params["text"] = text
    return (await safe_api_call("callback.answer", callback.answer, **params)) is not None
