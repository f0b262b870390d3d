"""Validation helpers for BoardForge names and configuration."""

from __future__ import annotations

import re
from typing import Any

from .config import BoardForgeConfig

_TAG_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")


def not_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_valid_event_kind(value: Any) -> bool:
    return not_empty_str(value)


def is_valid_tag_name(value: Any) -> bool:
    return not_empty_str(value) and bool(_TAG_NAME.match(value.strip()))


def is_valid_id(value: Any) -> bool:
    return not_empty_str(value) and not any(ch.isspace() for ch in value)


def is_valid_class_name(value: Any) -> bool:
    return not_empty_str(value) and not any(ch.isspace() for ch in value)


def is_valid_style_rule(rule: Any) -> bool:
    """A style rule is a ``(key, value)`` pair of non-empty strings."""
    if not isinstance(rule, tuple) or len(rule) != 2:
        return False
    key, value = rule
    return not_empty_str(key) and isinstance(value, str)


def validate_config(config: BoardForgeConfig) -> list[str]:
    """Return list of problems found in ``config``."""
    errors: list[str] = []

    board = config.board
    if board.size < 1:
        errors.append(f"Field size must be positive, got {board.size}.")
    if not is_valid_tag_name(board.cell_tag):
        errors.append(f"Cell tag '{board.cell_tag}' is not a valid tag name.")
    for label, name in (
        ("cell_class", board.cell_class),
        ("clickable_class", board.clickable_class),
        ("win_class", board.win_class),
    ):
        if name is not None and not is_valid_class_name(name):
            errors.append(f"Field {label} '{name}' is not a valid class name.")

    button = config.button
    for label, name in (("start_class", button.start_class), ("stop_class", button.stop_class)):
        if name is not None and not is_valid_class_name(name):
            errors.append(f"Button {label} '{name}' is not a valid class name.")
    if button.start_class and button.start_class == button.stop_class:
        errors.append("Button start_class and stop_class must differ.")

    if len(config.players) < 2:
        errors.append("At least two players are required.")
    names = [seed.name for seed in config.players]
    for seed in config.players:
        if not not_empty_str(seed.name):
            errors.append("Player names cannot be empty.")
        if not not_empty_str(seed.content):
            errors.append(f"Player '{seed.name}' has empty content.")
    if len(set(names)) != len(names):
        errors.append("Player names must be unique.")
    contents = [seed.content for seed in config.players]
    if len(set(contents)) != len(contents):
        errors.append("Player symbols must be unique.")

    if config.storage.backend not in {"memory", "sqlalchemy"}:
        errors.append(f"Unsupported storage backend '{config.storage.backend}'.")
    if config.history_limit <= 0:
        errors.append("History limit must be positive.")

    return errors


__all__ = [
    "is_valid_class_name",
    "is_valid_event_kind",
    "is_valid_id",
    "is_valid_style_rule",
    "is_valid_tag_name",
    "not_empty_str",
    "validate_config",
]
