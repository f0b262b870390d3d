"""Configuration models for BoardForge."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Literal, Sequence

StorageBackend = Literal["memory", "sqlalchemy"]
ComparisonName = Literal["membership", "positional"]

ENV_PREFIX = "BOARDFORGE_"


@dataclass(slots=True)
class StorageConfig:
    """Configure where finished matches are recorded."""

    backend: StorageBackend = "memory"
    dsn: str | None = None
    echo_sql: bool = False

    def resolve_dsn(self) -> str | None:
        if self.dsn:
            return self.dsn
        if self.backend == "sqlalchemy":
            return "sqlite+aiosqlite:///./boardforge.db"
        return None


@dataclass(slots=True)
class FieldConfig:
    """Geometry and class names of the playing field."""

    size: int = 3
    selector: str = "#tic-tac-toe__field"
    cell_tag: str = "div"
    cell_class: str = "tic-tac-toe__cell"
    clickable_class: str | None = "tic-tac-toe__cell--empty"
    win_class: str | None = "tic-tac-toe__cell--win"
    size_css_var: str = "--field-size"


@dataclass(slots=True)
class ButtonConfig:
    """Start/stop toggle button."""

    selector: str = "#tic-tac-toe__btn"
    element_id: str = "tic-tac-toe__btn"
    start_class: str | None = "btn--green"
    stop_class: str | None = "btn--red"
    classes: tuple[str, ...] = ("btn", "tic-tac-toe__btn")


@dataclass(slots=True)
class LabelConfig:
    """Status line shown above the field."""

    selector: str = "#tic-tac-toe__info"
    tag: str = "p"
    element_id: str = "tic-tac-toe__info"
    classes: tuple[str, ...] = ("tic-tac-toe__info",)


@dataclass(slots=True)
class PlayerSeed:
    name: str
    content: str


@dataclass(slots=True)
class DispatchConfig:
    """Handler lookup behaviour.

    ``membership`` keeps the historical order-insensitive argument comparison;
    ``positional`` compares arguments element by element.
    """

    argument_comparison: ComparisonName = "membership"


@dataclass(slots=True)
class BoardForgeConfig:
    """Top-level configuration container."""

    bot_token: str = ""
    storage: StorageConfig = field(default_factory=StorageConfig)
    board: FieldConfig = field(default_factory=FieldConfig)
    button: ButtonConfig = field(default_factory=ButtonConfig)
    label: LabelConfig = field(default_factory=LabelConfig)
    players: Sequence[PlayerSeed] = field(
        default_factory=lambda: (PlayerSeed("X", "✕"), PlayerSeed("O", "○"))
    )
    dispatch: DispatchConfig = field(default_factory=DispatchConfig)
    history_limit: int = 10

    @classmethod
    def from_env(cls) -> "BoardForgeConfig":
        """Create config from environment variables prefixed with BOARDFORGE_."""
        defaults = cls()
        comparison = os.getenv(f"{ENV_PREFIX}ARGUMENT_COMPARISON", "membership").strip().lower()
        if comparison not in {"membership", "positional"}:
            raise ValueError(
                f"{ENV_PREFIX}ARGUMENT_COMPARISON must be 'membership' or 'positional', got '{comparison}'"
            )

        return cls(
            bot_token=os.getenv(f"{ENV_PREFIX}BOT_TOKEN", ""),
            storage=StorageConfig(
                backend=os.getenv(f"{ENV_PREFIX}STORAGE_BACKEND", "memory"),  # type: ignore[arg-type]
                dsn=os.getenv(f"{ENV_PREFIX}STORAGE_DSN"),
                echo_sql=_env_flag("STORAGE_ECHO_SQL", False),
            ),
            board=FieldConfig(size=_env_int("FIELD_SIZE", defaults.board.size)),
            players=_parse_players(os.getenv(f"{ENV_PREFIX}PLAYERS")) or defaults.players,
            dispatch=DispatchConfig(argument_comparison=comparison),  # type: ignore[arg-type]
            history_limit=_env_int("HISTORY_LIMIT", defaults.history_limit),
        )


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got '{raw}'") from exc


def _parse_players(raw: str | None) -> tuple[PlayerSeed, ...]:
    if not raw:
        return ()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON for {ENV_PREFIX}PLAYERS") from exc
    if not isinstance(data, list):
        raise ValueError(f"{ENV_PREFIX}PLAYERS must be a JSON array of {{name, content}} objects")
    seeds = []
    for item in data:
        if not isinstance(item, dict) or "name" not in item or "content" not in item:
            raise ValueError(f"{ENV_PREFIX}PLAYERS entries need 'name' and 'content'")
        seeds.append(PlayerSeed(name=str(item["name"]), content=str(item["content"])))
    return tuple(seeds)
