"""Random self-play through the dispatch core."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random
from typing import Dict

from ..config import BoardForgeConfig
from ..game.session import GameSession, MatchOutcome


@dataclass(slots=True)
class SimulationResult:
    rounds: int
    wins: Dict[str, int] = field(default_factory=dict)
    draws: int = 0
    total_moves: int = 0

    def merge(self, outcome: MatchOutcome) -> None:
        if outcome.is_draw:
            self.draws += 1
        else:
            self.wins[outcome.winner] = self.wins.get(outcome.winner, 0) + 1
        self.total_moves += outcome.moves

    @property
    def average_moves(self) -> float:
        return self.total_moves / self.rounds if self.rounds else 0.0


class GameSimulator:
    """Plays whole rounds with random moves, clicking nodes like a user would.

    Every round starts with the toggle button and ends through the session's
    finish handlers, so the run exercises one-shot eviction, removal hooks
    and post-dispatch hooks end to end.
    """

    def __init__(self, config: BoardForgeConfig | None = None, *, rng: Random | None = None) -> None:
        self._config = config or BoardForgeConfig()
        self._rng = rng or Random()

    def simulate(self, *, rounds: int = 100) -> SimulationResult:
        result = SimulationResult(rounds=rounds)
        session = GameSession(self._config)
        session.add_finish_handler(result.merge)
        try:
            for _ in range(rounds):
                self.play_round(session)
        finally:
            session.close()
        return result

    def play_round(self, session: GameSession) -> MatchOutcome | None:
        if session.is_running:
            session.click_button()
        session.click_button()
        while session.is_running:
            free = [
                (x, y)
                for y, line in enumerate(session.field.rows)
                for x, cell in enumerate(line)
                if cell.is_active
            ]
            if not free:
                break
            session.click_cell(*self._rng.choice(free))
        return session.outcome
