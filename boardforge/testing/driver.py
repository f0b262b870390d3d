"""Scripted play without any front end."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from ..game.session import GameSession, MatchOutcome


@dataclass(slots=True)
class DriverStep:
    __test__ = False

    action: str
    accepted: bool
    label: str


class GameDriver:
    """Presses the button and cells of a session by coordinates and logs what happened."""

    __test__ = False

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self._log: List[DriverStep] = []
        self._outcomes: List[MatchOutcome] = []
        session.add_finish_handler(self._outcomes.append)

    def press_button(self) -> bool:
        return self._record("button", self.session.click_button())

    def press(self, x: int, y: int) -> bool:
        return self._record(f"cell {x},{y}", self.session.click_cell(x, y))

    def play(self, moves: Iterable[tuple[int, int]]) -> MatchOutcome | None:
        """Start a round, then press ``moves`` in order until the round ends."""
        if not self.session.is_running:
            self.press_button()
        for x, y in moves:
            if not self.session.is_running:
                break
            self.press(x, y)
        return self.session.outcome

    @property
    def outcomes(self) -> List[MatchOutcome]:
        return list(self._outcomes)

    def history(self) -> List[DriverStep]:
        return list(self._log)

    def _record(self, action: str, accepted: bool) -> bool:
        self._log.append(DriverStep(action=action, accepted=accepted, label=self.session.info.text or ""))
        return accepted
