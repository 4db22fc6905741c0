"""
Console - Terminal Input Source and Display Sink.

Prompts re-ask until the answer is valid, so the engine only ever sees
well-formed testimony.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from ..engine_core.action import ActionResult
from ..engine_core.interfaces import ChoiceProvider, DisplaySink
from ..engine_core.snapshot import GameSnapshot
from ..engine_core.state import Player

RULE_WIDTH = 60


class ConsoleProvider(ChoiceProvider, DisplaySink):
    """
    Terminal Input Source and Display Sink.

    Bad input is re-prompted here and never reaches the engine.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        print_fn: Callable[..., None] = print,
    ):
        self._input = input_fn
        self._print = print_fn

    def error(self, text: str) -> None:
        self._print(f"[ERROR] {text}")

    def ask_int(self, prompt: str, low: int, high: int) -> int:
        while True:
            raw = self._input(f"{prompt}: ").strip()
            try:
                value = int(raw)
                if low <= value <= high:
                    return value
            except ValueError:
                pass
            self.error(f"Enter a number from {low} to {high}.")

    def ask_option(self, prompt: str, options: List[str]) -> str:
        lookup = {opt.upper(): opt for opt in options}
        while True:
            raw = self._input(f"{prompt} ({'/'.join(options)}): ").strip().upper()
            if raw in lookup:
                return lookup[raw]
            self.error(f"Enter one of: {', '.join(options)}.")

    def ask_player(
        self,
        prompt: str,
        players: List[Player],
        exclude: Optional[Player] = None,
    ) -> Player:
        candidates = [p for p in players if exclude is None or p.name != exclude.name]
        self._print(prompt)
        for i, player in enumerate(candidates, start=1):
            self._print(f"  {i}. {player.name}")

        by_name = {p.name.upper(): p for p in candidates}
        while True:
            raw = self._input("> ").strip()
            if raw.upper() in by_name:
                return by_name[raw.upper()]
            try:
                sel = int(raw)
                if 1 <= sel <= len(candidates):
                    return candidates[sel - 1]
            except ValueError:
                pass
            self.error(f"Enter a name or a number from 1 to {len(candidates)}.")

    def banner(self) -> None:
        self._print()
        self._print("=" * RULE_WIDTH)
        self._print("SPLIT UNO ARBITER - GAME TRACKER".center(RULE_WIDTH))
        self._print("=" * RULE_WIDTH)

    def show_state(self, snapshot: GameSnapshot) -> None:
        self._print()
        self._print("=" * RULE_WIDTH)
        self._print(f"SPLIT UNO - GAME STATE (round {snapshot.round_number})".center(RULE_WIDTH))
        self._print("=" * RULE_WIDTH)

        width = max(len(p.name) for p in snapshot.players) if snapshot.players else 0
        for p in snapshot.players:
            line = (
                f"{p.name.ljust(width)}  {p.number_cards:>3} Number | "
                f"{p.action_cards:>3} Action | Streak {p.consecutive_wins}"
            )
            if p.is_blocked:
                line += " [BLOCKED]"
            self._print(line)

        self._print()
        self._print(
            f"Deck Remaining: Numbers={snapshot.number_deck_remaining} | "
            f"Actions={snapshot.action_deck_remaining}"
        )
        if snapshot.color_constraint:
            self._print(f"Called color for next round: {snapshot.color_constraint.upper()}")
        self._print("=" * RULE_WIDTH)

        if snapshot.game_over and snapshot.winner:
            self._print()
            self._print("*" * RULE_WIDTH)
            self._print(f"WINNER: {snapshot.winner}".center(RULE_WIDTH))
            self._print("*" * RULE_WIDTH)

    def announce(self, result: ActionResult) -> None:
        if not result.success:
            self.error(result.error or "Command failed")
            return
        for change in result.state_changes:
            self._print(f">>> {change}")
        for warning in result.warnings:
            self._print(f"[WARNING] {warning}")
