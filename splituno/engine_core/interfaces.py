"""
Collaborator Interfaces - The engine's only contact with the outside world.

- ChoiceProvider (Input Source): answers the arbiter's questions
- DisplaySink: renders snapshots and announcements

The engine never parses free text itself. Providers are responsible for
re-prompting on bad input, so every value they return is already valid.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import Player
    from .snapshot import GameSnapshot
    from .action import ActionResult


class ChoiceProvider(ABC):
    """Source of arbiter testimony."""

    @abstractmethod
    def ask_int(self, prompt: str, low: int, high: int) -> int:
        """
        Returns an integer in the inclusive range [low, high].
        """

    @abstractmethod
    def ask_option(self, prompt: str, options: list[str]) -> str:
        """
        Returns one of `options`, exactly as spelled in the list.
        Matching against what the arbiter typed is case-insensitive.
        """

    @abstractmethod
    def ask_player(
        self,
        prompt: str,
        players: list[Player],
        exclude: Player | None = None,
    ) -> Player:
        """
        Returns a player from `players`, never `exclude`.
        """

    def confirm(self, prompt: str) -> bool:
        """Yes/no question built on ask_option."""
        return self.ask_option(prompt, ["Y", "N"]) == "Y"


class DisplaySink(ABC):
    """Receives snapshots and announcements; owns all formatting."""

    @abstractmethod
    def show_state(self, snapshot: GameSnapshot) -> None:
        pass

    @abstractmethod
    def announce(self, result: ActionResult) -> None:
        pass
