"""
Effect Context - The explicit context every engine operation receives.

Bundles the state being mutated, the source of arbiter testimony, the
table rules, and the result being accumulated for the Display Sink.
No engine operation reaches for global state.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
import logging

from .state import GameState, Player, DeckKind
from .action import ActionResult

if TYPE_CHECKING:
    from .interfaces import ChoiceProvider
    from ..config import RulesConfig

logger = logging.getLogger(__name__)


@dataclass
class EffectContext:
    """Per-command context passed to resolvers and trackers."""
    state: GameState
    choices: ChoiceProvider
    rules: RulesConfig
    result: ActionResult = field(default_factory=ActionResult.ok)

    def note(self, message: str) -> None:
        logger.debug(message)
        self.result.note(message)

    def draw(self, player: Player, kind: DeckKind, amount: int) -> int:
        """
        Move up to `amount` cards from a deck into a player's tally.

        A short deck is reported as a warning; the shortfall is not made up.
        """
        deck = self.state.deck(kind)
        actual = deck.withdraw(amount)
        if kind == DeckKind.NUMBER:
            player.receive_number(actual)
        else:
            player.receive_action(actual)

        if actual:
            self.note(f"{player.name} draws {actual} {kind.value} card(s)")
        if actual < amount:
            self.result.warn(
                f"The {deck.name} is exhausted: {player.name} drew {actual} of {amount}"
            )
        return actual

    def draw_numbers(self, player: Player, amount: int) -> int:
        return self.draw(player, DeckKind.NUMBER, amount)

    def draw_actions(self, player: Player, amount: int) -> int:
        return self.draw(player, DeckKind.ACTION, amount)

    def choose_other(self, prompt: str, actor: Player) -> Player:
        """
        Ask the arbiter for a player other than `actor`.

        With a single candidate there is nothing to ask.
        """
        candidates = self.state.others(actor)
        if len(candidates) == 1:
            return candidates[0]
        return self.choices.ask_player(prompt, self.state.players, exclude=actor)
