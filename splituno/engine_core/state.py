"""
Game State - Count-based state container for a Split UNO game.

Design principles:
- Counts only: players never hold literal cards, only tallies
- Clamped: no count ever drops below zero
- Single owner: one Arbiter owns one GameState for the life of a game
- Observable: snapshots give the Display Sink a read-only view
"""

from __future__ import annotations
from dataclasses import dataclass, field
from copy import deepcopy
from enum import Enum
import logging

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """High-level game phases."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


class DeckKind(Enum):
    """The two shared draw piles."""
    NUMBER = "number"
    ACTION = "action"


@dataclass
class Deck:
    """
    A finite draw pile tracked as a count.

    Withdrawals are clamped to what is left. An over-request is satisfied
    partially and logged as a warning, never raised.
    """
    kind: DeckKind
    remaining: int = 0

    def __post_init__(self):
        self.remaining = max(0, self.remaining)

    @property
    def name(self) -> str:
        return f"{self.kind.value} deck"

    @property
    def is_empty(self) -> bool:
        return self.remaining == 0

    def withdraw(self, amount: int) -> int:
        """Take up to `amount` cards; returns how many were actually taken."""
        if amount <= 0:
            return 0
        if self.remaining == 0:
            logger.warning("%s is exhausted; requested %d, got 0", self.name, amount)
            return 0
        actual = min(amount, self.remaining)
        self.remaining -= actual
        if actual < amount:
            logger.warning(
                "%s ran short: requested %d, got %d", self.name, amount, actual
            )
        return actual


@dataclass
class Player:
    """
    A participant's tallies.

    Every mutator floors at zero; shedding from an empty hand is a no-op.
    """
    name: str
    number_cards: int = 0
    action_cards: int = 0
    consecutive_wins: int = 0
    is_blocked: bool = False

    def __post_init__(self):
        self.number_cards = max(0, self.number_cards)
        self.action_cards = max(0, self.action_cards)
        self.consecutive_wins = max(0, self.consecutive_wins)

    @property
    def total_cards(self) -> int:
        return self.number_cards + self.action_cards

    def shed_number(self, count: int = 1) -> int:
        """Remove number cards, floored at zero. Returns how many left the hand."""
        removed = min(count, self.number_cards)
        self.number_cards -= removed
        return removed

    def shed_action(self, count: int = 1) -> int:
        """Remove action cards, floored at zero. Returns how many left the hand."""
        removed = min(count, self.action_cards)
        self.action_cards -= removed
        return removed

    def receive_number(self, count: int) -> None:
        self.number_cards += max(0, count)

    def receive_action(self, count: int) -> None:
        self.action_cards += max(0, count)

    def record_win(self) -> None:
        self.consecutive_wins += 1

    def reset_streak(self) -> None:
        self.consecutive_wins = 0

    def swap_hands(self, other: Player) -> None:
        """Exchange number and action counts with another player."""
        self.number_cards, other.number_cards = other.number_cards, self.number_cards
        self.action_cards, other.action_cards = other.action_cards, self.action_cards


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    Player order is turn/display order, not priority. Once the phase is
    GAME_OVER the engine performs no further mutation.
    """
    players: list[Player] = field(default_factory=list)
    number_deck: Deck = field(default_factory=lambda: Deck(DeckKind.NUMBER))
    action_deck: Deck = field(default_factory=lambda: Deck(DeckKind.ACTION))

    phase: GamePhase = GamePhase.PLAYING
    winner_name: str | None = None
    round_number: int = 0

    # Advisory only; set by a color change and cleared after the next round
    color_constraint: str | None = None

    @classmethod
    def create(
        cls,
        player_names: list[str],
        starting_number_cards: int,
        number_deck_size: int,
        action_deck_size: int,
    ) -> GameState:
        """Create a fresh game with every player on the same starting hand."""
        if len(set(player_names)) != len(player_names):
            raise ValueError("Player names must be unique")
        players = [
            Player(name=name, number_cards=starting_number_cards)
            for name in player_names
        ]
        return cls(
            players=players,
            number_deck=Deck(DeckKind.NUMBER, number_deck_size),
            action_deck=Deck(DeckKind.ACTION, action_deck_size),
        )

    @property
    def game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def deck(self, kind: DeckKind) -> Deck:
        return self.number_deck if kind == DeckKind.NUMBER else self.action_deck

    def get_player(self, name: str) -> Player | None:
        """Get player by name."""
        for p in self.players:
            if p.name == name:
                return p
        return None

    def player_at(self, index: int) -> Player | None:
        if 0 <= index < len(self.players):
            return self.players[index]
        return None

    def others(self, player: Player) -> list[Player]:
        """All players except `player`, in turn order."""
        return [p for p in self.players if p.name != player.name]

    def declare_winner(self, name: str) -> None:
        """End the game with a winner. A game has at most one."""
        if self.winner_name is not None:
            raise RuntimeError(
                f"Winner already declared ({self.winner_name}); cannot declare {name}"
            )
        self.winner_name = name
        self.phase = GamePhase.GAME_OVER
        logger.info("Game over: %s wins", name)

    def end(self) -> None:
        """End the game without a winner."""
        self.phase = GamePhase.GAME_OVER

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
