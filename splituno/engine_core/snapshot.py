"""
Pydantic Snapshots - Read-only views of GameState for the Display Sink.

Snapshots are copies: a sink can keep, serialize or render them without
any way to reach back into the live state.
"""

from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .state import GameState, Player


class PlayerSnapshot(BaseModel):
    """One player's tallies."""
    model_config = ConfigDict(frozen=True)

    name: str
    number_cards: int = Field(..., ge=0)
    action_cards: int = Field(..., ge=0)
    consecutive_wins: int = Field(default=0, ge=0)
    is_blocked: bool = False

    @classmethod
    def from_player(cls, player: Player) -> PlayerSnapshot:
        return cls(
            name=player.name,
            number_cards=player.number_cards,
            action_cards=player.action_cards,
            consecutive_wins=player.consecutive_wins,
            is_blocked=player.is_blocked,
        )


class GameSnapshot(BaseModel):
    """Everything the Display Sink is allowed to see."""
    model_config = ConfigDict(frozen=True)

    players: list[PlayerSnapshot] = Field(default_factory=list)
    number_deck_remaining: int = Field(..., ge=0)
    action_deck_remaining: int = Field(..., ge=0)
    round_number: int = Field(default=0, ge=0)
    color_constraint: Optional[str] = Field(
        default=None, description="Advisory color for the next round"
    )
    game_over: bool = False
    winner: Optional[str] = None

    @classmethod
    def from_state(cls, state: GameState) -> GameSnapshot:
        return cls(
            players=[PlayerSnapshot.from_player(p) for p in state.players],
            number_deck_remaining=state.number_deck.remaining,
            action_deck_remaining=state.action_deck.remaining,
            round_number=state.round_number,
            color_constraint=state.color_constraint,
            game_over=state.game_over,
            winner=state.winner_name,
        )

    def get_player(self, name: str) -> PlayerSnapshot | None:
        for p in self.players:
            if p.name == name:
                return p
        return None
