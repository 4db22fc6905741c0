"""
Command System - Commands, action cards, and results.

Commands represent:
1. Rounds (a simultaneous number-card bid)
2. Action cards (one actor, usually one target)
3. Arbiter housekeeping (display, manual adjustment, end game)

All state changes flow through commands applied by the Arbiter.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionCardType(Enum):
    """Closed set of action-card effects."""
    BLOCK = "block"
    REVERSE = "reverse"
    COLOR_CHANGE = "color_change"
    DRAW_TWO = "draw_two"
    DRAW_FOUR = "draw_four"
    TRUTH = "truth"
    DARE = "dare"

    # Anything the arbiter typed that is not a known card
    UNKNOWN = "unknown"

    @property
    def draw_amount(self) -> int:
        """Stack size for draw cards, 0 for everything else."""
        return {ActionCardType.DRAW_TWO: 2, ActionCardType.DRAW_FOUR: 4}.get(self, 0)


# Table tokens as called out at the table -> card type
ACTION_CARD_ALIASES: dict[str, ActionCardType] = {
    "BLOCK": ActionCardType.BLOCK,
    "SKIP": ActionCardType.BLOCK,
    "REVERSE": ActionCardType.REVERSE,
    "COLOR": ActionCardType.COLOR_CHANGE,
    "WILD": ActionCardType.COLOR_CHANGE,
    "+2": ActionCardType.DRAW_TWO,
    "+4": ActionCardType.DRAW_FOUR,
    "TRUTH": ActionCardType.TRUTH,
    "DARE": ActionCardType.DARE,
}

DRAW_CARD_TOKENS = ["+2", "+4"]


def parse_action_card(token: str | ActionCardType) -> ActionCardType:
    """
    Map a table token (or enum value name) to an ActionCardType.

    Unrecognised tokens map to UNKNOWN rather than raising, so the
    Arbiter can reject them as a normal failed command.
    """
    if isinstance(token, ActionCardType):
        return token
    key = token.strip().upper()
    if key in ACTION_CARD_ALIASES:
        return ACTION_CARD_ALIASES[key]
    for card_type in ActionCardType:
        if key == card_type.name:
            return card_type
    return ActionCardType.UNKNOWN


def draw_token_amount(token: str) -> int:
    """'+2' -> 2, '+4' -> 4."""
    return parse_action_card(token).draw_amount


class CardColor(Enum):
    """Colors a color change can call."""
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"


class CommandType(Enum):
    """Orchestrator command surface."""
    PLAY_NUMBER_ROUND = "play_number_round"
    PLAY_ACTION_CARD = "play_action_card"
    DISPLAY_STATE = "display_state"
    MANUAL_ADJUST = "manual_adjust"
    END_GAME = "end_game"


# Commands that mutate state; rejected once the game is over
STATE_CHANGING_COMMANDS = {
    CommandType.PLAY_NUMBER_ROUND,
    CommandType.PLAY_ACTION_CARD,
    CommandType.MANUAL_ADJUST,
    CommandType.END_GAME,
}


@dataclass
class CommandPayload:
    """
    Payload for a command.

    Any field left as None is collected from the Input Source when the
    command is applied.
    """
    # Number rounds: player name -> card value
    played_values: dict[str, int] | None = None

    # Action cards
    actor: str | None = None
    card: str | ActionCardType | None = None

    # Manual adjustment
    corrections: list[Any] | None = None


@dataclass
class Command:
    """A complete command for the Arbiter."""
    command_type: CommandType
    payload: CommandPayload = field(default_factory=CommandPayload)

    @classmethod
    def number_round(cls, played_values: dict[str, int] | None = None) -> Command:
        """Factory for a number-card round."""
        return cls(
            command_type=CommandType.PLAY_NUMBER_ROUND,
            payload=CommandPayload(played_values=played_values),
        )

    @classmethod
    def action_card(
        cls,
        actor: str | None = None,
        card: str | ActionCardType | None = None,
    ) -> Command:
        """Factory for playing an action card."""
        return cls(
            command_type=CommandType.PLAY_ACTION_CARD,
            payload=CommandPayload(actor=actor, card=card),
        )

    @classmethod
    def display(cls) -> Command:
        return cls(command_type=CommandType.DISPLAY_STATE)

    @classmethod
    def manual_adjust(cls, player_index: int, field_name: str, new_value: int | bool) -> Command:
        """Factory for a single-field manual correction."""
        return cls(
            command_type=CommandType.MANUAL_ADJUST,
            payload=CommandPayload(corrections=[{
                "type": "set_player_field",
                "player_index": player_index,
                "field": field_name,
                "value": new_value,
            }]),
        )

    @classmethod
    def adjustment(cls) -> Command:
        """Factory for a manual adjustment collected from the Input Source."""
        return cls(command_type=CommandType.MANUAL_ADJUST)

    @classmethod
    def corrections(cls, corrections: list[Any]) -> Command:
        """Factory for a batch of manual corrections."""
        return cls(
            command_type=CommandType.MANUAL_ADJUST,
            payload=CommandPayload(corrections=corrections),
        )

    @classmethod
    def end_game(cls) -> Command:
        return cls(command_type=CommandType.END_GAME)


@dataclass
class ActionResult:
    """
    Result of applying a command.

    Contains:
    - Whether the command succeeded
    - Errors (if failed)
    - Human-readable changes and warnings for the Display Sink
    - The winner, if the command ended the game
    """
    success: bool
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    game_over: bool = False
    winner: str | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def ok(cls, changes: list[str] | None = None) -> ActionResult:
        return cls(success=True, state_changes=changes or [])

    def note(self, message: str) -> None:
        self.state_changes.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
