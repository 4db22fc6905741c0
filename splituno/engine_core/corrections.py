"""
Structured Corrections - Typed models for arbiter manual adjustments.

Corrections bypass every rule check and overwrite state directly. They
exist so the arbiter can fix a miscount. The only rule they keep is the
floor at zero for counts.

Correction Types:
- SetPlayerField: Overwrite one field of one player
- ResetStreaks: Zero every player's consecutive-win streak
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class CorrectionType(Enum):
    """Types of corrections the arbiter can make."""
    SET_PLAYER_FIELD = "set_player_field"
    RESET_STREAKS = "reset_streaks"


class PlayerField(Enum):
    """Player fields open to manual adjustment."""
    NUMBER_CARDS = "number_cards"
    ACTION_CARDS = "action_cards"
    CONSECUTIVE_WINS = "consecutive_wins"
    IS_BLOCKED = "is_blocked"

    @property
    def is_count(self) -> bool:
        return self != PlayerField.IS_BLOCKED


@dataclass
class SetPlayerField:
    """
    Overwrite one field of the player at `player_index`.

    Examples:
        SetPlayerField(player_index=0, field=PlayerField.NUMBER_CARDS, value=12)
        SetPlayerField(player_index=1, field=PlayerField.IS_BLOCKED, value=False)
    """
    player_index: int
    field: PlayerField
    value: int | bool


@dataclass
class ResetStreaks:
    """Zero every player's consecutive-win streak."""


# Union type for all corrections
Correction = Union[SetPlayerField, ResetStreaks]


def parse_player_field(name: str | PlayerField) -> PlayerField:
    if isinstance(name, PlayerField):
        return name
    try:
        return PlayerField(name.strip().lower())
    except ValueError:
        raise ValueError(f"Unknown player field: {name}")


TRUE_TOKENS = {"true", "yes", "y", "1"}
FALSE_TOKENS = {"false", "no", "n", "0"}


def parse_count(raw: Any) -> int | None:
    """Whole numbers only; returns None for anything else."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def parse_flag(raw: Any) -> bool | None:
    """Real bools, 0/1, or a yes/no token; returns None for anything else."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int) and raw in (0, 1):
        return bool(raw)
    if isinstance(raw, str):
        token = raw.strip().lower()
        if token in TRUE_TOKENS:
            return True
        if token in FALSE_TOKENS:
            return False
    return None


def parse_correction(data: dict[str, Any]) -> Correction:
    """
    Parse a correction from a dictionary.

    Args:
        data: Dictionary with "type" key and correction-specific fields

    Returns:
        Typed Correction object

    Raises:
        ValueError: If type or field is unknown, required keys are missing,
            or the value does not fit the field
    """
    correction_type = data.get("type")
    if not correction_type:
        raise ValueError("Correction missing 'type' field")

    try:
        ctype = CorrectionType(correction_type)
    except ValueError:
        raise ValueError(f"Unknown correction type: {correction_type}")

    if ctype == CorrectionType.SET_PLAYER_FIELD:
        try:
            player_field = parse_player_field(data["field"])
            raw_value = data["value"]
            player_index = int(data["player_index"])
        except KeyError as e:
            raise ValueError(f"Correction missing {e} field")
        if player_field.is_count:
            value = parse_count(raw_value)
        else:
            value = parse_flag(raw_value)
        if value is None:
            raise ValueError(f"Invalid value for {player_field.value}: {raw_value!r}")
        return SetPlayerField(player_index=player_index, field=player_field, value=value)
    elif ctype == CorrectionType.RESET_STREAKS:
        return ResetStreaks()
    else:
        raise ValueError(f"Unhandled correction type: {ctype}")


def parse_corrections(data: list[Any]) -> list[Correction]:
    """Parse a list of corrections, passing through already-typed ones."""
    return [d if isinstance(d, (SetPlayerField, ResetStreaks)) else parse_correction(d) for d in data]
