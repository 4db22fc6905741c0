"""
Engine Core - Rules engine for the Split UNO arbiter.

The engine is the runtime that:
1. Deals a GameState from configuration
2. Resolves number-card rounds
3. Resolves action-card effects
4. Runs streak and zero-card checks after each event
5. Applies arbiter corrections
"""

from .state import GameState, GamePhase, Player, Deck, DeckKind
from .action import (
    Command, CommandType, CommandPayload, ActionResult,
    ActionCardType, CardColor, parse_action_card,
)
from .context import EffectContext
from .interfaces import ChoiceProvider, DisplaySink
from .snapshot import GameSnapshot, PlayerSnapshot
from .round_resolver import RoundResolver, RoundOutcome
from .effect_resolver import ActionEngine, UnknownActionError
from .progression import ProgressionTracker
from .corrections import PlayerField, SetPlayerField, ResetStreaks, parse_correction
from .arbiter import Arbiter

__all__ = [
    "GameState",
    "GamePhase",
    "Player",
    "Deck",
    "DeckKind",
    "Command",
    "CommandType",
    "CommandPayload",
    "ActionResult",
    "ActionCardType",
    "CardColor",
    "parse_action_card",
    "EffectContext",
    "ChoiceProvider",
    "DisplaySink",
    "GameSnapshot",
    "PlayerSnapshot",
    "RoundResolver",
    "RoundOutcome",
    "ActionEngine",
    "UnknownActionError",
    "ProgressionTracker",
    "PlayerField",
    "SetPlayerField",
    "ResetStreaks",
    "parse_correction",
    "Arbiter",
]
