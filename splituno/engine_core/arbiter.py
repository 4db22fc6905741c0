"""
Arbiter - Applies commands to the game state.

The arbiter is the single point of state mutation. All state changes go
through apply().

Design principles:
- One owner: the arbiter exclusively owns one GameState
- Validates before applying
- Returns ActionResult with success/failure instead of raising
- Delegates rules to RoundResolver, ActionEngine and ProgressionTracker
- Publishes a snapshot to the Display Sink after every state change
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, TYPE_CHECKING
import logging

from .action import (
    Command, CommandType, ActionResult, ActionCardType,
    ACTION_CARD_ALIASES, STATE_CHANGING_COMMANDS, parse_action_card,
)
from .context import EffectContext
from .corrections import (
    Correction, SetPlayerField, ResetStreaks, PlayerField, parse_corrections,
)
from .effect_resolver import ActionEngine
from .progression import ProgressionTracker
from .round_resolver import RoundResolver
from .snapshot import GameSnapshot
from .state import GameState
from ..config import ArbiterConfig, RulesConfig

if TYPE_CHECKING:
    from .interfaces import ChoiceProvider, DisplaySink

logger = logging.getLogger(__name__)

RESET_STREAKS_OPTION = "reset_streaks"


@dataclass
class Arbiter:
    """
    Orchestrates one game.

    Usage:
        arbiter = Arbiter.from_config(config, choices=console, display=console)
        result = arbiter.play_number_round()
        if arbiter.state.game_over:
            ...
    """
    state: GameState
    choices: ChoiceProvider
    display: DisplaySink | None = None
    rules: RulesConfig = field(default_factory=RulesConfig)

    round_resolver: RoundResolver = field(default_factory=RoundResolver)
    action_engine: ActionEngine = field(default_factory=ActionEngine)
    progression: ProgressionTracker = field(default_factory=ProgressionTracker)

    # Successful commands, in order
    history: list[Command] = field(default_factory=list)

    @classmethod
    def from_config(
        cls,
        config: ArbiterConfig,
        choices: ChoiceProvider,
        display: DisplaySink | None = None,
    ) -> Arbiter:
        """Deal a fresh game from configuration."""
        rules = config.rules
        state = GameState.create(
            player_names=config.player_names,
            starting_number_cards=rules.starting_number_cards,
            number_deck_size=rules.number_deck_size,
            action_deck_size=rules.action_deck_size,
        )
        logger.info(
            "New game: %s with %d cards each",
            ", ".join(config.player_names), rules.starting_number_cards,
        )
        return cls(state=state, choices=choices, display=display, rules=rules)

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot.from_state(self.state)

    # Command surface

    def play_number_round(self, played_values: dict[str, int] | None = None) -> ActionResult:
        return self.apply(Command.number_round(played_values))

    def play_action_card(
        self,
        actor: str | None = None,
        card: str | ActionCardType | None = None,
    ) -> ActionResult:
        return self.apply(Command.action_card(actor, card))

    def display_state(self) -> ActionResult:
        return self.apply(Command.display())

    def manual_adjust(self, player_index: int, field_name: str, new_value: int | bool) -> ActionResult:
        return self.apply(Command.manual_adjust(player_index, field_name, new_value))

    def end_game(self) -> ActionResult:
        return self.apply(Command.end_game())

    def apply(self, command: Command) -> ActionResult:
        """
        Apply a command to the game state.

        Returns ActionResult describing the changes or the error.
        """
        validation_error = self._validate_command(command)
        if validation_error:
            result = ActionResult.failure(validation_error, error_code="GAME_OVER")
            self._publish(command, result)
            return result

        handler = self._get_handler(command.command_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for command type: {command.command_type}",
                error_code="NO_HANDLER",
            )

        try:
            result = handler(command)
        except ValueError as e:
            result = ActionResult.failure(str(e), error_code="HANDLER_ERROR")

        if result.success:
            self.history.append(command)
        result.game_over = self.state.game_over
        result.winner = self.state.winner_name
        self._publish(command, result)
        return result

    def _validate_command(self, command: Command) -> str | None:
        """
        Validate that a command is allowed in the current state.

        Returns error message if invalid, None if valid.
        """
        if self.state.game_over and command.command_type in STATE_CHANGING_COMMANDS:
            return "Game is over - no further changes allowed"
        return None

    def _get_handler(self, command_type: CommandType) -> Callable[[Command], ActionResult] | None:
        handlers = {
            CommandType.PLAY_NUMBER_ROUND: self._handle_number_round,
            CommandType.PLAY_ACTION_CARD: self._handle_action_card,
            CommandType.DISPLAY_STATE: self._handle_display_state,
            CommandType.MANUAL_ADJUST: self._handle_manual_adjust,
            CommandType.END_GAME: self._handle_end_game,
        }
        return handlers.get(command_type)

    def _context(self) -> EffectContext:
        return EffectContext(state=self.state, choices=self.choices, rules=self.rules)

    def _publish(self, command: Command, result: ActionResult) -> None:
        if not self.display:
            return
        if command.command_type == CommandType.DISPLAY_STATE:
            self.display.show_state(self.snapshot())
            return
        self.display.announce(result)
        if result.success:
            self.display.show_state(self.snapshot())

    def _handle_number_round(self, command: Command) -> ActionResult:
        played_values = command.payload.played_values
        error = self.round_resolver.validate(self.state, played_values)
        if error:
            return ActionResult.failure(error, error_code="INVALID_CARD_VALUE")

        ctx = self._context()
        self.round_resolver.resolve(ctx, played_values)
        if not self.state.game_over:
            self.progression.run_checks(ctx)
        return ctx.result

    def _handle_action_card(self, command: Command) -> ActionResult:
        payload = command.payload

        if payload.actor is not None:
            actor = self.state.get_player(payload.actor)
            if actor is None:
                return ActionResult.failure(
                    f"Player {payload.actor} not found", error_code="INVALID_PLAYER"
                )
        else:
            actor = self.choices.ask_player(
                "Which player is playing an action card?", self.state.players
            )

        card = payload.card
        if card is None:
            card = self.choices.ask_option(
                "Enter action card type", list(ACTION_CARD_ALIASES)
            )
        card_type = parse_action_card(card)
        if card_type == ActionCardType.UNKNOWN:
            return ActionResult.failure(
                f"Unknown action card: {card}", error_code="UNKNOWN_ACTION"
            )

        ctx = self._context()
        self.action_engine.resolve(ctx, actor, card_type)
        if not self.state.game_over:
            self.progression.run_checks(ctx)
        return ctx.result

    def _handle_display_state(self, command: Command) -> ActionResult:
        return ActionResult.ok()

    def _handle_manual_adjust(self, command: Command) -> ActionResult:
        """
        Apply arbiter corrections.

        Corrections are validated as a batch; if any is invalid nothing
        is applied.
        """
        raw = command.payload.corrections
        if raw is None:
            raw = [self._ask_correction()]

        try:
            corrections = parse_corrections(raw)
        except ValueError as e:
            return ActionResult.failure(f"Invalid correction: {e}", error_code="INVALID_FIELD")

        for correction in corrections:
            if isinstance(correction, SetPlayerField):
                if self.state.player_at(correction.player_index) is None:
                    return ActionResult.failure(
                        f"No player at index {correction.player_index}",
                        error_code="INVALID_PLAYER",
                    )

        result = ActionResult.ok()
        for correction in corrections:
            change = self._apply_correction(correction)
            logger.info("Manual adjustment: %s", change)
            result.note(change)
        return result

    def _apply_correction(self, correction: Correction) -> str:
        if isinstance(correction, ResetStreaks):
            for player in self.state.players:
                player.reset_streak()
            return "Consecutive wins reset for every player"

        player = self.state.players[correction.player_index]
        if correction.field == PlayerField.IS_BLOCKED:
            player.is_blocked = bool(correction.value)
            new_value = player.is_blocked
        else:
            new_value = max(0, int(correction.value))
            setattr(player, correction.field.value, new_value)
        return f"Set {player.name}'s {correction.field.value} to {new_value}"

    def _ask_correction(self) -> dict:
        """Collect one correction from the Input Source."""
        options = [f.value for f in PlayerField] + [RESET_STREAKS_OPTION]
        choice = self.choices.ask_option("What needs adjusting?", options)
        if choice == RESET_STREAKS_OPTION:
            return {"type": "reset_streaks"}

        player = self.choices.ask_player("Adjust which player?", self.state.players)
        index = self.state.players.index(player)
        if choice == PlayerField.IS_BLOCKED.value:
            value: int | bool = self.choices.confirm(f"Is {player.name} blocked?")
        else:
            value = self.choices.ask_int(f"Enter new {choice} for {player.name}", 0, 999)
        return {
            "type": "set_player_field",
            "player_index": index,
            "field": choice,
            "value": value,
        }

    def _handle_end_game(self, command: Command) -> ActionResult:
        self.state.end()
        logger.info("Game ended by arbiter")
        return ActionResult.ok(["Game ended by arbiter"])
