"""
Round Resolver - Resolves a simultaneous number-card round.

Every non-blocked player plays one value in [0, 9]. Blocked players sit
the round out and their block clears. Special values (0 steals, 7 punishes)
fire for every player who played, independent of who wins the bid. Then
the highest value wins the bid:

- One leader: the leader sheds a card and extends their streak; every
  other participant loses their streak and draws 1.
- Tied leaders: each leader sheds a card (and by house rule loses their
  streak); then every player at the table draws 1.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .context import EffectContext
from .state import GameState, Player

logger = logging.getLogger(__name__)

MIN_CARD_VALUE = 0
MAX_CARD_VALUE = 9

STEAL_VALUE = 0
PENALTY_VALUE = 7
PENALTY_NUMBER_DRAW = 2
PENALTY_ACTION_DRAW = 1


@dataclass
class RoundOutcome:
    """What happened in one round, for display and tests."""
    played: dict[str, int] = field(default_factory=dict)
    sat_out: list[str] = field(default_factory=list)
    winner: str | None = None
    tied: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return not self.played


class RoundResolver:
    """Stateless; all state lives in the EffectContext."""

    def eligible_players(self, state: GameState) -> list[Player]:
        return [p for p in state.players if not p.is_blocked]

    def validate(self, state: GameState, played_values: dict[str, int] | None) -> str | None:
        """
        Check pre-supplied card values before anything is mutated.

        Returns error message if invalid, None if valid.
        """
        if not played_values:
            return None
        eligible = {p.name for p in self.eligible_players(state)}
        for name, value in played_values.items():
            if state.get_player(name) is None:
                return f"Player {name} not found"
            if name not in eligible:
                return f"{name} is blocked and cannot play this round"
            if isinstance(value, bool) or not isinstance(value, int):
                return f"Card value {value!r} for {name} is not a whole number"
            if not MIN_CARD_VALUE <= value <= MAX_CARD_VALUE:
                return f"Card value {value} for {name} is outside {MIN_CARD_VALUE}-{MAX_CARD_VALUE}"
        return None

    def resolve(
        self,
        ctx: EffectContext,
        played_values: dict[str, int] | None = None,
    ) -> RoundOutcome:
        state = ctx.state
        state.round_number += 1
        outcome = RoundOutcome()

        if state.color_constraint:
            ctx.note(f"Advisory: this round should be played in {state.color_constraint}")

        participants: list[Player] = []
        for player in state.players:
            if player.is_blocked:
                player.is_blocked = False
                outcome.sat_out.append(player.name)
                ctx.note(f"{player.name} is BLOCKED and sits out this round")
            else:
                participants.append(player)

        if not participants:
            ctx.note("Every player is blocked; the round is skipped")
            state.color_constraint = None
            return outcome

        plays = self._collect_plays(ctx, participants, played_values or {})
        outcome.played = {p.name: v for p, v in plays}

        self._apply_special_values(ctx, plays)
        self._resolve_bid(ctx, plays, outcome)
        logger.debug("Round %d: %s", state.round_number, outcome)

        state.color_constraint = None
        return outcome

    def _collect_plays(
        self,
        ctx: EffectContext,
        participants: list[Player],
        played_values: dict[str, int],
    ) -> list[tuple[Player, int]]:
        plays = []
        for player in participants:
            value = played_values.get(player.name)
            if value is None:
                value = ctx.choices.ask_int(
                    f"Enter {player.name}'s card ({MIN_CARD_VALUE}-{MAX_CARD_VALUE})",
                    MIN_CARD_VALUE,
                    MAX_CARD_VALUE,
                )
            plays.append((player, value))
        return plays

    def _apply_special_values(
        self,
        ctx: EffectContext,
        plays: list[tuple[Player, int]],
    ) -> None:
        for player, value in plays:
            if value == STEAL_VALUE:
                self._steal(ctx, player)
            elif value == PENALTY_VALUE:
                self._penalty(ctx, player)

    def _steal(self, ctx: EffectContext, thief: Player) -> None:
        victim = ctx.choose_other(f"{thief.name} played 0. Steal from whom?", thief)
        if victim.number_cards <= 0:
            ctx.note(f"{thief.name} played 0 but {victim.name} has no number cards to steal")
            return
        victim.shed_number()
        thief.receive_number(1)
        ctx.note(f"{thief.name} played 0 and steals 1 number card from {victim.name}")

    def _penalty(self, ctx: EffectContext, player: Player) -> None:
        target = ctx.choose_other(f"{player.name} played 7. Who takes the penalty?", player)
        ctx.note(
            f"{player.name} played 7: {target.name} draws "
            f"{PENALTY_NUMBER_DRAW} number and {PENALTY_ACTION_DRAW} action card"
        )
        ctx.draw_numbers(target, PENALTY_NUMBER_DRAW)
        ctx.draw_actions(target, PENALTY_ACTION_DRAW)

    def _resolve_bid(
        self,
        ctx: EffectContext,
        plays: list[tuple[Player, int]],
        outcome: RoundOutcome,
    ) -> None:
        top = max(value for _, value in plays)
        leaders = [player for player, value in plays if value == top]

        if len(leaders) == 1:
            winner = leaders[0]
            outcome.winner = winner.name
            winner.shed_number()
            winner.record_win()
            ctx.note(f"{winner.name} WINS the round with {top}")
            for player, _ in plays:
                if player is winner:
                    continue
                player.reset_streak()
                ctx.draw_numbers(player, 1)
            return

        outcome.tied = [p.name for p in leaders]
        ctx.note(f"TIE at {top} between {', '.join(outcome.tied)}")
        for player in leaders:
            player.shed_number()
            if ctx.rules.tie_resets_streak:
                player.reset_streak()
        for player, _ in plays:
            if player not in leaders:
                player.reset_streak()
        for player in ctx.state.players:
            ctx.draw_numbers(player, 1)
