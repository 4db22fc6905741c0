"""
Progression Tracker - Cross-cutting checks after every round and action card.

1. Consecutive-win bonus: a player whose streak reaches the threshold gets
   a bonus picked by the arbiter, and the streak resets.
2. Zero-card win: a player with no number cards wins unless someone
   challenges with a +2/+4.
"""

from __future__ import annotations
import logging

from .action import DRAW_CARD_TOKENS, draw_token_amount
from .context import EffectContext
from .state import Player

logger = logging.getLogger(__name__)

BONUS_ACTION_DRAW = 1
BONUS_OPPONENT_DRAW = 2
LAST_CARD_PENALTY = 1


class ProgressionTracker:
    """Stateless; run after every state-changing round or action."""

    def run_checks(self, ctx: EffectContext) -> None:
        self.check_consecutive_wins(ctx)
        self.check_zero_cards(ctx)

    def check_consecutive_wins(self, ctx: EffectContext) -> None:
        for player in ctx.state.players:
            if ctx.state.game_over:
                return
            if player.consecutive_wins >= ctx.rules.streak_threshold:
                self._award_streak_bonus(ctx, player)

    def _award_streak_bonus(self, ctx: EffectContext, player: Player) -> None:
        ctx.note(f"{player.name} won {player.consecutive_wins} consecutive rounds!")
        choice = ctx.choices.ask_int(
            f"Choose bonus for {player.name}: (1) draw {BONUS_ACTION_DRAW} action card, "
            f"or (2) every other player draws {BONUS_OPPONENT_DRAW} number cards",
            1,
            2,
        )
        if choice == 1:
            ctx.draw_actions(player, BONUS_ACTION_DRAW)
        else:
            for other in ctx.state.others(player):
                ctx.draw_numbers(other, BONUS_OPPONENT_DRAW)
        player.reset_streak()

    def check_zero_cards(self, ctx: EffectContext) -> None:
        """
        Offer a challenge to every player with no number cards, in order.

        Stops at the first uncontested player, who wins.
        """
        for player in ctx.state.players:
            if ctx.state.game_over:
                return
            if player.number_cards == 0:
                self._offer_challenge(ctx, player)

    def _offer_challenge(self, ctx: EffectContext, player: Player) -> None:
        ctx.note(f"{player.name} has 0 number cards!")
        if not ctx.choices.confirm(f"Does anyone challenge {player.name} with a +2/+4?"):
            ctx.note(f"{player.name} WINS THE GAME!")
            ctx.state.declare_winner(player.name)
            return

        challenger = ctx.choose_other(f"Who challenges {player.name}?", player)
        if ctx.rules.last_card_challenge_penalty and challenger.total_cards <= 1:
            ctx.note(
                f"{challenger.name} cannot play their only card and draws "
                f"{LAST_CARD_PENALTY} as penalty"
            )
            ctx.draw_numbers(challenger, LAST_CARD_PENALTY)
            return

        amount = draw_token_amount(
            ctx.choices.ask_option(f"Which card does {challenger.name} play?", DRAW_CARD_TOKENS)
        )
        logger.info("%s challenges %s with +%d", challenger.name, player.name, amount)
        ctx.note(f"{challenger.name} challenges with +{amount}")
        ctx.draw_numbers(player, amount)
        challenger.shed_action()
