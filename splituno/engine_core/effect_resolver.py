"""
Action Engine - Resolves action-card effects.

Each ActionCardType has exactly one resolver. The arbiter names the actor
and the card; targets, counters and refusals are arbiter testimony
collected through the context's ChoiceProvider.

Unless a resolver says otherwise, the actor's action card is shed as the
last step of the effect.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import logging

from .action import ActionCardType, CardColor, DRAW_CARD_TOKENS, draw_token_amount
from .context import EffectContext
from .state import Player

logger = logging.getLogger(__name__)

TRUTH_PENALTY_ACTION_DRAW = 2
TRUTH_PENALTY_NUMBER_DRAW = 2
TRUTH_HEAVY_PENALTY_DRAW = 5


class UnknownActionError(ValueError):
    """Raised when an action card has no resolver."""


@dataclass
class ActionEngine:
    """
    Dispatches action cards to their resolvers.

    Stateless - all state is in the EffectContext.
    """

    def resolve(self, ctx: EffectContext, actor: Player, card_type: ActionCardType) -> None:
        handler = self._get_handler(card_type)
        if handler is None:
            raise UnknownActionError(f"No resolver for action card: {card_type.value}")
        logger.debug("%s plays %s", actor.name, card_type.name)
        handler(ctx, actor)

    def _get_handler(
        self, card_type: ActionCardType
    ) -> Callable[[EffectContext, Player], None] | None:
        handlers = {
            ActionCardType.BLOCK: self._resolve_block,
            ActionCardType.REVERSE: self._resolve_reverse,
            ActionCardType.COLOR_CHANGE: self._resolve_color_change,
            ActionCardType.DRAW_TWO: self._resolve_draw_two,
            ActionCardType.DRAW_FOUR: self._resolve_draw_four,
            ActionCardType.TRUTH: self._resolve_truth,
            ActionCardType.DARE: self._resolve_dare,
        }
        return handlers.get(card_type)

    def _resolve_block(self, ctx: EffectContext, actor: Player) -> None:
        target = ctx.choose_other(f"{actor.name} plays BLOCK. Who is blocked?", actor)
        if ctx.choices.confirm(f"Did {target.name} counter with their own BLOCK?"):
            for player in (actor, target):
                player.shed_number()
                player.shed_action()
            ctx.note(
                f"Both {actor.name} and {target.name} played BLOCK; effects cancel "
                "and each sheds 1 number and 1 action card"
            )
            return

        target.is_blocked = True
        actor.shed_action()
        ctx.note(f"{target.name} is BLOCKED for their next round")

    def _resolve_reverse(self, ctx: EffectContext, actor: Player) -> None:
        target = ctx.choose_other(f"{actor.name} plays REVERSE. Swap hands with whom?", actor)
        # Shed from the pre-swap hand, so the spent card travels with the swap
        actor.shed_action()
        actor.swap_hands(target)
        ctx.note(f"{actor.name} and {target.name} exchange their entire hands")

    def _resolve_color_change(self, ctx: EffectContext, actor: Player) -> None:
        for player in ctx.state.players:
            player.shed_number()
        ctx.note(f"{actor.name} plays COLOR CHANGE; every player sheds 1 number card")

        options = [c.name for c in CardColor]
        color = ctx.choices.ask_option("Which color is called for the next round?", options)
        ctx.state.color_constraint = CardColor[color].value
        ctx.note(f"Next round should be played in {ctx.state.color_constraint}")

        actor.shed_action()

    def _resolve_draw_two(self, ctx: EffectContext, actor: Player) -> None:
        self._resolve_draw_stack(ctx, actor, ActionCardType.DRAW_TWO.draw_amount)

    def _resolve_draw_four(self, ctx: EffectContext, actor: Player) -> None:
        self._resolve_draw_stack(ctx, actor, ActionCardType.DRAW_FOUR.draw_amount)

    def _resolve_draw_stack(self, ctx: EffectContext, actor: Player, amount: int) -> None:
        """
        A +2/+4 aimed at a target who may stack their own +2/+4 on it.

        Equal stacks cancel and both draw 1. Otherwise the smaller stack
        loses and draws 1 plus the difference.
        """
        target = ctx.choose_other(f"{actor.name} plays +{amount}. Who must draw?", actor)

        if not ctx.choices.confirm(f"Did {target.name} counter with a +2/+4?"):
            ctx.draw_numbers(target, amount)
            actor.shed_action()
            ctx.note(f"{target.name} takes the +{amount}")
            return

        counter = draw_token_amount(
            ctx.choices.ask_option(f"Which card did {target.name} counter with?", DRAW_CARD_TOKENS)
        )
        actor.shed_action()
        target.shed_action()

        if counter == amount:
            ctx.note(f"+{amount} meets +{counter}; both shed and draw 1")
            ctx.draw_numbers(actor, 1)
            ctx.draw_numbers(target, 1)
            return

        loser = actor if amount < counter else target
        penalty = 1 + abs(amount - counter)
        ctx.note(f"+{amount} meets +{counter}; {loser.name} loses the stack and draws {penalty}")
        ctx.draw_numbers(loser, penalty)

    def _resolve_truth(self, ctx: EffectContext, actor: Player) -> None:
        target = ctx.choose_other(f"{actor.name} plays TRUTH. Who must answer?", actor)

        if ctx.choices.confirm(f"Did {target.name} answer the truth question?"):
            ctx.note(f"{target.name} answered the truth")
        else:
            penalty = ctx.choices.ask_int(
                f"{target.name} refused. Choose penalty: "
                f"(1) {actor.name} takes {TRUTH_PENALTY_ACTION_DRAW} action cards and "
                f"{target.name} draws {TRUTH_PENALTY_NUMBER_DRAW} number cards, or "
                f"(2) {target.name} draws {TRUTH_HEAVY_PENALTY_DRAW} number cards",
                1,
                2,
            )
            if penalty == 1:
                ctx.draw_actions(actor, TRUTH_PENALTY_ACTION_DRAW)
                ctx.draw_numbers(target, TRUTH_PENALTY_NUMBER_DRAW)
            else:
                ctx.draw_numbers(target, TRUTH_HEAVY_PENALTY_DRAW)

        actor.shed_action()
        actor.shed_number()

    def _resolve_dare(self, ctx: EffectContext, actor: Player) -> None:
        target = ctx.choose_other(f"{actor.name} plays DARE. Who is dared?", actor)

        if not ctx.choices.confirm(f"Did {target.name} complete the dare?"):
            ctx.note(f"{target.name} refuses the dare and forfeits")
            ctx.state.declare_winner(actor.name)
            return

        actor.shed_action()
        actor.shed_number()
        ctx.note(f"{target.name} completed the dare")
