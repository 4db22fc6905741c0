"""
Tests for action-card effects.

Tests:
- Each effect's resolution
- Counters (BLOCK vs BLOCK, draw stacks)
- Card-token parsing
"""

import pytest

from ..engine_core.action import ActionCardType, parse_action_card
from ..engine_core.effect_resolver import ActionEngine, UnknownActionError


def play(ctx, actor_name, card_type):
    ActionEngine().resolve(ctx, ctx.state.get_player(actor_name), card_type)


class TestCardParsing:
    """Tests for table tokens."""

    @pytest.mark.parametrize("token,expected", [
        ("block", ActionCardType.BLOCK),
        ("SKIP", ActionCardType.BLOCK),
        ("Wild", ActionCardType.COLOR_CHANGE),
        ("color", ActionCardType.COLOR_CHANGE),
        ("+2", ActionCardType.DRAW_TWO),
        ("+4", ActionCardType.DRAW_FOUR),
        ("draw_four", ActionCardType.DRAW_FOUR),
        ("dare", ActionCardType.DARE),
    ])
    def test_aliases(self, token, expected):
        assert parse_action_card(token) == expected

    def test_unrecognised_is_unknown(self):
        assert parse_action_card("+3") == ActionCardType.UNKNOWN

    def test_unknown_has_no_resolver(self, two_player_state, make_context):
        ctx = make_context(two_player_state)
        with pytest.raises(UnknownActionError):
            play(ctx, "A", ActionCardType.UNKNOWN)


class TestBlock:
    """Tests for BLOCK / SKIP."""

    def test_block_sets_flag(self, two_player_state, make_context):
        state = two_player_state
        state.get_player("A").action_cards = 1
        play(make_context(state, answers=["N"]), "A", ActionCardType.BLOCK)

        assert state.get_player("B").is_blocked
        assert state.get_player("A").action_cards == 0

    def test_counter_block_cancels(self, two_player_state, make_context):
        state = two_player_state
        for p in state.players:
            p.action_cards = 2

        play(make_context(state, answers=["Y"]), "A", ActionCardType.BLOCK)

        for p in state.players:
            assert not p.is_blocked
            assert p.number_cards == 19
            assert p.action_cards == 1

    def test_target_chosen_by_arbiter(self, three_player_state, make_context):
        state = three_player_state
        ctx = make_context(state, answers=["C", "N"])

        play(ctx, "A", ActionCardType.BLOCK)

        assert state.get_player("C").is_blocked
        assert not state.get_player("B").is_blocked
        assert ctx.choices.exhausted


class TestReverse:
    """Tests for REVERSE."""

    def test_shed_before_swap(self, two_player_state, make_context):
        """The spent card leaves the actor's pre-swap hand."""
        state = two_player_state
        a, b = state.get_player("A"), state.get_player("B")
        a.number_cards, a.action_cards = 10, 2
        b.number_cards, b.action_cards = 15, 0

        play(make_context(state), "A", ActionCardType.REVERSE)

        assert (a.number_cards, a.action_cards) == (15, 0)
        assert (b.number_cards, b.action_cards) == (10, 1)


class TestColorChange:
    """Tests for COLOR_CHANGE / WILD."""

    def test_everyone_sheds_and_color_recorded(self, three_player_state, make_context):
        state = three_player_state
        state.get_player("B").action_cards = 1

        play(make_context(state, answers=["green"]), "B", ActionCardType.COLOR_CHANGE)

        assert all(p.number_cards == 19 for p in state.players)
        assert state.color_constraint == "green"
        assert state.get_player("B").action_cards == 0


class TestDrawStack:
    """Tests for DRAW_TWO / DRAW_FOUR and their counters."""

    @pytest.mark.parametrize("card_type,amount", [
        (ActionCardType.DRAW_TWO, 2),
        (ActionCardType.DRAW_FOUR, 4),
    ])
    def test_uncountered(self, two_player_state, make_context, card_type, amount):
        state = two_player_state
        state.get_player("A").action_cards = 1

        play(make_context(state, answers=["N"]), "A", card_type)

        assert state.get_player("B").number_cards == 20 + amount
        assert state.get_player("A").action_cards == 0
        assert state.number_deck.remaining == 68 - amount

    def test_two_countered_by_four(self, two_player_state, make_context):
        """The smaller stack loses: actor draws 1 + 2."""
        state = two_player_state
        for p in state.players:
            p.action_cards = 1

        play(make_context(state, answers=["Y", "+4"]), "A", ActionCardType.DRAW_TWO)

        assert state.get_player("A").number_cards == 23
        assert state.get_player("B").number_cards == 20
        assert all(p.action_cards == 0 for p in state.players)

    def test_four_countered_by_two(self, two_player_state, make_context):
        state = two_player_state

        play(make_context(state, answers=["Y", "+2"]), "A", ActionCardType.DRAW_FOUR)

        assert state.get_player("B").number_cards == 23
        assert state.get_player("A").number_cards == 20
        # action counts floor at zero
        assert all(p.action_cards == 0 for p in state.players)

    @pytest.mark.parametrize("card_type,token", [
        (ActionCardType.DRAW_TWO, "+2"),
        (ActionCardType.DRAW_FOUR, "+4"),
    ])
    def test_equal_stacks_both_draw_one(self, two_player_state, make_context, card_type, token):
        state = two_player_state
        for p in state.players:
            p.action_cards = 2

        play(make_context(state, answers=["Y", token]), "A", card_type)

        for p in state.players:
            assert p.number_cards == 21
            assert p.action_cards == 1
        assert state.number_deck.remaining == 66


class TestTruth:
    """Tests for TRUTH."""

    def test_answered(self, two_player_state, make_context):
        state = two_player_state
        state.get_player("A").action_cards = 1

        play(make_context(state, answers=["Y"]), "A", ActionCardType.TRUTH)

        a = state.get_player("A")
        assert (a.number_cards, a.action_cards) == (19, 0)
        assert state.get_player("B").number_cards == 20

    def test_refused_split_penalty(self, two_player_state, make_context):
        state = two_player_state
        state.get_player("A").action_cards = 1

        play(make_context(state, answers=["N", 1]), "A", ActionCardType.TRUTH)

        a = state.get_player("A")
        assert a.action_cards == 1 + 2 - 1
        assert a.number_cards == 19
        assert state.get_player("B").number_cards == 22
        assert state.action_deck.remaining == 30

    def test_refused_heavy_penalty(self, two_player_state, make_context):
        state = two_player_state

        play(make_context(state, answers=["N", 2]), "A", ActionCardType.TRUTH)

        assert state.get_player("B").number_cards == 25
        assert state.number_deck.remaining == 63


class TestDare:
    """Tests for DARE."""

    def test_refusal_ends_game(self, two_player_state, make_context):
        state = two_player_state

        play(make_context(state, answers=["N"]), "A", ActionCardType.DARE)

        assert state.game_over
        assert state.winner_name == "A"

    def test_completion_continues(self, two_player_state, make_context):
        state = two_player_state
        state.get_player("A").action_cards = 1

        play(make_context(state, answers=["Y"]), "A", ActionCardType.DARE)

        assert not state.game_over
        a = state.get_player("A")
        assert (a.number_cards, a.action_cards) == (19, 0)
