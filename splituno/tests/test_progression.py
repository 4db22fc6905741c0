"""
Tests for streak bonuses and the zero-card win condition.
"""

from ..engine_core.progression import ProgressionTracker


class TestConsecutiveWins:
    """Tests for the consecutive-win bonus."""

    def test_bonus_action_card(self, two_player_state, make_context):
        state = two_player_state
        state.get_player("A").consecutive_wins = 2

        ProgressionTracker().check_consecutive_wins(make_context(state, answers=[1]))

        a = state.get_player("A")
        assert a.action_cards == 1
        assert a.consecutive_wins == 0
        assert state.action_deck.remaining == 31

    def test_bonus_opponents_draw(self, three_player_state, make_context):
        state = three_player_state
        state.get_player("A").consecutive_wins = 2

        ProgressionTracker().check_consecutive_wins(make_context(state, answers=[2]))

        assert state.get_player("A").number_cards == 20
        assert state.get_player("B").number_cards == 22
        assert state.get_player("C").number_cards == 22
        assert state.get_player("A").consecutive_wins == 0

    def test_every_qualifying_player_gets_a_bonus(self, two_player_state, make_context):
        state = two_player_state
        for p in state.players:
            p.consecutive_wins = 2
        ctx = make_context(state, answers=[1, 1])

        ProgressionTracker().check_consecutive_wins(ctx)

        assert all(p.action_cards == 1 and p.consecutive_wins == 0 for p in state.players)
        assert ctx.choices.exhausted

    def test_below_threshold_asks_nothing(self, two_player_state, make_context):
        state = two_player_state
        state.get_player("A").consecutive_wins = 1
        ctx = make_context(state)

        ProgressionTracker().check_consecutive_wins(ctx)

        assert ctx.choices.prompts == []
        assert state.get_player("A").consecutive_wins == 1

    def test_threshold_is_configurable(self, two_player_state, make_context):
        state = two_player_state
        state.get_player("A").consecutive_wins = 2
        ctx = make_context(state, streak_threshold=3)

        ProgressionTracker().check_consecutive_wins(ctx)

        assert ctx.choices.prompts == []


class TestZeroCardWin:
    """Tests for the zero-card win and challenges."""

    def test_uncontested_win(self, three_player_state, make_context):
        state = three_player_state
        state.get_player("C").number_cards = 0

        ProgressionTracker().check_zero_cards(make_context(state, answers=["N"]))

        assert state.game_over
        assert state.winner_name == "C"

    def test_challenge_forces_draw(self, three_player_state, make_context):
        state = three_player_state
        state.get_player("C").number_cards = 0
        state.get_player("A").action_cards = 1

        ProgressionTracker().check_zero_cards(make_context(state, answers=["Y", "A", "+4"]))

        assert not state.game_over
        assert state.get_player("C").number_cards == 4
        assert state.get_player("A").action_cards == 0

    def test_two_player_challenger_needs_no_testimony(self, two_player_state, make_context):
        state = two_player_state
        state.get_player("B").number_cards = 0
        ctx = make_context(state, answers=["Y", "+2"])

        ProgressionTracker().check_zero_cards(ctx)

        assert state.get_player("B").number_cards == 2
        assert ctx.choices.exhausted

    def test_last_card_cannot_challenge(self, two_player_state, make_context):
        """A challenger whose +2/+4 is their only card draws 1 instead."""
        state = two_player_state
        a, b = state.get_player("A"), state.get_player("B")
        a.number_cards = 0
        b.number_cards, b.action_cards = 0, 1

        ProgressionTracker().check_zero_cards(make_context(state, answers=["Y"]))

        assert not state.game_over
        assert a.number_cards == 0
        assert b.number_cards == 1
        assert b.action_cards == 1

    def test_last_card_rule_disabled(self, two_player_state, make_context):
        state = two_player_state
        a, b = state.get_player("A"), state.get_player("B")
        a.number_cards = 0
        b.number_cards, b.action_cards = 0, 1
        ctx = make_context(
            state, answers=["Y", "+2", "N"], last_card_challenge_penalty=False
        )

        ProgressionTracker().check_zero_cards(ctx)

        assert a.number_cards == 2
        assert b.action_cards == 0
        assert state.winner_name == "B"

    def test_scan_stops_at_first_winner(self, two_player_state, make_context):
        state = two_player_state
        for p in state.players:
            p.number_cards = 0
        ctx = make_context(state, answers=["N"])

        ProgressionTracker().check_zero_cards(ctx)

        assert state.winner_name == "A"
        assert ctx.choices.exhausted
        assert len(ctx.choices.prompts) == 1

    def test_no_checks_after_game_over(self, two_player_state, make_context):
        state = two_player_state
        state.get_player("B").number_cards = 0
        state.get_player("A").consecutive_wins = 2
        state.declare_winner("A")
        ctx = make_context(state)

        ProgressionTracker().run_checks(ctx)

        assert ctx.choices.prompts == []
        assert state.winner_name == "A"
