"""
Pytest fixtures for Split UNO tests.
"""

import pytest

from ..config import ArbiterConfig, RulesConfig
from ..engine_core.arbiter import Arbiter
from ..engine_core.context import EffectContext
from ..engine_core.state import GameState
from .fakes import ScriptedChoices, RecordingDisplay


@pytest.fixture
def rules() -> RulesConfig:
    """Default table rules: 20 cards each, decks at 68/32."""
    return RulesConfig()


@pytest.fixture
def two_player_state(rules: RulesConfig) -> GameState:
    """A and B freshly dealt."""
    return GameState.create(
        player_names=["A", "B"],
        starting_number_cards=rules.starting_number_cards,
        number_deck_size=rules.number_deck_size,
        action_deck_size=rules.action_deck_size,
    )


@pytest.fixture
def three_player_state(rules: RulesConfig) -> GameState:
    """A, B and C freshly dealt."""
    return GameState.create(
        player_names=["A", "B", "C"],
        starting_number_cards=rules.starting_number_cards,
        number_deck_size=rules.number_deck_size,
        action_deck_size=rules.action_deck_size,
    )


@pytest.fixture
def make_context(rules: RulesConfig):
    """Build an EffectContext over a state with scripted testimony."""
    def _make(state: GameState, answers=None, **rule_overrides) -> EffectContext:
        active_rules = rules.model_copy(update=rule_overrides) if rule_overrides else rules
        return EffectContext(
            state=state,
            choices=ScriptedChoices(answers),
            rules=active_rules,
        )
    return _make


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def make_arbiter(display: RecordingDisplay):
    """Build an Arbiter from config with scripted testimony."""
    def _make(players=("A", "B"), answers=None, **rule_overrides) -> Arbiter:
        config = ArbiterConfig(
            player_names=list(players),
            rules=RulesConfig(**rule_overrides),
        )
        return Arbiter.from_config(config, choices=ScriptedChoices(answers), display=display)
    return _make
