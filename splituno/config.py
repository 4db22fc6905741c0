"""Configuration models for the Split UNO arbiter."""

from __future__ import annotations
import os
from typing import Literal, List
from pydantic import BaseModel, Field, field_validator, model_validator


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class RulesConfig(BaseModel):
    """Table rules and house-rule switches."""

    starting_number_cards: int = Field(
        default=20, ge=0, description="Number cards dealt to each player"
    )
    number_deck_size: int = Field(
        default=68, ge=0, description="Number deck after the deal (108 - 40)"
    )
    action_deck_size: int = Field(
        default=32, ge=0, description="Action deck at game start"
    )
    streak_threshold: int = Field(
        default=2, ge=1, description="Consecutive bid wins that earn a bonus"
    )
    tie_resets_streak: bool = Field(
        default=True, description="House rule: a tied bid forfeits streak credit"
    )
    last_card_challenge_penalty: bool = Field(
        default=True,
        description="A challenger cannot play a +2/+4 that is their only card; "
        "they draw 1 instead",
    )
    min_players: int = Field(default=2, ge=2)
    max_players: int = Field(default=10, ge=2)

    @model_validator(mode="after")
    def _check_player_bounds(self) -> RulesConfig:
        if self.min_players > self.max_players:
            raise ValueError("min_players cannot exceed max_players")
        return self


class ArbiterConfig(BaseModel):
    """Main configuration for one arbitrated game."""

    rules: RulesConfig = Field(default_factory=RulesConfig)
    player_names: List[str] = Field(
        default_factory=lambda: ["A", "B"], description="Turn/display order"
    )
    log_level: LogLevel = Field(default="WARNING")

    @field_validator("player_names")
    @classmethod
    def _unique_names(cls, names: List[str]) -> List[str]:
        cleaned = [n.strip() for n in names]
        if any(not n for n in cleaned):
            raise ValueError("Player names cannot be blank")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("Player names must be unique")
        return cleaned

    @model_validator(mode="after")
    def _check_roster_size(self) -> ArbiterConfig:
        count = len(self.player_names)
        if not self.rules.min_players <= count <= self.rules.max_players:
            raise ValueError(
                f"Need {self.rules.min_players}-{self.rules.max_players} players, got {count}"
            )
        return self

    @classmethod
    def from_env(cls, **overrides) -> ArbiterConfig:
        """
        Build a config from SPLIT_UNO_* environment variables.

        Explicit keyword overrides win over the environment.
        """
        rules: dict = {}
        env_ints = {
            "SPLIT_UNO_STARTING_CARDS": "starting_number_cards",
            "SPLIT_UNO_NUMBER_DECK": "number_deck_size",
            "SPLIT_UNO_ACTION_DECK": "action_deck_size",
            "SPLIT_UNO_STREAK_THRESHOLD": "streak_threshold",
        }
        for env_name, key in env_ints.items():
            value = os.getenv(env_name)
            if value is not None:
                rules[key] = int(value)

        tie_policy = os.getenv("SPLIT_UNO_TIE_RESETS_STREAK")
        if tie_policy is not None:
            rules["tie_resets_streak"] = tie_policy.lower() in {"1", "true", "yes"}

        data: dict = {"rules": RulesConfig(**{**rules, **overrides.pop("rules", {})})}

        players = os.getenv("SPLIT_UNO_PLAYERS")
        if players:
            data["player_names"] = players.split(",")
        log_level = os.getenv("SPLIT_UNO_LOG_LEVEL")
        if log_level:
            data["log_level"] = log_level.upper()

        data.update(overrides)
        return cls(**data)
