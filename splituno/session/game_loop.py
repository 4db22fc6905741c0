"""
Game Loop - The arbiter's menu-driven loop.

The loop:
1. Arbiter picks a command from the menu
2. Engine collects any testimony it needs through the Input Source
3. Engine resolves the command and runs progression checks
4. Display Sink shows the changes and the new state
5. Repeat until the game is over
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..engine_core.action import ActionResult, Command
from ..engine_core.snapshot import GameSnapshot

if TYPE_CHECKING:
    from ..engine_core.arbiter import Arbiter
    from ..engine_core.interfaces import ChoiceProvider


class MenuChoice(Enum):
    """Numbered menu entries."""
    PLAY_NUMBER_ROUND = 1
    PLAY_ACTION_CARD = 2
    DISPLAY_STATE = 3
    MANUAL_ADJUSTMENT = 4
    END_GAME = 5


MENU_LABELS = {
    MenuChoice.PLAY_NUMBER_ROUND: "Play Number Card Round",
    MenuChoice.PLAY_ACTION_CARD: "Play Action Card",
    MenuChoice.DISPLAY_STATE: "Display Game State",
    MenuChoice.MANUAL_ADJUSTMENT: "Manual Adjustment",
    MenuChoice.END_GAME: "End Game",
}


def menu_prompt() -> str:
    lines = ["Select action:"]
    lines += [f"  {choice.value}. {MENU_LABELS[choice]}" for choice in MenuChoice]
    lines.append("Choice")
    return "\n".join(lines)


def command_for(choice: MenuChoice) -> Command:
    """Commands built from the menu leave every detail to the Input Source."""
    return {
        MenuChoice.PLAY_NUMBER_ROUND: Command.number_round,
        MenuChoice.PLAY_ACTION_CARD: Command.action_card,
        MenuChoice.DISPLAY_STATE: Command.display,
        MenuChoice.MANUAL_ADJUSTMENT: Command.adjustment,
        MenuChoice.END_GAME: Command.end_game,
    }[choice]()


@dataclass
class GameLoop:
    """
    Drives one game from the first menu prompt to game over.

    Usage:
        loop = GameLoop(arbiter, console)
        final = loop.run()
    """
    arbiter: Arbiter
    choices: ChoiceProvider
    results: list[ActionResult] = field(default_factory=list)

    def step(self) -> ActionResult:
        """Ask for one menu choice and apply it."""
        first = MenuChoice.PLAY_NUMBER_ROUND.value
        last = MenuChoice.END_GAME.value
        choice = MenuChoice(self.choices.ask_int(menu_prompt(), first, last))
        result = self.arbiter.apply(command_for(choice))
        self.results.append(result)
        return result

    def run(self) -> GameSnapshot:
        """Loop until the game is over; returns the final snapshot."""
        self.arbiter.display_state()
        while not self.arbiter.state.game_over:
            self.step()
        return self.arbiter.snapshot()
