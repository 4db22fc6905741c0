"""
Session Module - Runs one arbitrated game at a terminal.

A session is one play-through:
- Created when the arbiter starts a game
- Holds the Arbiter and its GameState in memory only
- Ends when a player wins or the arbiter ends the game

Nothing is persisted between runs.
"""

from .console import ConsoleProvider
from .game_loop import GameLoop, MenuChoice, command_for

__all__ = [
    "ConsoleProvider",
    "GameLoop",
    "MenuChoice",
    "command_for",
]
