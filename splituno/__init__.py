"""
Split UNO - Scorekeeping Arbiter

A deterministic rules engine for refereeing Split UNO at a physical table.
Players never hand their cards to the engine; the arbiter reports what
happened and the engine keeps the counts:
- Number and action card tallies per player
- Number and action deck counts
- Blocks, streaks, challenges and the win condition
"""

__version__ = "0.1.0"
