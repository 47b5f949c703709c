"""
Dice Layer.

Provides the randomizer, the generic success-counting roller, and
fixed roll tables used by the game systems.
"""

from njdice.dice.barabara import BarabaraDice, RollResult
from njdice.dice.randomizer import Randomizer, TooManyRandsError
from njdice.dice.table import DiceTable, TableResult

__all__ = [
    "BarabaraDice",
    "DiceTable",
    "Randomizer",
    "RollResult",
    "TableResult",
    "TooManyRandsError",
]
