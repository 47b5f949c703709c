"""
Fixed roll tables.

A table maps each face of a single die to one entry of text.
"""

import re

from pydantic import BaseModel, Field

from njdice.dice.barabara import RESULT_SEPARATOR
from njdice.dice.randomizer import Randomizer

TABLE_NOTATION_RE = re.compile(r"1D([0-9]+)", re.IGNORECASE | re.ASCII)


class TableResult(BaseModel):
    """One rolled table entry."""

    name: str = Field(description="Table display name")
    value: int = Field(ge=1, description="Face rolled")
    body: str = Field(description="Entry text for the rolled face")

    def __str__(self) -> str:
        return f"{self.name}({self.value}){RESULT_SEPARATOR}{self.body}"


class DiceTable:
    """
    Table rolled with one die, one entry per face.

    Example:
        >>> table = DiceTable("Weather", "1D3", ["Sun", "Rain", "Snow"])
        >>> str(table.roll(randomizer))
        'Weather(2) ＞ Rain'
    """

    def __init__(self, name: str, notation: str, items: list[str]):
        """Initialize the table.

        Args:
            name: Display name shown in results
            notation: Die rolled, as ``"1D<n>"``
            items: Entries in face order; must hold exactly ``n`` items

        Raises:
            ValueError: If the notation is invalid or does not match the item count
        """
        m = TABLE_NOTATION_RE.fullmatch(notation)
        if not m:
            raise ValueError(f"Unsupported table notation: {notation!r}")

        sides = int(m.group(1))
        if sides != len(items):
            raise ValueError(
                f"Table {name!r} rolls 1D{sides} but has {len(items)} entries"
            )

        self.name = name
        self.sides = sides
        self.items = tuple(items)

    def roll(self, randomizer: Randomizer) -> TableResult:
        """Roll the table's die and return the matching entry."""
        index = randomizer.roll_index(self.sides)
        return TableResult(name=self.name, value=index + 1, body=self.items[index])
