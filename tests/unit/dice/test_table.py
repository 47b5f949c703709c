"""
Unit tests for DiceTable.
"""

from unittest.mock import MagicMock

import pytest

from njdice.dice.randomizer import Randomizer
from njdice.dice.table import DiceTable


def _randomizer(*values):
    rng = MagicMock()
    rng.randint.side_effect = list(values)
    return Randomizer(rng=rng)


class TestDiceTable:
    def test_roll_returns_entry_for_face(self):
        """The rolled face should select the entry at that 1-based position."""
        table = DiceTable("Weather", "1D3", ["Sun", "Rain", "Snow"])
        result = table.roll(_randomizer(2))

        assert result.value == 2
        assert result.body == "Rain"
        assert str(result) == "Weather(2) ＞ Rain"

    def test_roll_uses_table_die(self):
        """The table should roll a die with one side per entry."""
        rng = MagicMock()
        rng.randint.return_value = 1
        DiceTable("T", "1D4", ["a", "b", "c", "d"]).roll(Randomizer(rng=rng))
        rng.randint.assert_called_once_with(1, 4)

    def test_item_count_mismatch_rejected(self):
        """Should raise ValueError when entries do not cover every face."""
        with pytest.raises(ValueError, match="has 2 entries"):
            DiceTable("T", "1D3", ["a", "b"])

    @pytest.mark.parametrize("notation", ["2D6", "D6", "1B6", ""])
    def test_unsupported_notation_rejected(self, notation):
        """Only single-die 1Dn tables are supported."""
        with pytest.raises(ValueError, match="Unsupported table notation"):
            DiceTable("T", notation, ["a"] * 6)
