"""
Unit tests for the GameSystem base class.

Uses a minimal subclass to check the behavior every game system inherits:
prefix filtering, the secret-roll flag, the shared B roll, and draw
recording.
"""

from unittest.mock import MagicMock

import pytest

from njdice.dice.randomizer import Randomizer, TooManyRandsError
from njdice.game_system import GAME_SYSTEMS, NinjaSlayer, get_game_system
from njdice.game_system.base import CommandResult, GameSystem


class EchoSystem(GameSystem):
    """Game system with one command, XX, that rolls a single d6."""

    ID = "Echo"
    NAME = "Echo"
    PREFIXES = ("XX",)

    def eval_game_system_specific_command(self, command):
        if command != "XX":
            return None
        return f"XX ＞ {self.randomizer.roll_once(6)}"


def _randomizer(*values):
    rng = MagicMock()
    rng.randint.side_effect = list(values)
    return Randomizer(rng=rng)


class TestGameSystemEval:
    def test_specific_command(self):
        result = EchoSystem(_randomizer(3)).eval("XX")
        assert result == CommandResult(text="XX ＞ 3", secret=False, rands=[(3, 6)])

    def test_surrounding_whitespace_ignored(self):
        assert EchoSystem(_randomizer(3)).eval("  XX \n").text == "XX ＞ 3"

    def test_secret_flag_stripped(self):
        result = EchoSystem(_randomizer(5)).eval("SXX")
        assert result.text == "XX ＞ 5"
        assert result.secret is True

    def test_unclaimed_prefix_not_handled(self):
        assert EchoSystem(_randomizer()).eval("YY") is None

    def test_claimed_prefix_but_unknown_command_not_handled(self):
        assert EchoSystem(_randomizer()).eval("XX1") is None

    def test_common_b_roll_without_default_comparison(self):
        """Systems without a default comparison roll B rolls without counting."""
        result = EchoSystem(_randomizer(3, 4)).eval("2B6")
        assert result.text == "(2B6) ＞ 3,4"

    def test_common_b_roll_uses_system_default(self):
        result = NinjaSlayer(_randomizer(3, 4)).eval("2B6")
        assert result.text == "(2B6>=4) ＞ 3,4 ＞ Successes: 1"

    def test_secret_b_roll(self):
        result = EchoSystem(_randomizer(6)).eval("S1B6>=4")
        assert result.secret is True
        assert result.text == "(1B6>=4) ＞ 6 ＞ Successes: 1"

    def test_rands_reset_between_commands(self):
        system = EchoSystem(_randomizer(1, 2))
        system.eval("XX")
        assert system.eval("XX").rands == [(2, 6)]

    def test_too_many_dice_propagates(self):
        system = NinjaSlayer(Randomizer(seed=1, max_rands=5))
        with pytest.raises(TooManyRandsError):
            system.eval("EV10")

    def test_default_randomizer_created(self):
        assert isinstance(EchoSystem().randomizer, Randomizer)

    def test_default_change_text_is_identity(self):
        assert EchoSystem().change_text("XX") == "XX"


class TestGameSystemRegistry:
    def test_ninja_slayer_registered(self):
        assert GAME_SYSTEMS["NinjaSlayer"] is NinjaSlayer
        assert get_game_system("NinjaSlayer") is NinjaSlayer

    def test_unknown_system_lists_known_ids(self):
        with pytest.raises(ValueError, match="NinjaSlayer"):
            get_game_system("Cthulhu")


class TestCommandPattern:
    def test_surrounding_whitespace_is_trimmed_before_matching(self):
        """eval trims the command; the pattern itself only sees the trimmed text."""
        assert EchoSystem(_randomizer(2)).eval("\tXX\n").text == "XX ＞ 2"
        assert EchoSystem.command_pattern().match(" XX") is None

    def test_full_width_b_roll_not_claimed(self):
        assert EchoSystem.command_pattern().match("４B6") is None
        assert EchoSystem.command_pattern().match("4b6")
