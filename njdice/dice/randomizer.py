"""
Randomizer used by every roll.

Wraps a ``random.Random`` instance so tests can inject a deterministic
source, and records each draw so callers can show or audit what was rolled.
"""

import random

from njdice.config.logging import get_logger

logger = get_logger(__name__)

# Upper bound on draws within one evaluation
DEFAULT_MAX_RANDS = 10000


class TooManyRandsError(RuntimeError):
    """Raised when a single evaluation draws more dice than allowed."""


class Randomizer:
    """
    Source of die faces for one game system instance.

    Every draw is appended to ``rand_results`` as a ``(value, sides)`` pair.
    Call ``reset()`` before each evaluation so the record and the draw limit
    apply per command.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        seed: int | None = None,
        max_rands: int = DEFAULT_MAX_RANDS,
    ):
        """Initialize the randomizer.

        Args:
            rng: Random source to draw from. If None, a new ``random.Random``
                 is created from ``seed``.
            seed: Seed for the generated random source (ignored when ``rng``
                  is given).
            max_rands: Maximum number of draws per evaluation.
        """
        if max_rands <= 0:
            raise ValueError(f"max_rands must be positive, got {max_rands}")

        self._rng = rng if rng is not None else random.Random(seed)
        self._max_rands = max_rands
        self.rand_results: list[tuple[int, int]] = []

    def reset(self) -> None:
        """Forget draws recorded by the previous evaluation."""
        self.rand_results = []

    def roll_once(self, sides: int) -> int:
        """Roll one die with the given number of sides."""
        if sides < 1:
            raise ValueError(f"Die must have at least one side, got {sides}")
        if len(self.rand_results) >= self._max_rands:
            logger.warning(f"Draw limit of {self._max_rands} reached")
            raise TooManyRandsError(
                f"Too many dice rolled in one command (limit {self._max_rands})"
            )

        value = self._rng.randint(1, sides)
        self.rand_results.append((value, sides))
        return value

    def roll_barabara(self, times: int, sides: int) -> list[int]:
        """Roll ``times`` dice and return every face in roll order."""
        return [self.roll_once(sides) for _ in range(times)]

    def roll_index(self, sides: int) -> int:
        """Roll one die and return a 0-based index into a list of ``sides`` items."""
        return self.roll_once(sides) - 1
