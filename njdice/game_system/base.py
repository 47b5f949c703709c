"""
Base classes for game systems.

A game system owns a randomizer and turns one chat command into one result.
Subclasses implement the game-specific commands; the base class handles the
secret-roll flag, the shared B roll, and prefix registration.
"""

import re
from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from njdice.config.logging import get_logger
from njdice.dice.barabara import BarabaraDice
from njdice.dice.randomizer import Randomizer

logger = get_logger(__name__)

# Commands understood by every game system
COMMON_COMMAND_RE = r"(?i:[0-9]+B[0-9]+)"


class CommandResult(BaseModel):
    """Result of evaluating one command."""

    text: str = Field(description="Formatted result shown to the user")
    secret: bool = Field(default=False, description="True if the roll was requested as secret")
    rands: list[tuple[int, int]] = Field(
        default_factory=list,
        description="Every (value, sides) pair drawn while evaluating the command",
    )


class GameSystem(ABC):
    """
    Abstract base class for game systems.

    Subclasses set the class attributes below and implement
    ``eval_game_system_specific_command``. Use ``eval`` to run a command.
    """

    ID: str = "DiceBot"
    NAME: str = "DiceBot"
    HELP_MESSAGE: str = ""

    # Command prefixes this system claims within a host that routes messages
    PREFIXES: tuple[str, ...] = ()

    # Comparison applied to B rolls that do not state one
    DEFAULT_CMP_OP: str | None = None
    DEFAULT_TARGET_NUMBER: int | None = None

    def __init__(self, randomizer: Randomizer | None = None):
        """Initialize the game system.

        Args:
            randomizer: Source of die faces. If None, an unseeded
                        Randomizer is created.
        """
        self.randomizer = randomizer if randomizer is not None else Randomizer()

    @classmethod
    def command_pattern(cls) -> re.Pattern:
        """
        Pattern matching the start of any command this system may handle.

        Hosts use this to decide whether a message is worth evaluating.
        """
        alternatives = [re.escape(prefix) for prefix in cls.PREFIXES]
        alternatives.append(COMMON_COMMAND_RE)
        return re.compile(rf"^S?(?:{'|'.join(alternatives)})")

    def change_text(self, command: str) -> str:
        """Rewrite a command before evaluation. The default leaves it unchanged."""
        return command

    @abstractmethod
    def eval_game_system_specific_command(self, command: str) -> str | None:
        """
        Evaluate a game-specific command.

        Args:
            command: Command with any secret flag already removed

        Returns:
            Result text, or None if the command is not a game-specific one.
        """
        pass

    def eval(self, command: str) -> CommandResult | None:
        """
        Evaluate a command.

        Args:
            command: Raw command text, e.g. ``"EV5/3"`` or ``"S4B6>=4"``

        Returns:
            CommandResult, or None if this system does not handle the command.

        Raises:
            TooManyRandsError: If the command rolls more dice than allowed or
                               states a number too large to roll
        """
        command = command.strip()
        if not self.command_pattern().match(command):
            logger.debug(f"{self.ID}: no prefix matches {command!r}")
            return None

        self.randomizer.reset()
        command = self.change_text(command)

        candidates = [(command, False)]
        if command.startswith("S"):
            candidates.append((command[1:], True))

        for candidate, secret in candidates:
            text = self.eval_game_system_specific_command(candidate)
            if text is None:
                text = self._eval_common_command(candidate)
            if text is not None:
                logger.debug(f"{self.ID}: {command!r} -> {text!r} (secret={secret})")
                return CommandResult(
                    text=text,
                    secret=secret,
                    rands=list(self.randomizer.rand_results),
                )

        logger.debug(f"{self.ID}: {command!r} not handled")
        return None

    def _eval_common_command(self, command: str) -> str | None:
        """Evaluate the commands shared by all game systems."""
        result = BarabaraDice.eval(
            command,
            self.randomizer,
            default_cmp_op=self.DEFAULT_CMP_OP,
            default_target_number=self.DEFAULT_TARGET_NUMBER,
        )
        return result.text if result is not None else None
