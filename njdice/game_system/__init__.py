"""
Game System Layer.

Each game system turns chat-style dice commands into formatted results.
"""

from njdice.game_system.base import CommandResult, GameSystem
from njdice.game_system.ninja_slayer import NinjaSlayer

GAME_SYSTEMS: dict[str, type[GameSystem]] = {
    NinjaSlayer.ID: NinjaSlayer,
}


def get_game_system(system_id: str) -> type[GameSystem]:
    """
    Look up a game system class by ID.

    Raises:
        ValueError: If no game system has that ID
    """
    try:
        return GAME_SYSTEMS[system_id]
    except KeyError:
        known = ", ".join(sorted(GAME_SYSTEMS))
        raise ValueError(f"Unknown game system {system_id!r}. Known: {known}") from None


__all__ = ["CommandResult", "GAME_SYSTEMS", "GameSystem", "NinjaSlayer", "get_game_system"]
