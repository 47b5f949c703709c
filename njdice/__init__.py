"""
njdice - dice command interpreter for the Ninja Slayer tabletop RPG.

This package parses short chat-style roll commands (NJ, EV, AT, EL, SB),
rolls them against an injectable randomizer, and formats the results with
the game's narrative annotations.
"""

__version__ = "0.1.0"
