"""
Centralized enum definitions for board_ai semantic types.

This module is the single source of truth for representing the sides of each
supported game. Other modules should import these Enums rather than
duplicating constants.

The enum values double as the cell codes written into the packed board
storage, so they are chosen to fit the cell width of each game.
"""

from enum import Enum


class StrictEnum(Enum):
    """Base class for enums that prevent cross-type comparisons."""
    def __eq__(self, other):
        if other is None:
            return False
        if not isinstance(other, self.__class__):
            raise TypeError(f"Cannot compare {self.__class__.__name__} with {type(other).__name__}")
        return super().__eq__(other)

    def __hash__(self):
        """Make enums hashable so they can be used as dictionary keys."""
        return hash((self.__class__.__name__, self.value))


class Stone(StrictEnum):
    """Gomoku sides. Values are 2-bit cell codes (0b00 is an empty cell)."""
    BLACK = 0b01
    WHITE = 0b11

    def opponent(self) -> "Stone":
        return Stone(self.value ^ 0b10)


class Disc(StrictEnum):
    """Othello sides. Values are 3-bit cell codes (low bit set = occupied)."""
    DARK = 0b001
    LIGHT = 0b111

    def opponent(self) -> "Disc":
        return Disc(self.value ^ 0b110)


# ============================================================================
# Display Helpers
# ============================================================================

def player_display_name(player) -> str:
    """Human-readable name for a side, or "None" for no player."""
    if player is None:
        return "None"
    return player.name.capitalize()


def get_opponent(player):
    """Return the other side of a two-player game."""
    if player is None:
        raise ValueError("Finished positions have no player to move")
    return player.opponent()
