"""
String enum definitions for scorekeeping concepts.
"""

from enum import Enum


class WinType(str, Enum):
    """How a round ended."""

    SELF_DRAWN = "self-drawn"
    DISCARD = "discard"
    TIE = "tie"


class ScoringVariation(str, Enum):
    """Discard-payout policy chosen when the game is created."""

    FULL = "full"  # full gun: only the discarder pays
    HALF = "half"  # half gun: discarder pays half, the other two a quarter each


class WindName(str, Enum):
    """Wind direction names."""

    EAST = "East"
    SOUTH = "South"
    WEST = "West"
    NORTH = "North"
    UNKNOWN = "Unknown"


# display characters for winds, indexed like WINDS
WIND_CHARS: tuple[str, ...] = ("東", "南", "西", "北")

WINDS: tuple[WindName, ...] = (WindName.EAST, WindName.SOUTH, WindName.WEST, WindName.NORTH)
