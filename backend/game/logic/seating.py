"""
Seat assignment helpers and the cosmetic dice roll.

Nothing here touches score state. Callers may pass a seeded random.Random.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass

from game.logic.exceptions import InvalidPlayerCountError
from game.logic.state import NUM_PLAYERS

NUM_DICE = 3
DIE_FACES = 6


@dataclass(frozen=True)
class DiceRoll:
    """Three six-sided dice and their total."""

    dice: tuple[int, ...]

    @property
    def total(self) -> int:
        return sum(self.dice)


def default_player_names(names: Sequence[str]) -> list[str]:
    """
    Strip surrounding whitespace and fill blank names.

    A blank name at seat ``i`` becomes ``"Player {i + 1}"``.
    """
    if len(names) != NUM_PLAYERS:
        raise InvalidPlayerCountError(f"expected {NUM_PLAYERS} player names, got {len(names)}")
    return [name.strip() or f"Player {seat + 1}" for seat, name in enumerate(names)]


def shuffle_seating(names: Sequence[str], rng: random.Random | None = None) -> list[str]:
    """
    Return ``names`` in a random seat order (Fisher-Yates).

    The input sequence is left untouched.
    """
    rng = rng or random.SystemRandom()
    result = list(names)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def roll_dice(rng: random.Random | None = None) -> DiceRoll:
    """Roll three standard six-sided dice."""
    rng = rng or random.SystemRandom()
    return DiceRoll(dice=tuple(rng.randint(1, DIE_FACES) for _ in range(NUM_DICE)))
