from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import pytest

from game.logic.enums import ScoringVariation
from game.logic.game import create_initial_state
from game.logic.state import GameState, Player, RoundRecord
from game.session.repository import GameStateRepository
from shared.storage import MemoryStore

if TYPE_CHECKING:
    from collections.abc import Sequence

NAMES = ("Alice", "Bob", "Carol", "Dave")


# ============================================================================
# Test State Builder Helpers
# ============================================================================


def create_player(name: str = "Player", score: int | str | Decimal = 0) -> Player:
    """Create a Player with sensible defaults for testing."""
    return Player(name=name, score=Decimal(score))


def create_game_state(
    *,
    names: Sequence[str] = NAMES,
    scores: Sequence[int | str | Decimal] | None = None,
    dealer_index: int = 0,
    starting_dealer_index: int = 0,
    prevailing_wind: int = 0,
    dealer_rotations: int = 0,
    scoring_variation: ScoringVariation = ScoringVariation.FULL,
    history: Sequence[RoundRecord] = (),
) -> GameState:
    """Create a GameState at an arbitrary point of a session.

    ``round_number`` follows from the history length so the state stays valid.
    """
    scores = scores if scores is not None else [0] * len(names)
    return GameState(
        players=tuple(create_player(name, score) for name, score in zip(names, scores, strict=True)),
        dealer_index=dealer_index,
        starting_dealer_index=starting_dealer_index,
        round_number=len(history) + 1,
        prevailing_wind=prevailing_wind,
        dealer_rotations=dealer_rotations,
        scoring_variation=scoring_variation,
        history=tuple(history),
    )


@pytest.fixture
def initial_state() -> GameState:
    return create_initial_state(list(NAMES))


@pytest.fixture
def half_gun_state() -> GameState:
    return create_initial_state(list(NAMES), ScoringVariation.HALF)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def repository(memory_store: MemoryStore) -> GameStateRepository:
    return GameStateRepository(memory_store)
