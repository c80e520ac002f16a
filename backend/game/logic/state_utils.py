"""
Immutable state update utilities using Pydantic model_copy.

Provides helper functions for common immutable state updates on frozen
Pydantic models. These functions never mutate the input state - they
always return new state objects with the requested changes applied.
"""

from collections.abc import Iterable

from game.logic.state import GameState, ScoreChange


def update_player(
    state: GameState,
    seat: int,
    **updates: object,
) -> GameState:
    """
    Return new game state with updated player at seat.

    Args:
        state: Current game state
        seat: Player seat to update (0-3)
        **updates: Fields to update on the player

    Returns:
        New GameState with updated player

    """
    players = list(state.players)
    players[seat] = state.players[seat].model_copy(update=updates)
    return state.model_copy(update={"players": tuple(players)})


def apply_score_changes(
    state: GameState,
    changes: Iterable[ScoreChange],
) -> GameState:
    """
    Return new game state with each change added to its seat's score.

    Args:
        state: Current game state
        changes: Per-seat score deltas

    Returns:
        New GameState with updated scores

    """
    for c in changes:
        state = update_player(state, c.seat, score=state.players[c.seat].score + c.change)
    return state
