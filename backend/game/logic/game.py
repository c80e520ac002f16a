"""
Game initialization and round resolution.

Every function here is pure: it takes a frozen GameState and returns a new
one. Input checks run before any new state is built.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

import structlog

from game.logic.enums import ScoringVariation, WinType
from game.logic.exceptions import (
    InvalidDiscarderError,
    InvalidPlayerCountError,
    InvalidWinnerError,
    InvalidWinTypeError,
)
from game.logic.faan import points_for
from game.logic.history import append_record
from game.logic.state import (
    NUM_PLAYERS,
    NUM_WINDS,
    STARTING_SCORE,
    GameState,
    Player,
    RoundRecord,
    ScoreChange,
)
from game.logic.state_utils import apply_score_changes

logger = structlog.get_logger()


def create_initial_state(
    player_names: Sequence[str],
    scoring_variation: ScoringVariation | str = ScoringVariation.FULL,
) -> GameState:
    """
    Create a fresh game with every player on the starting score.

    Seat order is the order of ``player_names``; seat 0 deals first.
    Duplicate names are allowed since seats, not names, identify players.
    """
    if len(player_names) != NUM_PLAYERS:
        raise InvalidPlayerCountError(f"expected {NUM_PLAYERS} player names, got {len(player_names)}")

    return GameState(
        players=tuple(Player(name=name, score=Decimal(STARTING_SCORE)) for name in player_names),
        dealer_index=0,
        starting_dealer_index=0,
        round_number=1,
        prevailing_wind=0,  # East
        dealer_rotations=0,
        scoring_variation=ScoringVariation(scoring_variation),
        history=(),
    )


def rotate_dealer(state: GameState) -> GameState:
    """
    Pass the deal to the next seat.

    The prevailing wind advances once every seat has dealt, at which point
    the rotation counter starts over.
    """
    new_dealer = (state.dealer_index + 1) % NUM_PLAYERS
    new_rotations = state.dealer_rotations + 1
    new_wind = state.prevailing_wind

    if new_rotations == NUM_PLAYERS:
        new_wind = (state.prevailing_wind + 1) % NUM_WINDS
        new_rotations = 0
        logger.info("prevailing wind advanced", prevailing_wind=new_wind, round_number=state.round_number)

    return state.model_copy(
        update={
            "dealer_index": new_dealer,
            "dealer_rotations": new_rotations,
            "prevailing_wind": new_wind,
        },
    )


def _check_seats(
    winner_index: int,
    win_type: WinType,
    discarder_index: int | None,
) -> None:
    if not 0 <= winner_index < NUM_PLAYERS:
        raise InvalidWinnerError(winner_index)

    if win_type == WinType.SELF_DRAWN:
        if discarder_index is not None:
            raise InvalidDiscarderError("a self-drawn win has no discarder")
        return

    if discarder_index is None:
        raise InvalidDiscarderError("a discard win needs a discarder")
    if not 0 <= discarder_index < NUM_PLAYERS:
        raise InvalidDiscarderError(f"discarder seat must be between 0 and 3, got {discarder_index}")
    if discarder_index == winner_index:
        raise InvalidDiscarderError("the winner cannot be the discarder")


def _score_changes(
    state: GameState,
    winner_index: int,
    win_type: WinType,
    discarder_index: int | None,
    points: int,
) -> list[ScoreChange]:
    """Compute per-seat deltas for a win under the game's payout variant."""
    p = Decimal(points)
    names = state.names

    if win_type == WinType.SELF_DRAWN:
        # every other seat pays the winner
        deltas = [p * 3 if seat == winner_index else -p for seat in range(NUM_PLAYERS)]
    elif state.scoring_variation == ScoringVariation.FULL:
        # full gun: only the discarder pays, only two seats are touched
        return [
            ScoreChange(seat=winner_index, name=names[winner_index], change=p),
            ScoreChange(seat=discarder_index, name=names[discarder_index], change=-p),
        ]
    else:
        # half gun: discarder pays half, the other two a quarter each
        deltas = []
        for seat in range(NUM_PLAYERS):
            if seat == winner_index:
                deltas.append(p)
            elif seat == discarder_index:
                deltas.append(-p / 2)
            else:
                deltas.append(-p / 4)

    return [ScoreChange(seat=seat, name=names[seat], change=delta) for seat, delta in enumerate(deltas)]


def resolve_win(
    state: GameState,
    winner_index: int,
    win_type: WinType | str,
    discarder_index: int | None,
    points: int,
    faan: int | None,
) -> GameState:
    """
    Apply a win to the game and return the new state.

    ``points`` is the already converted points value (see ``points_for``);
    ``faan`` is only kept for the history record. The dealer keeps the deal
    when they win; any other winner passes it on.
    """
    try:
        win_type = WinType(win_type)
    except ValueError:
        raise InvalidWinTypeError(f"unknown win type: {win_type!r}") from None
    if win_type == WinType.TIE:
        raise InvalidWinTypeError("use resolve_tie for a round without a winner")
    _check_seats(winner_index, win_type, discarder_index)

    changes = _score_changes(state, winner_index, win_type, discarder_index, points)
    new_state = apply_score_changes(state, changes)

    record = RoundRecord(
        game=state.round_number,
        winner=state.players[winner_index].name,
        win_type=win_type,
        discarder=state.players[discarder_index].name if discarder_index is not None else None,
        faans=faan,
        points=points,
        changes=tuple(changes),
    )
    new_state = append_record(new_state, record)

    # dealer stays if they win
    if winner_index != state.dealer_index:
        new_state = rotate_dealer(new_state)

    logger.debug(
        "round resolved",
        round_number=state.round_number,
        winner_seat=winner_index,
        win_type=win_type,
        points=points,
    )
    return new_state.model_copy(update={"round_number": state.round_number + 1})


def resolve_win_by_faan(
    state: GameState,
    winner_index: int,
    win_type: WinType | str,
    discarder_index: int | None,
    faan: int,
) -> GameState:
    """Convert ``faan`` with the points table, then resolve the win."""
    points = points_for(faan, win_type)
    return resolve_win(state, winner_index, win_type, discarder_index, points, faan)


def resolve_tie(state: GameState) -> GameState:
    """
    Record a round without a winner.

    Scores do not change. A tie always passes the deal on, the same as a
    non-dealer win.
    """
    record = RoundRecord(
        game=state.round_number,
        winner=None,
        win_type=WinType.TIE,
        discarder=None,
        faans=None,
        points=0,
        changes=(),
    )
    new_state = rotate_dealer(append_record(state, record))

    logger.debug("round resolved", round_number=state.round_number, win_type=WinType.TIE)
    return new_state.model_copy(update={"round_number": state.round_number + 1})


def total_score(state: GameState) -> Decimal:
    """Return the sum of all scores. Zero for every reachable state."""
    return sum((p.score for p in state.players), Decimal(0))
