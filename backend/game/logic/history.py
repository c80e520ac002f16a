"""
Append-only round ledger with display text and a score audit.
"""

from decimal import Decimal

from game.logic.enums import WinType
from game.logic.state import NUM_PLAYERS, STARTING_SCORE, GameState, RoundRecord, ScoreChange


def append_record(state: GameState, record: RoundRecord) -> GameState:
    """Return new game state with ``record`` added to the end of the history."""
    return state.model_copy(update={"history": (*state.history, record)})


def latest_first(state: GameState) -> list[RoundRecord]:
    """Return the ledger newest record first, the order it is displayed in."""
    return list(reversed(state.history))


def format_score(value: Decimal | int) -> str:
    """Render a score without a trailing ``.0`` for whole numbers."""
    value = Decimal(value)
    if value == value.to_integral_value():
        return str(int(value))
    return str(value.normalize())


def format_change(change: ScoreChange) -> str:
    """Render a change with an explicit sign for gains (``+24``, ``-8``, ``-1.5``)."""
    sign = "+" if change.change > 0 else ""
    return f"{sign}{format_score(change.change)}"


def describe_record(record: RoundRecord) -> str:
    """
    Return the one-line summary shown for a ledger entry.

    Examples:
        Tie (No Winner)
        Bob won (Self-Drawn) - 3 faan (8 pts each)
        Alice won from Bob - 4 faan (32 pts)

    """
    if record.win_type == WinType.TIE:
        return "Tie (No Winner)"
    faans = "?" if record.faans is None else str(record.faans)
    if record.win_type == WinType.SELF_DRAWN:
        return f"{record.winner} won (Self-Drawn) - {faans} faan ({record.points} pts each)"
    return f"{record.winner} won from {record.discarder} - {faans} faan ({record.points} pts)"


def audit_scores(state: GameState) -> list[Decimal]:
    """
    Recompute every seat's score from the ledger alone.

    For any state built by the resolvers the result equals ``state.scores``;
    a mismatch means the document was edited outside the resolvers.
    """
    totals = [Decimal(STARTING_SCORE)] * NUM_PLAYERS
    for record in state.history:
        for c in record.changes:
            totals[c.seat] += c.change
    return totals
