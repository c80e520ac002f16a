"""
Game state models for a scorekeeping session.

All models are frozen. Resolvers build new snapshots with ``model_copy``
and never mutate their input. Field names serialize to the camelCase keys
of the persisted session document (``dealerIndex``, ``winType``, ...).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any, Self

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from game.logic.enums import WINDS, ScoringVariation, WindName, WinType

NUM_PLAYERS = 4
NUM_WINDS = 4
STARTING_SCORE = 0


def _score_to_wire(v: Decimal) -> int | str:
    """Integral scores go out as JSON integers, fractional ones as exact decimal strings."""
    if v == v.to_integral_value():
        return int(v)
    return str(v.normalize())


# half-gun payouts split points into halves and quarters, so scores are kept exact.
# Fractional scores are saved as strings ("2.25"). The browser scorekeeper would
# treat those as text, so saved documents only go one way; its float documents
# still load here.
Score = Annotated[Decimal, PlainSerializer(_score_to_wire, when_used="json")]

SeatIndex = Annotated[int, Field(ge=0, lt=NUM_PLAYERS)]
WindIndex = Annotated[int, Field(ge=0, lt=NUM_WINDS)]

_MODEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    validate_by_name=True,
    validate_by_alias=True,
)


class Player(BaseModel):
    """
    A named seat and its running score.
    """

    model_config = _MODEL_CONFIG

    name: str
    score: Score = Decimal(STARTING_SCORE)


class ScoreChange(BaseModel):
    """One seat's score delta for a resolved round."""

    model_config = _MODEL_CONFIG

    seat: SeatIndex
    name: str
    change: Score


class RoundRecord(BaseModel):
    """
    Ledger entry for one resolved round. Immutable once appended.

    ``faans`` is None for ties and is left out of the serialized document.
    Older documents named the round counter ``round`` instead of ``game``.
    """

    model_config = _MODEL_CONFIG

    game: int = Field(ge=1, validation_alias=AliasChoices("game", "round"))
    winner: str | None = None
    win_type: WinType
    discarder: str | None = None
    faans: int | None = None
    points: int = 0
    changes: tuple[ScoreChange, ...] = ()

    @model_serializer(mode="wrap")
    def _omit_tie_faans(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.faans is None:
            data.pop("faans", None)
        return data


class GameState(BaseModel):
    """
    Represents the full scorekeeping state across rounds.

    Invariants checked on construction: exactly four players, all indices in
    range, and one history record per resolved round.
    """

    model_config = _MODEL_CONFIG

    players: tuple[Player, ...] = Field(min_length=NUM_PLAYERS, max_length=NUM_PLAYERS)

    # seating
    dealer_index: SeatIndex = 0
    starting_dealer_index: SeatIndex = 0  # display only: who opened the session

    # progression
    round_number: int = Field(default=1, ge=1)
    prevailing_wind: WindIndex = 0  # 0=East, 1=South, 2=West, 3=North
    dealer_rotations: int = Field(default=0, ge=0, lt=NUM_WINDS)  # rotations since last wind change

    scoring_variation: ScoringVariation = ScoringVariation.FULL
    history: tuple[RoundRecord, ...] = ()

    @model_validator(mode="after")
    def _check_history_length(self) -> Self:
        if len(self.history) != self.round_number - 1:
            raise ValueError(
                f"history has {len(self.history)} records but round_number is {self.round_number}",
            )
        return self

    @property
    def scores(self) -> list[Decimal]:
        return [p.score for p in self.players]

    @property
    def names(self) -> list[str]:
        return [p.name for p in self.players]

    def is_dealer(self, seat: int) -> bool:
        return seat == self.dealer_index

    def seat_winds(self) -> list[int]:
        """Return each seat's wind index for the current dealer."""
        return [seat_to_wind(seat, self.dealer_index) for seat in range(NUM_PLAYERS)]


def seat_to_wind(seat: int, dealer_seat: int) -> int:
    """
    Calculate a seat's wind based on its position relative to the dealer.

    Dealer is always East (0); the remaining winds follow in seat order.
    """
    return (seat - dealer_seat + NUM_WINDS) % NUM_WINDS


def wind_name(wind: int) -> WindName:
    """
    Convert wind index to name.
    """
    return WINDS[wind] if 0 <= wind < NUM_WINDS else WindName.UNKNOWN
