"""Typed domain exceptions for scorekeeping rule violations.

All domain-level rule violations use subclasses of GameRuleError
rather than raw ValueError. This enables consistent catch-and-convert
at the presentation boundary (the CLI) while leaving unexpected
exceptions to propagate.

Every check runs before a new state is built, so a raised error never
leaves a half-applied round behind.
"""


class GameRuleError(Exception):
    """Base exception for caller input that violates the scoring rules."""


class InvalidFaanError(GameRuleError):
    """Faan count is outside the points table.

    Attributes:
        faan: The rejected faan count.
        max_faan: Largest faan count the table defines.

    """

    def __init__(self, faan: int, max_faan: int) -> None:
        self.faan = faan
        self.max_faan = max_faan
        super().__init__(f"faan must be between 0 and {max_faan}, got {faan}")


class InvalidWinnerError(GameRuleError):
    """Winner seat is not one of the four seats."""

    def __init__(self, seat: int) -> None:
        self.seat = seat
        super().__init__(f"winner seat must be between 0 and 3, got {seat}")


class InvalidDiscarderError(GameRuleError):
    """Discarder is missing, out of range, or the same seat as the winner."""


class InvalidWinTypeError(GameRuleError):
    """Win type is not valid for the requested operation (e.g. a tie passed to a win)."""


class InvalidPlayerCountError(GameRuleError):
    """A game needs exactly four player names."""


class CorruptStateError(Exception):
    """A persisted game document could not be turned back into a game state."""
