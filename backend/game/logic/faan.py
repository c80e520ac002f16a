"""
Faan-to-points conversion.

The table is a scoring convention, not an arithmetic law: every value is
listed literally even where the discard column happens to be double the
self-drawn column.
"""

from game.logic.enums import WinType
from game.logic.exceptions import InvalidFaanError, InvalidWinTypeError

# faan: (self-drawn points paid by each loser, discard points paid by the discarder)
FAAN_TABLE: dict[int, tuple[int, int]] = {
    1: (2, 4),
    2: (4, 8),
    3: (8, 16),
    4: (16, 32),
    5: (32, 64),
    6: (48, 96),
    7: (64, 128),
    8: (96, 192),
    9: (128, 256),
    10: (192, 384),
    11: (256, 512),
    12: (384, 768),
    13: (512, 1024),
}

MAX_FAAN = max(FAAN_TABLE)


def points_for(faan: int, win_type: WinType | str) -> int:
    """
    Convert a faan count into the points value for a win type.

    Zero faan is a valid, pointless win. Counts outside ``[0, MAX_FAAN]``
    raise InvalidFaanError instead of being clamped.
    """
    try:
        win_type = WinType(win_type)
    except ValueError:
        raise InvalidWinTypeError(f"unknown win type: {win_type!r}") from None
    if win_type == WinType.TIE:
        raise InvalidWinTypeError("a tie has no points value")

    if faan < 0 or faan > MAX_FAAN:
        raise InvalidFaanError(faan, MAX_FAAN)
    if faan == 0:
        return 0

    self_drawn, discard = FAAN_TABLE[faan]
    return self_drawn if win_type == WinType.SELF_DRAWN else discard
