"""Square value type, coordinate helpers and movement geometry.

Files and ranks are zero-based:
    a1 = Square(0, 0), h1 = Square(7, 0), a8 = Square(0, 7), h8 = Square(7, 7)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pgnalyze.core.errors import MalformedSquare

if TYPE_CHECKING:
    from pgnalyze.core.enums import Color

_FILES = "abcdefgh"
_RANKS = "12345678"


class MalformedSquareError(ValueError):
    """Raised by :func:`parse_square` for text that is not a square name."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid square name: {text!r}")
        self.error = MalformedSquare(text)


@dataclass(frozen=True, slots=True, order=True)
class Square:
    """Immutable board coordinate ordered by (file, rank)."""

    file: int
    rank: int

    def __str__(self) -> str:
        return _FILES[self.file] + _RANKS[self.rank]

    @property
    def name(self) -> str:
        return str(self)


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return sq.file


def rank_of(sq: Square) -> int:
    """Rank index 0–7 (1–8)."""
    return sq.rank


def is_valid_square(file: int, rank: int) -> bool:
    """Check whether a file/rank pair lies on the board."""
    return 0 <= file < 8 and 0 <= rank < 8


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and rank (0–7)."""
    if not is_valid_square(file, rank):
        raise ValueError(f"Square out of range: file={file}, rank={rank}")
    return Square(file, rank)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. Square(4, 3) → 'e4'."""
    return str(sq)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(4, 3)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise MalformedSquareError(name)
    return Square(_FILES.index(name[0]), _RANKS.index(name[1]))


# ── Geometry ────────────────────────────────────────────────────────────────


def _delta(start: Square, target: Square) -> tuple[int, int]:
    return target.file - start.file, target.rank - start.rank


def is_rook_shape(start: Square, target: Square) -> bool:
    df, dr = _delta(start, target)
    return (df == 0) != (dr == 0)


def is_bishop_shape(start: Square, target: Square) -> bool:
    df, dr = _delta(start, target)
    return df != 0 and abs(df) == abs(dr)


def is_queen_shape(start: Square, target: Square) -> bool:
    return is_rook_shape(start, target) or is_bishop_shape(start, target)


def is_knight_shape(start: Square, target: Square) -> bool:
    df, dr = _delta(start, target)
    return {abs(df), abs(dr)} == {1, 2}


def is_king_shape(start: Square, target: Square) -> bool:
    df, dr = _delta(start, target)
    return max(abs(df), abs(dr)) == 1


def is_pawn_advance_shape(
    start: Square,
    target: Square,
    color: Color,
    double_step: bool = False,
) -> bool:
    """Straight pawn push: one rank forward, or two when *double_step*."""
    df, dr = _delta(start, target)
    if df != 0:
        return False
    steps = 2 if double_step else 1
    return dr == steps * color.pawn_direction


def is_pawn_capture_shape(start: Square, target: Square, color: Color) -> bool:
    """Diagonal pawn step: one file sideways, one rank forward."""
    df, dr = _delta(start, target)
    return abs(df) == 1 and dr == color.pawn_direction


def squares_between(start: Square, target: Square) -> list[Square]:
    """Squares strictly between two squares on a shared line, else empty."""
    if not is_queen_shape(start, target):
        return []
    df, dr = _delta(start, target)
    step_f = (df > 0) - (df < 0)
    step_r = (dr > 0) - (dr < 0)
    distance = max(abs(df), abs(dr))
    return [
        Square(start.file + step_f * i, start.rank + step_r * i)
        for i in range(1, distance)
    ]


# ── Named square constants ──────────────────────────────────────────────────

ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(f, r) for f in range(8) for r in range(8)
)

A1, B1, C1, D1, E1, F1, G1, H1 = (Square(f, 0) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(f, 1) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(f, 2) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(f, 3) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(f, 4) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(f, 5) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(f, 6) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Square(f, 7) for f in range(8))
