"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def pawn_direction(self) -> int:
        """Rank delta of a single pawn step."""
        return 1 if self == Color.WHITE else -1

    @property
    def home_rank(self) -> int:
        return 0 if self == Color.WHITE else 7

    @property
    def pawn_start_rank(self) -> int:
        return 1 if self == Color.WHITE else 6

    @property
    def promotion_rank(self) -> int:
        return 7 if self == Color.WHITE else 0

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece kinds."""

    KING = auto()
    QUEEN = auto()
    ROOK = auto()
    BISHOP = auto()
    KNIGHT = auto()
    PAWN = auto()


class CastlingSide(IntEnum):
    """Castling direction."""

    KINGSIDE = 0
    QUEENSIDE = 1

    @property
    def label(self) -> str:
        return "king-side" if self == CastlingSide.KINGSIDE else "queen-side"


class MoveKind(IntEnum):
    """Shape of a SAN token, in classification order."""

    CASTLE = auto()
    CAPTURE_PROMOTION = auto()
    PROMOTION = auto()
    CAPTURE = auto()
    PLAIN = auto()
