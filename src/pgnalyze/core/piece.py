"""Piece catalog: SAN letters and starting layout."""

from __future__ import annotations

from pgnalyze.core.enums import PieceType

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KING: "K",
    PieceType.QUEEN: "Q",
    PieceType.ROOK: "R",
    PieceType.BISHOP: "B",
    PieceType.KNIGHT: "N",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}

PROMOTION_TYPES: frozenset[PieceType] = frozenset(
    {PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT}
)

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def san_letter(piece_type: PieceType) -> str:
    """SAN prefix letter, empty for pawns."""
    return _SAN_PIECE.get(piece_type, "")


def piece_type_from_san(letter: str) -> PieceType | None:
    """Piece kind for an uppercase SAN letter, ``None`` if unknown."""
    return _SAN_PIECE_REV.get(letter)


def piece_char(piece_type: PieceType, white: bool) -> str:
    """Diagram character (uppercase = white, lowercase = black)."""
    char = _SAN_PIECE.get(piece_type, "P")
    return char if white else char.lower()
