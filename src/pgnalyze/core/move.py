"""SAN move tokens: classification and parsing."""

from __future__ import annotations

from dataclasses import dataclass

from pgnalyze.core.enums import CastlingSide, MoveKind, PieceType
from pgnalyze.core.errors import (
    InvalidPromotion,
    MalformedMoveToken,
    MoveError,
)
from pgnalyze.core.piece import PROMOTION_TYPES, piece_type_from_san
from pgnalyze.core.types import MalformedSquareError, Square, parse_square

_CASTLING_TOKENS: dict[str, CastlingSide] = {
    "O-O": CastlingSide.KINGSIDE,
    "0-0": CastlingSide.KINGSIDE,
    "O-O-O": CastlingSide.QUEENSIDE,
    "0-0-0": CastlingSide.QUEENSIDE,
}
_DISAMBIGUATION_CHARS = frozenset("abcdefgh12345678")


class MoveTokenError(ValueError):
    """Raised by :func:`parse_san_token`; ``error`` holds the move error."""

    def __init__(self, error: MoveError) -> None:
        super().__init__(error.message)
        self.error = error


@dataclass(frozen=True, slots=True)
class SanMove:
    """A parsed SAN token, independent of any position."""

    token: str
    kind: MoveKind
    piece_type: PieceType = PieceType.PAWN
    target: Square | None = None
    disambiguation: str = ""
    promotion: PieceType | None = None
    castling: CastlingSide | None = None

    @property
    def is_capture(self) -> bool:
        return self.kind in (MoveKind.CAPTURE, MoveKind.CAPTURE_PROMOTION)

    def __str__(self) -> str:
        return self.token


def classify_token(token: str) -> MoveKind:
    """Classify *token* by shape; first match wins."""
    if token in _CASTLING_TOKENS:
        return MoveKind.CASTLE
    if "=" in token and "x" in token:
        return MoveKind.CAPTURE_PROMOTION
    if "=" in token:
        return MoveKind.PROMOTION
    if "x" in token:
        return MoveKind.CAPTURE
    return MoveKind.PLAIN


def _parse_target(token: str, text: str) -> Square:
    if len(text) != 2:
        raise MoveTokenError(MalformedMoveToken(token))
    try:
        return parse_square(text)
    except MalformedSquareError as exc:
        raise MoveTokenError(exc.error) from None


def _split_prefix(token: str, prefix: str) -> tuple[PieceType, str]:
    """Split ``Nbd`` style prefixes into piece kind and disambiguation."""
    piece_type = PieceType.PAWN
    if prefix and prefix[0].isupper():
        found = piece_type_from_san(prefix[0])
        if found is None:
            raise MoveTokenError(MalformedMoveToken(token))
        piece_type = found
        prefix = prefix[1:]
    if len(prefix) > 2 or not set(prefix) <= _DISAMBIGUATION_CHARS:
        raise MoveTokenError(MalformedMoveToken(token))
    return piece_type, prefix


def _parse_promotion_piece(token: str, letter: str, target: Square) -> PieceType:
    piece_type = piece_type_from_san(letter) if len(letter) == 1 else None
    if piece_type is None or piece_type not in PROMOTION_TYPES:
        raise MoveTokenError(InvalidPromotion(target))
    return piece_type


def parse_san_token(token: str) -> SanMove:
    """Parse a normalized SAN token into a :class:`SanMove`.

    Raises:
        MoveTokenError: if the token has none of the recognised shapes.
    """
    kind = classify_token(token)

    if kind == MoveKind.CASTLE:
        return SanMove(token=token, kind=kind, castling=_CASTLING_TOKENS[token])

    body = token
    promotion: PieceType | None = None
    promotion_letter = ""
    if kind in (MoveKind.PROMOTION, MoveKind.CAPTURE_PROMOTION):
        body, _, promotion_letter = token.partition("=")

    if kind in (MoveKind.CAPTURE, MoveKind.CAPTURE_PROMOTION):
        prefix, _, target_text = body.partition("x")
        target = _parse_target(token, target_text)
        if not prefix:
            raise MoveTokenError(MalformedMoveToken(token))
        piece_type, disambiguation = _split_prefix(token, prefix)
        if piece_type == PieceType.PAWN and (
            len(disambiguation) != 1 or not disambiguation.isalpha()
        ):
            raise MoveTokenError(MalformedMoveToken(token))
    else:
        target = _parse_target(token, body[-2:])
        piece_type, disambiguation = _split_prefix(token, body[:-2])
        if piece_type == PieceType.PAWN and disambiguation:
            raise MoveTokenError(MalformedMoveToken(token))

    if kind in (MoveKind.PROMOTION, MoveKind.CAPTURE_PROMOTION):
        if piece_type != PieceType.PAWN:
            raise MoveTokenError(MalformedMoveToken(token))
        promotion = _parse_promotion_piece(token, promotion_letter, target)

    return SanMove(
        token=token,
        kind=kind,
        piece_type=piece_type,
        target=target,
        disambiguation=disambiguation,
        promotion=promotion,
    )
