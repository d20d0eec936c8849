"""Move errors reported by the rules engine.

Errors are plain value objects returned from :meth:`Board.apply`; they are
never raised. Each carries enough context to render a diagnostic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pgnalyze.core.enums import CastlingSide, Color, PieceType
    from pgnalyze.core.types import Square


@dataclass(frozen=True, slots=True)
class MoveError:
    """Base class of every move failure."""

    @property
    def kind(self) -> str:
        return type(self).__name__

    @property
    def message(self) -> str:
        return self.kind

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class MalformedSquare(MoveError):
    text: str

    @property
    def message(self) -> str:
        return f"Invalid square name: {self.text!r}"


@dataclass(frozen=True, slots=True)
class NoPieceFound(MoveError):
    """No piece of *piece_type* can legally reach or vacate *square*."""

    piece_type: PieceType
    square: Square

    @property
    def message(self) -> str:
        return f"No {self.piece_type.name.lower()} found for {self.square}"


@dataclass(frozen=True, slots=True)
class InvalidCastling(MoveError):
    color: Color
    side: CastlingSide

    @property
    def message(self) -> str:
        return f"{self.color.name.capitalize()} cannot castle {self.side.label}"


@dataclass(frozen=True, slots=True)
class InvalidPromotion(MoveError):
    square: Square | str

    @property
    def message(self) -> str:
        return f"Invalid promotion on {self.square}"


@dataclass(frozen=True, slots=True)
class MalformedMoveToken(MoveError):
    text: str

    @property
    def message(self) -> str:
        return f"Unrecognised move token: {self.text!r}"


@dataclass(frozen=True, slots=True)
class InternalError(MoveError):
    """An unexpected failure while analysing one game."""

    detail: str

    @property
    def message(self) -> str:
        return f"Internal error: {self.detail}"
