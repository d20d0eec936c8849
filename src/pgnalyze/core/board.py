"""Board - per-side piece tables and the SAN rules engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from pgnalyze.core.enums import CastlingSide, Color, MoveKind, PieceType
from pgnalyze.core.errors import (
    InvalidCastling,
    InvalidPromotion,
    MoveError,
    NoPieceFound,
)
from pgnalyze.core.move import MoveTokenError, SanMove, parse_san_token
from pgnalyze.core.piece import BACK_RANK, piece_char
from pgnalyze.core.types import (
    Square,
    is_bishop_shape,
    is_king_shape,
    is_knight_shape,
    is_pawn_advance_shape,
    is_pawn_capture_shape,
    is_queen_shape,
    is_rook_shape,
    parse_square,
    squares_between,
)

PieceSet = dict[PieceType, set[Square]]

_KING_FILE = 4
# side -> (rook home file, king destination file, rook destination file)
_CASTLING_FILES: dict[CastlingSide, tuple[int, int, int]] = {
    CastlingSide.KINGSIDE: (7, 6, 5),
    CastlingSide.QUEENSIDE: (0, 2, 3),
}


@dataclass(frozen=True, slots=True)
class _Step:
    """A validated relocation, ready to be committed."""

    piece_type: PieceType
    start: Square
    target: Square
    captured_square: Square | None = None
    captured_type: PieceType | None = None


def _empty_piece_set() -> PieceSet:
    return {pt: set() for pt in PieceType}


class Board:
    """Mutable board state for one game.

    Holds one :data:`PieceSet` per side plus castling and en-passant
    bookkeeping. :meth:`apply` is the single entry point for moves; it never
    raises on illegal input and leaves the board untouched when it fails.

    ``en_passant`` is the square of the pawn that just advanced two ranks
    (the pawn an en-passant capture removes); ``en_passant_target`` is the
    square it passed over.
    """

    __slots__ = ("_pieces", "_king_moved", "_rook_moved", "en_passant")

    def __init__(self) -> None:
        self._pieces: list[PieceSet] = [_empty_piece_set(), _empty_piece_set()]
        self._king_moved: list[bool] = [False, False]
        # [color][castling side]
        self._rook_moved: list[list[bool]] = [[False, False], [False, False]]
        self.en_passant: Square | None = None

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for color in Color:
            for f, pt in enumerate(BACK_RANK):
                b.place(color, pt, Square(f, color.home_rank))
                b.place(color, PieceType.PAWN, Square(f, color.pawn_start_rank))
        return b

    @classmethod
    def from_pieces(
        cls,
        white: Mapping[PieceType, Iterable[Square | str]] | None = None,
        black: Mapping[PieceType, Iterable[Square | str]] | None = None,
        en_passant: Square | str | None = None,
    ) -> Board:
        """Seed an arbitrary position; squares may be given by name."""
        b = cls()
        for color, layout in ((Color.WHITE, white), (Color.BLACK, black)):
            for pt, squares in (layout or {}).items():
                for sq in squares:
                    b.place(color, pt, sq)
        if isinstance(en_passant, str):
            en_passant = parse_square(en_passant)
        b.en_passant = en_passant
        return b

    # -- Setup --------------------------------------------------------------

    def place(self, color: Color, piece_type: PieceType, square: Square | str) -> None:
        """Put a piece on an empty square."""
        if isinstance(square, str):
            square = parse_square(square)
        if self.piece_at(square) is not None:
            raise ValueError(f"Square {square} is already occupied")
        self._pieces[color][piece_type].add(square)

    def remove(self, square: Square | str) -> tuple[Color, PieceType] | None:
        """Lift whatever stands on *square* and return it."""
        if isinstance(square, str):
            square = parse_square(square)
        found = self.piece_at(square)
        if found is not None:
            color, pt = found
            self._pieces[color][pt].discard(square)
        return found

    def clear(self) -> None:
        self._pieces = [_empty_piece_set(), _empty_piece_set()]
        self._king_moved = [False, False]
        self._rook_moved = [[False, False], [False, False]]
        self.en_passant = None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*, in square order."""
        return sorted(self._pieces[color][piece_type])

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return sorted(sq for squares in self._pieces[color].values() for sq in squares)

    def piece_set(self, color: Color) -> PieceSet:
        """Copy of *color*'s piece table."""
        return {pt: set(squares) for pt, squares in self._pieces[color].items()}

    def piece_at(self, square: Square) -> tuple[Color, PieceType] | None:
        for color in Color:
            pt = self._piece_type_at(color, square)
            if pt is not None:
                return color, pt
        return None

    def is_empty(self, square: Square) -> bool:
        return self.piece_at(square) is None

    def can_castle(self, color: Color, side: CastlingSide) -> bool:
        """Whether castling rights remain (ignores blocking pieces)."""
        return not self.has_castled_or_moved(color, side)

    def has_castled_or_moved(self, color: Color, side: CastlingSide) -> bool:
        """Whether the king or the *side* rook has left its home square."""
        return self._king_moved[color] or self._rook_moved[color][side]

    @property
    def en_passant_target(self) -> Square | None:
        """Square skipped by the last double pawn advance."""
        if self.en_passant is None:
            return None
        mover = self._color_at(self.en_passant)
        if mover is None:
            return None
        return Square(self.en_passant.file, self.en_passant.rank - mover.pawn_direction)

    def _piece_type_at(self, color: Color, square: Square) -> PieceType | None:
        for pt, squares in self._pieces[color].items():
            if square in squares:
                return pt
        return None

    def _color_at(self, square: Square) -> Color | None:
        found = self.piece_at(square)
        return found[0] if found is not None else None

    def _path_clear(self, start: Square, target: Square) -> bool:
        return all(self.is_empty(sq) for sq in squares_between(start, target))

    # -- Move application ---------------------------------------------------

    def apply(self, token: str, color: Color) -> MoveError | None:
        """Apply one SAN half-move for *color*.

        Returns ``None`` on success, or the :class:`MoveError` describing why
        the move is illegal. The board is unchanged after a failure.
        """
        try:
            move = parse_san_token(token)
        except MoveTokenError as exc:
            return exc.error

        if move.kind == MoveKind.CASTLE:
            assert move.castling is not None
            return self._castle(color, move.castling)
        if move.kind == MoveKind.CAPTURE_PROMOTION:
            return self._capture_and_promote(move, color)
        if move.kind == MoveKind.PROMOTION:
            return self._promote(move, color)
        return self._move(move, color)

    def _can_reach(
        self,
        start: Square,
        target: Square,
        piece_type: PieceType,
        color: Color,
        capture: bool,
    ) -> bool:
        if piece_type == PieceType.PAWN:
            if capture:
                return is_pawn_capture_shape(start, target, color)
            if is_pawn_advance_shape(start, target, color):
                return True
            return (
                start.rank == color.pawn_start_rank
                and is_pawn_advance_shape(start, target, color, double_step=True)
                and self._path_clear(start, target)
            )
        if piece_type == PieceType.KING:
            return is_king_shape(start, target)
        if piece_type == PieceType.KNIGHT:
            return is_knight_shape(start, target)

        shape = {
            PieceType.ROOK: is_rook_shape,
            PieceType.BISHOP: is_bishop_shape,
            PieceType.QUEEN: is_queen_shape,
        }[piece_type]
        return shape(start, target) and self._path_clear(start, target)

    def _find_start(
        self,
        color: Color,
        piece_type: PieceType,
        target: Square,
        disambiguation: str,
        capture: bool,
    ) -> Square | None:
        """First matching origin in square order."""
        for start in self.pieces(color, piece_type):
            if disambiguation and disambiguation not in str(start):
                continue
            if self._can_reach(start, target, piece_type, color, capture):
                return start
        return None

    def _plan(self, move: SanMove, color: Color) -> _Step | MoveError:
        """Validate a plain move or capture without touching the board."""
        target = move.target
        assert target is not None
        start = self._find_start(
            color, move.piece_type, target, move.disambiguation, move.is_capture
        )
        if start is None:
            return NoPieceFound(move.piece_type, target)

        occupant = self.piece_at(target)
        if not move.is_capture:
            if occupant is not None:
                return NoPieceFound(move.piece_type, target)
            return _Step(move.piece_type, start, target)

        if (
            move.piece_type == PieceType.PAWN
            and occupant is None
            and self.en_passant == Square(target.file, start.rank)
            and self._piece_type_at(color.opposite, self.en_passant) == PieceType.PAWN
        ):
            return _Step(
                PieceType.PAWN,
                start,
                target,
                captured_square=self.en_passant,
                captured_type=PieceType.PAWN,
            )

        if occupant is None or occupant[0] == color:
            return NoPieceFound(move.piece_type, target)
        return _Step(
            move.piece_type,
            start,
            target,
            captured_square=target,
            captured_type=occupant[1],
        )

    def _commit(self, step: _Step, color: Color) -> None:
        opponent = color.opposite
        if step.captured_square is not None and step.captured_type is not None:
            self._pieces[opponent][step.captured_type].discard(step.captured_square)
            if step.captured_type == PieceType.ROOK:
                self._note_rook_left(opponent, step.captured_square)

        own = self._pieces[color][step.piece_type]
        own.discard(step.start)
        own.add(step.target)

        if step.piece_type == PieceType.KING:
            self._king_moved[color] = True
        elif step.piece_type == PieceType.ROOK:
            self._note_rook_left(color, step.start)

        double_step = (
            step.piece_type == PieceType.PAWN
            and abs(step.target.rank - step.start.rank) == 2
        )
        self.en_passant = step.target if double_step else None

    def _note_rook_left(self, color: Color, square: Square) -> None:
        if square.rank != color.home_rank:
            return
        for side, (rook_file, _, _) in _CASTLING_FILES.items():
            if square.file == rook_file:
                self._rook_moved[color][side] = True

    def _move(self, move: SanMove, color: Color) -> MoveError | None:
        step = self._plan(move, color)
        if isinstance(step, MoveError):
            return step
        self._commit(step, color)
        return None

    def _castle(self, color: Color, side: CastlingSide) -> MoveError | None:
        rank = color.home_rank
        rook_file, king_to, rook_to = _CASTLING_FILES[side]
        king_sq = Square(_KING_FILE, rank)
        rook_sq = Square(rook_file, rank)
        kings = self._pieces[color][PieceType.KING]
        rooks = self._pieces[color][PieceType.ROOK]

        if (
            not self.can_castle(color, side)
            or king_sq not in kings
            or rook_sq not in rooks
            or not self._path_clear(king_sq, rook_sq)
        ):
            return InvalidCastling(color, side)

        kings.discard(king_sq)
        kings.add(Square(king_to, rank))
        rooks.discard(rook_sq)
        rooks.add(Square(rook_to, rank))

        self._king_moved[color] = True
        self._rook_moved[color] = [True, True]
        self.en_passant = None
        return None

    def _promote(self, move: SanMove, color: Color) -> MoveError | None:
        target = move.target
        assert target is not None and move.promotion is not None
        if target.rank != color.promotion_rank:
            return InvalidPromotion(target)

        origin = Square(target.file, target.rank - color.pawn_direction)
        pawns = self._pieces[color][PieceType.PAWN]
        if origin not in pawns:
            return NoPieceFound(PieceType.PAWN, origin)
        if not self.is_empty(target):
            return NoPieceFound(PieceType.PAWN, target)

        pawns.discard(origin)
        self._pieces[color][move.promotion].add(target)
        self.en_passant = None
        return None

    def _capture_and_promote(self, move: SanMove, color: Color) -> MoveError | None:
        target = move.target
        assert target is not None and move.promotion is not None
        if target.rank != color.promotion_rank:
            return InvalidPromotion(target)

        step = self._plan(move, color)
        if isinstance(step, MoveError):
            return step
        self._commit(step, color)

        self._pieces[color][PieceType.PAWN].discard(target)
        self._pieces[color][move.promotion].add(target)
        return None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._pieces = [self.piece_set(Color.WHITE), self.piece_set(Color.BLACK)]
        b._king_moved = self._king_moved.copy()
        b._rook_moved = [row.copy() for row in self._rook_moved]
        b.en_passant = self.en_passant
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._pieces == other._pieces
            and self._king_moved == other._king_moved
            and self._rook_moved == other._rook_moved
            and self.en_passant == other.en_passant
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                found = self.piece_at(Square(file, rank))
                if found is None:
                    row.append(".")
                else:
                    color, pt = found
                    row.append(piece_char(pt, color == Color.WHITE))
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
