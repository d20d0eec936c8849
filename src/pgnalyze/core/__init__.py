"""Core domain layer — SAN rules engine and PGN parsing, no external dependencies.

Quick start::

    from pgnalyze.core import Board, Color, split_games

    for record in split_games(pgn_text):
        board = Board.initial()
        error = board.apply(record.moves[0], Color.WHITE)
"""

from pgnalyze.core.board import Board, PieceSet
from pgnalyze.core.enums import CastlingSide, Color, MoveKind, PieceType
from pgnalyze.core.errors import (
    InternalError,
    InvalidCastling,
    InvalidPromotion,
    MalformedMoveToken,
    MalformedSquare,
    MoveError,
    NoPieceFound,
)
from pgnalyze.core.move import MoveTokenError, SanMove, classify_token, parse_san_token
from pgnalyze.core.notation import (
    GameRecord,
    MovetextTokens,
    extract_headers,
    normalize_movetext,
    read_games,
    read_pgn_file,
    split_games,
)
from pgnalyze.core.piece import piece_type_from_san, san_letter
from pgnalyze.core.types import (
    MalformedSquareError,
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums
    "CastlingSide",
    "Color",
    "MoveKind",
    "PieceType",
    # Types / helpers
    "MalformedSquareError",
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    "piece_type_from_san",
    "san_letter",
    # Errors
    "InternalError",
    "InvalidCastling",
    "InvalidPromotion",
    "MalformedMoveToken",
    "MalformedSquare",
    "MoveError",
    "NoPieceFound",
    # Domain objects
    "Board",
    "PieceSet",
    "MoveTokenError",
    "SanMove",
    "classify_token",
    "parse_san_token",
    # Notation
    "GameRecord",
    "MovetextTokens",
    "extract_headers",
    "normalize_movetext",
    "read_games",
    "read_pgn_file",
    "split_games",
]
