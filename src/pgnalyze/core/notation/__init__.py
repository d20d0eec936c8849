"""Notation package: PGN movetext normalization, tag pairs, game splitting."""

from pgnalyze.core.notation.models import GameRecord, MovetextTokens
from pgnalyze.core.notation.pgn import (
    PGN_RESULT_TOKENS,
    extract_headers,
    is_result_token,
    normalize_movetext,
    read_games,
    read_pgn_file,
    split_games,
    strip_movetext,
)

__all__ = [
    "PGN_RESULT_TOKENS",
    "GameRecord",
    "MovetextTokens",
    "extract_headers",
    "is_result_token",
    "normalize_movetext",
    "read_games",
    "read_pgn_file",
    "split_games",
    "strip_movetext",
]
