"""Tests for SAN token classification and parsing."""

import pytest

from pgnalyze.core.enums import CastlingSide, MoveKind, PieceType
from pgnalyze.core.errors import InvalidPromotion, MalformedMoveToken, MalformedSquare
from pgnalyze.core.move import MoveTokenError, classify_token, parse_san_token
from pgnalyze.core.types import parse_square


class TestClassify:
    @pytest.mark.parametrize(
        ("token", "kind"),
        [
            ("O-O", MoveKind.CASTLE),
            ("O-O-O", MoveKind.CASTLE),
            ("0-0", MoveKind.CASTLE),
            ("bxa8=Q", MoveKind.CAPTURE_PROMOTION),
            ("e8=N", MoveKind.PROMOTION),
            ("Nxe5", MoveKind.CAPTURE),
            ("exd5", MoveKind.CAPTURE),
            ("Nbd7", MoveKind.PLAIN),
            ("e4", MoveKind.PLAIN),
        ],
    )
    def test_kinds(self, token: str, kind: MoveKind) -> None:
        assert classify_token(token) == kind


class TestParse:
    def test_pawn_push(self) -> None:
        move = parse_san_token("e4")
        assert move.piece_type == PieceType.PAWN
        assert move.target == parse_square("e4")
        assert move.disambiguation == ""
        assert not move.is_capture

    def test_piece_move(self) -> None:
        move = parse_san_token("Nf3")
        assert move.piece_type == PieceType.KNIGHT
        assert move.target == parse_square("f3")

    def test_disambiguated_capture(self) -> None:
        move = parse_san_token("R1xa8")
        assert move.kind == MoveKind.CAPTURE
        assert move.piece_type == PieceType.ROOK
        assert move.disambiguation == "1"
        assert move.target == parse_square("a8")

    def test_full_square_disambiguation(self) -> None:
        move = parse_san_token("Qh4e1")
        assert move.piece_type == PieceType.QUEEN
        assert move.disambiguation == "h4"
        assert move.target == parse_square("e1")

    def test_pawn_capture_uses_file_hint(self) -> None:
        move = parse_san_token("exd5")
        assert move.piece_type == PieceType.PAWN
        assert move.disambiguation == "e"
        assert move.is_capture

    def test_castling(self) -> None:
        assert parse_san_token("O-O").castling == CastlingSide.KINGSIDE
        assert parse_san_token("O-O-O").castling == CastlingSide.QUEENSIDE

    def test_promotion(self) -> None:
        move = parse_san_token("a8=Q")
        assert move.kind == MoveKind.PROMOTION
        assert move.promotion == PieceType.QUEEN
        assert move.target == parse_square("a8")

    def test_capture_promotion(self) -> None:
        move = parse_san_token("bxa1=N")
        assert move.kind == MoveKind.CAPTURE_PROMOTION
        assert move.promotion == PieceType.KNIGHT
        assert move.disambiguation == "b"
        assert move.target == parse_square("a1")


class TestMalformed:
    @pytest.mark.parametrize("token", ["Xe4", "e", "Nf3g", "xe4", "ee4", "K@e1"])
    def test_malformed_token(self, token: str) -> None:
        with pytest.raises(MoveTokenError) as info:
            parse_san_token(token)
        assert isinstance(info.value.error, MalformedMoveToken | MalformedSquare)

    def test_bad_target_square(self) -> None:
        with pytest.raises(MoveTokenError) as info:
            parse_san_token("Nz9")
        assert info.value.error == MalformedSquare("z9")

    def test_unknown_promotion_piece(self) -> None:
        with pytest.raises(MoveTokenError) as info:
            parse_san_token("a8=K")
        assert info.value.error == InvalidPromotion(parse_square("a8"))

    def test_piece_cannot_promote(self) -> None:
        with pytest.raises(MoveTokenError) as info:
            parse_san_token("Na8=Q")
        assert isinstance(info.value.error, MalformedMoveToken)
