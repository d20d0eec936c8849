"""Tests for GameRunner."""

import pytest

from pgnalyze.core.board import Board
from pgnalyze.core.enums import CastlingSide, Color, PieceType
from pgnalyze.core.errors import InvalidCastling, NoPieceFound
from pgnalyze.core.notation import GameRecord, split_games
from pgnalyze.core.types import parse_square
from pgnalyze.game.runner import GamePhase, GameRunner, MoveOutcome


def _record(*moves: str, result: str | None = None) -> GameRecord:
    return GameRecord(headers={"Event": "Test"}, moves=moves, result_token=result)


class TestGameRunnerPhases:
    def test_starts_pending(self) -> None:
        runner = GameRunner(_record("e4"), game_id=1)
        assert runner.phase == GamePhase.PENDING
        assert runner.outcome is None
        assert not runner.phase.is_terminal

    def test_valid_game_completes(self) -> None:
        runner = GameRunner(_record("e4", "e5", "Nf3", "Nc6"), game_id=3)
        outcome = runner.run()
        assert outcome == MoveOutcome(game_id=3, valid=True)
        assert runner.phase == GamePhase.COMPLETED_VALID
        assert runner.outcome is outcome

    def test_run_twice_raises(self) -> None:
        runner = GameRunner(_record("e4"), game_id=1)
        runner.run()
        with pytest.raises(RuntimeError, match="already"):
            runner.run()

    def test_empty_game_is_valid(self) -> None:
        outcome = GameRunner(_record(result="*"), game_id=1).run()
        assert outcome.valid


class TestGameRunnerMoves:
    def test_sides_alternate(self) -> None:
        runner = GameRunner(_record("e4", "e5"), game_id=1)
        runner.run()
        board = runner.board
        assert board.piece_at(parse_square("e4")) == (Color.WHITE, PieceType.PAWN)
        assert board.piece_at(parse_square("e5")) == (Color.BLACK, PieceType.PAWN)

    def test_first_error_stops_processing(self) -> None:
        runner = GameRunner(_record("e4", "e5", "Ke3", "Nc6"), game_id=7)
        outcome = runner.run()
        assert not outcome.valid
        assert outcome.error == NoPieceFound(PieceType.KING, parse_square("e3"))
        assert outcome.ply == 2
        assert outcome.token == "Ke3"
        assert runner.phase == GamePhase.COMPLETED_INVALID
        # Black's Nc6 was never applied.
        assert runner.board.piece_at(parse_square("b8")) == (
            Color.BLACK,
            PieceType.KNIGHT,
        )

    def test_result_token_inside_moves_ends_game(self) -> None:
        record = GameRecord(moves=("e4", "1-0", "Ke5"))
        outcome = GameRunner(record, game_id=1).run()
        assert outcome.valid

    def test_castling_twice_is_rejected(self) -> None:
        moves = (
            "e4", "e5", "Nf3", "Nc6", "Bc4", "Bc5", "O-O", "Nf6",
            "Re1", "O-O", "Rf1", "d6", "O-O",
        )
        outcome = GameRunner(_record(*moves), game_id=1).run()
        assert not outcome.valid
        assert outcome.error == InvalidCastling(Color.WHITE, CastlingSide.KINGSIDE)
        assert outcome.ply == 12

    def test_custom_board(self) -> None:
        board = Board.from_pieces(
            white={PieceType.PAWN: ["a7"], PieceType.KING: ["e1"]},
            black={PieceType.KING: ["e8"]},
        )
        runner = GameRunner(_record("a8=Q", "Kd7", "Qb7"), game_id=1, board=board)
        assert runner.run().valid
        assert board.pieces(Color.WHITE, PieceType.QUEEN) == [parse_square("b7")]


class TestFamousGames:
    def test_both_fixture_games_are_legal(self, two_games_pgn: str) -> None:
        for game_id, record in enumerate(split_games(two_games_pgn), start=1):
            outcome = GameRunner(record, game_id).run()
            assert outcome.valid, f"game {game_id}: {outcome.token} {outcome.error}"

    def test_en_passant_game(self) -> None:
        record = split_games("1. e4 Nf6 2. e5 d5 3. exd6 cxd6 *")[0]
        runner = GameRunner(record, 1)
        assert runner.run().valid
        assert runner.board.pieces(Color.WHITE, PieceType.PAWN)[3:5] == [
            parse_square("d2"),
            parse_square("f2"),
        ]

    def test_header_summary_uses_fallback(self) -> None:
        runner = GameRunner(_record("e4"), game_id=1)
        summary = runner.header_summary(fallback="?")
        assert summary.event == "Test"
        assert summary.white == "?"
