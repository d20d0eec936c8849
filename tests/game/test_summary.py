"""Tests for header and verdict summaries."""

from pgnalyze.core.enums import PieceType
from pgnalyze.core.errors import NoPieceFound
from pgnalyze.core.types import parse_square
from pgnalyze.game.runner import MoveOutcome
from pgnalyze.game.summary import (
    HeaderSummary,
    Verdict,
    render_header,
    render_verdict,
)


class TestHeaderSummary:
    def test_from_full_headers(self) -> None:
        summary = HeaderSummary.from_headers(
            {
                "Event": "Open",
                "White": "A",
                "Black": "B",
                "Round": "4",
                "Result": "0-1",
                "Site": "ignored",
            }
        )
        assert summary == HeaderSummary("Open", "A", "B", "4", "0-1")

    def test_missing_keys_use_fallback(self) -> None:
        summary = HeaderSummary.from_headers({"White": "A"})
        assert summary.white == "A"
        assert summary.event == "Unknown"
        assert summary.result == "Unknown"

    def test_custom_fallback(self) -> None:
        assert HeaderSummary.from_headers({}, fallback="-").round == "-"

    def test_render(self) -> None:
        text = render_header(HeaderSummary("Open", "A", "B", "4", "0-1"))
        assert text.startswith("{")
        assert ' Event: "Open",' in text
        assert ' Result: "0-1"' in text


class TestVerdict:
    def test_valid(self) -> None:
        verdict = Verdict.from_outcome(MoveOutcome(game_id=2, valid=True))
        assert verdict == Verdict(game_id=2, valid=True)
        text = render_verdict(verdict)
        assert 'Id: "2"' in text
        assert 'Valid: "true"' in text
        assert "Error" not in text

    def test_invalid_carries_error_detail(self) -> None:
        error = NoPieceFound(PieceType.ROOK, parse_square("a3"))
        outcome = MoveOutcome.invalid(5, error, ply=4, token="Ra3")
        verdict = Verdict.from_outcome(outcome)
        assert verdict.valid is False
        assert verdict.error_kind == "NoPieceFound"
        assert verdict.message == "No rook found for a3"
        assert verdict.token == "Ra3"
        assert verdict.ply == 4

        text = render_verdict(verdict)
        assert 'Valid: "false",' in text
        assert 'Move: "Ra3"' in text
        assert 'Error: "No rook found for a3"' in text
