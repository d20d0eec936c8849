"""Tests for the console entry point."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from pgnalyze.app import EXIT_BAD_INPUT, EXIT_INVALID_GAMES, EXIT_OK, main


class TestMain:
    def test_valid_games(self, pgn_file: Path) -> None:
        out = io.StringIO()
        assert main([str(pgn_file), "--workers", "2"], stream=out) == EXIT_OK
        text = out.getvalue()
        assert text.count('Valid: "true"') == 2
        assert ' White: "Morphy, Paul",' in text
        assert 'Round: "?"' in text

    def test_invalid_game(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.pgn"
        path.write_text('[White "X"]\n\n1. e4 e5 2. Ke3 *\n', encoding="utf-8")
        out = io.StringIO()
        assert main([str(path), "--fallback", "n/a"], stream=out) == EXIT_INVALID_GAMES
        text = out.getvalue()
        assert ' Event: "n/a",' in text
        assert 'Move: "Ke3",' in text
        assert 'Error: "No king found for e3"' in text

    def test_header_printed_before_verdict(self, pgn_file: Path) -> None:
        out = io.StringIO()
        main([str(pgn_file)], stream=out)
        text = out.getvalue()
        assert text.index("Event:") < text.index("Id:")

    def test_missing_file(self, tmp_path: Path) -> None:
        out = io.StringIO()
        assert main([str(tmp_path / "none.pgn")], stream=out) == EXIT_BAD_INPUT
        assert out.getvalue() == ""

    def test_bad_worker_count(self, pgn_file: Path) -> None:
        out = io.StringIO()
        assert main([str(pgn_file), "--workers", "0"], stream=out) == EXIT_BAD_INPUT

    def test_requires_a_path(self) -> None:
        with pytest.raises(SystemExit):
            main([])
