"""Console entry point: analyse PGN files and print per-game summaries."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from pgnalyze.analysis.service import BatchAnalyzer
from pgnalyze.game.summary import HeaderSummary, Verdict, render_header, render_verdict
from pgnalyze.settings import DEFAULT_FALLBACK, AnalysisSettings

_LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_GAMES = 1
EXIT_BAD_INPUT = 2


class PrintingSink:
    """Writes the JSON-like header and verdict blocks to a text stream."""

    __slots__ = ("_stream",)

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def on_header(self, game_id: int, summary: HeaderSummary) -> None:
        del game_id
        print(render_header(summary), file=self._stream)

    def on_verdict(self, game_id: int, verdict: Verdict) -> None:
        del game_id
        print(render_verdict(verdict), file=self._stream)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pgnalyze",
        description="Check that the games in PGN files are legal move sequences.",
    )
    parser.add_argument("paths", nargs="+", help="PGN files to analyse")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads (default: chosen by the executor)",
    )
    parser.add_argument(
        "--fallback",
        default=DEFAULT_FALLBACK,
        help="Placeholder for missing header tags",
    )
    parser.add_argument("--encoding", default="utf-8", help="Input file encoding")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: list[str] | None = None, stream: TextIO | None = None) -> int:
    """Run the analyser; returns the process exit code."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = AnalysisSettings(
            max_workers=args.workers,
            encoding=args.encoding,
            fallback=args.fallback,
        )
    except ValueError as exc:
        _LOGGER.error("%s", exc)
        return EXIT_BAD_INPUT

    sink = PrintingSink(stream if stream is not None else sys.stdout)
    try:
        outcomes = BatchAnalyzer(settings).analyze_files(args.paths, sink)
    except (OSError, ValueError) as exc:
        _LOGGER.error("Cannot read input: %s", exc)
        return EXIT_BAD_INPUT

    if any(not outcome.valid for outcome in outcomes):
        return EXIT_INVALID_GAMES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
