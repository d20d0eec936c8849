"""Batch analyzer: one worker per game, one serialized output sink."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from os import PathLike
from typing import Protocol

from pgnalyze.core.errors import InternalError
from pgnalyze.core.notation import GameRecord, read_pgn_file, split_games
from pgnalyze.game.runner import GameRunner, MoveOutcome
from pgnalyze.game.summary import HeaderSummary, Verdict
from pgnalyze.settings import AnalysisSettings

_LOGGER = logging.getLogger(__name__)


class AnalysisSink(Protocol):
    """Receives per-game summaries; header always precedes verdict."""

    def on_header(self, game_id: int, summary: HeaderSummary) -> None: ...

    def on_verdict(self, game_id: int, verdict: Verdict) -> None: ...


@dataclass(slots=True)
class CollectingSink:
    """Sink that keeps every summary pair in arrival order."""

    headers: dict[int, HeaderSummary] = field(default_factory=dict)
    results: list[tuple[HeaderSummary, Verdict]] = field(default_factory=list)

    def on_header(self, game_id: int, summary: HeaderSummary) -> None:
        self.headers[game_id] = summary

    def on_verdict(self, game_id: int, verdict: Verdict) -> None:
        self.results.append((self.headers[game_id], verdict))

    @property
    def verdicts(self) -> dict[int, Verdict]:
        return {verdict.game_id: verdict for _, verdict in self.results}


def _run_game(record: GameRecord, game_id: int) -> MoveOutcome:
    """Worker body; confines any failure to this game."""
    try:
        return GameRunner(record, game_id).run()
    except Exception as exc:
        _LOGGER.exception("Game %d: analysis failed", game_id)
        return MoveOutcome.invalid(game_id, InternalError(str(exc)))


class BatchAnalyzer:
    """Analyses many games in parallel, each on its own board.

    Summaries are delivered to the sink only from the thread that called
    :meth:`analyze`, so sinks need no locking.
    """

    __slots__ = ("_settings",)

    def __init__(self, settings: AnalysisSettings | None = None) -> None:
        self._settings = settings or AnalysisSettings()

    @property
    def settings(self) -> AnalysisSettings:
        return self._settings

    def analyze(
        self,
        records: Iterable[GameRecord],
        sink: AnalysisSink | None = None,
    ) -> list[MoveOutcome]:
        """Analyse *records*; outcomes are returned in input order."""
        games = list(records)
        if not games:
            _LOGGER.info("No games to analyse")
            return []

        first_id = self._settings.first_game_id
        outcomes: dict[int, MoveOutcome] = {}

        with ThreadPoolExecutor(
            max_workers=self._settings.max_workers,
            thread_name_prefix="pgnalyze",
        ) as pool:
            futures: dict[Future[MoveOutcome], tuple[int, GameRecord]] = {
                pool.submit(_run_game, record, game_id): (game_id, record)
                for game_id, record in enumerate(games, start=first_id)
            }
            for future in as_completed(futures):
                game_id, record = futures[future]
                outcome = future.result()
                outcomes[game_id] = outcome
                self._publish(game_id, record, outcome, sink)

        ordered = [outcomes[game_id] for game_id in sorted(outcomes)]
        invalid = sum(1 for outcome in ordered if not outcome.valid)
        _LOGGER.info("Analysed %d game(s), %d invalid", len(ordered), invalid)
        return ordered

    def analyze_text(
        self,
        text: str,
        sink: AnalysisSink | None = None,
    ) -> list[MoveOutcome]:
        return self.analyze(split_games(text), sink)

    def analyze_files(
        self,
        paths: Iterable[str | PathLike[str]],
        sink: AnalysisSink | None = None,
    ) -> list[MoveOutcome]:
        """Read every file first, then analyse all games in one batch.

        Raises:
            OSError: if a file cannot be read.
            UnicodeDecodeError: if a file is not valid in the configured
                encoding.
        """
        records: list[GameRecord] = []
        for path in paths:
            games = read_pgn_file(path, encoding=self._settings.encoding)
            _LOGGER.debug("Loaded %d game(s) from %s", len(games), path)
            records.extend(games)
        return self.analyze(records, sink)

    def _publish(
        self,
        game_id: int,
        record: GameRecord,
        outcome: MoveOutcome,
        sink: AnalysisSink | None,
    ) -> None:
        if not outcome.valid:
            _LOGGER.warning(
                "Game %d rejected at %r: %s", game_id, outcome.token, outcome.error
            )
        if sink is None:
            return
        sink.on_header(
            game_id,
            HeaderSummary.from_headers(record.headers, self._settings.fallback),
        )
        sink.on_verdict(game_id, Verdict.from_outcome(outcome))
