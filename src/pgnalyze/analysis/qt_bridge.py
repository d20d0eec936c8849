"""Qt bridge to run batch analysis in a worker thread."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from pgnalyze.analysis.service import BatchAnalyzer
from pgnalyze.game.runner import MoveOutcome
from pgnalyze.game.summary import HeaderSummary, Verdict
from pgnalyze.settings import AnalysisSettings


class AnalysisWorker(QObject):
    """Thread-affine worker that analyses PGN input on demand.

    Move it to a ``QThread``; the GUI receives summaries through queued
    signals, one header followed by one verdict per game.
    """

    header_ready = pyqtSignal(int, object)  # game_id, HeaderSummary
    verdict_ready = pyqtSignal(int, object)  # game_id, Verdict
    batch_finished = pyqtSignal(int, int)  # games, invalid games
    batch_error = pyqtSignal(str)

    __slots__ = ("_analyzer",)

    def __init__(self, settings: AnalysisSettings | None = None) -> None:
        super().__init__()
        self._analyzer = BatchAnalyzer(settings)

    # -- Sink protocol ------------------------------------------------------

    def on_header(self, game_id: int, summary: HeaderSummary) -> None:
        self.header_ready.emit(game_id, summary)

    def on_verdict(self, game_id: int, verdict: Verdict) -> None:
        self.verdict_ready.emit(game_id, verdict)

    # -- Slots --------------------------------------------------------------

    @pyqtSlot(list)
    def analyze_files(self, paths: list) -> None:
        """Analyse every game of the given PGN files."""
        try:
            outcomes = self._analyzer.analyze_files(paths, self)
        except (OSError, ValueError) as exc:
            self.batch_error.emit(str(exc))
            return
        self._finish(outcomes)

    @pyqtSlot(str)
    def analyze_text(self, text: str) -> None:
        """Analyse every game found in raw PGN text."""
        self._finish(self._analyzer.analyze_text(text, self))

    def _finish(self, outcomes: list[MoveOutcome]) -> None:
        invalid = sum(1 for outcome in outcomes if not outcome.valid)
        self.batch_finished.emit(len(outcomes), invalid)
