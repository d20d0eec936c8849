"""Game layer — per-game runner state machine and summaries.

Quick start::

    from pgnalyze.game import GameRunner

    outcome = GameRunner(record, game_id=1).run()
"""

from pgnalyze.game.runner import GamePhase, GameRunner, MoveOutcome
from pgnalyze.game.summary import (
    HeaderSummary,
    Verdict,
    render_header,
    render_verdict,
)

__all__ = [
    "GamePhase",
    "GameRunner",
    "HeaderSummary",
    "MoveOutcome",
    "Verdict",
    "render_header",
    "render_verdict",
]
