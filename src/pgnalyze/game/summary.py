"""Per-game summaries handed to the presentation layer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pgnalyze.settings import DEFAULT_FALLBACK

if TYPE_CHECKING:
    from pgnalyze.game.runner import MoveOutcome


@dataclass(frozen=True, slots=True)
class HeaderSummary:
    """Header echo of one game; missing tags hold the fallback value."""

    event: str
    white: str
    black: str
    round: str
    result: str

    @classmethod
    def from_headers(
        cls,
        headers: Mapping[str, str],
        fallback: str = DEFAULT_FALLBACK,
    ) -> HeaderSummary:
        return cls(
            event=headers.get("Event", fallback),
            white=headers.get("White", fallback),
            black=headers.get("Black", fallback),
            round=headers.get("Round", fallback),
            result=headers.get("Result", fallback),
        )


@dataclass(frozen=True, slots=True)
class Verdict:
    """Terminal validity verdict of one game."""

    game_id: int
    valid: bool
    error_kind: str | None = None
    message: str | None = None
    token: str | None = None
    ply: int | None = None

    @classmethod
    def from_outcome(cls, outcome: MoveOutcome) -> Verdict:
        error = outcome.error
        return cls(
            game_id=outcome.game_id,
            valid=outcome.valid,
            error_kind=error.kind if error is not None else None,
            message=error.message if error is not None else None,
            token=outcome.token,
            ply=outcome.ply,
        )


def render_header(summary: HeaderSummary) -> str:
    """JSON-like text block echoing the game's headers."""
    return (
        "{\n"
        f' Event: "{summary.event}",\n'
        f' White: "{summary.white}",\n'
        f' Black: "{summary.black}",\n'
        f' Round: "{summary.round}",\n'
        f' Result: "{summary.result}"\n'
        "},"
    )


def render_verdict(verdict: Verdict) -> str:
    """JSON-like text block with the game's validity."""
    lines = [
        "{",
        f'  Id: "{verdict.game_id}",',
        f'  Valid: "{str(verdict.valid).lower()}"',
    ]
    if not verdict.valid:
        lines[-1] += ","
        lines.append(f'  Move: "{verdict.token}",')
        lines.append(f'  Error: "{verdict.message}"')
    lines.append("}")
    return "\n".join(lines)
