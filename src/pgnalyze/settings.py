"""Application-level analysis settings."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_FALLBACK = "Unknown"


@dataclass(slots=True)
class AnalysisSettings:
    """All user-configurable analysis settings."""

    # Batch
    max_workers: int | None = None  # None lets the executor choose
    first_game_id: int = 1

    # Input
    encoding: str = "utf-8"

    # Summaries
    fallback: str = DEFAULT_FALLBACK

    def __post_init__(self) -> None:
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")
