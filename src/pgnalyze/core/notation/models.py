"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class MovetextTokens:
    """Normalized movetext: SAN tokens plus the result token, if any."""

    moves: tuple[str, ...]
    result_token: str | None = None


@dataclass(frozen=True, slots=True)
class GameRecord:
    """One game ready for the rules engine; immutable once produced."""

    headers: dict[str, str] = field(default_factory=dict)
    moves: tuple[str, ...] = ()
    result_token: str | None = None

    def header(self, key: str, fallback: str = "Unknown") -> str:
        return self.headers.get(key, fallback)

    @property
    def tokens(self) -> tuple[str, ...]:
        """Moves followed by the result token, in the order they were read."""
        if self.result_token is None:
            return self.moves
        return (*self.moves, self.result_token)
