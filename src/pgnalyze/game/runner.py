"""Game runner — drives one game's tokens through a board."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum, auto

from pgnalyze.core.board import Board
from pgnalyze.core.enums import Color
from pgnalyze.core.errors import MoveError
from pgnalyze.core.notation import GameRecord, is_result_token
from pgnalyze.game.summary import HeaderSummary
from pgnalyze.settings import DEFAULT_FALLBACK

_LOGGER = logging.getLogger(__name__)


class GamePhase(IntEnum):
    """Finite-state-machine states of a game analysis."""

    PENDING = auto()
    RUNNING = auto()
    COMPLETED_VALID = auto()
    COMPLETED_INVALID = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.COMPLETED_VALID, GamePhase.COMPLETED_INVALID)


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of analysing one game."""

    game_id: int
    valid: bool
    error: MoveError | None = None
    ply: int | None = None  # zero-based half-move index of the failing token
    token: str | None = None

    @classmethod
    def invalid(
        cls,
        game_id: int,
        error: MoveError,
        ply: int | None = None,
        token: str | None = None,
    ) -> MoveOutcome:
        return cls(game_id=game_id, valid=False, error=error, ply=ply, token=token)


class GameRunner:
    """Applies a :class:`GameRecord` move by move to its own :class:`Board`.

    ``PENDING → RUNNING → COMPLETED_VALID | COMPLETED_INVALID``. Terminal
    phases are final; :meth:`run` may be called once.
    """

    __slots__ = ("_record", "_board", "_game_id", "_phase", "_outcome")

    def __init__(
        self,
        record: GameRecord,
        game_id: int,
        board: Board | None = None,
    ) -> None:
        self._record = record
        self._board = board if board is not None else Board.initial()
        self._game_id = game_id
        self._phase = GamePhase.PENDING
        self._outcome: MoveOutcome | None = None

    # -- Properties ---------------------------------------------------------

    @property
    def record(self) -> GameRecord:
        return self._record

    @property
    def board(self) -> Board:
        return self._board

    @property
    def game_id(self) -> int:
        return self._game_id

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def outcome(self) -> MoveOutcome | None:
        return self._outcome

    def header_summary(self, fallback: str = DEFAULT_FALLBACK) -> HeaderSummary:
        return HeaderSummary.from_headers(self._record.headers, fallback)

    # -- Execution ----------------------------------------------------------

    def run(self) -> MoveOutcome:
        """Analyse the game and return its outcome."""
        if self._phase != GamePhase.PENDING:
            raise RuntimeError(f"Game {self._game_id} has already been analysed")
        self._phase = GamePhase.RUNNING

        side = Color.WHITE
        for ply, token in enumerate(self._record.tokens):
            if is_result_token(token):
                break
            error = self._board.apply(token, side)
            if error is not None:
                _LOGGER.debug(
                    "Game %d: illegal move %r at ply %d: %s",
                    self._game_id,
                    token,
                    ply,
                    error,
                )
                return self._finish(
                    MoveOutcome.invalid(self._game_id, error, ply=ply, token=token)
                )
            side = side.opposite

        return self._finish(MoveOutcome(game_id=self._game_id, valid=True))

    def _finish(self, outcome: MoveOutcome) -> MoveOutcome:
        self._outcome = outcome
        self._phase = (
            GamePhase.COMPLETED_VALID if outcome.valid else GamePhase.COMPLETED_INVALID
        )
        return outcome
