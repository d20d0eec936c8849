"""PGN parsing: movetext normalization, tag pairs and game splitting."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from os import PathLike
from pathlib import Path
from typing import TextIO

from pgnalyze.core.notation.models import GameRecord, MovetextTokens

_LOGGER = logging.getLogger(__name__)

PGN_RESULT_TOKENS = frozenset({"1-0", "0-1", "1/2-1/2", "*"})

_TAG_PAIR_RE = re.compile(r'\[\s*(\w+)\s+"((?:[^"\\]|\\.)*)"\s*\]')
_COMMENT_RE = re.compile(r"\{[^}]*\}?|;[^\n]*")
_VARIATION_RE = re.compile(r"\([^()]*\)")
_NAG_RE = re.compile(r"\$\d+")
_MOVE_NUMBER_RE = re.compile(r"\d+\.+")
_ANNOTATION_RE = re.compile(r"[+#?!]")


def is_result_token(token: str) -> bool:
    return token in PGN_RESULT_TOKENS


def _strip_variations(text: str) -> str:
    # Innermost first so nested variations collapse completely.
    while True:
        stripped = _VARIATION_RE.sub(" ", text)
        if stripped == text:
            return stripped.replace("(", " ").replace(")", " ")
        text = stripped


def strip_movetext(movetext: str) -> str:
    """Remove comments, variations, move numbers and glyphs from movetext."""
    text = _COMMENT_RE.sub(" ", movetext)
    text = _strip_variations(text)
    text = _NAG_RE.sub(" ", text)
    text = _MOVE_NUMBER_RE.sub(" ", text)
    text = _ANNOTATION_RE.sub("", text)
    return " ".join(text.split())


def normalize_movetext(movetext: str) -> MovetextTokens:
    """Split movetext into SAN tokens and the terminating result token.

    Everything after the first result token is ignored.
    """
    moves: list[str] = []
    result_token: str | None = None
    for token in strip_movetext(movetext).split(" "):
        token = token.strip(".")
        if not token:
            continue
        if is_result_token(token):
            result_token = token
            break
        moves.append(token)
    return MovetextTokens(moves=tuple(moves), result_token=result_token)


def extract_headers(block: str) -> dict[str, str]:
    """Collect ``[Key "Value"]`` pairs; the last duplicate wins."""
    headers: dict[str, str] = {}
    for match in _TAG_PAIR_RE.finditer(block):
        key, raw_value = match.groups()
        headers[key] = raw_value.replace('\\"', '"').replace("\\\\", "\\")
    return headers


class _GameSplitter:
    """Line classifier that pairs header blocks with movetext blocks."""

    __slots__ = ("_header_lines", "_move_lines", "_pending_headers", "records")

    def __init__(self) -> None:
        self._header_lines: list[str] = []
        self._move_lines: list[str] = []
        self._pending_headers: dict[str, str] | None = None
        self.records: list[GameRecord] = []

    def feed(self, raw_line: str) -> None:
        line = raw_line.rstrip("\r\n")
        if line.startswith("%"):
            return
        # Header lines open with a tag pair; "[" inside movetext comments
        # (e.g. clock annotations) does not count.
        if line.lstrip().startswith("["):
            if self._move_lines:
                self._close_movetext()
            self._header_lines.append(line)
        elif line.strip():
            if self._header_lines:
                self._close_headers()
            self._move_lines.append(line)
        elif self._header_lines:
            self._close_headers()
        elif self._move_lines:
            self._close_movetext()

    def finish(self) -> list[GameRecord]:
        if self._header_lines:
            self._close_headers()
        if self._move_lines:
            self._close_movetext()
        if self._pending_headers is not None:
            _LOGGER.debug(
                "Dropping trailing header block without movetext: %s",
                self._pending_headers,
            )
            self._pending_headers = None
        return self.records

    def _close_headers(self) -> None:
        if self._pending_headers is not None:
            _LOGGER.debug(
                "Dropping header block without movetext: %s", self._pending_headers
            )
        self._pending_headers = extract_headers(" ".join(self._header_lines))
        self._header_lines = []

    def _close_movetext(self) -> None:
        tokens = normalize_movetext("\n".join(self._move_lines))
        self._move_lines = []
        headers = self._pending_headers or {}
        self._pending_headers = None
        if not tokens.moves and tokens.result_token is None:
            _LOGGER.debug("Skipping movetext block with no moves")
            return
        self.records.append(
            GameRecord(
                headers=headers,
                moves=tokens.moves,
                result_token=tokens.result_token,
            )
        )


def split_games(source: str | Iterable[str]) -> list[GameRecord]:
    """Split a multi-game PGN text (or its lines) into :class:`GameRecord` s.

    Never raises on malformed layout; incomplete fragments are dropped.
    """
    lines = source.splitlines() if isinstance(source, str) else source
    splitter = _GameSplitter()
    for line in lines:
        splitter.feed(line)
    records = splitter.finish()
    _LOGGER.debug("Split %d game(s)", len(records))
    return records


def read_games(stream: TextIO) -> list[GameRecord]:
    """Read a text stream fully, then split it into games."""
    return split_games(stream.read())


def read_pgn_file(
    path: str | PathLike[str],
    encoding: str = "utf-8",
) -> list[GameRecord]:
    """Load every game from a PGN file on disk."""
    text = Path(path).read_text(encoding=encoding)
    return split_games(text)
