"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class PgnMoveAst:
    """A single move as read from PGN movetext, with its nested variations.

    ``comment_before`` precedes the move (and its number), ``comment_move``
    sits between the move number and the move, ``comment_after`` follows it.
    Each entry of ``variations`` is an alternative line to this move.
    """

    notation: str
    comment_before: str | None = None
    comment_move: str | None = None
    comment_after: str | None = None
    variations: list[list[PgnMoveAst]] = field(default_factory=list)

    @property
    def comment(self) -> str:
        """All comments of this move joined with single spaces."""
        parts = (self.comment_before, self.comment_move, self.comment_after)
        normalized = (" ".join(part.split()) for part in parts if part)
        return " ".join(text for text in normalized if text)


@dataclass(slots=True)
class ParsedPgn:
    """Structured PGN payload: header tags, main-line moves, result token."""

    tags: dict[str, str]
    moves: list[PgnMoveAst]
    result_token: str = "*"
