"""Exception hierarchy and structured error reports.

Edit-path errors (:class:`PathOutOfRange`, :class:`IllegalMove`,
:class:`RootDeletion`) are local rejections.  Decode-path errors derive from
:class:`PgnDecodeError` and convert into an :class:`ErrorReport` that the
embedding application receives through its error callback.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ErrorType(StrEnum):
    """Machine-readable kind carried by every :class:`ErrorReport`."""

    INVALID_PGN = "invalid_pgn"
    INVALID_FEN_IN_PGN = "invalid_fen_in_pgn"
    FEN_PGN_CONFLICT = "fen_pgn_conflict"
    INVALID_PGN_MOVES = "invalid_pgn_moves"
    PGN_PARSE_ERROR = "pgn_parse_error"
    INVALID_FEN = "invalid_fen"


@dataclass(slots=True, frozen=True)
class ErrorReport:
    """Structured failure payload: ``{type, message, details}``."""

    type: ErrorType
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "type": str(self.type),
            "message": self.message,
            "details": dict(self.details),
        }


# ── Base ─────────────────────────────────────────────────────────────────────


class PgnTreeError(Exception):
    """Base class for all errors raised by the package."""


# ── Edit path ────────────────────────────────────────────────────────────────


class PathOutOfRange(PgnTreeError, IndexError):
    """A path addresses a child that does not exist."""

    def __init__(self, path: tuple[int, ...], depth: int) -> None:
        super().__init__(f"Path {list(path)} is out of range at depth {depth}")
        self.path = path
        self.depth = depth


class IllegalMove(PgnTreeError, ValueError):
    """The rules adapter rejected a move from the given position."""

    def __init__(self, move: object, fen: str) -> None:
        super().__init__(f"Illegal move {move!r} in position {fen}")
        self.move = move
        self.fen = fen


class RootDeletion(PgnTreeError):
    """The root node cannot be deleted."""

    def __init__(self) -> None:
        super().__init__("The root node cannot be deleted")


class IllegalReplay(PgnTreeError):
    """A stored move could not be replayed; the tree is corrupt."""

    def __init__(self, path: tuple[int, ...], san: str | None) -> None:
        super().__init__(f"Stored move {san!r} at {list(path)} cannot be replayed")
        self.path = path
        self.san = san


# ── Decode path ──────────────────────────────────────────────────────────────


class PgnDecodeError(PgnTreeError):
    """A PGN (or starting position) could not be loaded."""

    error_type: ErrorType = ErrorType.INVALID_PGN

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_report(self) -> ErrorReport:
        return ErrorReport(self.error_type, self.message, dict(self.details))


class InvalidPgn(PgnDecodeError):
    error_type = ErrorType.INVALID_PGN


class PgnParseError(PgnDecodeError):
    error_type = ErrorType.PGN_PARSE_ERROR


class NoMovesParsed(PgnParseError):
    """Parser returned nothing, or a game without moves."""


class InvalidFenInPgn(PgnDecodeError):
    error_type = ErrorType.INVALID_FEN_IN_PGN


class FenPgnConflict(PgnDecodeError):
    error_type = ErrorType.FEN_PGN_CONFLICT


class InvalidPgnMoves(PgnDecodeError):
    error_type = ErrorType.INVALID_PGN_MOVES


class InvalidFen(PgnDecodeError):
    error_type = ErrorType.INVALID_FEN
