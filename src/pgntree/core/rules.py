"""Rules adapter: move legality, SAN and FEN derivation.

The tree layer never inspects a board itself; it only asks an :class:`IRules`
implementation to apply a move to a FEN and to validate a FEN.  The default
implementation delegates to python-chess.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeAlias

import chess

from pgntree.errors import IllegalMove

STARTING_FEN = chess.STARTING_FEN


@dataclass(slots=True, frozen=True)
class CoordinateMove:
    """A from/to square pair as produced by a drag-and-drop board."""

    from_square: str
    to_square: str
    promotion: str | None = None


@dataclass(slots=True, frozen=True)
class AppliedMove:
    """Result of applying one move: canonical SAN and the resulting FEN."""

    san: str
    fen: str


MoveSpec: TypeAlias = "str | chess.Move | CoordinateMove"


class IRules(Protocol):
    """Protocol for the chess-rules collaborator used by the tree layer."""

    def apply_move(self, fen: str, move: MoveSpec) -> AppliedMove: ...

    def validate_fen(self, fen: str) -> bool: ...

    def default_fen(self) -> str: ...


class ChessRules:
    """python-chess backed :class:`IRules` implementation.

    Args:
        promotion: Piece type used when a coordinate move pushes a pawn to
            the last rank without naming a promotion piece.
    """

    __slots__ = ("_promotion",)

    def __init__(self, promotion: chess.PieceType = chess.QUEEN) -> None:
        self._promotion = promotion

    def apply_move(self, fen: str, move: MoveSpec) -> AppliedMove:
        """Apply *move* to *fen*; raise :class:`IllegalMove` if impossible."""
        try:
            board = chess.Board(fen)
        except ValueError as exc:
            raise IllegalMove(move, fen) from exc

        parsed = self._parse(board, move)
        if parsed is None or not board.is_legal(parsed):
            raise IllegalMove(move, fen)

        san = board.san(parsed)
        board.push(parsed)
        return AppliedMove(san=san, fen=board.fen())

    def validate_fen(self, fen: str) -> bool:
        """Accept only complete (six-field), well-formed, reachable-looking FENs."""
        if len(fen.split()) != 6:
            return False
        try:
            board = chess.Board(fen)
        except ValueError:
            return False
        return board.is_valid()

    def default_fen(self) -> str:
        return STARTING_FEN

    # ── Internal helpers ─────────────────────────────────────────────────

    def _parse(self, board: chess.Board, move: MoveSpec) -> chess.Move | None:
        if isinstance(move, chess.Move):
            return move
        if isinstance(move, CoordinateMove):
            return self._from_coordinates(board, move)

        text = move.strip()
        if not text:
            return None
        try:
            return board.parse_san(text)
        except ValueError:
            pass
        # Fall back to coordinate notation ("e2e4", "e7e8q").
        try:
            return chess.Move.from_uci(text)
        except ValueError:
            return None

    def _from_coordinates(
        self, board: chess.Board, move: CoordinateMove
    ) -> chess.Move | None:
        try:
            from_sq = chess.parse_square(move.from_square)
            to_sq = chess.parse_square(move.to_square)
        except ValueError:
            return None

        promotion: chess.PieceType | None = None
        if move.promotion:
            symbol = move.promotion.lower()
            if symbol not in ("q", "r", "b", "n"):
                return None
            promotion = chess.PIECE_SYMBOLS.index(symbol)
        elif board.piece_type_at(from_sq) == chess.PAWN and chess.square_rank(
            to_sq
        ) in (0, 7):
            promotion = self._promotion

        return chess.Move(from_sq, to_sq, promotion=promotion)
