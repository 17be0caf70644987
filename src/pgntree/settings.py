"""User-tunable settings for an analysis board."""

from __future__ import annotations

from dataclasses import dataclass, field

import chess

_PROMOTION_PIECES = {"q", "r", "b", "n"}


@dataclass(slots=True, frozen=True)
class CodecLimits:
    """Limits applied while decoding PGN into a tree."""

    max_variation_depth: int = 64

    def __post_init__(self) -> None:
        if self.max_variation_depth < 0:
            raise ValueError("max_variation_depth must be >= 0")


@dataclass
class BoardSettings:
    """All configuration an embedding application can hand to the board."""

    # Initial inputs (both optional; conflict rules apply when both are set)
    starting_fen: str | None = None
    starting_pgn: str | None = None

    # Drag-and-drop: piece used when a pawn reaches the last rank unannotated
    promotion_piece: str = "q"

    # Decoder
    limits: CodecLimits = field(default_factory=CodecLimits)

    def __post_init__(self) -> None:
        self.promotion_piece = self.promotion_piece.lower()
        if self.promotion_piece not in _PROMOTION_PIECES:
            raise ValueError(f"Unsupported promotion piece: {self.promotion_piece!r}")

    @property
    def promotion_piece_type(self) -> chess.PieceType:
        return chess.PIECE_SYMBOLS.index(self.promotion_piece)
