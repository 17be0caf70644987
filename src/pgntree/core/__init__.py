"""Core collaborators — chess rules adapter and PGN grammar parser.

Quick start::

    from pgntree.core import ChessRules, STARTING_FEN, parse_pgn_game

    applied = ChessRules().apply_move(STARTING_FEN, "e4")
    parsed = parse_pgn_game("1. e4 e5 (1... c5) *")
"""

from pgntree.core.notation import ParsedPgn, PgnMoveAst, PgnSyntaxError, parse_pgn_game
from pgntree.core.rules import (
    STARTING_FEN,
    AppliedMove,
    ChessRules,
    CoordinateMove,
    IRules,
    MoveSpec,
)

__all__ = [
    # Rules
    "STARTING_FEN",
    "AppliedMove",
    "ChessRules",
    "CoordinateMove",
    "IRules",
    "MoveSpec",
    # Notation
    "ParsedPgn",
    "PgnMoveAst",
    "PgnSyntaxError",
    "parse_pgn_game",
]
