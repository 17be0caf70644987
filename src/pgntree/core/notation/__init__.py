"""Notation package: PGN grammar parsing and tag formatting."""

from pgntree.core.notation.models import ParsedPgn, PgnMoveAst
from pgntree.core.notation.pgn import (
    RESULT_TOKENS,
    PgnSyntaxError,
    format_tag_line,
    is_san_token,
    parse_pgn_game,
)

__all__ = [
    "RESULT_TOKENS",
    "ParsedPgn",
    "PgnMoveAst",
    "PgnSyntaxError",
    "format_tag_line",
    "is_san_token",
    "parse_pgn_game",
]
