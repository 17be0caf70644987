"""PGN text → tree.

Decoding validates everything before handing back a tree: the caller either
gets a complete new :class:`GameTree` or an exception, never a partial tree.
"""

from __future__ import annotations

import logging

from pgntree.core.notation.models import ParsedPgn, PgnMoveAst
from pgntree.core.notation.pgn import PgnSyntaxError, parse_pgn_game
from pgntree.core.rules import ChessRules, IRules
from pgntree.errors import (
    FenPgnConflict,
    IllegalMove,
    InvalidFen,
    InvalidFenInPgn,
    InvalidPgn,
    InvalidPgnMoves,
    NoMovesParsed,
    PgnParseError,
)
from pgntree.settings import CodecLimits
from pgntree.tree.node import GameTree, Node

_LOGGER = logging.getLogger(__name__)


def decode(
    pgn_text: str,
    starting_fen: str | None = None,
    rules: IRules | None = None,
    limits: CodecLimits | None = None,
) -> GameTree:
    """Build a fresh game tree from *pgn_text*.

    Args:
        pgn_text: A single PGN game.
        starting_fen: Optional explicit starting position.  When the PGN has
            a ``FEN`` header the two must be identical strings.
        rules: Rules adapter (python-chess by default).
        limits: Decoder limits (variation nesting depth).

    Raises:
        PgnParseError: the text is not PGN, or holds no moves.
        InvalidFenInPgn: the ``FEN`` header is not a valid position.
        FenPgnConflict: *starting_fen* disagrees with the ``FEN`` header.
        InvalidFen: *starting_fen* is used and is not a valid position.
        InvalidPgnMoves: a move is illegal where it is played.
        InvalidPgn: variations are nested deeper than *limits* allow.
    """
    rules = rules if rules is not None else ChessRules()
    limits = limits if limits is not None else CodecLimits()

    try:
        parsed = parse_pgn_game(pgn_text)
    except PgnSyntaxError as exc:
        raise PgnParseError(
            f"Failed to parse PGN: {exc}", error=str(exc), pgn=pgn_text
        ) from exc
    if parsed is None or not parsed.moves:
        raise NoMovesParsed("No moves found in PGN", pgn=pgn_text)

    start = _effective_starting_fen(parsed, starting_fen, rules, pgn_text)

    first = parsed.moves[0].notation
    try:
        rules.apply_move(start, first)
    except IllegalMove as exc:
        raise InvalidPgnMoves(
            "The PGN moves are not valid from the starting position",
            fen=start,
            move=first,
            pgn=pgn_text,
        ) from exc

    tree = GameTree(start, result=parsed.result_token)
    builder = _TreeBuilder(tree, rules, limits, pgn_text)
    builder.build_line(tree.root, parsed.moves, depth=0)
    _LOGGER.debug("Decoded PGN with %d moves (%s)", len(tree), tree.result)
    return tree


def _effective_starting_fen(
    parsed: ParsedPgn,
    starting_fen: str | None,
    rules: IRules,
    pgn_text: str,
) -> str:
    header_fen = parsed.tags.get("FEN")
    if header_fen is not None:
        if not rules.validate_fen(header_fen):
            raise InvalidFenInPgn(
                "The FEN header in the PGN is not a valid position",
                fen=header_fen,
                pgn=pgn_text,
            )
        if starting_fen is not None and starting_fen != header_fen:
            raise FenPgnConflict(
                "The starting position conflicts with the FEN header in the PGN",
                provided_fen=starting_fen,
                pgn_fen=header_fen,
                pgn=pgn_text,
            )
        return header_fen

    if starting_fen is not None:
        if not rules.validate_fen(starting_fen):
            raise InvalidFen("The starting position is not a valid FEN", fen=starting_fen)
        return starting_fen
    return rules.default_fen()


class _TreeBuilder:
    """Depth-first AST walk that appends moves behind a moving line tail."""

    __slots__ = ("tree", "_rules", "_limits", "_pgn_text")

    def __init__(
        self, tree: GameTree, rules: IRules, limits: CodecLimits, pgn_text: str
    ) -> None:
        self.tree = tree
        self._rules = rules
        self._limits = limits
        self._pgn_text = pgn_text

    def build_line(self, tail: Node, moves: list[PgnMoveAst], depth: int) -> None:
        if depth > self._limits.max_variation_depth:
            raise InvalidPgn(
                "PGN variations are nested too deeply",
                max_variation_depth=self._limits.max_variation_depth,
                pgn=self._pgn_text,
            )

        for ast in moves:
            try:
                applied = self._rules.apply_move(tail.fen, ast.notation)
            except IllegalMove as exc:
                raise InvalidPgnMoves(
                    f"Illegal move in PGN: {ast.notation}",
                    fen=tail.fen,
                    move=ast.notation,
                    pgn=self._pgn_text,
                ) from exc

            node = self.tree.new_node(tail, applied.san, applied.fen, ast.comment)
            tail.children.append(node)
            # Alternatives to this move hang off the position before it.
            for variation in ast.variations:
                self.build_line(tail, variation, depth + 1)
            tail = node
