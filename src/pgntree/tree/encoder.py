"""Tree → PGN text.

For every node the main continuation is written inline, then each variation
in rank order, fully expanded and parenthesised, then the main line goes on.
This is the exact inverse of the decoder's tree-building rule.
"""

from __future__ import annotations

import re

from pgntree.core.notation.pgn import format_tag_line
from pgntree.core.rules import STARTING_FEN
from pgntree.tree.node import GameTree, Node

_RESULT_SUFFIX_RE = re.compile(r"(?:1-0|0-1|1/2-1/2|\*)$")


def encode(tree: GameTree, default_fen: str = STARTING_FEN) -> str:
    """Serialise *tree* as a single PGN game.

    A ``FEN`` header is written only when the tree does not start from
    *default_fen*.  The move text ends in the tree's result marker; a tree
    without moves encodes as ``" *"``.
    """
    movetext = encode_movetext(tree.root)
    if not movetext:
        body = f" {tree.result}"
    elif _RESULT_SUFFIX_RE.search(movetext):
        body = movetext
    else:
        body = f"{movetext} {tree.result}"

    if tree.starting_fen != default_fen:
        return f"{format_tag_line('FEN', tree.starting_fen)}\n\n{body}"
    return body


def encode_movetext(node: Node) -> str:
    """Movetext for everything below *node*, without a result token."""
    return "".join(_line_parts(node)).strip()


def _line_parts(node: Node) -> list[str]:
    # Iterates along main continuations; recursion only enters variations.
    parts: list[str] = []
    while node.children:
        main, *variations = node.children
        if main.is_white_move:
            parts.append(f"{main.move_number}. ")
        parts.append(_move_text(main))
        for variation in variations:
            parts.append(f"({_variation_text(variation)}) ")
        node = main
    return parts


def _variation_text(node: Node) -> str:
    # Only a variation starting on black's move carries its number.
    prefix = "" if node.is_white_move else f"{node.move_number}... "
    return "".join([prefix, _move_text(node), *_line_parts(node)]).strip()


def _move_text(node: Node) -> str:
    if not node.comment:
        return f"{node.san} "
    # PGN comments cannot contain a closing brace.
    safe_comment = node.comment.replace("}", "]")
    return f"{node.san} {{ {safe_comment} }} "
