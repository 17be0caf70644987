"""Render-ready flattening of a game tree for move panels."""

from __future__ import annotations

from dataclasses import dataclass

from pgntree.tree.node import ROOT_PATH, GameTree, Node, Path
from pgntree.tree.paths import child_path, is_mainline


@dataclass(slots=True, frozen=True)
class MoveToken:
    """One clickable move in a move list.

    ``label`` is the move number a move list shows in front of the move
    (``"3."``, ``"3..."`` or empty).  Variation starts are always numbered,
    unlike in PGN.  ``depth`` counts enclosing variations.
    """

    path: Path
    san: str
    label: str
    depth: int
    comment: str
    is_mainline: bool


def mainline(tree: GameTree) -> list[Node]:
    """The index-0 chain below the root."""
    nodes: list[Node] = []
    node = tree.root
    while node.children:
        node = node.children[0]
        nodes.append(node)
    return nodes


def move_tokens(tree: GameTree) -> list[MoveToken]:
    """Flatten *tree* in the same order the PGN encoder writes it."""
    tokens: list[MoveToken] = []
    _collect_line(tree.root, ROOT_PATH, 0, tokens)
    return tokens


def _collect_line(node: Node, path: Path, depth: int, out: list[MoveToken]) -> None:
    while node.children:
        main, *variations = node.children
        main_path = child_path(path, 0)
        label = f"{main.move_number}." if main.is_white_move else ""
        out.append(_token(main, main_path, label, depth))

        for rank, variation in enumerate(variations, start=1):
            var_path = child_path(path, rank)
            suffix = "." if variation.is_white_move else "..."
            out.append(
                _token(variation, var_path, f"{variation.move_number}{suffix}", depth + 1)
            )
            _collect_line(variation, var_path, depth + 1, out)

        node, path = main, main_path


def _token(node: Node, path: Path, label: str, depth: int) -> MoveToken:
    assert node.san is not None
    return MoveToken(
        path=path,
        san=node.san,
        label=label,
        depth=depth,
        comment=node.comment,
        is_mainline=is_mainline(path),
    )
