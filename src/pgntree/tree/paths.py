"""Path addressing: root-relative sequences of child indices."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from pgntree.core.rules import ChessRules, IRules
from pgntree.errors import IllegalMove, IllegalReplay, PathOutOfRange
from pgntree.tree.node import ROOT_PATH, GameTree, Node, Path


def as_path(path: Sequence[int]) -> Path:
    return tuple(path)


def resolve(tree: GameTree, path: Sequence[int]) -> Node:
    """Walk ``children[index]`` for every index in *path*."""
    node = tree.root
    for depth, index in enumerate(path):
        if not 0 <= index < len(node.children):
            raise PathOutOfRange(as_path(path), depth)
        node = node.children[index]
    return node


def iter_nodes(tree: GameTree, path: Sequence[int]) -> Iterator[Node]:
    """Yield every node on *path* after the root, in order."""
    node = tree.root
    for depth, index in enumerate(path):
        if not 0 <= index < len(node.children):
            raise PathOutOfRange(as_path(path), depth)
        node = node.children[index]
        yield node


def position_at(
    tree: GameTree,
    path: Sequence[int],
    starting_fen: str | None = None,
    rules: IRules | None = None,
) -> str:
    """Replay the moves on *path* from the starting position and return the FEN.

    Unlike :func:`resolve` this does not trust the stored positions; a move
    that cannot be replayed raises :class:`IllegalReplay`.
    """
    rules = rules if rules is not None else ChessRules()
    fen = starting_fen if starting_fen is not None else tree.starting_fen
    for depth, node in enumerate(iter_nodes(tree, path)):
        assert node.san is not None
        try:
            fen = rules.apply_move(fen, node.san).fen
        except IllegalMove as exc:
            raise IllegalReplay(as_path(path[: depth + 1]), node.san) from exc
    return fen


# ── Path arithmetic ──────────────────────────────────────────────────────────


def parent_path(path: Sequence[int]) -> Path:
    if not path:
        raise PathOutOfRange(ROOT_PATH, 0)
    return as_path(path[:-1])


def child_path(path: Sequence[int], index: int) -> Path:
    return (*path, index)


def is_mainline(path: Sequence[int]) -> bool:
    """True when every step of *path* follows the main continuation."""
    return all(index == 0 for index in path)


def mainline_path(tree: GameTree, path: Sequence[int] = ROOT_PATH) -> Path:
    """Extend *path* along main continuations to the end of its line."""
    node = resolve(tree, path)
    extended = list(path)
    while node.children:
        node = node.children[0]
        extended.append(0)
    return tuple(extended)


def path_of(tree: GameTree, target: Node) -> Path:
    """Locate *target* (by identity) and return its path."""
    stack: list[tuple[Node, Path]] = [(tree.root, ROOT_PATH)]
    while stack:
        node, path = stack.pop()
        if node is target:
            return path
        for index, child in enumerate(node.children):
            stack.append((child, (*path, index)))
    raise LookupError(f"{target!r} is not part of this tree")


def remap_after_promotion(path: Sequence[int], promoted: Sequence[int]) -> Path:
    """Where *path* points after the node at *promoted* moved to rank 0."""
    if not promoted:
        return as_path(path)
    depth = len(promoted) - 1
    if len(path) <= depth or tuple(path[:depth]) != tuple(promoted[:depth]):
        return as_path(path)

    rank = promoted[-1]
    index = path[depth]
    if index == rank:
        index = 0
    elif index < rank:
        index += 1
    return (*path[:depth], index, *path[depth + 1 :])


def remap_after_deletion(path: Sequence[int], deleted: Sequence[int]) -> Path | None:
    """Where *path* points after the subtree at *deleted* was removed.

    Returns ``None`` when *path* addressed a node inside the removed subtree.
    """
    if not deleted:
        return None
    depth = len(deleted) - 1
    if len(path) <= depth or tuple(path[:depth]) != tuple(deleted[:depth]):
        return as_path(path)

    index = path[depth]
    if index == deleted[-1]:
        return None
    if index > deleted[-1]:
        index -= 1
    return (*path[:depth], index, *path[depth + 1 :])
