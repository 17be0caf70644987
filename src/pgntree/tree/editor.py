"""Path-addressed tree edits: insert, delete, promote, comment.

Every function either applies its change completely or raises before
touching the tree.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pgntree.core.rules import ChessRules, IRules, MoveSpec
from pgntree.errors import PathOutOfRange, RootDeletion
from pgntree.tree.node import GameTree, Path
from pgntree.tree.paths import as_path, parent_path, resolve

_LOGGER = logging.getLogger(__name__)


def insert_move(
    tree: GameTree,
    path: Sequence[int],
    move: MoveSpec,
    rules: IRules | None = None,
) -> tuple[Path, bool]:
    """Play *move* from the node at *path*.

    Returns ``(new_path, is_new_branch)``.  A move whose SAN already exists
    among the node's children is not duplicated: the existing child's path is
    returned with ``is_new_branch=False``.

    Raises:
        PathOutOfRange: *path* does not exist.
        IllegalMove: the move is not legal in the node's position.
    """
    rules = rules if rules is not None else ChessRules()
    parent = resolve(tree, path)
    applied = rules.apply_move(parent.fen, move)

    existing = parent.child_by_san(applied.san)
    if existing is not None:
        return (*path, existing), False

    parent.children.append(tree.new_node(parent, applied.san, applied.fen))
    new_path = (*path, len(parent.children) - 1)
    _LOGGER.debug("Inserted %s at %s", applied.san, list(new_path))
    return new_path, True


def delete_subtree(tree: GameTree, path: Sequence[int]) -> None:
    """Remove the node at *path* together with all of its descendants."""
    if not path:
        raise RootDeletion()

    parent = resolve(tree, parent_path(path))
    index = path[-1]
    if not 0 <= index < len(parent.children):
        raise PathOutOfRange(as_path(path), len(path) - 1)

    removed = parent.children.pop(index)
    _LOGGER.debug("Deleted %s at %s", removed.san, list(path))


def promote_variation(tree: GameTree, path: Sequence[int]) -> Path:
    """Move the node at *path* to rank 0 among its siblings.

    The remaining siblings keep their relative order, each shifted one rank
    down.  Promoting a node that already is the main continuation (or the
    root) changes nothing.
    """
    node = resolve(tree, path)
    if not path or path[-1] == 0:
        return as_path(path)

    parent = resolve(tree, parent_path(path))
    parent.children.insert(0, parent.children.pop(path[-1]))
    _LOGGER.debug("Promoted %s from rank %d", node.san, path[-1])
    return (*path[:-1], 0)


def set_comment(tree: GameTree, path: Sequence[int], text: str) -> None:
    """Overwrite the comment of the node at *path*."""
    resolve(tree, path).comment = text
