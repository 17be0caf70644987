"""Game tree data model: plies as nodes, variations as ranked children."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass, field

from pgntree.core.rules import STARTING_FEN

Path = tuple[int, ...]

ROOT_PATH: Path = ()
ROOT_PLY = -1


@dataclass(slots=True, eq=False)
class Node:
    """One ply of the game.

    ``children[0]`` is the main continuation; ``children[1:]`` are
    alternatives to it, ranked by insertion/promotion order.  ``fen`` is the
    position *after* ``san``; for the root it is the starting position.
    """

    id: int
    san: str | None
    fen: str
    ply: int
    comment: str = ""
    children: list[Node] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.san is None

    @property
    def is_white_move(self) -> bool:
        return self.ply % 2 == 0

    @property
    def move_number(self) -> int:
        """Full-move number this ply belongs to (1-based)."""
        return self.ply // 2 + 1

    @property
    def main_child(self) -> Node | None:
        return self.children[0] if self.children else None

    @property
    def variations(self) -> list[Node]:
        return self.children[1:]

    def child_by_san(self, san: str) -> int | None:
        """Index of the child played as *san*, or ``None``."""
        for index, child in enumerate(self.children):
            if child.san == san:
                return index
        return None

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants, depth first, in rank order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        label = self.san if self.san is not None else "<root>"
        return f"Node(id={self.id}, {label}, ply={self.ply}, children={len(self.children)})"


class GameTree:
    """A single game: a root at the starting position plus its move tree.

    Node ids come from a counter owned by the tree, so they are unique within
    one tree and never reused after deletion.  ``result`` is the game's
    termination marker (``"*"`` while the game is unfinished).
    """

    __slots__ = ("_ids", "result", "root")

    def __init__(self, starting_fen: str = STARTING_FEN, result: str = "*") -> None:
        self._ids = itertools.count()
        self.result = result
        self.root = Node(id=next(self._ids), san=None, fen=starting_fen, ply=ROOT_PLY)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def starting_fen(self) -> str:
        return self.root.fen

    @property
    def is_empty(self) -> bool:
        return not self.root.children

    # ── Construction ─────────────────────────────────────────────────────

    def new_node(self, parent: Node, san: str, fen: str, comment: str = "") -> Node:
        """Create (but do not attach) a child of *parent*."""
        return Node(
            id=next(self._ids),
            san=san,
            fen=fen,
            ply=parent.ply + 1,
            comment=comment,
        )

    def __iter__(self) -> Iterator[Node]:
        return self.root.walk()

    def __len__(self) -> int:
        """Number of moves in the tree (the root is not counted)."""
        return sum(1 for _ in self.root.walk()) - 1

    def __repr__(self) -> str:
        return (
            f"GameTree(moves={len(self)}, result={self.result!r}, "
            f"starting_fen={self.starting_fen!r})"
        )
