"""AnalysisBoard — the single owner of a game tree and its navigation state.

Translates user actions (drop a piece, load a PGN, edit a comment, delete or
promote a line) into tree edits and re-encodes the PGN after every
successful mutation.  Emits events via simple callbacks so the UI / tests can
subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from pgntree.core.rules import ChessRules, CoordinateMove, IRules, MoveSpec
from pgntree.errors import (
    ErrorReport,
    IllegalMove,
    InvalidFen,
    PathOutOfRange,
    PgnDecodeError,
    RootDeletion,
)
from pgntree.settings import BoardSettings
from pgntree.tree import editor
from pgntree.tree.decoder import decode
from pgntree.tree.encoder import encode
from pgntree.tree.node import ROOT_PATH, GameTree, Node, Path
from pgntree.tree.paths import (
    as_path,
    mainline_path,
    parent_path,
    remap_after_deletion,
    remap_after_promotion,
    resolve,
)

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

PgnChangeCallback = Callable[[str], None]  # encoded pgn
ErrorCallback = Callable[[ErrorReport], None]
NavigateCallback = Callable[[Path, str], None]  # path, fen


@dataclass
class BoardEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_pgn_change: list[PgnChangeCallback] = field(default_factory=list)
    on_error: list[ErrorCallback] = field(default_factory=list)
    on_navigate: list[NavigateCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class AnalysisBoard:
    """Owns one game tree, the current path and the comment buffer.

    Edit entry points return ``False`` when the action is rejected (illegal
    move, bad path, root deletion) and leave every piece of state untouched.
    Load entry points report failures through ``events.on_error``.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).
    """

    __slots__ = (
        "_settings",
        "_rules",
        "_tree",
        "_starting_fen",
        "_path",
        "_comment",
        "_pgn",
        "events",
    )

    def __init__(
        self,
        settings: BoardSettings | None = None,
        rules: IRules | None = None,
    ) -> None:
        self._settings = settings if settings is not None else BoardSettings()
        self._rules = (
            rules
            if rules is not None
            else ChessRules(promotion=self._settings.promotion_piece_type)
        )
        self._tree = GameTree(self._rules.default_fen())
        self._starting_fen: str | None = None
        self._path: Path = ROOT_PATH
        self._comment = ""
        self._pgn = encode(self._tree, self._rules.default_fen())
        self.events = BoardEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def settings(self) -> BoardSettings:
        return self._settings

    @property
    def tree(self) -> GameTree:
        return self._tree

    @property
    def starting_fen(self) -> str | None:
        """Explicit starting position PGN loads are checked against, if any."""
        return self._starting_fen

    @property
    def path(self) -> Path:
        return self._path

    @property
    def current_node(self) -> Node:
        return resolve(self._tree, self._path)

    @property
    def fen(self) -> str:
        return self.current_node.fen

    @property
    def comment(self) -> str:
        """Comment buffer: what a comment box shows for the current node."""
        return self._comment

    @property
    def pgn(self) -> str:
        """PGN text as of the last tree mutation."""
        return self._pgn

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> None:
        """Apply the configured starting position / PGN and publish the PGN.

        An invalid starting FEN is reported and the default position is used;
        an invalid starting PGN is reported and the (valid) starting position
        is kept.
        """
        starting_fen = self._settings.starting_fen
        if starting_fen and not self._rules.validate_fen(starting_fen):
            self._emit_error(
                InvalidFen(
                    "The starting position is not a valid FEN", fen=starting_fen
                ).to_report()
            )
            starting_fen = None

        self._starting_fen = starting_fen or None
        self._replace_tree(GameTree(starting_fen or self._rules.default_fen()))

        if self._settings.starting_pgn:
            self.load_pgn(self._settings.starting_pgn)

    # ── Moves ────────────────────────────────────────────────────────────

    def play_move(self, move: MoveSpec) -> bool:
        """Play *move* from the current node. Returns True if legal."""
        try:
            new_path, is_new_branch = editor.insert_move(
                self._tree, self._path, move, self._rules
            )
        except IllegalMove as exc:
            _LOGGER.debug("Rejected move: %s", exc)
            return False

        self._set_path(new_path)
        if is_new_branch:
            self._publish_pgn()
        return True

    def drop_piece(
        self, from_square: str, to_square: str, promotion: str | None = None
    ) -> bool:
        """Drag-and-drop entry point: play a from/to square move."""
        return self.play_move(CoordinateMove(from_square, to_square, promotion))

    # ── Tree edits ───────────────────────────────────────────────────────

    def delete_at(self, path: Sequence[int]) -> bool:
        """Delete the node at *path* and its subtree."""
        try:
            editor.delete_subtree(self._tree, path)
        except (RootDeletion, PathOutOfRange) as exc:
            _LOGGER.debug("Rejected delete: %s", exc)
            return False

        remapped = remap_after_deletion(self._path, path)
        self._set_path(remapped if remapped is not None else parent_path(path))
        self._publish_pgn()
        return True

    def promote_at(self, path: Sequence[int]) -> bool:
        """Promote the node at *path* to the main continuation of its parent."""
        try:
            new_path = editor.promote_variation(self._tree, path)
        except PathOutOfRange as exc:
            _LOGGER.debug("Rejected promotion: %s", exc)
            return False

        if new_path != as_path(path):
            self._set_path(remap_after_promotion(self._path, path))
            self._publish_pgn()
        return True

    def set_comment(self, text: str, path: Sequence[int] | None = None) -> bool:
        """Set the comment of the node at *path* (current node by default).

        The root carries no move, so commenting it only updates the buffer.
        """
        target = self._path if path is None else as_path(path)
        try:
            node = resolve(self._tree, target)
        except PathOutOfRange as exc:
            _LOGGER.debug("Rejected comment: %s", exc)
            return False

        if target == self._path:
            self._comment = text
        if node.is_root:
            return True

        editor.set_comment(self._tree, target, text)
        self._publish_pgn()
        return True

    # ── Loading ──────────────────────────────────────────────────────────

    def load_pgn(self, pgn_text: str, starting_fen: str | None = None) -> bool:
        """Replace the tree with the game in *pgn_text*.

        *starting_fen* defaults to the board's explicit starting position
        (from settings or :meth:`load_starting_position`), so a ``FEN`` header
        that disagrees with it is reported as a conflict.  On failure an
        :class:`ErrorReport` is emitted and nothing changes.
        """
        explicit_fen = starting_fen if starting_fen is not None else self._starting_fen
        try:
            tree = decode(
                pgn_text,
                starting_fen=explicit_fen,
                rules=self._rules,
                limits=self._settings.limits,
            )
        except PgnDecodeError as exc:
            _LOGGER.warning("PGN rejected (%s): %s", exc.error_type, exc.message)
            self._emit_error(exc.to_report())
            return False

        self._starting_fen = explicit_fen
        self._replace_tree(tree)
        return True

    def load_starting_position(self, fen: str) -> bool:
        """Start a new, empty game from *fen*."""
        fen = fen.strip()
        if not self._rules.validate_fen(fen):
            _LOGGER.warning("FEN rejected: %s", fen)
            self._emit_error(
                InvalidFen("The starting position is not a valid FEN", fen=fen).to_report()
            )
            return False

        self._starting_fen = fen
        self._replace_tree(GameTree(fen))
        return True

    # ── Navigation ───────────────────────────────────────────────────────

    def navigate(self, path: Sequence[int]) -> bool:
        """Make the node at *path* current."""
        try:
            resolve(self._tree, path)
        except PathOutOfRange as exc:
            _LOGGER.debug("Rejected navigation: %s", exc)
            return False
        self._set_path(as_path(path))
        return True

    def go_back(self) -> bool:
        """Step to the parent node. Returns False at the root."""
        if not self._path:
            return False
        return self.navigate(self._path[:-1])

    def go_forward(self) -> bool:
        """Step along the main continuation. Returns False at a leaf."""
        if not self.current_node.children:
            return False
        return self.navigate((*self._path, 0))

    def go_to_start(self) -> bool:
        return self.navigate(ROOT_PATH)

    def go_to_end(self) -> bool:
        """Follow main continuations to the end of the current line."""
        return self.navigate(mainline_path(self._tree, self._path))

    # ── Internal helpers ─────────────────────────────────────────────────

    def _set_path(self, path: Path) -> None:
        node = resolve(self._tree, path)
        self._path = path
        self._comment = node.comment
        for cb in self.events.on_navigate:
            cb(path, node.fen)

    def _replace_tree(self, tree: GameTree) -> None:
        self._tree = tree
        self._set_path(ROOT_PATH)
        self._publish_pgn()

    def _publish_pgn(self) -> None:
        self._pgn = encode(self._tree, self._rules.default_fen())
        for cb in self.events.on_pgn_change:
            cb(self._pgn)

    def _emit_error(self, report: ErrorReport) -> None:
        for cb in self.events.on_error:
            cb(report)
