"""Qt bridge exposing an AnalysisBoard through signals and slots."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from pgntree.board.controller import AnalysisBoard
from pgntree.tree.node import Path

_LOGGER = logging.getLogger(__name__)


def _coerce_path(path_obj: object) -> Path | None:
    if not isinstance(path_obj, (list, tuple)):
        return None
    if not all(isinstance(index, int) and not isinstance(index, bool) for index in path_obj):
        return None
    return tuple(path_obj)


class AnalysisBridge(QObject):
    """GUI-thread adapter: board callbacks become Qt signals.

    ``pgn_changed`` carries the encoded PGN after every tree mutation,
    ``error_reported`` an :class:`~pgntree.errors.ErrorReport` for every
    rejected load and ``position_changed`` the current path and FEN.
    """

    pgn_changed = pyqtSignal(str)
    error_reported = pyqtSignal(object)
    position_changed = pyqtSignal(object, str)

    __slots__ = ("_board",)

    def __init__(
        self,
        board: AnalysisBoard | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._board = board if board is not None else AnalysisBoard()
        self._board.events.on_pgn_change.append(self.pgn_changed.emit)
        self._board.events.on_error.append(self.error_reported.emit)
        self._board.events.on_navigate.append(self._on_navigate)

    @property
    def board(self) -> AnalysisBoard:
        return self._board

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot()
    def start(self) -> None:
        self._board.start()

    @pyqtSlot(str, str, result=bool)
    @pyqtSlot(str, str, str, result=bool)
    def drop_piece(self, from_square: str, to_square: str, promotion: str = "") -> bool:
        return self._board.drop_piece(from_square, to_square, promotion or None)

    @pyqtSlot(str, result=bool)
    def play_move(self, move: str) -> bool:
        return self._board.play_move(move)

    @pyqtSlot(object, result=bool)
    def delete_at(self, path_obj: object) -> bool:
        path = _coerce_path(path_obj)
        if path is None:
            _LOGGER.debug("Ignoring delete with invalid path %r", path_obj)
            return False
        return self._board.delete_at(path)

    @pyqtSlot(object, result=bool)
    def promote_at(self, path_obj: object) -> bool:
        path = _coerce_path(path_obj)
        if path is None:
            _LOGGER.debug("Ignoring promotion with invalid path %r", path_obj)
            return False
        return self._board.promote_at(path)

    @pyqtSlot(str, result=bool)
    def set_comment(self, text: str) -> bool:
        return self._board.set_comment(text)

    @pyqtSlot(str, result=bool)
    def load_pgn(self, pgn_text: str) -> bool:
        return self._board.load_pgn(pgn_text)

    @pyqtSlot(str, result=bool)
    def load_starting_position(self, fen: str) -> bool:
        return self._board.load_starting_position(fen)

    @pyqtSlot(object, result=bool)
    def navigate(self, path_obj: object) -> bool:
        path = _coerce_path(path_obj)
        if path is None:
            _LOGGER.debug("Ignoring navigation to invalid path %r", path_obj)
            return False
        return self._board.navigate(path)

    @pyqtSlot(result=bool)
    def go_back(self) -> bool:
        return self._board.go_back()

    @pyqtSlot(result=bool)
    def go_forward(self) -> bool:
        return self._board.go_forward()

    @pyqtSlot(result=bool)
    def go_to_start(self) -> bool:
        return self._board.go_to_start()

    @pyqtSlot(result=bool)
    def go_to_end(self) -> bool:
        return self._board.go_to_end()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _on_navigate(self, path: Path, fen: str) -> None:
        self.position_changed.emit(path, fen)
