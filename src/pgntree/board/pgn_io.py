"""PGN import/export helpers for an :class:`AnalysisBoard`."""

from __future__ import annotations

import logging
from pathlib import Path

from pgntree.board.controller import AnalysisBoard

_LOGGER = logging.getLogger(__name__)


def load_pgn_file(
    board: AnalysisBoard, file_path: Path, starting_fen: str | None = None
) -> bool:
    """Load a PGN game from disk into *board*.

    Decode failures are reported through the board's error callbacks and
    return ``False``; I/O errors propagate.
    """
    pgn_text = file_path.read_text(encoding="utf-8")
    loaded = board.load_pgn(pgn_text, starting_fen=starting_fen)
    if loaded:
        _LOGGER.info("Loaded PGN from %s", file_path)
    return loaded


def save_pgn_file(board: AnalysisBoard, file_path: Path) -> Path:
    """Write the board's current PGN to *file_path* (``.pgn`` enforced)."""
    save_path = file_path
    if save_path.suffix.lower() != ".pgn":
        save_path = save_path.with_suffix(".pgn")

    save_path.write_text(f"{board.pgn.strip()}\n", encoding="utf-8")
    _LOGGER.info("Saved PGN to %s", save_path)
    return save_path
