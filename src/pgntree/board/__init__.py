"""Board layer — the embedding surface over one game tree.

Quick start::

    from pgntree.board import AnalysisBoard

    board = AnalysisBoard()
    board.events.on_pgn_change.append(print)
    board.start()                 # " *"
    board.drop_piece("e2", "e4")  # "1. e4 *"
"""

from pgntree.board.controller import AnalysisBoard, BoardEvents
from pgntree.board.pgn_io import load_pgn_file, save_pgn_file

__all__ = [
    "AnalysisBoard",
    "BoardEvents",
    "load_pgn_file",
    "save_pgn_file",
]
