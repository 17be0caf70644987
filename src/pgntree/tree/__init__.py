"""Game tree layer — model, path addressing, edits and the PGN codec.

Quick start::

    from pgntree.tree import GameTree, insert_move, encode

    tree = GameTree()
    path, _ = insert_move(tree, (), "e4")
    insert_move(tree, path, "e5")
    encode(tree)  # "1. e4 e5 *"
"""

from pgntree.tree.decoder import decode
from pgntree.tree.editor import delete_subtree, insert_move, promote_variation, set_comment
from pgntree.tree.encoder import encode, encode_movetext
from pgntree.tree.listing import MoveToken, mainline, move_tokens
from pgntree.tree.node import ROOT_PATH, GameTree, Node, Path
from pgntree.tree.paths import (
    is_mainline,
    mainline_path,
    parent_path,
    path_of,
    position_at,
    remap_after_deletion,
    remap_after_promotion,
    resolve,
)

__all__ = [
    # Model
    "GameTree",
    "Node",
    "Path",
    "ROOT_PATH",
    # Paths
    "is_mainline",
    "mainline_path",
    "parent_path",
    "path_of",
    "position_at",
    "remap_after_deletion",
    "remap_after_promotion",
    "resolve",
    # Edits
    "delete_subtree",
    "insert_move",
    "promote_variation",
    "set_comment",
    # Codec
    "decode",
    "encode",
    "encode_movetext",
    # Listing
    "MoveToken",
    "mainline",
    "move_tokens",
]
