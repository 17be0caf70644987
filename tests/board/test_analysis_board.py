"""Tests for AnalysisBoard, the controller embedding applications talk to."""

from __future__ import annotations

import pytest

from pgntree.board import AnalysisBoard
from pgntree.core.rules import STARTING_FEN
from pgntree.errors import ErrorReport, ErrorType
from pgntree.settings import BoardSettings, CodecLimits

PROMOTION_FEN = "8/4P3/8/8/8/8/k7/4K3 w - - 0 1"


class _Recorder:
    """Collects everything an AnalysisBoard publishes."""

    def __init__(self, board: AnalysisBoard) -> None:
        self.pgns: list[str] = []
        self.errors: list[ErrorReport] = []
        self.positions: list[tuple[tuple[int, ...], str]] = []
        board.events.on_pgn_change.append(self.pgns.append)
        board.events.on_error.append(self.errors.append)
        board.events.on_navigate.append(
            lambda path, fen: self.positions.append((path, fen))
        )


def _started(settings: BoardSettings | None = None) -> tuple[AnalysisBoard, _Recorder]:
    board = AnalysisBoard(settings)
    recorder = _Recorder(board)
    board.start()
    return board, recorder


class TestStart:
    def test_empty_game(self) -> None:
        board, recorder = _started()
        assert recorder.pgns == [" *"]
        assert recorder.errors == []
        assert board.path == ()
        assert board.fen == STARTING_FEN

    def test_pgn_is_available_before_start(self) -> None:
        assert AnalysisBoard().pgn == " *"

    def test_custom_starting_fen(self, custom_fen: str) -> None:
        board, recorder = _started(BoardSettings(starting_fen=custom_fen))
        assert recorder.pgns == [f'[FEN "{custom_fen}"]\n\n *']
        assert board.fen == custom_fen

    def test_starting_pgn(self) -> None:
        board, recorder = _started(BoardSettings(starting_pgn="1. e4 e5 (1... c5) *"))
        assert recorder.pgns[-1] == "1. e4 e5 (1... c5) *"
        assert len(board.tree) == 3
        assert board.path == ()

    def test_matching_fen_and_pgn(self, custom_fen: str) -> None:
        settings = BoardSettings(
            starting_fen=custom_fen,
            starting_pgn=f'[FEN "{custom_fen}"]\n\n1. e3 e6 *',
        )
        board, recorder = _started(settings)
        assert recorder.errors == []
        assert board.pgn == f'[FEN "{custom_fen}"]\n\n1. e3 e6 *'

    def test_conflicting_fen_and_pgn(self, custom_fen: str) -> None:
        pgn = f'[FEN "{custom_fen}"]\n\n1. e3 e6 *'
        board, recorder = _started(
            BoardSettings(starting_fen=STARTING_FEN, starting_pgn=pgn)
        )
        assert [report.as_dict() for report in recorder.errors] == [
            {
                "type": "fen_pgn_conflict",
                "message": "The starting position conflicts with the FEN header in the PGN",
                "details": {
                    "provided_fen": STARTING_FEN,
                    "pgn_fen": custom_fen,
                    "pgn": pgn,
                },
            }
        ]
        assert board.pgn == " *"
        assert board.tree.is_empty

    def test_invalid_starting_fen_falls_back_to_default(self) -> None:
        board, recorder = _started(BoardSettings(starting_fen="not-a-fen"))
        assert [report.type for report in recorder.errors] == [ErrorType.INVALID_FEN]
        assert recorder.errors[0].details == {"fen": "not-a-fen"}
        assert board.fen == STARTING_FEN
        assert recorder.pgns == [" *"]

    def test_invalid_starting_pgn_keeps_position(self, custom_fen: str) -> None:
        board, recorder = _started(
            BoardSettings(starting_fen=custom_fen, starting_pgn="1. Nc3 *")
        )
        assert [report.type for report in recorder.errors] == [
            ErrorType.INVALID_PGN_MOVES
        ]
        assert board.fen == custom_fen
        assert board.tree.is_empty


class TestMoves:
    def test_drop_piece_publishes_pgn(self) -> None:
        board, recorder = _started()
        assert board.drop_piece("e2", "e4")
        assert recorder.pgns[-1] == "1. e4 *"
        assert board.path == (0,)

    def test_illegal_drop_changes_nothing(self) -> None:
        board, recorder = _started()
        assert not board.drop_piece("e2", "e5")
        assert recorder.pgns == [" *"]
        assert board.path == ()
        assert board.tree.is_empty

    def test_san_move(self) -> None:
        board, recorder = _started()
        assert board.play_move("Nf3")
        assert board.play_move("d5")
        assert recorder.pgns[-1] == "1. Nf3 d5 *"

    def test_second_move_at_same_node_opens_variation(self) -> None:
        board, recorder = _started()
        board.drop_piece("e2", "e4")
        board.go_back()
        board.drop_piece("d2", "d4")
        assert recorder.pgns[-1] == "1. e4 (d4) *"
        assert board.path == (1,)

    def test_duplicate_move_navigates_without_publishing(self) -> None:
        board, recorder = _started()
        board.drop_piece("e2", "e4")
        board.go_back()
        board.drop_piece("d2", "d4")
        published = len(recorder.pgns)

        board.go_back()
        assert board.drop_piece("d2", "d4")

        assert board.path == (1,)
        assert len(board.tree.root.children) == 2
        assert len(recorder.pgns) == published

    def test_move_emits_navigation(self) -> None:
        board, recorder = _started()
        board.drop_piece("e2", "e4")
        path, fen = recorder.positions[-1]
        assert path == (0,)
        assert fen == board.fen

    @pytest.mark.parametrize(
        ("settings", "promotion", "expected"),
        [
            (BoardSettings(), None, "e8=Q"),
            (BoardSettings(promotion_piece="n"), None, "e8=N"),
            (BoardSettings(), "r", "e8=R"),
        ],
    )
    def test_promotion(
        self, settings: BoardSettings, promotion: str | None, expected: str
    ) -> None:
        board = AnalysisBoard(settings)
        board.start()
        assert board.load_starting_position(PROMOTION_FEN)
        assert board.drop_piece("e7", "e8", promotion)
        assert board.current_node.san == expected


class TestComments:
    def test_comment_on_current_move(self) -> None:
        board, recorder = _started()
        board.drop_piece("e2", "e4")
        assert board.set_comment("Best by test")
        assert recorder.pgns[-1] == "1. e4 { Best by test } *"
        assert board.comment == "Best by test"

    def test_comment_survives_new_variation(self) -> None:
        board, recorder = _started()
        board.drop_piece("e2", "e4")
        board.set_comment("Best by test")
        board.go_back()
        board.drop_piece("d2", "d4")
        assert recorder.pgns[-1] == "1. e4 { Best by test } (d4) *"

    def test_buffer_follows_navigation(self) -> None:
        board, _ = _started()
        board.drop_piece("e2", "e4")
        board.set_comment("Best by test")
        board.drop_piece("e7", "e5")
        assert board.comment == ""
        board.go_back()
        assert board.comment == "Best by test"

    def test_comment_by_path(self) -> None:
        board, recorder = _started()
        board.play_move("e4")
        board.play_move("e5")
        assert board.set_comment("Symmetry", path=(0, 0))
        assert recorder.pgns[-1] == "1. e4 e5 { Symmetry } *"

    def test_root_comment_is_not_encoded(self) -> None:
        board, recorder = _started()
        published = len(recorder.pgns)
        assert board.set_comment("Opening notes")
        assert board.comment == "Opening notes"
        assert len(recorder.pgns) == published
        assert board.pgn == " *"

    def test_bad_path_is_rejected(self) -> None:
        board, _ = _started()
        assert not board.set_comment("nothing", path=(3,))


class TestTreeEdits:
    def _branched(self) -> tuple[AnalysisBoard, _Recorder]:
        board, recorder = _started()
        board.drop_piece("e2", "e4")
        board.go_back()
        board.drop_piece("d2", "d4")
        return board, recorder

    def test_promote_current_variation(self) -> None:
        board, recorder = self._branched()
        assert board.promote_at((1,))
        assert recorder.pgns[-1] == "1. d4 (e4) *"
        assert board.path == (0,)
        assert board.current_node.san == "d4"

    def test_promote_main_line_is_noop(self) -> None:
        board, recorder = self._branched()
        published = len(recorder.pgns)
        assert board.promote_at((0,))
        assert len(recorder.pgns) == published

    def test_promote_bad_path(self) -> None:
        board, _ = self._branched()
        assert not board.promote_at((0, 4))

    def test_delete_current_node_moves_to_parent(self) -> None:
        board, recorder = self._branched()
        board.play_move("d5")
        assert board.delete_at((1,))
        assert recorder.pgns[-1] == "1. e4 *"
        assert board.path == ()

    def test_delete_earlier_sibling_remaps_current_path(self) -> None:
        board, _ = self._branched()
        board.go_back()
        board.play_move("c4")
        assert board.path == (2,)
        assert board.delete_at((0,))
        assert board.path == (1,)
        assert board.current_node.san == "c4"

    def test_delete_root_is_rejected(self) -> None:
        board, recorder = self._branched()
        published = len(recorder.pgns)
        assert not board.delete_at(())
        assert len(recorder.pgns) == published
        assert len(board.tree.root.children) == 2

    def test_delete_bad_path(self) -> None:
        board, _ = self._branched()
        assert not board.delete_at((9,))


class TestLoading:
    def test_load_pgn_replaces_tree(self) -> None:
        board, recorder = _started()
        board.play_move("d4")
        assert board.load_pgn("1. e4 e5 2. Nf3 *")
        assert recorder.pgns[-1] == "1. e4 e5 2. Nf3 *"
        assert board.path == ()

    def test_unparseable_pgn(self) -> None:
        board, recorder = _started()
        board.play_move("d4")
        assert not board.load_pgn("this is not a game")
        assert [report.type for report in recorder.errors] == [
            ErrorType.PGN_PARSE_ERROR
        ]
        assert board.pgn == "1. d4 *"
        assert board.path == (0,)

    def test_pgn_without_moves(self) -> None:
        board, recorder = _started()
        assert not board.load_pgn('[Event "Empty"]\n\n*')
        assert recorder.errors[-1].type == ErrorType.PGN_PARSE_ERROR

    def test_illegal_pgn(self) -> None:
        board, recorder = _started()
        assert not board.load_pgn("1. e5 *")
        assert recorder.errors[-1].type == ErrorType.INVALID_PGN_MOVES

    def test_too_deep_pgn(self) -> None:
        board, recorder = _started(
            BoardSettings(limits=CodecLimits(max_variation_depth=1))
        )
        assert not board.load_pgn("1. e4 (1. d4 (1. c4)) *")
        assert recorder.errors[-1].type == ErrorType.INVALID_PGN

    def test_load_starting_position(self, custom_fen: str) -> None:
        board, recorder = _started()
        board.play_move("e4")
        assert board.load_starting_position(f"  {custom_fen}  ")
        assert recorder.pgns[-1] == f'[FEN "{custom_fen}"]\n\n *'
        assert board.fen == custom_fen

    def test_load_invalid_starting_position(self) -> None:
        board, recorder = _started()
        board.play_move("e4")
        assert not board.load_starting_position("8/8/8/8 w - - 0 1")
        assert recorder.errors[-1].type == ErrorType.INVALID_FEN
        assert board.pgn == "1. e4 *"
        assert board.starting_fen is None

    def test_finished_game_keeps_result(self) -> None:
        board, recorder = _started()
        assert board.load_pgn("1. e4 e5 2. Nf3 Nc6 1-0")
        assert recorder.pgns[-1] == "1. e4 e5 2. Nf3 Nc6 1-0"
        board.go_to_end()
        board.set_comment("Resigns")
        assert board.pgn == "1. e4 e5 2. Nf3 Nc6 { Resigns } 1-0"


class TestExplicitStartingPosition:
    def test_loaded_position_applies_to_headerless_pgn(self, custom_fen: str) -> None:
        board, recorder = _started()
        board.load_starting_position(custom_fen)

        assert board.load_pgn("1. e3 e6 *")

        assert recorder.errors == []
        assert board.tree.starting_fen == custom_fen
        assert board.pgn == f'[FEN "{custom_fen}"]\n\n1. e3 e6 *'

    def test_loaded_position_conflicts_with_other_header(self, custom_fen: str) -> None:
        board, recorder = _started()
        board.load_starting_position(custom_fen)
        pgn = f'[FEN "{STARTING_FEN}"]\n\n1. e4 *'

        assert not board.load_pgn(pgn)

        assert [report.as_dict() for report in recorder.errors] == [
            {
                "type": "fen_pgn_conflict",
                "message": "The starting position conflicts with the FEN header in the PGN",
                "details": {
                    "provided_fen": custom_fen,
                    "pgn_fen": STARTING_FEN,
                    "pgn": pgn,
                },
            }
        ]
        assert board.tree.starting_fen == custom_fen

    def test_settings_position_applies_to_later_loads(self, custom_fen: str) -> None:
        board, recorder = _started(BoardSettings(starting_fen=custom_fen))
        assert board.starting_fen == custom_fen

        assert not board.load_pgn("1. Nc3 e5 *")

        assert [report.type for report in recorder.errors] == [
            ErrorType.INVALID_PGN_MOVES
        ]
        assert board.load_pgn("1. Nf3 Na6 *")
        assert board.tree.starting_fen == custom_fen

    def test_settings_position_conflicts_with_other_header(self, custom_fen: str) -> None:
        board, recorder = _started(BoardSettings(starting_fen=custom_fen))
        assert not board.load_pgn(f'[FEN "{STARTING_FEN}"]\n\n1. e4 *')
        assert recorder.errors[-1].type == ErrorType.FEN_PGN_CONFLICT

    def test_matching_header_is_accepted(self, custom_fen: str) -> None:
        board, recorder = _started()
        board.load_starting_position(custom_fen)
        assert board.load_pgn(f'[FEN "{custom_fen}"]\n\n1. e3 *')
        assert recorder.errors == []

    def test_without_explicit_position_header_is_used(self, custom_fen: str) -> None:
        board, recorder = _started()
        assert board.starting_fen is None
        assert board.load_pgn(f'[FEN "{custom_fen}"]\n\n1. e3 *')
        assert recorder.errors == []
        assert board.starting_fen is None

    def test_explicit_argument_overrides_and_is_kept(self, custom_fen: str) -> None:
        board, recorder = _started()
        assert board.load_pgn("1. e3 *", starting_fen=custom_fen)
        assert board.starting_fen == custom_fen
        assert not board.load_pgn("1. Nc3 *")
        assert recorder.errors[-1].type == ErrorType.INVALID_PGN_MOVES


class TestNavigation:
    def _loaded(self) -> AnalysisBoard:
        board, _ = _started()
        board.load_pgn("1. e4 e5 (1... c5 2. Nf3) 2. Nf3 *")
        return board

    def test_forward_and_back(self) -> None:
        board = self._loaded()
        assert board.go_forward()
        assert board.path == (0,)
        assert board.go_back()
        assert board.path == ()
        assert not board.go_back()

    def test_end_and_start(self) -> None:
        board = self._loaded()
        assert board.go_to_end()
        assert board.path == (0, 0, 0)
        assert not board.go_forward()
        assert board.go_to_start()
        assert board.path == ()

    def test_end_stays_on_current_variation(self) -> None:
        board = self._loaded()
        board.navigate((0, 1))
        board.go_to_end()
        assert board.path == (0, 1, 0)

    def test_navigate_sets_position(self) -> None:
        board = self._loaded()
        assert board.navigate([0, 1, 0])
        assert board.path == (0, 1, 0)
        assert board.current_node.san == "Nf3"
        assert board.fen == board.current_node.fen

    def test_navigate_bad_path(self) -> None:
        board = self._loaded()
        assert not board.navigate((0, 2))
        assert board.path == ()

    def test_navigation_does_not_publish(self) -> None:
        board = self._loaded()
        recorder = _Recorder(board)
        board.go_to_end()
        board.go_back()
        assert recorder.pgns == []
        assert [path for path, _ in recorder.positions] == [(0, 0, 0), (0, 0)]
