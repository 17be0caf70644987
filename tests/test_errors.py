"""Tests for error types and structured reports."""

import pytest

from pgntree.errors import (
    ErrorReport,
    ErrorType,
    FenPgnConflict,
    IllegalMove,
    InvalidFen,
    InvalidFenInPgn,
    InvalidPgn,
    InvalidPgnMoves,
    NoMovesParsed,
    PathOutOfRange,
    PgnDecodeError,
    PgnParseError,
    PgnTreeError,
)


class TestErrorReport:
    def test_as_dict(self) -> None:
        report = ErrorReport(ErrorType.INVALID_FEN, "bad", {"fen": "x"})
        assert report.as_dict() == {
            "type": "invalid_fen",
            "message": "bad",
            "details": {"fen": "x"},
        }

    def test_as_dict_copies_details(self) -> None:
        report = ErrorReport(ErrorType.INVALID_PGN, "bad", {"pgn": "x"})
        report.as_dict()["details"]["pgn"] = "changed"
        assert report.details == {"pgn": "x"}


class TestDecodeErrors:
    @pytest.mark.parametrize(
        ("error_cls", "error_type"),
        [
            (InvalidPgn, ErrorType.INVALID_PGN),
            (PgnParseError, ErrorType.PGN_PARSE_ERROR),
            (NoMovesParsed, ErrorType.PGN_PARSE_ERROR),
            (InvalidFenInPgn, ErrorType.INVALID_FEN_IN_PGN),
            (FenPgnConflict, ErrorType.FEN_PGN_CONFLICT),
            (InvalidPgnMoves, ErrorType.INVALID_PGN_MOVES),
            (InvalidFen, ErrorType.INVALID_FEN),
        ],
    )
    def test_report_type(
        self, error_cls: type[PgnDecodeError], error_type: ErrorType
    ) -> None:
        report = error_cls("message", key="value").to_report()
        assert report == ErrorReport(error_type, "message", {"key": "value"})

    def test_hierarchy(self) -> None:
        assert issubclass(NoMovesParsed, PgnParseError)
        assert issubclass(PgnDecodeError, PgnTreeError)


class TestEditErrors:
    def test_path_out_of_range(self) -> None:
        error = PathOutOfRange((0, 3), 1)
        assert isinstance(error, IndexError)
        assert error.path == (0, 3)
        assert "depth 1" in str(error)

    def test_illegal_move(self) -> None:
        error = IllegalMove("e5", "fen")
        assert isinstance(error, ValueError)
        assert error.move == "e5"
