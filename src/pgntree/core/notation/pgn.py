"""PGN grammar parser: header tags plus a move AST with comments and variations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from pgntree.core.notation.models import ParsedPgn, PgnMoveAst

_PGN_HEADER_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]\s*$')
_MOVE_NUMBER_RE = re.compile(r"^(\d+)(\.+)(.*)$")
_NAG_RE = re.compile(r"^\$\d+$")
_GLYPH_SUFFIX_RE = re.compile(r"[!?]+$")
_EN_PASSANT_RE = re.compile(r"e\.p\.$")
_SAN_RE = re.compile(
    r"^(?:"
    r"[NBRQK][a-h]?[1-8]?x?[a-h][1-8]"
    r"|(?:[a-h]x)?[a-h][1-8](?:=?[NBRQ])?"
    r"|O-O(?:-O)?"
    r"|0-0(?:-0)?"
    r")[+#]?$"
)
_DELIMITERS = "{}();"

RESULT_TOKENS = frozenset({"1-0", "0-1", "1/2-1/2", "*"})


class PgnSyntaxError(ValueError):
    """Raised when PGN text does not follow the PGN grammar."""


def format_tag_line(key: str, value: str) -> str:
    """Format one ``[Key "value"]`` header line with PGN escaping."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'[{key} "{escaped}"]'


def is_san_token(token: str) -> bool:
    """Return True when *token* has the shape of a SAN move."""
    return _SAN_RE.match(token) is not None


# ── Movetext scanner ─────────────────────────────────────────────────────────


@dataclass(slots=True)
class _Line:
    """One move list being filled: the main line or an open variation."""

    owner: PgnMoveAst | None
    moves: list[PgnMoveAst] = field(default_factory=list)
    comments_before: list[str] = field(default_factory=list)
    comments_move: list[str] = field(default_factory=list)
    number_seen: bool = False

    def add_comment(self, comment: str) -> None:
        clean = " ".join(comment.split())
        if not clean:
            return
        if self.number_seen:
            self.comments_move.append(clean)
        elif not self.moves:
            self.comments_before.append(clean)
        else:
            last = self.moves[-1]
            if last.comment_after:
                last.comment_after = f"{last.comment_after} {clean}"
            else:
                last.comment_after = clean

    def add_move(self, notation: str) -> None:
        self.moves.append(
            PgnMoveAst(
                notation=notation,
                comment_before=" ".join(self.comments_before) or None,
                comment_move=" ".join(self.comments_move) or None,
            )
        )
        self.comments_before.clear()
        self.comments_move.clear()
        self.number_seen = False


def _parse_movetext(movetext: str) -> tuple[list[PgnMoveAst], str]:
    """Parse movetext into a move AST plus the result token.

    Variations are tracked with an explicit stack, so nesting depth is not
    limited by the interpreter's recursion limit.
    """
    stack: list[_Line] = [_Line(owner=None)]
    result_token = "*"
    idx = 0
    total = len(movetext)

    while idx < total:
        ch = movetext[idx]
        line = stack[-1]

        if ch.isspace():
            idx += 1
            continue

        if ch == "{":
            end = movetext.find("}", idx + 1)
            if end < 0:
                raise PgnSyntaxError("Unterminated comment in PGN movetext")
            line.add_comment(movetext[idx + 1 : end])
            idx = end + 1
            continue

        if ch == ";":
            end = movetext.find("\n", idx + 1)
            if end < 0:
                end = total
            line.add_comment(movetext[idx + 1 : end])
            idx = end
            continue

        if ch == "}":
            raise PgnSyntaxError("Unexpected '}' in PGN movetext")

        if ch == "(":
            if not line.moves:
                raise PgnSyntaxError("Variation opened before any move")
            stack.append(_Line(owner=line.moves[-1]))
            idx += 1
            continue

        if ch == ")":
            if len(stack) == 1:
                raise PgnSyntaxError("Unbalanced ')' in PGN movetext")
            closed = stack.pop()
            if closed.owner is not None and closed.moves:
                closed.owner.variations.append(closed.moves)
            idx += 1
            continue

        token_end = idx
        while (
            token_end < total
            and not movetext[token_end].isspace()
            and movetext[token_end] not in _DELIMITERS
        ):
            token_end += 1
        token = movetext[idx:token_end]
        idx = token_end

        if token in RESULT_TOKENS:
            if len(stack) > 1:
                raise PgnSyntaxError(f"Result token {token} inside a variation")
            result_token = token
            # Only the first game of the text is read.
            break

        if _NAG_RE.match(token) or _GLYPH_SUFFIX_RE.fullmatch(token):
            continue
        if _EN_PASSANT_RE.fullmatch(_GLYPH_SUFFIX_RE.sub("", token)):
            continue

        number = _MOVE_NUMBER_RE.match(token)
        if number is not None:
            line.number_seen = True
            token = number.group(3)
            if not token:
                continue

        san = _EN_PASSANT_RE.sub("", _GLYPH_SUFFIX_RE.sub("", token))
        if not is_san_token(san):
            raise PgnSyntaxError(f"Invalid move token: {token}")
        line.add_move(san)

    if len(stack) > 1:
        raise PgnSyntaxError("Unterminated variation in PGN movetext")

    return stack[0].moves, result_token


# ── Game parser ──────────────────────────────────────────────────────────────


def parse_pgn_game(pgn_text: str) -> ParsedPgn | None:
    """Parse a single PGN game into tags, a move AST and a result token.

    Returns ``None`` for blank input.  Raises :class:`PgnSyntaxError` when the
    text is not valid PGN.
    """
    if not pgn_text.strip():
        return None

    tags: dict[str, str] = {}
    move_lines: list[str] = []
    in_headers = True

    for raw_line in pgn_text.splitlines():
        line = raw_line.strip()
        if not line:
            if in_headers and not tags:
                continue
            in_headers = False
            continue

        if in_headers and line.startswith("["):
            match = _PGN_HEADER_RE.match(line)
            if match is None:
                raise PgnSyntaxError(f"Invalid PGN header line: {line}")
            key, raw_value = match.groups()
            value = raw_value.replace('\\"', '"').replace("\\\\", "\\")
            tags[key] = value
            continue

        in_headers = False
        if line.startswith("%"):
            continue
        move_lines.append(line)

    moves, result_token = _parse_movetext("\n".join(move_lines))
    header_result = tags.get("Result")
    if result_token == "*" and header_result in RESULT_TOKENS:
        result_token = header_result

    return ParsedPgn(tags=tags, moves=moves, result_token=result_token)
