"""
  Curage lexer

- Works line by line; accepts both \\n and \\r\\n line endings
- Never raises: unknown characters become INVALID tokens and the parser
  decides what to do with them
- Lossless: each token remembers the spaces before it (``gap``), so gaps and
  texts rebuild every line exactly
- Every non-empty line ends with a zero-length EOL token; empty lines emit
  nothing. The stream always ends with a zero-length EOF token.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator

from curage.types.position import Position, Range
from curage.types.token import KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

LINE_BREAK_RE = re.compile(r"\r\n|\n")

# Alternatives are tried in order; the first that matches at the cursor wins.
TOKEN_RE = re.compile(
    r"(?P<space> +)"
    r"|(?P<int>[+-]?[0-9]+)"  # optionally signed integer
    r"|(?P<name>[A-Za-z_][A-Za-z0-9_]*)"  # identifier or keyword
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<operator>[-+*/%<>=!&|]+)"  # operator cluster
    r"|(?P<invalid>.)",  # anything else, one character at a time
    re.DOTALL,
)

GROUP_KINDS: dict[str, TokenKind] = {
    "int": TokenKind.INT,
    "name": TokenKind.NAME,
    "lparen": TokenKind.LPAREN,
    "rparen": TokenKind.RPAREN,
    "operator": TokenKind.OPERATOR,
    "invalid": TokenKind.INVALID,
}

NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def split_lines(source: str) -> list[str]:
    """Split on either line-ending convention. Always returns at least one line."""
    return LINE_BREAK_RE.split(source)


def is_valid_name(text: str) -> bool:
    """True when ``text`` would lex as a single NAME token."""
    return NAME_RE.fullmatch(text) is not None and text not in KEYWORDS


def lex(source: str) -> Iterator[Token]:
    """Token generator over ``source``; ids are assigned in emission order."""
    next_id = 0
    lines = split_lines(source)

    for line_no, text in enumerate(lines):
        if not text:
            continue

        pos = 0
        gap = ""
        while pos < len(text):
            m = TOKEN_RE.match(text, pos)
            group = m.lastgroup
            value = m.group(group)
            pos = m.end()

            if group == "space":
                gap = value
                continue

            kind = GROUP_KINDS[group]
            if kind is TokenKind.NAME:
                kind = KEYWORDS.get(value, kind)
            start = Position(line_no, m.start())
            yield Token(next_id, kind, value, Range.of_text(start, value), gap)
            next_id += 1
            gap = ""

        eol = Position(line_no, len(text))
        yield Token(next_id, TokenKind.EOL, "", Range.at(eol), gap)
        next_id += 1

    last = len(lines) - 1
    yield Token(next_id, TokenKind.EOF, "", Range.at(Position(last, len(lines[last]))))


def tokenize(source: str) -> list[Token]:
    tokens = list(lex(source))
    logger.debug("lexed %d tokens from %d characters", len(tokens), len(source))
    return tokens


def reconstruct_lines(tokens: Iterable[Token], line_count: int) -> list[str]:
    """Rebuild the text of each line from token gaps and texts."""
    out = [""] * line_count
    for t in tokens:
        if t.kind is TokenKind.EOF:
            continue
        out[t.line] += t.gap + t.text
    return out
