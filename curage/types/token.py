from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from curage.types.position import Range


class TokenKind(Enum):
    INT = "int"
    NAME = "name"
    # Keywords
    LET = "let"
    SET = "set"
    END = "end"
    IF = "if"
    WHILE = "while"
    # Operators and punctuation
    OPERATOR = "operator"
    LPAREN = "("
    RPAREN = ")"
    # Synthetic, zero-length
    EOL = "eol"
    EOF = "eof"
    INVALID = "invalid"


KEYWORDS: dict[str, TokenKind] = {
    "let": TokenKind.LET,
    "set": TokenKind.SET,
    "end": TokenKind.END,
    "if": TokenKind.IF,
    "while": TokenKind.WHILE,
}

# Tokens at which the parser resumes after an error
STATEMENT_KEYWORDS = frozenset({TokenKind.LET, TokenKind.SET, TokenKind.IF, TokenKind.WHILE, TokenKind.END})


@dataclass(frozen=True)
class Token:
    """A lexical token.

    ``id`` is the token's index in the document's token sequence and is the
    identity symbols refer to. ``gap`` holds the spaces that preceded the
    token on its line, so gaps plus texts rebuild each line exactly.
    """

    id: int
    kind: TokenKind
    text: str
    range: Range
    gap: str = ""

    @property
    def is_atomic(self) -> bool:
        return self.kind is TokenKind.INT or self.kind is TokenKind.NAME

    @property
    def line(self) -> int:
        return self.range.start.line

    def __repr__(self):
        return f"Token({self.id}, {self.kind.name}, {self.text!r}, {self.range!r})"
