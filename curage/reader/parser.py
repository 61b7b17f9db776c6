"""
  Curage parser

Predictive recursive descent over the token list produced by the lexer:

    program     = block_stmt* EOF
    block_stmt  = let_stmt | set_stmt | if_stmt | while_stmt | expr_stmt | error_stmt
    let_stmt    = "let" name "=" expr EOL
    set_stmt    = "set" name "=" expr EOL
    if_stmt     = "if" expr EOL block_stmt* end_marker
    while_stmt  = "while" expr EOL block_stmt* end_marker
    end_marker  = "end" EOL?
    expr_stmt   = expr EOL
    expr        = atomic operator atomic | atomic "(" atomic? ")" | atomic
    atomic      = integer | name

Binary expressions take exactly one operator and calls at most one argument.
Stray EOL tokens at statement position (blank lines, the EOL after ``end``)
are skipped.

Recovery: a failed production becomes an ErrorNode in the slot it was meant
to fill, the parser skips to the next statement keyword, EOL or EOF, and a
diagnostic is reported unless the same line already has one. Blocks nested
more than MAX_NESTING deep are skipped whole into one ErrorNode, which bounds
the tree depth. Every loop either consumes a token or stops at EOF, so any
token list parses.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from curage.reader.lexer import tokenize
from curage.reader.nodes import (
    AtomicExpr,
    BinaryExpr,
    CallExpr,
    EndMarker,
    ErrorNode,
    Expression,
    ExprStmt,
    IfStmt,
    LetStmt,
    Program,
    SetStmt,
    Statement,
    WhileStmt,
)
from curage.types.diagnostic import Diagnostic
from curage.types.position import Position, Range
from curage.types.token import STATEMENT_KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

RESYNC_KINDS = STATEMENT_KEYWORDS | {TokenKind.EOL, TokenKind.EOF}

EXPECTED_STATEMENT = "Expected a statement."
EXPECTED_NAME = "Expected a name."
EXPECTED_EQUALS = "Expected '='."
EXPECTED_EXPRESSION = "Expected an expression."
EXPECTED_RPAREN = "Expected ')'."
EXPECTED_EOL = "Expected an end of line."
EXPECTED_END = "Expected 'end'."
UNEXPECTED_END = "Unexpected 'end'."
NESTED_TOO_DEEPLY = "Blocks are nested too deeply."

# Deepest if/while nesting parsed into the tree; deeper blocks are skipped whole
MAX_NESTING = 100


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        tokens = list(tokens)
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            # Streams from the lexer always end in EOF; tolerate hand-built ones.
            at = tokens[-1].range.end if tokens else Position(0, 0)
            next_id = tokens[-1].id + 1 if tokens else 0
            tokens.append(Token(next_id, TokenKind.EOF, "", Range.at(at)))
        self.tokens = tokens
        self.cur = 0
        self.diagnostics: list[Diagnostic] = []
        self._lines_with_errors: set[int] = set()
        self.depth = 0

    # --- Token stream ---
    def peek(self, offset: int = 0) -> Token:
        i = self.cur + offset
        if i >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[i]

    def advance(self) -> Token:
        tok = self.peek()
        if tok.kind is not TokenKind.EOF:
            self.cur += 1
        return tok

    def at(self, kind: TokenKind) -> bool:
        return self.peek().kind is kind

    # --- Errors ---
    def _report(self, message: str, rng: Range) -> None:
        line = rng.start.line
        if line in self._lines_with_errors:
            return
        self._lines_with_errors.add(line)
        self.diagnostics.append(Diagnostic(message, rng))

    def _error(self, message: str, prefix: Tuple[Token, ...] = (), taken: Tuple[Token, ...] = ()) -> ErrorNode:
        """Skip to the next resync point and return an ErrorNode for what was skipped.

        ``prefix`` are tokens of the failed construct that precede the problem
        (kept in the node, not in the diagnostic range); ``taken`` are
        offending tokens the caller already consumed.
        """
        skipped = list(taken)
        while self.peek().kind not in RESYNC_KINDS:
            skipped.append(self.advance())
        if skipped:
            rng = Range(skipped[0].range.start, skipped[-1].range.end)
        else:
            rng = Range.at(self.peek().range.start)
        self._report(message, rng)
        return ErrorNode(message, rng, tuple(prefix) + tuple(skipped))

    # --- Expressions ---
    def parse_atomic(self) -> Optional[AtomicExpr]:
        if self.peek().is_atomic:
            return AtomicExpr(self.advance())
        return None

    def parse_expression(self) -> Expression:
        left = self.parse_atomic()
        if left is None:
            return self._error(EXPECTED_EXPRESSION)

        kind = self.peek().kind
        if kind is TokenKind.OPERATOR:
            operator = self.advance()
            right = self.parse_atomic()
            if right is None:
                right = self._error(EXPECTED_EXPRESSION)
            return BinaryExpr(left, operator, right)

        if kind is TokenKind.LPAREN:
            open_paren = self.advance()
            argument = self.parse_atomic()
            if self.at(TokenKind.RPAREN):
                close = self.advance()
            else:
                close = self._error(EXPECTED_RPAREN)
            return CallExpr(left, open_paren, argument, close)

        return left

    def _terminator(self):
        if self.at(TokenKind.EOL):
            return self.advance()
        return self._error(EXPECTED_EOL)

    # --- Statements ---
    def parse_binding(self, node_cls) -> Statement:
        keyword = self.advance()
        if not self.at(TokenKind.NAME):
            return self._error(EXPECTED_NAME, prefix=(keyword,))
        name = self.advance()

        if self.at(TokenKind.OPERATOR) and self.peek().text == "=":
            equals = self.advance()
            value = self.parse_expression()
        else:
            equals = None
            value = self._error(EXPECTED_EQUALS)

        return node_cls(keyword, name, equals, value, self._terminator())

    def parse_block(self, node_cls) -> Statement:
        keyword = self.advance()
        condition = self.parse_expression()
        header_end = self._terminator()

        body: list[Statement] = []
        self.depth += 1
        try:
            while True:
                kind = self.peek().kind
                if kind is TokenKind.EOL:
                    self.advance()
                    continue
                if kind is TokenKind.END:
                    end = self.parse_end_marker()
                    break
                if kind is TokenKind.EOF:
                    end = self._error(EXPECTED_END)
                    break
                body.append(self.parse_statement())
        finally:
            self.depth -= 1

        return node_cls(keyword, condition, header_end, tuple(body), end)

    def skip_block(self) -> ErrorNode:
        """Swallow a whole if/while block, up to its matching 'end', without descending.

        Keeps the tree (and every recursive walk over it) bounded by MAX_NESTING.
        """
        keyword = self.advance()
        skipped = [keyword]
        open_blocks = 1
        while not self.at(TokenKind.EOF):
            tok = self.advance()
            skipped.append(tok)
            if tok.kind is TokenKind.IF or tok.kind is TokenKind.WHILE:
                open_blocks += 1
            elif tok.kind is TokenKind.END:
                open_blocks -= 1
                if open_blocks == 0:
                    if self.at(TokenKind.EOL):
                        skipped.append(self.advance())
                    break
        rng = Range(keyword.range.start, skipped[-1].range.end)
        self._report(NESTED_TOO_DEEPLY, rng)
        return ErrorNode(NESTED_TOO_DEEPLY, rng, tuple(skipped))

    def parse_end_marker(self) -> EndMarker:
        keyword = self.advance()
        terminator = self.advance() if self.at(TokenKind.EOL) else None
        return EndMarker(keyword, terminator)

    def parse_statement(self) -> Statement:
        tok = self.peek()
        kind = tok.kind

        if kind is TokenKind.LET:
            return self.parse_binding(LetStmt)
        if kind is TokenKind.SET:
            return self.parse_binding(SetStmt)
        if (kind is TokenKind.IF or kind is TokenKind.WHILE) and self.depth >= MAX_NESTING:
            return self.skip_block()
        if kind is TokenKind.IF:
            return self.parse_block(IfStmt)
        if kind is TokenKind.WHILE:
            return self.parse_block(WhileStmt)
        if kind is TokenKind.END:
            # an 'end' with no open block
            return self._error(UNEXPECTED_END, taken=(self.advance(),))
        if tok.is_atomic:
            expression = self.parse_expression()
            return ExprStmt(expression, self._terminator())

        return self._error(EXPECTED_STATEMENT, taken=(self.advance(),))

    def parse_program(self) -> Program:
        statements: list[Statement] = []
        while not self.at(TokenKind.EOF):
            if self.at(TokenKind.EOL):
                self.advance()
                continue
            statements.append(self.parse_statement())
        return Program(tuple(statements), self.peek())


def parse_tokens(tokens: Sequence[Token]) -> tuple[Program, list[Diagnostic]]:
    parser = Parser(tokens)
    program = parser.parse_program()
    logger.debug(
        "parsed %d statements with %d syntax diagnostics",
        len(program.statements),
        len(parser.diagnostics),
    )
    return program, parser.diagnostics


def parse_source(source: str) -> tuple[Program, list[Diagnostic]]:
    return parse_tokens(tokenize(source))
