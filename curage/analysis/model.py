"""Snapshot models for one version of a document.

``analyze_source`` runs the whole pipeline (lex, parse, bind) and returns a
frozen SemanticModel. Nothing here is updated in place: a document change
builds a new model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from curage.analysis.binder import bind
from curage.reader.lexer import split_lines, tokenize
from curage.reader.nodes import Program
from curage.reader.parser import parse_tokens
from curage.types.diagnostic import Diagnostic
from curage.types.symbol import Symbol, SymbolTable
from curage.types.token import Token


@dataclass(frozen=True)
class SyntaxModel:
    root: Program
    diagnostics: Tuple[Diagnostic, ...]
    tokens: Tuple[Token, ...]
    lines: Tuple[str, ...]

    def token(self, token_id: int) -> Token:
        # ids are indexes into the token sequence
        return self.tokens[token_id]


@dataclass(frozen=True)
class SemanticModel:
    syntax: SyntaxModel
    table: SymbolTable
    diagnostics: Tuple[Diagnostic, ...]

    @property
    def all_diagnostics(self) -> Tuple[Diagnostic, ...]:
        """Syntax diagnostics followed by semantic ones."""
        return self.syntax.diagnostics + self.diagnostics

    def symbol_for_token(self, token: Token) -> Optional[Symbol]:
        return self.table.symbol_for_token(token.id)

    def definition_tokens(self, symbol: Symbol) -> list[Token]:
        return [self.syntax.token(i) for i in symbol.definitions]

    def reference_tokens(self, symbol: Symbol) -> list[Token]:
        return [self.syntax.token(i) for i in symbol.references]


def parse_model(source: str) -> SyntaxModel:
    tokens = tokenize(source)
    root, diagnostics = parse_tokens(tokens)
    return SyntaxModel(
        root=root,
        diagnostics=tuple(diagnostics),
        tokens=tuple(tokens),
        lines=tuple(split_lines(source)),
    )


def analyze_syntax(syntax: SyntaxModel, block_scoping: bool = False) -> SemanticModel:
    table, diagnostics = bind(syntax.root, block_scoping=block_scoping)
    return SemanticModel(syntax=syntax, table=table, diagnostics=tuple(diagnostics))


def analyze_source(source: str, block_scoping: bool = False) -> SemanticModel:
    return analyze_syntax(parse_model(source), block_scoping=block_scoping)
