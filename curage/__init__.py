# Curage: lexer, parser, binder and position queries for the curage toy language.
#
# Pipeline: text -> tokens (curage.reader.lexer) -> syntax tree + diagnostics
# (curage.reader.parser) -> symbol table + diagnostics (curage.analysis.binder)
# -> cursor queries (curage.analysis.query). The language server lives in the
# sibling package curage_lsp.

__version__ = "0.3.0"

from curage.types import Position, Range, Token, TokenKind, Diagnostic, Symbol
from curage.analysis import (
    SemanticModel,
    SyntaxModel,
    analyze_source,
    compute_highlights,
    compute_rename_edits,
    find_references,
    find_symbol,
    locate_token,
)

__all__ = [
    "__version__",
    "Position",
    "Range",
    "Token",
    "TokenKind",
    "Diagnostic",
    "Symbol",
    "SemanticModel",
    "SyntaxModel",
    "analyze_source",
    "compute_highlights",
    "compute_rename_edits",
    "find_references",
    "find_symbol",
    "locate_token",
]
