from curage.analysis.model import SyntaxModel, SemanticModel, analyze_source, analyze_syntax, parse_model
from curage.analysis.binder import Binder, bind
from curage.analysis.query import (
    Highlight,
    HighlightKind,
    Hit,
    TextEdit,
    compute_highlights,
    compute_rename_edits,
    document_symbols,
    find_references,
    find_symbol,
    locate,
    locate_token,
    prepare_rename,
)

__all__ = [
    "SyntaxModel",
    "SemanticModel",
    "analyze_source",
    "analyze_syntax",
    "parse_model",
    "Binder",
    "bind",
    "Highlight",
    "HighlightKind",
    "Hit",
    "TextEdit",
    "compute_highlights",
    "compute_rename_edits",
    "document_symbols",
    "find_references",
    "find_symbol",
    "locate",
    "locate_token",
    "prepare_rename",
]
