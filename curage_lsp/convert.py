"""Conversions between curage core types and lsprotocol types.

The core counts columns in Python characters; the wire uses UTF-16 code
units (the LSP default). Every conversion goes through a pygls
PositionCodec against the lines of the snapshot the range belongs to.
"""

from __future__ import annotations

from typing import List, Sequence

from lsprotocol import types
from pygls.workspace import PositionCodec

from curage.analysis.query import Highlight, TextEdit
from curage.types.diagnostic import Diagnostic
from curage.types.position import Position, Range
from curage.types.symbol import Symbol

codec = PositionCodec()


def from_lsp_position(lines: Sequence[str], position: types.Position) -> Position:
    p = codec.position_from_client_units(list(lines), position)
    return Position(p.line, p.character)


def to_lsp_position(lines: Sequence[str], pos: Position) -> types.Position:
    return codec.position_to_client_units(list(lines), types.Position(line=pos.line, character=pos.column))


def to_lsp_range(lines: Sequence[str], rng: Range) -> types.Range:
    return types.Range(start=to_lsp_position(lines, rng.start), end=to_lsp_position(lines, rng.end))


def to_lsp_diagnostic(lines: Sequence[str], d: Diagnostic) -> types.Diagnostic:
    return types.Diagnostic(
        range=to_lsp_range(lines, d.range),
        message=d.message,
        severity=types.DiagnosticSeverity(int(d.severity)),
        source=d.source,
    )


def to_lsp_diagnostics(lines: Sequence[str], diagnostics: Sequence[Diagnostic]) -> List[types.Diagnostic]:
    return [to_lsp_diagnostic(lines, d) for d in diagnostics]


def to_lsp_highlight(lines: Sequence[str], h: Highlight) -> types.DocumentHighlight:
    return types.DocumentHighlight(
        range=to_lsp_range(lines, h.range),
        kind=types.DocumentHighlightKind(int(h.kind)),
    )


def to_lsp_text_edit(lines: Sequence[str], edit: TextEdit) -> types.TextEdit:
    return types.TextEdit(range=to_lsp_range(lines, edit.range), new_text=edit.new_text)


def to_lsp_document_symbol(lines: Sequence[str], symbol: Symbol, definition: Range) -> types.DocumentSymbol:
    rng = to_lsp_range(lines, definition)
    return types.DocumentSymbol(
        name=symbol.name,
        kind=types.SymbolKind.Variable,
        range=rng,
        selection_range=rng,
        detail=f"{len(symbol.references)} reference(s)",
    )
