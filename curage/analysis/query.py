"""Position-driven queries over a SemanticModel.

All queries are read-only and total: a cursor that is not on a name gives
``None`` or an empty list, never an exception. Results that list
occurrences are ordered definitions first, then references, each in source
order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

from curage.analysis.model import SemanticModel
from curage.reader.nodes import Node
from curage.types.position import Position, Range
from curage.types.symbol import Symbol
from curage.types.token import Token, TokenKind


class HighlightKind(IntEnum):
    # Same numbering as the LSP DocumentHighlightKind
    TEXT = 1
    READ = 2
    WRITE = 3


@dataclass(frozen=True)
class Highlight:
    kind: HighlightKind
    range: Range


@dataclass(frozen=True)
class TextEdit:
    range: Range
    new_text: str


@dataclass(frozen=True)
class Hit:
    token: Token
    path: Tuple[Node, ...]  # enclosing nodes, outermost first

    @property
    def node(self) -> Node:
        return self.path[-1]


def _descend(node: Node, pos: Position, path: Tuple[Node, ...]) -> Optional[Hit]:
    path = path + (node,)
    for child in node.children():
        if isinstance(child, Token):
            if child.range.contains(pos):
                return Hit(child, path)
            continue
        span = child.span
        if span is not None and span.contains(pos):
            return _descend(child, pos, path)
    return None


def locate(model: SemanticModel, pos: Position) -> Optional[Hit]:
    """Find the deepest token whose range contains ``pos``, with its ancestors."""
    return _descend(model.syntax.root, pos, ())


def locate_token(model: SemanticModel, pos: Position) -> Optional[Token]:
    hit = locate(model, pos)
    return hit.token if hit else None


def find_symbol(model: SemanticModel, pos: Position) -> Optional[Symbol]:
    token = locate_token(model, pos)
    if token is None or token.kind is not TokenKind.NAME:
        return None
    return model.symbol_for_token(token)


def compute_highlights(model: SemanticModel, pos: Position) -> List[Highlight]:
    symbol = find_symbol(model, pos)
    if symbol is None:
        return []
    highlights = [Highlight(HighlightKind.WRITE, t.range) for t in model.definition_tokens(symbol)]
    highlights += [Highlight(HighlightKind.READ, t.range) for t in model.reference_tokens(symbol)]
    return highlights


def compute_rename_edits(model: SemanticModel, pos: Position, new_name: str) -> Optional[List[TextEdit]]:
    """Edits replacing every occurrence of the symbol at ``pos`` with ``new_name``.

    Returns None when ``pos`` does not resolve to a symbol. The name itself is
    not validated here; see ``curage.reader.lexer.is_valid_name``.
    """
    symbol = find_symbol(model, pos)
    if symbol is None:
        return None
    return [TextEdit(model.syntax.token(i).range, new_name) for i in symbol.occurrences]


def find_references(model: SemanticModel, pos: Position, include_declaration: bool = False) -> List[Range]:
    symbol = find_symbol(model, pos)
    if symbol is None:
        return []
    ids = symbol.occurrences if include_declaration else symbol.references
    return [model.syntax.token(i).range for i in ids]


def prepare_rename(model: SemanticModel, pos: Position) -> Optional[Range]:
    """Range of the name under the cursor, if it can be renamed."""
    token = locate_token(model, pos)
    if token is None or token.kind is not TokenKind.NAME:
        return None
    if model.symbol_for_token(token) is None:
        return None
    return token.range


def document_symbols(model: SemanticModel) -> List[Symbol]:
    return list(model.table)
