from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from curage.errors import CurageInvalidSymbol
from curage.types.token import Token, TokenKind


@dataclass(frozen=True)
class Symbol:
    """One declaration and every occurrence that resolves to it.

    Occurrences are stored as token ids (see ``Token.id``), definitions and
    references each in source order.
    """

    id: int
    name: str
    definitions: Tuple[int, ...]
    references: Tuple[int, ...]

    @property
    def occurrences(self) -> Tuple[int, ...]:
        """Definitions first, then references."""
        return self.definitions + self.references


@dataclass(frozen=True)
class SymbolTable:
    symbols: Tuple[Symbol, ...] = ()
    owners: Dict[int, int] = field(default_factory=dict, hash=False)  # token id -> symbol id

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __getitem__(self, symbol_id: int) -> Symbol:
        return self.symbols[symbol_id]

    def symbol_for_token(self, token_id: int) -> Optional[Symbol]:
        symbol_id = self.owners.get(token_id)
        if symbol_id is None:
            return None
        return self.symbols[symbol_id]

    def named(self, name: str) -> List[Symbol]:
        return [s for s in self.symbols if s.name == name]


class SymbolTableBuilder:
    """Mutable accumulator used during a single binding pass."""

    def __init__(self):
        self._names: list[str] = []
        self._definitions: list[list[int]] = []
        self._references: list[list[int]] = []
        self._owners: dict[int, int] = {}

    def declare(self, token: Token) -> int:
        """Create a new symbol defined at ``token`` and return its id."""
        if token.kind is not TokenKind.NAME:
            raise CurageInvalidSymbol(f"Cannot declare {token.text!r} ({token.kind.name}) as a name")
        symbol_id = len(self._names)
        self._names.append(token.text)
        self._definitions.append([token.id])
        self._references.append([])
        self._owners[token.id] = symbol_id
        return symbol_id

    def refer(self, symbol_id: int, token: Token) -> None:
        if token.kind is not TokenKind.NAME:
            raise CurageInvalidSymbol(f"Cannot refer through {token.text!r} ({token.kind.name})")
        self._references[symbol_id].append(token.id)
        self._owners[token.id] = symbol_id

    def build(self) -> SymbolTable:
        symbols = tuple(
            Symbol(id=i, name=name, definitions=tuple(defs), references=tuple(sorted(refs)))
            for i, (name, defs, refs) in enumerate(zip(self._names, self._definitions, self._references))
        )
        return SymbolTable(symbols=symbols, owners=dict(self._owners))
