from curage.types.position import Position, Range
from curage.types.token import Token, TokenKind, KEYWORDS
from curage.types.diagnostic import Diagnostic, Severity
from curage.types.symbol import Symbol, SymbolTable, SymbolTableBuilder
from curage.types.environment import Environment

__all__ = [
    "Position",
    "Range",
    "Token",
    "TokenKind",
    "KEYWORDS",
    "Diagnostic",
    "Severity",
    "Symbol",
    "SymbolTable",
    "SymbolTableBuilder",
    "Environment",
]
