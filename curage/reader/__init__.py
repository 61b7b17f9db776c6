from curage.reader.lexer import lex, tokenize, split_lines, is_valid_name
from curage.reader.parser import Parser, parse_tokens, parse_source

__all__ = [
    "lex",
    "tokenize",
    "split_lines",
    "is_valid_name",
    "Parser",
    "parse_tokens",
    "parse_source",
]
