"""Syntax tree node types.

One frozen dataclass per construct. Children are held in fields and tuples,
never shared between nodes. When a production fails, an ``ErrorNode`` takes
the place of the missing part and keeps every token it swallowed, so the
tree still covers the whole token stream (apart from blank-line EOLs).

Node spans are not stored: ``span`` is computed from the first and last
token the node contains.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

from curage.types.position import Range
from curage.types.token import Token


class Node:
    def children(self) -> Iterator[Union[Node, Token]]:
        raise NotImplementedError

    def tokens(self) -> Iterator[Token]:
        """Every token under this node, in source order."""
        for child in self.children():
            if isinstance(child, Token):
                yield child
            else:
                yield from child.tokens()

    @property
    def span(self) -> Optional[Range]:
        first = last = None
        for t in self.tokens():
            if first is None:
                first = t
            last = t
        if first is None:
            return None
        return Range(first.range.start, last.range.end)


@dataclass(frozen=True)
class ErrorNode(Node):
    message: str
    range: Range  # where the diagnostic points
    skipped: Tuple[Token, ...] = ()

    def children(self):
        yield from self.skipped

    @property
    def span(self) -> Range:
        own = Node.span.fget(self)
        if own is None:
            return self.range
        return Range.cover(self.range, own)


@dataclass(frozen=True)
class AtomicExpr(Node):
    token: Token

    def children(self):
        yield self.token


@dataclass(frozen=True)
class BinaryExpr(Node):
    left: AtomicExpr
    operator: Token
    right: Union[AtomicExpr, ErrorNode]

    def children(self):
        yield self.left
        yield self.operator
        yield self.right


@dataclass(frozen=True)
class CallExpr(Node):
    callee: AtomicExpr
    open: Token
    argument: Optional[AtomicExpr]
    close: Union[Token, ErrorNode]

    def children(self):
        yield self.callee
        yield self.open
        if self.argument is not None:
            yield self.argument
        yield self.close


Expression = Union[AtomicExpr, BinaryExpr, CallExpr, ErrorNode]


@dataclass(frozen=True)
class BindingStmt(Node):
    """Shared shape of ``let`` and ``set``: keyword name = value EOL."""

    keyword: Token
    name: Token
    equals: Optional[Token]
    value: Expression
    terminator: Union[Token, ErrorNode]

    def children(self):
        yield self.keyword
        yield self.name
        if self.equals is not None:
            yield self.equals
        yield self.value
        yield self.terminator


@dataclass(frozen=True)
class LetStmt(BindingStmt):
    pass


@dataclass(frozen=True)
class SetStmt(BindingStmt):
    pass


@dataclass(frozen=True)
class ExprStmt(Node):
    expression: Expression
    terminator: Union[Token, ErrorNode]

    def children(self):
        yield self.expression
        yield self.terminator


@dataclass(frozen=True)
class EndMarker(Node):
    keyword: Token
    terminator: Optional[Token] = None

    def children(self):
        yield self.keyword
        if self.terminator is not None:
            yield self.terminator


@dataclass(frozen=True)
class BlockStmt(Node):
    """Shared shape of ``if`` and ``while``: keyword condition EOL body end."""

    keyword: Token
    condition: Expression
    header_end: Union[Token, ErrorNode]
    body: Tuple[Statement, ...]
    end: Union[EndMarker, ErrorNode]

    def children(self):
        yield self.keyword
        yield self.condition
        yield self.header_end
        yield from self.body
        yield self.end


@dataclass(frozen=True)
class IfStmt(BlockStmt):
    pass


@dataclass(frozen=True)
class WhileStmt(BlockStmt):
    pass


Statement = Union[LetStmt, SetStmt, ExprStmt, IfStmt, WhileStmt, ErrorNode]


@dataclass(frozen=True)
class Program(Node):
    statements: Tuple[Statement, ...]
    eof: Token

    def children(self):
        yield from self.statements
        yield self.eof


def walk(node: Node) -> Iterator[Node]:
    """Pre-order traversal over nodes (tokens are not yielded)."""
    yield node
    for child in node.children():
        if isinstance(child, Node):
            yield from walk(child)


def errors(node: Node) -> Iterator[ErrorNode]:
    for n in walk(node):
        if isinstance(n, ErrorNode):
            yield n
