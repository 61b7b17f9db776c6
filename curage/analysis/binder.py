"""Name resolution.

A single depth-first, left-to-right walk over the syntax tree that connects
every name occurrence to the declaration it refers to.

- ``let x = e``: resolve ``e`` first, then declare a new symbol for ``x`` in
  the innermost frame. ``let x = x`` therefore refers to an earlier ``x``.
- ``set x = e``: resolve ``e`` first, then resolve ``x`` as a reference to
  the visible symbol. ``set`` never declares.
- ``if``/``while``: the body runs in a child frame. With ``block_scoping``
  off, the frame's bindings are merged outward when the block closes, so
  names introduced inside stay visible after ``end``; with it on, they are
  dropped.
- Tokens inside ErrorNodes are never resolved.

Each failed lookup adds one diagnostic and the walk goes on.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from curage.errors import CurageNameError
from curage.reader.nodes import (
    AtomicExpr,
    BinaryExpr,
    BindingStmt,
    BlockStmt,
    CallExpr,
    EndMarker,
    ErrorNode,
    ExprStmt,
    LetStmt,
    Node,
    Program,
    SetStmt,
)
from curage.types.diagnostic import Diagnostic
from curage.types.environment import Environment
from curage.types.symbol import SymbolTable, SymbolTableBuilder
from curage.types.token import Token, TokenKind

logger = logging.getLogger(__name__)


def undefined_message(name: str) -> str:
    return f"'{name}' is not defined."


class Binder:
    def __init__(self, block_scoping: bool = False):
        self.block_scoping = block_scoping
        self.env = Environment()
        self.table = SymbolTableBuilder()
        self.diagnostics: list[Diagnostic] = []

    @contextmanager
    def _block_scope(self) -> Iterator[Environment]:
        self.env = self.env.child()
        try:
            yield self.env
        finally:
            if self.block_scoping:
                self.env = self.env.outer
            else:
                self.env = self.env.merge_into_outer()

    def declare(self, token: Token) -> None:
        symbol_id = self.table.declare(token)
        self.env.define(token.text, symbol_id)

    def refer(self, token: Token) -> None:
        try:
            symbol_id = self.env.lookup(token.text)
        except CurageNameError:
            self.diagnostics.append(Diagnostic(undefined_message(token.text), token.range))
            return
        self.table.refer(symbol_id, token)

    def visit(self, node: Node) -> None:
        if isinstance(node, ErrorNode):
            return

        if isinstance(node, AtomicExpr):
            if node.token.kind is TokenKind.NAME:
                self.refer(node.token)
            return

        if isinstance(node, BinaryExpr):
            self.visit(node.left)
            self.visit(node.right)
            return

        if isinstance(node, CallExpr):
            self.visit(node.callee)
            if node.argument is not None:
                self.visit(node.argument)
            return

        if isinstance(node, BindingStmt):
            self.visit(node.value)
            if isinstance(node, LetStmt):
                self.declare(node.name)
            elif isinstance(node, SetStmt):
                self.refer(node.name)
            return

        if isinstance(node, ExprStmt):
            self.visit(node.expression)
            return

        if isinstance(node, BlockStmt):
            self.visit(node.condition)
            with self._block_scope():
                for statement in node.body:
                    self.visit(statement)
            return

        if isinstance(node, Program):
            for statement in node.statements:
                self.visit(statement)
            return

        if isinstance(node, EndMarker):
            return

        raise TypeError(f"Unknown syntax node: {type(node).__name__}")


def bind(program: Program, block_scoping: bool = False) -> tuple[SymbolTable, list[Diagnostic]]:
    binder = Binder(block_scoping=block_scoping)
    binder.visit(program)
    table = binder.table.build()
    logger.debug(
        "bound %d symbols with %d semantic diagnostics",
        len(table),
        len(binder.diagnostics),
    )
    return table, binder.diagnostics
