"""Binding environment used by the binder.

An Environment maps names to symbol ids and links to its enclosing frame via
``outer``; the chain of frames is the scope stack. Each ``if``/``while`` body
gets its own frame. Whether a body's bindings survive the block is decided by
the caller when the frame is popped (see ``Environment.merge_into_outer``).
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from curage.errors import CurageInvalidSymbol, CurageNameError


class Environment:
    """Hierarchical mapping from names to symbol ids."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, int] = {}
        self.outer: Environment | None = outer

    def define(self, name: str, symbol_id: int) -> None:
        """Bind ``name`` in this frame, shadowing any binding further out."""
        if not isinstance(name, str) or not name:
            raise CurageInvalidSymbol(f"Cannot define {name!r} as a name")
        self.vars[name] = symbol_id

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest frame in the chain that binds ``name``."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: str) -> int:
        """Return the symbol id visible for ``name``, innermost frame first.

        Raises CurageNameError if no frame binds it.
        """
        env = self.find(name)
        if env is None:
            raise CurageNameError(f"'{name}' is not defined.")
        return env.vars[name]

    def child(self) -> Environment:
        return Environment(outer=self)

    def update(self, mapping: dict[str, int]) -> None:
        """Bulk-define a mapping of name -> symbol id in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def merge_into_outer(self) -> Environment:
        """Copy this frame's bindings into the enclosing frame and return it."""
        if self.outer is None:
            raise CurageInvalidSymbol("Cannot merge the outermost frame")
        self.outer.update(self.vars)
        return self.outer

    @property
    def depth(self) -> int:
        n, env = 0, self.outer
        while env is not None:
            n, env = n + 1, env.outer
        return n

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's bindings into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: #{v}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env = self
            chain = []
            while env is not None:
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
