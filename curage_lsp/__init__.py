"""curage Language Server package.

This package provides:
- A pygls-based Language Server for the curage toy language.
- A document store holding one immutable analysis snapshot per open document.
- Conversions between curage core types and lsprotocol types.

Note: The server never runs user programs; it only analyses their text.
"""

__all__ = [
    "server",
    "documents",
    "convert",
]
