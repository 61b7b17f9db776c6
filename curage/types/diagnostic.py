from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from curage.types.position import Range

SOURCE = "curage"


class Severity(IntEnum):
    # Same numbering as the LSP DiagnosticSeverity
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


@dataclass(frozen=True)
class Diagnostic:
    """An advisory message attached to a source range. Never fatal."""

    message: str
    range: Range
    severity: Severity = Severity.WARNING
    source: str = SOURCE
