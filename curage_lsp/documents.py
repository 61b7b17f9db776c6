"""Per-document snapshots.

The store maps a document URI to the snapshot built from its latest text.
Snapshots are frozen; an update replaces the whole entry. Only the
open/change/close handlers write to the store, queries only read from it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from curage.analysis.model import SemanticModel, analyze_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentSnapshot:
    uri: str
    version: Optional[int]
    text: str
    model: SemanticModel

    @property
    def lines(self):
        return self.model.syntax.lines


class DocumentStore:
    def __init__(self, block_scoping: bool = False):
        self.block_scoping = block_scoping
        self._snapshots: Dict[str, DocumentSnapshot] = {}

    def update(self, uri: str, version: Optional[int], text: str) -> Optional[DocumentSnapshot]:
        """Analyse ``text`` and make it the current snapshot for ``uri``.

        Returns None, leaving the store untouched, when ``version`` is older
        than the stored one.
        """
        current = self._snapshots.get(uri)
        if current is not None and current.version is not None and version is not None:
            if current.version > version:
                logger.warning("ignoring stale update for %s (version %s < %s)", uri, version, current.version)
                return None

        model = analyze_source(text, block_scoping=self.block_scoping)
        snapshot = DocumentSnapshot(uri=uri, version=version, text=text, model=model)
        self._snapshots[uri] = snapshot
        logger.info(
            "analysed %s v%s: %d symbols, %d diagnostics",
            uri,
            version,
            len(model.table),
            len(model.all_diagnostics),
        )
        return snapshot

    def get(self, uri: str) -> Optional[DocumentSnapshot]:
        return self._snapshots.get(uri)

    def close(self, uri: str) -> bool:
        return self._snapshots.pop(uri, None) is not None

    def __contains__(self, uri: str) -> bool:
        return uri in self._snapshots

    def __iter__(self) -> Iterator[str]:
        return iter(self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)
