"""
A pygls-based Language Server for curage.

Features:
- Initialize/Shutdown/Exit
- Full text synchronization and a per-document snapshot store
- Diagnostics: syntax errors and undefined names, republished on every change
- Document highlight: write/read occurrences of the symbol under the cursor
- References: all occurrences, optionally with the declaration
- Prepare rename / Rename: one edit per occurrence, versioned document edit
- Document Symbols: one entry per declaration

Positions on the wire are UTF-16 code units (see curage_lsp.convert).
"""

from __future__ import annotations

import logging
from typing import List, Optional

from pygls.exceptions import JsonRpcInvalidParams
from pygls.server import LanguageServer
from lsprotocol.types import (
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentHighlight,
    DocumentHighlightParams,
    DocumentSymbol,
    DocumentSymbolParams,
    InitializeParams,
    Location,
    OptionalVersionedTextDocumentIdentifier,
    PrepareRenameParams,
    Range,
    ReferenceParams,
    RenameParams,
    TextDocumentEdit,
    TextDocumentSyncKind,
    WorkspaceEdit,
)

from curage import __version__, config
from curage.analysis import query
from curage.errors import CurageRenameError
from curage.reader.lexer import is_valid_name
from curage_lsp import convert
from curage_lsp.documents import DocumentSnapshot, DocumentStore

logger = logging.getLogger(__name__)


class CurageLanguageServer(LanguageServer):
    CMD_NAME = "curage-ls"

    def __init__(self, block_scoping: Optional[bool] = None):
        super().__init__(self.CMD_NAME, __version__, text_document_sync_kind=TextDocumentSyncKind.Full)
        if block_scoping is None:
            block_scoping = config.get_block_scoping()
        self.documents = DocumentStore(block_scoping=block_scoping)


ls = CurageLanguageServer()


@ls.feature("initialize")
def on_initialize(params: InitializeParams):
    client = params.client_info.name if params.client_info else "unknown client"
    logger.info("initialize from %s (block scoping: %s)", client, ls.documents.block_scoping)


@ls.feature("shutdown")
def on_shutdown(*_):
    logger.info("shutdown requested; %d document(s) open", len(ls.documents))
    return None


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    doc = params.text_document
    _update(doc.uri, doc.version, doc.text or "")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        current = ls.documents.get(uri)
        text = current.text if current else ""
    _update(uri, params.text_document.version, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.close(uri)
    ls.publish_diagnostics(uri, [])


def _update(uri: str, version: Optional[int], text: str) -> None:
    snapshot = ls.documents.update(uri, version, text)
    if snapshot is None:
        return
    _publish_diagnostics(snapshot)


# --- Diagnostics ---
def _publish_diagnostics(snapshot: DocumentSnapshot) -> None:
    diags = convert.to_lsp_diagnostics(snapshot.lines, snapshot.model.all_diagnostics)
    ls.publish_diagnostics(snapshot.uri, diags, version=snapshot.version)


# --- Queries ---
def _cursor(uri: str, position):
    snapshot = ls.documents.get(uri)
    if snapshot is None:
        logger.debug("query on unknown document %s", uri)
        return None, None
    return snapshot, convert.from_lsp_position(snapshot.lines, position)


@ls.feature("textDocument/documentHighlight")
def on_document_highlight(params: DocumentHighlightParams) -> Optional[List[DocumentHighlight]]:
    snapshot, pos = _cursor(params.text_document.uri, params.position)
    if snapshot is None:
        return None
    highlights = query.compute_highlights(snapshot.model, pos)
    if not highlights:
        return None
    return [convert.to_lsp_highlight(snapshot.lines, h) for h in highlights]


@ls.feature("textDocument/references")
def on_references(params: ReferenceParams) -> Optional[List[Location]]:
    snapshot, pos = _cursor(params.text_document.uri, params.position)
    if snapshot is None:
        return None
    include = bool(params.context and params.context.include_declaration)
    ranges = query.find_references(snapshot.model, pos, include_declaration=include)
    return [Location(uri=snapshot.uri, range=convert.to_lsp_range(snapshot.lines, r)) for r in ranges]


@ls.feature("textDocument/prepareRename")
def on_prepare_rename(params: PrepareRenameParams) -> Optional[Range]:
    snapshot, pos = _cursor(params.text_document.uri, params.position)
    if snapshot is None:
        return None
    rng = query.prepare_rename(snapshot.model, pos)
    if rng is None:
        return None
    return convert.to_lsp_range(snapshot.lines, rng)


def check_new_name(new_name: str) -> str:
    if not is_valid_name(new_name):
        raise CurageRenameError(f"'{new_name}' is not a valid name.")
    return new_name


@ls.feature("textDocument/rename")
def on_rename(params: RenameParams) -> Optional[WorkspaceEdit]:
    snapshot, pos = _cursor(params.text_document.uri, params.position)
    if snapshot is None:
        return None
    edits = query.compute_rename_edits(snapshot.model, pos, params.new_name)
    if edits is None:
        return None

    # only a rename that would edit something is checked
    try:
        check_new_name(params.new_name)
    except CurageRenameError as ex:
        raise JsonRpcInvalidParams(message=str(ex)) from ex

    document = OptionalVersionedTextDocumentIdentifier(uri=snapshot.uri, version=snapshot.version)
    changes = TextDocumentEdit(
        text_document=document,
        edits=[convert.to_lsp_text_edit(snapshot.lines, e) for e in edits],
    )
    return WorkspaceEdit(document_changes=[changes])


# --- Document Symbols ---
@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    snapshot = ls.documents.get(params.text_document.uri)
    if snapshot is None:
        return None
    model = snapshot.model
    symbols: List[DocumentSymbol] = []
    for symbol in query.document_symbols(model):
        definition = model.definition_tokens(symbol)[0]
        symbols.append(convert.to_lsp_document_symbol(snapshot.lines, symbol, definition.range))
    return symbols


if __name__ == "__main__":
    # Run the language server over stdio
    ls.start_io()
