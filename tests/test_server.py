import pytest
from lsprotocol import types
from pygls.exceptions import JsonRpcInvalidParams

from curage.types.position import Position
from curage_lsp import convert
from curage_lsp import server as handlers

URI = "file:///tmp/example.curage"


def _open(text, version=1, uri=URI):
    handlers.did_open(
        types.DidOpenTextDocumentParams(
            text_document=types.TextDocumentItem(uri=uri, language_id="curage", version=version, text=text)
        )
    )


def _change(text, version, uri=URI):
    handlers.did_change(
        types.DidChangeTextDocumentParams(
            text_document=types.VersionedTextDocumentIdentifier(uri=uri, version=version),
            content_changes=[types.TextDocumentContentChangeEvent_Type2(text=text)],
        )
    )


def _doc(uri=URI):
    return types.TextDocumentIdentifier(uri=uri)


def _pos(line, character):
    return types.Position(line=line, character=character)


def _range(sl, sc, el, ec):
    return types.Range(start=_pos(sl, sc), end=_pos(el, ec))


def test_open_publishes_diagnostics(server):
    _open("let x = y\n")
    ((uri, diagnostics, version),) = server.published
    assert uri == URI and version == 1
    (d,) = diagnostics
    assert d.message == "'y' is not defined."
    assert d.range == _range(0, 8, 0, 9)
    assert d.severity == types.DiagnosticSeverity.Warning
    assert d.source == "curage"


def test_clean_document_publishes_an_empty_list(server):
    _open("let x = 1\n")
    assert server.published == [(URI, [], 1)]


def test_change_replaces_the_snapshot(server):
    _open("let x = y\n")
    _change("let y = 1\nlet x = y\n", version=2)
    assert server.documents.get(URI).version == 2
    assert server.published[-1] == (URI, [], 2)


def test_stale_change_is_ignored(server):
    _open("let x = 1\n", version=3)
    _change("let x = nope\n", version=2)
    assert server.documents.get(URI).text == "let x = 1\n"
    assert len(server.published) == 1


def test_close_clears_diagnostics(server):
    _open("let x = y\n")
    handlers.did_close(types.DidCloseTextDocumentParams(text_document=_doc()))
    assert URI not in server.documents
    assert server.published[-1] == (URI, [], None)


def test_document_highlight(server):
    _open("let x = 1\nlet y = x + x\n")
    result = handlers.on_document_highlight(types.DocumentHighlightParams(text_document=_doc(), position=_pos(1, 12)))
    assert [(h.kind, h.range) for h in result] == [
        (types.DocumentHighlightKind.Write, _range(0, 4, 0, 5)),
        (types.DocumentHighlightKind.Read, _range(1, 8, 1, 9)),
        (types.DocumentHighlightKind.Read, _range(1, 12, 1, 13)),
    ]


def test_document_highlight_off_a_name(server):
    _open("let x = 1\n")
    params = types.DocumentHighlightParams(text_document=_doc(), position=_pos(0, 1))
    assert handlers.on_document_highlight(params) is None


def test_queries_on_unknown_documents(server):
    params = types.DocumentHighlightParams(text_document=_doc("file:///nowhere"), position=_pos(0, 0))
    assert handlers.on_document_highlight(params) is None


@pytest.mark.parametrize(
    "include,expected",
    [
        (False, [_range(2, 0, 2, 1), _range(2, 2, 2, 3)]),
        (True, [_range(1, 4, 1, 5), _range(2, 0, 2, 1), _range(2, 2, 2, 3)]),
    ],
)
def test_references(server, include, expected):
    _open("let a = 1;\nlet a = a;\na(a);")
    params = types.ReferenceParams(
        text_document=_doc(),
        position=_pos(1, 4),
        context=types.ReferenceContext(include_declaration=include),
    )
    locations = handlers.on_references(params)
    assert [loc.uri for loc in locations] == [URI] * len(expected)
    assert [loc.range for loc in locations] == expected


def test_prepare_rename(server):
    _open("let total = 0\nset total = total + 1\n")
    params = types.PrepareRenameParams(text_document=_doc(), position=_pos(1, 14))
    assert handlers.on_prepare_rename(params) == _range(1, 12, 1, 17)
    params = types.PrepareRenameParams(text_document=_doc(), position=_pos(1, 0))
    assert handlers.on_prepare_rename(params) is None


def test_rename(server):
    _open("let a = 1\nset a = a + 2\n", version=7)
    params = types.RenameParams(text_document=_doc(), position=_pos(0, 4), new_name="count")
    edit = handlers.on_rename(params)
    (change,) = edit.document_changes
    assert change.text_document.uri == URI
    assert change.text_document.version == 7
    assert [(e.range, e.new_text) for e in change.edits] == [
        (_range(0, 4, 0, 5), "count"),
        (_range(1, 4, 1, 5), "count"),
        (_range(1, 8, 1, 9), "count"),
    ]


@pytest.mark.parametrize("new_name", ["", "1abc", "two words", "let", "a-b"])
def test_rename_rejects_invalid_names(server, new_name):
    _open("let a = 1\n")
    params = types.RenameParams(text_document=_doc(), position=_pos(0, 4), new_name=new_name)
    with pytest.raises(JsonRpcInvalidParams):
        handlers.on_rename(params)


@pytest.mark.parametrize("new_name", ["b", "1abc", "let"])
def test_rename_off_a_name(server, new_name):
    # nothing to edit, so the new name is never checked
    _open("let a = 1\n")
    params = types.RenameParams(text_document=_doc(), position=_pos(0, 8), new_name=new_name)
    assert handlers.on_rename(params) is None


def test_document_symbols(server):
    _open("let a = 1\nlet b = a\nset a = b\n")
    symbols = handlers.on_document_symbols(types.DocumentSymbolParams(text_document=_doc()))
    assert [(s.name, s.kind, s.range) for s in symbols] == [
        ("a", types.SymbolKind.Variable, _range(0, 4, 0, 5)),
        ("b", types.SymbolKind.Variable, _range(1, 4, 1, 5)),
    ]
    assert symbols[0].detail == "2 reference(s)"


def test_positions_are_utf16_on_the_wire(server):
    # the emoji is one character but two UTF-16 code units
    _open("😀 let a = 1\nset a = 2\n")
    (_, diagnostics, _) = server.published[-1]
    assert [d.range for d in diagnostics] == [_range(0, 0, 0, 2)]

    params = types.ReferenceParams(
        text_document=_doc(),
        position=_pos(0, 7),
        context=types.ReferenceContext(include_declaration=True),
    )
    assert [loc.range for loc in handlers.on_references(params)] == [_range(0, 7, 0, 8), _range(1, 4, 1, 5)]


def test_position_conversion():
    lines = ["😀 x"]
    assert convert.to_lsp_position(lines, Position(0, 2)) == _pos(0, 3)
    assert convert.from_lsp_position(lines, _pos(0, 3)) == Position(0, 2)
    assert convert.to_lsp_position(["plain"], Position(0, 4)) == _pos(0, 4)


@pytest.mark.parametrize(
    "argv,expected",
    [
        (["--tcp"], ("tcp", "127.0.0.1", 2087)),
        (["--tcp", "--host", "0.0.0.0", "--port", "9999"], ("tcp", "0.0.0.0", 9999)),
        ([], ("io",)),
    ],
)
def test_entry_point_picks_the_transport(monkeypatch, argv, expected):
    from curage_lsp.__main__ import main

    calls = []
    monkeypatch.delenv("CURAGE_LS_HOST", raising=False)
    monkeypatch.delenv("CURAGE_LS_PORT", raising=False)
    monkeypatch.setattr(handlers.ls, "start_tcp", lambda host, port: calls.append(("tcp", host, port)), raising=False)
    monkeypatch.setattr(handlers.ls, "start_io", lambda: calls.append(("io",)), raising=False)
    assert main(argv) == 0
    assert calls == [expected]
