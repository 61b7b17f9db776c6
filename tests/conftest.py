import pytest

from curage.analysis.model import analyze_source

# Binder tests that care about block scoping take the `block_scoping`
# fixture and run twice: once with if/while bodies leaking their bindings
# into the enclosing scope (the default) and once with them kept local.
# Server tests take `server` to get the module-level language server with a
# fresh document store and a recorder in place of publish_diagnostics.


@pytest.fixture(params=[False, True], ids=["leaky-blocks", "block-scoping"])
def block_scoping(request):
    return request.param


@pytest.fixture
def analyze():
    return analyze_source


@pytest.fixture
def server(monkeypatch):
    from curage_lsp.documents import DocumentStore
    from curage_lsp.server import ls

    published = []

    def record(uri, diagnostics, version=None):
        published.append((uri, list(diagnostics), version))

    monkeypatch.setattr(ls, "documents", DocumentStore())
    monkeypatch.setattr(ls, "publish_diagnostics", record, raising=False)
    monkeypatch.setattr(ls, "published", published, raising=False)
    return ls
