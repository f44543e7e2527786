"""Minimal LSP server for Monkey — syntax diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from monkey import __version__
from monkey.errors import Diagnostic as SyntaxDiagnostic
from monkey.parser import parse

server = LanguageServer("monkey-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _lsp_position(lines: list[bytes], line: int, column: int) -> Position:
    """Convert a 1-based line and byte column to a 0-based UTF-16 position."""
    index = line - 1
    if 0 <= index < len(lines):
        prefix = lines[index][: column - 1].decode("utf-8", errors="replace")
        character = len(prefix.encode("utf-16-le")) // 2
    else:
        character = column - 1
    return Position(line=index, character=character)


def _to_lsp(diag: SyntaxDiagnostic, lines: list[bytes]) -> Diagnostic:
    if diag.span is None:
        start = end = Position(line=0, character=0)
    else:
        start = _lsp_position(lines, diag.span.start.line, diag.span.start.column)
        end = _lsp_position(lines, diag.span.end.line, diag.span.end.column)
        # Zero-width spans (EOF) still need something to underline.
        if end == start:
            end = Position(line=start.line, character=start.character + 1)
    return Diagnostic(
        range=Range(start=start, end=end),
        message=diag.message,
        severity=DiagnosticSeverity.Error,
        source="monkey",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the document and publish every syntax error found."""
    doc = ls.workspace.get_text_document(uri)
    data = doc.source.encode("utf-8")
    _, found = parse(data)
    lines = data.split(b"\n")
    diagnostics = [_to_lsp(d, lines) for d in found]

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
