"""Minimal LSP server for TeX sources — diagnostics only."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

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

from texlex import __version__
from texlex.category import Category
from texlex.config import Config, load_config, resolve_config
from texlex.errors import ExpansionError
from texlex.tokenizer import split_lines
from texlex.tokens import Character, ControlSequence, InvalidCharacter, Other, Span, Token

DEFINITION_COMMANDS = frozenset({"def", "gdef", "edef", "xdef"})


class TexLexServer(LanguageServer):
    """Language server carrying the resolved texlex configuration."""

    def __init__(self, config: Config | None = None) -> None:
        super().__init__(
            "texlex-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
        )
        self.config = config or Config()


server = TexLexServer()


@dataclass(frozen=True, slots=True)
class _Definition:
    command: ControlSequence
    name: Token | None
    parameter_text: tuple[Token, ...]
    replacement_text: tuple[Token, ...]
    closed: bool


def _is_char(token: Token, category: Category) -> bool:
    return isinstance(token, Character) and token.category == category


def _definitions(tokens: list[Token]) -> Iterator[_Definition]:
    """Split \\def-style definitions out of a token list.

    Diagnostic tokens are dropped first. The parameter text runs up to the
    first group-open character; the replacement text is the balanced group
    that follows.
    """
    semantic = [t for t in tokens if not isinstance(t, Other)]
    pos = 0
    while pos < len(semantic):
        token = semantic[pos]
        pos += 1
        if not isinstance(token, ControlSequence) or token.name not in DEFINITION_COMMANDS:
            continue

        name = semantic[pos] if pos < len(semantic) else None
        pos += 1

        parameter_text: list[Token] = []
        while pos < len(semantic) and not _is_char(semantic[pos], Category.GROUP_OPEN):
            parameter_text.append(semantic[pos])
            pos += 1
        pos += 1  # opening brace

        replacement_text: list[Token] = []
        depth = 1
        while pos < len(semantic):
            tok = semantic[pos]
            pos += 1
            if _is_char(tok, Category.GROUP_OPEN):
                depth += 1
            elif _is_char(tok, Category.GROUP_CLOSE):
                depth -= 1
                if depth == 0:
                    break
            replacement_text.append(tok)

        yield _Definition(token, name, tuple(parameter_text), tuple(replacement_text), depth == 0)


def _range(span: Span | None) -> Range:
    if span is None:
        return Range(start=Position(line=0, character=0), end=Position(line=0, character=0))
    line = span.line - 1
    end = span.end if span.end is not None else span.start
    return Range(
        start=Position(line=line, character=span.start),
        end=Position(line=line, character=end + 1),
    )


def _diagnostic(span: Span | None, message: str, severity: DiagnosticSeverity) -> Diagnostic:
    return Diagnostic(range=_range(span), message=message, severity=severity, source="texlex")


def collect_diagnostics(source: str, config: Config) -> list[Diagnostic]:
    """Tokenize *source* and report invalid characters and bad definitions."""
    tokens = list(config.build_tokenizer(split_lines(source)))
    diagnostics: list[Diagnostic] = []

    for token in tokens:
        if isinstance(token, Other) and isinstance(token.kind, InvalidCharacter):
            diagnostics.append(
                _diagnostic(
                    token.span,
                    f"invalid character U+{ord(token.kind.char):04X}",
                    DiagnosticSeverity.Warning,
                )
            )

    for definition in _definitions(tokens):
        if definition.name is None or not definition.closed:
            diagnostics.append(
                _diagnostic(
                    definition.command.span,
                    f"runaway definition: \\{definition.command.name} is never closed",
                    DiagnosticSeverity.Error,
                )
            )
            continue
        try:
            config.define(definition.name, definition.parameter_text, definition.replacement_text)
        except ExpansionError as exc:
            span = exc.span if exc.span is not None else definition.command.span
            diagnostics.append(_diagnostic(span, exc.message, DiagnosticSeverity.Error))

    return diagnostics


def _validate(ls: LanguageServer, uri: str, config: Config | None = None) -> None:
    """Tokenize the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics = collect_diagnostics(doc.source, config or Config())
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: TexLexServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri, ls.config)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: TexLexServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri, ls.config)


def main() -> None:
    server.config = resolve_config(load_config(None, Path.cwd()))
    server.start_io()
