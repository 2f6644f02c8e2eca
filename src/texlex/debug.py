"""Human-readable dumps of token streams and category tables."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from texlex.category import CategoryTable
from texlex.tokens import (
    Character,
    Comment,
    ControlSequence,
    IgnoredCharacter,
    InvalidCharacter,
    Other,
    Parameter,
    Skipped,
    Span,
    Token,
)


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token to *file*."""
    for token in tokens:
        file.write(f"{describe(token)}\n")


def dump_table(table: CategoryTable, *, file: TextIO = sys.stderr) -> None:
    """Print the table's intervals as ``lo-hi CATEGORY`` lines."""
    lower = 0
    for upper, category in table.intervals:
        file.write(f"U+{lower:04X}-U+{upper - 1:04X} {category.name}\n")
        lower = upper


def _span(span: Span | None) -> str:
    if span is None:
        return "?"
    end = "?" if span.end is None else str(span.end)
    return f"{span.line}:{span.start}-{end}"


def describe(token: Token) -> str:
    match token:
        case ControlSequence(name, span):
            return f"ControlSequence {name!r} {_span(span)}"
        case Character(value, category):
            return f"Character {value!r} {category.name}"
        case Parameter(index):
            return f"Parameter #{index}"
        case Other(Comment(text), span):
            return f"Comment {text!r} {_span(span)}"
        case Other(IgnoredCharacter(char), span):
            return f"Ignored {char!r} {_span(span)}"
        case Other(InvalidCharacter(char), span):
            return f"Invalid {char!r} {_span(span)}"
        case Other(Skipped(text), span):
            return f"Skipped {text!r} {_span(span)}"
    raise TypeError(f"not a token: {token!r}")
