"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from texlex.category import Category
from texlex.tokenizer import Tokenizer, split_lines, tokenize
from texlex.tokens import Character, ControlSequence, Other, Token

NO_END_OF_LINE = 256


@pytest.fixture
def lex():
    """Return a helper that tokenizes source with the default end-of-line char."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def lex_bare():
    """Return a helper that tokenizes source with the end-of-line char disabled."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source, end_of_line_char=NO_END_OF_LINE)

    return _lex


def tokenizer_for(source: str, **kwargs) -> Tokenizer:
    return Tokenizer(split_lines(source), **kwargs)


def letters(text: str) -> list[Character]:
    return [Character(ch, Category.LETTER) for ch in text]


def space() -> Character:
    return Character(" ", Category.SPACE)


def semantic(tokens: list[Token]) -> list[Token]:
    """Drop diagnostic tokens."""
    return [t for t in tokens if not isinstance(t, Other)]


def names(tokens: list[Token]) -> list[str]:
    """Return the names of all control sequences."""
    return [t.name for t in tokens if isinstance(t, ControlSequence)]
