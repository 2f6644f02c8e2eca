"""TeX category-code tokenizer and macro definition parser."""

from __future__ import annotations

__version__ = "0.1.0"

from texlex.category import Category, CategoryTable, default_table
from texlex.errors import (
    ConfigError,
    ExpansionError,
    ExplicitBracesInParameterText,
    InvalidDefName,
    InvalidParameterNumber,
    NonConsecutiveParameterNumber,
)
from texlex.macros import Delimited, Macro, Undelimited, define
from texlex.tokenizer import Tokenizer, TokenizerState, tokenize
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

__all__ = [
    "Category",
    "CategoryTable",
    "Character",
    "Comment",
    "ConfigError",
    "ControlSequence",
    "Delimited",
    "ExpansionError",
    "ExplicitBracesInParameterText",
    "IgnoredCharacter",
    "InvalidCharacter",
    "InvalidDefName",
    "InvalidParameterNumber",
    "Macro",
    "NonConsecutiveParameterNumber",
    "Other",
    "Parameter",
    "Skipped",
    "Span",
    "Token",
    "Tokenizer",
    "TokenizerState",
    "Undelimited",
    "default_table",
    "define",
    "tokenize",
]
