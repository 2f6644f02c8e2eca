"""Token value types and source spans."""

from __future__ import annotations

from dataclasses import dataclass

from texlex.category import Category


@dataclass(frozen=True, slots=True)
class Span:
    """Source range on one line: 1-based line, 0-based inclusive columns.

    Columns count raw characters of the loaded line. ``end`` is None when the
    end of the range is not known.
    """

    line: int
    start: int
    end: int | None = None


@dataclass(frozen=True, slots=True)
class ControlSequence:
    """An escape character followed by one character or a run of letters."""

    name: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Character:
    """A single character together with the category it was scanned under."""

    value: str
    category: Category


@dataclass(frozen=True, slots=True)
class Parameter:
    """A resolved macro parameter reference, #1 to #9."""

    index: int

    def __post_init__(self) -> None:
        if not 1 <= self.index <= 9:
            raise ValueError(f"parameter index must be 1-9, got {self.index}")


# Diagnostic payloads for input the grammar drops or rejects


@dataclass(frozen=True, slots=True)
class Comment:
    text: str


@dataclass(frozen=True, slots=True)
class IgnoredCharacter:
    char: str


@dataclass(frozen=True, slots=True)
class InvalidCharacter:
    char: str


@dataclass(frozen=True, slots=True)
class Skipped:
    """Whitespace or line remainder consumed without producing a token."""

    text: str


OtherToken = Comment | IgnoredCharacter | InvalidCharacter | Skipped


@dataclass(frozen=True, slots=True)
class Other:
    """Diagnostic token wrapping an OtherToken payload."""

    kind: OtherToken
    span: Span | None = None


Token = ControlSequence | Character | Parameter | Other
