"""TeX tokenizer — converts input lines into a lazy token stream."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from enum import Enum, auto

from texlex.category import Category, CategoryTable, default_table
from texlex.tokens import (
    Character,
    Comment,
    ControlSequence,
    IgnoredCharacter,
    InvalidCharacter,
    Other,
    Skipped,
    Span,
    Token,
)

DEFAULT_END_OF_LINE_CHAR = 13

_HEX_DIGITS = frozenset("0123456789abcdef")

# Categories that turn into a Character token as-is
_CHARACTER_CATEGORIES = frozenset(
    {
        Category.GROUP_OPEN,
        Category.GROUP_CLOSE,
        Category.MATH_SHIFT,
        Category.ALIGNMENT,
        Category.PARAMETER,
        Category.SUPERSCRIPT,
        Category.SUBSCRIPT,
        Category.LETTER,
        Category.OTHER,
        Category.ACTIVE,
    }
)


class TokenizerState(Enum):
    LINE_START = auto()
    LINE_MIDDLE = auto()
    SKIPPING_BLANKS = auto()


class Tokenizer:
    """Scan input lines into Tokens on demand.

    A tokenizer is single-pass and single-owner: tokens are produced as they
    are pulled and cannot be replayed. Category changes made between pulls
    apply to characters scanned afterwards only.
    """

    def __init__(
        self,
        lines: Iterable[str],
        *,
        table: CategoryTable | None = None,
        end_of_line_char: int = DEFAULT_END_OF_LINE_CHAR,
    ) -> None:
        self._lines = iter(lines)
        self._table = table.copy() if table is not None else default_table()
        self._end_of_line_char = end_of_line_char
        self._state = TokenizerState.LINE_START
        self._line = ""
        self._pos = 0
        self._line_number = 0
        self._pending: deque[Token] = deque()

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self) -> Token | None:
        """Return the next token, or None once the line source is exhausted."""
        while not self._pending:
            if not self._scan():
                return None
        return self._pending.popleft()

    # ------------------------------------------------------------------
    # Category and end-of-line control
    # ------------------------------------------------------------------

    @property
    def state(self) -> TokenizerState:
        return self._state

    @property
    def line_number(self) -> int:
        return self._line_number

    def category(self, char: str | int) -> Category:
        return self._table.get(_code(char))

    def set_category(self, char: str | int, category: Category) -> None:
        self._table.assign_single(_code(char), category)

    def get_end_of_line_char(self) -> int:
        return self._end_of_line_char

    def set_end_of_line_char(self, code: int) -> None:
        """Set the character appended to each line; outside 0-255 disables it."""
        self._end_of_line_char = code

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def _next_line(self) -> bool:
        line = next(self._lines, None)
        if line is None:
            return False
        line = line.rstrip(" ")
        if 0 <= self._end_of_line_char <= 255:
            line += chr(self._end_of_line_char)
        self._line = line
        self._pos = 0
        self._line_number += 1
        self._state = TokenizerState.LINE_START
        return True

    def _superscript_escape(self) -> tuple[str, int] | None:
        """Decode a ^^x or ^^hh escape at the cursor.

        Returns the decoded character and the number of source characters it
        occupies.
        """
        line, pos = self._line, self._pos
        if pos + 2 >= len(line):
            return None
        first = line[pos]
        if line[pos + 1] != first or self._table.get(ord(first)) != Category.SUPERSCRIPT:
            return None

        digits = line[pos + 2 : pos + 4]
        if len(digits) == 2 and digits[0] in _HEX_DIGITS and digits[1] in _HEX_DIGITS:
            return chr(int(digits, 16)), 4

        code = ord(line[pos + 2])
        if code >= 128:
            return None
        return chr(code + 64 if code < 64 else code - 64), 3

    def _pop_char(self) -> str | None:
        escape = self._superscript_escape()
        if escape is not None:
            ch, length = escape
            self._pos += length
            return ch
        if self._pos < len(self._line):
            ch = self._line[self._pos]
            self._pos += 1
            return ch
        return None

    def _look_ahead(self) -> str | None:
        escape = self._superscript_escape()
        if escape is not None:
            return escape[0]
        if self._pos < len(self._line):
            return self._line[self._pos]
        return None

    def _rest_of_line(self) -> str:
        chars = []
        while True:
            ch = self._pop_char()
            if ch is None:
                return "".join(chars)
            chars.append(ch)

    def _span_from(self, start: int) -> Span:
        return Span(self._line_number, start, self._pos - 1)

    def _space_token(self) -> Character:
        return Character(" ", self._table.get(ord(" ")))

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _scan(self) -> bool:
        """Consume input until at least one token is queued.

        Returns False when the input is exhausted.
        """
        while True:
            start = self._pos
            ch = self._pop_char()
            if ch is not None:
                break
            if not self._next_line():
                return False

        cat = self._table.get(ord(ch))

        if cat == Category.ESCAPE:
            self._scan_control_sequence(start)

        elif cat in _CHARACTER_CATEGORIES:
            self._pending.append(Character(ch, cat))
            self._state = TokenizerState.LINE_MIDDLE

        elif cat == Category.END_OF_LINE:
            arrival = self._state
            discarded = self._rest_of_line()
            if discarded:
                self._pending.append(Other(Skipped(discarded), self._span_from(start)))
            if arrival == TokenizerState.LINE_START:
                self._pending.append(ControlSequence("par", self._span_from(start)))
            elif arrival == TokenizerState.LINE_MIDDLE:
                self._pending.append(self._space_token())

        elif cat == Category.IGNORED:
            self._pending.append(Other(IgnoredCharacter(ch), self._span_from(start)))

        elif cat == Category.SPACE:
            if self._state == TokenizerState.LINE_MIDDLE:
                self._pending.append(self._space_token())
                self._state = TokenizerState.SKIPPING_BLANKS
            else:
                run = [ch]
                while True:
                    nxt = self._look_ahead()
                    if nxt is None or self._table.get(ord(nxt)) != Category.SPACE:
                        break
                    self._pop_char()
                    run.append(nxt)
                self._pending.append(Other(Skipped("".join(run)), self._span_from(start)))

        elif cat == Category.COMMENT:
            text = self._rest_of_line()
            self._pending.append(Other(Comment(text), self._span_from(start)))

        else:  # Category.INVALID
            self._pending.append(Other(InvalidCharacter(ch), self._span_from(start)))

        return True

    def _scan_control_sequence(self, start: int) -> None:
        first = self._pop_char()
        if first is None:
            self._pending.append(ControlSequence("", self._span_from(start)))
            return

        name = [first]
        cat = self._table.get(ord(first))
        if cat == Category.LETTER:
            while True:
                nxt = self._look_ahead()
                if nxt is None or self._table.get(ord(nxt)) != Category.LETTER:
                    break
                self._pop_char()
                name.append(nxt)
            self._state = TokenizerState.SKIPPING_BLANKS
        elif cat == Category.SPACE:
            self._state = TokenizerState.SKIPPING_BLANKS
        else:
            self._state = TokenizerState.LINE_MIDDLE

        self._pending.append(ControlSequence("".join(name), self._span_from(start)))


def _code(char: str | int) -> int:
    if isinstance(char, int):
        return char
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")
    return ord(char)


def split_lines(source: str) -> list[str]:
    """Split text into physical lines without their terminators."""
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def tokenize(
    source: str,
    *,
    table: CategoryTable | None = None,
    end_of_line_char: int = DEFAULT_END_OF_LINE_CHAR,
) -> list[Token]:
    """Convenience function: tokenize source text and return the token list."""
    tokenizer = Tokenizer(split_lines(source), table=table, end_of_line_char=end_of_line_char)
    return list(tokenizer)
