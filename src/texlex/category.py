"""Category codes and the interval table that assigns them to code points."""

from __future__ import annotations

from enum import Enum

# Exclusive upper bound of the code-point domain.
DOMAIN_END = 0x110000


class Category(Enum):
    ESCAPE = 0  # \
    GROUP_OPEN = 1  # {
    GROUP_CLOSE = 2  # }
    MATH_SHIFT = 3  # $
    ALIGNMENT = 4  # &
    END_OF_LINE = 5  # \r
    PARAMETER = 6  # #
    SUPERSCRIPT = 7  # ^
    SUBSCRIPT = 8  # _
    IGNORED = 9  # NUL
    SPACE = 10  # space, tab
    LETTER = 11  # a-z A-Z
    OTHER = 12  # everything else
    ACTIVE = 13  # ~
    COMMENT = 14  # %
    INVALID = 15  # C0 controls


class CategoryTable:
    """Partition of the code-point space into category-labelled intervals.

    Stored as ``(upper_bound, category)`` pairs sorted by upper bound; each
    interval runs from the previous bound (or 0) up to, but excluding, its own.
    The last bound is always DOMAIN_END, and adjacent intervals never share a
    category.
    """

    def __init__(self, default: Category) -> None:
        self._intervals: list[tuple[int, Category]] = [(DOMAIN_END, default)]

    @property
    def intervals(self) -> tuple[tuple[int, Category], ...]:
        return tuple(self._intervals)

    def copy(self) -> CategoryTable:
        table = CategoryTable(Category.OTHER)
        table._intervals = list(self._intervals)
        return table

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoryTable):
            return NotImplemented
        return self._intervals == other._intervals

    def __repr__(self) -> str:
        return f"CategoryTable({self._intervals!r})"

    def assign(self, lo: int, hi: int, category: Category) -> None:
        """Assign *category* to every code point in ``[lo, hi)``."""
        if not 0 <= lo <= hi <= DOMAIN_END:
            raise ValueError(f"invalid code point range [{lo}, {hi})")
        if lo == hi:
            return

        result: list[tuple[int, Category]] = []
        lower = 0
        for upper, current in self._intervals:
            if upper <= lo or lower >= hi:
                result.append((upper, current))
            else:
                # Keep the part of this interval below the range
                if lower < lo:
                    result.append((lo, current))
                if hi < upper:
                    result.append((hi, category))
                    result.append((upper, current))
                else:
                    result.append((upper, category))
            lower = upper

        self._intervals = result
        self._defrag()

    def assign_single(self, point: int, category: Category) -> None:
        self.assign(point, point + 1, category)

    def get(self, point: int) -> Category:
        """Return the category of *point*."""
        for upper, category in self._intervals:
            if point < upper:
                return category
        return self._intervals[-1][1]

    def _defrag(self) -> None:
        merged: list[tuple[int, Category]] = []
        for upper, category in self._intervals:
            if merged and merged[-1][1] == category:
                merged[-1] = (upper, category)
            else:
                merged.append((upper, category))
        self._intervals = merged


def _assign_chars(table: CategoryTable, first: str, last: str, category: Category) -> None:
    table.assign(ord(first), ord(last) + 1, category)


def default_table() -> CategoryTable:
    """Build the initial category table used by a fresh tokenizer."""
    table = CategoryTable(Category.OTHER)

    table.assign_single(ord("\\"), Category.ESCAPE)
    table.assign_single(ord("{"), Category.GROUP_OPEN)
    table.assign_single(ord("}"), Category.GROUP_CLOSE)
    table.assign_single(ord("$"), Category.MATH_SHIFT)
    table.assign_single(ord("&"), Category.ALIGNMENT)
    table.assign_single(ord("\n"), Category.END_OF_LINE)
    table.assign_single(ord("\r"), Category.END_OF_LINE)
    table.assign_single(ord("#"), Category.PARAMETER)
    table.assign_single(ord("^"), Category.SUPERSCRIPT)
    table.assign_single(ord("_"), Category.SUBSCRIPT)
    table.assign_single(0, Category.IGNORED)
    table.assign_single(ord(" "), Category.SPACE)
    table.assign_single(ord("\t"), Category.SPACE)
    _assign_chars(table, "a", "z", Category.LETTER)
    _assign_chars(table, "A", "Z", Category.LETTER)
    _assign_chars(table, "0", "9", Category.OTHER)
    _assign_chars(table, ":", "@", Category.OTHER)
    table.assign_single(ord("~"), Category.ACTIVE)
    table.assign_single(ord("%"), Category.COMMENT)

    # Remaining C0 controls (tab, LF and CR are taken above)
    table.assign(0x01, 0x09, Category.INVALID)
    table.assign(0x0B, 0x0D, Category.INVALID)
    table.assign(0x0E, 0x20, Category.INVALID)

    return table
