"""Test the category interval table."""

import random

import pytest

from texlex.category import DOMAIN_END, Category, CategoryTable, default_table

A, B, C, Z = Category.LETTER, Category.OTHER, Category.ACTIVE, Category.INVALID


def assert_well_formed(table: CategoryTable) -> None:
    bounds = [upper for upper, _ in table.intervals]
    assert bounds == sorted(set(bounds))
    assert bounds[-1] == DOMAIN_END
    cats = [cat for _, cat in table.intervals]
    assert all(x != y for x, y in zip(cats, cats[1:]))


class TestConstruction:
    def test_single_interval(self):
        table = CategoryTable(A)
        assert table.intervals == ((DOMAIN_END, A),)

    def test_get_everywhere(self):
        table = CategoryTable(A)
        assert table.get(0) == A
        assert table.get(10) == A
        assert table.get(DOMAIN_END - 1) == A


class TestAssign:
    def test_inside_one_interval(self):
        table = CategoryTable(A)
        table.assign(10, 20, B)
        assert table.intervals == ((10, A), (20, B), (DOMAIN_END, A))
        assert table.get(9) == A
        assert table.get(10) == B
        assert table.get(19) == B
        assert table.get(20) == A

    def test_at_domain_start(self):
        table = CategoryTable(A)
        table.assign(0, 5, B)
        assert table.intervals == ((5, B), (DOMAIN_END, A))

    def test_at_domain_end(self):
        table = CategoryTable(A)
        table.assign(100, DOMAIN_END, B)
        assert table.intervals == ((100, A), (DOMAIN_END, B))

    def test_spanning_several_intervals(self):
        table = CategoryTable(A)
        table.assign(10, 20, B)
        table.assign(30, 40, C)
        table.assign(15, 35, Z)
        assert table.intervals == ((10, A), (15, B), (35, Z), (40, C), (DOMAIN_END, A))

    def test_exact_overwrite(self):
        table = CategoryTable(A)
        table.assign(10, 20, B)
        table.assign(10, 20, C)
        assert table.intervals == ((10, A), (20, C), (DOMAIN_END, A))

    def test_restoring_merges_intervals(self):
        table = CategoryTable(A)
        table.assign(10, 20, B)
        table.assign(10, 20, A)
        assert table.intervals == ((DOMAIN_END, A),)

    def test_adjacent_same_category_merges(self):
        table = CategoryTable(A)
        table.assign(10, 20, B)
        table.assign(20, 30, B)
        assert table.intervals == ((10, A), (30, B), (DOMAIN_END, A))

    def test_empty_range_is_noop(self):
        table = CategoryTable(A)
        table.assign(5, 5, B)
        assert table.intervals == ((DOMAIN_END, A),)

    def test_assign_single(self):
        table = CategoryTable(A)
        table.assign_single(ord("x"), B)
        assert table.get(ord("x")) == B
        assert table.get(ord("w")) == A
        assert table.get(ord("y")) == A

    def test_sequence(self):
        table = CategoryTable(Z)
        table.assign(2, 20, A)
        table.assign(1, 5, A)
        table.assign(10, 30, B)
        table.assign(11, 31, B)
        table.assign(5, 15, C)
        table.assign(0, 30, A)
        table.assign(0, 30, A)
        table.assign_single(10, C)

        assert table.get(10) == C
        assert table.get(11) == A
        assert table.get(0) == A
        assert table.get(255) == Z
        assert table.get(30) == B
        assert table.get(31) == Z
        assert_well_formed(table)

    @pytest.mark.parametrize("lo,hi", [(-1, 5), (5, 4), (0, DOMAIN_END + 1)])
    def test_invalid_range(self, lo, hi):
        with pytest.raises(ValueError):
            CategoryTable(A).assign(lo, hi, B)


class TestRandomAssignments:
    def test_matches_reference_model(self):
        rng = random.Random(1234)
        cats = list(Category)
        table = CategoryTable(Category.OTHER)
        model = [Category.OTHER] * 300

        for _ in range(500):
            lo = rng.randrange(0, 300)
            hi = rng.randrange(lo, 301)
            cat = rng.choice(cats)
            table.assign(lo, hi, cat)
            model[lo:hi] = [cat] * (hi - lo)
            assert_well_formed(table)

        assert [table.get(i) for i in range(300)] == model
        assert table.get(300) == Category.OTHER


class TestCopy:
    def test_copy_is_independent(self):
        table = CategoryTable(A)
        clone = table.copy()
        clone.assign_single(0, B)
        assert table.get(0) == A
        assert clone.get(0) == B
        assert table != clone

    def test_equality(self):
        assert CategoryTable(A) == CategoryTable(A)
        assert CategoryTable(A) != CategoryTable(B)


class TestDefaultTable:
    @pytest.mark.parametrize(
        "char,category",
        [
            ("\\", Category.ESCAPE),
            ("{", Category.GROUP_OPEN),
            ("}", Category.GROUP_CLOSE),
            ("$", Category.MATH_SHIFT),
            ("&", Category.ALIGNMENT),
            ("\n", Category.END_OF_LINE),
            ("\r", Category.END_OF_LINE),
            ("#", Category.PARAMETER),
            ("^", Category.SUPERSCRIPT),
            ("_", Category.SUBSCRIPT),
            ("\0", Category.IGNORED),
            (" ", Category.SPACE),
            ("\t", Category.SPACE),
            ("a", Category.LETTER),
            ("z", Category.LETTER),
            ("A", Category.LETTER),
            ("Z", Category.LETTER),
            ("0", Category.OTHER),
            ("@", Category.OTHER),
            ("~", Category.ACTIVE),
            ("%", Category.COMMENT),
            ("\x01", Category.INVALID),
            ("\x0b", Category.INVALID),
            ("\x0c", Category.INVALID),
            ("\x1f", Category.INVALID),
            ("\x7f", Category.OTHER),
            ("é", Category.OTHER),
        ],
    )
    def test_assignment(self, char, category):
        assert default_table().get(ord(char)) == category

    def test_well_formed(self):
        assert_well_formed(default_table())

    def test_catcode_numbers(self):
        assert Category(0) == Category.ESCAPE
        assert Category(11) == Category.LETTER
        assert Category(15) == Category.INVALID
