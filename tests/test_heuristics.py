"""Tests for table cell heuristics."""

from dataclasses import replace

import pytest

from exceptions import EmptyArgumentError
from heuristics import (
    CutInAfterTriHeuristic,
    EqualFontSizeBiHeuristic,
    HorizontalPositionBiHeuristic,
    Orientation,
    SameLineBiHeuristic,
    TriHeuristicType,
    VerticalPositionBiHeuristic,
)
from models import Rectangle, TextBlock


class TestEqualFontSize:
    def test_flips_when_matching_size_added(self, make_chunk):
        heuristic = EqualFontSizeBiHeuristic()
        first = TextBlock([make_chunk(font_size=12)])
        second = TextBlock([make_chunk(font_size=10), make_chunk(font_size=11)])
        assert not heuristic.test(first, second)

        second.add(make_chunk(font_size=12))
        assert heuristic.test(first, second)

    def test_default_orientation_is_both(self):
        heuristic = EqualFontSizeBiHeuristic()
        assert heuristic.orientation is Orientation.BOTH
        assert heuristic.applies_to(Orientation.HORIZONTAL)
        assert heuristic.applies_to(Orientation.VERTICAL)

    def test_orientation_override(self):
        heuristic = EqualFontSizeBiHeuristic(Orientation.VERTICAL)
        assert not heuristic.applies_to(Orientation.HORIZONTAL)

    def test_none_operand_rejected(self, make_chunk):
        with pytest.raises(EmptyArgumentError):
            EqualFontSizeBiHeuristic().test(TextBlock([make_chunk(font_size=12)]), None)

    def test_operand_without_chunks_rejected(self, make_chunk):
        with pytest.raises(EmptyArgumentError):
            EqualFontSizeBiHeuristic().test(Rectangle(0, 0, 1, 1), TextBlock([make_chunk()]))


class TestHorizontalPosition:
    @pytest.fixture
    def heuristic(self):
        return HorizontalPositionBiHeuristic()

    def test_side_by_side(self, heuristic):
        assert heuristic.test(Rectangle(0, 0, 10, 10), Rectangle(20, 0, 30, 10))

    def test_reversed_order(self, heuristic):
        assert not heuristic.test(Rectangle(20, 0, 30, 10), Rectangle(0, 0, 10, 10))

    def test_touching_edges_are_adjacent(self, heuristic):
        assert heuristic.test(Rectangle(0, 0, 10, 10), Rectangle(10, 10, 20, 20))

    def test_different_bands(self, heuristic):
        assert not heuristic.test(Rectangle(0, 0, 10, 10), Rectangle(20, 11, 30, 20))

    def test_horizontal_overlap(self, heuristic):
        assert not heuristic.test(Rectangle(0, 0, 15, 10), Rectangle(10, 0, 30, 10))

    def test_works_on_chunks_and_blocks(self, heuristic, make_chunk):
        chunk = make_chunk("a", 0, 100, 10, 110)
        block = TextBlock([make_chunk("b", 20, 100, 30, 110), make_chunk("c", 40, 100, 50, 110)])
        assert heuristic.test(chunk, block)
        assert heuristic(chunk, block)

    def test_tag(self, heuristic):
        assert heuristic.orientation is Orientation.HORIZONTAL

    def test_object_without_geometry_rejected(self, heuristic):
        with pytest.raises(EmptyArgumentError):
            heuristic.test("not a box", Rectangle(0, 0, 1, 1))


class TestVerticalPosition:
    def test_above(self):
        heuristic = VerticalPositionBiHeuristic()
        upper = Rectangle(0, 50, 10, 60)
        lower = Rectangle(5, 0, 15, 40)
        assert heuristic.test(upper, lower)
        assert not heuristic.test(lower, upper)

    def test_different_columns(self):
        heuristic = VerticalPositionBiHeuristic()
        assert not heuristic.test(Rectangle(0, 50, 10, 60), Rectangle(20, 0, 30, 40))

    def test_tag(self):
        assert VerticalPositionBiHeuristic().orientation is Orientation.VERTICAL


class TestSameLine:
    def test_tolerant_and_exact(self, make_chunk):
        first = make_chunk("a", 0, 10.2, 5, 20)
        second = make_chunk("b", 6, 10.7, 12, 20)
        assert SameLineBiHeuristic().test(first, second)
        assert not SameLineBiHeuristic(exact=True).test(first, second)

    def test_requires_chunks(self):
        with pytest.raises(EmptyArgumentError):
            SameLineBiHeuristic().test(Rectangle(0, 0, 1, 1), Rectangle(0, 0, 1, 1))


class TestCutInAfter:
    @pytest.fixture
    def row(self):
        second = Rectangle(0, 0, 10, 10)
        third = Rectangle(20, 0, 30, 10)
        return second, third

    def test_tags(self):
        heuristic = CutInAfterTriHeuristic()
        assert heuristic.orientation is Orientation.VERTICAL
        assert heuristic.heuristic_type is TriHeuristicType.AFTER

    def test_first_short_of_third(self, row):
        second, third = row
        first = Rectangle(0, 20, 15, 30)
        assert CutInAfterTriHeuristic().test(first, second, third)

    def test_first_reaching_into_third(self, row):
        second, third = row
        first = replace(Rectangle(0, 20, 15, 30), right=25)
        assert not CutInAfterTriHeuristic().test(first, second, third)

    def test_first_ending_exactly_at_third(self, row):
        second, third = row
        first = Rectangle(0, 20, 20, 30)
        assert not CutInAfterTriHeuristic().test(first, second, third)

    def test_pair_not_horizontally_positioned(self):
        second = Rectangle(0, 0, 10, 10)
        third = Rectangle(20, 50, 30, 60)
        first = Rectangle(0, 20, 100, 30)
        assert CutInAfterTriHeuristic().test(first, second, third)

    def test_reusable_instance(self, row):
        second, third = row
        heuristic = CutInAfterTriHeuristic()
        wide = Rectangle(0, 20, 25, 30)
        narrow = Rectangle(0, 20, 15, 30)
        results = [heuristic(first, second, third) for first in (wide, narrow, wide, narrow)]
        assert results == [False, True, False, True]

    def test_none_operand_rejected(self, row):
        second, third = row
        with pytest.raises(EmptyArgumentError):
            CutInAfterTriHeuristic().test(None, second, third)
