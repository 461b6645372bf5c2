# test_geometry.py
"""
Test suite per i tipi geometrici.

Organizzazione:
1. Conversione esatta dei numeri
2. Point
3. XMonotoneSegment
4. VerticalSegment, Segment, Polyline
"""

import math
from fractions import Fraction

import pytest

from curves.geometry import (
    Point,
    Polyline,
    Segment,
    VerticalSegment,
    XMonotoneSegment,
    to_exact,
)


# =============================================================================
# 1. TEST CONVERSIONE ESATTA
# =============================================================================

class TestToExact:

    def test_int_becomes_fraction(self):
        assert to_exact(3) == Fraction(3)
        assert isinstance(to_exact(3), Fraction)

    def test_float_is_exact(self):
        assert to_exact(0.5) == Fraction(1, 2)

    def test_string_fraction(self):
        assert to_exact("1/3") == Fraction(1, 3)

    def test_fraction_passes_through(self):
        value = Fraction(2, 7)
        assert to_exact(value) is value

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            to_exact(True)

    def test_infinite_float_rejected(self):
        with pytest.raises(ValueError):
            to_exact(math.inf)

    def test_bad_string_rejected(self):
        with pytest.raises(ValueError, match="non valida"):
            to_exact("abc")


# =============================================================================
# 2. TEST POINT
# =============================================================================

class TestPoint:

    def test_coordinates_are_exact(self):
        p = Point(1, "1/3")
        assert p.x == 1
        assert p.y == Fraction(1, 3)

    def test_infinite_y_allowed(self):
        p = Point(2, -math.inf)
        assert p.y == -math.inf

    def test_lexical_order(self):
        assert Point(0, 5) < Point(1, 0)
        assert Point(1, 0) < Point(1, 2)
        assert not Point(1, 2) < Point(1, 2)

    def test_of_accepts_list_and_tuple(self):
        assert Point.of([1, 2]) == Point(1, 2)
        assert Point.of((1, 2)) == Point(1, 2)

    def test_of_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            Point.of([1, 2, 3])

    def test_hashable(self):
        assert len({Point(1, 2), Point(1, 2), Point(2, 1)}) == 2


# =============================================================================
# 3. TEST XMONOTONESEGMENT
# =============================================================================

class TestXMonotoneSegment:

    def test_through_orders_endpoints(self):
        s = XMonotoneSegment.through((10, -10), (0, 0))
        assert s.x_min == 0
        assert s.x_max == 10
        assert s.slope == -1
        assert s.intercept == 0

    def test_through_vertical_rejected(self):
        with pytest.raises(ValueError, match="verticale"):
            XMonotoneSegment.through((1, 0), (1, 5))

    def test_degenerate_domain_rejected(self):
        with pytest.raises(ValueError):
            XMonotoneSegment(1, 0, 3, 3)

    def test_unbounded_contains_everything(self):
        line = XMonotoneSegment(2, 1)
        assert line.contains_x(-10 ** 9)
        assert line.contains_x(10 ** 9)

    def test_ray_bounds(self):
        ray = XMonotoneSegment(0, 1, x_min=2)
        assert not ray.contains_x(1)
        assert ray.contains_x(2)
        assert ray.contains_x(100)

    def test_y_at_exact(self):
        s = XMonotoneSegment("1/3", 0)
        assert s.y_at(1) == Fraction(1, 3)

    def test_label_ignored_by_equality(self):
        assert XMonotoneSegment(1, 0, 0, 1, label='a') == XMonotoneSegment(1, 0, 0, 1, label='b')


# =============================================================================
# 4. TEST VERTICALI, SEGMENTI, POLILINEE
# =============================================================================

class TestOtherCurves:

    def test_vertical_range_validated(self):
        with pytest.raises(ValueError):
            VerticalSegment(0, 5, 1)

    def test_vertical_unbounded(self):
        v = VerticalSegment(0, None, 3)
        assert v.y_min is None
        assert v.y_max == 3

    def test_segment_accepts_lists(self):
        s = Segment([0, 0], [1, 1])
        assert s.source == Point(0, 0)

    def test_polyline_needs_two_points(self):
        with pytest.raises(ValueError):
            Polyline(((0, 0),))

    def test_polyline_points_converted(self):
        pl = Polyline(([0, 0], [1, 2], [3, 1]))
        assert pl.points[1] == Point(1, 2)
