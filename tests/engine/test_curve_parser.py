# tests/engine/test_curve_parser.py
"""
Test suite per CurveParser.

Organizzazione:
1. Un test per tipo di curva
2. Label e numeri razionali
3. Errori con indice della curva
"""

from fractions import Fraction

import pytest

from curves.geometry import Point, Polyline, Segment, VerticalSegment, XMonotoneSegment
from engine.curve_parser import CurveParser


@pytest.fixture
def parser():
    return CurveParser()


# =============================================================================
# 1. TIPI DI CURVA
# =============================================================================

class TestCurveTypes:

    def test_segment(self, parser):
        curve = parser.parse_curve({'type': 'segment', 'source': [0, 0], 'target': [10, -10]})
        assert isinstance(curve, Segment)
        assert curve.source == Point(0, 0)
        assert curve.target == Point(10, -10)

    def test_line_unbounded(self, parser):
        curve = parser.parse_curve({'type': 'line', 'slope': 2, 'intercept': -1})
        assert curve == XMonotoneSegment(2, -1)

    def test_ray(self, parser):
        curve = parser.parse_curve({'type': 'line', 'slope': 0, 'intercept': 3, 'x_min': 1})
        assert curve.x_min == 1
        assert curve.x_max is None

    def test_vertical(self, parser):
        curve = parser.parse_curve({'type': 'vertical', 'x': 5, 'y_min': -8, 'y_max': -6})
        assert curve == VerticalSegment(5, -8, -6)

    def test_vertical_ray(self, parser):
        curve = parser.parse_curve({'type': 'vertical', 'x': 5, 'y_max': 0})
        assert curve.y_min is None

    def test_polyline(self, parser):
        curve = parser.parse_curve({'type': 'polyline', 'points': [[0, 0], [1, 2], [3, 0]]})
        assert isinstance(curve, Polyline)
        assert len(curve.points) == 3

    def test_type_case_insensitive(self, parser):
        curve = parser.parse_curve({'type': ' Segment ', 'source': [0, 0], 'target': [1, 1]})
        assert isinstance(curve, Segment)

    def test_parse_curves_list(self, parser):
        curves = parser.parse_curves([
            {'type': 'line', 'slope': 1, 'intercept': 0},
            {'type': 'vertical', 'x': 0},
        ])
        assert len(curves) == 2

    def test_parse_curves_none(self, parser):
        assert parser.parse_curves(None) == []


# =============================================================================
# 2. LABEL E NUMERI
# =============================================================================

class TestLabelsAndNumbers:

    def test_default_label_from_index(self, parser):
        curves = parser.parse_curves([
            {'type': 'line', 'slope': 1, 'intercept': 0},
            {'type': 'line', 'slope': 2, 'intercept': 0},
        ])
        assert [c.label for c in curves] == ['c0', 'c1']

    def test_explicit_label(self, parser):
        curve = parser.parse_curve({'type': 'line', 'slope': 1, 'intercept': 0, 'label': 'diag'})
        assert curve.label == 'diag'

    def test_rational_strings(self, parser):
        curve = parser.parse_curve({'type': 'line', 'slope': '1/3', 'intercept': '-2/7'})
        assert curve.slope == Fraction(1, 3)
        assert curve.intercept == Fraction(-2, 7)

    def test_floats_are_exact(self, parser):
        curve = parser.parse_curve({'type': 'vertical', 'x': 0.5})
        assert curve.x == Fraction(1, 2)


# =============================================================================
# 3. ERRORI
# =============================================================================

class TestErrors:

    def test_unknown_type(self, parser):
        with pytest.raises(ValueError, match="Curva 0: tipo 'circle' non riconosciuto"):
            parser.parse_curve({'type': 'circle'}, 0)

    def test_missing_type(self, parser):
        with pytest.raises(ValueError, match="non riconosciuto"):
            parser.parse_curve({'x': 1})

    def test_missing_key(self, parser):
        with pytest.raises(ValueError, match="Curva 3 \\(segment\\): chiave mancante"):
            parser.parse_curve({'type': 'segment', 'source': [0, 0]}, 3)

    def test_bad_point(self, parser):
        with pytest.raises(ValueError, match="Curva 1"):
            parser.parse_curve({'type': 'segment', 'source': [0], 'target': [1, 1]}, 1)

    def test_bad_number(self, parser):
        with pytest.raises(ValueError, match="Coordinata non valida"):
            parser.parse_curve({'type': 'line', 'slope': 'abc', 'intercept': 0})

    def test_degenerate_line_domain(self, parser):
        with pytest.raises(ValueError, match="Dominio vuoto"):
            parser.parse_curve({'type': 'line', 'slope': 1, 'intercept': 0, 'x_min': 2, 'x_max': 2})

    def test_entry_not_a_dict(self, parser):
        with pytest.raises(ValueError, match="atteso dict"):
            parser.parse_curves(['segment'])

    def test_curves_not_a_list(self, parser):
        with pytest.raises(ValueError, match="deve essere una lista"):
            parser.parse_curves({'type': 'segment'})

    def test_index_in_list_errors(self, parser):
        with pytest.raises(ValueError, match="Curva 1"):
            parser.parse_curves([
                {'type': 'line', 'slope': 1, 'intercept': 0},
                {'type': 'vertical'},
            ])

    def test_supported_types(self, parser):
        assert parser.get_supported_types() == ['segment', 'line', 'vertical', 'polyline']
