# linear_traits.py
"""
Exact traits for linear curves: segments, rays, lines and polylines.

All arithmetic is done on ``Fraction``, so crossing points, ties and
dominations are decided exactly.
"""

from fractions import Fraction
from typing import List, Optional

from curves.geometry import (
    Point,
    Segment,
    Polyline,
    XMonotoneSegment,
    VerticalSegment,
)
from curves.traits import CurveTraits, IntervalComparison, Relation


def _inside(x, lo, hi) -> bool:
    """x strettamente dentro (lo, hi), con None = infinito."""
    if lo is not None and x <= lo:
        return False
    if hi is not None and x >= hi:
        return False
    return True


class LinearTraits(CurveTraits):
    """Predicati esatti per curve lineari."""

    # -------------------------------------------------------------------------
    # X-MONOTONE SUBDIVISION
    # -------------------------------------------------------------------------

    def make_x_monotone(self, curve) -> List:
        if isinstance(curve, (XMonotoneSegment, VerticalSegment)):
            return [curve]
        if isinstance(curve, Segment):
            return [self._split_segment(curve.source, curve.target, curve.label)]
        if isinstance(curve, Polyline):
            return self._split_polyline(curve)
        raise TypeError(
            f"Curva non supportata da {self.__class__.__name__}: "
            f"{type(curve).__name__}"
        )

    def _split_segment(self, p: Point, q: Point, label: Optional[str]):
        if p.x == q.x:
            # verticale o degenere (un punto)
            return VerticalSegment(p.x, min(p.y, q.y), max(p.y, q.y), label=label)
        return XMonotoneSegment.through(p, q, label=label)

    def _split_polyline(self, polyline: Polyline) -> List:
        """
        One piece per polyline edge: the envelope works on linear pieces,
        so edges are not joined even when the chain keeps its x direction.
        Zero-length edges are skipped.
        """
        pieces = []
        points = polyline.points
        for i in range(len(points) - 1):
            p, q = points[i], points[i + 1]
            if p == q:
                continue
            label = None
            if polyline.label is not None:
                label = f"{polyline.label}[{i}]"
            pieces.append(self._split_segment(p, q, label))
        if not pieces:
            # polyline degenere: tutti i punti coincidono
            p = points[0]
            pieces.append(VerticalSegment(p.x, p.y, p.y, label=polyline.label))
        return pieces

    # -------------------------------------------------------------------------
    # PREDICATES
    # -------------------------------------------------------------------------

    def is_vertical(self, xcv) -> bool:
        if isinstance(xcv, VerticalSegment):
            return True
        if isinstance(xcv, XMonotoneSegment):
            return False
        raise TypeError(f"Curva x-monotona attesa, ricevuto: {type(xcv).__name__}")

    def min_end(self, xcv) -> Optional[Point]:
        if xcv.x_min is None:
            return None
        return Point(xcv.x_min, xcv.y_at(xcv.x_min))

    def max_end(self, xcv) -> Optional[Point]:
        if xcv.x_max is None:
            return None
        return Point(xcv.x_max, xcv.y_at(xcv.x_max))

    def y_at_x(self, xcv, x) -> Fraction:
        if not xcv.contains_x(x):
            raise ValueError(f"x={x} fuori dal dominio di {xcv!r}")
        return xcv.y_at(x)

    def compare_over_interval(self, c1, c2, lo, hi) -> IntervalComparison:
        # d(x) = y1(x) - y2(x) = ds * x + di
        ds = c1.slope - c2.slope
        di = c1.intercept - c2.intercept

        if ds == 0:
            if di == 0:
                return IntervalComparison(Relation.EQUAL)
            return IntervalComparison(Relation.SMALLER if di < 0 else Relation.LARGER)

        root = -di / ds
        if _inside(root, lo, hi):
            return IntervalComparison(Relation.CROSSES, root)

        # nessuna radice dentro: il segno e' costante sull'intervallo
        if lo is not None and root <= lo:
            negative = ds < 0     # a destra della radice d ha il segno di ds
        else:
            negative = ds > 0     # a sinistra della radice d ha il segno opposto
        return IntervalComparison(Relation.SMALLER if negative else Relation.LARGER)

    def vertical_x(self, vcv):
        return vcv.x

    def vertical_range(self, vcv):
        return (vcv.y_min, vcv.y_max)
