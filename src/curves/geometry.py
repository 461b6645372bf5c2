# geometry.py
"""
Geometric value types for the linear curve family.

Every coordinate is stored as an exact ``Fraction`` so that the predicates in
``LinearTraits`` never round. The only inexact value allowed is an infinite
y on a ``Point``: an envelope vertex produced by a vertical ray that extends
to -inf (lower envelope) or +inf (upper envelope).

Types:
- Point: (x, y)
- Segment: general segment between two points (may be vertical or degenerate)
- Polyline: chain of points, not x-monotone in general
- XMonotoneSegment: non-vertical piece y = slope*x + intercept on [x_min, x_max]
- VerticalSegment: x = const, y in [y_min, y_max]

Unbounded ends are represented by ``None``.
"""

import math
from dataclasses import dataclass, field
from fractions import Fraction
from numbers import Rational
from typing import Optional, Tuple, Union

Number = Union[int, float, str, Fraction]


def to_exact(value: Number) -> Fraction:
    """
    Converte un numero in Fraction esatta.

    Accetta int, float finiti, Fraction e stringhe tipo "1/3" o "0.25".
    """
    if isinstance(value, bool):
        raise TypeError(f"Valore numerico non valido: {value!r}")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, Rational):
        return Fraction(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Coordinata non finita: {value!r}")
        return Fraction(value)
    if isinstance(value, str):
        try:
            return Fraction(value.strip())
        except ValueError:
            raise ValueError(f"Coordinata non valida: {value!r}") from None
    raise TypeError(f"Valore numerico non valido: {value!r}")


def to_exact_or_none(value: Optional[Number]) -> Optional[Fraction]:
    return None if value is None else to_exact(value)


def _to_y(value) -> Union[Fraction, float]:
    # infinite y only comes from unbounded vertical rays
    if isinstance(value, float) and math.isinf(value):
        return value
    return to_exact(value)


@dataclass(frozen=True)
class Point:
    x: Fraction
    y: Union[Fraction, float]

    def __post_init__(self):
        object.__setattr__(self, 'x', to_exact(self.x))
        object.__setattr__(self, 'y', _to_y(self.y))

    def __lt__(self, other):
        """
        Lexical order
        """
        if not isinstance(other, Point):
            return NotImplemented
        if self.x != other.x:
            return self.x < other.x
        return self.y < other.y

    def as_tuple(self) -> Tuple:
        return (self.x, self.y)

    def __repr__(self):
        return f"P({self.x}, {self.y})"

    @classmethod
    def of(cls, value) -> 'Point':
        """Crea un Point da Point, tupla o lista [x, y]."""
        if isinstance(value, Point):
            return value
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return cls(value[0], value[1])
        raise ValueError(f"Formato punto non valido: {value!r}. Deve essere [x, y].")


@dataclass(frozen=True)
class Segment:
    """Segmento generico tra due punti (anche verticale o degenere)."""
    source: Point
    target: Point
    label: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'source', Point.of(self.source))
        object.__setattr__(self, 'target', Point.of(self.target))


@dataclass(frozen=True)
class Polyline:
    """Catena di segmenti; viene spezzata in pezzi x-monotoni dai traits."""
    points: Tuple[Point, ...]
    label: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        points = tuple(Point.of(p) for p in self.points)
        if len(points) < 2:
            raise ValueError("Polyline deve contenere almeno due punti")
        object.__setattr__(self, 'points', points)


@dataclass(frozen=True)
class XMonotoneSegment:
    """
    Non-vertical linear piece y = slope * x + intercept.

    The domain is the closed interval [x_min, x_max]; either side may be
    None (unbounded), so the same type covers segments, rays and lines.
    """
    slope: Fraction
    intercept: Fraction
    x_min: Optional[Fraction] = None
    x_max: Optional[Fraction] = None
    label: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'slope', to_exact(self.slope))
        object.__setattr__(self, 'intercept', to_exact(self.intercept))
        object.__setattr__(self, 'x_min', to_exact_or_none(self.x_min))
        object.__setattr__(self, 'x_max', to_exact_or_none(self.x_max))
        if (self.x_min is not None and self.x_max is not None
                and self.x_min >= self.x_max):
            raise ValueError(
                f"Dominio vuoto o degenere: [{self.x_min}, {self.x_max}]. "
                "Usare VerticalSegment per pezzi a x costante."
            )

    @classmethod
    def through(cls, p, q, label: Optional[str] = None) -> 'XMonotoneSegment':
        """Segmento limitato passante per due punti con x diverse."""
        p, q = Point.of(p), Point.of(q)
        if p.x == q.x:
            raise ValueError(f"Punti con la stessa x ({p.x}): il segmento e' verticale")
        if q.x < p.x:
            p, q = q, p
        slope = (q.y - p.y) / (q.x - p.x)
        intercept = p.y - slope * p.x
        return cls(slope, intercept, p.x, q.x, label=label)

    def contains_x(self, x) -> bool:
        if self.x_min is not None and x < self.x_min:
            return False
        if self.x_max is not None and x > self.x_max:
            return False
        return True

    def y_at(self, x) -> Fraction:
        return self.slope * x + self.intercept

    def __repr__(self):
        name = self.label or f"y={self.slope}x+{self.intercept}"
        lo = '-inf' if self.x_min is None else str(self.x_min)
        hi = '+inf' if self.x_max is None else str(self.x_max)
        return f"XM({name} on [{lo}, {hi}])"


@dataclass(frozen=True)
class VerticalSegment:
    """Segmento verticale x = x, y in [y_min, y_max] (None = illimitato)."""
    x: Fraction
    y_min: Optional[Fraction] = None
    y_max: Optional[Fraction] = None
    label: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'x', to_exact(self.x))
        object.__setattr__(self, 'y_min', to_exact_or_none(self.y_min))
        object.__setattr__(self, 'y_max', to_exact_or_none(self.y_max))
        if (self.y_min is not None and self.y_max is not None
                and self.y_min > self.y_max):
            raise ValueError(f"y_min ({self.y_min}) > y_max ({self.y_max})")

    def __repr__(self):
        name = self.label or f"x={self.x}"
        lo = '-inf' if self.y_min is None else str(self.y_min)
        hi = '+inf' if self.y_max is None else str(self.y_max)
        return f"V({name}, y in [{lo}, {hi}])"
