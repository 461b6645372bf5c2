# traits.py
"""
Curve capability interface ("traits") used by the envelope algorithms.

Design Pattern: Strategy
- CurveTraits (ABC): the predicates the envelope code is allowed to ask
- concrete subclasses implement them exactly for one curve family

The envelope builder and the mergers never do geometric arithmetic of their
own: every question about curves goes through one shared, read-only traits
instance.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple


class Comparison(Enum):
    SMALLER = -1
    EQUAL = 0
    LARGER = 1

    @classmethod
    def of(cls, a, b) -> 'Comparison':
        if a < b:
            return cls.SMALLER
        if a > b:
            return cls.LARGER
        return cls.EQUAL

    def flipped(self) -> 'Comparison':
        return Comparison(-self.value)


class Relation(Enum):
    """Relazione tra due curve su un intervallo aperto."""
    SMALLER = 'smaller'     # la prima curva sta sotto su tutto l'intervallo
    LARGER = 'larger'       # la prima curva sta sopra su tutto l'intervallo
    EQUAL = 'equal'         # le curve coincidono su tutto l'intervallo
    CROSSES = 'crosses'     # si incontrano in x, strettamente dentro l'intervallo


@dataclass(frozen=True)
class IntervalComparison:
    """
    Answer of ``compare_over_interval``.

    For CROSSES, ``x`` is the FIRST meeting abscissa inside the queried
    interval; the relation on the left of ``x`` is obtained by querying
    again on (lo, x).
    """
    relation: Relation
    x: Any = None


class CurveTraits(ABC):
    """Strategy base per i predicati geometrici di una famiglia di curve."""

    @abstractmethod
    def make_x_monotone(self, curve) -> List[Any]:
        """Spezza una curva in pezzi x-monotoni (anche verticali)."""
        pass

    @abstractmethod
    def is_vertical(self, xcv) -> bool:
        pass

    @abstractmethod
    def min_end(self, xcv):
        """Estremo sinistro del dominio (Point) o None se illimitato."""
        pass

    @abstractmethod
    def max_end(self, xcv):
        """Estremo destro del dominio (Point) o None se illimitato."""
        pass

    @abstractmethod
    def y_at_x(self, xcv, x):
        """Valore esatto di y della curva non verticale in x."""
        pass

    @abstractmethod
    def compare_over_interval(self, c1, c2, lo, hi) -> IntervalComparison:
        """
        Compare two non-vertical curves on the open interval (lo, hi).

        Both curves must be defined on the whole interval. ``lo``/``hi``
        equal to None stand for -inf/+inf.
        """
        pass

    @abstractmethod
    def vertical_x(self, vcv):
        pass

    @abstractmethod
    def vertical_range(self, vcv) -> Tuple[Optional[Any], Optional[Any]]:
        """(y_min, y_max) di un segmento verticale, None = illimitato."""
        pass

    def compare_y_at_x(self, c1, c2, x) -> Comparison:
        """Confronta le y di due curve non verticali nella stessa x."""
        return Comparison.of(self.y_at_x(c1, x), self.y_at_x(c2, x))

    def __repr__(self):
        return f"{self.__class__.__name__}()"
