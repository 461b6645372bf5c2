# envelope_diagram.py
"""
Minimization / maximization diagram of an envelope along the x-axis.

Storage is a flat arena: a list of vertices and a list of edges with
len(edges) == len(vertices) + 1. Edge i is the open x-interval between
vertex i-1 and vertex i (edge 0 and the last edge are unbounded).

    edge0 | v0 | edge1 | v1 | ... | v(n-1) | edge(n)

A diagram has one owner. ``take_storage()`` moves the arena out (used by
merges) and marks the diagram consumed; any later access raises
DiagramConsumedError.
"""

from bisect import bisect_left
from collections import Counter
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple, Union

from envelopes.errors import DiagramConsumedError


class EnvelopeType(Enum):
    LOWER = 'lower'
    UPPER = 'upper'

    @classmethod
    def from_value(cls, value: Union[str, 'EnvelopeType']) -> 'EnvelopeType':
        """Accetta l'enum o le stringhe 'lower' / 'upper' (case-insensitive)."""
        if isinstance(value, EnvelopeType):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        raise ValueError(
            f"Tipo envelope non riconosciuto: {value!r}. "
            f"Tipi validi: {[m.value for m in cls]}"
        )

    def is_better(self, y1, y2) -> bool:
        """True se y1 e' strettamente piu' estremo di y2 per questo envelope."""
        if self is EnvelopeType.LOWER:
            return y1 < y2
        return y1 > y2


class Vertex:
    """Punto dell'envelope e curve che ci passano."""

    __slots__ = ('point', 'curves')

    def __init__(self, point, curves: Optional[List[Any]] = None):
        self.point = point
        self.curves = list(curves) if curves is not None else []

    @property
    def x(self):
        return self.point.x

    @property
    def y(self):
        return self.point.y

    def curve_count(self) -> int:
        return len(self.curves)

    def __repr__(self):
        return f"Vertex({self.point!r}, curves={self.curves!r})"


class Edge:
    """Curve che realizzano l'envelope su un intervallo aperto."""

    __slots__ = ('curves',)

    def __init__(self, curves: Optional[List[Any]] = None):
        self.curves = list(curves) if curves is not None else []

    def is_empty(self) -> bool:
        return not self.curves

    def curve_count(self) -> int:
        return len(self.curves)

    def __repr__(self):
        return f"Edge(curves={self.curves!r})"


def _multiset(curves) -> Counter:
    return Counter(curves)


class EnvelopeDiagram:
    """
    Ordered edge/vertex sequence representing a lower or upper envelope.

    Examples:
        d = EnvelopeDiagram.empty(EnvelopeType.LOWER)
        d.number_of_vertices() → 0
        d.number_of_edges() → 1
        d.leftmost().is_empty() → True
    """

    def __init__(
        self,
        env_type: EnvelopeType = EnvelopeType.LOWER,
        vertices: Optional[List[Vertex]] = None,
        edges: Optional[List[Edge]] = None
    ):
        self.env_type = EnvelopeType.from_value(env_type)
        self._vertices: List[Vertex] = vertices if vertices is not None else []
        self._edges: List[Edge] = edges if edges is not None else [Edge()]
        self._consumed = False

        if len(self._edges) != len(self._vertices) + 1:
            raise ValueError(
                f"Diagramma non valido: {len(self._vertices)} vertici richiedono "
                f"{len(self._vertices) + 1} spigoli, ricevuti {len(self._edges)}"
            )
        for left, right in zip(self._vertices, self._vertices[1:]):
            if not left.point.x < right.point.x:
                raise ValueError(
                    f"Vertici non in ordine strettamente crescente di x: "
                    f"{left.point!r}, {right.point!r}"
                )

    @classmethod
    def empty(cls, env_type: EnvelopeType = EnvelopeType.LOWER) -> 'EnvelopeDiagram':
        return cls(env_type)

    # =========================================================================
    # OWNERSHIP
    # =========================================================================

    def _check_alive(self):
        if self._consumed:
            raise DiagramConsumedError(
                "Il diagramma e' stato consumato da un merge e non puo' essere riusato"
            )

    @property
    def is_consumed(self) -> bool:
        return self._consumed

    def take_storage(self) -> Tuple[List[Vertex], List[Edge]]:
        """Sposta fuori vertici e spigoli e invalida il diagramma."""
        self._check_alive()
        vertices, edges = self._vertices, self._edges
        self._vertices, self._edges = [], []
        self._consumed = True
        return vertices, edges

    # =========================================================================
    # SIZE & ACCESS
    # =========================================================================

    def number_of_vertices(self) -> int:
        self._check_alive()
        return len(self._vertices)

    def number_of_edges(self) -> int:
        self._check_alive()
        return len(self._edges)

    def __len__(self):
        return self.number_of_vertices() + self.number_of_edges()

    def is_empty(self) -> bool:
        """True se nessuna curva compare nel diagramma."""
        self._check_alive()
        return not self._vertices and self._edges[0].is_empty()

    def vertex(self, index: int) -> Vertex:
        self._check_alive()
        return self._vertices[index]

    def edge(self, index: int) -> Edge:
        self._check_alive()
        return self._edges[index]

    @property
    def vertices(self) -> Tuple[Vertex, ...]:
        self._check_alive()
        return tuple(self._vertices)

    @property
    def edges(self) -> Tuple[Edge, ...]:
        self._check_alive()
        return tuple(self._edges)

    def leftmost(self) -> Edge:
        self._check_alive()
        return self._edges[0]

    def rightmost(self) -> Edge:
        self._check_alive()
        return self._edges[-1]

    def edge_interval(self, index: int) -> Tuple[Optional[Any], Optional[Any]]:
        """(lo, hi) dello spigolo index; None = infinito."""
        self._check_alive()
        if not 0 <= index < len(self._edges):
            raise IndexError(f"Spigolo {index} fuori range (0..{len(self._edges) - 1})")
        lo = self._vertices[index - 1].point.x if index > 0 else None
        hi = self._vertices[index].point.x if index < len(self._vertices) else None
        return lo, hi

    def x_values(self) -> List[Any]:
        self._check_alive()
        return [v.point.x for v in self._vertices]

    def __iter__(self) -> Iterator[Union[Edge, Vertex]]:
        """Itera in ordine: spigolo, vertice, spigolo, ..., spigolo."""
        self._check_alive()
        for i, vertex in enumerate(self._vertices):
            yield self._edges[i]
            yield vertex
        yield self._edges[-1]

    def locate(self, x) -> Tuple[str, int]:
        """
        Binary search of x in the diagram.

        Returns:
            ('vertex', i) if vertex i lies at x, else ('edge', i) for the
            edge whose open interval contains x.
        """
        xs = self.x_values()
        i = bisect_left(xs, x)
        if i < len(xs) and xs[i] == x:
            return ('vertex', i)
        return ('edge', i)

    # =========================================================================
    # SEQUENCE STORE OPERATIONS
    # =========================================================================

    def append(self, vertex: Vertex, edge: Edge):
        """Aggiunge a destra un vertice e lo spigolo che lo segue."""
        self._check_alive()
        if self._vertices and not self._vertices[-1].point.x < vertex.point.x:
            raise ValueError(
                f"Vertice {vertex.point!r} non a destra dell'ultimo "
                f"{self._vertices[-1].point!r}"
            )
        self._vertices.append(vertex)
        self._edges.append(edge)

    def split_edge(self, index: int, vertex: Vertex) -> Vertex:
        """
        Insert ``vertex`` inside edge ``index``.

        The edge is replaced by two edges with copies of its curve list,
        flanking the new vertex.
        """
        lo, hi = self.edge_interval(index)
        x = vertex.point.x
        if (lo is not None and x <= lo) or (hi is not None and x >= hi):
            raise ValueError(f"x={x} non e' interno allo spigolo {index} ({lo}, {hi})")
        curves = self._edges[index].curves
        self._edges[index:index + 1] = [Edge(curves), Edge(curves)]
        self._vertices.insert(index, vertex)
        return vertex

    # =========================================================================
    # COMPARISON & DISPLAY
    # =========================================================================

    def same_as(self, other: 'EnvelopeDiagram') -> bool:
        """
        Structural equality: same type, same vertex points, same curve
        multisets on every vertex and edge (order of curves ignored).
        """
        self._check_alive()
        other._check_alive()
        if self.env_type is not other.env_type:
            return False
        if len(self._vertices) != len(other._vertices):
            return False
        for v1, v2 in zip(self._vertices, other._vertices):
            if v1.point != v2.point or _multiset(v1.curves) != _multiset(v2.curves):
                return False
        for e1, e2 in zip(self._edges, other._edges):
            if _multiset(e1.curves) != _multiset(e2.curves):
                return False
        return True

    def describe(self) -> str:
        """Rappresentazione testuale leggibile, una riga per elemento."""
        self._check_alive()
        lines = [f"{self.env_type.value} envelope: "
                 f"{len(self._vertices)} vertici, {len(self._edges)} spigoli"]
        for i, edge in enumerate(self._edges):
            lo, hi = self.edge_interval(i)
            lo_s = '-inf' if lo is None else str(lo)
            hi_s = '+inf' if hi is None else str(hi)
            lines.append(f"  edge ({lo_s}, {hi_s}): {edge.curves!r}")
            if i < len(self._vertices):
                v = self._vertices[i]
                lines.append(f"  vertex {v.point!r}: {v.curves!r}")
        return "\n".join(lines)

    def __repr__(self):
        if self._consumed:
            return "EnvelopeDiagram(<consumed>)"
        return (
            f"EnvelopeDiagram({self.env_type.value}, "
            f"vertices={len(self._vertices)}, edges={len(self._edges)})"
        )
