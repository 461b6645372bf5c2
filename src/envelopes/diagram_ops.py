# diagram_ops.py
"""
Vertex ordering and right-append helpers shared by the diagram merger.
"""

from collections import Counter
from typing import Any, List, Optional, Tuple

from curves.traits import Comparison
from diagram.envelope_diagram import Edge, EnvelopeDiagram, EnvelopeType, Vertex


def compare_vertices(v1: Vertex, v2: Vertex, env_type: EnvelopeType) -> Tuple[Comparison, bool]:
    """
    Confronta due vertici secondo l'ordine dell'envelope.

    Returns:
        (result, same_x):
        - SMALLER se x(v1) < x(v2), oppure x uguali e v1 piu' estremo
          (y minore per LOWER, y maggiore per UPPER)
        - LARGER nel caso simmetrico
        - EQUAL se i punti coincidono
        same_x e' True se x(v1) == x(v2)
    """
    p1, p2 = v1.point, v2.point
    if p1.x != p2.x:
        return Comparison.of(p1.x, p2.x), False

    result = Comparison.of(p1.y, p2.y)
    if env_type is EnvelopeType.UPPER:
        result = result.flipped()
    return result, True


def _identity_multiset(curves) -> Counter:
    return Counter(id(c) for c in curves)


def is_redundant(left: Edge, vertex: Vertex, right_curves: List[Any]) -> bool:
    """
    A vertex is redundant when it and both flanking edges carry the very
    same non-empty curves: the envelope runs straight through it.
    """
    if not right_curves:
        return False
    signature = _identity_multiset(right_curves)
    return (_identity_multiset(left.curves) == signature
            and _identity_multiset(vertex.curves) == signature)


class DiagramAppender:
    """
    Builds a diagram from left to right.

    Calls must alternate: edge, vertex, edge, ..., edge. A vertex is held
    back until its right edge arrives, so that redundant vertices can be
    dropped without ever being written to the diagram.
    """

    def __init__(self, env_type: EnvelopeType):
        self.env_type = env_type
        self._diagram: Optional[EnvelopeDiagram] = None
        self._pending: Optional[Vertex] = None
        self.dropped_vertices = 0

    def append_edge(self, curves: List[Any]):
        if self._diagram is None:
            self._diagram = EnvelopeDiagram(self.env_type, [], [Edge(curves)])
            return
        if self._pending is None:
            raise RuntimeError("Due spigoli consecutivi senza vertice intermedio")

        vertex, self._pending = self._pending, None
        if is_redundant(self._diagram.rightmost(), vertex, curves):
            self.dropped_vertices += 1
            return
        self._diagram.append(vertex, Edge(curves))

    def append_vertex(self, point, curves: List[Any]):
        if self._diagram is None or self._pending is not None:
            raise RuntimeError("Un vertice deve seguire uno spigolo")
        last_x = self.last_x()
        if last_x is not None and not last_x < point.x:
            raise ValueError(
                f"Vertice in x={point.x} non a destra dell'ultimo vertice (x={last_x})"
            )
        self._pending = Vertex(point, curves)

    def last_x(self):
        """x dell'ultimo vertice aggiunto (anche se in attesa), None se nessuno."""
        if self._pending is not None:
            return self._pending.point.x
        if self._diagram is not None and self._diagram.number_of_vertices():
            return self._diagram.vertex(-1).point.x
        return None

    def finish(self) -> EnvelopeDiagram:
        if self._diagram is None:
            return EnvelopeDiagram.empty(self.env_type)
        if self._pending is not None:
            raise RuntimeError("Il diagramma deve terminare con uno spigolo")
        diagram, self._diagram = self._diagram, None
        return diagram
