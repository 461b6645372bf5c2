# diagram_merger.py
"""
Merge of two envelope diagrams built from disjoint curve sets.

A single left-to-right sweep over both diagrams, like merging two sorted
lists. Each step:

1. picks the next vertex (by ``compare_vertices``) among the two sides;
2. resolves the open interval up to it from the two current edges:
   - one side empty: the other side wins the whole interval
   - both non-empty: the traits decide domination, crossing or tie
3. emits the envelope vertex at that x (both sides' vertices at the same x
   become a single vertex);
4. advances the side(s) that reached it.

Runs in time linear in the size of the two inputs. Both inputs are consumed:
their storage is moved out and they cannot be read again.
"""

from typing import Any, List, Optional, Tuple

from curves.geometry import Point
from curves.traits import Comparison, CurveTraits, IntervalComparison, Relation
from diagram.envelope_diagram import Edge, EnvelopeDiagram, EnvelopeType, Vertex
from envelopes.diagram_ops import DiagramAppender, compare_vertices
from envelopes.errors import MalformedMonotoneInput, MismatchedEnvelopeType, UnresolvableTie
from shared.logger import log_merge_summary


class DiagramMerger:
    """
    Merges minimization (or maximization) diagrams.

    The traits object is shared, never mutated: the merger only asks it
    questions (``compare_over_interval``, ``y_at_x``, ``compare_y_at_x``).
    """

    def __init__(self, traits: CurveTraits, env_type: EnvelopeType = EnvelopeType.LOWER):
        self.traits = traits
        self.env_type = EnvelopeType.from_value(env_type)
        self.crossings = 0

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def merge(self, d1: EnvelopeDiagram, d2: EnvelopeDiagram) -> EnvelopeDiagram:
        """
        Merge d1 and d2 into a new diagram, consuming both.

        Raises:
            MismatchedEnvelopeType: diagrams of different envelope type
            DiagramConsumedError: one of the inputs was already consumed
            MalformedMonotoneInput: contradictory overlap between curves
            UnresolvableTie: the traits failed to decide a relation
        """
        for d in (d1, d2):
            if d.env_type is not self.env_type:
                raise MismatchedEnvelopeType(
                    f"Diagramma {d.env_type.value} in un merge {self.env_type.value}"
                )

        # Diagramma senza curve: sposta l'altro cosi' com'e'
        if d2.is_empty():
            vertices, edges = d1.take_storage()
            d2.take_storage()
            return EnvelopeDiagram(self.env_type, vertices, edges)
        if d1.is_empty():
            d1.take_storage()
            vertices, edges = d2.take_storage()
            return EnvelopeDiagram(self.env_type, vertices, edges)

        vertices1, edges1 = d1.take_storage()
        vertices2, edges2 = d2.take_storage()

        crossings_before = self.crossings
        appender = DiagramAppender(self.env_type)
        self._sweep(appender, vertices1, edges1, vertices2, edges2)
        merged = appender.finish()

        log_merge_summary(
            self.env_type.value,
            len(vertices1), len(vertices2),
            merged.number_of_vertices(),
            self.crossings - crossings_before,
            appender.dropped_vertices,
        )
        return merged

    # =========================================================================
    # SWEEP
    # =========================================================================

    def _sweep(self, appender, vertices1, edges1, vertices2, edges2):
        # i1/i2: indice del prossimo vertice; lo spigolo corrente ha lo stesso indice
        i1 = i2 = 0
        lo = None

        while True:
            next1 = vertices1[i1] if i1 < len(vertices1) else None
            next2 = vertices2[i2] if i2 < len(vertices2) else None

            if next1 is None and next2 is None:
                self._resolve_interval(appender, edges1[i1], edges2[i2], lo, None)
                return

            take1, take2 = self._pick_next(next1, next2)
            x = next1.point.x if take1 else next2.point.x

            self._resolve_interval(appender, edges1[i1], edges2[i2], lo, x)

            point, curves = self._resolve_point(
                x,
                next1 if take1 else None, edges1[i1],
                next2 if take2 else None, edges2[i2],
            )
            appender.append_vertex(point, curves)

            if take1:
                i1 += 1
            if take2:
                i2 += 1
            lo = x

    def _pick_next(self, next1: Optional[Vertex], next2: Optional[Vertex]) -> Tuple[bool, bool]:
        """Quale lato (o entrambi, se stessa x) raggiunge per primo il prossimo vertice."""
        if next2 is None:
            return True, False
        if next1 is None:
            return False, True

        result, same_x = compare_vertices(next1, next2, self.env_type)
        if same_x:
            return True, True
        return result is Comparison.SMALLER, result is Comparison.LARGER

    # =========================================================================
    # VERTEX EMISSION
    # =========================================================================

    def _side_value(self, x, vertex: Optional[Vertex], edge: Edge):
        """(y, curves, point) di un lato in x, oppure None se il lato e' vuoto in x."""
        if vertex is not None:
            return vertex.point.y, vertex.curves, vertex.point
        if edge.is_empty():
            return None
        y = self.traits.y_at_x(edge.curves[0], x)
        return y, edge.curves, None

    def _resolve_point(self, x, vertex1, edge1, vertex2, edge2) -> Tuple[Point, List[Any]]:
        value1 = self._side_value(x, vertex1, edge1)
        value2 = self._side_value(x, vertex2, edge2)

        if value2 is None or (value1 is not None and self.env_type.is_better(value1[0], value2[0])):
            best, curves = value1, list(value1[1])
        elif value1 is None or self.env_type.is_better(value2[0], value1[0]):
            best, curves = value2, list(value2[1])
        else:
            # stesso punto da entrambi i lati
            best, curves = value1, list(value1[1]) + list(value2[1])

        y, _, point = best
        if point is None:
            point = Point(x, y)
        return point, curves

    # =========================================================================
    # INTERVAL RESOLUTION
    # =========================================================================

    def _resolve_interval(self, appender, edge1: Edge, edge2: Edge, lo, hi):
        if edge1.is_empty() and edge2.is_empty():
            appender.append_edge([])
        elif edge2.is_empty():
            appender.append_edge(edge1.curves)
        elif edge1.is_empty():
            appender.append_edge(edge2.curves)
        else:
            self._merge_two_intervals(appender, edge1, edge2, lo, hi)

    def _merge_two_intervals(self, appender, edge1: Edge, edge2: Edge, lo, hi):
        """
        Both edges are non-empty on (lo, hi). The curves of an edge all
        coincide there, so the first curve of each edge stands for its set.
        Every crossing splits the interval: the pre-crossing winner, a vertex
        carrying both curve sets, then the remainder is resolved again.
        """
        c1, c2 = edge1.curves[0], edge2.curves[0]
        start = lo

        while True:
            answer = self._compare(c1, c2, start, hi, edge1, edge2)
            if answer.relation is not Relation.CROSSES:
                appender.append_edge(self._winner(answer.relation, edge1, edge2))
                return

            x = answer.x
            before = self._compare(c1, c2, start, x, edge1, edge2)
            if before.relation is Relation.CROSSES:
                raise MalformedMonotoneInput(
                    (start, hi), edge1.curves, edge2.curves,
                    reason=f"intersezione in {before.x} precedente alla prima dichiarata {x}"
                )
            if self.traits.compare_y_at_x(c1, c2, x) is not Comparison.EQUAL:
                raise MalformedMonotoneInput(
                    (start, hi), edge1.curves, edge2.curves,
                    reason=f"le curve non si incontrano nell'intersezione dichiarata x={x}"
                )

            appender.append_edge(self._winner(before.relation, edge1, edge2))
            appender.append_vertex(
                Point(x, self.traits.y_at_x(c1, x)),
                list(edge1.curves) + list(edge2.curves),
            )
            self.crossings += 1
            start = x

    def _compare(self, c1, c2, lo, hi, edge1: Edge, edge2: Edge) -> IntervalComparison:
        answer = self.traits.compare_over_interval(c1, c2, lo, hi)

        if not isinstance(answer, IntervalComparison) or not isinstance(answer.relation, Relation):
            raise UnresolvableTie(c1, c2, (lo, hi), answer)
        if answer.relation is Relation.CROSSES:
            if answer.x is None:
                raise UnresolvableTie(c1, c2, (lo, hi), answer)
            if (lo is not None and answer.x <= lo) or (hi is not None and answer.x >= hi):
                raise MalformedMonotoneInput(
                    (lo, hi), edge1.curves, edge2.curves,
                    reason=f"intersezione dichiarata fuori intervallo: x={answer.x}"
                )
        return answer

    def _winner(self, relation: Relation, edge1: Edge, edge2: Edge) -> List[Any]:
        """Curve che realizzano l'envelope dati SMALLER/LARGER/EQUAL tra lato 1 e lato 2."""
        if relation is Relation.EQUAL:
            return list(edge1.curves) + list(edge2.curves)

        first_below = relation is Relation.SMALLER
        if (self.env_type is EnvelopeType.LOWER) == first_below:
            return list(edge1.curves)
        return list(edge2.curves)
