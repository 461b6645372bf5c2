# envelope_builder.py
"""
Divide-and-conquer construction of the lower (or upper) envelope.

Design Pattern: Builder
- separates the recursive construction from the diagram representation
- delegates every geometric question to a shared CurveTraits instance

Pipeline:
    curves -> x-monotone pieces -> (regular, vertical)
           -> regular: split at the midpoint, build halves, merge
           -> vertical: folded into the finished diagram in one pass

With linear merges the total cost is O(n log n).
"""

from typing import Any, List, Optional, Sequence, Union

from curves.traits import CurveTraits
from curves.traits_factory import TraitsFactory
from diagram.envelope_diagram import Edge, EnvelopeDiagram, EnvelopeType, Vertex
from envelope_config import EnvelopeConfig
from envelopes.curve_classifier import classify_curves
from envelopes.diagram_merger import DiagramMerger
from envelopes.errors import EmptyInput, EnvelopeError
from envelopes.vertical_merger import VerticalSegmentMerger
from shared.logger import log_build_error, log_build_summary


class EnvelopeBuilder:
    """
    Builds minimization (or maximization) diagrams.

    Examples:
        builder = EnvelopeBuilder(LinearTraits(), EnvelopeType.LOWER)
        diagram = builder.build([
            Segment((0, 0), (10, -10)),
            Segment((0, -10), (10, 0)),
        ])
        [v.point for v in diagram.vertices]
        → [P(0, -10), P(5, -5), P(10, -10)]
    """

    def __init__(
        self,
        traits: Union[str, CurveTraits, None] = None,
        env_type: Union[str, EnvelopeType, None] = None,
        config: Optional[EnvelopeConfig] = None
    ):
        self.config = config or EnvelopeConfig()
        self.traits = TraitsFactory.create(traits if traits is not None else self.config.traits)
        self.env_type = EnvelopeType.from_value(
            env_type if env_type is not None else self.config.envelope_type
        )
        self.merger = DiagramMerger(self.traits, self.env_type)
        self.vertical_merger = VerticalSegmentMerger(self.traits, self.env_type)

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def build(self, curves: Sequence[Any]) -> EnvelopeDiagram:
        """Envelope di curve generiche: prima le spezza in pezzi x-monotoni."""
        x_curves = []
        for curve in curves:
            x_curves.extend(self.traits.make_x_monotone(curve))
        return self.build_from_x_monotone(x_curves)

    def build_from_x_monotone(self, x_curves: Sequence[Any]) -> EnvelopeDiagram:
        """
        Envelope di curve gia' x-monotone.

        Raises:
            EmptyInput: se la config non ammette input vuoto
            EnvelopeError: errori strutturali del merge (propagati)
        """
        x_curves = list(x_curves)
        if not x_curves and not self.config.allow_empty:
            raise EmptyInput("Nessuna curva in input")

        regular, vertical = classify_curves(x_curves, self.traits)

        try:
            diagram = self._construct_non_vertical(regular, 0, len(regular))
            if vertical:
                diagram = self.vertical_merger.merge(vertical, diagram)
        except EnvelopeError as e:
            log_build_error(self.env_type.value, e)
            raise

        log_build_summary(
            self.env_type.value, len(x_curves), len(regular), len(vertical),
            diagram.number_of_vertices()
        )
        return diagram

    def construct_singleton(self, xcv) -> EnvelopeDiagram:
        """
        Diagram of a single non-vertical curve.

        A vertex (carrying the curve) at each bounded end of its domain, the
        curve on the edge inside the domain, empty edges outside it.
        """
        left = self.traits.min_end(xcv)
        right = self.traits.max_end(xcv)

        vertices: List[Vertex] = []
        edges: List[Edge] = []

        if left is not None:
            edges.append(Edge())
            vertices.append(Vertex(left, [xcv]))
        edges.append(Edge([xcv]))
        if right is not None:
            vertices.append(Vertex(right, [xcv]))
            edges.append(Edge())

        return EnvelopeDiagram(self.env_type, vertices, edges)

    def value_at(self, diagram: EnvelopeDiagram, x):
        """Valore dell'envelope in x (None se nessuna curva e' definita in x)."""
        kind, index = diagram.locate(x)
        if kind == 'vertex':
            return diagram.vertex(index).point.y
        edge = diagram.edge(index)
        if edge.is_empty():
            return None
        return self.traits.y_at_x(edge.curves[0], x)

    # =========================================================================
    # DIVIDE AND CONQUER
    # =========================================================================

    def _construct_non_vertical(self, curves: List[Any], begin: int, end: int) -> EnvelopeDiagram:
        size = end - begin
        if size == 0:
            return EnvelopeDiagram.empty(self.env_type)
        if size == 1:
            return self.construct_singleton(curves[begin])

        middle = begin + size // 2
        left = self._construct_non_vertical(curves, begin, middle)
        right = self._construct_non_vertical(curves, middle, end)
        return self.merger.merge(left, right)


# =============================================================================
# FUNZIONI DI COMODO
# =============================================================================

def build_envelope(
    curves: Sequence[Any],
    env_type: Union[str, EnvelopeType] = EnvelopeType.LOWER,
    traits: Union[str, CurveTraits, None] = None
) -> EnvelopeDiagram:
    """Lower (o upper) envelope di curve qualsiasi."""
    return EnvelopeBuilder(traits, env_type).build(curves)


def build_envelope_from_x_monotone(
    x_curves: Sequence[Any],
    env_type: Union[str, EnvelopeType] = EnvelopeType.LOWER,
    traits: Union[str, CurveTraits, None] = None
) -> EnvelopeDiagram:
    """Lower (o upper) envelope di curve gia' x-monotone."""
    return EnvelopeBuilder(traits, env_type).build_from_x_monotone(x_curves)
