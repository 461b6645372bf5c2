# vertical_merger.py
"""
Folds vertical segments into a finished non-vertical envelope diagram.

Vertical segments have no slope, so the two-sided merge does not apply to
them. Instead they are grouped by x, the most extreme one of each group is
kept, and each group is compared with the envelope value at its x only.
"""

import math
from bisect import bisect_left
from itertools import groupby
from typing import Any, List, Tuple

from curves.geometry import Point
from curves.traits import CurveTraits
from diagram.envelope_diagram import EnvelopeDiagram, EnvelopeType, Vertex
from shared.logger import log_vertical_discarded


class VerticalSegmentMerger:
    """Merge dei segmenti verticali nel diagramma (in place)."""

    def __init__(self, traits: CurveTraits, env_type: EnvelopeType = EnvelopeType.LOWER):
        self.traits = traits
        self.env_type = EnvelopeType.from_value(env_type)

    def merge(self, vertical_curves: List[Any], diagram: EnvelopeDiagram) -> EnvelopeDiagram:
        """
        Merge vertical segments into ``diagram`` and return it.

        Groups are processed right to left, so inserting a vertex never
        shifts the index of a group still to be processed.
        """
        if diagram.env_type is not self.env_type:
            raise ValueError(
                f"Diagramma {diagram.env_type.value} in un merge verticale "
                f"{self.env_type.value}"
            )

        groups = self._extreme_groups(vertical_curves)
        xs = diagram.x_values()

        for x, extreme, segments in reversed(groups):
            self._merge_group(diagram, xs, x, extreme, segments)
        return diagram

    # =========================================================================
    # GROUPING
    # =========================================================================

    def _extreme_end(self, segment):
        y_min, y_max = self.traits.vertical_range(segment)
        if self.env_type is EnvelopeType.LOWER:
            return -math.inf if y_min is None else y_min
        return math.inf if y_max is None else y_max

    def _extreme_groups(self, vertical_curves) -> List[Tuple[Any, Any, List[Any]]]:
        """
        [(x, estremo, segmenti che lo raggiungono)] ordinati per x.

        Per ogni x sopravvivono solo i segmenti con l'estremo migliore.
        """
        keyed = sorted(
            ((self.traits.vertical_x(s), i, s) for i, s in enumerate(vertical_curves)),
            key=lambda item: (item[0], item[1])
        )
        groups = []
        for x, items in groupby(keyed, key=lambda item: item[0]):
            segments = [s for _, _, s in items]
            ends = [self._extreme_end(s) for s in segments]
            best = ends[0]
            for end in ends[1:]:
                if self.env_type.is_better(end, best):
                    best = end
            groups.append((x, best, [s for s, end in zip(segments, ends) if end == best]))
        return groups

    # =========================================================================
    # MERGE OF A SINGLE GROUP
    # =========================================================================

    def _merge_group(self, diagram, xs, x, extreme, segments):
        i = bisect_left(xs, x)

        if i < len(xs) and xs[i] == x:
            vertex = diagram.vertex(i)
            current = vertex.point.y
            if self.env_type.is_better(extreme, current):
                vertex.point = Point(x, extreme)
                vertex.curves = list(segments)
            elif extreme == current:
                vertex.curves.extend(segments)
            else:
                log_vertical_discarded(self.env_type.value, x, extreme, current)
            return

        edge = diagram.edge(i)
        if edge.is_empty():
            diagram.split_edge(i, Vertex(Point(x, extreme), segments))
            return

        current = self.traits.y_at_x(edge.curves[0], x)
        if self.env_type.is_better(extreme, current):
            diagram.split_edge(i, Vertex(Point(x, extreme), segments))
        elif extreme == current:
            diagram.split_edge(i, Vertex(Point(x, current), list(edge.curves) + list(segments)))
        else:
            log_vertical_discarded(self.env_type.value, x, extreme, current)
