# diagram_writer.py
"""
DiagramWriter: esporta un EnvelopeDiagram in YAML.

I valori esatti (Fraction) vengono scritti come stringhe ("-5", "10/3")
per non perdere precisione; gli infiniti come "-inf" / "+inf".
"""

import math
from typing import Any, Dict

import yaml

from diagram.envelope_diagram import EnvelopeDiagram


def curve_label(curve) -> str:
    label = getattr(curve, 'label', None)
    return label if label is not None else repr(curve)


def format_value(value, infinity: str = '+inf') -> str:
    """Formatta un valore esatto; None sta per l'infinito indicato."""
    if value is None:
        return infinity
    if isinstance(value, float) and math.isinf(value):
        return '-inf' if value < 0 else '+inf'
    return str(value)


class DiagramWriter:
    """
    Scrive il diagramma su file YAML.

    Responsabilita:
    - Convertire vertici e spigoli in strutture serializzabili
    - Scrivere il file con yaml.safe_dump
    """

    def to_dict(self, diagram: EnvelopeDiagram) -> Dict[str, Any]:
        vertices = []
        for v in diagram.vertices:
            vertices.append({
                'x': format_value(v.point.x),
                'y': format_value(v.point.y),
                'curves': [curve_label(c) for c in v.curves],
            })

        edges = []
        for i, edge in enumerate(diagram.edges):
            lo, hi = diagram.edge_interval(i)
            edges.append({
                'from': format_value(lo, '-inf'),
                'to': format_value(hi, '+inf'),
                'curves': [curve_label(c) for c in edge.curves],
            })

        return {
            'envelope': diagram.env_type.value,
            'vertices': vertices,
            'edges': edges,
        }

    def write(self, filepath: str, diagram: EnvelopeDiagram, yaml_source: str = None):
        """
        Args:
            filepath: percorso file output .yml
            diagram: diagramma da esportare
            yaml_source: path del YAML sorgente (annotato nell'output)
        """
        data = self.to_dict(diagram)
        if yaml_source:
            data = {'source': yaml_source, **data}

        with open(filepath, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)

        print(f"Diagramma scritto: {filepath} "
              f"({len(data['vertices'])} vertici, {len(data['edges'])} spigoli)")
