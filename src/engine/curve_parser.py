# curve_parser.py
"""
CurveParser: converte le voci YAML in oggetti curva.

Formati supportati (una voce per curva):
    {type: segment, source: [x, y], target: [x, y]}
    {type: line, slope: m, intercept: q, x_min: a?, x_max: b?}
    {type: vertical, x: v, y_min: a?, y_max: b?}
    {type: polyline, points: [[x, y], ...]}

Ogni voce puo' avere un 'label' opzionale; se assente viene generato
('c0', 'c1', ...). I numeri possono essere int, float o stringhe "p/q".
"""

from typing import Any, Dict, List

from curves.geometry import (
    Point,
    Polyline,
    Segment,
    VerticalSegment,
    XMonotoneSegment,
)


class CurveParser:
    """Parser delle curve definite nel YAML."""

    def __init__(self):
        self._handlers = {
            'segment': self._parse_segment,
            'line': self._parse_line,
            'vertical': self._parse_vertical,
            'polyline': self._parse_polyline,
        }

    def parse_curves(self, raw_curves: List[Dict[str, Any]]) -> List[Any]:
        if raw_curves is None:
            return []
        if not isinstance(raw_curves, list):
            raise ValueError(f"'curves' deve essere una lista, ricevuto: {type(raw_curves).__name__}")
        return [self.parse_curve(raw, index) for index, raw in enumerate(raw_curves)]

    def parse_curve(self, raw: Dict[str, Any], index: int = 0):
        if not isinstance(raw, dict):
            raise ValueError(f"Curva {index}: formato non valido {raw!r}, atteso dict")

        curve_type = str(raw.get('type', '')).strip().lower()
        handler = self._handlers.get(curve_type)
        if handler is None:
            raise ValueError(
                f"Curva {index}: tipo '{raw.get('type')}' non riconosciuto. "
                f"Tipi validi: {self.get_supported_types()}"
            )

        label = raw.get('label', f"c{index}")
        try:
            return handler(raw, str(label))
        except KeyError as e:
            raise ValueError(f"Curva {index} ({curve_type}): chiave mancante {e}") from None
        except (TypeError, ValueError) as e:
            raise ValueError(f"Curva {index} ({curve_type}): {e}") from e

    def get_supported_types(self) -> list:
        return list(self._handlers.keys())

    # =========================================================================
    # HANDLER PER TIPO
    # =========================================================================

    def _parse_segment(self, raw, label):
        return Segment(Point.of(raw['source']), Point.of(raw['target']), label=label)

    def _parse_line(self, raw, label):
        return XMonotoneSegment(
            raw['slope'], raw['intercept'],
            raw.get('x_min'), raw.get('x_max'),
            label=label,
        )

    def _parse_vertical(self, raw, label):
        return VerticalSegment(raw['x'], raw.get('y_min'), raw.get('y_max'), label=label)

    def _parse_polyline(self, raw, label):
        return Polyline(tuple(raw['points']), label=label)
