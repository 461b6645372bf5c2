# curve_classifier.py
from typing import Any, List, Tuple

from curves.traits import CurveTraits


def classify_curves(curves, traits: CurveTraits) -> Tuple[List[Any], List[Any]]:
    """Separa le curve x-monotone in (regolari, verticali), mantenendo l'ordine."""
    regular, vertical = [], []
    for curve in curves:
        if traits.is_vertical(curve):
            vertical.append(curve)
        else:
            regular.append(curve)
    return regular, vertical
