# traits_factory.py
"""
Factory per la creazione di CurveTraits.

Design Pattern: Factory Method
- Centralizza la scelta della famiglia di curve
- Facilita l'estensione con nuovi traits
"""

from typing import Union

from curves.traits import CurveTraits
from curves.linear_traits import LinearTraits


class TraitsFactory:
    """
    Factory per creare CurveTraits da tipo stringa.

    Supporta i tipi:
    - 'linear': LinearTraits (segmenti, raggi, rette, polilinee)

    Case-insensitive per robustezza.
    """

    _TRAITS_MAP = {
        'linear': LinearTraits,
    }

    @classmethod
    def create(cls, traits_type: Union[str, CurveTraits]) -> CurveTraits:
        """
        Crea CurveTraits da tipo stringa.

        Args:
            traits_type: nome ('linear') oppure istanza CurveTraits gia' creata

        Returns:
            CurveTraits: istanza richiesta

        Raises:
            ValueError: se il tipo non e' riconosciuto

        Examples:
            >>> isinstance(TraitsFactory.create('LINEAR'), LinearTraits)
            True
            >>> existing = LinearTraits()
            >>> TraitsFactory.create(existing) is existing
            True
        """
        if isinstance(traits_type, CurveTraits):
            return traits_type

        if not isinstance(traits_type, str):
            raise ValueError(
                f"traits_type deve essere str o CurveTraits, "
                f"ricevuto: {type(traits_type).__name__}"
            )

        normalized = traits_type.strip().lower()
        traits_class = cls._TRAITS_MAP.get(normalized)

        if traits_class is None:
            raise ValueError(
                f"Tipo traits non riconosciuto: '{traits_type}'. "
                f"Tipi validi: {list(cls._TRAITS_MAP.keys())}"
            )

        return traits_class()

    @classmethod
    def get_supported_types(cls) -> list:
        return list(cls._TRAITS_MAP.keys())
