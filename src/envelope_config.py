# envelope_config.py
from dataclasses import dataclass


@dataclass(frozen=True)
class EnvelopeConfig:
    """
    Configuration object per la costruzione dell'envelope.

    Configuration Object Pattern:
    - Immutabile (frozen=True)
    - Factory from_yaml() per centralizzare la lettura del YAML

    Attributes:
        env_type: 'lower' o 'upper'
        traits: nome della famiglia di curve (vedi TraitsFactory)
        allow_empty: se False, un input senza curve solleva EmptyInput
        log_merges: se True, logga un riepilogo per ogni merge
        visualize: se True, il generator esporta anche il grafico
    """
    env_type: str = 'lower'
    traits: str = 'linear'
    allow_empty: bool = True
    log_merges: bool = False
    visualize: bool = False

    @classmethod
    def from_yaml(cls, yaml_data: dict) -> 'EnvelopeConfig':
        """
        Factory method per creare config da YAML.

        Chiavi riconosciute: envelope, traits, allow_empty, log_merges, visualize.
        """
        if not isinstance(yaml_data, dict):
            raise TypeError(f"yaml_data deve essere dict, non {type(yaml_data).__name__}")
        return cls(
            env_type=yaml_data.get('envelope', 'lower'),
            traits=yaml_data.get('traits', 'linear'),
            allow_empty=yaml_data.get('allow_empty', True),
            log_merges=yaml_data.get('log_merges', False),
            visualize=yaml_data.get('visualize', False),
        )

    def __post_init__(self):
        """Validazione dei valori."""
        if not isinstance(self.env_type, str):
            raise TypeError(f"env_type deve essere str, non {type(self.env_type).__name__}")
        normalized = self.env_type.strip().lower()
        if normalized not in ('lower', 'upper'):
            raise ValueError(f"env_type non valido: '{self.env_type}'. Valori validi: lower, upper")
        object.__setattr__(self, 'env_type', normalized)

        if not isinstance(self.traits, str):
            raise TypeError(f"traits deve essere str, non {type(self.traits).__name__}")

        for name in ('allow_empty', 'log_merges', 'visualize'):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} deve essere bool, non {type(getattr(self, name)).__name__}")

    @property
    def envelope_type(self):
        from diagram.envelope_diagram import EnvelopeType
        return EnvelopeType.from_value(self.env_type)
