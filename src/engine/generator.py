# src/engine/generator.py
"""
Generator: orchestratore del calcolo dell'envelope da file YAML.

Responsabilita separate:
- CurveParser: voci YAML -> curve
- EnvelopeBuilder: curve -> diagramma
- DiagramWriter / DiagramVisualizer: diagramma -> file
"""
import os
from typing import Any, Dict, List, Optional

import yaml

from engine.curve_parser import CurveParser
from envelope_config import EnvelopeConfig
from envelopes.envelope_builder import EnvelopeBuilder
from rendering.diagram_writer import DiagramWriter
from shared.logger import ENVELOPE_LOG_CONFIG


class Generator:
    """
    Orchestratore principale: YAML -> envelope -> output.

    Public API:
    - load_yaml() -> dict
    - create_elements() -> EnvelopeDiagram
    - generate_output_file(output_path: str) -> None
    - generate_plot(output_path: str) -> None

    Attributes:
        yaml_path: path file YAML
        data: dati YAML caricati
        config: EnvelopeConfig letta dal YAML
        curves: curve parsate
        diagram: diagramma calcolato
    """

    def __init__(self, yaml_path: str, env_type: Optional[str] = None):
        """
        Args:
            yaml_path: percorso file YAML
            env_type: se indicato ('lower'/'upper') sovrascrive il valore del YAML
        """
        self.yaml_path = yaml_path
        self.env_type_override = env_type
        self.data: Dict[str, Any] = None
        self.config: Optional[EnvelopeConfig] = None
        self.curves: List[Any] = []
        self.builder: Optional[EnvelopeBuilder] = None
        self.diagram = None

        self.parser = CurveParser()
        self.writer = DiagramWriter()

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def load_yaml(self) -> dict:
        """
        Carica il file YAML e ne estrae la configurazione.

        Raises:
            FileNotFoundError: se il file YAML non esiste
            yaml.YAMLError: se il file YAML e' malformato
            ValueError: se la radice del YAML non e' un dict
        """
        with open(self.yaml_path, 'r', encoding='utf-8') as f:
            raw_data = yaml.safe_load(f)

        if raw_data is None:
            raw_data = {}
        if not isinstance(raw_data, dict):
            raise ValueError(f"Il YAML deve contenere un dict, trovato: {type(raw_data).__name__}")

        if self.env_type_override is not None:
            raw_data = {**raw_data, 'envelope': self.env_type_override}

        self.data = raw_data
        self.config = EnvelopeConfig.from_yaml(raw_data)
        ENVELOPE_LOG_CONFIG['log_merges'] = self.config.log_merges
        return self.data

    def create_elements(self):
        """
        Parsa le curve e calcola il diagramma.

        Raises:
            ValueError: se load_yaml() non e' stato chiamato
            EnvelopeError: errori strutturali del calcolo
        """
        if self.data is None:
            raise ValueError("Devi prima caricare il YAML con load_yaml()")

        self.curves = self.parser.parse_curves(self.data.get('curves', []))
        self.builder = EnvelopeBuilder(config=self.config)
        self.diagram = self.builder.build(self.curves)
        return self.diagram

    def generate_output_file(self, output_path: str = 'envelope.yml'):
        """Scrive il diagramma su file YAML."""
        self._require_diagram()
        self.writer.write(output_path, self.diagram, yaml_source=self.yaml_path)

    def generate_plot(self, output_path: str):
        """Esporta il grafico del diagramma."""
        self._require_diagram()
        from rendering.diagram_visualizer import DiagramVisualizer

        x_curves = []
        for curve in self.curves:
            x_curves.extend(self.builder.traits.make_x_monotone(curve))
        visualizer = DiagramVisualizer(self.diagram, self.builder.traits, x_curves)
        visualizer.export(output_path)

    def plot_path_for(self, output_path: str) -> str:
        """output.yml -> output.png"""
        base, _ = os.path.splitext(output_path)
        return base + '.png'

    def _require_diagram(self):
        if self.diagram is None:
            raise ValueError("Devi prima calcolare il diagramma con create_elements()")
