# =============================================================================
# DIAGRAM VISUALIZER - Grafico dell'envelope e delle curve in input
# =============================================================================

import math
from fractions import Fraction

import matplotlib.pyplot as plt
import numpy as np

from diagram.envelope_diagram import EnvelopeDiagram
from rendering.diagram_writer import curve_label


class DiagramVisualizer:
    """
    Visualizzatore di un EnvelopeDiagram.

    - Curve in input: grigio chiaro
    - Spigoli dell'envelope: colore per curva
    - Vertici: marker

    La finestra in x e' calcolata dai vertici (con margine); gli spigoli
    illimitati vengono tagliati ai bordi della finestra.
    """

    def __init__(self, diagram: EnvelopeDiagram, traits, input_curves=None, config=None):
        """
        Args:
            diagram: diagramma da disegnare
            traits: CurveTraits usati per valutare le curve
            input_curves: curve x-monotone originali (opzionale)
            config: dict di configurazione (opzionale)
        """
        self.diagram = diagram
        self.traits = traits
        self.input_curves = list(input_curves or [])

        default_config = {
            'figsize': (10, 6),
            'margin_ratio': 0.15,          # margine rispetto all'ampiezza dei vertici
            'default_window': (-10.0, 10.0),
            'samples_per_edge': 50,
            'input_color': '#cccccc',
            'envelope_colormap': 'tab10',
            'envelope_linewidth': 2.5,
            'vertex_color': 'black',
            'vertex_size': 25,
            'title_fontsize': 12,
        }
        self.config = {**default_config, **(config or {})}
        self.figure = None

    # =========================================================================
    # WINDOW
    # =========================================================================

    def x_window(self):
        xs = [float(x) for x in self.diagram.x_values()]
        if not xs:
            return self.config['default_window']
        lo, hi = min(xs), max(xs)
        span = hi - lo if hi > lo else 1.0
        margin = span * self.config['margin_ratio']
        return lo - margin, hi + margin

    def _clip(self, lo, hi, window):
        """Intervallo esatto (Fraction) ristretto alla finestra."""
        w_lo, w_hi = Fraction(window[0]), Fraction(window[1])
        lo = w_lo if lo is None else max(lo, w_lo)
        hi = w_hi if hi is None else min(hi, w_hi)
        return lo, hi

    def _sample(self, curve, lo, hi):
        # campioni esatti in [lo, hi]: gli estremi restano dentro il dominio
        ts = np.linspace(0.0, 1.0, self.config['samples_per_edge'])
        exact = [lo + (hi - lo) * Fraction(float(t)) for t in ts]
        xs = np.array([float(x) for x in exact])
        ys = np.array([float(self.traits.y_at_x(curve, x)) for x in exact])
        return xs, ys

    # =========================================================================
    # RENDER
    # =========================================================================

    def render(self):
        """Disegna il diagramma e ritorna la Figure matplotlib."""
        window = self.x_window()
        fig, ax = plt.subplots(figsize=self.config['figsize'])

        self._draw_input_curves(ax, window)
        self._draw_edges(ax, window)
        self._draw_vertices(ax)

        ax.set_xlim(*window)
        ax.set_xlabel('x')
        ax.set_ylabel('y')
        ax.set_title(
            f"{self.diagram.env_type.value} envelope - "
            f"{self.diagram.number_of_vertices()} vertici",
            fontsize=self.config['title_fontsize']
        )
        ax.grid(True, alpha=0.3)
        handles, labels = ax.get_legend_handles_labels()
        if handles:
            ax.legend(fontsize=8, loc='best')

        self.figure = fig
        return fig

    def _draw_input_curves(self, ax, window):
        for curve in self.input_curves:
            if self.traits.is_vertical(curve):
                y_min, y_max = self.traits.vertical_range(curve)
                if y_min is None or y_max is None:
                    continue
                x = float(self.traits.vertical_x(curve))
                ax.plot([x, x], [float(y_min), float(y_max)],
                        color=self.config['input_color'], linewidth=1)
                continue

            left, right = self.traits.min_end(curve), self.traits.max_end(curve)
            lo, hi = self._clip(left.x if left else None, right.x if right else None, window)
            if lo >= hi:
                continue
            xs, ys = self._sample(curve, lo, hi)
            ax.plot(xs, ys, color=self.config['input_color'], linewidth=1)

    def _draw_edges(self, ax, window):
        cmap = plt.get_cmap(self.config['envelope_colormap'])
        colors = {}
        labelled = set()

        for i, edge in enumerate(self.diagram.edges):
            if edge.is_empty():
                continue
            lo, hi = self._clip(*self.diagram.edge_interval(i), window)
            if lo >= hi:
                continue
            curve = edge.curves[0]
            label = ', '.join(curve_label(c) for c in edge.curves)
            color = colors.setdefault(label, cmap(len(colors) % cmap.N))
            xs, ys = self._sample(curve, lo, hi)
            ax.plot(xs, ys, color=color,
                    linewidth=self.config['envelope_linewidth'],
                    label=label if label not in labelled else None)
            labelled.add(label)

    def _draw_vertices(self, ax):
        xs, ys = [], []
        for v in self.diagram.vertices:
            y = float(v.point.y)
            if math.isinf(y):
                continue
            xs.append(float(v.point.x))
            ys.append(y)
        if xs:
            ax.scatter(xs, ys, s=self.config['vertex_size'],
                       color=self.config['vertex_color'], zorder=5)

    # =========================================================================
    # EXPORT
    # =========================================================================

    def export(self, output_path: str):
        """Salva il grafico (PNG/PDF/SVG in base all'estensione)."""
        if self.figure is None:
            self.render()
        self.figure.savefig(output_path, bbox_inches='tight')
        plt.close(self.figure)
        print(f"Grafico salvato: {output_path}")
