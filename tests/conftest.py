# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Aggiunge src/ al path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from curves.geometry import Segment, VerticalSegment, XMonotoneSegment
from curves.linear_traits import LinearTraits
from diagram.envelope_diagram import EnvelopeType
from envelopes.envelope_builder import EnvelopeBuilder
from shared import logger as logger_module


# =============================================================================
# LOGGER: nessun file, stato pulito per ogni test
# =============================================================================

@pytest.fixture(autouse=True)
def quiet_envelope_logger():
    logger_module.configure_envelope_logger(console_enabled=False, file_enabled=False)
    yield
    logger_module.configure_envelope_logger(console_enabled=False, file_enabled=False)


# =============================================================================
# TRAITS E BUILDER
# =============================================================================

@pytest.fixture
def traits():
    return LinearTraits()


@pytest.fixture
def lower_builder(traits):
    return EnvelopeBuilder(traits, EnvelopeType.LOWER)


@pytest.fixture
def upper_builder(traits):
    return EnvelopeBuilder(traits, EnvelopeType.UPPER)


# =============================================================================
# CURVE DI RIFERIMENTO
# =============================================================================

@pytest.fixture
def f_curve():
    """f(x) = -x su [0, 10]."""
    return XMonotoneSegment(-1, 0, 0, 10, label='f')


@pytest.fixture
def g_curve():
    """g(x) = x - 10 su [0, 10]."""
    return XMonotoneSegment(1, -10, 0, 10, label='g')


@pytest.fixture
def crossing_curves(f_curve, g_curve):
    return [f_curve, g_curve]


@pytest.fixture
def mixed_segments():
    """Segmenti generici, incluso uno verticale, per i test di proprieta'."""
    return [
        Segment((0, 0), (10, -10), label='s0'),
        Segment((0, -10), (10, 0), label='s1'),
        Segment((-5, 3), (4, -8), label='s2'),
        Segment((2, 1), (12, 1), label='s3'),
        Segment((6, -20), (6, -3), label='s4'),
        Segment((-3, -2), (1, -2), label='s5'),
        Segment((3, -9), (8, 4), label='s6'),
    ]


@pytest.fixture
def low_vertical():
    return VerticalSegment(5, -8, -6, label='v_low')


@pytest.fixture
def high_vertical():
    return VerticalSegment(5, 0, 2, label='v_high')
