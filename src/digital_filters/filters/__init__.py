"""
Analog prototype design and IIR realization.
"""

from .poly import ComplexPoly, ZERO_POLY
from .prototype import AnalogPrototype
from .butterworth import Butterworth
from .iir import IIRFilter, IIRFilterStage

__all__ = [
    'ComplexPoly',
    'ZERO_POLY',
    'AnalogPrototype',
    'Butterworth',
    'IIRFilter',
    'IIRFilterStage',
]
