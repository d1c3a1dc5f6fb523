"""
Digital filters - FFT engine and Butterworth IIR filter design

Subpackages:
    - dsp_core: twiddle tables, fixed-size FFT, window functions
    - filters: complex polynomials, Butterworth prototype, IIR realization
    - utils: logging, configuration and seeding helpers
"""

from .exceptions import InvalidArgumentError
from .dsp_core import FastFourierTransform, TwiddleFactors, get_window
from .filters import AnalogPrototype, Butterworth, ComplexPoly, IIRFilter, IIRFilterStage

__all__ = [
    'InvalidArgumentError',
    'FastFourierTransform',
    'TwiddleFactors',
    'get_window',
    'AnalogPrototype',
    'Butterworth',
    'ComplexPoly',
    'IIRFilter',
    'IIRFilterStage',
]

__version__ = '1.0.0'
