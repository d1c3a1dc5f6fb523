"""
DSP Core Module - Hand-written FFT and window functions

Modules:
    - twiddle: precomputed twiddle factor tables
    - fft: fixed-size Cooley-Tukey FFT with a real-input fast path
    - window: cosine-sum window functions
"""

from .twiddle import TwiddleFactors, is_positive_power_of_two
from .fft import FastFourierTransform
from .window import get_window, window_value, WINDOW_COEFFICIENTS

__all__ = [
    # FFT
    'TwiddleFactors',
    'FastFourierTransform',
    'is_positive_power_of_two',
    # Windows
    'get_window',
    'window_value',
    'WINDOW_COEFFICIENTS',
]
