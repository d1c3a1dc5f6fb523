"""
Spectrum analysis helpers built on the FFT engine and IIR filters.

These tie the core together the way a filter is usually checked: make
spectrally flat noise, stream it through a filter cascade, then look at
the magnitude spectrum of what comes out.
"""

import logging
from typing import Dict, Iterable, List, Optional

import numpy as np

from .dsp_core import FastFourierTransform, get_window, is_positive_power_of_two
from .exceptions import InvalidArgumentError
from .filters import IIRFilter

logger = logging.getLogger(__name__)


def synthetic_noise(num_samples: int, magnitude: float = 1.0,
                    rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Spectrally flat noise: constant magnitude, random phase in every bin.

    Parameters
    ----------
    num_samples : int
        Length of the noise sequence, a power of two from 4 to 65536.
    magnitude : float
        Magnitude of every frequency bin.
    rng : np.random.Generator, optional
        Source of the random phases.

    Returns
    -------
    np.ndarray
        Real time-domain samples from the compact inverse transform.
    """
    if not is_positive_power_of_two(num_samples):
        raise InvalidArgumentError(
            f"Length of sequence must be a power of two, got {num_samples}"
        )
    if rng is None:
        rng = np.random.default_rng()
    engine = FastFourierTransform(num_samples)
    angles = rng.uniform(0.0, 2 * np.pi, size=(num_samples >> 1) + 1)
    return engine.inverse_transform(magnitude * np.exp(1j * angles))


def cascade(filters: Iterable[IIRFilter], samples) -> np.ndarray:
    """Stream *samples* through each filter in turn."""
    x = np.asarray(samples, dtype=np.float64)
    stream: Iterable[float] = x
    for f in filters:
        stream = f.filter(stream)
    return np.fromiter(stream, dtype=np.float64, count=len(x))


def magnitude_spectrum(samples, window: Optional[str] = None) -> np.ndarray:
    """
    Magnitudes of the N/2 + 1 bins of a real sequence of N samples.
    """
    x = np.asarray(samples, dtype=np.float64)
    if x.ndim != 1 or not is_positive_power_of_two(len(x)) or len(x) < 8:
        raise InvalidArgumentError(
            f"Spectrum input must be 1D with a power-of-two length >= 8, got shape {x.shape}"
        )
    if window is not None:
        x = x * get_window(window, len(x))
    engine = FastFourierTransform(len(x) >> 1)
    return np.abs(engine.forward_transform(x))


def bin_frequencies(num_samples: int, sampling_rate: float) -> np.ndarray:
    """Centre frequencies in Hz of the N/2 + 1 bins of an N-sample spectrum."""
    return np.arange((num_samples >> 1) + 1) * sampling_rate / num_samples


def band_summary(spectrum: np.ndarray, sampling_rate: float,
                 num_bands: int) -> List[Dict[str, float]]:
    """
    Mean magnitude over *num_bands* equal-width bands from DC to Nyquist.
    """
    if num_bands < 1:
        raise InvalidArgumentError(f"Need at least one band, got {num_bands}")
    num_samples = (len(spectrum) - 1) << 1
    freqs = bin_frequencies(num_samples, sampling_rate)
    edges = np.linspace(0, len(spectrum), num_bands + 1).astype(int)
    bands = []
    for lo, hi in zip(edges[:-1], edges[1:]):
        if hi <= lo:
            continue
        bands.append({
            'low_hz': float(freqs[lo]),
            'high_hz': float(freqs[hi - 1]),
            'mean_magnitude': float(np.mean(spectrum[lo:hi])),
        })
    logger.debug("Summarised %d bins into %d bands", len(spectrum), len(bands))
    return bands
