import numpy as np
from typing import Dict, Tuple, Union

from ..exceptions import InvalidArgumentError

# Cosine-sum coefficients (a0, a1, a2, a3):
# w(n) = a0 - a1*cos(2πn/M) + a2*cos(4πn/M) - a3*cos(6πn/M)
WINDOW_COEFFICIENTS: Dict[str, Tuple[float, float, float, float]] = {
    'hann': (0.5, 0.5, 0.0, 0.0),
    'hamming': (0.53836, 0.46164, 0.0, 0.0),
    'blackman': (0.42, 0.5, 0.08, 0.0),
    'exact_blackman': (0.42659, 0.49656, 0.076849, 0.0),
    'nuttall': (0.355768, 0.487396, 0.144232, 0.012604),
    'blackman_nuttall': (0.3635819, 0.4891775, 0.1365995, 0.0106411),
    'blackman_harris': (0.35875, 0.48829, 0.14128, 0.01168),
}


def _coefficients(name: str) -> Tuple[float, float, float, float]:
    try:
        return WINDOW_COEFFICIENTS[name]
    except KeyError:
        raise InvalidArgumentError(f"Unknown window type: {name}") from None


def window_value(name: str, sample: Union[float, np.ndarray], max_samples: int):
    """
    Evaluate a cosine-sum window at a (possibly fractional) sample offset.

    Parameters
    ----------
    name : str
        One of the keys of ``WINDOW_COEFFICIENTS``.
    sample : float or np.ndarray
        Offset into the window in sample intervals. Non-integer offsets
        are allowed, which is useful when interpolating.
    max_samples : int
        Width of the window in sample intervals. The edges sit at 0 and
        max_samples, so a symmetric window spans max_samples + 1 points.

    Returns
    -------
    float or np.ndarray
        The window value, 0 outside [0, max_samples].
    """
    if max_samples <= 0:
        raise InvalidArgumentError(f"Window width must be positive, got {max_samples}")
    a0, a1, a2, a3 = _coefficients(name)
    n = np.asarray(sample, dtype=np.float64)
    phase = 2 * np.pi * n / max_samples
    w = (a0
         - a1 * np.cos(phase)
         + a2 * np.cos(2 * phase)
         - a3 * np.cos(3 * phase))
    w = np.where((n < 0) | (n > max_samples), 0.0, w)
    if w.ndim == 0:
        return float(w)
    return w


def get_window(name: str, win_length: int) -> np.ndarray:
    """
    Periodic ("DFT-even") window of *win_length* points.

    Parameters
    ----------
    name : str
        Window type, e.g. 'hann', 'blackman_harris'
    win_length : int
        Number of points

    Returns
    -------
    np.ndarray
        Window of length win_length
    """
    return window_value(name, np.arange(win_length), win_length)
