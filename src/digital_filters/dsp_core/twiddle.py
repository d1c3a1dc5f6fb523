"""
Twiddle factor tables for the Cooley-Tukey FFT.

One flat buffer serves every transform size from 4 up to the table
resolution: the full-resolution row is computed from a single quadrant of
cosines, and every coarser row is obtained by taking every second entry
of the next finer row.
"""

import logging

import numpy as np

from ..exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


def is_positive_power_of_two(n: int) -> bool:
    """True if *n* is a positive integer with exactly one bit set."""
    return n > 0 and (n & (n - 1)) == 0


def _build_table(resolution: int) -> np.ndarray:
    """
    Fill the twiddle buffer.

    W_M^k for k in [0, M) lives at offset M + k, for every power of two
    M <= resolution. Slot 0 is unused.
    """
    quarter = resolution >> 2
    table = np.zeros(resolution << 1, dtype=np.complex128)

    # cos(2πi/N) for one quadrant; the sines are the same values reversed
    cos_values = np.cos(np.arange(quarter + 1) * 2.0 * np.pi / resolution)
    cos_values[quarter] = 0.0
    c = cos_values[:quarter]
    s = cos_values[quarter:0:-1]

    base = resolution
    table[base:base + quarter] = c - 1j * s
    table[base + quarter:base + 2 * quarter] = -s - 1j * c
    table[base + 2 * quarter:base + 3 * quarter] = -c + 1j * s
    table[base + 3 * quarter:base + 4 * quarter] = s + 1j * c

    # Coarser rows: W_M^k == W_2M^2k
    m = resolution >> 1
    while m > 0:
        table[m:2 * m] = table[2 * m:4 * m:2]
        m >>= 1

    return table


class TwiddleFactors:
    """
    Precomputed complex roots of unity e^{-2πjk/N}.

    Parameters
    ----------
    resolution : int
        Number of twiddle factors around the unit circle. Must be a power
        of two no smaller than 4.

    Raises
    ------
    InvalidArgumentError
        If *resolution* is not a power of two of at least 4.
    """

    def __init__(self, resolution: int):
        if not is_positive_power_of_two(resolution) or resolution < 4:
            raise InvalidArgumentError(
                f"Twiddle factor count must be a power of two >= 4, got {resolution}"
            )
        self._resolution = resolution
        self._factors = _build_table(resolution)
        logger.debug("Built twiddle table at resolution %d", resolution)

    @property
    def resolution(self) -> int:
        return self._resolution

    @property
    def factors(self) -> np.ndarray:
        """Read-only view of the whole flat table."""
        view = self._factors.view()
        view.flags.writeable = False
        return view

    def _check_size(self, n: int) -> None:
        if not is_positive_power_of_two(n):
            raise InvalidArgumentError(
                f"Twiddle factor denominator must be a positive power of two, got {n}"
            )
        if n > self._resolution:
            raise InvalidArgumentError(
                f"Twiddle factor requested outside of constructed range: "
                f"{n} > {self._resolution}"
            )

    def twiddle(self, k: int, n: int) -> complex:
        """
        Return W_n^k = e^{-2πjk/n}.

        Parameters
        ----------
        k : int
            Numerator, in [-n, n]. Negative values wrap by adding n, and
            k == n is the same factor as k == 0.
        n : int
            Denominator, a power of two not exceeding the resolution.
        """
        self._check_size(n)
        if k < -n or k > n:
            raise InvalidArgumentError(
                f"Twiddle factor numerator must be between -{n} and {n}, got {k}"
            )
        if k < 0:
            k += n
        if k == n:
            return complex(1.0, 0.0)
        return complex(self._factors[n + k])

    def factors_for(self, n: int) -> np.ndarray:
        """
        Return W_n^k for k = 0 .. n-1 as a read-only contiguous slice.
        """
        self._check_size(n)
        row = self._factors[n:2 * n]
        row.flags.writeable = False
        return row

    def __repr__(self) -> str:
        return f"TwiddleFactors(resolution={self._resolution})"
