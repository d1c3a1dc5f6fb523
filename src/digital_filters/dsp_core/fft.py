"""
Fixed-size FFT engine using Numba JIT kernels

This module implements a decimation-in-time Cooley-Tukey FFT whose size is
fixed when the engine is constructed. Optimizations:
1. Numba JIT compilation (nopython mode) of the butterfly passes
2. Iterative implementation with an up-front bit-reversal permutation
3. First two radix-2 stages merged into one pass with no multiplications
4. Twiddle factors read from a single precomputed table
5. Real input of length 2N transformed with one N-point complex FFT

Convention: the forward transform is unnormalized, the inverse divides by
the transform length.
"""

import logging
import math
from typing import Sequence, Union

import numpy as np
from numba import jit

from ..exceptions import InvalidArgumentError
from .twiddle import TwiddleFactors, is_positive_power_of_two

logger = logging.getLogger(__name__)

MIN_SAMPLES = 4
MAX_SAMPLES = 65536

ArrayLike = Union[Sequence[float], Sequence[complex], np.ndarray]


@jit(nopython=True, cache=True)
def _bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the bits of x with n_bits."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def _transform_core(x: np.ndarray, twiddles: np.ndarray, n_bits: int,
                    inverse: bool) -> np.ndarray:
    """
    Iterative radix-2 DIT FFT over a bit-reversed copy of x (Numba JIT).

    twiddles is the flat table from TwiddleFactors: W_N^k sits at N + k.
    """
    n = len(x)
    samples = np.empty(n, dtype=np.complex128)

    # Stages 1 and 2 together: factors are only ±1 and ±j
    j = -1j if inverse else 1j
    for i in range(0, n, 4):
        p_add_q = x[_bit_reverse(i, n_bits)]
        lower = x[_bit_reverse(i + 1, n_bits)]
        p_sub_q = p_add_q - lower
        p_add_q = p_add_q + lower
        r_add_s = x[_bit_reverse(i + 2, n_bits)]
        lower = x[_bit_reverse(i + 3, n_bits)]
        r_sub_s = r_add_s - lower
        r_add_s = r_add_s + lower
        samples[i] = p_add_q + r_add_s
        samples[i + 1] = p_sub_q - j * r_sub_s
        samples[i + 2] = p_add_q - r_add_s
        samples[i + 3] = p_sub_q + j * r_sub_s

    # Remaining stages need twiddle multiplications
    group_size = 8
    while group_size <= n:
        num_groups = n // group_size
        half_size = group_size >> 1
        for group in range(num_groups):
            for i in range(half_size):
                upper = group * group_size + i
                lower_idx = upper + half_size

                k = i * num_groups
                if inverse and k != 0:
                    k = n - k
                w = twiddles[n + k]

                wq = samples[lower_idx] * w
                samples[lower_idx] = samples[upper] - wq
                samples[upper] = samples[upper] + wq
        group_size <<= 1

    if inverse:
        for i in range(n):
            samples[i] = samples[i] / n

    return samples


class FastFourierTransform:
    """
    Forward and inverse FFT for a fixed number of samples.

    Once created the engine can be reused for any number of forward or
    inverse transforms of the configured size. The twiddle table is built
    at twice the transform size so that a real sequence of 2N samples can
    be transformed through one N-point complex transform.

    Parameters
    ----------
    num_samples : int
        Transform size, a power of two from 4 to 65536 inclusive.

    Raises
    ------
    InvalidArgumentError
        If *num_samples* is out of range or not a power of two.

    Examples
    --------
    >>> import numpy as np
    >>> engine = FastFourierTransform(512)
    >>> x = 100 * np.sin(2 * np.pi * np.arange(1024) / 1024)
    >>> X = engine.forward_transform(x)
    >>> X.shape  # DC through Nyquist
    (513,)
    """

    def __init__(self, num_samples: int):
        if (not is_positive_power_of_two(num_samples)
                or num_samples < MIN_SAMPLES or num_samples > MAX_SAMPLES):
            raise InvalidArgumentError(
                f"Number of points in transform must be a power of 2 "
                f"from {MIN_SAMPLES} to {MAX_SAMPLES}, got {num_samples}"
            )
        self._num_samples = num_samples
        self._twiddles = TwiddleFactors(num_samples << 1)
        self._num_bits = int(math.log2(num_samples))
        logger.debug("FFT engine ready: %d points, %d index bits",
                     num_samples, self._num_bits)

    @property
    def num_samples(self) -> int:
        return self._num_samples

    @property
    def twiddles(self) -> TwiddleFactors:
        return self._twiddles

    @staticmethod
    def _as_vector(samples: ArrayLike, dtype) -> np.ndarray:
        arr = np.asarray(samples, dtype=dtype)
        if arr.ndim != 1:
            raise InvalidArgumentError(f"Input must be 1D, got shape {arr.shape}")
        return arr

    def transform(self, samples: ArrayLike, inverse: bool = False) -> np.ndarray:
        """
        Forward or inverse FFT of a complex sequence.

        Parameters
        ----------
        samples : array_like
            Complex time samples (or frequency bins when inverse is True).
            Length must equal the configured transform size.
        inverse : bool
            True for the inverse transform, which divides by the length.

        Returns
        -------
        np.ndarray
            complex128 array of the same length as the input.
        """
        x = self._as_vector(samples, np.complex128)
        if not is_positive_power_of_two(len(x)):
            raise InvalidArgumentError(
                f"Samples must be 2^N in length, got {len(x)}"
            )
        if len(x) != self._num_samples:
            raise InvalidArgumentError(
                f"Transform configured for {self._num_samples} samples, got {len(x)}"
            )
        return _transform_core(x, self._twiddles._factors, self._num_bits,
                               inverse)

    def forward_transform(self, real_samples: ArrayLike) -> np.ndarray:
        """
        FFT of 2N real samples using one N-point complex transform.

        Even-indexed samples become the real parts and odd-indexed samples
        the imaginary parts of a half-length complex sequence. After the
        complex transform the two interleaved spectra are separated using
        the conjugate symmetry of real sequences.

        Parameters
        ----------
        real_samples : array_like
            Real samples, exactly twice the configured transform size.

        Returns
        -------
        np.ndarray
            N + 1 complex bins from DC through Nyquist inclusive.
        """
        x = self._as_vector(real_samples, np.float64)
        n = self._num_samples
        if len(x) != n << 1:
            raise InvalidArgumentError(
                f"Real input must hold {n << 1} samples, got {len(x)}"
            )

        z = self.transform(x[0::2] + 1j * x[1::2], inverse=False)

        # Pair each bin with its mirror: Z[0] with itself, Z[i] with Z[N-i]
        mirror = z[(-np.arange(n)) % n]
        xpr = (z.real + mirror.real) / 2
        xmr = (z.real - mirror.real) / 2
        xpi = (z.imag + mirror.imag) / 2
        xmi = (z.imag - mirror.imag) / 2

        w = self._twiddles.factors_for(n << 1)[:n]
        results = np.empty(n + 1, dtype=np.complex128)
        results[:n] = ((xpr + w.real * xpi + w.imag * xmr)
                       + 1j * (xmi + w.imag * xpi - w.real * xmr))
        results[n] = complex(z[0].real - z[0].imag, 0.0)
        return results

    def inverse_transform(self, freq_samples: ArrayLike) -> np.ndarray:
        """
        Inverse FFT returning a real time-domain sequence.

        Parameters
        ----------
        freq_samples : array_like
            Either the full spectrum of N bins, expected to satisfy
            X[N-i] == conj(X[i]), or the compact N/2 + 1 bins from DC to
            Nyquist, in which case the upper half is rebuilt from the
            conjugates of the lower half.

        Returns
        -------
        np.ndarray
            The N real parts of the inverse transform.
        """
        spectrum = self._as_vector(freq_samples, np.complex128)
        n = self._num_samples
        length = len(spectrum)

        if length == n:
            full = spectrum
        elif (is_positive_power_of_two(length - 1)
              and (length - 1) << 1 == n):
            full = np.empty(n, dtype=np.complex128)
            full[:length] = spectrum
            full[length:] = np.conj(spectrum[1:length - 1][::-1])
        elif is_positive_power_of_two(length) or is_positive_power_of_two(length - 1):
            raise InvalidArgumentError(
                f"Transform configured for {n} samples; frequency samples "
                f"must be {n} or {(n >> 1) + 1} long, got {length}"
            )
        else:
            raise InvalidArgumentError(
                f"Frequency samples must be 2^N or 2^N + 1 in length, got {length}"
            )

        return self.transform(full, inverse=True).real.copy()

    def __repr__(self) -> str:
        return f"FastFourierTransform(num_samples={self._num_samples})"
