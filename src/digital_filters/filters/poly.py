"""
Polynomials with complex coefficients.

Coefficient i multiplies z**i. A polynomial with no coefficients is the
zero polynomial, of order -1, and absorbs multiplication.
"""

from typing import Iterable, Optional

import numpy as np


class ComplexPoly:
    """
    Complex-coefficient polynomial value type.

    Parameters
    ----------
    coefficients : iterable of complex, optional
        Coefficients in ascending powers of z. Omitted or empty gives the
        zero polynomial.

    Examples
    --------
    >>> p = ComplexPoly([1, 1])        # 1 + z
    >>> (p * p).coefficients           # 1 + 2z + z^2
    array([1.+0.j, 2.+0.j, 1.+0.j])
    """

    def __init__(self, coefficients: Optional[Iterable[complex]] = None):
        if coefficients is None:
            coefficients = ()
        coeffs = np.array(list(coefficients), dtype=np.complex128)
        coeffs.flags.writeable = False
        self._coefficients = coeffs

    @property
    def coefficients(self) -> np.ndarray:
        return self._coefficients

    @property
    def order(self) -> int:
        return len(self._coefficients) - 1

    @property
    def is_zero(self) -> bool:
        return self.order < 0

    def multiply_by(self, other: 'ComplexPoly') -> 'ComplexPoly':
        """
        Product of two polynomials (convolution of their coefficients).

        The order of the result is the sum of the two orders. If either
        side is the zero polynomial the result is the zero polynomial.
        """
        if self.order < 0 or other.order < 0:
            return ZERO_POLY

        result = np.zeros(self.order + other.order + 1, dtype=np.complex128)
        for i, a in enumerate(self._coefficients):
            result[i:i + other.order + 1] += a * other._coefficients
        return ComplexPoly(result)

    def _combine(self, other: 'ComplexPoly', sign: int) -> 'ComplexPoly':
        result = np.zeros(max(self.order, other.order) + 1, dtype=np.complex128)
        result[:self.order + 1] = self._coefficients
        result[:other.order + 1] += sign * other._coefficients
        return ComplexPoly(_strip_trailing_zeros(result))

    def add(self, other: 'ComplexPoly') -> 'ComplexPoly':
        """Sum, normalized so that the order is the true degree."""
        return self._combine(other, 1)

    def sub(self, other: 'ComplexPoly') -> 'ComplexPoly':
        """Difference, normalized so that the order is the true degree."""
        return self._combine(other, -1)

    def value(self, z: complex) -> complex:
        """Evaluate the polynomial at z."""
        z_power = complex(1.0, 0.0)
        result = complex(0.0, 0.0)
        for coeff in self._coefficients:
            result += z_power * coeff
            z_power *= z
        return result

    def clone(self) -> 'ComplexPoly':
        return ComplexPoly(self._coefficients.copy())

    __mul__ = multiply_by
    __add__ = add
    __sub__ = sub
    __call__ = value

    def __eq__(self, other) -> bool:
        if not isinstance(other, ComplexPoly):
            return NotImplemented
        return np.array_equal(self._coefficients, other._coefficients)

    def __hash__(self) -> int:
        return hash(self._coefficients.tobytes())

    def __len__(self) -> int:
        return len(self._coefficients)

    def __repr__(self) -> str:
        return f"ComplexPoly({self._coefficients.tolist()!r})"


def _strip_trailing_zeros(coeffs: np.ndarray) -> np.ndarray:
    nonzero = np.flatnonzero(coeffs)
    if len(nonzero) == 0:
        return coeffs[:0]
    return coeffs[:nonzero[-1] + 1]


ZERO_POLY = ComplexPoly()
