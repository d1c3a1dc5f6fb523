"""
Butterworth analog filter prototype.
"""

import logging
import math
from typing import Tuple

from ..exceptions import InvalidArgumentError
from .poly import ComplexPoly

logger = logging.getLogger(__name__)


class Butterworth:
    """
    Analog Butterworth low-pass or high-pass filter.

    The poles of the unit-cutoff filter lie on the left half of the unit
    circle. Conjugate pairs combine into second-order sections
    s^2 - 2*Re(pole)*s + 1 and an odd order adds the first-order section
    s + 1. Each section is then denormalized by substituting s -> s/cutoff,
    which moves the poles out onto a circle of radius cutoff.

    Parameters
    ----------
    order : int
        Filter order, at least 1.
    cutoff : float
        Angular cutoff frequency in rad/s.
    high_pass : bool
        True for a high-pass filter. Only affects the digital realization,
        not the poles or the denominator sections.

    Examples
    --------
    >>> bw = Butterworth(2, 1.0, False)
    >>> bw.polynomials[0].coefficients.real.round(4)
    array([1.    , 1.4142, 1.    ])
    """

    def __init__(self, order: int, cutoff: float, high_pass: bool = False):
        if order < 1:
            raise InvalidArgumentError(f"Filter order must be at least 1, got {order}")
        if not cutoff > 0:
            raise InvalidArgumentError(f"Cutoff frequency must be positive, got {cutoff}")
        self._order = int(order)
        self._cutoff = float(cutoff)
        self._high_pass = bool(high_pass)
        self._polynomials = self._init_polynomials()
        logger.debug("Butterworth order=%d cutoff=%.6g rad/s high_pass=%s: %d sections",
                     self._order, self._cutoff, self._high_pass, len(self._polynomials))

    @property
    def order(self) -> int:
        return self._order

    @property
    def cutoff(self) -> float:
        return self._cutoff

    @property
    def high_pass(self) -> bool:
        return self._high_pass

    @property
    def polynomials(self) -> Tuple[ComplexPoly, ...]:
        """
        Second-order sections first, then the first-order section when
        the order is odd.
        """
        return self._polynomials

    def pole(self, index: int) -> complex:
        """
        Location of a unit-cutoff pole in the s-plane.

        For a first order filter the pole is at -1, giving 1/(s+1). For a
        second order filter the poles are -0.7071 ± 0.7071j, giving
        1/(s^2 + 1.414s + 1).

        Parameters
        ----------
        index : int
            Pole index in [0, order]. Indices 1 .. order enumerate the
            order distinct left half-plane poles.
        """
        if index < 0 or index > self._order:
            raise InvalidArgumentError(
                f"Pole index must be between 0 and {self._order}, got {index}"
            )
        angle = math.pi * (2 * index + self._order - 1) / (2 * self._order)
        return complex(math.cos(angle), math.sin(angle))

    def poles(self) -> Tuple[complex, ...]:
        return tuple(self.pole(i) for i in range(1, self._order + 1))

    def _init_polynomials(self) -> Tuple[ComplexPoly, ...]:
        sections = []
        w = self._cutoff
        for i in range(1, self._order // 2 + 1):
            p = self.pole(i)
            sections.append(ComplexPoly([
                p.real * p.real + p.imag * p.imag,
                -2 * p.real / w,
                1 / (w * w),
            ]))
        if self._order & 1:
            sections.append(ComplexPoly([1, 1 / w]))
        return tuple(sections)

    def output_at_frequency(self, omega: float) -> complex:
        """
        Denominator of the transfer function at s = j*omega.

        Evaluating the denormalized sections at j*omega is the same as
        evaluating the unit-cutoff sections at j*omega/cutoff. The
        magnitude is 1 at DC and sqrt(2) at the cutoff frequency.
        """
        s = complex(0.0, omega)
        result = complex(1.0, 0.0)
        for poly in self._polynomials:
            result *= poly.value(s)
        return result

    def __repr__(self) -> str:
        return (f"Butterworth(order={self._order}, cutoff={self._cutoff!r}, "
                f"high_pass={self._high_pass})")
