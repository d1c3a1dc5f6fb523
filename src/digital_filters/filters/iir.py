"""
Infinite Impulse Response digital filters realized from analog prototypes
with the prewarped bilinear transform.

Each first or second order section of the analog prototype becomes one
digital stage. Stages are chained as generators, so samples stream through
the cascade one at a time and only the last one or two input and output
values of each stage are remembered.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

import numpy as np

from ..exceptions import InvalidArgumentError
from .poly import ComplexPoly
from .prototype import AnalogPrototype

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IIRFilterStage:
    """
    Tap coefficients for one cascaded section.

    y[n] = sum_k coeff_x[k] * x[n-k] + sum_k coeff_y[k] * y[n-1-k]

    Attributes
    ----------
    coeff_x : tuple of float
        Feed-forward taps, order + 1 of them.
    coeff_y : tuple of float
        Feedback taps, order of them.
    """

    coeff_x: Tuple[float, ...]
    coeff_y: Tuple[float, ...]

    def __post_init__(self):
        if len(self.coeff_y) not in (1, 2) or len(self.coeff_x) != len(self.coeff_y) + 1:
            raise InvalidArgumentError(
                f"Stage needs order + 1 input taps and order feedback taps "
                f"for order 1 or 2, got {len(self.coeff_x)} and {len(self.coeff_y)}"
            )

    @property
    def order(self) -> int:
        return len(self.coeff_y)


def _normalized_real_coefficients(poly: ComplexPoly, cutoff: float) -> Tuple[float, ...]:
    # Undo the s -> s/cutoff denormalization: coefficient i scales by cutoff**i
    return tuple(c.real * cutoff ** i for i, c in enumerate(poly.coefficients))


def first_order_stage(poly: ComplexPoly, c: float, high_pass: bool,
                      cutoff: float) -> IIRFilterStage:
    """
    Digital stage for the analog section (a1*s + a0).

    The numerator is s for a high-pass filter and 1 otherwise. With
    s = (1 - z^-1) / (C * (1 + z^-1)) the denominator becomes
    (a1 + a0*C) + (a0*C - a1) z^-1.
    """
    a0, a1 = _normalized_real_coefficients(poly, cutoff)
    b0 = 0.0 if high_pass else 1.0   # numerator constant term
    b1 = 1.0 if high_pass else 0.0   # numerator coefficient of s

    denom = a1 + a0 * c
    return IIRFilterStage(
        coeff_x=((b0 * c + b1) / denom,    # x[n]
                 (b0 * c - b1) / denom),   # x[n-1]
        coeff_y=(-(a0 * c - a1) / denom,), # y[n-1]
    )


def second_order_stage(poly: ComplexPoly, c: float, high_pass: bool,
                       cutoff: float) -> IIRFilterStage:
    """
    Digital biquad for the analog section (a2*s^2 + a1*s + a0).

    The numerator is s^2 for a high-pass filter and 1 otherwise.
    """
    a0, a1, a2 = _normalized_real_coefficients(poly, cutoff)
    b0 = 0.0 if high_pass else 1.0   # numerator constant term
    b2 = 1.0 if high_pass else 0.0   # numerator coefficient of s^2

    denom = a2 + (a1 + a0 * c) * c
    x0 = (b2 + b0 * c * c) / denom
    return IIRFilterStage(
        coeff_x=(x0,                                 # x[n]
                 2 * (b0 * c * c - b2) / denom,      # x[n-1]
                 x0),                                # x[n-2]
        coeff_y=(-2 * (a0 * c * c - a2) / denom,     # y[n-1]
                 -(a2 + (a0 * c - a1) * c) / denom), # y[n-2]
    )


def _run_stage(stage: IIRFilterStage, source: Iterable[float]) -> Iterator[float]:
    """Attach one stage to a stream of samples."""
    bx = stage.coeff_x
    ay = stage.coeff_y
    x_prev = y_prev = 0.0

    if stage.order == 1:
        for x in source:
            y = x * bx[0] + x_prev * bx[1] + y_prev * ay[0]
            x_prev = x
            y_prev = y
            yield y
    else:
        x_prev2 = y_prev2 = 0.0
        for x in source:
            y = (x * bx[0] + x_prev * bx[1] + x_prev2 * bx[2]
                 + y_prev * ay[0] + y_prev2 * ay[1])
            x_prev2, x_prev = x_prev, x
            y_prev2, y_prev = y_prev, y
            yield y


class IIRFilter:
    """
    Cascaded IIR digital filter built from an analog prototype.

    Parameters
    ----------
    analog_filter : AnalogPrototype
        Analog description such as :class:`Butterworth`.
    sampling_rate : float
        Sampling rate of the digital filter in Hz.
    gain : float
        Scalar applied to every output sample.

    Raises
    ------
    InvalidArgumentError
        If the sampling rate is not positive or a section of the prototype
        is not first or second order.

    Examples
    --------
    >>> from digital_filters.filters import Butterworth
    >>> lp = IIRFilter(Butterworth(2, 70.0, False), 100.0)
    >>> [round(v, 4) for v in lp.stages[0].coeff_x]
    [0.0808, 0.1616, 0.0808]
    """

    def __init__(self, analog_filter: AnalogPrototype, sampling_rate: float,
                 gain: float = 1.0):
        if not sampling_rate > 0:
            raise InvalidArgumentError(
                f"Sampling rate must be positive, got {sampling_rate}"
            )
        for poly in analog_filter.polynomials:
            if poly.order not in (1, 2):
                raise InvalidArgumentError(
                    f"Only first and second order polynomials permitted, got order {poly.order}"
                )
        self._analog_filter = analog_filter
        self._sampling_rate = float(sampling_rate)
        self._gain = float(gain)
        self._stages = self._init_stages()
        logger.debug("IIR filter at %.6g Hz: %d stages from %r",
                     self._sampling_rate, len(self._stages), analog_filter)

    @property
    def analog_filter(self) -> AnalogPrototype:
        return self._analog_filter

    @property
    def sampling_rate(self) -> float:
        return self._sampling_rate

    @property
    def gain(self) -> float:
        return self._gain

    @property
    def stages(self) -> Tuple[IIRFilterStage, ...]:
        """One stage per analog section, in the prototype's order."""
        return self._stages

    def _init_stages(self) -> Tuple[IIRFilterStage, ...]:
        proto = self._analog_filter
        # Bilinear transform prewarping factor
        c = math.tan(proto.cutoff / (2 * self._sampling_rate))
        stages = []
        for poly in proto.polynomials:
            if poly.order == 2:
                stages.append(second_order_stage(poly, c, proto.high_pass, proto.cutoff))
            else:
                stages.append(first_order_stage(poly, c, proto.high_pass, proto.cutoff))
        return tuple(stages)

    def filter(self, source: Iterable[float]) -> Iterator[float]:
        """
        Attach a fresh instance of this filter to a stream of samples.

        The returned iterator is lazy and carries its own stage history, so
        each call starts from rest and independent streams need separate
        calls.
        """
        sink: Iterable[float] = (float(s) for s in source)
        for stage in self._stages:
            sink = _run_stage(stage, sink)
        gain = self._gain
        return (y * gain for y in sink)

    def filter_array(self, samples) -> np.ndarray:
        """Filter a finite sequence and return the output as an array."""
        x = np.asarray(samples, dtype=np.float64)
        if x.ndim != 1:
            raise InvalidArgumentError(f"Input must be 1D, got shape {x.shape}")
        return np.fromiter(self.filter(x), dtype=np.float64, count=len(x))

    def __repr__(self) -> str:
        return (f"IIRFilter({self._analog_filter!r}, sampling_rate={self._sampling_rate!r}, "
                f"gain={self._gain!r})")
