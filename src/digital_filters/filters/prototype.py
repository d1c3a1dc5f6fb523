"""
Capability shared by analog filter prototypes that can be realized as
cascaded digital IIR sections.
"""

from typing import Protocol, Sequence, runtime_checkable

from .poly import ComplexPoly


@runtime_checkable
class AnalogPrototype(Protocol):
    """
    An analog filter described by its cascaded denominator sections.

    Attributes
    ----------
    high_pass : bool
        True for a high-pass response, which places order zeros at the
        origin of the s-plane (numerator (s/cutoff)**order).
    order : int
        Filter order, at least 1.
    cutoff : float
        Angular cutoff frequency in rad/s. Divide by 2π for Hz.
    polynomials : sequence of ComplexPoly
        First and second order denominator sections, denormalized for the
        cutoff, whose product is the full transfer function denominator.
    """

    @property
    def high_pass(self) -> bool: ...

    @property
    def order(self) -> int: ...

    @property
    def cutoff(self) -> float: ...

    @property
    def polynomials(self) -> Sequence[ComplexPoly]: ...
