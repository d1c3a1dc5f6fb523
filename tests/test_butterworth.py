"""
Unit tests for the Butterworth analog prototype.

Section coefficients are checked against known values and against the
analog denominator from scipy.signal.butter.
"""

import math

import numpy as np
import pytest
from scipy.signal import butter

from digital_filters import AnalogPrototype, Butterworth, InvalidArgumentError


def _product(polys):
    result = polys[0]
    for p in polys[1:]:
        result = result * p
    return result


class TestPolynomials:

    def test_first_order(self):
        bw = Butterworth(1, 1, False)
        assert len(bw.polynomials) == 1
        coeffs = bw.polynomials[0].coefficients
        assert len(coeffs) == 2
        assert coeffs[0] == 1.0

    def test_second_order(self):
        bw = Butterworth(2, 1, False)
        assert len(bw.polynomials) == 1
        coeffs = bw.polynomials[0].coefficients
        assert len(coeffs) == 3
        assert coeffs[0].real == pytest.approx(1.0)
        assert coeffs[1].real == pytest.approx(1.414, abs=1e-3)
        assert coeffs[2].real == pytest.approx(1.0)
        assert np.abs(coeffs.imag).max() < 1e-3

    def test_third_order(self):
        bw = Butterworth(3, 1, False)
        assert len(bw.polynomials) == 2
        # Second-order section first, first-order section last
        np.testing.assert_allclose(bw.polynomials[0].coefficients, [1, 1, 1], atol=1e-3)
        np.testing.assert_allclose(bw.polynomials[1].coefficients, [1, 1])

    def test_tenth_order(self):
        bw = Butterworth(10, 1, False)
        assert len(bw.polynomials) == 5
        first, last = bw.polynomials[0].coefficients, bw.polynomials[4].coefficients
        assert first[1].real == pytest.approx(0.312869, abs=1e-6)
        assert last[1].real == pytest.approx(1.975377, abs=1e-6)
        for p in bw.polynomials:
            assert p.order == 2
            assert p.coefficients[0].real == pytest.approx(1.0)
            assert p.coefficients[2].real == pytest.approx(1.0)

    @pytest.mark.parametrize("order", range(1, 11))
    def test_section_count(self, order):
        assert len(Butterworth(order, 10.0, False).polynomials) == math.ceil(order / 2)

    @pytest.mark.parametrize("order", range(1, 9))
    @pytest.mark.parametrize("cutoff", [1.0, 3.0, 20.0])
    def test_product_matches_scipy_analog(self, order, cutoff):
        """Denormalized sections multiply out to the analog denominator."""
        bw = Butterworth(order, cutoff, False)
        denominator = _product(bw.polynomials)
        _, a = butter(order, cutoff, btype='low', analog=True)

        ours = denominator.coefficients[::-1].real * cutoff ** order
        np.testing.assert_allclose(ours, a, rtol=1e-9)
        assert np.abs(denominator.coefficients.imag).max() < 1e-12

    def test_high_pass_does_not_change_sections(self):
        lp = Butterworth(5, 2.0, False)
        hp = Butterworth(5, 2.0, True)
        assert lp.polynomials == hp.polynomials
        assert hp.high_pass and not lp.high_pass


class TestPoles:

    @pytest.mark.parametrize("order", range(1, 9))
    def test_left_half_unit_circle(self, order):
        bw = Butterworth(order, 50.0, False)
        poles = bw.poles()
        assert len(poles) == order
        for p in poles:
            assert p.real < 0
            assert abs(p) == pytest.approx(1.0)

    def test_second_order_poles(self):
        bw = Butterworth(2, 1, False)
        assert bw.pole(1) == pytest.approx(complex(-math.sqrt(0.5), math.sqrt(0.5)))
        assert bw.pole(2) == pytest.approx(complex(-math.sqrt(0.5), -math.sqrt(0.5)))

    def test_pole_index_range(self):
        bw = Butterworth(4, 1, False)
        bw.pole(0)
        bw.pole(4)
        with pytest.raises(InvalidArgumentError):
            bw.pole(-1)
        with pytest.raises(InvalidArgumentError):
            bw.pole(5)


class TestFrequencyResponse:

    def test_dc_gain(self):
        v = Butterworth(9, 1, False).output_at_frequency(0)
        assert v.real == pytest.approx(1.0, abs=1e-3)
        assert v.imag == pytest.approx(0.0, abs=1e-3)

    def test_dc_gain_at_frequency(self):
        v = Butterworth(9, 1000 * math.pi, False).output_at_frequency(0)  # 500Hz cutoff
        assert v.real == pytest.approx(1.0, abs=1e-3)
        assert v.imag == pytest.approx(0.0, abs=1e-3)

    def test_gain_at_unit_cutoff(self):
        v = Butterworth(7, 1, False).output_at_frequency(1)
        assert abs(v) == pytest.approx(1.414, abs=1e-3)

    def test_gain_at_cutoff(self):
        v = Butterworth(7, 1000 * math.pi, False).output_at_frequency(1000 * math.pi)
        assert abs(v) == pytest.approx(1.414, abs=1e-3)

    @pytest.mark.parametrize("order", [1, 2, 3, 4, 6, 8])
    @pytest.mark.parametrize("cutoff", [0.5, 70.0, 2 * math.pi * 400])
    def test_dc_and_cutoff_magnitudes(self, order, cutoff):
        bw = Butterworth(order, cutoff, False)
        assert abs(bw.output_at_frequency(0)) == pytest.approx(1.0, abs=1e-3)
        assert abs(bw.output_at_frequency(cutoff)) == pytest.approx(math.sqrt(2), abs=1e-3)

    def test_maximally_flat_magnitude(self):
        """|D(jw)|^2 = 1 + (w/wc)^(2n)."""
        bw = Butterworth(5, 10.0, False)
        for w in [1.0, 5.0, 15.0, 40.0]:
            expected = math.sqrt(1 + (w / 10.0) ** 10)
            assert abs(bw.output_at_frequency(w)) == pytest.approx(expected, rel=1e-9)


class TestValidation:

    @pytest.mark.parametrize("order,cutoff", [(0, 1.0), (-2, 1.0), (3, 0.0), (3, -5.0)])
    def test_bad_parameters(self, order, cutoff):
        with pytest.raises(InvalidArgumentError):
            Butterworth(order, cutoff, False)

    def test_implements_prototype_capability(self):
        assert isinstance(Butterworth(3, 1.0, True), AnalogPrototype)
