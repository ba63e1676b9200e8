"""Tests for IAU 2006 obliquity, precession angles and frame bias."""

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from ephbpn.config import get_orthonormality_tolerance
from ephbpn.constants import AS2R, MAS2R
from ephbpn.precession import (
    PrecessionAngles,
    bias_matrix_fixed_offsets,
    bias_matrix_iau2006,
    bias_precession_angles,
    compute_obliquity,
    fukushima_williams_matrix,
    precession_angles,
)
from ephbpn.rotations import Rx, Ry, Rz

JC = 0.16557152635181382


def _assert_orthonormal(r):
    tol = get_orthonormality_tolerance()
    np.testing.assert_allclose(r @ r.T, np.eye(3), atol=tol)
    assert float(jnp.linalg.det(r)) == pytest.approx(1.0, abs=tol)


class TestObliquity:
    def test_reference_epoch(self):
        assert float(compute_obliquity(JC)) == pytest.approx(0.40905500411767176, abs=1e-15)

    def test_j2000(self):
        assert float(compute_obliquity(0.0)) == pytest.approx(84381.406 * AS2R, abs=1e-17)

    def test_decreasing_over_present_era(self):
        assert float(compute_obliquity(1.0)) < float(compute_obliquity(0.0))

    def test_vectorized(self):
        eps = compute_obliquity(jnp.array([0.0, JC]))
        assert eps.shape == (2,)
        assert float(eps[1]) == pytest.approx(0.40905500411767176, abs=1e-15)

    def test_jit(self):
        assert float(jax.jit(compute_obliquity)(JC)) == pytest.approx(0.40905500411767176, abs=1e-15)


class TestPrecessionAngles:
    def test_precession_only(self):
        angles = precession_angles(JC)
        assert isinstance(angles, PrecessionAngles)
        assert float(angles.gamma) == pytest.approx(8.5393094470743532e-06, rel=1e-12)
        assert float(angles.phi) == pytest.approx(0.40905503157784501, abs=1e-15)
        assert float(angles.psi) == pytest.approx(0.0040446638002844346, rel=1e-13)

    def test_bias_precession(self):
        gamma, phi, psi = bias_precession_angles(JC)
        assert float(gamma) == pytest.approx(8.2826871941014037e-06, rel=1e-12)
        assert float(phi) == pytest.approx(0.40905506463647395, abs=1e-15)
        assert float(psi) == pytest.approx(0.0040444612508934519, rel=1e-13)

    def test_precession_only_vanishes_at_j2000(self):
        gamma, phi, psi = precession_angles(0.0)
        assert float(gamma) == 0.0
        assert float(psi) == 0.0
        assert float(phi) == pytest.approx(float(compute_obliquity(0.0)), abs=1e-17)

    def test_bias_constant_terms(self):
        gamma, phi, psi = bias_precession_angles(0.0)
        assert float(gamma) == pytest.approx(-0.052928 * AS2R, abs=1e-18)
        assert float(phi) == pytest.approx(84381.412819 * AS2R, abs=1e-17)
        assert float(psi) == pytest.approx(-0.041775 * AS2R, abs=1e-18)

    def test_families_are_distinct(self):
        p = precession_angles(JC)
        b = bias_precession_angles(JC)
        assert float(p.gamma) != float(b.gamma)
        assert float(p.psi) != float(b.psi)


class TestFukushimaWilliamsMatrix:
    def test_matches_matmul(self):
        gamma, phi, psi = bias_precession_angles(JC)
        eps = compute_obliquity(JC)
        expected = Rx(-eps) @ Rz(-psi) @ Rx(phi) @ Rz(gamma)
        np.testing.assert_allclose(fukushima_williams_matrix(gamma, phi, psi, eps), expected, atol=1e-15)

    def test_bias_precession_row(self):
        gamma, phi, psi = bias_precession_angles(JC)
        r = fukushima_williams_matrix(gamma, phi, psi, compute_obliquity(JC))
        np.testing.assert_allclose(
            r[0], [0.99999185187860018, -0.0037024886248251923, -0.0016086498658162921], atol=1e-15
        )

    def test_precession_row(self):
        gamma, phi, psi = precession_angles(JC)
        r = fukushima_williams_matrix(gamma, phi, psi, compute_obliquity(JC))
        np.testing.assert_allclose(
            r[0], [0.9999918520110741, -0.0037024178948059177, -0.0016087303049854701], atol=1e-15
        )

    def test_orthonormal(self):
        for jc in (-100.0, -1.0, 0.0, JC, 5.0, 100.0):
            gamma, phi, psi = bias_precession_angles(jc)
            _assert_orthonormal(fukushima_williams_matrix(gamma, phi, psi, compute_obliquity(jc)))


class TestFrameBias:
    def test_fixed_offsets_row(self):
        r = bias_matrix_fixed_offsets()
        np.testing.assert_allclose(
            r[0], [0.99999999999992495, 3.7815467333922488e-07, 8.3872757481881151e-08], atol=1e-17, rtol=1e-12
        )

    def test_fixed_offsets_composition(self):
        expected = Rz(78.0 * MAS2R) @ Ry(-17.3 * MAS2R) @ Rx(-5.1 * MAS2R)
        np.testing.assert_allclose(bias_matrix_fixed_offsets(), expected, atol=1e-20, rtol=1e-12)

    def test_iau2006(self):
        expected = [
            [0.99999999999999412, -7.0783689609715561e-08, 8.0562139776131861e-08],
            [7.0783686946376763e-08, 0.99999999999999689, 3.3059437354321375e-08],
            [-8.0562142116200575e-08, -3.3059431692183949e-08, 0.99999999999999623],
        ]
        np.testing.assert_allclose(bias_matrix_iau2006(), expected, atol=1e-15, rtol=0)

    def test_models_differ(self):
        """The two bias models agree only to a few tenths of a microradian."""
        diff = jnp.max(jnp.abs(bias_matrix_iau2006() - bias_matrix_fixed_offsets()))
        assert 1e-8 < float(diff) < 1e-6

    @pytest.mark.parametrize("fn", [bias_matrix_fixed_offsets, bias_matrix_iau2006])
    def test_orthonormal(self, fn):
        _assert_orthonormal(fn())
