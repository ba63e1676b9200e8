"""Tests for the elementary rotations and vector rotation."""

import math

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from ephbpn.config import get_orthonormality_tolerance
from ephbpn.rotations import Rx, Ry, Rz, identity, rotate

ATOL = 1e-15


class TestElementaryRotations:
    def test_rx_layout(self):
        a = 0.3
        c, s = math.cos(a), math.sin(a)
        expected = [[1.0, 0.0, 0.0], [0.0, c, s], [0.0, -s, c]]
        np.testing.assert_allclose(Rx(a), expected, atol=ATOL)

    def test_ry_layout(self):
        a = 0.3
        c, s = math.cos(a), math.sin(a)
        expected = [[c, 0.0, -s], [0.0, 1.0, 0.0], [s, 0.0, c]]
        np.testing.assert_allclose(Ry(a), expected, atol=ATOL)

    def test_rz_layout(self):
        a = 0.3
        c, s = math.cos(a), math.sin(a)
        expected = [[c, s, 0.0], [-s, c, 0.0], [0.0, 0.0, 1.0]]
        np.testing.assert_allclose(Rz(a), expected, atol=ATOL)

    def test_zero_angle_is_identity(self):
        for rot in (Rx, Ry, Rz):
            np.testing.assert_array_equal(rot(0.0), identity())

    def test_degrees(self):
        np.testing.assert_allclose(Rz(90.0, use_degrees=True), Rz(math.pi / 2), atol=ATOL)

    def test_left_multiplication(self):
        r = Rx(0.2, Rz(0.7))
        np.testing.assert_allclose(r, Rx(0.2) @ Rz(0.7), atol=ATOL)

    def test_three_axis_composition(self):
        r = Rz(0.1, Ry(-0.4, Rx(0.25)))
        np.testing.assert_allclose(r, Rz(0.1) @ Ry(-0.4) @ Rx(0.25), atol=ATOL)

    def test_same_axis_angles_add(self):
        np.testing.assert_allclose(Rz(0.3, Rz(0.5)), Rz(0.8), atol=ATOL)

    def test_inverse(self):
        np.testing.assert_allclose(Ry(-0.6, Ry(0.6)), identity(), atol=ATOL)

    def test_orthonormal(self):
        r = Rx(1.1, Ry(-0.4, Rz(2.9)))
        tol = get_orthonormality_tolerance()
        np.testing.assert_allclose(r @ r.T, np.eye(3), atol=tol)
        assert float(jnp.linalg.det(r)) == pytest.approx(1.0, abs=tol)

    def test_jit(self):
        np.testing.assert_allclose(jax.jit(Rx)(0.3), Rx(0.3), atol=ATOL)


class TestRotate:
    def test_identity(self):
        v = [-0.50787065, 0.80728228, 0.34996714]
        np.testing.assert_array_equal(rotate(identity(), v), jnp.array(v))

    def test_rz_quarter_turn(self):
        """A frame rotation of +90 deg about z maps the x-axis to -y."""
        np.testing.assert_allclose(rotate(Rz(math.pi / 2), [1.0, 0.0, 0.0]), [0.0, -1.0, 0.0], atol=ATOL)

    def test_matches_matmul(self):
        r = Rx(0.2, Rz(0.7))
        v = jnp.array([0.1, -2.0, 3.5])
        np.testing.assert_allclose(rotate(r, v), r @ v, atol=1e-14)

    def test_preserves_norm(self):
        r = Rx(1.1, Ry(-0.4, Rz(2.9)))
        v = jnp.array([3.0, -4.0, 12.0])
        assert float(jnp.linalg.norm(rotate(r, v))) == pytest.approx(13.0, abs=1e-12)

    def test_unnormalised_input(self):
        v = jnp.array([0.0, 0.0, 0.0])
        np.testing.assert_array_equal(rotate(Rx(0.5), v), v)
