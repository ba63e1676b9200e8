import math

import jax
import jax.numpy as jnp
import pytest

from ephbpn.constants import D2PI, TURNAS
from ephbpn.utils import to_radians, wrap


class TestToRadians:
    def test_degrees(self):
        assert float(to_radians(180.0, True)) == pytest.approx(math.pi, abs=1e-15)

    def test_radians_passthrough(self):
        assert float(to_radians(1.25, False)) == 1.25


class TestWrap:
    def test_in_range_unchanged(self):
        assert float(wrap(1.5, D2PI)) == 1.5

    def test_positive_overflow(self):
        assert float(wrap(370.0, 360.0)) == pytest.approx(10.0, abs=1e-12)

    def test_negative_lands_in_range(self):
        assert float(wrap(-1.0, 360.0)) == pytest.approx(359.0, abs=1e-12)

    def test_exact_multiple_is_zero(self):
        assert float(wrap(720.0, 360.0)) == 0.0
        assert float(wrap(-TURNAS, TURNAS)) == 0.0

    def test_tiny_negative_maps_to_zero(self):
        r = float(wrap(-1e-20, D2PI))
        assert 0.0 <= r < D2PI
        assert r == 0.0

    def test_vectorized(self):
        x = jnp.linspace(-100.0, 100.0, 2001)
        r = wrap(x, D2PI)
        assert bool(jnp.all(r >= 0.0))
        assert bool(jnp.all(r < D2PI))

    def test_jit(self):
        assert float(jax.jit(wrap)(-1.0, 360.0)) == pytest.approx(359.0, abs=1e-12)
