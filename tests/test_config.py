"""Tests for the ephbpn.config module."""

import jax
import jax.numpy as jnp
import pytest

from ephbpn.config import get_dtype, get_orthonormality_tolerance, set_dtype
from ephbpn.ephemeris import Ephemeris
from ephbpn.epoch import Epoch
from ephbpn.fundamental_arguments import fal03
from ephbpn.nutation import compute_nutation
from ephbpn.precession import compute_obliquity
from ephbpn.rotations import Rx

pytestmark = pytest.mark.order("first")


@pytest.fixture(autouse=True)
def reset_dtype():
    """Reset dtype to float64 before and after each test."""
    set_dtype(jnp.float64)
    yield
    set_dtype(jnp.float64)


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float64

    def test_set_float32(self):
        set_dtype(jnp.float32)
        assert get_dtype() == jnp.float32

    def test_roundtrip(self):
        for dtype in (jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_float16_rejected(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.float16)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float32")

    def test_float64_enables_x64(self):
        set_dtype(jnp.float64)
        assert jax.config.jax_enable_x64 is True


class TestOrthonormalityTolerance:
    def test_float32_tolerance(self):
        set_dtype(jnp.float32)
        assert get_orthonormality_tolerance() == 1e-5

    def test_float64_tolerance(self):
        assert get_orthonormality_tolerance() == 1e-9


class TestDtypeSwitchingOutputs:
    """Verify that output dtypes match the configured dtype."""

    @pytest.mark.parametrize("dtype", [jnp.float32, jnp.float64])
    def test_obliquity_dtype(self, dtype):
        set_dtype(dtype)
        assert compute_obliquity(0.1).dtype == dtype

    @pytest.mark.parametrize("dtype", [jnp.float32, jnp.float64])
    def test_fundamental_argument_dtype(self, dtype):
        set_dtype(dtype)
        assert fal03(0.1).dtype == dtype

    @pytest.mark.parametrize("dtype", [jnp.float32, jnp.float64])
    def test_rotation_dtype(self, dtype):
        set_dtype(dtype)
        assert Rx(0.3).dtype == dtype

    @pytest.mark.parametrize("dtype", [jnp.float32, jnp.float64])
    def test_nutation_dtype(self, dtype):
        set_dtype(dtype)
        dpsi, deps = compute_nutation(0.1)
        assert dpsi.dtype == dtype
        assert deps.dtype == dtype

    def test_ephemeris_matrices_float32(self):
        set_dtype(jnp.float32)
        e = Ephemeris(Epoch(2016, 7, 23))
        assert e.r_bias_prec_nut.dtype == jnp.float32
        assert e.jc.dtype == jnp.float32


class TestFloat32Accuracy:
    def test_bpn_matrix_close_to_float64(self):
        """Single precision stays within about a milliarcsecond of double precision."""
        r64 = Ephemeris(Epoch(2016, 7, 23)).r_bias_prec_nut
        set_dtype(jnp.float32)
        r32 = Ephemeris(Epoch(2016, 7, 23)).r_bias_prec_nut
        assert jnp.max(jnp.abs(r64 - r32.astype(jnp.float64))) < 1e-5
