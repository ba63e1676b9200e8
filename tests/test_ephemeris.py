"""Tests for the Ephemeris matrices and vector operations.

Reference values at 2016-07-23T00:00:00 TDB (JD 2457592.5) applied to the
unit vector ``V``.
"""

import logging

import jax.numpy as jnp
import numpy as np
import pytest

from ephbpn.config import get_orthonormality_tolerance
from ephbpn.constants import MAS2R
from ephbpn.ephemeris import BiasModel, Ephemeris, create_ephemeris
from ephbpn.epoch import Epoch
from ephbpn.nutation import compute_nutation
from ephbpn.precession import bias_matrix_fixed_offsets, bias_matrix_iau2006
from ephbpn.rotations import Rx, Ry, Rz

EPOCH = Epoch(2016, 7, 23)
V = [-0.50787065, 0.80728228, 0.34996714]
VTOL = 1e-14


@pytest.fixture(scope="module")
def eph():
    return Ephemeris(EPOCH)


@pytest.fixture(scope="module")
def eph_iau2006():
    return Ephemeris(EPOCH, BiasModel.IAU2006)


def _assert_orthonormal(r):
    tol = get_orthonormality_tolerance()
    np.testing.assert_allclose(r @ r.T, np.eye(3), atol=tol)
    assert float(jnp.linalg.det(r)) == pytest.approx(1.0, abs=tol)


class TestScalars:
    def test_tdb(self, eph):
        assert eph.tdb is EPOCH

    def test_jd(self, eph):
        assert float(eph.jd) == 2457592.5

    def test_jc(self, eph):
        assert float(eph.jc) == pytest.approx(0.16557152635181382, abs=1e-16)

    def test_eps(self, eph):
        assert float(eph.eps) == pytest.approx(0.40905500411767176, abs=1e-15)

    def test_nutation(self, eph):
        assert float(eph.dpsi) == pytest.approx(-1.6578152046908863e-05, rel=1e-12)
        assert float(eph.deps) == pytest.approx(-4.4499876195270217e-05, rel=1e-12)

    def test_default_bias_model(self, eph):
        assert eph.bias_model is BiasModel.FIXED_OFFSETS

    def test_read_only(self, eph):
        with pytest.raises(AttributeError):
            eph.jd = 0.0
        with pytest.raises(AttributeError):
            eph.r_bias = None

    def test_no_new_attributes(self, eph):
        with pytest.raises(AttributeError):
            eph.extra = 1

    def test_repr(self, eph):
        assert repr(eph) == "Ephemeris(tdb=2016-07-23T00:00:00Z, bias_model=FIXED_OFFSETS)"


class TestMatrices:
    def test_r_bias_default(self, eph):
        np.testing.assert_array_equal(eph.r_bias, bias_matrix_fixed_offsets())

    def test_r_bias_default_is_icrs_offsets(self, eph):
        expected = Rz(78.0 * MAS2R, Ry(-17.3 * MAS2R, Rx(-5.1 * MAS2R)))
        np.testing.assert_allclose(eph.r_bias, expected, rtol=0, atol=1e-15)
        np.testing.assert_allclose(
            eph.r_bias[0], [0.99999999999992495, 3.7815467333922488e-07, 8.3872757481881151e-08], rtol=0, atol=1e-15
        )

    def test_r_bias_iau2006(self, eph_iau2006):
        np.testing.assert_array_equal(eph_iau2006.r_bias, bias_matrix_iau2006())

    def test_r_bias_prec(self, eph):
        np.testing.assert_allclose(
            eph.r_bias_prec[0], [0.99999185187860018, -0.0037024886248251923, -0.0016086498658162921], atol=1e-15
        )

    def test_r_prec(self, eph):
        np.testing.assert_allclose(
            eph.r_prec[0], [0.9999918520110741, -0.0037024178948059177, -0.0016087303049854701], atol=1e-15
        )

    def test_r_bias_prec_nut(self, eph):
        np.testing.assert_allclose(
            eph.r_bias_prec_nut[0], [0.99999191866471249, -0.0036872783421807095, -0.0016020560833832516], atol=1e-15
        )

    def test_r_nut(self, eph):
        np.testing.assert_allclose(
            eph.r_nut[0], [0.99999999986258248, 1.5210406383125734e-05, 6.5938352212819494e-06], atol=1e-15
        )

    def test_bias_model_only_changes_r_bias(self, eph, eph_iau2006):
        for attr in ("r_prec", "r_nut", "r_bias_prec", "r_prec_nut", "r_bias_prec_nut"):
            np.testing.assert_array_equal(getattr(eph, attr), getattr(eph_iau2006, attr))

    def test_all_orthonormal(self, eph, eph_iau2006):
        for e in (eph, eph_iau2006):
            for attr in ("r_bias", "r_prec", "r_nut", "r_bias_prec", "r_prec_nut", "r_bias_prec_nut"):
                _assert_orthonormal(getattr(e, attr))

    @pytest.mark.parametrize("year", [-8000, -2000, 1, 1000, 1900, 2000, 2100, 3000, 6000, 12000])
    def test_orthonormal_over_validity_span(self, year):
        e = Ephemeris(Epoch(year, 1, 1))
        assert -100.5 < float(e.jc) < 100.5
        for attr in ("r_prec", "r_nut", "r_bias_prec", "r_prec_nut", "r_bias_prec_nut"):
            _assert_orthonormal(getattr(e, attr))

    def test_prec_nut_matches_product(self, eph):
        np.testing.assert_allclose(eph.r_prec_nut, eph.r_nut @ eph.r_prec, atol=1e-14)

    def test_bias_prec_matches_product_iau2006(self, eph_iau2006):
        np.testing.assert_allclose(eph_iau2006.r_bias_prec, eph_iau2006.r_prec @ eph_iau2006.r_bias, atol=1e-12)


class TestVectorOperations:
    def test_apply_bias_default(self, eph):
        np.testing.assert_allclose(
            eph.apply_bias(V), [-0.507870315369686, 0.8072824634004779, 0.34996720255697145], rtol=0, atol=1e-15
        )

    def test_apply_bias(self, eph_iau2006):
        np.testing.assert_allclose(
            eph_iau2006.apply_bias(V), [-0.50787067894831373, 0.80728225562075706, 0.34996715422685276], atol=VTOL
        )

    def test_apply_bias_rounded(self, eph_iau2006):
        np.testing.assert_allclose(eph_iau2006.apply_bias(V), [-0.50787068, 0.80728226, 0.34996715], atol=5e-9)

    def test_apply_prec(self, eph):
        np.testing.assert_allclose(
            eph.apply_prec(V), [-0.51141841097906682, 0.80539536247244303, 0.34914723947459281], atol=VTOL
        )

    def test_apply_bias_prec(self, eph):
        np.testing.assert_allclose(
            eph.apply_bias_prec(V), [-0.51141843985981239, 0.805395337986056, 0.34914725365507682], atol=VTOL
        )

    def test_apply_prec_nut(self, eph):
        np.testing.assert_allclose(
            eph.apply_prec_nut(V), [-0.51140385829866153, 0.80541867760517116, 0.34911477094958354], atol=VTOL
        )

    def test_apply_bias_prec_nut(self, eph):
        np.testing.assert_allclose(
            eph.apply_bias_prec_nut(V), [-0.5114038871796861, 0.8054186531198545, 0.34911478513134758], atol=VTOL
        )

    def test_apply_nut_is_rotation(self, eph):
        v = jnp.array(V)
        assert float(jnp.linalg.norm(eph.apply_nut(v))) == pytest.approx(float(jnp.linalg.norm(v)), abs=1e-15)

    def test_chain_matches_direct(self, eph_iau2006):
        e = eph_iau2006
        chained = e.apply_nut(e.apply_prec(e.apply_bias(V)))
        np.testing.assert_allclose(
            chained, [-0.51140388717964347, 0.80541865311994476, 0.34911478513120092], atol=VTOL
        )
        np.testing.assert_allclose(chained, e.apply_bias_prec_nut(V), atol=1e-12)

    def test_chain_with_fixed_offsets_differs(self, eph):
        chained = eph.apply_nut(eph.apply_prec(eph.apply_bias(V)))
        diff = float(jnp.max(jnp.abs(chained - eph.apply_bias_prec_nut(V))))
        assert 1e-8 < diff < 1e-6

    def test_prec_then_nut(self, eph):
        np.testing.assert_allclose(eph.apply_nut(eph.apply_prec(V)), eph.apply_prec_nut(V), atol=1e-14)

    def test_aliases(self, eph):
        pairs = [
            (eph.apply_b, eph.apply_bias),
            (eph.apply_p, eph.apply_prec),
            (eph.apply_n, eph.apply_nut),
            (eph.apply_bp, eph.apply_bias_prec),
            (eph.apply_pn, eph.apply_prec_nut),
            (eph.apply_bpn, eph.apply_bias_prec_nut),
        ]
        for alias, method in pairs:
            np.testing.assert_array_equal(alias(V), method(V))

    def test_zero_vector(self, eph):
        np.testing.assert_array_equal(eph.apply_bias_prec_nut([0.0, 0.0, 0.0]), jnp.zeros(3))

    def test_unnormalised_vector_scales(self, eph):
        v = jnp.array(V)
        np.testing.assert_allclose(eph.apply_bias_prec_nut(10.0 * v), 10.0 * eph.apply_bias_prec_nut(v), atol=1e-13)


class TestConstruction:
    def test_requires_epoch(self):
        with pytest.raises(TypeError, match="Expected an Epoch"):
            Ephemeris("20160723")

    def test_bias_model_string(self):
        e = Ephemeris(EPOCH, "iau2006")
        assert e.bias_model is BiasModel.IAU2006

    def test_unknown_bias_model(self):
        with pytest.raises(ValueError):
            Ephemeris(EPOCH, "bogus")

    def test_uses_nutation(self, eph):
        dpsi, deps = compute_nutation(eph.jc)
        assert float(eph.dpsi) == float(dpsi)
        assert float(eph.deps) == float(deps)

    def test_construction_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="ephbpn.ephemeris"):
            Ephemeris(EPOCH)
        assert "2016-07-23T00:00:00Z" in caplog.text
        assert "jd=2457592.5000000000" in caplog.text


class TestCreateEphemeris:
    def test_from_compact_string(self):
        e = create_ephemeris("20160723")
        assert e.tdb == EPOCH
        assert float(e.jd) == 2457592.5

    def test_from_compact_string_with_time(self):
        e = create_ephemeris("20160723125959")
        assert e.tdb == Epoch(2016, 7, 23, 12, 59, 59)

    def test_from_epoch(self):
        assert create_ephemeris(EPOCH).tdb is EPOCH

    def test_now(self):
        e = create_ephemeris()
        assert isinstance(e.tdb, Epoch)
        assert e.tdb.year >= 2024

    def test_default_bias_model(self):
        e = create_ephemeris("20160723")
        assert e.bias_model is BiasModel.FIXED_OFFSETS
        np.testing.assert_array_equal(e.r_bias, bias_matrix_fixed_offsets())

    def test_bias_model(self):
        e = create_ephemeris("20160723", bias_model="iau2006")
        np.testing.assert_array_equal(e.r_bias, bias_matrix_iau2006())

    def test_bad_format(self):
        with pytest.raises(ValueError, match="Format: YYYYMMDD or YYYYMMDDHHMMSS"):
            create_ephemeris("2016072")

    def test_invalid_date(self):
        with pytest.raises(ValueError, match="Invalid date-time"):
            create_ephemeris("20160230")

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            create_ephemeris(2457592.5)
