"""Tests for the IAU 2006/2000A nutation series.

Reference values at 2016-07-23T00:00:00 TDB (JD 2457592.5).
"""

import logging
import math

import jax
import jax.numpy as jnp
import pytest

from ephbpn import nutation
from ephbpn._nutation_data import LUNI_SOLAR_COEFFS, PLANETARY_COEFFS
from ephbpn.config import set_dtype
from ephbpn.constants import D2PI, U2R
from ephbpn.fundamental_arguments import lunisolar_arguments
from ephbpn.nutation import compute_lunisolar, compute_nutation, compute_planetary
from ephbpn.utils import wrap

JC = 0.16557152635181382


class TestCoefficientTables:
    def test_lunisolar_shape(self):
        assert len(LUNI_SOLAR_COEFFS) == 678
        assert all(len(row) == 11 for row in LUNI_SOLAR_COEFFS)

    def test_planetary_shape(self):
        assert len(PLANETARY_COEFFS) == 687
        assert all(len(row) == 18 for row in PLANETARY_COEFFS)

    def test_lunisolar_first_row(self):
        assert LUNI_SOLAR_COEFFS[0] == (0, 0, 0, 0, 1, -172064161.0, -174666.0, 33386.0, 92052331.0, 9086.0, 15377.0)

    def test_planetary_last_row(self):
        assert PLANETARY_COEFFS[-1] == (0, 0, 2, 2, 2, 0, 0, 2, 0, -2, 0, 0, 0, 0, 3.0, 0.0, 0.0, -1.0)

    def test_planetary_lp_column_unused(self):
        assert all(row[1] == 0 for row in PLANETARY_COEFFS)

    def test_multipliers_are_integers(self):
        for row in LUNI_SOLAR_COEFFS:
            assert all(float(n).is_integer() for n in row[:5])
        for row in PLANETARY_COEFFS:
            assert all(float(n).is_integer() for n in row[:14])


class TestLunisolar:
    def test_reference_epoch(self):
        dp, de = compute_lunisolar(JC)
        assert float(dp) == pytest.approx(-1.6576311981052729e-05, rel=1e-12)
        assert float(de) == pytest.approx(-4.4500965722994368e-05, rel=1e-12)

    def test_forward_order_close(self):
        dp, de = compute_lunisolar(JC, reverse=False)
        assert float(dp) == pytest.approx(-1.6576311981052658e-05, rel=1e-12)
        assert float(de) == pytest.approx(-4.4500965722994422e-05, rel=1e-12)

    def test_default_is_reverse(self):
        assert compute_lunisolar(JC) == compute_lunisolar(JC, reverse=True)

    def test_dominant_term_bounds(self):
        """The 18.6-year term dominates: |dpsi| < 20 arcsec, |deps| < 10 arcsec."""
        for jc in (-1.0, 0.0, JC, 0.5):
            dp, de = compute_lunisolar(jc)
            assert abs(float(dp)) < 20.0 * 4.848136811095359935899141e-6
            assert abs(float(de)) < 10.0 * 4.848136811095359935899141e-6


class TestPlanetary:
    def test_reference_epoch(self):
        dp, de = compute_planetary(JC)
        assert float(dp) == pytest.approx(-1.8399026998841999e-09, rel=1e-10)
        assert float(de) == pytest.approx(1.0690640747722591e-09, rel=1e-10)

    def test_default_is_reverse(self):
        assert compute_planetary(JC) == compute_planetary(JC, reverse=True)


class TestAccumulationOrder:
    """A constructed table whose sum depends on the direction of accumulation."""

    @pytest.fixture
    def ordered_tables(self, monkeypatch):
        # Rows: 0.5, 1e16, -1e16 on the cosine amplitude with a zero argument.
        ls = nutation._SeriesTable(
            jnp.zeros((3, 5)),
            jnp.array(
                [
                    [0.0, 0.0, 0.5, 0.0, 0.0, 0.0],
                    [0.0, 0.0, 1e16, 0.0, 0.0, 0.0],
                    [0.0, 0.0, -1e16, 0.0, 0.0, 0.0],
                ]
            ),
        )
        pl = nutation._SeriesTable(
            jnp.zeros((3, 14)),
            jnp.array(
                [
                    [0.0, 0.5, 0.0, 0.0],
                    [0.0, 1e16, 0.0, 0.0],
                    [0.0, -1e16, 0.0, 0.0],
                ]
            ),
        )
        monkeypatch.setattr(nutation, "_get_tables", lambda: (ls, pl))

    def test_lunisolar_sums_last_row_first(self, ordered_tables):
        dp, _ = compute_lunisolar(0.0)
        assert float(dp) == 0.5 * U2R

    def test_lunisolar_forward_loses_small_term(self, ordered_tables):
        dp, _ = compute_lunisolar(0.0, reverse=False)
        assert float(dp) == 0.0

    def test_planetary_sums_last_row_first(self, ordered_tables):
        dp, _ = compute_planetary(0.0)
        assert float(dp) == 0.5 * U2R

    def test_planetary_forward_loses_small_term(self, ordered_tables):
        dp, _ = compute_planetary(0.0, reverse=False)
        assert float(dp) == 0.0


class TestEveryRowContributes:
    @pytest.fixture
    def full_lunisolar(self):
        return compute_lunisolar(0.0)

    @pytest.fixture
    def without_last_row(self, monkeypatch):
        ls, pl = nutation._get_tables()
        trimmed = nutation._SeriesTable(ls.multipliers[:-1], ls.amplitudes[:-1])
        monkeypatch.setattr(nutation, "_get_tables", lambda: (trimmed, pl))

    def test_dropping_smallest_row_changes_lunisolar(self, full_lunisolar, without_last_row):
        dp_full, de_full = full_lunisolar
        dp, de = compute_lunisolar(0.0)
        assert float(dp) != float(dp_full)
        assert float(de) != float(de_full)

    def test_dropped_row_accounts_for_difference(self, full_lunisolar, without_last_row):
        # Last row: (2, 0, 2, 4, 1) with S = -3, C' = 2 in units of 0.1 uas.
        dp_full, de_full = full_lunisolar
        dp, de = compute_lunisolar(0.0)
        l, lp, f, d, om = lunisolar_arguments(0.0)
        arg = float(wrap(2 * l + 2 * f + 4 * d + om, D2PI))
        assert float(dp_full - dp) == pytest.approx(-3.0 * math.sin(arg) * U2R, abs=1e-4 * U2R)
        assert float(de_full - de) == pytest.approx(2.0 * math.cos(arg) * U2R, abs=1e-4 * U2R)


class TestNutation:
    def test_reference_epoch(self):
        dpsi, deps = compute_nutation(JC)
        assert float(dpsi) == pytest.approx(-1.6578152046908863e-05, rel=1e-12)
        assert float(deps) == pytest.approx(-4.4499876195270217e-05, rel=1e-12)

    def test_p03_adjustment(self):
        dp_ls, de_ls = compute_lunisolar(JC)
        dp_pl, de_pl = compute_planetary(JC)
        dp = dp_ls + dp_pl
        de = de_ls + de_pl
        fj2 = -2.7774e-6 * JC
        dpsi, deps = compute_nutation(JC)
        assert float(dpsi) == pytest.approx(float(dp + dp * (0.4697e-6 + fj2)), rel=1e-15)
        assert float(deps) == pytest.approx(float(de + de * fj2), rel=1e-15)

    def test_j2000_adjustment_on_longitude_only(self):
        dp_ls, de_ls = compute_lunisolar(0.0)
        dp_pl, de_pl = compute_planetary(0.0)
        _, deps = compute_nutation(0.0)
        assert float(deps) == float(de_ls + de_pl)

    def test_jit(self):
        dpsi, deps = jax.jit(compute_nutation)(JC)
        assert float(dpsi) == pytest.approx(-1.6578152046908863e-05, rel=1e-12)
        assert float(deps) == pytest.approx(-4.4499876195270217e-05, rel=1e-12)


class TestTableCache:
    def test_tables_reused(self):
        assert nutation._get_tables() is nutation._get_tables()

    def test_tables_follow_dtype(self):
        ls64, _ = nutation._get_tables()
        set_dtype(jnp.float32)
        ls32, _ = nutation._get_tables()
        assert ls64.amplitudes.dtype == jnp.float64
        assert ls32.amplitudes.dtype == jnp.float32

    def test_materialisation_logged(self, monkeypatch, caplog):
        monkeypatch.setattr(nutation, "_tables", {})
        with caplog.at_level(logging.DEBUG, logger="ephbpn.nutation"):
            nutation._get_tables()
        assert "678 luni-solar, 687 planetary" in caplog.text
