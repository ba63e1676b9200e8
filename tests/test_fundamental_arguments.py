"""Tests for the IAU 2000A fundamental arguments.

Reference values at 2016-07-23T00:00:00 TDB (JD 2457592.5).
"""

import jax
import jax.numpy as jnp
import pytest

from ephbpn.constants import AS2R, D2PI
from ephbpn.fundamental_arguments import (
    LunisolarArguments,
    PlanetaryArguments,
    fad_mhb2000,
    fad_mhb2000_linear,
    fae03,
    faf03,
    faf_mhb2000,
    faju03,
    fal03,
    fal_mhb2000,
    falp_mhb2000,
    fama03,
    fane_mhb2000,
    faom03,
    faom_mhb2000,
    fapa03,
    fasa03,
    faur03,
    fave03,
    fame03,
    lunisolar_arguments,
    planetary_arguments,
)

JC = 0.16557152635181382
ATOL = 1e-12

_ALL_WRAPPED = [
    fal03,
    falp_mhb2000,
    faf03,
    fad_mhb2000,
    faom03,
    fal_mhb2000,
    faf_mhb2000,
    fad_mhb2000_linear,
    faom_mhb2000,
    fame03,
    fave03,
    fae03,
    fama03,
    faju03,
    fasa03,
    faur03,
    fane_mhb2000,
]


class TestDelaunayArguments:
    def test_fal03(self):
        assert float(fal03(JC)) == pytest.approx(5.3321295788256675, abs=ATOL)

    def test_falp_mhb2000(self):
        assert float(falp_mhb2000(JC)) == pytest.approx(3.4548235589061664, abs=ATOL)

    def test_faf03(self):
        assert float(faf03(JC)) == pytest.approx(3.1026292299388141, abs=ATOL)

    def test_fad_mhb2000(self):
        assert float(fad_mhb2000(JC)) == pytest.approx(3.864253621839477, abs=ATOL)

    def test_faom03(self):
        assert float(faom03(JC)) == pytest.approx(2.8764198733973796, abs=ATOL)

    def test_j2000_constant_terms(self):
        assert float(fal03(0.0)) == pytest.approx(485868.249036 * AS2R, abs=1e-15)
        assert float(faom03(0.0)) == pytest.approx(450160.398036 * AS2R, abs=1e-15)


class TestPlanetaryArguments:
    def test_fal_mhb2000(self):
        assert float(fal_mhb2000(JC)) == pytest.approx(5.3321257819424019, abs=ATOL)

    def test_faf_mhb2000(self):
        assert float(faf_mhb2000(JC)) == pytest.approx(3.1026312782487793, abs=ATOL)

    def test_fad_mhb2000_linear(self):
        assert float(fad_mhb2000_linear(JC)) == pytest.approx(3.8642548224681335, abs=ATOL)

    def test_faom_mhb2000(self):
        assert float(faom_mhb2000(JC)) == pytest.approx(2.8764190414027215, abs=ATOL)

    def test_fame03(self):
        assert float(fame03(JC)) == pytest.approx(2.8042168934771965, abs=ATOL)

    def test_fane_mhb2000(self):
        assert float(fane_mhb2000(JC)) == pytest.approx(5.9524463737576996, abs=ATOL)

    def test_fapa03(self):
        assert float(fapa03(JC)) == pytest.approx(0.0040370712390038165, abs=1e-17)

    def test_fapa03_not_wrapped(self):
        """General precession grows without reduction."""
        assert float(fapa03(-1.0)) < 0.0
        assert float(fapa03(300.0)) > D2PI

    def test_earth_longitude_linear(self):
        expected = (1.753470314 + 628.3075849991 * JC) % D2PI
        assert float(fae03(JC)) == pytest.approx(expected, abs=ATOL)


class TestCanonicalRange:
    @pytest.mark.parametrize("fn", _ALL_WRAPPED, ids=lambda f: f.__name__)
    @pytest.mark.parametrize("jc", [-100.0, -3.7, -0.01, 0.0, 0.16557152635181382, 12.5, 100.0])
    def test_range(self, fn, jc):
        value = float(fn(jc))
        assert 0.0 <= value < D2PI

    def test_negative_rate_node_stays_positive(self):
        """The MHB2000 node regresses; at large jc the raw value is negative."""
        value = float(faom_mhb2000(50.0))
        assert 0.0 <= value < D2PI
        assert value == pytest.approx((2.18243920 - 33.757045 * 50.0) % D2PI, abs=1e-10)

    def test_vectorized(self):
        t = jnp.linspace(-10.0, 10.0, 101)
        values = fal03(t)
        assert values.shape == (101,)
        assert bool(jnp.all((values >= 0.0) & (values < D2PI)))


class TestArgumentSets:
    def test_lunisolar_arguments(self):
        args = lunisolar_arguments(JC)
        assert isinstance(args, LunisolarArguments)
        assert float(args.l) == float(fal03(JC))
        assert float(args.lp) == float(falp_mhb2000(JC))
        assert float(args.f) == float(faf03(JC))
        assert float(args.d) == float(fad_mhb2000(JC))
        assert float(args.om) == float(faom03(JC))

    def test_planetary_arguments(self):
        args = planetary_arguments(JC)
        assert isinstance(args, PlanetaryArguments)
        assert len(args) == 13
        assert float(args.l) == float(fal_mhb2000(JC))
        assert float(args.d) == float(fad_mhb2000_linear(JC))
        assert float(args.lea) == float(fae03(JC))
        assert float(args.lju) == float(faju03(JC))
        assert float(args.lsa) == float(fasa03(JC))
        assert float(args.lur) == float(faur03(JC))
        assert float(args.lve) == float(fave03(JC))
        assert float(args.lma) == float(fama03(JC))
        assert float(args.pa) == float(fapa03(JC))

    def test_jit(self):
        args = jax.jit(lunisolar_arguments)(JC)
        assert float(args.l) == pytest.approx(5.3321295788256675, abs=ATOL)
