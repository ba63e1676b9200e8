import jax
import jax.numpy as jnp
import pytest

from ephbpn.epoch import Epoch
from ephbpn.time import caldate_to_jd, gc2jd, jd2jc


def test_caldate_to_jd():
    assert caldate_to_jd(2000, 1, 1, 12, 0, 0) == pytest.approx(2451545.0, abs=1e-9)


def test_caldate_to_jd_midnight():
    assert caldate_to_jd(2016, 7, 23) == 2457592.5


def test_caldate_to_jd_january_uses_previous_year():
    assert caldate_to_jd(2016, 1, 1) == 2457388.5


def test_caldate_to_jd_february_leap_day():
    assert caldate_to_jd(2016, 2, 29) + 1.0 == caldate_to_jd(2016, 3, 1)


def test_caldate_to_jd_century_not_leap():
    assert caldate_to_jd(1900, 2, 28) + 1.0 == caldate_to_jd(1900, 3, 1)


def test_caldate_to_jd_time_of_day():
    jd = caldate_to_jd(2016, 7, 23, 18, 0, 0.0)
    assert jd == pytest.approx(2457593.25, abs=1e-9)


def test_caldate_to_jd_seconds():
    jd = caldate_to_jd(2016, 7, 23, 0, 0, 43200.0 / 2)
    assert jd == pytest.approx(2457592.75, abs=1e-9)


def test_caldate_to_jd_negative_year():
    """Julian Date zero is -4713-11-24 12:00 in the proleptic Gregorian calendar."""
    assert caldate_to_jd(-4713, 11, 24, 12) == pytest.approx(0.0, abs=1e-9)


def test_caldate_to_jd_vectorized():
    jd = caldate_to_jd(jnp.array([2000, 2016]), jnp.array([1, 7]), jnp.array([1, 23]))
    assert jd.shape == (2,)
    assert float(jd[0]) == 2451544.5
    assert float(jd[1]) == 2457592.5


def test_caldate_to_jd_jit():
    jd = jax.jit(caldate_to_jd)(2016, 7, 23, 0, 0, 0.0)
    assert float(jd) == 2457592.5


def test_gc2jd():
    assert gc2jd(Epoch(2016, 7, 23)) == 2457592.5


def test_gc2jd_with_time():
    assert gc2jd(Epoch(2016, 7, 23, 12, 59, 59)) == pytest.approx(
        2457592.5 + (59.0 / 3600.0 + 59.0 / 60.0 + 12.0) / 24.0, abs=1e-9
    )


def test_jd2jc_j2000():
    assert jd2jc(2451545.0) == 0.0


def test_jd2jc():
    assert float(jd2jc(2457592.5)) == pytest.approx(0.16557152635181382, abs=1e-16)


def test_jd2jc_one_century():
    assert float(jd2jc(2451545.0 + 36525.0)) == 1.0
