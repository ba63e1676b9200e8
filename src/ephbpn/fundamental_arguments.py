"""Fundamental arguments of the IAU 2000A nutation theory.

Two families are used:

- Delaunay arguments as degree-4 polynomials in arcseconds (IERS
  Conventions 2003 and MHB2000), reduced modulo one turn *before* the
  conversion to radians. These feed the luni-solar series.
- Linear expressions already in radians (MHB2000 lunar arguments and the
  IERS 2003 planetary mean longitudes), reduced modulo 2pi. These feed the
  planetary series.

All reductions use floor-modulo (:func:`ephbpn.utils.wrap`), so every
argument lies in ``[0, modulus)`` even where the secular rate is negative.

Uses routines and computations derived from software provided by SOFA
under license to the user. Does not itself constitute software provided
by and/or endorsed by SOFA.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from ephbpn.config import get_dtype
from ephbpn.constants import AS2R, D2PI, TURNAS
from ephbpn.utils import wrap


class LunisolarArguments(NamedTuple):
    """Delaunay arguments used by the luni-solar nutation series [rad]."""

    l: Array
    lp: Array
    f: Array
    d: Array
    om: Array


class PlanetaryArguments(NamedTuple):
    """Arguments used by the planetary nutation series [rad].

    Attributes:
        l, f, d, om: MHB2000 lunar arguments.
        lme, lve, lea, lma, lju, lsa, lur, lne: Planetary mean longitudes.
        pa: General accumulated precession in longitude.
    """

    l: Array
    f: Array
    d: Array
    om: Array
    lme: Array
    lve: Array
    lea: Array
    lma: Array
    lju: Array
    lsa: Array
    lur: Array
    lne: Array
    pa: Array


def _t(t: ArrayLike) -> Array:
    return jnp.asarray(t, dtype=get_dtype())


# ---------------------------------------------------------------------------
# Delaunay arguments (arcsecond polynomials)
# ---------------------------------------------------------------------------


def fal03(t: ArrayLike) -> Array:
    """Mean anomaly of the Moon (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        l in radians.
    """
    t = _t(t)
    return (
        wrap(
            485868.249036
            + t * (1717915923.2178 + t * (31.8792 + t * (0.051635 + t * (-0.00024470)))),
            TURNAS,
        )
        * AS2R
    )


def falp_mhb2000(t: ArrayLike) -> Array:
    """Mean anomaly of the Sun (MHB2000).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        l' in radians.
    """
    t = _t(t)
    return (
        wrap(
            1287104.79305
            + t * (129596581.0481 + t * (-0.5532 + t * (0.000136 + t * (-0.00001149)))),
            TURNAS,
        )
        * AS2R
    )


def faf03(t: ArrayLike) -> Array:
    """Mean longitude of the Moon minus that of the ascending node (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        F in radians.
    """
    t = _t(t)
    return (
        wrap(
            335779.526232
            + t * (1739527262.8478 + t * (-12.7512 + t * (-0.001037 + t * (0.00000417)))),
            TURNAS,
        )
        * AS2R
    )


def fad_mhb2000(t: ArrayLike) -> Array:
    """Mean elongation of the Moon from the Sun (MHB2000).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        D in radians.
    """
    t = _t(t)
    return (
        wrap(
            1072260.70369
            + t * (1602961601.2090 + t * (-6.3706 + t * (0.006593 + t * (-0.00003169)))),
            TURNAS,
        )
        * AS2R
    )


def faom03(t: ArrayLike) -> Array:
    """Mean longitude of the Moon's ascending node (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Omega in radians.
    """
    t = _t(t)
    return (
        wrap(
            450160.398036 + t * (-6962890.5431 + t * (7.4722 + t * (0.007702 + t * (-0.00005939)))),
            TURNAS,
        )
        * AS2R
    )


# ---------------------------------------------------------------------------
# Lunar arguments for the planetary series (MHB2000, radians)
# ---------------------------------------------------------------------------


def fal_mhb2000(t: ArrayLike) -> Array:
    """Mean anomaly of the Moon (MHB2000, linear)."""
    return wrap(2.35555598 + 8328.6914269554 * _t(t), D2PI)


def faf_mhb2000(t: ArrayLike) -> Array:
    """Mean longitude of the Moon minus that of the node (MHB2000, linear)."""
    return wrap(1.627905234 + 8433.466158131 * _t(t), D2PI)


def fad_mhb2000_linear(t: ArrayLike) -> Array:
    """Mean elongation of the Moon from the Sun (MHB2000, linear)."""
    return wrap(5.198466741 + 7771.3771468121 * _t(t), D2PI)


def faom_mhb2000(t: ArrayLike) -> Array:
    """Mean longitude of the Moon's ascending node (MHB2000, linear)."""
    return wrap(2.18243920 - 33.757045 * _t(t), D2PI)


# ---------------------------------------------------------------------------
# Planetary mean longitudes
# ---------------------------------------------------------------------------


def fame03(t: ArrayLike) -> Array:
    """Mean longitude of Mercury (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Mean longitude in radians.
    """
    return wrap(4.402608842 + 2608.7903141574 * _t(t), D2PI)


def fave03(t: ArrayLike) -> Array:
    """Mean longitude of Venus (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Mean longitude in radians.
    """
    return wrap(3.176146697 + 1021.3285546211 * _t(t), D2PI)


def fae03(t: ArrayLike) -> Array:
    """Mean longitude of Earth (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Mean longitude in radians.
    """
    return wrap(1.753470314 + 628.3075849991 * _t(t), D2PI)


def fama03(t: ArrayLike) -> Array:
    """Mean longitude of Mars (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Mean longitude in radians.
    """
    return wrap(6.203480913 + 334.0612426700 * _t(t), D2PI)


def faju03(t: ArrayLike) -> Array:
    """Mean longitude of Jupiter (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Mean longitude in radians.
    """
    return wrap(0.599546497 + 52.9690962641 * _t(t), D2PI)


def fasa03(t: ArrayLike) -> Array:
    """Mean longitude of Saturn (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Mean longitude in radians.
    """
    return wrap(0.874016757 + 21.3299104960 * _t(t), D2PI)


def faur03(t: ArrayLike) -> Array:
    """Mean longitude of Uranus (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Mean longitude in radians.
    """
    return wrap(5.481293872 + 7.4781598567 * _t(t), D2PI)


def fane_mhb2000(t: ArrayLike) -> Array:
    """Mean longitude of Neptune (MHB2000).

    The IERS 2003 expression differs slightly; the planetary nutation
    series was fitted with this one.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Mean longitude in radians.
    """
    return wrap(5.321159000 + 3.8127774000 * _t(t), D2PI)


def fapa03(t: ArrayLike) -> Array:
    """General accumulated precession in longitude (IERS 2003).

    Not reduced: the value stays small over the model's validity span.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        General precession in radians.
    """
    t = _t(t)
    return (0.024381750 + 0.00000538691 * t) * t


# ---------------------------------------------------------------------------
# Argument sets
# ---------------------------------------------------------------------------


def lunisolar_arguments(t: ArrayLike) -> LunisolarArguments:
    """Arguments (l, l', F, D, Omega) of the luni-solar series.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        LunisolarArguments in radians.
    """
    return LunisolarArguments(
        l=fal03(t),
        lp=falp_mhb2000(t),
        f=faf03(t),
        d=fad_mhb2000(t),
        om=faom03(t),
    )


def planetary_arguments(t: ArrayLike) -> PlanetaryArguments:
    """Arguments of the planetary series.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        PlanetaryArguments in radians.
    """
    return PlanetaryArguments(
        l=fal_mhb2000(t),
        f=faf_mhb2000(t),
        d=fad_mhb2000_linear(t),
        om=faom_mhb2000(t),
        lme=fame03(t),
        lve=fave03(t),
        lea=fae03(t),
        lma=fama03(t),
        lju=faju03(t),
        lsa=fasa03(t),
        lur=faur03(t),
        lne=fane_mhb2000(t),
        pa=fapa03(t),
    )
