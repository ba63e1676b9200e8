"""IAU 2000A nutation with the IAU 2006 (P03) adjustment.

The luni-solar (678 terms) and planetary (687 terms) series are evaluated
term by term with :func:`jax.lax.scan`. The accumulation runs from the
last listed row to the first, so the smallest terms are summed before the
dominant ones. Results are therefore reproducible to the last bit for a
given row order, which a vectorized ``jnp.sum`` does not guarantee.

Uses routines and computations derived from software provided by SOFA
under license to the user. Does not itself constitute software provided
by and/or endorsed by SOFA.
"""

from __future__ import annotations

import logging
import threading
from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from ephbpn._nutation_data import LUNI_SOLAR_COEFFS, PLANETARY_COEFFS
from ephbpn.config import get_dtype
from ephbpn.constants import D2PI, U2R
from ephbpn.fundamental_arguments import lunisolar_arguments, planetary_arguments
from ephbpn.utils import wrap

logger = logging.getLogger(__name__)


class _SeriesTable(NamedTuple):
    multipliers: Array
    amplitudes: Array


_LS_N_MULT = 5
_PL_N_MULT = 14

_tables: dict[str, tuple[_SeriesTable, _SeriesTable]] = {}
_tables_lock = threading.Lock()


def _get_tables() -> tuple[_SeriesTable, _SeriesTable]:
    """Return the (luni-solar, planetary) tables as arrays of the active dtype.

    Arrays are built on first use for each dtype and reused afterwards.
    """
    dtype = get_dtype()
    key = jnp.dtype(dtype).name

    with _tables_lock:
        tables = _tables.get(key)
        if tables is None:
            ls = jnp.array(LUNI_SOLAR_COEFFS, dtype=dtype)
            pl = jnp.array(PLANETARY_COEFFS, dtype=dtype)
            tables = (
                _SeriesTable(ls[:, :_LS_N_MULT], ls[:, _LS_N_MULT:]),
                _SeriesTable(pl[:, :_PL_N_MULT], pl[:, _PL_N_MULT:]),
            )
            _tables[key] = tables
            logger.debug(
                "Materialised nutation tables (%d luni-solar, %d planetary rows) as %s",
                ls.shape[0],
                pl.shape[0],
                key,
            )
    return tables


def compute_lunisolar(t: ArrayLike, reverse: bool = True) -> tuple[Array, Array]:
    """Luni-solar nutation, IAU 2000A.

    For each row the argument is
    ``(nl*l + nlp*l' + nf*F + nd*D + nom*Om) mod 2pi`` and the row adds
    ``(sp + spt*t)*sin + cp*cos`` to dpsi and ``(ce + cet*t)*cos + se*sin``
    to deps.

    Args:
        t: TDB Julian centuries since J2000.0.
        reverse: Accumulate from the last row to the first. Default: ``True``

    Returns:
        Tuple of (dpsi_ls, deps_ls) in radians.
    """
    dtype = get_dtype()
    t = jnp.asarray(t, dtype=dtype)
    l, lp, f, d, om = lunisolar_arguments(t)
    table, _ = _get_tables()

    def _term(carry, row):
        dp, de = carry
        n, a = row
        arg = wrap(n[0] * l + n[1] * lp + n[2] * f + n[3] * d + n[4] * om, D2PI)
        sarg = jnp.sin(arg)
        carg = jnp.cos(arg)
        dp = dp + ((a[0] + a[1] * t) * sarg + a[2] * carg)
        de = de + ((a[3] + a[4] * t) * carg + a[5] * sarg)
        return (dp, de), None

    zero = jnp.zeros((), dtype=dtype)
    (dp, de), _ = jax.lax.scan(
        _term, (zero, zero), (table.multipliers, table.amplitudes), reverse=reverse
    )
    return dp * U2R, de * U2R


def compute_planetary(t: ArrayLike, reverse: bool = True) -> tuple[Array, Array]:
    """Planetary nutation, IAU 2000A.

    Multipliers act on the MHB2000 lunar arguments (l, F, D, Om), the eight
    planetary mean longitudes and the general precession p_A. The table's
    l' column is zero in every row and is not used. Each row adds
    ``sp*sin + cp*cos`` to dpsi and ``se*sin + ce*cos`` to deps.

    Args:
        t: TDB Julian centuries since J2000.0.
        reverse: Accumulate from the last row to the first. Default: ``True``

    Returns:
        Tuple of (dpsi_pl, deps_pl) in radians.
    """
    dtype = get_dtype()
    t = jnp.asarray(t, dtype=dtype)
    p = planetary_arguments(t)
    _, table = _get_tables()

    def _term(carry, row):
        dp, de = carry
        n, a = row
        arg = wrap(
            n[0] * p.l + n[2] * p.f + n[3] * p.d + n[4] * p.om
            + n[5] * p.lme + n[6] * p.lve + n[7] * p.lea + n[8] * p.lma
            + n[9] * p.lju + n[10] * p.lsa + n[11] * p.lur + n[12] * p.lne
            + n[13] * p.pa,
            D2PI,
        )
        sarg = jnp.sin(arg)
        carg = jnp.cos(arg)
        dp = dp + (a[0] * sarg + a[1] * carg)
        de = de + (a[2] * sarg + a[3] * carg)
        return (dp, de), None

    zero = jnp.zeros((), dtype=dtype)
    (dp, de), _ = jax.lax.scan(
        _term, (zero, zero), (table.multipliers, table.amplitudes), reverse=reverse
    )
    return dp * U2R, de * U2R


def compute_nutation(t: ArrayLike) -> tuple[Array, Array]:
    """Nutation, IAU 2006/2000A.

    Sums the luni-solar and planetary series and applies the P03
    adjustments for the secular change in J2:

    ``dpsi += dpsi * (0.4697e-6 + fj2)`` and ``deps += deps * fj2`` with
    ``fj2 = -2.7774e-6 * t``.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Tuple of (dpsi, deps) nutation in longitude and obliquity [radians].

    Examples:
        ```python
        from ephbpn.nutation import compute_nutation
        dpsi, deps = compute_nutation(0.16557152635181382)
        ```
    """
    t = jnp.asarray(t, dtype=get_dtype())

    dpsi_ls, deps_ls = compute_lunisolar(t)
    dpsi_pl, deps_pl = compute_planetary(t)
    dpsi = dpsi_ls + dpsi_pl
    deps = deps_ls + deps_pl

    # J2 correction factor for P03 precession
    fj2 = -2.7774e-6 * t

    dpsi = dpsi + dpsi * (0.4697e-6 + fj2)
    deps = deps + deps * fj2

    return dpsi, deps
