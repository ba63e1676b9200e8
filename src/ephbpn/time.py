from __future__ import annotations

from typing import TYPE_CHECKING

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import DJ00, DJC, JD_GREGORIAN_OFFSET

if TYPE_CHECKING:
    from .epoch import Epoch


def caldate_to_jd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a proleptic Gregorian calendar date to Julian Date.

    January and February are treated as months 13 and 14 of the previous
    year. The day number is then

    ``floor(365.25 y) + floor(y/400) - floor(y/100) + floor(30.59 (m - 2)) + d + 1721088.5``

    where ``floor`` rounds toward negative infinity, so years before 1 AD
    are handled correctly.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the calendar date. Default: ``0``
        minute (ArrayLike): Minute of the calendar date. Default: ``0``
        second (ArrayLike): Second of the calendar date. Default: ``0.0``

    Returns:
        Julian Date.
    """
    dtype = get_dtype()
    year = jnp.asarray(year, dtype=dtype)
    month = jnp.asarray(month, dtype=dtype)

    is_jan_or_feb = month < 3
    year = jnp.where(is_jan_or_feb, year - 1, year)
    month = jnp.where(is_jan_or_feb, month + 12, month)

    jd = (
        jnp.floor(365.25 * year)
        + jnp.floor(year / 400.0)
        - jnp.floor(year / 100.0)
        + jnp.floor(30.59 * (month - 2))
        + day
        + JD_GREGORIAN_OFFSET
    )

    frac_day = (second / 3600.0 + minute / 60.0 + hour) / 24.0

    return jd + frac_day


def gc2jd(epoch: Epoch) -> jax.Array:
    """Convert an epoch (proleptic Gregorian, TDB) to Julian Date.

    Args:
        epoch (Epoch): Calendar instant.

    Returns:
        Julian Date.

    Examples:
        ```python
        from ephbpn import Epoch
        from ephbpn.time import gc2jd
        gc2jd(Epoch(2016, 7, 23))  # 2457592.5
        ```
    """
    return caldate_to_jd(
        epoch.year, epoch.month, epoch.day, epoch.hour, epoch.minute, epoch.second
    )


def jd2jc(jd: ArrayLike) -> jax.Array:
    """Convert Julian Date to Julian centuries since J2000.0.

    Args:
        jd (ArrayLike): Julian Date.

    Returns:
        ``(jd - 2451545.0) / 36525.0``.
    """
    jd = jnp.asarray(jd, dtype=get_dtype())
    return (jd - DJ00) / DJC
