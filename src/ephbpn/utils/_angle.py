"""Angle and unit conversion helpers.

These helpers wrap the ``use_degrees`` convention used by the rotation
functions and provide the floor-modulo reduction used by the fundamental
arguments, all JAX-traceable via ``jnp.where``.
"""

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike


def to_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle to radians if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle value.
        use_degrees (bool): If ``True``, treat ``angle`` as degrees and convert.

    Returns:
        Angle in radians.
    """
    return jnp.where(use_degrees, jnp.deg2rad(angle), angle)


def wrap(x: ArrayLike, modulus: ArrayLike) -> Array:
    """Reduce ``x`` into ``[0, modulus)`` using floor-modulo semantics.

    Unlike ``jnp.fmod`` the result takes the sign of the modulus, so
    arguments with negative rates (e.g. the lunar node) land in the
    canonical range. A tiny negative ``x`` whose floor-modulo rounds up to
    exactly ``modulus`` is mapped to ``0.0``.

    Args:
        x (ArrayLike): Value to reduce.
        modulus (ArrayLike): Positive period.

    Returns:
        Reduced value in ``[0, modulus)``.
    """
    r = jnp.mod(x, modulus)
    return jnp.where(r >= modulus, r - modulus, r)
