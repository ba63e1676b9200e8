"""Elementary rotation algebra.

The elementary rotations follow the SOFA/ERFA convention (``+sin`` in the
upper off-diagonal element) and are composed by left-multiplication:
``Rz(c, Ry(b, Rx(a)))`` is ``Rz(c) @ Ry(b) @ Rx(a)``, i.e. the rotation
passed in is applied first.

Each elementary rotation is evaluated as the two-row update it performs on
the input matrix rather than as a full 3x3 product, so composed matrices do
not pick up round-off from the zero entries of the elementary matrix.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from ephbpn.config import get_dtype
from ephbpn.utils import to_radians


def identity() -> Array:
    """Return the 3x3 identity matrix in the configured dtype."""
    return jnp.eye(3, dtype=get_dtype())


def _prepare(angle: ArrayLike, r: ArrayLike | None, use_degrees: bool) -> tuple[Array, Array, Array]:
    angle = to_radians(jnp.asarray(angle, dtype=get_dtype()), use_degrees)
    r = identity() if r is None else jnp.asarray(r, dtype=get_dtype())
    return jnp.cos(angle), jnp.sin(angle), r


def Rx(angle: ArrayLike, r: ArrayLike | None = None, use_degrees: bool = False) -> Array:
    """Rotate a matrix about the x-axis.

    Computes ``Rx(angle) @ r``: row 0 is unchanged, rows 1 and 2 become
    ``c*r1 + s*r2`` and ``-s*r1 + c*r2``.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        r (ArrayLike | None): Matrix to rotate. Default: identity.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Array: Rotated 3x3 matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    c, s, r = _prepare(angle, r, use_degrees)

    return jnp.stack([r[0],
                      c * r[1] + s * r[2],
                      -s * r[1] + c * r[2]])


def Ry(angle: ArrayLike, r: ArrayLike | None = None, use_degrees: bool = False) -> Array:
    """Rotate a matrix about the y-axis.

    Computes ``Ry(angle) @ r``: row 1 is unchanged, rows 0 and 2 become
    ``c*r0 - s*r2`` and ``s*r0 + c*r2``.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        r (ArrayLike | None): Matrix to rotate. Default: identity.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Array: Rotated 3x3 matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    c, s, r = _prepare(angle, r, use_degrees)

    return jnp.stack([c * r[0] - s * r[2],
                      r[1],
                      s * r[0] + c * r[2]])


def Rz(angle: ArrayLike, r: ArrayLike | None = None, use_degrees: bool = False) -> Array:
    """Rotate a matrix about the z-axis.

    Computes ``Rz(angle) @ r``: row 2 is unchanged, rows 0 and 1 become
    ``c*r0 + s*r1`` and ``-s*r0 + c*r1``.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        r (ArrayLike | None): Matrix to rotate. Default: identity.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Array: Rotated 3x3 matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    c, s, r = _prepare(angle, r, use_degrees)

    return jnp.stack([c * r[0] + s * r[1],
                      -s * r[0] + c * r[1],
                      r[2]])


def rotate(r: ArrayLike, v: ArrayLike) -> Array:
    """Apply a rotation matrix to a Cartesian vector.

    ``v'_i = sum_j r[i][j] * v[j]``, summed in increasing ``j``.

    Args:
        r (ArrayLike): 3x3 rotation matrix.
        v (ArrayLike): 3-element vector.

    Returns:
        Array: Rotated vector.
    """
    r = jnp.asarray(r, dtype=get_dtype())
    v = jnp.asarray(v, dtype=get_dtype())

    return r[:, 0] * v[0] + r[:, 1] * v[1] + r[:, 2] * v[2]
