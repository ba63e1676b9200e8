"""Bias, precession and nutation matrices for one epoch.

:class:`Ephemeris` evaluates the IAU 2006/2000A model once, at
construction, and exposes the six rotation matrices together with the
operations that apply them to Cartesian vectors:

- ``r_bias``: GCRS to mean J2000.0
- ``r_prec``: mean J2000.0 to mean of date
- ``r_nut``: mean of date to true of date
- ``r_bias_prec``: GCRS to mean of date
- ``r_prec_nut``: mean J2000.0 to true of date
- ``r_bias_prec_nut``: GCRS to true of date

The composite matrices are built directly from the Fukushima-Williams
angles rather than as products of the single-step matrices.
"""

from __future__ import annotations

import enum
import logging

from jax import Array
from jax.typing import ArrayLike

from ephbpn.epoch import Epoch
from ephbpn.nutation import compute_nutation
from ephbpn.precession import (
    bias_matrix_fixed_offsets,
    bias_matrix_iau2006,
    bias_precession_angles,
    compute_obliquity,
    fukushima_williams_matrix,
    precession_angles,
)
from ephbpn.rotations import Rx, Rz, rotate

logger = logging.getLogger(__name__)


class BiasModel(enum.Enum):
    """Frame-bias matrix used for ``r_bias``.

    Attributes:
        FIXED_OFFSETS: ``R_z(78.0 mas) . R_y(-17.3 mas) . R_x(-5.1 mas)``.
            The default.
        IAU2006: Bias-precession Fukushima-Williams matrix at J2000.0.
            Consistent with ``r_bias_prec``, so ``N . P . B`` reproduces
            ``r_bias_prec_nut``.
    """

    IAU2006 = "iau2006"
    FIXED_OFFSETS = "fixed-offsets"


_BIAS_MATRICES = {
    BiasModel.IAU2006: bias_matrix_iau2006,
    BiasModel.FIXED_OFFSETS: bias_matrix_fixed_offsets,
}


class Ephemeris:
    """Precomputed bias, precession and nutation for a TDB epoch.

    Args:
        epoch (Epoch): Instant, interpreted as TDB.
        bias_model (BiasModel): Frame-bias matrix to use for ``r_bias``.
            Default: ``BiasModel.FIXED_OFFSETS``

    Raises:
        TypeError: If ``epoch`` is not an :class:`Epoch`.

    Examples:
        ```python
        from ephbpn import Ephemeris, Epoch
        e = Ephemeris(Epoch(2016, 7, 23))
        e.apply_bias_prec_nut([-0.50787065, 0.80728228, 0.34996714])
        ```
    """

    __slots__ = (
        "_tdb",
        "_bias_model",
        "_jd",
        "_jc",
        "_eps",
        "_dpsi",
        "_deps",
        "_r_bias",
        "_r_prec",
        "_r_nut",
        "_r_bias_prec",
        "_r_prec_nut",
        "_r_bias_prec_nut",
    )

    def __init__(self, epoch: Epoch, bias_model: BiasModel = BiasModel.FIXED_OFFSETS) -> None:
        if not isinstance(epoch, Epoch):
            raise TypeError(f"Expected an Epoch, got {type(epoch).__name__}")
        bias_model = BiasModel(bias_model)

        self._tdb = epoch
        self._bias_model = bias_model
        self._jd = epoch.jd()
        self._jc = epoch.jc()
        self._eps = compute_obliquity(self._jc)

        gam_p, phi_p, psi_p = precession_angles(self._jc)
        gam_b, phi_b, psi_b = bias_precession_angles(self._jc)
        self._dpsi, self._deps = compute_nutation(self._jc)

        eps = self._eps
        eps_true = eps + self._deps

        self._r_bias = _BIAS_MATRICES[bias_model]()
        self._r_bias_prec = fukushima_williams_matrix(gam_b, phi_b, psi_b, eps)
        self._r_bias_prec_nut = fukushima_williams_matrix(gam_b, phi_b, psi_b + self._dpsi, eps_true)
        self._r_prec = fukushima_williams_matrix(gam_p, phi_p, psi_p, eps)
        self._r_prec_nut = fukushima_williams_matrix(gam_p, phi_p, psi_p + self._dpsi, eps_true)
        self._r_nut = Rx(-eps_true, Rz(-self._dpsi, Rx(eps)))

        logger.debug(
            "Ephemeris for %s: jd=%.10f jc=%.15f bias=%s",
            epoch,
            float(self._jd),
            float(self._jc),
            bias_model.value,
        )

    def __repr__(self) -> str:
        return f"Ephemeris(tdb={self._tdb}, bias_model={self._bias_model.name})"

    # -- Scalars --

    @property
    def tdb(self) -> Epoch:
        """Epoch the ephemeris was computed for."""
        return self._tdb

    @property
    def bias_model(self) -> BiasModel:
        return self._bias_model

    @property
    def jd(self) -> Array:
        """Julian Date."""
        return self._jd

    @property
    def jc(self) -> Array:
        """Julian centuries since J2000.0."""
        return self._jc

    @property
    def eps(self) -> Array:
        """Mean obliquity of the ecliptic [rad]."""
        return self._eps

    @property
    def dpsi(self) -> Array:
        """Nutation in longitude [rad]."""
        return self._dpsi

    @property
    def deps(self) -> Array:
        """Nutation in obliquity [rad]."""
        return self._deps

    # -- Matrices --

    @property
    def r_bias(self) -> Array:
        return self._r_bias

    @property
    def r_prec(self) -> Array:
        return self._r_prec

    @property
    def r_nut(self) -> Array:
        return self._r_nut

    @property
    def r_bias_prec(self) -> Array:
        return self._r_bias_prec

    @property
    def r_prec_nut(self) -> Array:
        return self._r_prec_nut

    @property
    def r_bias_prec_nut(self) -> Array:
        return self._r_bias_prec_nut

    # -- Vector operations --

    def apply_bias(self, v: ArrayLike) -> Array:
        """Rotate a GCRS vector to mean J2000.0."""
        return rotate(self._r_bias, v)

    def apply_prec(self, v: ArrayLike) -> Array:
        """Rotate a mean J2000.0 vector to mean of date."""
        return rotate(self._r_prec, v)

    def apply_nut(self, v: ArrayLike) -> Array:
        """Rotate a mean-of-date vector to true of date."""
        return rotate(self._r_nut, v)

    def apply_bias_prec(self, v: ArrayLike) -> Array:
        """Rotate a GCRS vector to mean of date."""
        return rotate(self._r_bias_prec, v)

    def apply_prec_nut(self, v: ArrayLike) -> Array:
        """Rotate a mean J2000.0 vector to true of date."""
        return rotate(self._r_prec_nut, v)

    def apply_bias_prec_nut(self, v: ArrayLike) -> Array:
        """Rotate a GCRS vector to true of date."""
        return rotate(self._r_bias_prec_nut, v)

    # Short aliases
    apply_b = apply_bias
    apply_p = apply_prec
    apply_n = apply_nut
    apply_bp = apply_bias_prec
    apply_pn = apply_prec_nut
    apply_bpn = apply_bias_prec_nut


def create_ephemeris(
    arg: Epoch | str | None = None, bias_model: BiasModel | str = BiasModel.FIXED_OFFSETS
) -> Ephemeris:
    """Resolve an epoch argument and build an :class:`Ephemeris`.

    Args:
        arg: ``None`` for the current UTC time, a date/time string accepted
            by :meth:`Epoch.from_string`, or an :class:`Epoch`.
        bias_model: A :class:`BiasModel` or its value
            (``"iau2006"`` / ``"fixed-offsets"``). Default: ``BiasModel.FIXED_OFFSETS``

    Returns:
        Ephemeris: Computed ephemeris.

    Raises:
        ValueError: If the string is malformed or names an invalid date-time,
            or if ``bias_model`` is unknown.
        TypeError: If ``arg`` is of an unsupported type.
    """
    if arg is None:
        epoch = Epoch.now()
    elif isinstance(arg, str):
        epoch = Epoch.from_string(arg)
    elif isinstance(arg, Epoch):
        epoch = arg
    else:
        raise TypeError(f"Expected an Epoch, a date/time string or None, got {type(arg).__name__}")

    return Ephemeris(epoch, BiasModel(bias_model))
