"""
ephbpn computes the IAU 2006/2000A frame bias, precession and nutation of a TDB epoch in JAX.
"""

from .constants import (
    D2PI,
    AS2R,
    MAS2R,
    U2R,
    TURNAS,
    DJ00,
    DJC,
)

from .rotations import (
    Rx,
    Ry,
    Rz,
    rotate,
    identity,
)

from .config import set_dtype, get_dtype
from .epoch import Epoch
from .time import caldate_to_jd, gc2jd, jd2jc

from .precession import (
    PrecessionAngles,
    compute_obliquity,
    precession_angles,
    bias_precession_angles,
    fukushima_williams_matrix,
    bias_matrix_fixed_offsets,
    bias_matrix_iau2006,
)

from .nutation import (
    compute_lunisolar,
    compute_planetary,
    compute_nutation,
)

from .ephemeris import (
    BiasModel,
    Ephemeris,
    create_ephemeris,
)

__all__ = [
    # Constants
    "D2PI",
    "AS2R",
    "MAS2R",
    "U2R",
    "TURNAS",
    "DJ00",
    "DJC",
    # Rotations
    "Rx",
    "Ry",
    "Rz",
    "rotate",
    "identity",
    # Config
    "set_dtype",
    "get_dtype",
    # Time
    "Epoch",
    "caldate_to_jd",
    "gc2jd",
    "jd2jc",
    # Precession
    "PrecessionAngles",
    "compute_obliquity",
    "precession_angles",
    "bias_precession_angles",
    "fukushima_williams_matrix",
    "bias_matrix_fixed_offsets",
    "bias_matrix_iau2006",
    # Nutation
    "compute_lunisolar",
    "compute_planetary",
    "compute_nutation",
    # Ephemeris
    "BiasModel",
    "Ephemeris",
    "create_ephemeris",
]
