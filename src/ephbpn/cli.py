from __future__ import annotations

import argparse
import logging
import sys

import jax.numpy as jnp
import numpy as np

from ephbpn.config import set_dtype
from ephbpn.ephemeris import BiasModel, create_ephemeris

logger = logging.getLogger(__name__)

_MATRICES = (
    ("R_bias", "r_bias"),
    ("R_prec", "r_prec"),
    ("R_nut", "r_nut"),
    ("R_bias_prec", "r_bias_prec"),
    ("R_prec_nut", "r_prec_nut"),
    ("R_bias_prec_nut", "r_bias_prec_nut"),
)

_VECTORS = (
    ("bias", "apply_bias"),
    ("prec", "apply_prec"),
    ("nut", "apply_nut"),
    ("bias_prec", "apply_bias_prec"),
    ("prec_nut", "apply_prec_nut"),
    ("bias_prec_nut", "apply_bias_prec_nut"),
)


def _fmt_row(row) -> str:
    return "  ".join(f"{x: .16e}" for x in np.asarray(row, dtype=np.float64))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ephbpn",
        description="IAU 2006/2000A bias, precession and nutation matrices for a TDB epoch.",
    )
    p.add_argument(
        "datetime",
        nargs="?",
        default=None,
        help="TDB epoch as YYYYMMDD or YYYYMMDDHHMMSS (default: current UTC time)",
    )
    p.add_argument(
        "--vector",
        nargs=3,
        type=float,
        metavar=("X", "Y", "Z"),
        help="Cartesian vector to rotate with each matrix",
    )
    p.add_argument(
        "--bias-model",
        choices=[m.value for m in BiasModel],
        default=BiasModel.FIXED_OFFSETS.value,
        help="Frame-bias matrix (default: fixed-offsets)",
    )
    p.add_argument("--float32", action="store_true", help="Compute in single precision")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.float32:
        set_dtype(jnp.float32)

    try:
        e = create_ephemeris(args.datetime, bias_model=args.bias_model)
    except ValueError as exc:
        logger.debug("Rejected epoch argument %r", args.datetime)
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    print(f"TDB  = {e.tdb}")
    print(f"JD   = {float(e.jd):.10f}")
    print(f"JC   = {float(e.jc):.16f}")
    print(f"EPS  = {float(e.eps):.16e} rad")
    print(f"DPSI = {float(e.dpsi):.16e} rad")
    print(f"DEPS = {float(e.deps):.16e} rad")

    for label, attr in _MATRICES:
        print()
        print(f"{label} =")
        for row in getattr(e, attr):
            print(f"  {_fmt_row(row)}")

    if args.vector is not None:
        print()
        print(f"v = {_fmt_row(args.vector)}")
        for label, method in _VECTORS:
            print(f"  {label:<14s}: {_fmt_row(getattr(e, method)(args.vector))}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
