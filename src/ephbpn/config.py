"""Module-wide floating-point precision configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout ephbpn.  The default is ``jnp.float64``: the nutation series and
the Fukushima-Williams polynomials are only meaningful in double precision,
so JAX's 64-bit mode (``jax_enable_x64``) is enabled when this module is
imported.

``jnp.float32`` may be selected for throughput on accelerators, at the cost
of roughly milliarcsecond-level accuracy in the composed matrices.

Call ``set_dtype`` **before** any JIT compilation, just like JAX's own
``jax.config.update("jax_enable_x64", True)``.  Under JIT, ``get_dtype()``
runs during tracing and its result is baked into the compiled program.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float32, jnp.float64)

_dtype = jnp.float64
jax.config.update("jax_enable_x64", True)


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for ephbpn.

    Must be called **before** any ``jax.jit`` compilation.  In eager mode
    the change takes effect immediately.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is (re-)enabled via
    ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: ``jnp.float32`` or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


def get_orthonormality_tolerance() -> float:
    """Return the dtype-adaptive tolerance for ``R @ R.T == I`` checks.

    - ``float64``: 1e-9
    - ``float32``: 1e-5

    Returns:
        float: Absolute per-entry tolerance.
    """
    if _dtype == jnp.float64:
        return 1e-9
    return 1e-5
