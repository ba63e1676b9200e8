import jax.numpy as jnp
import pytest

from ephbpn.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Run every test in float64 and restore float64 afterwards.

    Some tests (test_config.py, the --float32 CLI path) switch the module-wide
    dtype. Restoring on teardown keeps module-scoped fixtures, which are
    built before this fixture runs, in float64 as well.
    """
    set_dtype(jnp.float64)
    yield
    set_dtype(jnp.float64)
