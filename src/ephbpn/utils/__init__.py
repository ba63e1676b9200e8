"""Shared utility functions for ephbpn.

Provides angle conversion and floor-modulo angle reduction.
"""

from ephbpn.utils._angle import to_radians, wrap

__all__ = [
    "to_radians",
    "wrap",
]
