# scalar.py

"""
Complex scalar helpers.

Arithmetic itself is Python's complex type (and numpy's complex128, which
behaves identically); this module only adds coercion, the exact-zero test
used by division, and the display convention re±|im|i.
"""

import math

import numpy as np


def as_complex(value) -> complex:
    """Coerce an int, float, numpy scalar or complex into a Python complex."""
    if isinstance(value, np.ndarray):
        if value.size != 1:
            raise TypeError(f"Cannot convert array of shape {value.shape} to complex")
        value = value.reshape(()).item()
    return complex(value)


def is_zero(value) -> bool:
    z = as_complex(value)
    return z.real == 0.0 and z.imag == 0.0


def _format_part(x: float) -> str:
    if x == 0.0:
        # folds -0.0 into 0
        return "0"
    if math.isfinite(x) and x == int(x) and abs(x) < 1e16:
        return str(int(x))
    return repr(x)


def format_complex(value) -> str:
    """
    Render a complex number as ``re±|im|i``.

    Integral parts print without a fraction, everything else uses the
    shortest repr that round-trips:
        0.7071067811865475+0i, -1+0i, 0+1i, 3-2.5i
    """
    z = as_complex(value)
    sign = "-" if math.copysign(1.0, z.imag) < 0 and z.imag != 0.0 else "+"
    return f"{_format_part(z.real)}{sign}{_format_part(abs(z.imag))}i"
