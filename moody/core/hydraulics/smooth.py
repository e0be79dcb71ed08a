# moody/core/hydraulics/smooth.py
from __future__ import annotations

import numpy as np


def smooth_step(x, e):
    """
    Aproximación suave del escalón unitario.
    y = 0.5*x/sqrt(x^2 + e^2) + 0.5  (e -> 0 recupera el escalón 0/1)
    """
    x = np.asarray(x, dtype=float)
    return 0.5 * x / np.sqrt(x**2 + np.asarray(e, dtype=float) ** 2) + 0.5


def smooth_min(a, b, e):
    """Smooth approximation of min(a, b); e sets the width of the blend."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    return smooth_step(a - b, e) * b + smooth_step(b - a, e) * a


def smooth_max(a, b, e):
    """Smooth approximation of max(a, b)."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    return smooth_step(a - b, e) * a + smooth_step(b - a, e) * b
