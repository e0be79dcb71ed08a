# moody/core/solver/colebrook.py
from __future__ import annotations

import logging
import math

import numpy as np
from scipy import optimize

from moody.core.build.config import SolverOptions

logger = logging.getLogger(__name__)

_LN10 = math.log(10.0)
_MAX_EXPAND = 60


class SolveError(RuntimeError):
    """Raised when the implicit Colebrook solve does not converge for an element."""
    def __init__(self, re: float, roughness: float, f0: float, flag: str):
        self.re = re
        self.roughness = roughness
        self.f0 = f0
        self.flag = flag
        super().__init__(
            f"Colebrook solve failed for Re={re!r}, eps/D={roughness!r} "
            f"(initial guess f0={f0!r}): {flag}"
        )


def colebrook_residual(f: float, re: float, roughness: float) -> float:
    """
    Colebrook-White en forma de residuo:
        1/sqrt(f) + 2*log10( eps/(3.7D) + 2.51/(Re*sqrt(f)) ) = 0
    """
    rf = np.sqrt(f)
    return 1.0 / rf + 2.0 * np.log10(roughness / 3.7 + 2.51 / (re * rf))


def colebrook_derivative(f: float, re: float, roughness: float) -> float:
    """d(residual)/df, for Newton."""
    rf = np.sqrt(f)
    b = 2.51 / re
    inner = roughness / 3.7 + b / rf
    return -0.5 * f ** -1.5 * (1.0 + (2.0 / _LN10) * b / inner)


def bracket_colebrook(re: float, roughness: float, f0: float, max_expand: int = _MAX_EXPAND):
    """
    Busca un intervalo [lo, hi] con cambio de signo alrededor de f0.

    The residual decreases monotonically in f, so the search doubles (or halves)
    away from f0 on the side where the root must lie. Returns None when no sign
    change is found within max_expand steps (no physical root, e.g. eps/D >= 3.7).
    """
    if not (math.isfinite(f0) and f0 > 0):
        f0 = 0.02
    g0 = colebrook_residual(f0, re, roughness)
    if g0 == 0:
        return f0, f0

    lo = hi = f0
    for _ in range(max_expand):
        if g0 > 0:
            lo, hi = hi, hi * 2.0
            if colebrook_residual(hi, re, roughness) <= 0:
                return lo, hi
        else:
            lo, hi = lo / 2.0, lo
            if colebrook_residual(lo, re, roughness) >= 0:
                return lo, hi
    return None


def solve_colebrook(re: float, roughness: float, f0: float, options: SolverOptions) -> float:
    """
    Resuelve Colebrook para un elemento (scipy.optimize.root_scalar).

    method="auto" grows a bracket around f0 (the Swamee-Jain value) and then
    runs brentq inside it. Newton/secant start at f0; the other bracketing
    methods use options.bracket. A non-converged or non-physical root raises
    SolveError unless options.raise_on_failure is False, in which case NaN is
    returned. Errors raised by scipy itself are not caught.
    """
    re = float(re)
    roughness = float(roughness)
    f0 = float(f0)

    kwargs = dict(
        args=(re, roughness),
        method=options.method,
        xtol=options.xtol,
        rtol=options.rtol,
        maxiter=options.maxiter,
    )
    if options.method == "auto":
        bracket = bracket_colebrook(re, roughness, f0)
        if bracket is None:
            return _failed(re, roughness, f0, "no sign change found around the initial guess", options)
        if bracket[0] == bracket[1]:
            return bracket[0]
        kwargs["method"] = "brentq"
        kwargs["bracket"] = bracket
    elif options.is_bracketing:
        kwargs["bracket"] = options.bracket
    elif options.method == "newton":
        kwargs["x0"] = f0
        kwargs["fprime"] = colebrook_derivative
    else:
        kwargs["x0"] = f0
        kwargs["x1"] = 1.01 * f0

    # newton/secant pueden pisar f < 0 en una iteración; ahí el residuo es NaN
    with np.errstate(invalid="ignore", divide="ignore"):
        sol = optimize.root_scalar(colebrook_residual, **kwargs)

    root = float(sol.root)
    if sol.converged and math.isfinite(root) and root > 0:
        return root

    if not sol.converged:
        flag = f"not converged after {sol.iterations} iterations ({sol.flag})"
    else:
        flag = f"non-physical root f={root!r}"
    return _failed(re, roughness, f0, flag, options)


def _failed(re: float, roughness: float, f0: float, flag: str, options: SolverOptions) -> float:
    if options.raise_on_failure:
        raise SolveError(re, roughness, f0, flag)
    logger.warning("Colebrook solve failed for Re=%g eps/D=%g: %s; element set to NaN", re, roughness, flag)
    return float("nan")


def solve_colebrook_array(re, roughness, f0, options: SolverOptions) -> np.ndarray:
    """
    Elementwise Colebrook over the broadcast shape of (re, roughness, f0).

    Elements where Re or eps/D is NaN are skipped and stay NaN.
    """
    re_b, rr_b, f0_b = np.broadcast_arrays(
        np.asarray(re, dtype=float),
        np.asarray(roughness, dtype=float),
        np.asarray(f0, dtype=float),
    )
    out = np.full(re_b.shape, np.nan, dtype=float)

    skipped = 0
    for idx in np.ndindex(re_b.shape):
        re_i = re_b[idx]
        rr_i = rr_b[idx]
        if np.isnan(re_i) or np.isnan(rr_i):
            skipped += 1
            continue
        out[idx] = solve_colebrook(re_i, rr_i, f0_b[idx], options)

    logger.debug(
        "Colebrook (%s): %d element(s) solved, %d skipped (NaN input)",
        options.method, out.size - skipped, skipped,
    )
    return out
