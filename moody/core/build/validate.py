from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class ValidationIssue:
    argument: str           # "re" | "roughness" | "l_qd"
    message: str
    hint: Optional[str] = None


class ValidationError(ValueError):
    """Raised when one or more friction-factor arguments are out of domain."""
    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        lines = ["Friction factor input validation failed:"]
        for it in issues:
            lines.append(f"- {it.argument}: {it.message}" + (f" | hint: {it.hint}" if it.hint else ""))
        super().__init__("\n".join(lines))


def _as_float_array(value, name: str, issues: List[ValidationIssue]) -> Optional[np.ndarray]:
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError):
        issues.append(ValidationIssue(name, f"is not numeric: {value!r}"))
        return None
    return arr


def _count_bad(mask: np.ndarray) -> int:
    return int(np.count_nonzero(mask))


def validate_inputs(re, roughness=0.0, l_qd=1.0) -> List[ValidationIssue]:
    """
    Check friction-factor arguments.

    - re: every element must be finite and > 0, or NaN
    - roughness: every element must be finite and >= 0, or NaN (0 = hydraulically smooth)
    - l_qd: every element must be > 0 (NaN is rejected)
    - the three arguments must broadcast together

    Returns a list of issues; an empty list means the call may proceed.
    """
    issues: List[ValidationIssue] = []

    re_arr = _as_float_array(re, "re", issues)
    rr_arr = _as_float_array(roughness, "roughness", issues)
    lqd_arr = _as_float_array(l_qd, "l_qd", issues)

    if re_arr is not None:
        bad = ~(((re_arr > 0) & np.isfinite(re_arr)) | np.isnan(re_arr))
        if bad.any():
            issues.append(ValidationIssue(
                "re",
                f"must be positive and finite, or NaN ({_count_bad(bad)} invalid value(s), e.g. {float(re_arr[bad].flat[0])})",
                "Reynolds number is strictly positive; use NaN to mark missing points.",
            ))

    if rr_arr is not None:
        bad = ~(((rr_arr >= 0) & np.isfinite(rr_arr)) | np.isnan(rr_arr))
        if bad.any():
            issues.append(ValidationIssue(
                "roughness",
                f"must be non-negative and finite, or NaN ({_count_bad(bad)} invalid value(s), e.g. {float(rr_arr[bad].flat[0])})",
                "Relative roughness eps/D is 0 for a smooth pipe.",
            ))

    if lqd_arr is not None:
        bad = ~(lqd_arr > 0)
        if bad.any():
            issues.append(ValidationIssue(
                "l_qd",
                f"must be positive ({_count_bad(bad)} invalid value(s), e.g. {float(lqd_arr[bad].flat[0])})",
            ))

    if re_arr is not None and rr_arr is not None and lqd_arr is not None:
        try:
            np.broadcast_shapes(re_arr.shape, rr_arr.shape, lqd_arr.shape)
        except ValueError:
            issues.append(ValidationIssue(
                "re/roughness/l_qd",
                f"shapes {re_arr.shape}, {rr_arr.shape}, {lqd_arr.shape} do not broadcast",
            ))

    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    if issues:
        raise ValidationError(issues)


def checked_arrays(re, roughness=0.0, l_qd=1.0) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Validate and return (re, roughness, l_qd) as float arrays; raises ValidationError."""
    raise_on_errors(validate_inputs(re, roughness, l_qd))
    return (
        np.asarray(re, dtype=float),
        np.asarray(roughness, dtype=float),
        np.asarray(l_qd, dtype=float),
    )
