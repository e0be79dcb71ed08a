from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

import numpy as np


# Malla por defecto del diagrama de Moody
DEFAULT_RE = np.logspace(np.log10(500.0), 8.0, 500)
DEFAULT_ROUGHNESS = np.array([
    0.0, 1e-6, 1e-5, 1e-4, 2e-4, 5e-4,
    0.001, 0.002, 0.005, 0.01, 0.015, 0.02,
    0.03, 0.04, 0.05,
])


@dataclass(frozen=True)
class MoodyGrid:
    """
    Friction factors on a Re x eps/D grid.

    - re: (n_re,) Reynolds numbers (rows)
    - roughness: (n_rr,) relative roughness values (columns)
    - f_implicit / f_explicit: (n_re, n_rr) Darcy f, Colebrook and Swamee-Jain
    """
    re: np.ndarray
    roughness: np.ndarray
    f_implicit: np.ndarray
    f_explicit: np.ndarray
    meta: Dict[str, object] = field(default_factory=dict)

    @property
    def shape(self) -> tuple[int, int]:
        return (int(self.re.size), int(self.roughness.size))

    @property
    def rel_diff(self) -> np.ndarray:
        """(f_explicit - f_implicit) / f_implicit."""
        return (self.f_explicit - self.f_implicit) / self.f_implicit
