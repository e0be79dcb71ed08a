# moody/core/hydraulics/friction.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from moody.core.build.config import FrictionConfig, resolve_config
from moody.core.build.validate import checked_arrays
from moody.core.hydraulics.smooth import smooth_max, smooth_min
from moody.core.solver.colebrook import solve_colebrook_array

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrictionComponents:
    re: np.ndarray
    roughness: np.ndarray          # eps/D
    f_turbulent: np.ndarray        # Swamee-Jain o Colebrook
    f_laminar: np.ndarray          # 64/Re
    transition: np.ndarray         # 0 = laminar, 1 = turbulento (suavizado)
    f: np.ndarray                  # Darcy f mezclado
    meta: Dict[str, object]


def swamee_jain_f(re, roughness=0.0):
    """
    Swamee–Jain (turbulento), explícito:
    f = 0.25 / [log10( eps/(3.7D) + 5.74/Re^0.9 )]^2
    """
    re = np.asarray(re, dtype=float)
    roughness = np.asarray(roughness, dtype=float)
    term = roughness / 3.7 + 5.74 / re**0.9
    return 0.25 / np.log10(term) ** 2


def laminar_f(re):
    """Hagen-Poiseuille: f = 64/Re."""
    return 64.0 / np.asarray(re, dtype=float)


def transition_factor(re, re_transition=(2000.0, 4000.0), small_laminar: float = 0.1, small_turb: float = 0.4):
    """
    Fracción turbulenta t en la banda de transición, acotada suavemente a ~[0, 1].

    t = (Re - low) / (high - low), then smooth_max(0, smooth_min(1, t, small_turb), small_laminar)
    """
    low, high = re_transition
    t = (np.asarray(re, dtype=float) - low) / (high - low)
    return smooth_max(0.0, smooth_min(1.0, t, small_turb), small_laminar)


def friction_components(
    re,
    roughness=0.0,
    *,
    config: Optional[FrictionConfig] = None,
    **overrides: Any,
) -> FrictionComponents:
    """
    Evaluate the laminar and turbulent estimates and their smooth blend.

    Inputs are validated first (ValidationError, no partial results). With
    implicit=True every non-NaN element is refined with Colebrook starting from
    Swamee-Jain; NaN in Re or eps/D propagates to NaN in the same position.
    """
    cfg = resolve_config(config, **overrides)
    re, roughness, _ = checked_arrays(re, roughness)
    return _blend(re, roughness, cfg)


def _blend(re: np.ndarray, roughness: np.ndarray, cfg: FrictionConfig) -> FrictionComponents:
    # re / roughness ya validados
    re, roughness = np.broadcast_arrays(re, roughness)

    f_turb = swamee_jain_f(re, roughness)
    if cfg.implicit:
        logger.debug("friction: implicit Colebrook on %d element(s)", re.size)
        f_turb = solve_colebrook_array(re, roughness, f_turb, cfg.solver)
    else:
        logger.debug("friction: explicit Swamee-Jain on %d element(s)", re.size)

    f_lam = laminar_f(re)
    t = transition_factor(
        re,
        re_transition=cfg.re_transition,
        small_laminar=cfg.small_laminar,
        small_turb=cfg.small_turb,
    )
    f = (1.0 - t) * f_lam + t * f_turb

    return FrictionComponents(
        re=re,
        roughness=roughness,
        f_turbulent=f_turb,
        f_laminar=f_lam,
        transition=t,
        f=f,
        meta={
            "method": "Colebrook (implicit)" if cfg.implicit else "Swamee-Jain (explicit)",
            "solver_method": cfg.solver.method if cfg.implicit else None,
            "re_transition": cfg.re_transition,
            "small_laminar": cfg.small_laminar,
            "small_turb": cfg.small_turb,
        },
    )


def friction_factor(
    re,
    roughness=0.0,
    l_qd=1.0,
    *,
    config: Optional[FrictionConfig] = None,
    **overrides: Any,
):
    """
    Factor de fricción Darcy (o factor k si se da L/D).

    f = friction_factor(re)                   tubo liso
    f = friction_factor(re, roughness)        con rugosidad relativa eps/D
    k = friction_factor(re, roughness, l_qd)  k = f * L/D

    Options are taken from `config` (FrictionConfig) and may be overridden one
    by one: implicit, solver, re_transition, small_laminar, small_turb.
    Arrays broadcast like numpy; a scalar call returns a numpy scalar.
    """
    cfg = resolve_config(config, **overrides)
    re, roughness, l_qd = checked_arrays(re, roughness, l_qd)

    comp = _blend(re, roughness, cfg)
    out = comp.f * l_qd
    return out[()]
