# moody/core/build/config.py
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Literal, Optional, Tuple


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "si", "sí", "y")
    return bool(value)


# ============================================================
# SolverOptions (Colebrook implícito)
# ============================================================

SolverMethod = Literal["auto", "newton", "secant", "brentq", "brenth", "ridder", "bisect", "toms748"]

AUTO_METHODS = ("auto",)
OPEN_METHODS = ("newton", "secant")
BRACKET_METHODS = ("brentq", "brenth", "ridder", "bisect", "toms748")


@dataclass(frozen=True)
class SolverOptions:
    """
    Opciones del root-finder escalar (scipy.optimize.root_scalar).

    - auto (defecto): agranda un intervalo alrededor del valor Swamee-Jain
      hasta encontrar cambio de signo y aplica brentq
    - newton/secant: arrancan del valor Swamee-Jain de cada elemento
    - brentq/brenth/ridder/bisect/toms748: usan `bracket` en f
    """
    method: SolverMethod = "auto"
    xtol: float = 1e-12
    rtol: float = 1e-10
    maxiter: int = 50
    bracket: Tuple[float, float] = (1e-6, 1.0)
    raise_on_failure: bool = True

    @staticmethod
    def from_dict(cfg: Dict[str, Any]) -> "SolverOptions":
        method = str(cfg.get("method", cfg.get("solver_method", "auto"))).strip().lower()
        xtol = cfg.get("xtol", cfg.get("TolX", 1e-12))
        rtol = cfg.get("rtol", 1e-10)
        maxiter = cfg.get("maxiter", cfg.get("MaxIter", 50))
        bracket = cfg.get("bracket", (1e-6, 1.0))
        raise_on_failure = _as_bool(cfg.get("raise_on_failure", cfg.get("strict", True)))

        out = SolverOptions(
            method=method,
            xtol=float(xtol),
            rtol=float(rtol),
            maxiter=int(maxiter),
            bracket=(float(bracket[0]), float(bracket[1])),
            raise_on_failure=raise_on_failure,
        )
        out.validate()
        return out

    def validate(self) -> None:
        if self.method not in AUTO_METHODS + OPEN_METHODS + BRACKET_METHODS:
            raise ValueError(f"SolverOptions.method inválido: {self.method!r}")
        if not (self.xtol > 0):
            raise ValueError(f"SolverOptions.xtol debe ser > 0 (recibido {self.xtol})")
        if not (self.rtol > 0):
            raise ValueError(f"SolverOptions.rtol debe ser > 0 (recibido {self.rtol})")
        if self.maxiter < 1:
            raise ValueError(f"SolverOptions.maxiter debe ser >= 1 (recibido {self.maxiter})")
        lo, hi = self.bracket
        if not (0.0 < lo < hi):
            raise ValueError(f"SolverOptions.bracket debe cumplir 0 < lo < hi (recibido {self.bracket})")

    @property
    def is_bracketing(self) -> bool:
        return self.method in BRACKET_METHODS


# ============================================================
# FrictionConfig (laminar / transición / turbulento)
# ============================================================

@dataclass(frozen=True)
class FrictionConfig:
    """
    Configuración del factor de fricción Darcy.

    implicit=True resuelve Colebrook por elemento (preciso, lento);
    implicit=False usa Swamee-Jain (explícito, rápido).
    re_transition fija la banda laminar -> turbulento; se puede mover para
    forzar un régimen. small_laminar / small_turb son los anchos de suavizado
    en cada borde de la banda.
    """
    implicit: bool = True
    solver: SolverOptions = field(default_factory=SolverOptions)
    re_transition: Tuple[float, float] = (2000.0, 4000.0)
    small_laminar: float = 0.1
    small_turb: float = 0.4

    @staticmethod
    def from_dict(cfg: Dict[str, Any]) -> "FrictionConfig":
        implicit = _as_bool(cfg.get("implicit", True))

        solver_cfg = cfg.get("solver", cfg.get("solver_options", cfg.get("solverOpts")))
        if isinstance(solver_cfg, SolverOptions):
            solver = solver_cfg
        else:
            solver = SolverOptions.from_dict(dict(solver_cfg or {}))

        re_transition = cfg.get("re_transition", cfg.get("reTransition"))
        if re_transition is None:
            re_transition = (
                cfg.get("re_transition_low", 2000.0),
                cfg.get("re_transition_high", 4000.0),
            )
        low, high = re_transition

        small_laminar = cfg.get("small_laminar", cfg.get("smallLaminar", 0.1))
        small_turb = cfg.get("small_turb", cfg.get("smallTurb", 0.4))

        out = FrictionConfig(
            implicit=implicit,
            solver=solver,
            re_transition=(float(low), float(high)),
            small_laminar=float(small_laminar),
            small_turb=float(small_turb),
        )
        out.validate()
        return out

    def validate(self) -> None:
        self.solver.validate()

        low, high = self.re_transition
        if not (math.isfinite(low) and math.isfinite(high)):
            raise ValueError(f"FrictionConfig.re_transition debe ser finito (recibido {self.re_transition})")
        if not (high > low):
            raise ValueError(
                f"FrictionConfig.re_transition requiere low < high (recibido {self.re_transition})"
            )
        if not (self.small_laminar > 0):
            raise ValueError(f"FrictionConfig.small_laminar debe ser > 0 (recibido {self.small_laminar})")
        if not (self.small_turb > 0):
            raise ValueError(f"FrictionConfig.small_turb debe ser > 0 (recibido {self.small_turb})")

    @property
    def re_transition_low(self) -> float:
        return self.re_transition[0]

    @property
    def re_transition_high(self) -> float:
        return self.re_transition[1]


def resolve_config(config: Optional[FrictionConfig] = None, **overrides: Any) -> FrictionConfig:
    """Apply keyword overrides (implicit=..., small_turb=..., ...) on top of a base config."""
    base = config if config is not None else FrictionConfig()
    if not overrides:
        base.validate()
        return base

    unknown = set(overrides) - set(FrictionConfig.__dataclass_fields__)
    if unknown:
        raise TypeError(f"Opciones desconocidas: {sorted(unknown)}")

    if "solver" in overrides and isinstance(overrides["solver"], dict):
        overrides["solver"] = SolverOptions.from_dict(overrides["solver"])
    if "re_transition" in overrides:
        low, high = overrides["re_transition"]
        overrides["re_transition"] = (float(low), float(high))

    out = replace(base, **overrides)
    out.validate()
    return out
