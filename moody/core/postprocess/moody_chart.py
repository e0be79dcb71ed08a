from __future__ import annotations

import logging
import os
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt

from moody.core.build.config import FrictionConfig
from moody.core.hydraulics.friction import friction_factor
from moody.core.models.grid import DEFAULT_RE, DEFAULT_ROUGHNESS, MoodyGrid

logger = logging.getLogger(__name__)

LINE_STYLES = ["-", "--", "-."]


def build_moody_grid(
    re: Optional[np.ndarray] = None,
    roughness: Optional[np.ndarray] = None,
    *,
    config: Optional[FrictionConfig] = None,
) -> MoodyGrid:
    """
    Evaluate friction_factor on an ij-indexed Re x eps/D mesh, once with
    Colebrook (implicit) and once with Swamee-Jain (explicit).
    """
    re = np.asarray(DEFAULT_RE if re is None else re, dtype=float).ravel()
    roughness = np.asarray(DEFAULT_ROUGHNESS if roughness is None else roughness, dtype=float).ravel()
    cfg = config if config is not None else FrictionConfig()

    RE, ROUGH = np.meshgrid(re, roughness, indexing="ij")

    logger.info("Moody grid: %d Re x %d eps/D", re.size, roughness.size)
    f_implicit = friction_factor(RE, ROUGH, config=cfg, implicit=True)
    f_explicit = friction_factor(RE, ROUGH, config=cfg, implicit=False)

    return MoodyGrid(
        re=re,
        roughness=roughness,
        f_implicit=np.asarray(f_implicit),
        f_explicit=np.asarray(f_explicit),
        meta={
            "solver_method": cfg.solver.method,
            "re_transition": cfg.re_transition,
            "small_laminar": cfg.small_laminar,
            "small_turb": cfg.small_turb,
        },
    )


def plot_moody_chart(
    grid: MoodyGrid,
    *,
    out_png: str,
    title: str = "Moody Diagram",
    show_approx: bool = False,
    dpi: int = 150,
) -> None:
    """
    Diagrama de Moody log-log, una curva por eps/D.

    Curves are drawn from the largest roughness down; colours cycle first and
    the line style changes each time the colour cycle wraps. With show_approx the
    Swamee-Jain curves are overlaid semi-transparent and left out of the legend.
    """
    os.makedirs(os.path.dirname(out_png) or ".", exist_ok=True)

    colors = plt.rcParams["axes.prop_cycle"].by_key().get("color", ["C0"])
    n_rr = grid.roughness.size

    def _style(i: int) -> tuple[str, str]:
        return colors[i % len(colors)], LINE_STYLES[(i // len(colors)) % len(LINE_STYLES)]

    fig, ax = plt.subplots(figsize=(10, 7.5))

    handles = [None] * n_rr
    for i in range(n_rr - 1, -1, -1):
        color, ls = _style(i)
        (handles[i],) = ax.plot(
            grid.re,
            grid.f_implicit[:, i],
            color=color,
            linestyle=ls,
            label=f"ε/D={grid.roughness[i]:.2g}",
        )

    if show_approx:
        for i in range(n_rr - 1, -1, -1):
            color, ls = _style(i)
            ax.plot(
                grid.re,
                grid.f_explicit[:, i],
                color=color,
                linestyle=ls,
                alpha=0.3,
                label=f"Approx: ε/D={grid.roughness[i]:.2g}",
            )

    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlim(grid.re[0], grid.re[-1])
    ax.set_xlabel(r"Reynolds Number, Re=$\rho Vd/\mu$")
    ax.set_ylabel("Darcy Friction Factor")
    ax.set_title(title)
    ax.grid(True, which="both", ls="--", alpha=0.4)
    ax.legend(handles=handles, loc="lower left")

    fig.tight_layout()
    fig.savefig(out_png, dpi=dpi)
    plt.close(fig)
    logger.info("Moody chart written to %s", out_png)
