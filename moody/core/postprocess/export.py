from __future__ import annotations

import numpy as np
import pandas as pd

from moody.core.models.grid import MoodyGrid


def friction_table(grid: MoodyGrid) -> pd.DataFrame:
    """
    Long-format table of the Moody grid.
    Columns:
      re, roughness, f_implicit, f_explicit, rel_diff
    """
    n_re, n_rr = grid.shape
    return pd.DataFrame({
        "re": grid.re.repeat(n_rr),
        "roughness": np.tile(grid.roughness, n_re),
        "f_implicit": grid.f_implicit.ravel(),
        "f_explicit": grid.f_explicit.ravel(),
        "rel_diff": grid.rel_diff.ravel(),
    })


def export_friction_table_csv(
    grid: MoodyGrid,
    path_csv: str,
) -> None:
    """Export the Moody grid to CSV (one row per Re, eps/D pair)."""
    friction_table(grid).to_csv(path_csv, index=False)


def export_friction_table_excel(
    grid: MoodyGrid,
    path_xlsx: str,
    sheet_name: str = "friction_factor",
) -> None:
    """
    Export the Moody grid to Excel: long table plus a wide sheet
    (rows = Re, columns = eps/D) of the implicit friction factor.
    """
    wide = pd.DataFrame(
        grid.f_implicit,
        index=pd.Index(grid.re, name="re"),
        columns=[f"{rr:.2g}" for rr in grid.roughness],
    )
    with pd.ExcelWriter(path_xlsx, engine="openpyxl") as writer:
        friction_table(grid).to_excel(writer, sheet_name=sheet_name, index=False)
        wide.to_excel(writer, sheet_name=f"{sheet_name}_wide")
