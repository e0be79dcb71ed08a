import logging
import sys
from pathlib import Path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import numpy as np

from moody.core.build.config import FrictionConfig
from moody.core.hydraulics.friction import friction_factor
from moody.core.postprocess.moody_chart import build_moody_grid, plot_moody_chart
from moody.core.postprocess.export import export_friction_table_csv, export_friction_table_excel


logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

# ============================================================
# OUTPUTS
# ============================================================

OUT_PNG = "moody_chart.png"
OUT_PNG_APPROX = "moody_chart_approx.png"
OUT_TABLE_CSV = "friction_factor.csv"
OUT_TABLE_XLSX = "friction_factor.xlsx"

# ============================================================
# 1) Grid (Re x eps/D) en ambos modos
# ============================================================

cfg = FrictionConfig()
grid = build_moody_grid(config=cfg)

print("GRID OK", grid.shape)
print("max |SJ - Colebrook| / Colebrook =", float(np.nanmax(np.abs(grid.rel_diff))))

# ============================================================
# 2) Diagramas
# ============================================================

plot_moody_chart(grid, out_png=OUT_PNG)
plot_moody_chart(grid, out_png=OUT_PNG_APPROX, show_approx=True)
print("PLOTS OK")

# ============================================================
# 3) Tabla f(Re, eps/D)
# ============================================================

export_friction_table_csv(grid, OUT_TABLE_CSV)
export_friction_table_excel(grid, OUT_TABLE_XLSX)
print("EXPORT OK")

# ============================================================
# CHECK: punto de referencia
# ============================================================

f_sj = friction_factor(1e5, 0.001, implicit=False)
f_cb = friction_factor(1e5, 0.001, implicit=True)
print(f"Re=1e5, eps/D=0.001 -> Swamee-Jain f={f_sj:.5f} | Colebrook f={f_cb:.5f}")
