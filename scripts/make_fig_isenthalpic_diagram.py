"""Static isenthalpic state diagram for both regimes, side by side.

Output: figures/fig_isenthalpic_diagram_regimes.png

Left panel: energy limited (Ts < Ta), the surface isenthalp is projected to Ta.
Right panel: energy saturated (Ts > Ta), the projection is capped at ea*.

Run from repo root:
    python scripts/make_fig_isenthalpic_diagram.py
"""

from __future__ import annotations

from pathlib import Path
import sys

import matplotlib.pyplot as plt

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from isoflux.diagram import draw_state_diagram
from isoflux.model import ModelInputs, evaluate
from isoflux.plotting import savefig


def main() -> None:
    cases = [
        ("(a) Energy limited", ModelInputs(Ta=25.0, Ts=20.0, RH=60.0, Qn=300.0)),
        ("(b) Energy saturated", ModelInputs(Ta=25.0, Ts=32.0, RH=60.0, Qn=300.0)),
    ]

    fig, axes = plt.subplots(1, 2, figsize=(12.5, 5.0), constrained_layout=True)
    for ax, (label, inputs) in zip(axes, cases):
        state = evaluate(inputs)
        draw_state_diagram(ax, state)
        ax.text(
            0.02,
            0.97,
            f"{label}\n$LE_I$ = {state.LE_I:.1f} W m$^{{-2}}$\n$G_I$ = {state.G_I:.3f} kPa",
            transform=ax.transAxes,
            va="top",
            fontsize=9,
        )

    outpath = ROOT / "figures" / "fig_isenthalpic_diagram_regimes.png"
    savefig(fig, outpath, dpi=220)
    plt.close(fig)
    print(f"[write] {outpath}")


if __name__ == "__main__":
    main()
