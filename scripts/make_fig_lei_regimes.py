"""Isothermal flux across the regime boundary: LE_I and e_I against surface temperature.

Outputs
-------
figures/fig_lei_regimes.png
outputs/lei_ts_sweep.csv

For fixed Ta and Qn the surface temperature is swept across Ta for several relative humidities.
LE_I equals Qn on the energy-limited side (Ts <= Ta) and falls below Qn on the energy-saturated side.

Run from repo root:
    python scripts/make_fig_lei_regimes.py --Ta 25 --Qn 300 --rh 30 60 90
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from isoflux.model import ModelInputs, regime_boundary, run_ts_sweep
from isoflux.plotting import savefig
from isoflux.thermo import GAMMA


def main() -> None:
    parser = argparse.ArgumentParser(
        description="LE_I and e_I against surface temperature for several humidities.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--Ta", type=float, default=25.0, help="Air temperature (°C).")
    parser.add_argument("--Qn", type=float, default=300.0, help="Available energy (W m-2).")
    parser.add_argument("--rh", type=float, nargs="+", default=[30.0, 60.0, 90.0], help="Relative humidities (%%).")
    parser.add_argument("--ts_min", type=float, default=0.0)
    parser.add_argument("--ts_max", type=float, default=40.0)
    parser.add_argument("--n", type=int, default=161, help="Number of surface temperatures.")
    parser.add_argument("--gamma", type=float, default=GAMMA, help="Psychrometric constant (kPa/°C).")
    args = parser.parse_args()

    fig_dir = ROOT / "figures"
    out_dir = ROOT / "outputs"
    out_dir.mkdir(exist_ok=True)

    Ts_values = np.linspace(args.ts_min, args.ts_max, int(args.n))

    fig, (ax_le, ax_e) = plt.subplots(2, 1, figsize=(7.0, 7.6), sharex=True, constrained_layout=True)
    rows = []
    for k, rh in enumerate(args.rh):
        inputs = ModelInputs(Ta=args.Ta, RH=rh, Qn=args.Qn)
        out = run_ts_sweep(inputs, Ts_values, gamma=args.gamma)
        color = f"C{k}"
        ax_le.plot(out["Ts"], out["LE_I"], color=color, lw=2.2, label=f"RH = {rh:g}%")
        ax_e.plot(out["Ts"], out["eI"], color=color, lw=2.2)

        for i in range(len(Ts_values)):
            rows.append({
                "RH": rh,
                "Ta": args.Ta,
                "Qn": args.Qn,
                "Ts": out["Ts"][i],
                "es_star": out["es_star"][i],
                "eI": out["eI"][i],
                "G_I": out["G_I"][i],
                "LE_I": out["LE_I"][i],
                "regime": "saturated" if out["saturated"][i] else "limited",
            })

    Ta_b, LE_b = regime_boundary(ModelInputs(Ta=args.Ta, Qn=args.Qn), gamma=args.gamma)
    for ax in (ax_le, ax_e):
        ax.axvline(Ta_b, color="k", ls="--", lw=1.0, alpha=0.5)
        ax.grid(True, alpha=0.25)
    ax_le.text(Ta_b - 0.5, LE_b, "energy limited", ha="right", va="bottom", fontsize=9)
    ax_le.text(Ta_b + 0.5, LE_b, "energy saturated", ha="left", va="bottom", fontsize=9)

    ax_le.set_ylabel(r"$LE_I$ (W m$^{-2}$)")
    ax_le.set_ylim(0, args.Qn * 1.1 if args.Qn > 0 else 1.0)
    ax_le.legend(frameon=False, loc="lower left")
    ax_e.set_ylabel(r"$e_I$ (kPa)")
    ax_e.set_xlabel(r"Surface temperature $T_s$ (°C)")

    out_png = savefig(fig, fig_dir / "fig_lei_regimes.png", dpi=220)
    plt.close(fig)
    print(f"[write] {out_png}")

    out_csv = out_dir / "lei_ts_sweep.csv"
    pd.DataFrame(rows).to_csv(out_csv, index=False)
    print(f"[write] {out_csv}")


if __name__ == "__main__":
    main()
