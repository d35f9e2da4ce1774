"""
calculator.py

Quick calculator: estimate LE_I for a single data point, or for every row of a table.

Tables are read with pandas and must have the columns Ta, Ts, RH and Qn (same units as the interactive
model). The output keeps the input columns and appends the derived quantities.
"""

from __future__ import annotations

from pathlib import Path
from typing import List
import warnings

import numpy as np
import pandas as pd

from .model import ModelInputs, ModelState, evaluate
from .thermo import GAMMA, lei_denominator

INPUT_COLUMNS = ["Ta", "Ts", "RH", "Qn"]
OUTPUT_COLUMNS = ["ea", "es_star", "ea_star", "eI", "G_I", "regime", "LE_I", "evaporation_mm_day"]


def calculate(Qn: float, Ta: float, Ts: float, RH: float, gamma: float = GAMMA) -> ModelState:
    for name, v in (("Qn", Qn), ("Ta", Ta), ("Ts", Ts), ("RH", RH)):
        if not np.isfinite(v):
            raise ValueError(f"{name} must be finite, got {v!r}")
    return evaluate(ModelInputs(Ta=float(Ta), Ts=float(Ts), RH=float(RH), Qn=float(Qn)), gamma)


def format_result(state: ModelState) -> str:
    """Calculator result block: LE_I to two decimals and the regime with its condition."""
    i = state.inputs
    return "\n".join(
        [
            f"Inputs: Qn={i.Qn:g} W/m²  Ta={i.Ta:g}°C  Ts={i.Ts:g}°C  RH={i.RH:g}%",
            "Result",
            f"  LE_I = {state.LE_I:.2f} W/m²",
            f"  Regime: {state.regime_name} ({state.regime_condition})",
        ]
    )


def format_summary(state: ModelState) -> str:
    """Results panel of the interactive view."""
    return "\n".join(
        [
            f"Regime: {state.regime_name}",
            f"Isothermal Flux (LE_I): {state.LE_I:.1f} W/m²",
            f"Actual Vapor Pressure (e_a): {state.ea:.3f} kPa",
            f"Isothermal VP (e_I): {state.eI:.3f} kPa",
            f"Driving Gradient (G_I): {state.G_I:.3f} kPa",
        ]
    )


def evaluate_table(df: pd.DataFrame, gamma: float = GAMMA) -> pd.DataFrame:
    """Evaluate the model for every row of ``df``."""
    missing: List[str] = [c for c in INPUT_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Input table is missing required columns: {missing}. Got: {list(df.columns)}")

    rows = []
    n_guarded = 0
    for row in df[INPUT_COLUMNS].itertuples(index=False):
        state = calculate(row.Qn, row.Ta, row.Ts, row.RH, gamma)
        if lei_denominator(state.ea, state.es_star, state.inputs.Ts, state.inputs.Ta, gamma) == 0:
            n_guarded += 1
        rows.append({c: getattr(state, c) for c in OUTPUT_COLUMNS})

    if n_guarded:
        warnings.warn(
            f"{n_guarded} row(s) had a zero LE_I denominator; LE_I set to 0 for those rows.",
            RuntimeWarning,
        )

    out = pd.DataFrame(rows, columns=OUTPUT_COLUMNS, index=df.index)
    return pd.concat([df, out], axis=1)


def run_csv(in_path: str | Path, gamma: float = GAMMA) -> pd.DataFrame:
    return evaluate_table(pd.read_csv(in_path), gamma)
