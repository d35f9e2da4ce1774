"""
model.py

Application state for the isothermal flux framework.

ModelInputs holds the four user-controlled quantities (Ta, Ts, RH, Qn). ``evaluate`` derives every
displayed quantity from them in one pass; it is re-run on every slider move or drag and keeps no state
of its own.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import math
from typing import Dict, Tuple
import warnings

import numpy as np

from .thermo import (
    GAMMA,
    REGIME_LIMITED,
    REGIME_SATURATED,
    actual_vapor_pressure_kpa,
    clamp,
    evaporation_mm_per_day,
    isothermal_latent_heat_flux,
    isothermal_vapor_pressure_kpa,
    relative_humidity_pct,
    saturation_vapor_pressure_kpa,
)

REGIME_NAMES = {
    REGIME_LIMITED: "Energy Limited",
    REGIME_SATURATED: "Energy Saturated",
}

REGIME_CONDITIONS = {
    REGIME_LIMITED: "Ts ≤ Ta",
    REGIME_SATURATED: "Ts > Ta",
}


@dataclass(frozen=True)
class SliderRange:
    label: str
    vmin: float
    vmax: float
    step: float
    unit: str


# Control ranges of the interactive view, keyed by ModelInputs field.
SLIDER_RANGES: Dict[str, SliderRange] = {
    "Ta": SliderRange("Air Temperature $T_a$", 0.0, 40.0, 0.5, "°C"),
    "Ts": SliderRange("Surface Temperature $T_s$", 0.0, 40.0, 0.5, "°C"),
    "RH": SliderRange("Relative Humidity RH", 10.0, 100.0, 1.0, "%"),
    "Qn": SliderRange("Available Energy $Q_n$", 0.0, 800.0, 10.0, "W/m²"),
}


@dataclass
class ModelInputs:
    Ta: float = 25.0   # °C
    Ts: float = 20.0   # °C
    RH: float = 60.0   # %
    Qn: float = 300.0  # W m-2 (available energy)


@dataclass(frozen=True)
class ModelState:
    inputs: ModelInputs
    gamma: float
    ea: float        # kPa, actual vapor pressure
    es_star: float   # kPa, saturation at Ts
    ea_star: float   # kPa, saturation at Ta
    eI: float        # kPa, isothermal vapor pressure
    regime: str
    G_I: float       # kPa, isothermal driving gradient eI - ea
    LE_I: float      # W m-2
    evaporation_mm_day: float

    @property
    def regime_name(self) -> str:
        return REGIME_NAMES[self.regime]

    @property
    def regime_condition(self) -> str:
        return REGIME_CONDITIONS[self.regime]


def evaluate(inputs: ModelInputs, gamma: float = GAMMA) -> ModelState:
    """Compute all derived quantities for one set of inputs."""
    Ta, Ts = float(inputs.Ta), float(inputs.Ts)
    ea = actual_vapor_pressure_kpa(Ta, float(inputs.RH))
    es_star = saturation_vapor_pressure_kpa(Ts)
    ea_star = saturation_vapor_pressure_kpa(Ta)
    iso = isothermal_vapor_pressure_kpa(Ts, Ta, gamma)
    LE_I = isothermal_latent_heat_flux(float(inputs.Qn), iso.eI, ea, es_star, Ts, Ta, gamma)
    return ModelState(
        inputs=inputs,
        gamma=gamma,
        ea=ea,
        es_star=es_star,
        ea_star=ea_star,
        eI=iso.eI,
        regime=iso.regime,
        G_I=iso.eI - ea,
        LE_I=LE_I,
        evaporation_mm_day=evaporation_mm_per_day(LE_I, Ta),
    )


def with_surface_temperature(inputs: ModelInputs, Ts: float) -> ModelInputs:
    """Inputs after the surface point has been dragged to temperature Ts."""
    return replace(inputs, Ts=float(Ts))


def with_air_state(inputs: ModelInputs, Ta: float, ea: float) -> ModelInputs:
    """
    Inputs after the air point has been dragged to (Ta, ea).

    RH is recomputed against the new saturation vapor pressure and clamped to [0, 100] so the
    slider state stays valid.
    """
    Ta = float(Ta)
    RH = relative_humidity_pct(Ta, float(ea), bounds=(-math.inf, math.inf))
    if RH > 100.0:
        warnings.warn(
            f"Air state ({Ta:.1f} °C, {float(ea):.2f} kPa) is supersaturated (RH={RH:.0f}%); clamping RH to 100%.",
            RuntimeWarning,
        )
    return replace(inputs, Ta=Ta, RH=clamp(RH, 0.0, 100.0))


def clamp_inputs(inputs: ModelInputs) -> ModelInputs:
    """Clamp every field into its slider range (used when seeding the interactive view)."""
    values = {
        name: clamp(float(getattr(inputs, name)), rng.vmin, rng.vmax)
        for name, rng in SLIDER_RANGES.items()
    }
    return ModelInputs(**values)


def run_ts_sweep(
    inputs: ModelInputs,
    Ts_values: np.ndarray,
    gamma: float = GAMMA,
) -> Dict[str, np.ndarray]:
    """
    Sweep surface temperature across Ts_values holding Ta, RH and Qn fixed, returning arrays of:
      - Ts, es_star, eI, G_I, LE_I
      - saturated (bool, True in the energy-saturated regime)
    """
    Ts_values = np.asarray(Ts_values, dtype=float)

    out = {k: np.zeros_like(Ts_values, dtype=float) for k in ["Ts", "es_star", "eI", "G_I", "LE_I"]}
    out["Ts"] = Ts_values.copy()
    out["saturated"] = np.zeros_like(Ts_values, dtype=bool)

    for i, Ts in enumerate(Ts_values):
        state = evaluate(with_surface_temperature(inputs, float(Ts)), gamma)
        out["es_star"][i] = state.es_star
        out["eI"][i] = state.eI
        out["G_I"][i] = state.G_I
        out["LE_I"][i] = state.LE_I
        out["saturated"][i] = state.regime == REGIME_SATURATED

    return out


def regime_boundary(inputs: ModelInputs, gamma: float = GAMMA) -> Tuple[float, float]:
    """Point on the Ts axis where the regime switches (Ts = Ta) and the flux there."""
    state = evaluate(with_surface_temperature(inputs, inputs.Ta), gamma)
    return float(inputs.Ta), state.LE_I
