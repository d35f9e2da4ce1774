"""
thermo.py

Thermodynamic helper functions for the isothermal flux framework.

The core is three closed-form relations: saturation vapor pressure (Tetens/Magnus, FAO-56 style),
the isothermal vapor pressure obtained by projecting the surface state along its isenthalp to the
air temperature, and the isothermal latent heat flux LE_I (Eq. 9). Everything is stateless and cheap,
so callers simply re-evaluate on every input change.

Units: temperatures in °C, vapor pressures in kPa, energy fluxes in W m-2.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Tuple, Union

import numpy as np

ArrayLike = Union[float, np.ndarray]

# -----------------------
# Constants
# -----------------------
GAMMA = 0.066    # kPa °C-1, psychrometric constant near standard pressure
EPSILON = 0.622  # Ratio molecular weight water vapor / dry air
CP_AIR = 1004.0  # J kg-1 K-1
LV0 = 2.501e6    # J kg-1 (latent heat at 0C)

TETENS_A = 0.6108  # kPa
TETENS_B = 17.27
TETENS_C = 237.3   # °C

REGIME_LIMITED = "limited"
REGIME_SATURATED = "saturated"

SECONDS_PER_DAY = 86400.0


@dataclass(frozen=True)
class IsothermalVaporPressure:
    eI: float
    regime: str


def _check_temperature(T_C: ArrayLike) -> None:
    T = np.asarray(T_C, dtype=float)
    if not np.all(np.isfinite(T)):
        raise ValueError("Temperature must be finite.")
    if np.any(T <= -TETENS_C):
        raise ValueError(f"Temperature must be above {-TETENS_C} °C for the Tetens equation.")


def saturation_vapor_pressure_kpa(T_C: ArrayLike) -> ArrayLike:
    """
    Saturation vapor pressure e*(T) (kPa) using the Tetens equation:
    e* = 0.6108 * exp(17.27*T / (T + 237.3))

    Works on scalars (returns float) and numpy arrays (returns array).
    """
    _check_temperature(T_C)
    if np.ndim(T_C) == 0:
        T = float(T_C)
        return TETENS_A * math.exp(TETENS_B * T / (TETENS_C + T))
    T = np.asarray(T_C, dtype=float)
    return TETENS_A * np.exp(TETENS_B * T / (TETENS_C + T))


def latent_heat_vaporization(T_C: float) -> float:
    """
    Latent heat of vaporization λ(T), J kg-1:
    λ ≈ 2.501e6 - 2.361e3 * T(°C)
    """
    return 2.501e6 - 2.361e3 * T_C


def psychrometric_constant_kpa_per_C(p_kpa: float, lambda_J_kg: float = LV0) -> float:
    """
    Psychrometric constant γ (kPa/°C):
    γ = cp * p / (ε * λ)

    At p = 101.3 kPa this gives ≈ 0.065, close to the fixed GAMMA used by default.
    """
    if p_kpa <= 0:
        raise ValueError(f"Pressure must be positive, got {p_kpa!r} kPa.")
    return CP_AIR * (p_kpa * 1000.0) / (EPSILON * lambda_J_kg) / 1000.0  # convert Pa->kPa


def regime_for(Ts: float, Ta: float) -> str:
    """Energy limited when the surface is not warmer than the air, energy saturated otherwise."""
    return REGIME_LIMITED if Ts <= Ta else REGIME_SATURATED


def isenthalp_vapor_pressure_kpa(T_C: ArrayLike, T0_C: float, e0_kpa: float, gamma: float = GAMMA) -> ArrayLike:
    """Vapor pressure along the isenthalp through (T0, e0): e = e0 - γ (T - T0)."""
    if np.ndim(T_C) == 0:
        return e0_kpa - gamma * (float(T_C) - T0_C)
    return e0_kpa - gamma * (np.asarray(T_C, dtype=float) - T0_C)


def isothermal_vapor_pressure_kpa(Ts: float, Ta: float, gamma: float = GAMMA) -> IsothermalVaporPressure:
    """
    Isothermal vapor pressure e_I (Eqs. 3-4).

    The surface state (Ts, es*) is projected along its isenthalp to T = Ta:
        e = es* - γ (Ta - Ts)

    Energy limited (Ts <= Ta): e_I is the projected value.
    Energy saturated (Ts > Ta): the projection would be supersaturated, so e_I = ea*.
    """
    es_star = saturation_vapor_pressure_kpa(Ts)
    if regime_for(Ts, Ta) == REGIME_LIMITED:
        projected = isenthalp_vapor_pressure_kpa(Ta, Ts, es_star, gamma)
        return IsothermalVaporPressure(eI=float(projected), regime=REGIME_LIMITED)
    ea_star = saturation_vapor_pressure_kpa(Ta)
    return IsothermalVaporPressure(eI=float(ea_star), regime=REGIME_SATURATED)


def lei_denominator(ea: float, es_star: float, Ts: float, Ta: float, gamma: float = GAMMA) -> float:
    """Denominator of Eq. 9: (es* - ea) - γ (Ta - Ts)."""
    return (es_star - ea) - gamma * (Ta - Ts)


def isothermal_latent_heat_flux(
    Qn: float,
    eI: float,
    ea: float,
    es_star: float,
    Ts: float,
    Ta: float,
    gamma: float = GAMMA,
) -> float:
    """
    Isothermal latent heat flux LE_I (W m-2), Eq. 9:

        LE_I = Qn                                        Ts <= Ta
        LE_I = Qn (ea* - ea) / [(es* - ea) - γ(Ta - Ts)]  Ts >  Ta

    A zero denominator returns 0. ``eI`` is part of the signature for symmetry with the
    diagram quantities; the closed form does not need it.
    """
    denominator = lei_denominator(ea, es_star, Ts, Ta, gamma)
    if denominator == 0:
        return 0.0

    if regime_for(Ts, Ta) == REGIME_LIMITED:
        return float(Qn)
    ea_star = saturation_vapor_pressure_kpa(Ta)
    return float(Qn * ((ea_star - ea) / denominator))


def actual_vapor_pressure_kpa(Ta: float, RH: float) -> float:
    """Actual vapor pressure ea (kPa) from air temperature and relative humidity (%)."""
    if RH < 0:
        raise ValueError(f"Relative humidity must be non-negative, got {RH!r}.")
    return saturation_vapor_pressure_kpa(Ta) * (RH / 100.0)


def relative_humidity_pct(Ta: float, ea: float, bounds: Tuple[float, float] = (0.0, 100.0)) -> float:
    """
    Inverse of actual_vapor_pressure_kpa. The result is clamped to ``bounds``; supersaturation
    is physically possible but the UI keeps RH in [0, 100].
    """
    RH = ea / saturation_vapor_pressure_kpa(Ta) * 100.0
    return clamp(RH, bounds[0], bounds[1])


def evaporation_mm_per_day(LE_W_m2: float, T_C: float) -> float:
    """
    Equivalent evaporation depth (mm day-1) for a latent heat flux at temperature T.

    Returns 0 where the linear latent heat fit is not positive (T above ~1059 °C).
    """
    lam = latent_heat_vaporization(T_C)
    if lam <= 0:
        return 0.0
    return LE_W_m2 / lam * SECONDS_PER_DAY


def clamp(x: float, xmin: float, xmax: float) -> float:
    return max(xmin, min(xmax, x))
