"""
diagram.py

Isenthalpic state diagram in temperature / vapor-pressure space.

The diagram shows the saturation curve, the surface state (Ts, es*) with its isenthalp, the air state
(Ta, ea) with its isenthalp, and the isothermal point (Ta, eI) where the surface isenthalp (or the
saturation cap) meets the air temperature. ``draw_state_diagram`` builds the artists once; the
interactive view then moves them with ``update_state_diagram`` on every input change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.lines import Line2D
from matplotlib.text import Text

from .model import ModelState
from .thermo import GAMMA, REGIME_LIMITED, REGIME_SATURATED, isenthalp_vapor_pressure_kpa, saturation_vapor_pressure_kpa

COLORS = {
    "saturation": "#3b82f6",
    "surface": "#ef4444",
    "air": "#64748b",
    "isothermal": "#10b981",
    "reference": "#94a3b8",
    "grid": "#e2e8f0",
    REGIME_LIMITED: "#2563eb",
    REGIME_SATURATED: "#d97706",
}

# Distance (display px) within which a press grabs a state point.
PICK_RADIUS_PX = 15.0

# Length of the saturation "cap" guide drawn in the energy-saturated regime (°C).
CAP_GUIDE_SPAN = 5.0


@dataclass(frozen=True)
class DiagramDomain:
    T_min: float = 0.0
    T_max: float = 40.0
    e_min: float = 0.0
    e_max: float = 8.0        # kPa
    curve_step: float = 0.5   # °C
    isenthalp_half_span: float = 15.0  # °C either side of the anchor
    e_grid: Tuple[float, ...] = (1, 2, 3, 4, 5, 6, 7)
    T_grid: Tuple[float, ...] = (10, 20, 30)
    curve_label_T: float = 35.0


@dataclass
class DiagramArtists:
    ax: plt.Axes
    saturation: Line2D
    surface_isenthalp: Line2D
    air_isenthalp: Line2D
    isotherm: Line2D
    cap: Line2D
    isothermal_point: Line2D
    surface_point: Line2D
    air_point: Line2D
    isothermal_label: Text
    surface_label: Text
    air_label: Text
    title: Text


def saturation_curve(domain: DiagramDomain = DiagramDomain()) -> Tuple[np.ndarray, np.ndarray]:
    """Saturation curve sampled every ``curve_step`` over the temperature domain (endpoints included)."""
    n = int(round((domain.T_max - domain.T_min) / domain.curve_step)) + 1
    T = domain.T_min + domain.curve_step * np.arange(n)
    return T, saturation_vapor_pressure_kpa(T)


def isenthalp_segment(
    T0: float,
    e0: float,
    half_span: float = 15.0,
    gamma: float = GAMMA,
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Endpoints ((T1, T2), (e1, e2)) of the isenthalp through (T0, e0), T0 ± half_span."""
    T1, T2 = T0 - half_span, T0 + half_span
    return (T1, T2), (isenthalp_vapor_pressure_kpa(T1, T0, e0, gamma), isenthalp_vapor_pressure_kpa(T2, T0, e0, gamma))


def cap_segment(state: ModelState, span: float = CAP_GUIDE_SPAN) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Guide from (Ta, ea*) back along the isenthalp slope, showing where e_I is capped."""
    Ta = state.inputs.Ta
    return (Ta, Ta - span), (state.ea_star, state.ea_star + state.gamma * span)


def clamp_to_domain(domain: DiagramDomain, T: float, e: float) -> Tuple[float, float]:
    """Clamp a dragged data position into the plotted domain."""
    T = max(domain.T_min, min(domain.T_max, float(T)))
    e = max(domain.e_min, min(domain.e_max, float(e)))
    return T, e


def regime_badge(state: ModelState) -> Tuple[str, str]:
    """Header text and colour for the current regime."""
    return f"Regime: {state.regime_name}", COLORS[state.regime]


def _style_axes(ax: plt.Axes, domain: DiagramDomain) -> None:
    ax.set_xlim(domain.T_min, domain.T_max)
    ax.set_ylim(domain.e_min, domain.e_max)
    for e in domain.e_grid:
        ax.axhline(e, color=COLORS["grid"], lw=1.0, ls=(0, (4, 4)), zorder=0)
    for T in domain.T_grid:
        ax.axvline(T, color=COLORS["grid"], lw=1.0, ls=(0, (4, 4)), zorder=0)
    ax.set_xlabel("Temperature T (°C)")
    ax.set_ylabel("Vapor Pressure e (kPa)")
    for side in ("top", "right"):
        ax.spines[side].set_visible(False)
    for side in ("left", "bottom"):
        ax.spines[side].set_linewidth(2.0)


def draw_state_diagram(
    ax: plt.Axes,
    state: ModelState,
    domain: DiagramDomain = DiagramDomain(),
) -> DiagramArtists:
    """Draw the full diagram for ``state`` on ``ax`` and return the artists for later updates."""
    _style_axes(ax, domain)

    T_curve, e_curve = saturation_curve(domain)
    (saturation,) = ax.plot(T_curve, e_curve, color=COLORS["saturation"], lw=3.0, zorder=2)
    ax.annotate(
        "Saturation Curve",
        xy=(domain.curve_label_T, saturation_vapor_pressure_kpa(domain.curve_label_T)),
        xytext=(0, 10),
        textcoords="offset points",
        color=COLORS["saturation"],
        fontsize=8,
        fontweight="bold",
        ha="center",
    )

    (surface_isenthalp,) = ax.plot([], [], color=COLORS["surface"], lw=2.0, zorder=3)
    (air_isenthalp,) = ax.plot([], [], color=COLORS["air"], lw=2.0, ls=(0, (5, 5)), zorder=3)
    (isotherm,) = ax.plot([], [], color=COLORS["reference"], lw=1.0, ls=(0, (2, 2)), zorder=1)
    (cap,) = ax.plot([], [], color=COLORS["surface"], lw=1.0, ls=(0, (2, 2)), alpha=0.5, zorder=3)

    (isothermal_point,) = ax.plot(
        [], [], "o", ms=9, mfc="white", mec=COLORS["isothermal"], mew=2.0, zorder=5
    )
    (surface_point,) = ax.plot(
        [], [], "o", ms=10, mfc=COLORS["surface"], mec="white", mew=2.0, zorder=6, picker=True
    )
    (air_point,) = ax.plot(
        [], [], "o", ms=10, mfc=COLORS["air"], mec="white", mew=2.0, zorder=6, picker=True
    )

    label_kw = dict(fontsize=8, fontweight="bold", textcoords="offset points", annotation_clip=False)
    isothermal_label = ax.annotate("eI", xy=(0, 0), xytext=(10, 0), color=COLORS["isothermal"], va="center", **label_kw)
    surface_label = ax.annotate("(Ts, e*s)", xy=(0, 0), xytext=(0, 12), color=COLORS["surface"], ha="center", **label_kw)
    air_label = ax.annotate("(Ta, ea)", xy=(0, 0), xytext=(10, -15), color=COLORS["air"], **label_kw)

    title = ax.set_title("", loc="right", fontsize=9, fontweight="bold")
    ax.set_title("Thermodynamic State Diagram", loc="left", fontsize=11)

    artists = DiagramArtists(
        ax=ax,
        saturation=saturation,
        surface_isenthalp=surface_isenthalp,
        air_isenthalp=air_isenthalp,
        isotherm=isotherm,
        cap=cap,
        isothermal_point=isothermal_point,
        surface_point=surface_point,
        air_point=air_point,
        isothermal_label=isothermal_label,
        surface_label=surface_label,
        air_label=air_label,
        title=title,
    )
    update_state_diagram(artists, state, domain)
    return artists


def update_state_diagram(
    artists: DiagramArtists,
    state: ModelState,
    domain: DiagramDomain = DiagramDomain(),
) -> None:
    """Move every state-dependent artist to match ``state``."""
    Ta, Ts = state.inputs.Ta, state.inputs.Ts

    T_s, e_s = isenthalp_segment(Ts, state.es_star, domain.isenthalp_half_span, state.gamma)
    artists.surface_isenthalp.set_data(T_s, e_s)
    T_a, e_a = isenthalp_segment(Ta, state.ea, domain.isenthalp_half_span, state.gamma)
    artists.air_isenthalp.set_data(T_a, e_a)
    artists.isotherm.set_data([Ta, Ta], [domain.e_min, domain.e_max])

    if state.regime == REGIME_SATURATED:
        artists.cap.set_data(*cap_segment(state))
        artists.cap.set_visible(True)
    else:
        artists.cap.set_visible(False)

    artists.isothermal_point.set_data([Ta], [state.eI])
    artists.surface_point.set_data([Ts], [state.es_star])
    artists.air_point.set_data([Ta], [state.ea])
    artists.isothermal_label.xy = (Ta, state.eI)
    artists.surface_label.xy = (Ts, state.es_star)
    artists.air_label.xy = (Ta, state.ea)

    text, color = regime_badge(state)
    artists.title.set_text(text)
    artists.title.set_color(color)


def hit_test(artists: DiagramArtists, state: ModelState, x_px: float, y_px: float) -> Optional[str]:
    """
    Return "surface" or "air" if the display position (x_px, y_px) lies within PICK_RADIUS_PX of that
    state point, else None. The air point is drawn on top, so it wins ties.
    """
    transform = artists.ax.transData
    points = {
        "air": (state.inputs.Ta, state.ea),
        "surface": (state.inputs.Ts, state.es_star),
    }
    best: Optional[str] = None
    best_d = PICK_RADIUS_PX
    for name, xy in points.items():
        px, py = transform.transform(xy)
        d = float(np.hypot(px - x_px, py - y_px))
        if d <= best_d and (best is None or d < best_d):
            best, best_d = name, d
    return best
