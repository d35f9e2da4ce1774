"""
theory.py

Theoretical basis of the isothermal flux framework (Wu, Liu, et al.), as ordered sections of prose plus
one mathtext equation each. The same content is printed on the terminal and drawn as a figure.
"""

from __future__ import annotations

from dataclasses import dataclass
import textwrap
from typing import List, Optional

import matplotlib.pyplot as plt

from .model import ModelState
from .thermo import REGIME_LIMITED, REGIME_SATURATED


@dataclass(frozen=True)
class TheorySection:
    title: str
    body: str
    equation: str
    label: str
    plain: str  # equation as plain text for the terminal


THEORY_SECTIONS: List[TheorySection] = [
    TheorySection(
        title="1. Enthalpy Conservation",
        body=(
            "The framework treats the surface and near-surface air as a coupled system characterized by "
            "total enthalpy h = cp T + Lv q. Assuming LE and H stay constant along the vertical (constant "
            "flux layer), total enthalpy is conserved, leading to an inverse linear relationship between "
            "temperature and vapor pressure. The thermodynamic state therefore moves along an isenthalp "
            "with slope -γ (the psychrometric constant)."
        ),
        equation=r"$\frac{de}{dT} = -\gamma$",
        label="Isenthalpic Slope",
        plain="de/dT = -γ",
    ),
    TheorySection(
        title="2. Defining Isothermal Flux (LE_I)",
        body=(
            "We seek the latent heat flux at a theoretical state where the surface temperature equilibrates "
            "with the ambient air temperature (Ts = Ta). The driving force at this state is the Isothermal "
            "Vapor Pressure Gradient G_I, where e_I is found by projecting the surface isenthalp "
            "(anchored at Ts, e*s) to the air temperature Ta."
        ),
        equation=r"$G_I = e_I - e_a$",
        label="Driving Force",
        plain="G_I = e_I - e_a",
    ),
    TheorySection(
        title="3. Two Physical Regimes",
        body=(
            "Energy Limited (Ts ≤ Ta): typically at night or on overcast days; the surface warms toward "
            "equilibrium and the projected vapor pressure is physically valid. "
            "Energy Saturated (Ts > Ta): strong solar radiation; the surface cools toward equilibrium and "
            "the projection would be supersaturated, so e_I is capped at saturation."
        ),
        equation=(
            r"$e_I = e^*_s - \gamma(T_a - T_s)\ \ (T_s \leq T_a)$"
            "\n"
            r"$e_I = e^*_a\ \ (T_s > T_a)$"
        ),
        label="Isothermal Vapor Pressure",
        plain="e_I = e*_s - γ(Ta - Ts)   if Ts ≤ Ta\ne_I = e*_a                if Ts > Ta",
    ),
    TheorySection(
        title="4. Final Formulation",
        body=(
            "Combining these regimes with the ratio against the wet-equilibrium reference flux (LE_W) "
            "gives the final expression."
        ),
        equation=(
            r"$LE_I = Q_n\ \ (T_s \leq T_a)$"
            "\n"
            r"$LE_I = Q_n \, \frac{e^*_a - e_a}{(e^*_s - e_a) - \gamma(T_a - T_s)}\ \ (T_s > T_a)$"
        ),
        label="Eq. 9",
        plain=(
            "LE_I = Qn                                       if Ts ≤ Ta\n"
            "LE_I = Qn (e*_a - e_a) / ((e*_s - e_a) - γ(Ta - Ts))   if Ts > Ta"
        ),
    ),
]


def theory_text(width: int = 88) -> str:
    lines = ["Theoretical Framework", "=" * len("Theoretical Framework"), ""]
    for sec in THEORY_SECTIONS:
        lines.append(sec.title)
        lines.append("-" * len(sec.title))
        lines.extend(textwrap.wrap(sec.body, width=width))
        lines.append("")
        lines.append(f"  [{sec.label}]")
        lines.extend("    " + ln for ln in sec.plain.splitlines())
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def physical_interpretation(state: Optional[ModelState] = None) -> str:
    """Explanatory paragraph shown under the diagram; the active regime is marked with '>'."""
    limited = (
        "Energy Limited (Ts ≤ Ta): the surface warms towards equilibrium. "
        "The projected vapor pressure e_I is physically valid."
    )
    saturated = (
        "Energy Saturated (Ts > Ta): the surface cools towards equilibrium. A simple projection would "
        "result in supersaturation (e > e*_a), so e_I is capped at saturation (e*_a)."
    )
    intro = (
        "The red line is the surface isenthalp through (Ts, e*s); the dashed gray line is the air "
        "isenthalp. LE_I is defined where surface temperature equilibrates with air temperature, "
        "found by projecting the surface state along the isenthalp to Ta."
    )
    active = state.regime if state is not None else None
    marks = {
        REGIME_LIMITED: ">" if active == REGIME_LIMITED else "-",
        REGIME_SATURATED: ">" if active == REGIME_SATURATED else "-",
    }
    return "\n".join(
        [
            intro,
            f"{marks[REGIME_LIMITED]} {limited}",
            f"{marks[REGIME_SATURATED]} {saturated}",
        ]
    )


def draw_theory(ax: plt.Axes, width: int = 95) -> None:
    """Render the theory sections into ``ax`` (unit data coordinates) as stacked text + equation blocks."""
    ax.set_axis_off()
    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.0)

    y = 0.97
    ax.text(0.04, y, "Theoretical Framework", fontsize=16, fontweight="bold", va="top")
    y -= 0.07
    for sec in THEORY_SECTIONS:
        ax.text(0.04, y, sec.title, fontsize=11, fontweight="bold", color="#1e293b", va="top")
        y -= 0.035
        body = "\n".join(textwrap.wrap(sec.body, width=width))
        ax.text(0.04, y, body, fontsize=8, color="#475569", va="top")
        y -= 0.026 * (body.count("\n") + 1) + 0.012
        n_eq = sec.equation.count("\n") + 1
        block_h = 0.045 * n_eq + 0.025
        # equation block: indigo rule on the left, label above the equation
        ax.plot([0.05, 0.05], [y, y - block_h], color="#6366f1", lw=3.0, solid_capstyle="butt")
        ax.text(0.06, y, sec.label.upper(), fontsize=7, fontweight="bold", color="#6366f1", va="top")
        ax.text(0.5, y - 0.02, sec.equation, fontsize=11, ha="center", va="top", color="#1e293b")
        y -= block_h + 0.02


def theory_figure(figsize: tuple[float, float] = (8.5, 11.0)) -> plt.Figure:
    fig = plt.figure(figsize=figsize)
    draw_theory(fig.add_axes([0.0, 0.0, 1.0, 1.0]))
    return fig
