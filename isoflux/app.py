"""
app.py

Interactive matplotlib application with three tabs:

  * Interactive Model: sliders for Ta, Ts, RH and Qn, the isenthalpic state diagram with draggable
    surface (red) and air (gray) points, and the calculated isothermal flux panel.
  * Theoretical Basis: the equation sheet from ``theory``.
  * Calculator: numeric entry boxes sharing the same model inputs.

Every input change re-evaluates the model synchronously and redraws.
"""

from __future__ import annotations

from typing import Dict, Optional
import textwrap

import matplotlib.pyplot as plt
from matplotlib.widgets import RadioButtons, Slider, TextBox

from .calculator import format_result, format_summary
from .diagram import COLORS, DiagramDomain, clamp_to_domain, draw_state_diagram, hit_test, update_state_diagram
from .model import (
    SLIDER_RANGES,
    ModelInputs,
    ModelState,
    clamp_inputs,
    evaluate,
    with_air_state,
    with_surface_temperature,
)
from .theory import draw_theory, physical_interpretation
from .thermo import GAMMA, clamp

TAB_MODEL = "Interactive Model"
TAB_THEORY = "Theoretical Basis"
TAB_CALCULATOR = "Calculator"
TABS = (TAB_MODEL, TAB_THEORY, TAB_CALCULATOR)


class InteractiveModel:
    """Owns the model inputs and every widget that reads or writes them."""

    def __init__(
        self,
        inputs: Optional[ModelInputs] = None,
        gamma: float = GAMMA,
        domain: DiagramDomain = DiagramDomain(),
        figsize: tuple[float, float] = (13.0, 7.8),
    ):
        self.inputs = clamp_inputs(inputs if inputs is not None else ModelInputs())
        self.gamma = gamma
        self.domain = domain
        self.state: ModelState = evaluate(self.inputs, gamma)
        self.active_tab = TAB_MODEL
        self.dragging: Optional[str] = None
        self._syncing = False

        self.fig = plt.figure(figsize=figsize)
        self.fig.suptitle("Isothermal Flux Framework", x=0.02, ha="left", fontsize=15, fontweight="bold")
        self.fig.text(0.02, 0.935, "Based on Wu, Liu, et al.", fontsize=8, color="#64748b")

        self.tab_ax = self.fig.add_axes([0.74, 0.9, 0.24, 0.09])
        self.tabs = RadioButtons(self.tab_ax, TABS, active=0)
        self.tabs.on_clicked(self.select_tab)

        self._build_model_tab()
        self._build_theory_tab()
        self._build_calculator_tab()

        self.fig.canvas.mpl_connect("button_press_event", self.on_press)
        self.fig.canvas.mpl_connect("motion_notify_event", self.on_motion)
        self.fig.canvas.mpl_connect("button_release_event", self.on_release)

        self.select_tab(TAB_MODEL)

    # -----------------------
    # Layout
    # -----------------------
    def _build_model_tab(self) -> None:
        self.sliders: Dict[str, Slider] = {}
        y = 0.78
        for name, rng in SLIDER_RANGES.items():
            ax = self.fig.add_axes([0.1, y, 0.2, 0.03])
            s = Slider(
                ax,
                rng.label,
                rng.vmin,
                rng.vmax,
                valinit=clamp(float(getattr(self.inputs, name)), rng.vmin, rng.vmax),
                valstep=rng.step,
                color="#4f46e5",
            )
            s.label.set_fontsize(8)
            s.on_changed(lambda val, field=name: self.on_slider(field, val))
            self.sliders[name] = s
            y -= 0.07

        self.results_ax = self.fig.add_axes([0.02, 0.08, 0.3, 0.38])
        self.results_ax.set_axis_off()
        self.results_ax.set_title("Calculated Isothermal Flux", loc="left", fontsize=11)
        self.results_text = self.results_ax.text(0.0, 0.95, "", va="top", family="monospace", fontsize=9)

        self.diagram_ax = self.fig.add_axes([0.4, 0.33, 0.57, 0.52])
        self.artists = draw_state_diagram(self.diagram_ax, self.state, self.domain)
        self.hint = self.diagram_ax.text(
            0.98,
            0.97,
            "",
            transform=self.diagram_ax.transAxes,
            ha="right",
            va="top",
            fontsize=8,
            color="white",
            bbox=dict(boxstyle="round", fc="black", alpha=0.75),
            visible=False,
        )

        self.interp_ax = self.fig.add_axes([0.4, 0.02, 0.57, 0.2])
        self.interp_ax.set_axis_off()
        self.interp_text = self.interp_ax.text(0.0, 1.0, "", va="top", fontsize=8, color="#334155")

        self.model_axes = [s.ax for s in self.sliders.values()] + [self.results_ax, self.diagram_ax, self.interp_ax]

    def _build_theory_tab(self) -> None:
        self.theory_ax = self.fig.add_axes([0.1, 0.0, 0.8, 0.88])
        draw_theory(self.theory_ax, width=130)

    def _build_calculator_tab(self) -> None:
        self.calc_boxes: Dict[str, TextBox] = {}
        labels = {
            "Qn": "Available Energy ($Q_n$)",
            "Ta": "Air Temp ($T_a$)",
            "Ts": "Surface Temp ($T_s$)",
            "RH": "Humidity ($RH$)",
        }
        y = 0.72
        for name, label in labels.items():
            ax = self.fig.add_axes([0.45, y, 0.15, 0.05])
            box = TextBox(ax, label + "  ", initial=f"{getattr(self.inputs, name):g}")
            box.on_submit(lambda text, field=name: self.on_calculator_entry(field, text))
            self.calc_boxes[name] = box
            y -= 0.08

        self.calc_result_ax = self.fig.add_axes([0.3, 0.12, 0.45, 0.22])
        self.calc_result_ax.set_axis_off()
        self.calc_result_ax.set_title("Quick Calculator: estimate $LE_I$ for a single data point", loc="left")
        self.calc_result_text = self.calc_result_ax.text(0.0, 0.9, "", va="top", family="monospace", fontsize=11)
        self.calc_axes = [b.ax for b in self.calc_boxes.values()] + [self.calc_result_ax]

    # -----------------------
    # State updates
    # -----------------------
    def set_inputs(self, inputs: ModelInputs) -> None:
        state = evaluate(inputs, self.gamma)
        self.inputs, self.state = inputs, state
        self.refresh()

    def refresh(self) -> None:
        update_state_diagram(self.artists, self.state, self.domain)
        self.results_text.set_text(format_summary(self.state))
        self.results_text.set_color(COLORS[self.state.regime])
        self.interp_text.set_text(
            "\n".join(textwrap.fill(p, 120) for p in physical_interpretation(self.state).splitlines())
        )
        self.calc_result_text.set_text(format_result(self.state))

        self._syncing = True
        try:
            for name, s in self.sliders.items():
                rng = SLIDER_RANGES[name]
                v = clamp(float(getattr(self.inputs, name)), rng.vmin, rng.vmax)
                if s.val != v:
                    s.set_val(v)
            for name, box in self.calc_boxes.items():
                text = f"{getattr(self.inputs, name):g}"
                if box.text != text:
                    box.set_val(text)
        finally:
            self._syncing = False

        if self.dragging == "surface":
            self.hint.set_text(f"Adjusting Surface Temp: {self.inputs.Ts:.1f}°C")
        elif self.dragging == "air":
            self.hint.set_text(f"Adjusting Air State: {self.inputs.Ta:.1f}°C, {self.state.ea:.2f}kPa")
        self.hint.set_visible(self.dragging is not None)
        self.fig.canvas.draw_idle()

    def on_slider(self, field: str, val: float) -> None:
        if self._syncing:
            return
        values = dict(Ta=self.inputs.Ta, Ts=self.inputs.Ts, RH=self.inputs.RH, Qn=self.inputs.Qn)
        values[field] = float(val)
        self.set_inputs(ModelInputs(**values))

    def on_calculator_entry(self, field: str, text: str) -> None:
        if self._syncing:
            return
        try:
            val = float(text)
        except ValueError:
            self.calc_result_text.set_text(f"Error: {field} must be a number, got {text!r}")
            self.fig.canvas.draw_idle()
            return
        values = dict(Ta=self.inputs.Ta, Ts=self.inputs.Ts, RH=self.inputs.RH, Qn=self.inputs.Qn)
        values[field] = val
        try:
            self.set_inputs(ModelInputs(**values))
        except ValueError as e:
            self.calc_result_text.set_text(f"Error: {e}")
            self.fig.canvas.draw_idle()

    def select_tab(self, label: str) -> None:
        if label not in TABS:
            raise ValueError(f"Unknown tab {label!r}; expected one of {TABS}")
        self.active_tab = label
        self.dragging = None
        for ax in self.model_axes:
            ax.set_visible(label == TAB_MODEL)
        self.theory_ax.set_visible(label == TAB_THEORY)
        for ax in self.calc_axes:
            ax.set_visible(label == TAB_CALCULATOR)
        self.refresh()

    # -----------------------
    # Dragging
    # -----------------------
    def on_press(self, event) -> None:
        if self.active_tab != TAB_MODEL or event.button != 1 or event.inaxes is not self.diagram_ax:
            return
        self.dragging = hit_test(self.artists, self.state, event.x, event.y)
        if self.dragging is not None:
            self.refresh()

    def on_motion(self, event) -> None:
        if self.dragging is None:
            return
        # Track the pointer in data space even when it leaves the axes.
        T, e = self.diagram_ax.transData.inverted().transform((event.x, event.y))
        T, e = clamp_to_domain(self.domain, T, e)
        if self.dragging == "surface":
            self.set_inputs(with_surface_temperature(self.inputs, T))
        else:
            self.set_inputs(with_air_state(self.inputs, T, e))

    def on_release(self, event) -> None:
        if self.dragging is None:
            return
        self.dragging = None
        self.refresh()

    def show(self) -> None:
        plt.show()
