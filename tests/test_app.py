"""
Tests for isoflux/app.py – the interactive window driven headless on the Agg backend.

Mouse events are simulated with simple namespaces carrying display coordinates, the same fields
matplotlib passes to mpl_connect callbacks.
"""
from types import SimpleNamespace

import pytest

from isoflux.app import TAB_CALCULATOR, TAB_MODEL, TAB_THEORY, InteractiveModel
from isoflux.model import ModelInputs
from isoflux.thermo import saturation_vapor_pressure_kpa


def _event(app, T, e, button=1, inaxes="diagram"):
    x, y = app.diagram_ax.transData.transform((T, e))
    return SimpleNamespace(x=x, y=y, button=button, inaxes=app.diagram_ax if inaxes == "diagram" else inaxes)


@pytest.fixture
def app():
    return InteractiveModel()


# ---------------------------------------------------------------------------
# Initial state and sliders
# ---------------------------------------------------------------------------

class TestInitialState:

    def test_defaults(self, app):
        assert app.inputs == ModelInputs()
        assert app.state.regime == "limited"
        assert app.active_tab == TAB_MODEL

    def test_sliders_seeded(self, app):
        assert {k: s.val for k, s in app.sliders.items()} == {"Ta": 25.0, "Ts": 20.0, "RH": 60.0, "Qn": 300.0}

    def test_results_panel(self, app):
        text = app.results_text.get_text()
        assert "Regime: Energy Limited" in text
        assert "Isothermal Flux (LE_I): 300.0 W/m²" in text

    def test_inputs_clamped_to_slider_ranges(self):
        app = InteractiveModel(ModelInputs(Ta=60.0, RH=0.0))
        assert app.inputs.Ta == 40.0
        assert app.inputs.RH == 10.0


class TestSliders:

    def test_slider_change_reevaluates(self, app):
        app.sliders["Ts"].set_val(30.0)
        assert app.inputs.Ts == 30.0
        assert app.state.regime == "saturated"
        assert "Energy Saturated" in app.results_text.get_text()
        assert app.artists.cap.get_visible()

    def test_slider_updates_calculator_box(self, app):
        app.sliders["Qn"].set_val(450.0)
        assert app.calc_boxes["Qn"].text == "450"


# ---------------------------------------------------------------------------
# Dragging
# ---------------------------------------------------------------------------

class TestDragging:

    def test_surface_drag(self, app):
        app.on_press(_event(app, 20.0, app.state.es_star))
        assert app.dragging == "surface"
        assert app.hint.get_visible()
        app.on_motion(_event(app, 31.0, 1.0))
        assert app.inputs.Ts == pytest.approx(31.0)
        assert app.inputs.Ta == 25.0
        assert app.sliders["Ts"].val == pytest.approx(31.0)
        assert "Adjusting Surface Temp: 31.0°C" == app.hint.get_text()
        app.on_release(_event(app, 31.0, 1.0))
        assert app.dragging is None
        assert not app.hint.get_visible()

    def test_air_drag_updates_temperature_and_humidity(self, app):
        app.on_press(_event(app, 25.0, app.state.ea))
        assert app.dragging == "air"
        app.on_motion(_event(app, 30.0, 2.0))
        assert app.inputs.Ta == pytest.approx(30.0)
        assert app.inputs.RH == pytest.approx(100.0 * 2.0 / saturation_vapor_pressure_kpa(30.0), rel=1e-6)
        assert app.state.ea == pytest.approx(2.0, rel=1e-6)

    def test_drag_clamped_to_domain(self, app):
        app.on_press(_event(app, 20.0, app.state.es_star))
        app.on_motion(_event(app, 55.0, 1.0, inaxes=None))
        assert app.inputs.Ts == pytest.approx(40.0)

    def test_air_drag_above_saturation_clamps_rh(self, app):
        app.on_press(_event(app, 25.0, app.state.ea))
        with pytest.warns(RuntimeWarning):
            app.on_motion(_event(app, 10.0, 6.0))
        assert app.inputs.RH == 100.0

    def test_press_away_from_points(self, app):
        app.on_press(_event(app, 5.0, 7.0))
        assert app.dragging is None
        app.on_motion(_event(app, 30.0, 2.0))
        assert app.inputs == ModelInputs()

    def test_right_button_ignored(self, app):
        app.on_press(_event(app, 20.0, app.state.es_star, button=3))
        assert app.dragging is None

    def test_press_outside_diagram_ignored(self, app):
        app.on_press(_event(app, 20.0, app.state.es_star, inaxes=None))
        assert app.dragging is None

    def test_no_drag_on_other_tabs(self, app):
        app.select_tab(TAB_THEORY)
        app.on_press(_event(app, 20.0, app.state.es_star))
        assert app.dragging is None


# ---------------------------------------------------------------------------
# Tabs and calculator
# ---------------------------------------------------------------------------

class TestTabs:

    def test_visibility(self, app):
        app.select_tab(TAB_THEORY)
        assert app.theory_ax.get_visible()
        assert not app.diagram_ax.get_visible()
        assert not app.calc_result_ax.get_visible()
        app.select_tab(TAB_CALCULATOR)
        assert app.calc_result_ax.get_visible()
        assert not app.theory_ax.get_visible()
        app.select_tab(TAB_MODEL)
        assert app.diagram_ax.get_visible()

    def test_radio_buttons_switch_tab(self, app):
        app.tabs.set_active(2)
        assert app.active_tab == TAB_CALCULATOR

    def test_unknown_tab(self, app):
        with pytest.raises(ValueError):
            app.select_tab("Settings")

    def test_render_each_tab(self, app):
        for tab in (TAB_MODEL, TAB_THEORY, TAB_CALCULATOR):
            app.select_tab(tab)
            app.fig.canvas.draw()


class TestCalculatorTab:

    def test_entry_updates_shared_state(self, app):
        app.on_calculator_entry("Ts", "33")
        assert app.inputs.Ts == 33.0
        assert app.sliders["Ts"].val == 33.0
        assert "Energy Saturated (Ts > Ta)" in app.calc_result_text.get_text()

    def test_entry_outside_slider_range(self, app):
        app.on_calculator_entry("Qn", "1200")
        assert app.inputs.Qn == 1200.0
        assert "LE_I = 1200.00 W/m²" in app.calc_result_text.get_text()
        assert app.sliders["Qn"].val == 800.0

    def test_invalid_entry(self, app):
        app.on_calculator_entry("RH", "wet")
        assert app.inputs == ModelInputs()
        assert "Error" in app.calc_result_text.get_text()

    def test_entry_at_tetens_pole(self, app):
        app.on_calculator_entry("Ta", "-300")
        assert "Error" in app.calc_result_text.get_text()
