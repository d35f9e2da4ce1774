"""
Tests for the isoflux command line (isoflux/cli.py).
"""
import pandas as pd
import pytest

from isoflux.cli import main


class TestCalculatorCommand:

    def test_single_point_limited(self, clean_env, capsys):
        assert main(["calculator", "--Qn", "300", "--Ta", "25", "--Ts", "20", "--RH", "60"]) == 0
        out = capsys.readouterr().out
        assert "LE_I = 300.00 W/m²" in out
        assert "Energy Limited (Ts ≤ Ta)" in out

    def test_env_drives_regime(self, clean_env, capsys):
        clean_env.setenv("ISOFLUX_TS", "33")
        main(["calculator"])
        assert "Energy Saturated (Ts > Ta)" in capsys.readouterr().out

    def test_bad_env_exits(self, clean_env):
        clean_env.setenv("ISOFLUX_QN", "lots")
        with pytest.raises(SystemExit) as exc:
            main(["calculator"])
        assert exc.value.code == 2

    def test_tetens_pole_exits(self, clean_env):
        with pytest.raises(SystemExit):
            main(["calculator", "--Ta", "-300"])

    def test_air_temperature_where_latent_heat_vanishes(self, clean_env, capsys):
        T_zero = 2.501e6 / 2.361e3
        assert main(["calculator", "--Ta", repr(T_zero), "--Ts", "20", "--RH", "60", "--Qn", "300"]) == 0
        assert "LE_I = 300.00 W/m²" in capsys.readouterr().out

    def test_csv_roundtrip(self, clean_env, tmp_path, capsys):
        src = tmp_path / "in.csv"
        dst = tmp_path / "out" / "result.csv"
        pd.DataFrame({"Ta": [25.0, 25.0], "Ts": [20.0, 30.0], "RH": [60.0, 60.0], "Qn": [300.0, 300.0]}).to_csv(
            src, index=False
        )
        main(["calculator", "--csv", str(src), "--out", str(dst)])
        assert "[write]" in capsys.readouterr().out
        out = pd.read_csv(dst)
        assert out["LE_I"].iloc[0] == pytest.approx(300.0)
        assert 0 < out["LE_I"].iloc[1] < 300.0

    def test_csv_to_stdout(self, clean_env, tmp_path, capsys):
        src = tmp_path / "in.csv"
        pd.DataFrame({"Ta": [25.0], "Ts": [20.0], "RH": [60.0], "Qn": [300.0]}).to_csv(src, index=False)
        main(["calculator", "--csv", str(src)])
        out = capsys.readouterr().out
        assert out.splitlines()[0].startswith("Ta,Ts,RH,Qn,ea")


class TestOtherCommands:

    def test_theory_text(self, clean_env, capsys):
        main(["theory"])
        out = capsys.readouterr().out
        assert "Theoretical Framework" in out
        assert "4. Final Formulation" in out

    def test_theory_figure(self, clean_env, tmp_path):
        path = tmp_path / "theory.png"
        main(["theory", "--out", str(path)])
        assert path.exists() and path.stat().st_size > 0

    def test_diagram(self, clean_env, tmp_path, capsys):
        path = tmp_path / "fig" / "diagram.png"
        main(["diagram", "--Ts", "30", "--out", str(path), "--dpi", "60"])
        assert path.exists()
        assert f"[write] {path}" in capsys.readouterr().out

    def test_diagram_env_out(self, clean_env, tmp_path):
        path = tmp_path / "env.png"
        clean_env.setenv("OUT_PNG", str(path))
        main(["diagram", "--dpi", "60"])
        assert path.exists()

    def test_debug(self, clean_env, capsys):
        main(["calculator", "--debug", "--gamma", "0.07"])
        out = capsys.readouterr().out
        assert "GAMMA: 0.07000 (cli)" in out
        assert "INPUTS:" in out

    def test_default_command_is_model(self, clean_env, monkeypatch):
        calls = []
        monkeypatch.setattr("isoflux.app.InteractiveModel.show", lambda self: calls.append(self.inputs))
        assert main(["--Ta", "30"]) == 0
        assert calls and calls[0].Ta == 30.0
