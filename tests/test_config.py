"""
Unit tests for isoflux/config.py – CLI > env > default resolution.
"""
import argparse

import pytest

from isoflux.config import add_model_arguments, resolve_config
from isoflux.thermo import GAMMA, psychrometric_constant_kpa_per_C


def _args(*argv):
    p = argparse.ArgumentParser()
    add_model_arguments(p)
    return p.parse_args(list(argv))


class TestResolveConfig:

    def test_defaults(self, clean_env):
        cfg = resolve_config(_args())
        assert (cfg.inputs.Ta, cfg.inputs.Ts, cfg.inputs.RH, cfg.inputs.Qn) == (25.0, 20.0, 60.0, 300.0)
        assert cfg.gamma == GAMMA
        assert cfg.gamma_source == "default"
        assert cfg.overrides == []

    def test_no_args_namespace(self, clean_env):
        assert resolve_config().inputs.Ta == 25.0

    def test_env_overrides(self, clean_env):
        clean_env.setenv("ISOFLUX_TS", "31.5")
        clean_env.setenv("ISOFLUX_QN", "500")
        cfg = resolve_config(_args())
        assert cfg.inputs.Ts == 31.5
        assert cfg.inputs.Qn == 500.0
        assert ("Ts", 31.5, "env") in cfg.overrides

    def test_cli_beats_env(self, clean_env):
        clean_env.setenv("ISOFLUX_TA", "10")
        cfg = resolve_config(_args("--Ta", "12"))
        assert cfg.inputs.Ta == 12.0

    def test_pressure_derives_gamma(self, clean_env):
        cfg = resolve_config(_args("--p_kpa", "80"))
        assert cfg.gamma == pytest.approx(psychrometric_constant_kpa_per_C(80.0))
        assert cfg.gamma_source.startswith("p_kpa")

    def test_explicit_gamma_beats_pressure(self, clean_env):
        clean_env.setenv("ISOFLUX_P_KPA", "80")
        cfg = resolve_config(_args("--gamma", "0.07"))
        assert cfg.gamma == 0.07
        assert cfg.gamma_source == "cli"

    def test_cli_pressure_beats_env_gamma(self, clean_env):
        clean_env.setenv("ISOFLUX_GAMMA", "0.06")
        cfg = resolve_config(_args("--p_kpa", "80"))
        assert cfg.gamma == pytest.approx(psychrometric_constant_kpa_per_C(80.0))
        assert cfg.gamma_source == "p_kpa=80 (cli)"

    def test_env_gamma_beats_env_pressure(self, clean_env):
        clean_env.setenv("ISOFLUX_GAMMA", "0.06")
        clean_env.setenv("ISOFLUX_P_KPA", "80")
        cfg = resolve_config(_args())
        assert cfg.gamma == 0.06
        assert cfg.p_kpa == 80.0

    def test_env_gamma(self, clean_env):
        clean_env.setenv("ISOFLUX_GAMMA", "0.06")
        cfg = resolve_config(_args())
        assert cfg.gamma == 0.06
        assert cfg.gamma_source == "env"

    def test_bad_env_value(self, clean_env):
        clean_env.setenv("ISOFLUX_RH", "humid")
        with pytest.raises(ValueError, match="ISOFLUX_RH"):
            resolve_config(_args())

    def test_non_finite_env_value(self, clean_env):
        clean_env.setenv("ISOFLUX_TA", "nan")
        with pytest.raises(ValueError, match="finite"):
            resolve_config(_args())

    def test_nonpositive_gamma(self, clean_env):
        with pytest.raises(ValueError, match="gamma"):
            resolve_config(_args("--gamma", "0"))
