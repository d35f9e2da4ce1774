"""
config.py

Resolution of model inputs and constants from CLI flags, environment variables and defaults.

Priority (highest first):
    CLI flags:     --Ta 25 --Ts 30 --RH 60 --Qn 300 --gamma 0.066 --p_kpa 101.3
    Env vars:      ISOFLUX_TA ISOFLUX_TS ISOFLUX_RH ISOFLUX_QN ISOFLUX_GAMMA ISOFLUX_P_KPA
    Defaults:      ModelInputs() and thermo.GAMMA

Within one source an explicit gamma wins over one derived from pressure, so the gamma order is
--gamma > --p_kpa > ISOFLUX_GAMMA > ISOFLUX_P_KPA > thermo.GAMMA.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
import math
import os
from typing import Dict, List, Optional, Tuple

from .model import ModelInputs
from .thermo import GAMMA, psychrometric_constant_kpa_per_C

ENV_PREFIX = "ISOFLUX_"

# ModelInputs field -> env suffix
INPUT_ENV = {
    "Ta": "TA",
    "Ts": "TS",
    "RH": "RH",
    "Qn": "QN",
}


@dataclass
class RunConfig:
    inputs: ModelInputs = field(default_factory=ModelInputs)
    gamma: float = GAMMA
    p_kpa: Optional[float] = None
    gamma_source: str = "default"
    overrides: List[Tuple[str, float, str]] = field(default_factory=list)


def _env_float(name: str) -> Optional[float]:
    """Return env var as float, or None if not set."""
    v = os.getenv(name)
    if v is None or v == "":
        return None
    try:
        x = float(v)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be a float, got {v!r}") from e
    if not math.isfinite(x):
        raise ValueError(f"Environment variable {name} must be finite, got {v!r}")
    return x


def add_model_arguments(p: argparse.ArgumentParser) -> None:
    """Register the shared model-input flags on a (sub)parser."""
    p.add_argument("--Ta", type=float, default=None, help="Air temperature (°C). Env: ISOFLUX_TA")
    p.add_argument("--Ts", type=float, default=None, help="Surface temperature (°C). Env: ISOFLUX_TS")
    p.add_argument("--RH", type=float, default=None, help="Relative humidity (%%). Env: ISOFLUX_RH")
    p.add_argument("--Qn", type=float, default=None, help="Available energy (W m-2). Env: ISOFLUX_QN")
    p.add_argument(
        "--gamma",
        type=float,
        default=None,
        help=f"Psychrometric constant (kPa/°C), default {GAMMA}. Env: ISOFLUX_GAMMA",
    )
    p.add_argument(
        "--p_kpa",
        type=float,
        default=None,
        help="Station pressure (kPa); derives gamma when --gamma is not given. Env: ISOFLUX_P_KPA",
    )


def resolve_config(args: Optional[argparse.Namespace] = None) -> RunConfig:
    """Build a RunConfig from defaults, then env vars, then CLI values."""
    cfg = RunConfig()
    cli: Dict[str, Optional[float]] = {}
    if args is not None:
        cli = {k: getattr(args, k, None) for k in list(INPUT_ENV) + ["gamma", "p_kpa"]}

    for attr, suffix in INPUT_ENV.items():
        val = _env_float(ENV_PREFIX + suffix)
        if val is not None:
            cfg.overrides.append((attr, val, "env"))
        if cli.get(attr) is not None:
            cfg.overrides.append((attr, float(cli[attr]), "cli"))

    for attr, val, _source in cfg.overrides:
        if not math.isfinite(val):
            raise ValueError(f"{attr} must be finite, got {val!r}")
        setattr(cfg.inputs, attr, float(val))

    # gamma sources, strongest first: --gamma, --p_kpa, ISOFLUX_GAMMA, ISOFLUX_P_KPA, default
    env_p_kpa = _env_float(ENV_PREFIX + "P_KPA")
    cli_p_kpa = cli.get("p_kpa")
    p_kpa = float(cli_p_kpa) if cli_p_kpa is not None else env_p_kpa

    env_gamma = _env_float(ENV_PREFIX + "GAMMA")
    if cli.get("gamma") is not None:
        gamma, gamma_source = float(cli["gamma"]), "cli"
    elif cli_p_kpa is not None:
        gamma, gamma_source = psychrometric_constant_kpa_per_C(p_kpa), f"p_kpa={p_kpa:g} (cli)"
    elif env_gamma is not None:
        gamma, gamma_source = env_gamma, "env"
    elif env_p_kpa is not None:
        gamma, gamma_source = psychrometric_constant_kpa_per_C(p_kpa), f"p_kpa={p_kpa:g} (env)"
    else:
        gamma, gamma_source = GAMMA, "default"
    if gamma <= 0 or not math.isfinite(gamma):
        raise ValueError(f"gamma must be a positive finite number, got {gamma!r}")

    cfg.gamma = float(gamma)
    cfg.p_kpa = p_kpa
    cfg.gamma_source = gamma_source
    return cfg
