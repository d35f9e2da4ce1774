r"""isoflux/cli.py

Command-line entry point for the isothermal flux framework.

Subcommands mirror the tabs of the interactive application:

    isoflux model        # interactive window (default when no subcommand is given)
    isoflux theory       # print the theoretical basis, or --out to save it as a figure
    isoflux calculator   # LE_I for one data point, or --csv for a table of points
    isoflux diagram      # save a static state diagram for the given inputs

Model inputs come from CLI flags > ISOFLUX_* environment variables > defaults (see ``config``).
Use --debug to print the resolved parameters and import paths.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt

from .config import RunConfig, add_model_arguments, resolve_config

COMMANDS = ("model", "theory", "calculator", "diagram")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="isoflux",
        description="Isothermal latent heat flux (LE_I) from the isenthalpic vapor-pressure projection.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    sub = p.add_subparsers(dest="command")

    common = argparse.ArgumentParser(add_help=False)
    add_model_arguments(common)
    common.add_argument("--debug", action="store_true", help="Print resolved parameters and import paths.")

    sub.add_parser("model", parents=[common], help="Open the interactive model window.")

    th = sub.add_parser("theory", parents=[common], help="Show the theoretical basis.")
    th.add_argument("--out", type=str, default=None, help="Save the theory sheet as an image instead of printing.")

    calc = sub.add_parser("calculator", parents=[common], help="Estimate LE_I for a data point or a CSV table.")
    calc.add_argument("--csv", type=str, default=None, help="Input CSV with columns Ta, Ts, RH, Qn.")
    calc.add_argument("--out", type=str, default=None, help="Output CSV for --csv (default: print to stdout).")

    dg = sub.add_parser("diagram", parents=[common], help="Save a static state diagram.")
    dg.add_argument(
        "--out",
        type=str,
        default=None,
        help="Output PNG path. Env: OUT_PNG. Default: figures/isenthalpic_diagram.png",
    )
    dg.add_argument("--dpi", type=int, default=200)
    return p


def _resolve_out(arg: Optional[str], default: Path) -> Path:
    """Output path with CLI > env (OUT_PNG) > default."""
    out = default
    env_out = os.getenv("OUT_PNG")
    if env_out:
        out = Path(env_out)
    if arg is not None:
        out = Path(arg)
    return out


def _debug(cfg: RunConfig, args: argparse.Namespace) -> None:
    from . import model, thermo

    print("COMMAND:", args.command)
    print("PYTHON:", sys.executable)
    print("VERSION:", sys.version.split()[0])
    print("IMPORTED isoflux.thermo:", Path(thermo.__file__).resolve())
    print("IMPORTED isoflux.model:", Path(model.__file__).resolve())
    print("INPUTS:", cfg.inputs)
    print(f"GAMMA: {cfg.gamma:.5f} ({cfg.gamma_source})")
    for attr, val, source in cfg.overrides:
        print(f"OVERRIDE: {attr}={val:g} ({source})")


def cmd_model(cfg: RunConfig, args: argparse.Namespace) -> int:
    from .app import InteractiveModel

    InteractiveModel(cfg.inputs, gamma=cfg.gamma).show()
    return 0


def cmd_theory(cfg: RunConfig, args: argparse.Namespace) -> int:
    from .plotting import savefig
    from .theory import theory_figure, theory_text

    if args.out is None:
        print(theory_text(), end="")
        return 0
    fig = theory_figure()
    path = savefig(fig, args.out, dpi=200)
    plt.close(fig)
    print(f"[write] {path}")
    return 0


def cmd_calculator(cfg: RunConfig, args: argparse.Namespace) -> int:
    from .calculator import calculate, format_result, run_csv

    if args.csv is None:
        i = cfg.inputs
        state = calculate(i.Qn, i.Ta, i.Ts, i.RH, gamma=cfg.gamma)
        print(format_result(state))
        return 0

    df = run_csv(args.csv, gamma=cfg.gamma)
    if args.out is None:
        print(df.to_csv(index=False), end="")
    else:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(out, index=False)
        print(f"[write] {out}")
    return 0


def cmd_diagram(cfg: RunConfig, args: argparse.Namespace) -> int:
    from .calculator import format_summary
    from .diagram import draw_state_diagram
    from .model import evaluate
    from .plotting import make_state_axes, savefig

    state = evaluate(cfg.inputs, cfg.gamma)
    ax = make_state_axes()
    draw_state_diagram(ax, state)
    ax.text(
        0.02,
        0.97,
        format_summary(state),
        transform=ax.transAxes,
        va="top",
        fontsize=7,
        family="monospace",
        bbox=dict(boxstyle="round", fc="white", ec="#e2e8f0"),
    )
    out = _resolve_out(args.out, Path("figures") / "isenthalpic_diagram.png")
    path = savefig(ax.figure, out, dpi=args.dpi)
    plt.close(ax.figure)
    print(f"[write] {path}")
    return 0


HANDLERS = {
    "model": cmd_model,
    "theory": cmd_theory,
    "calculator": cmd_calculator,
    "diagram": cmd_diagram,
}


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    if not argv or argv[0] not in COMMANDS + ("-h", "--help"):
        argv = ["model"] + argv
    args = parser.parse_args(argv)

    try:
        cfg = resolve_config(args)
        if args.debug:
            _debug(cfg, args)
        return HANDLERS[args.command](cfg, args)
    except ValueError as e:
        # invalid inputs (env values, temperatures at the Tetens pole, missing CSV columns)
        parser.error(str(e))


if __name__ == "__main__":
    sys.exit(main())
