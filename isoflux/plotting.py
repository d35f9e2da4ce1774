"""
plotting.py

Plot helpers shared by the interactive view and the figure scripts.
"""

from __future__ import annotations

import pathlib

import matplotlib.pyplot as plt

def savefig(fig: plt.Figure, path: str | pathlib.Path, dpi: int = 300) -> pathlib.Path:
    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    return path

def make_state_axes(
    title: str = "",
    xlabel: str = "Temperature T (°C)",
    ylabel: str = "Vapor Pressure e (kPa)",
    figsize: tuple[float, float] = (7.5, 5.0),
) -> plt.Axes:
    fig, ax = plt.subplots(figsize=figsize)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    if title:
        ax.set_title(title)
    return ax
