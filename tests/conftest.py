import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every ISOFLUX_* / OUT_PNG variable so defaults apply."""
    for name in list(os.environ):
        if name.startswith("ISOFLUX_") or name == "OUT_PNG":
            monkeypatch.delenv(name, raising=False)
    return monkeypatch
