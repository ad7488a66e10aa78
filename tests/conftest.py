"""Test configuration ensuring the local package is importable."""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from keyharvest import env_loader  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch):
    """Start each test without KEYHARVEST_* settings and undo .env loading."""

    for variable in [name for name in os.environ if name.startswith("KEYHARVEST_")]:
        monkeypatch.delenv(variable)
    snapshot = dict(os.environ)
    env_loader.reset()
    yield
    env_loader.reset()
    os.environ.clear()
    os.environ.update(snapshot)
