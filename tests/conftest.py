from __future__ import annotations

import os
from pathlib import Path

import pytest

from ellipsomesh import _config
from ellipsomesh.modeling.ellipsoid import EllipsoidShape, tessellate

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user config at a throwaway directory."""
    config_dir = tmp_path / ".ellipsomesh"
    monkeypatch.setattr(_config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(_config, "CONFIG_FILE", config_dir / "ellipsomesh.cfg")
    return config_dir


@pytest.fixture
def oblate():
    return tessellate(EllipsoidShape(2.0, 1.0, 0.5), (24, 12))
