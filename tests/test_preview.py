from __future__ import annotations

import warnings
from pathlib import Path

import numpy as np
import pytest
from PIL import Image
from pyvista.core.errors import PyVistaDeprecationWarning

from ellipsomesh import tessellate
from ellipsomesh.preview import EllipsoidPreviewer, PreviewBackendError, checker_texture, load_texture_array


def test_load_texture_from_path(tmp_path: Path):
    path = tmp_path / "tex.png"
    Image.fromarray(np.full((4, 8, 3), 128, dtype=np.uint8)).save(path)
    arr = load_texture_array(path)
    assert arr.shape == (4, 8, 4)
    assert arr.dtype == np.uint8


def test_load_texture_from_float_array():
    arr = load_texture_array(np.full((2, 2), 0.5))
    assert arr.shape == (2, 2, 3)
    assert arr.dtype == np.uint8
    assert int(arr[0, 0, 0]) == 127


def test_load_texture_rejects_bad_input(tmp_path: Path):
    with pytest.raises(PreviewBackendError):
        load_texture_array(np.zeros((2, 2, 5)))
    with pytest.raises(PreviewBackendError):
        load_texture_array(tmp_path / "missing.png")
    with pytest.raises(TypeError):
        load_texture_array(42)


def test_checker_texture_pattern():
    tex = checker_texture(size=16, tiles=4)
    assert tex.shape == (16, 16, 3)
    assert tex[0, 0, 0] != tex[0, 4, 0]
    assert tex[0, 0, 0] == tex[4, 4, 0]


@pytest.mark.preview
def test_show_writes_textured_screenshot(tmp_path: Path):
    screenshot = tmp_path / "shots" / "ellipsoid.png"
    previewer = EllipsoidPreviewer(console=None)
    with warnings.catch_warnings():
        warnings.simplefilter("error", PyVistaDeprecationWarning)
        previewer.show(
            tessellate((2.0, 1.0, 0.5), (16, 8)),
            texture=checker_texture(size=64, tiles=4),
            screenshot_path=screenshot,
            show_edges=True,
            show_normals=True,
        )
    assert screenshot.exists()
    with Image.open(screenshot) as shot:
        assert shot.width > 0 and shot.height > 0
