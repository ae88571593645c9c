from __future__ import annotations

import numpy as np
import pytest

from ellipsomesh.resolution import TessellationResolution
from ellipsomesh.validation import MAX_VERTICES, InvalidResolutionError


def test_defaults():
    res = TessellationResolution()
    assert (res.sectors, res.stacks) == (32, 16)
    assert not res.is_degenerate


def test_predicted_counts():
    res = TessellationResolution(4, 2)
    assert res.vertex_count == 15
    assert res.triangle_count == 8
    assert res.index_count == 24


def test_single_band_emits_no_triangles():
    assert TessellationResolution(6, 1).triangle_count == 0


def test_accepts_numpy_integers():
    res = TessellationResolution(np.int64(12), np.uint16(6))
    assert res.sectors == 12 and isinstance(res.sectors, int)
    assert res.stacks == 6


@pytest.mark.parametrize("sectors, stacks", [(0, 4), (4, 0), (-3, 4), (4.5, 4), (True, 4), ("8", 4)])
def test_invalid_values(sectors, stacks):
    with pytest.raises(InvalidResolutionError):
        TessellationResolution(sectors, stacks)


def test_vertex_budget():
    with pytest.raises(InvalidResolutionError):
        TessellationResolution(MAX_VERTICES, 1)


def test_degenerate_flags():
    assert TessellationResolution(2, 8).is_degenerate
    assert TessellationResolution(8, 1).is_degenerate
    assert not TessellationResolution(3, 2).is_degenerate
