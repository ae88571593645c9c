from __future__ import annotations

import importlib.util
from pathlib import Path

from ellipsomesh.mesh import MeshBuffers, analyze_mesh


def _load_build(model_path: Path):
    spec = importlib.util.spec_from_file_location("ellipsomesh_example", model_path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.build


def test_ellipsoid_example_builds(project_root: Path):
    build = _load_build(project_root / "docs/examples/primitives/ellipsoid_example.py")
    mesh = build()
    assert isinstance(mesh, MeshBuffers)
    assert mesh.n_vertices == 25 * 49
    assert analyze_mesh(mesh).is_watertight
