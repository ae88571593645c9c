from __future__ import annotations

import struct
from pathlib import Path

import numpy as np
import pytest

from ellipsomesh import tessellate
from ellipsomesh.io import write_mesh, write_obj, write_stl


def test_binary_stl_layout(tmp_path: Path):
    mesh = tessellate((1.0, 2.0, 3.0), (8, 4))
    path = tmp_path / "ellipsoid.stl"
    write_stl(mesh, path)
    data = path.read_bytes()
    assert len(data) == 80 + 4 + 50 * mesh.n_triangles
    (count,) = struct.unpack("<I", data[80:84])
    assert count == mesh.n_triangles
    first = struct.unpack("<12fH", data[84:134])
    tri = mesh.triangles[0]
    assert np.allclose(first[3:6], mesh.positions[tri[0]], atol=1e-6)


def test_ascii_stl(tmp_path: Path):
    mesh = tessellate((1.0, 1.0, 1.0), (4, 2))
    path = tmp_path / "sphere.stl"
    write_stl(mesh, path, ascii=True)
    text = path.read_text()
    assert text.startswith("solid ellipsoid")
    assert text.count("facet normal") == mesh.n_triangles
    assert text.count("vertex ") == 3 * mesh.n_triangles


def test_obj_records(tmp_path: Path):
    mesh = tessellate((2.0, 1.0, 0.5), (6, 3))
    path = tmp_path / "ellipsoid.obj"
    write_obj(mesh, path)
    lines = path.read_text().splitlines()
    assert lines[0] == "o ellipsoid"
    assert sum(line.startswith("v ") for line in lines) == mesh.n_vertices
    assert sum(line.startswith("vt ") for line in lines) == mesh.n_vertices
    assert sum(line.startswith("vn ") for line in lines) == mesh.n_vertices
    faces = [line for line in lines if line.startswith("f ")]
    assert len(faces) == mesh.n_triangles
    a, b, c = mesh.triangles[0] + 1
    assert faces[0] == f"f {a}/{a}/{a} {b}/{b}/{b} {c}/{c}/{c}"


def test_obj_flips_v(tmp_path: Path):
    mesh = tessellate((1.0, 1.0, 1.0), (4, 2))
    path = tmp_path / "sphere.obj"
    write_obj(mesh, path)
    vts = [line for line in path.read_text().splitlines() if line.startswith("vt ")]
    # First sample sits at the north pole, v = 0 in buffer space.
    assert vts[0] == "vt 0.000000 1.000000"
    assert vts[-1] == "vt 1.000000 0.000000"


def test_write_mesh_dispatches_on_suffix(tmp_path: Path):
    mesh = tessellate((1.0, 1.0, 1.0), (4, 2))
    write_mesh(mesh, tmp_path / "a.OBJ")
    write_mesh(mesh, tmp_path / "b.stl")
    assert (tmp_path / "a.OBJ").read_text().startswith("o a")
    assert (tmp_path / "b.stl").read_bytes()[:11] == b"ellipsomesh"
    with pytest.raises(ValueError):
        write_mesh(mesh, tmp_path / "c.ply")
