"""Ellipsoid primitive demo."""

from __future__ import annotations

from pathlib import Path

from ellipsomesh.io import write_mesh
from ellipsomesh.modeling import EllipsoidMeshBuilder


def build():
    return EllipsoidMeshBuilder.from_axes(1.5, 1.0, 0.6).with_resolution(48, 24).build()


if __name__ == "__main__":
    OUTPUT = Path("dist")
    OUTPUT.mkdir(exist_ok=True)
    mesh = build()
    write_mesh(mesh, OUTPUT / "ellipsoid_example.obj")
    print("Saved ellipsoid_example.obj with", mesh.n_triangles, "triangles")
