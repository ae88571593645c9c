"""Mesh file writers."""

from __future__ import annotations

from pathlib import Path

from ellipsomesh.io.obj import write_obj
from ellipsomesh.io.stl import write_stl
from ellipsomesh.mesh import MeshBuffers

__all__ = ["write_mesh", "write_obj", "write_stl"]


def write_mesh(buffers: MeshBuffers, path: Path, ascii: bool = False) -> None:
    """Dispatch on the file suffix (``.obj`` or ``.stl``)."""

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".obj":
        write_obj(buffers, path, name=path.stem or "ellipsoid")
    elif suffix == ".stl":
        write_stl(buffers, path, ascii=ascii)
    else:
        raise ValueError(f"Unsupported mesh format '{path.suffix}'. Use .obj or .stl.")
