from __future__ import annotations

from pathlib import Path
import struct

from ellipsomesh.mesh import MeshBuffers, face_normals

STL_HEADER = b"ellipsomesh STL".ljust(80, b"\0")


def write_stl(buffers: MeshBuffers, path: Path, ascii: bool = False, name: str = "ellipsoid") -> None:
    """Write the triangles as STL with flat per-face normals.

    STL has no place for the smooth vertex normals or UVs; use ``write_obj``
    to keep those.
    """

    path = Path(path)
    normals = face_normals(buffers)
    triangles = buffers.triangles
    positions = buffers.positions

    if ascii:
        lines = [f"solid {name}"]
        for idx, tri in enumerate(triangles):
            nx, ny, nz = normals[idx]
            lines.append(f"  facet normal {nx:.6e} {ny:.6e} {nz:.6e}")
            lines.append("    outer loop")
            for vidx in tri:
                vx, vy, vz = positions[vidx]
                lines.append(f"      vertex {vx:.6e} {vy:.6e} {vz:.6e}")
            lines.append("    endloop")
            lines.append("  endfacet")
        lines.append(f"endsolid {name}")
        path.write_text("\n".join(lines) + "\n")
        return

    record = struct.Struct("<12fH")
    with path.open("wb") as handle:
        handle.write(STL_HEADER)
        handle.write(struct.pack("<I", triangles.shape[0]))
        for idx, tri in enumerate(triangles):
            v0 = positions[tri[0]]
            v1 = positions[tri[1]]
            v2 = positions[tri[2]]
            handle.write(record.pack(*normals[idx], *v0, *v1, *v2, 0))
