from __future__ import annotations

from pathlib import Path

from ellipsomesh.mesh import MeshBuffers


def write_obj(buffers: MeshBuffers, path: Path, name: str = "ellipsoid") -> None:
    """Write positions, UVs, normals and faces as Wavefront OBJ.

    Attribute arrays share one ordering, so every face corner uses the same
    1-based index for ``v``, ``vt`` and ``vn``. OBJ puts the texture origin at
    the bottom-left, so ``v`` is flipped on the way out.
    """

    path = Path(path)
    lines = [f"o {name}"]
    lines.extend(f"v {x:.6f} {y:.6f} {z:.6f}" for x, y, z in buffers.positions)
    lines.extend(f"vt {u:.6f} {1.0 - v:.6f}" for u, v in buffers.uvs)
    lines.extend(f"vn {x:.6f} {y:.6f} {z:.6f}" for x, y, z in buffers.normals)
    for tri in buffers.triangles:
        a, b, c = (int(i) + 1 for i in tri)
        lines.append(f"f {a}/{a}/{a} {b}/{b}/{b} {c}/{c}/{c}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
