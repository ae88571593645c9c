from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass
class MeshAnalysis:
    n_vertices: int
    n_welded_vertices: int
    n_faces: int
    degenerate_faces: int
    boundary_edges: int
    nonmanifold_edges: int
    n_edges: int
    invalid_vertices: int

    @property
    def is_manifold(self) -> bool:
        return self.nonmanifold_edges == 0

    @property
    def is_watertight(self) -> bool:
        return self.boundary_edges == 0 and self.is_manifold

    @property
    def has_degenerate_faces(self) -> bool:
        return self.degenerate_faces > 0

    @property
    def has_invalid_vertices(self) -> bool:
        return self.invalid_vertices > 0

    @property
    def euler_characteristic(self) -> int:
        """V - E + F over welded vertices and non-degenerate faces."""
        return self.n_welded_vertices - self.n_edges + (self.n_faces - self.degenerate_faces)

    def issues(self) -> list[str]:
        issues: list[str] = []
        if self.has_invalid_vertices:
            issues.append(f"{self.invalid_vertices} invalid values (NaN/inf)")
        if self.has_degenerate_faces:
            issues.append(f"{self.degenerate_faces} degenerate faces")
        if self.boundary_edges > 0:
            issues.append(f"{self.boundary_edges} boundary edges (not watertight)")
        if self.nonmanifold_edges > 0:
            issues.append(f"{self.nonmanifold_edges} non-manifold edges")
        return issues


def _frozen(array: np.ndarray, dtype, columns: int | None) -> np.ndarray:
    arr = np.array(array, dtype=dtype)
    arr = arr.reshape(-1, columns) if columns is not None else arr.reshape(-1)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class MeshBuffers:
    """Vertex attributes and a flat triangle-list index buffer.

    ``positions``, ``normals`` and ``uvs`` share one ordering: row ``i`` of each
    describes the same grid sample. ``indices`` holds three entries per
    triangle. All arrays are read-only copies; nothing mutates them after
    construction.
    """

    positions: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "positions", _frozen(self.positions, np.float64, 3))
        object.__setattr__(self, "normals", _frozen(self.normals, np.float64, 3))
        object.__setattr__(self, "uvs", _frozen(self.uvs, np.float64, 2))
        object.__setattr__(self, "indices", _frozen(self.indices, np.uint32, None))
        n = self.positions.shape[0]
        if self.normals.shape[0] != n or self.uvs.shape[0] != n:
            raise ValueError("positions, normals and uvs must have the same length.")
        if self.indices.size % 3 != 0:
            raise ValueError("indices length must be a multiple of 3.")
        if self.indices.size and int(self.indices.max()) >= n:
            raise ValueError("indices reference vertices outside the position buffer.")

    @property
    def n_vertices(self) -> int:
        return int(self.positions.shape[0])

    @property
    def n_triangles(self) -> int:
        return int(self.indices.size // 3)

    @property
    def triangles(self) -> np.ndarray:
        return self.indices.reshape(-1, 3)

    @property
    def bounds(self) -> tuple[float, float, float, float, float, float]:
        if self.n_vertices == 0:
            return (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
        mins = self.positions.min(axis=0)
        maxs = self.positions.max(axis=0)
        return (float(mins[0]), float(maxs[0]), float(mins[1]), float(maxs[1]), float(mins[2]), float(maxs[2]))


def face_normals(buffers: MeshBuffers) -> np.ndarray:
    """Unit geometric normals per triangle; zero for degenerate faces."""
    if buffers.n_triangles == 0:
        return np.zeros((0, 3), dtype=float)
    tris = buffers.triangles.astype(np.int64)
    verts = buffers.positions
    v0 = verts[tris[:, 0]]
    v1 = verts[tris[:, 1]]
    v2 = verts[tris[:, 2]]
    normals = np.cross(v1 - v0, v2 - v0)
    lengths = np.linalg.norm(normals, axis=1)
    out = np.zeros_like(normals)
    np.divide(normals, lengths[:, np.newaxis], out=out, where=lengths[:, np.newaxis] > 0)
    return out


_FLAT_AXIS_RATIO = 1e-13


def _unit_box(positions: np.ndarray) -> np.ndarray:
    """Rescale each axis of ``positions`` onto ``[0, 1]`` of its bounding box."""

    pts = np.asarray(positions, dtype=float)
    if pts.shape[0] == 0:
        return pts.reshape(0, 3)
    low = pts.min(axis=0)
    extent = pts.max(axis=0) - low
    # Flat axes, including rounding-noise extents, borrow the largest extent.
    largest = float(extent.max()) if extent.max() > 0 else 1.0
    extent = np.where(extent > largest * _FLAT_AXIS_RATIO, extent, largest)
    return (pts - low) / extent


def weld_vertices(positions: np.ndarray, tolerance: float = 1e-9) -> tuple[np.ndarray, int]:
    """Map every position onto a canonical id shared by coincident samples.

    ``tolerance`` is relative to the bounding box: each axis is quantized in
    steps of ``tolerance`` times its extent, so the result does not depend on
    the mesh's scale. Returns the per-vertex id array and the number of
    distinct ids. The input is not modified.
    """

    if tolerance <= 0:
        raise ValueError("tolerance must be positive.")
    if positions.shape[0] == 0:
        return np.zeros(0, dtype=np.int64), 0
    keys = np.rint(_unit_box(positions) / tolerance).astype(np.int64)
    unique, inverse = np.unique(keys, axis=0, return_inverse=True)
    return inverse.reshape(-1), int(unique.shape[0])


def analyze_mesh(buffers: MeshBuffers, weld_tolerance: float = 1e-9, area_epsilon: float = 1e-12) -> MeshAnalysis:
    """Topology report on the welded surface.

    Seam and pole samples are separate entries in the buffers; they are merged
    here so the report describes the physical surface. Both tolerances apply
    after each axis is rescaled onto the unit bounding box, so a stretched or
    tiny ellipsoid is judged like a unit sphere.
    """

    invalid = int(np.count_nonzero(~np.isfinite(buffers.positions)))
    invalid += int(np.count_nonzero(~np.isfinite(buffers.normals)))
    finite_positions = np.where(np.isfinite(buffers.positions), buffers.positions, 0.0)
    welded, n_welded = weld_vertices(finite_positions, weld_tolerance)

    tris = buffers.triangles.astype(np.int64)
    degenerate = np.zeros(tris.shape[0], dtype=bool)
    if tris.size > 0:
        unit = _unit_box(finite_positions)
        v0 = unit[tris[:, 0]]
        v1 = unit[tris[:, 1]]
        v2 = unit[tris[:, 2]]
        areas = np.linalg.norm(np.cross(v1 - v0, v2 - v0), axis=1) * 0.5
        degenerate = areas <= area_epsilon

    edge_counts: dict[tuple[int, int], int] = {}
    for tri in welded[tris[~degenerate]]:
        a, b, c = (int(v) for v in tri)
        for u, v in ((a, b), (b, c), (c, a)):
            key = (u, v) if u < v else (v, u)
            edge_counts[key] = edge_counts.get(key, 0) + 1

    return MeshAnalysis(
        n_vertices=buffers.n_vertices,
        n_welded_vertices=n_welded,
        n_faces=buffers.n_triangles,
        degenerate_faces=int(np.count_nonzero(degenerate)),
        boundary_edges=sum(1 for count in edge_counts.values() if count == 1),
        nonmanifold_edges=sum(1 for count in edge_counts.values() if count > 2),
        n_edges=len(edge_counts),
        invalid_vertices=invalid,
    )


def mesh_to_pyvista(buffers: MeshBuffers):
    import pyvista as pv

    if buffers.n_triangles == 0:
        poly = pv.PolyData(np.array(buffers.positions), deep=True)
    else:
        tris = buffers.triangles.astype(np.int64)
        faces = np.column_stack([np.full(tris.shape[0], 3, dtype=np.int64), tris]).ravel()
        poly = pv.PolyData(np.array(buffers.positions), faces, deep=True)
    poly.point_data.active_normals = np.array(buffers.normals)
    poly.active_texture_coordinates = np.array(buffers.uvs)
    return poly
