"""ellipsomesh – UV tessellation of axis-aligned ellipsoids."""

from __future__ import annotations

from ellipsomesh.mesh import MeshAnalysis, MeshBuffers, analyze_mesh
from ellipsomesh.modeling.ellipsoid import EllipsoidMeshBuilder, EllipsoidShape, make_ellipsoid, tessellate
from ellipsomesh.resolution import TessellationResolution
from ellipsomesh.validation import InvalidResolutionError, InvalidShapeError, ValidationError

__all__ = [
    "__version__",
    "EllipsoidMeshBuilder",
    "EllipsoidShape",
    "InvalidResolutionError",
    "InvalidShapeError",
    "MeshAnalysis",
    "MeshBuffers",
    "TessellationResolution",
    "ValidationError",
    "analyze_mesh",
    "make_ellipsoid",
    "tessellate",
]

__version__ = "0.1.0"
