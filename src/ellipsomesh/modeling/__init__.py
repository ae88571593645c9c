"""Modeling utilities: ellipsoid shape, tessellation and the mesh builder."""

from __future__ import annotations

from .ellipsoid import EllipsoidMeshBuilder, EllipsoidShape, make_ellipsoid, tessellate

__all__ = [
    "EllipsoidMeshBuilder",
    "EllipsoidShape",
    "make_ellipsoid",
    "tessellate",
]
