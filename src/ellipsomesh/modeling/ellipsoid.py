from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence, Tuple, Union

import numpy as np

from ellipsomesh.cache import LRUCache
from ellipsomesh.mesh import MeshBuffers
from ellipsomesh.resolution import TessellationResolution, warn_degenerate_resolution
from ellipsomesh.validation import InvalidResolutionError, InvalidShapeError, validate_semi_axes

ShapeLike = Union["EllipsoidShape", Sequence[float]]
ResolutionLike = Union[TessellationResolution, Sequence[int]]

_ELLIPSOID_CACHE: LRUCache[Tuple[float, float, float, int, int], MeshBuffers] = LRUCache(max_size=32)


@dataclass(frozen=True)
class EllipsoidShape:
    """Axis-aligned ellipsoid given by its semi-axis lengths along x, y and z."""

    a: float = 0.5
    b: float = 0.5
    c: float = 0.5

    def __post_init__(self) -> None:
        a, b, c = validate_semi_axes(self.a, self.b, self.c)
        object.__setattr__(self, "a", a)
        object.__setattr__(self, "b", b)
        object.__setattr__(self, "c", c)

    @property
    def semi_axes(self) -> np.ndarray:
        return np.array([self.a, self.b, self.c], dtype=float)

    def mesh(self) -> "EllipsoidMeshBuilder":
        return EllipsoidMeshBuilder(shape=self)


def _as_shape(shape: ShapeLike) -> EllipsoidShape:
    if isinstance(shape, EllipsoidShape):
        return shape
    try:
        values = tuple(shape)
    except TypeError as exc:
        raise InvalidShapeError(f"An ellipsoid needs three semi-axes, got {shape!r}.") from exc
    if len(values) != 3:
        raise InvalidShapeError(f"An ellipsoid needs three semi-axes, got {len(values)}.")
    return EllipsoidShape(*values)


def _as_resolution(resolution: ResolutionLike) -> TessellationResolution:
    if isinstance(resolution, TessellationResolution):
        return resolution
    try:
        values = tuple(resolution)
    except TypeError as exc:
        raise InvalidResolutionError(f"A resolution is a (sectors, stacks) pair, got {resolution!r}.") from exc
    if len(values) != 2:
        raise InvalidResolutionError(f"A resolution is a (sectors, stacks) pair, got {len(values)} values.")
    return TessellationResolution(*values)


def _stitch_indices(sectors: int, stacks: int) -> np.ndarray:
    #  k1--k1+1
    #  |  / |
    #  | /  |
    #  k2--k2+1
    rows = np.arange(stacks)[:, np.newaxis]
    cols = np.arange(sectors)[np.newaxis, :]
    k1 = rows * (sectors + 1) + cols
    k2 = k1 + sectors + 1

    upper = np.stack([k1, k2, k1 + 1], axis=-1)
    lower = np.stack([k1 + 1, k2, k2 + 1], axis=-1)
    cells = np.stack([upper, lower], axis=2)  # (stacks, sectors, 2, 3)

    # The north band has no upper triangle, the south band no lower one.
    keep = np.ones((stacks, 1, 2), dtype=bool)
    keep[0, 0, 0] = False
    keep[stacks - 1, 0, 1] = False
    keep = np.broadcast_to(keep, (stacks, sectors, 2))
    return cells[keep].astype(np.uint32).reshape(-1)


def tessellate(shape: ShapeLike, resolution: ResolutionLike) -> MeshBuffers:
    """Sample the ellipsoid on a latitude/longitude grid and triangulate it.

    Rows run from the north pole (``+z``) to the south pole; each row holds
    ``sectors + 1`` samples so the first and last column share an angle but
    carry distinct ``u`` coordinates. Normals are the unit-sphere direction
    scaled by the reciprocal semi-axes and renormalized, which is the surface
    gradient of the ellipsoid rather than its scaled position.

    Raises ``InvalidShapeError`` or ``InvalidResolutionError`` before any
    buffer is allocated.
    """

    shape = _as_shape(shape)
    resolution = _as_resolution(resolution)
    warn_degenerate_resolution(resolution)
    sectors, stacks = resolution.sectors, resolution.stacks

    i = np.arange(stacks + 1, dtype=float)
    j = np.arange(sectors + 1, dtype=float)
    stack_angle = np.pi / 2.0 - i * (np.pi / stacks)
    sector_angle = j * (2.0 * np.pi / sectors)
    phi, theta = np.meshgrid(stack_angle, sector_angle, indexing="ij")

    direction = np.stack(
        [np.cos(phi) * np.cos(theta), np.cos(phi) * np.sin(theta), np.sin(phi)],
        axis=-1,
    ).reshape(-1, 3)

    axes = shape.semi_axes
    positions = direction * axes
    normals = direction / axes
    normals /= np.linalg.norm(normals, axis=1)[:, np.newaxis]

    u, v = np.meshgrid(j / sectors, i / stacks, indexing="xy")
    uvs = np.column_stack([u.ravel(), v.ravel()])

    return MeshBuffers(
        positions=positions,
        normals=normals,
        uvs=uvs,
        indices=_stitch_indices(sectors, stacks),
    )


@dataclass(frozen=True)
class EllipsoidMeshBuilder:
    """Reusable shape + resolution bundle with the usual defaults."""

    shape: EllipsoidShape = field(default_factory=EllipsoidShape)
    resolution: TessellationResolution = field(default_factory=TessellationResolution)

    @classmethod
    def from_axes(cls, a: float, b: float, c: float) -> "EllipsoidMeshBuilder":
        return cls(shape=EllipsoidShape(a, b, c))

    def with_resolution(self, sectors: int, stacks: int) -> "EllipsoidMeshBuilder":
        return replace(self, resolution=TessellationResolution(sectors, stacks))

    def uv(self, sectors: int, stacks: int) -> MeshBuffers:
        """Tessellate with an explicit sector/stack count, ignoring the configured one."""
        return tessellate(self.shape, TessellationResolution(sectors, stacks))

    def build(self) -> MeshBuffers:
        return tessellate(self.shape, self.resolution)


def make_ellipsoid(
    a: float = 0.5,
    b: float = 0.5,
    c: float = 0.5,
    sectors: int = 32,
    stacks: int = 16,
) -> MeshBuffers:
    """UV ellipsoid with semi-axes ``(a, b, c)``; repeated requests share one result."""

    shape = EllipsoidShape(a, b, c)
    resolution = TessellationResolution(sectors, stacks)
    key = (shape.a, shape.b, shape.c, resolution.sectors, resolution.stacks)
    return _ELLIPSOID_CACHE.get_or_create(key, lambda: tessellate(shape, resolution))
