from __future__ import annotations

import warnings
from dataclasses import dataclass

from ellipsomesh.validation import validate_division, validate_vertex_budget

DEFAULT_SECTORS = 32
DEFAULT_STACKS = 16
MIN_VISUAL_SECTORS = 3
MIN_VISUAL_STACKS = 2


@dataclass(frozen=True)
class TessellationResolution:
    """Longitude (sectors) and latitude (stacks) divisions of the UV grid."""

    sectors: int = DEFAULT_SECTORS
    stacks: int = DEFAULT_STACKS

    def __post_init__(self) -> None:
        sectors = validate_division("sectors", self.sectors)
        stacks = validate_division("stacks", self.stacks)
        validate_vertex_budget(sectors, stacks)
        object.__setattr__(self, "sectors", sectors)
        object.__setattr__(self, "stacks", stacks)

    @property
    def is_degenerate(self) -> bool:
        return self.sectors < MIN_VISUAL_SECTORS or self.stacks < MIN_VISUAL_STACKS

    @property
    def vertex_count(self) -> int:
        return (self.stacks + 1) * (self.sectors + 1)

    @property
    def triangle_count(self) -> int:
        # Interior bands carry two triangles per cell, the two polar bands one.
        # A single band is polar at both ends and emits nothing.
        return self.sectors * (2 * self.stacks - 2)

    @property
    def index_count(self) -> int:
        return 3 * self.triangle_count


def warn_degenerate_resolution(resolution: TessellationResolution) -> None:
    if not resolution.is_degenerate:
        return
    warnings.warn(
        f"Resolution {resolution.sectors} sectors x {resolution.stacks} stacks is below "
        f"{MIN_VISUAL_SECTORS}x{MIN_VISUAL_STACKS}; the mesh will be visually degenerate.",
        RuntimeWarning,
        stacklevel=3,
    )
