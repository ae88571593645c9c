from __future__ import annotations

import math
import operator

import numpy as np

# Largest vertex count addressable by uint32 triangle indices.
MAX_VERTICES = int(np.iinfo(np.uint32).max) + 1


class ValidationError(ValueError):
    """Raised when validation constraints are violated."""


class InvalidShapeError(ValidationError):
    """Raised when an ellipsoid semi-axis is not a strictly positive, finite length."""


class InvalidResolutionError(ValidationError):
    """Raised when a tessellation resolution is not a positive integer pair."""


def validate_semi_axes(a: float, b: float, c: float) -> tuple[float, float, float]:
    axes = []
    for name, value in (("a", a), ("b", b), ("c", c)):
        try:
            length = float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidShapeError(f"Semi-axis {name} must be a number, got {value!r}.") from exc
        if not math.isfinite(length) or length <= 0.0:
            raise InvalidShapeError(f"Semi-axis {name} must be strictly positive and finite, got {value!r}.")
        axes.append(length)
    return axes[0], axes[1], axes[2]


def validate_division(name: str, value: int) -> int:
    if isinstance(value, bool):
        raise InvalidResolutionError(f"{name} must be an integer, got {value!r}.")
    try:
        count = operator.index(value)
    except TypeError as exc:
        raise InvalidResolutionError(f"{name} must be an integer, got {value!r}.") from exc
    if count < 1:
        raise InvalidResolutionError(f"{name} must be at least 1, got {count}.")
    return count


def validate_vertex_budget(sectors: int, stacks: int) -> None:
    n_vertices = (stacks + 1) * (sectors + 1)
    if n_vertices > MAX_VERTICES:
        raise InvalidResolutionError(
            f"Resolution {sectors}x{stacks} needs {n_vertices} vertices; uint32 indices address at most {MAX_VERTICES}."
        )
