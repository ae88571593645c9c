from __future__ import annotations

import numpy as np


def unit_rows(vectors: np.ndarray) -> np.ndarray:
    return vectors / np.linalg.norm(vectors, axis=1)[:, np.newaxis]


def grid_directions(sectors: int, stacks: int) -> np.ndarray:
    """Unit-sphere directions in the tessellator's row-major sample order."""
    rows = []
    for i in range(stacks + 1):
        stack_angle = np.pi / 2 - i * np.pi / stacks
        for j in range(sectors + 1):
            sector_angle = j * 2 * np.pi / sectors
            rows.append(
                [
                    np.cos(stack_angle) * np.cos(sector_angle),
                    np.cos(stack_angle) * np.sin(sector_angle),
                    np.sin(stack_angle),
                ]
            )
    return np.asarray(rows, dtype=float)
