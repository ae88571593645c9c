from __future__ import annotations

import math
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image
from rich.console import Console

from ellipsomesh.mesh import MeshBuffers, mesh_to_pyvista

TextureSource = Union[str, Path, Image.Image, np.ndarray]


class PreviewBackendError(RuntimeError):
    """Raised when a preview backend cannot run."""


def load_texture_array(texture: TextureSource) -> np.ndarray:
    """Return an ``HxWx3`` or ``HxWx4`` uint8 array suitable for a VTK texture."""

    if isinstance(texture, (str, Path)):
        try:
            with Image.open(texture) as opened:
                img = opened.convert("RGBA")
        except OSError as exc:
            raise PreviewBackendError(f"Unable to read texture image {texture}: {exc}") from exc
        return np.asarray(img, dtype=np.uint8)
    if isinstance(texture, Image.Image):
        return np.asarray(texture.convert("RGBA"), dtype=np.uint8)
    if isinstance(texture, np.ndarray):
        arr = np.asarray(texture)
        if arr.ndim == 2:
            arr = np.repeat(arr[..., np.newaxis], 3, axis=2)
        if arr.ndim != 3 or arr.shape[2] not in {3, 4}:
            raise PreviewBackendError("Texture array must be HxW, HxWx3, or HxWx4.")
        if arr.dtype != np.uint8:
            arr = arr.astype(float)
            if arr.max() <= 1.0:
                arr = arr * 255.0
            arr = np.clip(arr, 0.0, 255.0).astype(np.uint8)
        return arr
    raise TypeError("texture expects a file path, PIL image, or numpy array.")


def checker_texture(size: int = 256, tiles: int = 8) -> np.ndarray:
    """Black/white checkerboard, handy for eyeballing UV distortion and the seam."""

    cell = max(size // tiles, 1)
    idx = np.arange(size) // cell
    board = (idx[:, np.newaxis] + idx[np.newaxis, :]) % 2
    return np.where(board[..., np.newaxis] == 1, 235, 40).astype(np.uint8).repeat(3, axis=2)


class EllipsoidPreviewer:
    """Render tessellated ellipsoids with PyVista."""

    def __init__(self, console: Console | None = None):
        self.console = console
        self._pv = None

    def show(
        self,
        buffers: MeshBuffers,
        texture: TextureSource | None = None,
        screenshot_path: Path | None = None,
        show_edges: bool = False,
        show_normals: bool = False,
    ) -> None:
        pv = self._ensure_backend()
        poly = mesh_to_pyvista(buffers)
        plotter = pv.Plotter(window_size=(1280, 800), off_screen=screenshot_path is not None)
        self._configure_plotter(plotter)

        if texture is not None:
            tex = pv.Texture(load_texture_array(texture))
            plotter.add_mesh(poly, texture=tex, show_edges=show_edges, smooth_shading=True)
        else:
            plotter.add_mesh(poly, color="#6ab0ff", show_edges=show_edges, smooth_shading=True, specular=0.2)

        if show_normals and buffers.n_vertices:
            plotter.add_arrows(
                np.array(buffers.positions),
                np.array(buffers.normals),
                mag=self._arrow_length(buffers),
                color="#fadb5f",
            )

        self._reset_camera(plotter, buffers)

        if screenshot_path is not None:
            screenshot_path.parent.mkdir(parents=True, exist_ok=True)
            plotter.show(title="Ellipsoid Preview", auto_close=True, screenshot=str(screenshot_path))
            plotter.close()
            if self.console is not None:
                self.console.print(f"[green]Saved screenshot to {screenshot_path}[/green]")
            return

        try:
            plotter.show(title="Ellipsoid Preview")
        finally:
            plotter.close()

    # Internal helpers -----------------------------------------------------

    def _ensure_backend(self):
        if self._pv is None:
            try:
                import pyvista as pv
            except ImportError as exc:  # pragma: no cover - runtime dep
                raise PreviewBackendError(
                    "PyVista is required for previewing. Install ellipsomesh with `pip install -e .`."
                ) from exc
            pv.set_plot_theme("document")
            self._pv = pv
        return self._pv

    def _configure_plotter(self, plotter) -> None:
        plotter.set_background("#090c10", top="#1b2333")
        plotter.add_axes(interactive=True)
        plotter.show_bounds(grid="front", color="#5a677d", xtitle="X", ytitle="Y", ztitle="Z")

    @staticmethod
    def _arrow_length(buffers: MeshBuffers) -> float:
        xmin, xmax, ymin, ymax, zmin, zmax = buffers.bounds
        return 0.08 * max(xmax - xmin, ymax - ymin, zmax - zmin, 1e-6)

    def _reset_camera(self, plotter, buffers: MeshBuffers) -> None:
        bounds = buffers.bounds
        x_center = (bounds[0] + bounds[1]) / 2.0
        y_center = (bounds[2] + bounds[3]) / 2.0
        z_center = (bounds[4] + bounds[5]) / 2.0

        diag = math.sqrt(
            (bounds[1] - bounds[0]) ** 2
            + (bounds[3] - bounds[2]) ** 2
            + (bounds[5] - bounds[4]) ** 2
        )
        distance = max(diag, 1.0) * 1.2

        camera_pos = (x_center, y_center + distance, z_center)
        focal_point = (x_center, y_center, z_center)
        view_up = (0.0, 0.0, 1.0)
        plotter.camera_position = [camera_pos, focal_point, view_up]
