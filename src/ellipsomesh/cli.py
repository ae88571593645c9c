from __future__ import annotations

import pathlib

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ellipsomesh._config import get_resolution_settings
from ellipsomesh.io import write_mesh
from ellipsomesh.mesh import MeshBuffers, analyze_mesh
from ellipsomesh.modeling.ellipsoid import EllipsoidShape, tessellate
from ellipsomesh.preview import EllipsoidPreviewer, PreviewBackendError, checker_texture
from ellipsomesh.resolution import TessellationResolution
from ellipsomesh.validation import ValidationError

console = Console()
app = typer.Typer(help="Tessellate axis-aligned ellipsoids into render-ready triangle meshes.")

SECTORS_HELP = "Longitude divisions. Defaults to the value in ~/.ellipsomesh/ellipsomesh.cfg."
STACKS_HELP = "Latitude divisions. Defaults to the value in ~/.ellipsomesh/ellipsomesh.cfg."


def _resolve_resolution(sectors: int | None, stacks: int | None) -> TessellationResolution:
    if sectors is not None and stacks is not None:
        return TessellationResolution(sectors=sectors, stacks=stacks)
    configured = get_resolution_settings()
    return TessellationResolution(
        sectors=configured.sectors if sectors is None else sectors,
        stacks=configured.stacks if stacks is None else stacks,
    )


def _tessellate_or_fail(a: float, b: float, c: float, sectors: int | None, stacks: int | None) -> MeshBuffers:
    try:
        shape = EllipsoidShape(a, b, c)
        resolution = _resolve_resolution(sectors, stacks)
        return tessellate(shape, resolution)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _log_mesh_summary(buffers: MeshBuffers, a: float, b: float, c: float) -> None:
    console.print(
        f"[magenta]Ellipsoid ({a:g}, {b:g}, {c:g}): "
        f"{buffers.n_vertices} vertices, {buffers.n_triangles} triangles.[/magenta]"
    )


def _next_available_path(path: pathlib.Path) -> pathlib.Path:
    """Return a non-conflicting path by appending ' (n)' before the suffix."""

    if not path.exists():
        return path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix
    n = 1
    while True:
        candidate = parent / f"{stem} ({n}){suffix}"
        if not candidate.exists():
            return candidate
        n += 1


@app.command()
def info(
    a: float = typer.Argument(..., help="Semi-axis length along X."),
    b: float = typer.Argument(..., help="Semi-axis length along Y."),
    c: float = typer.Argument(..., help="Semi-axis length along Z."),
    sectors: int | None = typer.Option(None, "--sectors", help=SECTORS_HELP),
    stacks: int | None = typer.Option(None, "--stacks", help=STACKS_HELP),
) -> None:
    """
    Tessellate an ellipsoid and report buffer sizes, bounds and topology.
    """

    buffers = _tessellate_or_fail(a, b, c, sectors, stacks)
    analysis = analyze_mesh(buffers)

    table = Table(title="Ellipsoid mesh", show_header=True, header_style="bold cyan")
    table.add_column("Property")
    table.add_column("Value", justify="right")
    table.add_row("Vertices", str(buffers.n_vertices))
    table.add_row("Welded vertices", str(analysis.n_welded_vertices))
    table.add_row("Triangles", str(buffers.n_triangles))
    table.add_row("Indices", str(buffers.indices.size))
    xmin, xmax, ymin, ymax, zmin, zmax = buffers.bounds
    table.add_row("Bounds X", f"{xmin:.6g} .. {xmax:.6g}")
    table.add_row("Bounds Y", f"{ymin:.6g} .. {ymax:.6g}")
    table.add_row("Bounds Z", f"{zmin:.6g} .. {zmax:.6g}")
    table.add_row("Watertight", "yes" if analysis.is_watertight else "no")
    table.add_row("Euler characteristic", str(analysis.euler_characteristic))
    console.print(table)

    issues = analysis.issues()
    if issues:
        console.print(Panel("\n".join(issues), title="Topology issues", border_style="yellow"))


@app.command()
def export(
    a: float = typer.Argument(..., help="Semi-axis length along X."),
    b: float = typer.Argument(..., help="Semi-axis length along Y."),
    c: float = typer.Argument(..., help="Semi-axis length along Z."),
    sectors: int | None = typer.Option(None, "--sectors", help=SECTORS_HELP),
    stacks: int | None = typer.Option(None, "--stacks", help=STACKS_HELP),
    output: pathlib.Path = typer.Option(
        pathlib.Path("ellipsoid.obj"),
        "--output",
        "-o",
        help="Destination file; the suffix (.obj or .stl) picks the format.",
    ),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing file."),
    ascii: bool = typer.Option(False, "--ascii", help="Write ASCII STL instead of binary (STL only)."),
) -> None:
    """
    Tessellate an ellipsoid and save it as OBJ (with normals and UVs) or STL.
    """

    if output.suffix.lower() not in {".obj", ".stl"}:
        raise typer.BadParameter(f"Unsupported output format '{output.suffix}'. Use .obj or .stl.")

    buffers = _tessellate_or_fail(a, b, c, sectors, stacks)
    _log_mesh_summary(buffers, a, b, c)

    final_output = output
    if output.exists() and not overwrite:
        final_output = _next_available_path(output)
        console.print(f"[yellow]Output {output} exists; writing to {final_output} instead.[/yellow]")

    final_output.parent.mkdir(parents=True, exist_ok=True)
    try:
        write_mesh(buffers, final_output, ascii=ascii)
    except OSError as exc:  # pragma: no cover - filesystem failure
        raise typer.BadParameter(f"Failed to write {final_output}: {exc}") from exc

    fmt = final_output.suffix.lower().lstrip(".").upper()
    if fmt == "STL":
        fmt = "ASCII STL" if ascii else "binary STL"
    console.print(
        Panel(
            f"Wrote {fmt} to [green]{final_output}[/green].",
            title="Export complete",
            border_style="green",
        )
    )


@app.command()
def preview(
    a: float = typer.Argument(..., help="Semi-axis length along X."),
    b: float = typer.Argument(..., help="Semi-axis length along Y."),
    c: float = typer.Argument(..., help="Semi-axis length along Z."),
    sectors: int | None = typer.Option(None, "--sectors", help=SECTORS_HELP),
    stacks: int | None = typer.Option(None, "--stacks", help=STACKS_HELP),
    texture: pathlib.Path | None = typer.Option(None, "--texture", help="Image mapped through the UVs."),
    checker: bool = typer.Option(False, "--checker", help="Map a checkerboard to inspect UVs and the seam."),
    screenshot: pathlib.Path | None = typer.Option(
        None, "--screenshot", help="Render off-screen and save a screenshot instead of opening a window."
    ),
    show_edges: bool = typer.Option(False, "--show-edges/--hide-edges", help="Toggle triangle edge rendering."),
    show_normals: bool = typer.Option(False, "--show-normals/--hide-normals", help="Draw vertex normals as arrows."),
) -> None:
    """
    Tessellate an ellipsoid and open an interactive PyVista preview.
    """

    if texture is not None and not texture.exists():
        raise typer.BadParameter(f"Texture path {texture} does not exist.")

    buffers = _tessellate_or_fail(a, b, c, sectors, stacks)
    console.rule("Ellipsoid Preview")
    _log_mesh_summary(buffers, a, b, c)

    source = texture if texture is not None else (checker_texture() if checker else None)
    previewer = EllipsoidPreviewer(console=console)
    try:
        previewer.show(
            buffers,
            texture=source,
            screenshot_path=screenshot,
            show_edges=show_edges,
            show_normals=show_normals,
        )
    except PreviewBackendError as exc:
        raise typer.BadParameter(str(exc)) from exc


if __name__ == "__main__":  # pragma: no cover
    app()
