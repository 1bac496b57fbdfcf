from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple, Union

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from adapters.excalidraw.repository import FileSystemExcalidrawRepository, build_excalidraw_url
from adapters.filesystem.graph_repository import FileSystemGraphRepository
from adapters.layout.leveled import compute_ranks
from app.config import AppSettings, load_settings
from app.story_tree_wiring import build_story_tree
from domain.errors import StoryTreeError
from domain.models import GraphNode, StoryTreeOptions
from domain.services.convert_scene_to_excalidraw import SceneToExcalidrawConverter
from domain.services.story_tree import NODE_GROUP, StoryTree

app = typer.Typer(no_args_is_help=True)
console = Console()


def _parse_spacing(raw: Optional[str]) -> Optional[Union[float, Tuple[float, float]]]:
    if raw is None:
        return None
    parts = [part.strip() for part in raw.split(",") if part.strip()]
    try:
        values = [float(part) for part in parts]
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid spacing: {raw}") from exc
    if len(values) == 1:
        return values[0]
    if len(values) == 2:
        return values[0], values[1]
    raise typer.BadParameter(f"Spacing takes one value or an x,y pair, got: {raw}")


def _load_graph(graph_path: Path) -> GraphNode:
    if not graph_path.exists():
        console.print(f"[red]File not found:[/] {graph_path}")
        raise typer.Exit(code=1)
    try:
        return FileSystemGraphRepository().load(graph_path)
    except (ValueError, ValidationError) as exc:
        console.print(f"[red]Invalid graph file:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _build_tree(
    graph_path: Path,
    settings: AppSettings,
    width: Optional[float],
    height: Optional[float],
    padding: Optional[str],
    gutter: Optional[str],
) -> StoryTree:
    root = _load_graph(graph_path)
    try:
        options = StoryTreeOptions(
            width=width if width is not None else settings.layout.container_width,
            height=height if height is not None else settings.layout.container_height,
            root=root,
            padding=_parse_spacing(padding),
            gutter=_parse_spacing(gutter),
        )
        return build_story_tree(options, settings)
    except (StoryTreeError, ValidationError) as exc:
        console.print(f"[red]Layout failed:[/] {exc}")
        raise typer.Exit(code=1) from exc


@app.command("layout")
def layout(
    graph_path: Path = typer.Argument(..., help="Graph JSON file."),
    width: Optional[float] = typer.Option(None, help="Container width."),
    height: Optional[float] = typer.Option(None, help="Container height."),
    padding: Optional[str] = typer.Option(None, help="Padding as N or X,Y."),
    gutter: Optional[str] = typer.Option(None, help="Gutter as N or X,Y."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    settings = load_settings(config)
    tree = _build_tree(graph_path, settings, width, height, padding, gutter)

    table = Table(title=f"Layout of {graph_path.name}")
    table.add_column("id")
    table.add_column("rank", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("children")
    for node in tree.plan.nodes:
        table.add_row(
            node.id,
            str(node.rank),
            f"{node.x:.1f}",
            f"{node.y:.1f}",
            ", ".join(node.child_ids),
        )
    console.print(table)

    extent = tree.plan.extent
    console.print(f"Extent: {extent.width:.1f} x {extent.height:.1f}")
    console.print(f"Draggable: {'yes' if tree.draggable else 'no'}")
    scale = tree.controller.scale
    if scale is None:
        console.print("Overview: disabled")
    else:
        console.print(f"Overview: scale {scale:.4f}")


@app.command("render")
def render(
    graph_path: Path = typer.Argument(..., help="Graph JSON file."),
    output: Path = typer.Option(Path("story_tree.excalidraw"), help="Excalidraw scene to write."),
    width: Optional[float] = typer.Option(None, help="Container width."),
    height: Optional[float] = typer.Option(None, help="Container height."),
    padding: Optional[str] = typer.Option(None, help="Padding as N or X,Y."),
    gutter: Optional[str] = typer.Option(None, help="Gutter as N or X,Y."),
    url: bool = typer.Option(False, "--url", help="Also print an Excalidraw share URL."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    settings = load_settings(config)
    tree = _build_tree(graph_path, settings, width, height, padding, gutter)
    document = SceneToExcalidrawConverter().convert(tree.surface.shapes(NODE_GROUP))
    FileSystemExcalidrawRepository().save(document, output)
    console.print(f"[green]Wrote[/] {output}")
    if url:
        console.print(build_excalidraw_url(settings.layout.excalidraw_base_url, document))


@app.command("validate")
def validate(graph_path: Path = typer.Argument(..., help="Graph JSON file to validate.")) -> None:
    root = _load_graph(graph_path)
    try:
        ranked = compute_ranks(root)
    except StoryTreeError as exc:
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Valid graph:[/] {graph_path} ({len(ranked)} unique nodes)")


if __name__ == "__main__":
    app()
