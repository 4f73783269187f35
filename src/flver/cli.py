"""CLI entry point for the flver vertex decoder.

Usage:
    flver formats                                   # List attribute format tags
    flver inspect model.flver -v 0x80 -l 0xA0       # Decode one vertex buffer
    flver inspect model.flver -v 0x80 -l 0xA0 --json
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from flver.core.contracts import ByteOrder, DecodeConfig, InspectInput
from flver.core.errors import FlverDecodeError
from flver.core.logging import setup_logging

app = typer.Typer(name="flver", help="FLVER vertex buffer decoder")
console = Console()


def _parse_offset(value: str) -> int:
    return int(value, 0)


@app.command()
def formats() -> None:
    """Show every known attribute format tag and its element geometry."""
    from flver.vertex.accessor import ACCESSOR_SHAPES
    from flver.vertex.formats import VertexAttributeFormat

    table = Table(title="Vertex attribute formats")
    table.add_column("Tag", style="dim")
    table.add_column("Format", style="cyan")
    table.add_column("Datum", style="green")
    table.add_column("Dims", style="green")
    table.add_column("Decoded as", style="yellow")

    for fmt in VertexAttributeFormat:
        if fmt.is_supported:
            datum, dims = str(fmt.datum_size), str(fmt.dimensions)
        else:
            datum = dims = "-"
        shape = ACCESSOR_SHAPES.get(fmt)
        table.add_row(f"0x{int(fmt):02X}", fmt.name, datum, dims, str(shape) if shape else "unsupported")
    console.print(table)


@app.command()
def inspect(
    file_path: Path = typer.Argument(..., help="Container file holding the vertex records"),
    vertex_buffer_offset: str = typer.Option(
        ..., "--vertex-buffer-offset", "-v", help="File offset of the VertexBuffer record (0x.. allowed)"
    ),
    layout_offset: str = typer.Option(
        ..., "--layout-offset", "-l", help="File offset of the VertexBufferLayout record (0x.. allowed)"
    ),
    data_offset: str = typer.Option("0", "--data-offset", "-d", help="Base added to buffer_offset"),
    byte_order: ByteOrder = typer.Option(None, "--byte-order", "-b", help="Override config byte order"),
    preview: int = typer.Option(None, "--preview", "-p", min=0, help="Elements shown per attribute"),
    config: Path = typer.Option(None, "--config", "-c", help="Decode config YAML"),
    as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
) -> None:
    """Decode one vertex buffer and show its attributes."""
    setup_logging(log_level, stream=sys.stderr)
    from flver.core.config import load_config
    from flver.vertex.decode import summarize_vertex_buffer
    from flver.vertex.records import VertexBuffer, VertexBufferLayout

    try:
        request = InspectInput(
            file_path=file_path,
            vertex_buffer_offset=_parse_offset(vertex_buffer_offset),
            layout_offset=_parse_offset(layout_offset),
            data_offset=_parse_offset(data_offset),
        )
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Invalid offsets: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not request.file_path.is_file():
        console.print(f"[red]File not found: {escape(str(request.file_path))}[/red]")
        raise typer.Exit(1)

    overrides = {}
    if byte_order is not None:
        overrides["byte_order"] = byte_order
    if preview is not None:
        overrides["preview_count"] = preview
    try:
        cfg = load_config(config) if config else DecodeConfig()
        cfg = DecodeConfig.model_validate({**cfg.model_dump(), **overrides})
    except (OSError, yaml.YAMLError, ValidationError) as e:
        console.print(f"[red]Invalid config: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    data = request.file_path.read_bytes()
    try:
        vertex_buffer = VertexBuffer(data, cfg.byte_order, request.vertex_buffer_offset)
        layout = VertexBufferLayout(data, cfg.byte_order, request.layout_offset)
        summary = summarize_vertex_buffer(data, vertex_buffer, layout, cfg, request.data_offset)
    except FlverDecodeError as e:
        console.print(f"[red]Decode failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(summary.model_dump_json(indent=2))
        return

    table = Table(
        title=(
            f"Vertex buffer {summary.buffer_index}: {summary.vertex_count} vertices x "
            f"{summary.vertex_size} bytes ({summary.byte_order.value} endian)"
        )
    )
    table.add_column("#", style="dim")
    table.add_column("Semantic", style="cyan")
    table.add_column("Format", style="green")
    table.add_column("Offset", style="yellow")
    table.add_column("Preview", style="dim")

    for attr in summary.attributes:
        table.add_row(
            str(attr.ordinal),
            f"{attr.semantic}{attr.semantic_index}",
            attr.format,
            str(attr.struct_offset),
            "; ".join(_format_element(e) for e in attr.preview) or "-",
        )
    console.print(table)

    for skip in summary.skipped:
        console.print(f"[yellow]Skipped attribute {skip.ordinal}: {escape(skip.reason)}[/yellow]")


def _format_element(element: list[float]) -> str:
    return "(" + ", ".join(f"{v:g}" for v in element) + ")"


if __name__ == "__main__":
    app()
