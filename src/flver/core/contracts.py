"""Common Pydantic models shared by the decoder, the CLI and config files."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class ByteOrder(str, Enum):
    """Byte order of every multi-byte integer and float in a container."""

    LITTLE = "little"
    BIG = "big"

    @property
    def prefix(self) -> str:
        """numpy/struct byte-order character."""
        return "<" if self is ByteOrder.LITTLE else ">"


class DecodeConfig(BaseModel):
    """Knobs for decoding one vertex buffer, loadable from YAML."""

    byte_order: ByteOrder = Field(ByteOrder.LITTLE, description="Byte order of the container")
    preview_count: int = Field(5, ge=0, description="Elements per attribute shown in summaries")
    skip_unsupported: bool = Field(
        True, description="Skip attributes with a known but undecodable format instead of failing"
    )
    skip_unrecognized: bool = Field(
        False, description="Skip attributes with unknown format/semantic tags instead of failing"
    )
    strict_buffer_length: bool = Field(
        False, description="Fail when buffer_length != vertex_size * vertex_count"
    )


class InspectInput(BaseModel):
    """Where one vertex buffer's header records live inside a file."""

    file_path: Path = Field(..., description="Container file holding the vertex records")
    vertex_buffer_offset: int = Field(..., ge=0, description="File offset of the VertexBuffer record")
    layout_offset: int = Field(..., ge=0, description="File offset of the VertexBufferLayout record")
    data_offset: int = Field(0, ge=0, description="Base added to buffer_offset to locate vertex data")


class AttributeSummary(BaseModel):
    """One decoded attribute of a vertex buffer."""

    ordinal: int
    semantic: str
    semantic_index: int
    format: str
    format_id: int
    struct_offset: int
    datum_size: int
    dimensions: int
    preview: list[list[float]] = Field(default_factory=list)


class SkippedAttribute(BaseModel):
    """An attribute left out of a decode, and why."""

    ordinal: int
    format_id: int
    semantic_id: int
    reason: str


class VertexBufferSummary(BaseModel):
    """Decode result for one vertex buffer, as printed by the CLI."""

    buffer_index: int
    layout_index: int
    vertex_size: int
    vertex_count: int
    buffer_length: int
    buffer_offset: int
    byte_order: ByteOrder
    attributes: list[AttributeSummary] = Field(default_factory=list)
    skipped: list[SkippedAttribute] = Field(default_factory=list)
