"""Shared pytest fixtures for flver vertex decoding tests."""

from pathlib import Path

import numpy as np
import pytest

from flver.core.contracts import ByteOrder
from flver.vertex.records import VertexBuffer, VertexBufferAttribute, VertexBufferLayout

# (unk0, struct_offset, format_id, semantic_id, index)
SAMPLE_ATTRIBUTES = [
    (0, 0, 0x02, 0x0, 0),   # FLOAT3 position
    (0, 12, 0x10, 0x3, 0),  # BYTE4A normal
    (0, 16, 0x15, 0x5, 0),  # UV
    (0, 24, 0x13, 0xA, 0),  # BYTE4C vertex color
]

VERTEX_BUFFER_OFFSET = 0
LAYOUT_OFFSET = VertexBuffer.size()


def vertex_dtype(byte_order: ByteOrder = ByteOrder.LITTLE) -> np.dtype:
    """28-byte packed vertex matching SAMPLE_ATTRIBUTES."""
    p = ByteOrder(byte_order).prefix
    return np.dtype([
        ("position", p + "f4", (3,)),
        ("normal", "u1", (4,)),
        ("uv", p + "f4", (2,)),
        ("color", "u1", (4,)),
    ])


def make_vertices(n: int = 3, byte_order: ByteOrder = ByteOrder.LITTLE) -> np.ndarray:
    vertices = np.zeros(n, dtype=vertex_dtype(byte_order))
    for i in range(n):
        vertices["position"][i] = [i + 0.5, -(i + 1.0), 10.0 * i]
        vertices["normal"][i] = [127, 128 + i, 255, i]
        vertices["uv"][i] = [0.25 * i, 1.0 - 0.25 * i]
        vertices["color"][i] = [255, 0, 16 * i, 200]
    return vertices


def build_container(
    vertices: np.ndarray,
    attributes: list[tuple[int, int, int, int, int]],
    byte_order: ByteOrder = ByteOrder.LITTLE,
    buffer_length: int | None = None,
) -> bytes:
    """Lay out VertexBuffer, VertexBufferLayout, attribute records, then vertex data."""
    attribute_offset = VertexBuffer.size() + VertexBufferLayout.size()
    data_start = attribute_offset + len(attributes) * VertexBufferAttribute.size()
    blob = vertices.tobytes()

    header = VertexBuffer.pack(
        byte_order,
        buffer_index=0,
        layout_index=0,
        vertex_size=vertices.dtype.itemsize,
        vertex_count=len(vertices),
        buffer_length=len(blob) if buffer_length is None else buffer_length,
        buffer_offset=data_start,
    )
    layout = VertexBufferLayout.pack(
        byte_order, member_count=len(attributes), member_offset=attribute_offset
    )
    records = b"".join(
        VertexBufferAttribute.pack(
            byte_order,
            unk0=unk0,
            struct_offset=struct_offset,
            format_id=format_id,
            semantic_id=semantic_id,
            index=index,
        )
        for unk0, struct_offset, format_id, semantic_id, index in attributes
    )
    return header + layout + records + blob


@pytest.fixture
def sample_vertices() -> np.ndarray:
    return make_vertices()


@pytest.fixture
def sample_container(sample_vertices: np.ndarray) -> bytes:
    """Little-endian container with three 28-byte vertices and four attributes."""
    return build_container(sample_vertices, SAMPLE_ATTRIBUTES)


@pytest.fixture
def container_file(tmp_path: Path, sample_container: bytes) -> Path:
    path = tmp_path / "sample.flver"
    path.write_bytes(sample_container)
    return path


@pytest.fixture
def sample_attributes() -> list[tuple[int, int, int, int, int]]:
    return list(SAMPLE_ATTRIBUTES)


@pytest.fixture
def make_container():
    """Factory building a container from vertices and attribute tuples."""
    return build_container


@pytest.fixture
def vertex_factory():
    """Factory building ``n`` sample vertices in a given byte order."""
    return make_vertices
