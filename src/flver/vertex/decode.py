"""Decode one vertex buffer: slice its blob, read its layout, build accessors.

This is the seam where a container reader hands byte slices and header
records to the vertex core. Errors from classification propagate unless the
``DecodeConfig`` asks for the offending attribute to be skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flver.core.contracts import (
    AttributeSummary,
    ByteOrder,
    DecodeConfig,
    SkippedAttribute,
    VertexBufferSummary,
)
from flver.core.errors import BoundsError, UnrecognizedTagError, UnsupportedFormatError
from .accessor import VertexAttributeAccessor
from .formats import VertexAttributeSemantic
from .records import VertexBuffer, VertexBufferAttribute, VertexBufferLayout

logger = logging.getLogger(__name__)


@dataclass
class DecodedAttribute:
    """A layout attribute with its classified semantic and decoding accessor."""

    ordinal: int
    attribute: VertexBufferAttribute
    semantic: VertexAttributeSemantic
    accessor: VertexAttributeAccessor


def vertex_buffer_data(
    data,
    vertex_buffer: VertexBuffer,
    data_offset: int = 0,
    strict: bool = False,
) -> memoryview:
    """Zero-copy slice of the vertex blob described by ``vertex_buffer``.

    Raises:
        BoundsError: if the blob runs past the end of ``data``, or (when
            ``strict``) its length disagrees with ``vertex_size * vertex_count``.
    """
    view = memoryview(data).cast("B")
    start = data_offset + vertex_buffer.buffer_offset
    end = start + vertex_buffer.buffer_length
    if end > len(view):
        raise BoundsError(
            f"Vertex data [{start}, {end}) exceeds {len(view)}-byte input",
            needed=end,
            available=len(view),
        )

    expected = vertex_buffer.vertex_size * vertex_buffer.vertex_count
    if vertex_buffer.buffer_length != expected:
        msg = (
            f"Vertex buffer {vertex_buffer.buffer_index}: buffer_length {vertex_buffer.buffer_length} "
            f"!= vertex_size {vertex_buffer.vertex_size} * vertex_count {vertex_buffer.vertex_count}"
        )
        if strict:
            raise BoundsError(msg, needed=expected, available=vertex_buffer.buffer_length)
        logger.warning(msg)

    return view[start:end]


def read_layout_attributes(
    data,
    layout: VertexBufferLayout,
    byte_order: ByteOrder = ByteOrder.LITTLE,
) -> list[VertexBufferAttribute]:
    """Read the contiguous attribute records a layout points at."""
    return VertexBufferAttribute.read_array(
        data, layout.member_count, byte_order, offset=layout.member_offset
    )


def decode_vertex_buffer(
    data,
    vertex_buffer: VertexBuffer,
    layout: VertexBufferLayout,
    config: DecodeConfig | None = None,
    data_offset: int = 0,
    skipped: list[SkippedAttribute] | None = None,
) -> list[DecodedAttribute]:
    """Build one accessor per decodable attribute of ``vertex_buffer``.

    Args:
        data: The whole container (or any buffer the record offsets index into).
        vertex_buffer: Header record of the buffer to decode.
        layout: The layout ``vertex_buffer.layout_index`` refers to.
        config: Decode settings; defaults to ``DecodeConfig()``.
        data_offset: Base added to ``buffer_offset``.
        skipped: If given, receives one entry per attribute left out.

    Returns:
        Decoded attributes in layout order.
    """
    config = config or DecodeConfig()
    byte_order = config.byte_order

    blob = vertex_buffer_data(data, vertex_buffer, data_offset, strict=config.strict_buffer_length)
    attributes = read_layout_attributes(data, layout, byte_order)
    logger.info(
        f"Vertex buffer {vertex_buffer.buffer_index}: {vertex_buffer.vertex_count} vertices x "
        f"{vertex_buffer.vertex_size} bytes, {len(attributes)} attributes"
    )

    decoded = []
    for ordinal, attribute in enumerate(attributes):
        try:
            semantic = attribute.semantic()
            accessor = VertexAttributeAccessor.for_attribute(
                attribute, blob, vertex_buffer.vertex_size, byte_order
            )
        except UnsupportedFormatError as e:
            if not config.skip_unsupported:
                raise
            _record_skip(skipped, ordinal, attribute, str(e))
            continue
        except UnrecognizedTagError as e:
            if not config.skip_unrecognized:
                raise
            _record_skip(skipped, ordinal, attribute, str(e))
            continue

        logger.debug(
            f"  [{ordinal}] {semantic.name}{attribute.index} {accessor.kind.name} "
            f"@ {attribute.struct_offset} ({accessor.shape})"
        )
        decoded.append(DecodedAttribute(ordinal, attribute, semantic, accessor))

    return decoded


def _record_skip(
    skipped: list[SkippedAttribute] | None,
    ordinal: int,
    attribute: VertexBufferAttribute,
    reason: str,
) -> None:
    logger.warning(f"Skipping attribute {ordinal}: {reason}")
    if skipped is not None:
        skipped.append(SkippedAttribute(
            ordinal=ordinal,
            format_id=attribute.format_id,
            semantic_id=attribute.semantic_id,
            reason=reason,
        ))


def summarize_vertex_buffer(
    data,
    vertex_buffer: VertexBuffer,
    layout: VertexBufferLayout,
    config: DecodeConfig | None = None,
    data_offset: int = 0,
) -> VertexBufferSummary:
    """Decode ``vertex_buffer`` and preview the first elements of each attribute."""
    config = config or DecodeConfig()
    skipped: list[SkippedAttribute] = []
    decoded = decode_vertex_buffer(data, vertex_buffer, layout, config, data_offset, skipped)

    summaries = []
    for item in decoded:
        preview = item.accessor.to_array()[: config.preview_count]
        fmt = item.accessor.kind
        summaries.append(AttributeSummary(
            ordinal=item.ordinal,
            semantic=item.semantic.name,
            semantic_index=item.attribute.index,
            format=fmt.name,
            format_id=int(fmt),
            struct_offset=item.attribute.struct_offset,
            datum_size=fmt.datum_size,
            dimensions=fmt.dimensions,
            preview=preview.tolist(),
        ))

    return VertexBufferSummary(
        buffer_index=vertex_buffer.buffer_index,
        layout_index=vertex_buffer.layout_index,
        vertex_size=vertex_buffer.vertex_size,
        vertex_count=vertex_buffer.vertex_count,
        buffer_length=vertex_buffer.buffer_length,
        buffer_offset=vertex_buffer.buffer_offset,
        byte_order=config.byte_order,
        attributes=summaries,
        skipped=skipped,
    )
