"""Binding of a classified attribute format to a fixed element shape."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from flver.core.contracts import ByteOrder
from flver.core.errors import UnsupportedFormatError
from .formats import VertexAttributeFormat
from .iterator import ElementShape, VertexAttributeIter
from .records import VertexBufferAttribute

# BYTE4A and BYTE4B decode identically but are read differently downstream,
# so the accessor keeps the format itself as its kind.
ACCESSOR_SHAPES: dict[VertexAttributeFormat, ElementShape] = {
    VertexAttributeFormat.FLOAT2: ElementShape("f4", 2),
    VertexAttributeFormat.FLOAT3: ElementShape("f4", 3),
    VertexAttributeFormat.FLOAT4: ElementShape("f4", 4),
    VertexAttributeFormat.BYTE4A: ElementShape("u1", 4),
    VertexAttributeFormat.BYTE4B: ElementShape("u1", 4),
    VertexAttributeFormat.SHORT2_TO_FLOAT2: ElementShape("u2", 2),
    VertexAttributeFormat.BYTE4C: ElementShape("u1", 4),
    VertexAttributeFormat.UV: ElementShape("f4", 2),
    # TODO: decode the second UV of the pair (components 3 and 4)
    VertexAttributeFormat.UV_PAIR: ElementShape("f4", 2),
    VertexAttributeFormat.SHORT_BONE_INDICES: ElementShape("u2", 4),
    VertexAttributeFormat.SHORT4_TO_FLOAT4A: ElementShape("u2", 4),
    VertexAttributeFormat.SHORT4_TO_FLOAT4B: ElementShape("u2", 4),
    VertexAttributeFormat.BYTE4E: ElementShape("u1", 4),
}


def element_shape(fmt: VertexAttributeFormat) -> ElementShape:
    """Element shape an attribute of format ``fmt`` decodes to."""
    try:
        return ACCESSOR_SHAPES[fmt]
    except KeyError:
        raise UnsupportedFormatError(fmt, "element decoding") from None


@dataclass(frozen=True)
class VertexAttributeAccessor:
    """A format kind paired with the iterator decoding it.

    The kind and shape are fixed at construction; ``values`` is a one-shot
    cursor and ``restart`` builds a fresh accessor over the same bytes.
    """

    kind: VertexAttributeFormat
    values: VertexAttributeIter
    buffer: object
    byte_order: ByteOrder = ByteOrder.LITTLE

    @classmethod
    def create(
        cls,
        fmt: VertexAttributeFormat,
        buffer,
        vertex_size: int,
        vertex_offset: int,
        byte_order: ByteOrder = ByteOrder.LITTLE,
    ) -> VertexAttributeAccessor:
        shape = element_shape(fmt)
        values = VertexAttributeIter(buffer, vertex_size, vertex_offset, shape, byte_order)
        return cls(kind=fmt, values=values, buffer=buffer, byte_order=byte_order)

    @classmethod
    def for_attribute(
        cls,
        attribute: VertexBufferAttribute,
        buffer,
        vertex_size: int,
        byte_order: ByteOrder = ByteOrder.LITTLE,
    ) -> VertexAttributeAccessor:
        return cls.create(attribute.format(), buffer, vertex_size, attribute.struct_offset, byte_order)

    @property
    def shape(self) -> ElementShape:
        return self.values.shape

    def restart(self) -> VertexAttributeAccessor:
        return self.create(
            self.kind, self.buffer, self.values.vertex_size, self.values.vertex_offset, self.byte_order
        )

    def to_array(self) -> np.ndarray:
        """Remaining elements as one strided read-only view."""
        return self.values.remaining_array()

    def __iter__(self) -> Iterator[np.ndarray]:
        return self.values

    def __len__(self) -> int:
        return len(self.values)
