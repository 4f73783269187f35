"""Vertex-data core: packed records, tag classification, strided attribute access."""

from .accessor import ACCESSOR_SHAPES, VertexAttributeAccessor, element_shape
from .decode import (
    DecodedAttribute,
    decode_vertex_buffer,
    read_layout_attributes,
    summarize_vertex_buffer,
    vertex_buffer_data,
)
from .formats import VertexAttributeFormat, VertexAttributeSemantic
from .iterator import ElementShape, VertexAttributeIter
from .records import HeaderRecord, VertexBuffer, VertexBufferAttribute, VertexBufferLayout

__all__ = [
    "ACCESSOR_SHAPES",
    "VertexAttributeAccessor",
    "element_shape",
    "DecodedAttribute",
    "decode_vertex_buffer",
    "read_layout_attributes",
    "summarize_vertex_buffer",
    "vertex_buffer_data",
    "VertexAttributeFormat",
    "VertexAttributeSemantic",
    "ElementShape",
    "VertexAttributeIter",
    "HeaderRecord",
    "VertexBuffer",
    "VertexBufferAttribute",
    "VertexBufferLayout",
]
