"""Classification of raw attribute tags into encoding formats and semantic roles.

Both enumerations are closed: a tag outside the whitelist raises
``UnrecognizedTagError`` carrying the raw value. A recognised format whose
element geometry is not defined (``EDGE_COMPRESSED``) raises
``UnsupportedFormatError`` from ``datum_size`` / ``dimensions`` instead.
"""

from __future__ import annotations

from enum import IntEnum

from flver.core.errors import UnrecognizedTagError, UnsupportedFormatError


class VertexAttributeFormat(IntEnum):
    """On-disk encoding of one vertex attribute."""

    FLOAT2 = 0x1
    FLOAT3 = 0x2
    FLOAT4 = 0x3
    BYTE4A = 0x10
    BYTE4B = 0x11
    SHORT2_TO_FLOAT2 = 0x12
    # int to float 127
    BYTE4C = 0x13
    UV = 0x15
    # int to float
    UV_PAIR = 0x16
    SHORT_BONE_INDICES = 0x18
    SHORT4_TO_FLOAT4A = 0x1A
    SHORT4_TO_FLOAT4B = 0x2E
    BYTE4E = 0x2F
    EDGE_COMPRESSED = 0xF0

    @classmethod
    def from_tag(cls, value: int) -> VertexAttributeFormat:
        try:
            return cls(value)
        except ValueError:
            raise UnrecognizedTagError("format", value) from None

    @property
    def datum_size(self) -> int:
        """Bytes per scalar component."""
        try:
            return _DATUM_SIZES[self]
        except KeyError:
            raise UnsupportedFormatError(self, "datum_size") from None

    @property
    def dimensions(self) -> int:
        """Number of components per element."""
        try:
            return _DIMENSIONS[self]
        except KeyError:
            raise UnsupportedFormatError(self, "dimensions") from None

    @property
    def is_supported(self) -> bool:
        return self in _DATUM_SIZES


_DATUM_SIZES: dict[VertexAttributeFormat, int] = {
    VertexAttributeFormat.FLOAT2: 4,
    VertexAttributeFormat.FLOAT3: 4,
    VertexAttributeFormat.FLOAT4: 4,
    VertexAttributeFormat.UV: 4,
    VertexAttributeFormat.UV_PAIR: 4,
    VertexAttributeFormat.BYTE4A: 1,
    VertexAttributeFormat.BYTE4B: 1,
    VertexAttributeFormat.BYTE4C: 1,
    VertexAttributeFormat.BYTE4E: 1,
    VertexAttributeFormat.SHORT2_TO_FLOAT2: 2,
    VertexAttributeFormat.SHORT_BONE_INDICES: 2,
    VertexAttributeFormat.SHORT4_TO_FLOAT4A: 2,
    VertexAttributeFormat.SHORT4_TO_FLOAT4B: 2,
}

_DIMENSIONS: dict[VertexAttributeFormat, int] = {
    VertexAttributeFormat.FLOAT2: 2,
    VertexAttributeFormat.FLOAT3: 3,
    VertexAttributeFormat.FLOAT4: 4,
    VertexAttributeFormat.BYTE4A: 4,
    VertexAttributeFormat.BYTE4B: 4,
    VertexAttributeFormat.SHORT2_TO_FLOAT2: 2,
    VertexAttributeFormat.BYTE4C: 4,
    VertexAttributeFormat.UV: 2,
    VertexAttributeFormat.UV_PAIR: 4,
    VertexAttributeFormat.SHORT_BONE_INDICES: 4,
    VertexAttributeFormat.SHORT4_TO_FLOAT4A: 4,
    VertexAttributeFormat.SHORT4_TO_FLOAT4B: 4,
    VertexAttributeFormat.BYTE4E: 4,
}


class VertexAttributeSemantic(IntEnum):
    """Logical role of one vertex attribute."""

    POSITION = 0x0
    BONE_WEIGHTS = 0x1
    BONE_INDICES = 0x2
    NORMAL = 0x3
    UV = 0x5
    TANGENT = 0x6
    BITANGENT = 0x7
    VERTEX_COLOR = 0xA

    @classmethod
    def from_tag(cls, value: int) -> VertexAttributeSemantic:
        try:
            return cls(value)
        except ValueError:
            raise UnrecognizedTagError("semantic", value) from None
