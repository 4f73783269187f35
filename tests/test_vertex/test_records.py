"""Tests for the packed VertexBuffer / VertexBufferLayout / VertexBufferAttribute views."""

import struct

import pytest

from flver.core.contracts import ByteOrder
from flver.core.errors import BoundsError, UnrecognizedTagError
from flver.vertex.formats import VertexAttributeFormat, VertexAttributeSemantic
from flver.vertex.records import VertexBuffer, VertexBufferAttribute, VertexBufferLayout

VERTEX_BUFFER_FIELDS = (7, 2, 28, 1000, 28000, 0x1234)


def _pack_vertex_buffer(prefix: str, padding: bytes = b"\x00" * 8) -> bytes:
    buffer_index, layout_index, vertex_size, vertex_count, length, offset = VERTEX_BUFFER_FIELDS
    return (
        struct.pack(f"{prefix}4I", buffer_index, layout_index, vertex_size, vertex_count)
        + padding
        + struct.pack(f"{prefix}2I", length, offset)
    )


class TestRecordSizes:
    def test_fixed_sizes(self):
        assert VertexBuffer.size() == 32
        assert VertexBufferLayout.size() == 16
        assert VertexBufferAttribute.size() == 20

    def test_size_independent_of_byte_order(self):
        assert VertexBuffer.dtype(ByteOrder.BIG).itemsize == VertexBuffer.dtype(ByteOrder.LITTLE).itemsize


class TestVertexBuffer:
    @pytest.mark.parametrize("byte_order", [ByteOrder.LITTLE, ByteOrder.BIG])
    def test_fields(self, byte_order):
        data = _pack_vertex_buffer(byte_order.prefix)
        vb = VertexBuffer(data, byte_order)
        assert vb.buffer_index == 7
        assert vb.layout_index == 2
        assert vb.vertex_size == 28
        assert vb.vertex_count == 1000
        assert vb.buffer_length == 28000
        assert vb.buffer_offset == 0x1234

    def test_wrong_byte_order_swaps(self):
        vb = VertexBuffer(_pack_vertex_buffer(">"), ByteOrder.LITTLE)
        assert vb.vertex_size == 28 << 24

    def test_unaligned_offset(self):
        data = b"\xAA\xBB\xCC" + _pack_vertex_buffer("<")
        vb = VertexBuffer(data, ByteOrder.LITTLE, offset=3)
        assert vb.vertex_count == 1000
        assert vb.buffer_offset == 0x1234

    def test_short_slice(self):
        data = _pack_vertex_buffer("<")[:31]
        with pytest.raises(BoundsError) as exc_info:
            VertexBuffer(data)
        assert exc_info.value.needed == 32
        assert exc_info.value.available == 31

    def test_offset_past_end(self):
        with pytest.raises(BoundsError):
            VertexBuffer(_pack_vertex_buffer("<"), offset=1)

    def test_roundtrip(self):
        data = _pack_vertex_buffer(">")
        assert VertexBuffer(data, ByteOrder.BIG).to_bytes() == data

    def test_roundtrip_ignores_padding(self):
        data = _pack_vertex_buffer("<", padding=b"\xFF" * 8)
        encoded = VertexBuffer(data).to_bytes()
        assert encoded[:16] == data[:16]
        assert encoded[24:] == data[24:]

    def test_view_borrows_buffer(self):
        data = bytearray(_pack_vertex_buffer("<"))
        vb = VertexBuffer(data)
        data[8:12] = struct.pack("<I", 64)
        assert vb.vertex_size == 64

    def test_read_only(self):
        vb = VertexBuffer(bytearray(_pack_vertex_buffer("<")))
        with pytest.raises(AttributeError):
            vb.vertex_size = 1

    def test_to_dict_and_repr(self):
        vb = VertexBuffer(_pack_vertex_buffer("<"))
        assert vb.to_dict() == {
            "buffer_index": 7, "layout_index": 2, "vertex_size": 28, "vertex_count": 1000,
            "buffer_length": 28000, "buffer_offset": 0x1234,
        }
        assert "vertex_count=1000" in repr(vb)


class TestVertexBufferLayout:
    def test_fields(self):
        data = struct.pack("<I8xI", 5, 0x200)
        layout = VertexBufferLayout(data)
        assert layout.member_count == 5
        assert layout.member_offset == 0x200

    def test_big_endian(self):
        layout = VertexBufferLayout(struct.pack(">I8xI", 3, 0x40), ByteOrder.BIG)
        assert (layout.member_count, layout.member_offset) == (3, 0x40)


class TestVertexBufferAttribute:
    def test_fields_and_classification(self):
        data = struct.pack("<5I", 0, 12, 0x10, 0x3, 1)
        attr = VertexBufferAttribute(data)
        assert attr.unk0 == 0
        assert attr.struct_offset == 12
        assert attr.index == 1
        assert attr.format() is VertexAttributeFormat.BYTE4A
        assert attr.semantic() is VertexAttributeSemantic.NORMAL

    def test_unknown_semantic(self):
        attr = VertexBufferAttribute(struct.pack("<5I", 0, 0, 0x2, 0x4, 0))
        with pytest.raises(UnrecognizedTagError) as exc_info:
            attr.semantic()
        assert exc_info.value.value == 4

    def test_unknown_format(self):
        attr = VertexBufferAttribute(struct.pack("<5I", 0, 0, 0x99, 0x0, 0))
        with pytest.raises(UnrecognizedTagError) as exc_info:
            attr.format()
        assert exc_info.value.kind == "format"
        assert exc_info.value.value == 0x99

    def test_read_array(self):
        records = [(0, 0, 0x2, 0x0, 0), (0, 12, 0x15, 0x5, 0), (0, 20, 0x15, 0x5, 1)]
        data = b"\x00" * 4 + b"".join(struct.pack(">5I", *r) for r in records)
        attrs = VertexBufferAttribute.read_array(data, 3, ByteOrder.BIG, offset=4)
        assert [a.struct_offset for a in attrs] == [0, 12, 20]
        assert [a.index for a in attrs] == [0, 0, 1]

    def test_read_array_short(self):
        data = struct.pack("<5I", 0, 0, 0x2, 0x0, 0)
        with pytest.raises(BoundsError):
            VertexBufferAttribute.read_array(data, 2)

    def test_read_array_empty(self):
        assert VertexBufferAttribute.read_array(b"", 0) == []

    def test_pack_unknown_field(self):
        with pytest.raises(TypeError):
            VertexBufferAttribute.pack(stride=4)

    def test_pack_matches_struct(self):
        packed = VertexBufferAttribute.pack(
            ByteOrder.BIG, unk0=1, struct_offset=2, format_id=3, semantic_id=4, index=5
        )
        assert packed == struct.pack(">5I", 1, 2, 3, 4, 5)
