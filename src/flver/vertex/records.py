"""Packed, byte-order aware views over the vertex header records.

Each record is a numpy structured dtype built without alignment, so its
layout matches the byte-packed on-disk layout regardless of the host.
``numpy.frombuffer`` overlays that dtype onto the caller's buffer without
copying; fields are decoded on read in the selected byte order.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, ClassVar

import numpy as np

from flver.core.contracts import ByteOrder
from flver.core.errors import BoundsError
from .formats import VertexAttributeFormat, VertexAttributeSemantic


@lru_cache(maxsize=None)
def _record_dtype(fields: tuple[tuple[str, str], ...], byte_order: ByteOrder) -> np.dtype:
    # "V" (opaque) fields carry no byte order
    return np.dtype([
        (name, code if code.startswith("V") else byte_order.prefix + code)
        for name, code in fields
    ])


class HeaderRecord:
    """Read-only overlay of one fixed-size record onto a borrowed buffer.

    Subclasses list their on-disk fields in ``_fields`` as ``(name, code)``
    pairs, where ``code`` is a numpy type code without byte order
    (``"u4"``) or an opaque padding run (``"V8"``).
    """

    _fields: ClassVar[tuple[tuple[str, str], ...]] = ()

    def __init__(self, data, byte_order: ByteOrder = ByteOrder.LITTLE, offset: int = 0):
        size = self.size()
        available = len(memoryview(data).cast("B")) - offset
        if offset < 0 or available < size:
            raise BoundsError(
                f"{type(self).__name__} needs {size} bytes at offset {offset}, "
                f"only {max(available, 0)} available",
                needed=size,
                available=max(available, 0),
            )
        self.byte_order = ByteOrder(byte_order)
        self._view = np.frombuffer(data, dtype=self.dtype(self.byte_order), count=1, offset=offset)
        self._view.flags.writeable = False

    @classmethod
    def dtype(cls, byte_order: ByteOrder = ByteOrder.LITTLE) -> np.dtype:
        return _record_dtype(cls._fields, ByteOrder(byte_order))

    @classmethod
    def size(cls) -> int:
        """Fixed on-disk size in bytes."""
        return cls.dtype().itemsize

    @classmethod
    def field_names(cls) -> list[str]:
        return [name for name, code in cls._fields if not code.startswith("V")]

    @classmethod
    def read_array(
        cls,
        data,
        count: int,
        byte_order: ByteOrder = ByteOrder.LITTLE,
        offset: int = 0,
    ) -> list:
        """Read ``count`` contiguous records starting at ``offset``."""
        size = cls.size()
        available = len(memoryview(data).cast("B")) - offset
        if count < 0 or offset < 0 or available < count * size:
            raise BoundsError(
                f"{count} x {cls.__name__} needs {count * size} bytes at offset {offset}, "
                f"only {max(available, 0)} available",
                needed=count * size,
                available=max(available, 0),
            )
        return [cls(data, byte_order, offset + i * size) for i in range(count)]

    @classmethod
    def pack(cls, byte_order: ByteOrder = ByteOrder.LITTLE, **values: int) -> bytes:
        """Encode field values into a record; omitted fields and padding are zero."""
        unknown = set(values) - set(cls.field_names())
        if unknown:
            raise TypeError(f"{cls.__name__} has no fields {sorted(unknown)}")
        record = np.zeros(1, dtype=cls.dtype(byte_order))
        for name, value in values.items():
            record[name] = value
        return record.tobytes()

    def _get(self, name: str) -> int:
        return int(self._view[name][0])

    def to_dict(self) -> dict[str, Any]:
        return {name: self._get(name) for name in self.field_names()}

    def to_bytes(self) -> bytes:
        """Re-encode the declared fields in this view's byte order."""
        return self.pack(self.byte_order, **self.to_dict())

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v}" for k, v in self.to_dict().items())
        return f"{type(self).__name__}({fields})"


class VertexBuffer(HeaderRecord):
    """One contiguous run of fixed-size per-vertex records."""

    _fields = (
        ("buffer_index", "u4"),
        ("layout_index", "u4"),
        ("vertex_size", "u4"),
        ("vertex_count", "u4"),
        ("padding0", "V8"),
        ("buffer_length", "u4"),
        ("buffer_offset", "u4"),
    )

    @property
    def buffer_index(self) -> int:
        return self._get("buffer_index")

    @property
    def layout_index(self) -> int:
        return self._get("layout_index")

    @property
    def vertex_size(self) -> int:
        return self._get("vertex_size")

    @property
    def vertex_count(self) -> int:
        return self._get("vertex_count")

    @property
    def buffer_length(self) -> int:
        return self._get("buffer_length")

    @property
    def buffer_offset(self) -> int:
        return self._get("buffer_offset")


class VertexBufferLayout(HeaderRecord):
    """Count and location of the attribute records composing one vertex."""

    _fields = (
        ("member_count", "u4"),
        ("padding0", "V8"),
        ("member_offset", "u4"),
    )

    @property
    def member_count(self) -> int:
        return self._get("member_count")

    @property
    def member_offset(self) -> int:
        return self._get("member_offset")


class VertexBufferAttribute(HeaderRecord):
    """One field descriptor of a vertex layout."""

    _fields = (
        ("unk0", "u4"),
        ("struct_offset", "u4"),
        ("format_id", "u4"),
        ("semantic_id", "u4"),
        ("index", "u4"),
    )

    @property
    def unk0(self) -> int:
        return self._get("unk0")

    @property
    def struct_offset(self) -> int:
        return self._get("struct_offset")

    @property
    def format_id(self) -> int:
        return self._get("format_id")

    @property
    def semantic_id(self) -> int:
        return self._get("semantic_id")

    @property
    def index(self) -> int:
        return self._get("index")

    def format(self) -> VertexAttributeFormat:
        return VertexAttributeFormat.from_tag(self.format_id)

    def semantic(self) -> VertexAttributeSemantic:
        return VertexAttributeSemantic.from_tag(self.semantic_id)
