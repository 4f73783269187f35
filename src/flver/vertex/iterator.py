"""Lazy strided iteration over one attribute of interleaved vertex records.

A vertex blob stores every attribute of a vertex contiguously, then the next
vertex. ``VertexAttributeIter`` visits one attribute across all vertices by
reading a fixed window of the current record and then narrowing a borrowed
``memoryview`` by one vertex stride. Nothing is copied out of the caller's
buffer: each element is a read-only numpy view of its window.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from flver.core.contracts import ByteOrder
from flver.core.errors import BoundsError


@dataclass(frozen=True)
class ElementShape:
    """Fixed value type of one decoded element: ``count`` x ``component``."""

    component: str
    count: int

    @property
    def itemsize(self) -> int:
        return np.dtype(self.component).itemsize * self.count

    def component_dtype(self, byte_order: ByteOrder = ByteOrder.LITTLE) -> np.dtype:
        return np.dtype(ByteOrder(byte_order).prefix + self.component)

    def __str__(self) -> str:
        return f"{self.component}x{self.count}"


class VertexAttributeIter:
    """One-shot cursor yielding one attribute element per vertex.

    Args:
        buffer: Vertex blob, a whole number of ``vertex_size`` records.
        vertex_size: Stride between consecutive vertex records.
        vertex_offset: Offset of the attribute inside one vertex record.
        shape: Element shape the attribute decodes to.
        byte_order: Byte order of multi-byte components.

    Raises:
        BoundsError: if the stride is not positive or the element window
            does not fit inside one vertex record.
    """

    def __init__(
        self,
        buffer,
        vertex_size: int,
        vertex_offset: int,
        shape: ElementShape,
        byte_order: ByteOrder = ByteOrder.LITTLE,
    ):
        if vertex_size <= 0:
            raise BoundsError(f"Vertex size must be positive, got {vertex_size}")
        attribute_data_end = vertex_offset + shape.itemsize
        if vertex_offset < 0 or attribute_data_end > vertex_size:
            raise BoundsError(
                f"Element window [{vertex_offset}, {attribute_data_end}) "
                f"does not fit a {vertex_size}-byte vertex",
                needed=attribute_data_end,
                available=vertex_size,
            )

        self.shape = shape
        self._buffer = memoryview(buffer).cast("B")
        self._attribute_data_offset = vertex_offset
        self._attribute_data_end = attribute_data_end
        self._vertex_size = vertex_size
        self._component = shape.component_dtype(byte_order)

    @property
    def vertex_size(self) -> int:
        return self._vertex_size

    @property
    def vertex_offset(self) -> int:
        return self._attribute_data_offset

    def __iter__(self) -> VertexAttributeIter:
        return self

    def __next__(self) -> np.ndarray:
        remaining = len(self._buffer)
        if remaining == 0:
            raise StopIteration
        if remaining < self._vertex_size:
            raise BoundsError(
                f"Trailing partial vertex record: {remaining} bytes left, "
                f"stride is {self._vertex_size}",
                needed=self._vertex_size,
                available=remaining,
            )

        window = self._buffer[self._attribute_data_offset:self._attribute_data_end]
        value = np.frombuffer(window, dtype=self._component, count=self.shape.count)
        value.flags.writeable = False

        self._buffer = self._buffer[self._vertex_size:]
        return value

    def __len__(self) -> int:
        return len(self._buffer) // self._vertex_size

    def remaining_array(self) -> np.ndarray:
        """All elements not yet yielded as one ``(n, count)`` strided view.

        Does not advance the cursor.
        """
        n = len(self)
        if n == 0:
            return np.empty((0, self.shape.count), dtype=self._component)
        arr = np.ndarray(
            shape=(n, self.shape.count),
            dtype=self._component,
            buffer=self._buffer,
            offset=self._attribute_data_offset,
            strides=(self._vertex_size, self._component.itemsize),
        )
        arr.flags.writeable = False
        return arr

    def __repr__(self) -> str:
        return (
            f"VertexAttributeIter(shape={self.shape}, offset={self._attribute_data_offset}, "
            f"stride={self._vertex_size}, remaining={len(self)})"
        )
