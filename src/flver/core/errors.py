"""Decode error taxonomy shared by record views, classifiers and iterators."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flver.vertex.formats import VertexAttributeFormat


class FlverDecodeError(Exception):
    """Base class for every failure raised while decoding vertex data."""


class BoundsError(FlverDecodeError, ValueError):
    """A slice is shorter than a fixed record, or a read window leaves the buffer."""

    def __init__(self, message: str, needed: int | None = None, available: int | None = None):
        super().__init__(message)
        self.needed = needed
        self.available = available


class UnrecognizedTagError(FlverDecodeError, ValueError):
    """A format or semantic tag outside the known set."""

    def __init__(self, kind: str, value: int):
        super().__init__(f"Unknown {kind} tag {value} (0x{value:X})")
        self.kind = kind
        self.value = value


class UnsupportedFormatError(FlverDecodeError, NotImplementedError):
    """A recognised format whose element geometry is not defined yet."""

    def __init__(self, fmt: VertexAttributeFormat, operation: str):
        super().__init__(f"{fmt.name} does not support {operation}")
        self.format = fmt
        self.operation = operation
