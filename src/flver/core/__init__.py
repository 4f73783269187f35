"""flver core: byte order, decode config, error taxonomy, logging."""

from .contracts import (
    AttributeSummary,
    ByteOrder,
    DecodeConfig,
    InspectInput,
    SkippedAttribute,
    VertexBufferSummary,
)
from .config import load_config
from .errors import BoundsError, FlverDecodeError, UnrecognizedTagError, UnsupportedFormatError
from .logging import setup_logging

__all__ = [
    "AttributeSummary",
    "ByteOrder",
    "DecodeConfig",
    "InspectInput",
    "SkippedAttribute",
    "VertexBufferSummary",
    "load_config",
    "BoundsError",
    "FlverDecodeError",
    "UnrecognizedTagError",
    "UnsupportedFormatError",
    "setup_logging",
]
