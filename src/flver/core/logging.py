"""Structured logging setup for the flver decoder."""

from __future__ import annotations

import logging
import sys
from typing import TextIO


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure structured logging with consistent format.

    Records go to stderr unless another stream is given, so stdout stays
    free for command output such as ``inspect --json``.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=stream if stream is not None else sys.stderr,
    )
