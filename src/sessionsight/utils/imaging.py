"""Frame utilities for sessionsight.

Down-sampling of captured frame sequences and base64 encoding of frame
files for transport to a vision provider.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

FrameRef = str | os.PathLike[str]

T = TypeVar("T")


def sample_frames(frames: Sequence[T], max_frames: int) -> list[T]:
    """Reduce a frame sequence to at most ``max_frames`` items, keeping order.

    Frames are taken at a fixed stride of ``len(frames) // max_frames``
    starting from the first one. Sequences that already fit are returned
    unchanged.
    """
    if max_frames < 0:
        raise ValueError(f"max_frames must be >= 0, got {max_frames}")
    if len(frames) <= max_frames:
        return list(frames)
    step = max(1, len(frames) // max(1, max_frames))
    return list(frames[::step][:max_frames])


def bytes_to_base64(data: bytes) -> str:
    """Encode raw bytes as standard padded base64 text."""
    return base64.b64encode(data).decode("ascii")


async def encode_image_file(path: FrameRef) -> str:
    """Read an image file and return its contents as base64.

    The file bytes are sent as-is; no decoding or re-compression happens.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the path itself is unusable, e.g. holds a NUL byte.
    """
    loop = asyncio.get_running_loop()
    data = await loop.run_in_executor(None, Path(path).read_bytes)
    return bytes_to_base64(data)


async def encode_frames(paths: Sequence[FrameRef]) -> list[str]:
    """Encode several frame files, dropping the ones that cannot be read.

    Files are read concurrently; the result keeps the input order.
    """
    results = await asyncio.gather(
        *(encode_image_file(path) for path in paths),
        return_exceptions=True,
    )

    encoded: list[str] = []
    for path, result in zip(paths, results):
        if isinstance(result, (OSError, ValueError)):
            logger.warning("Failed to encode frame %s: %s", path, result)
            continue
        if isinstance(result, BaseException):
            raise result
        encoded.append(result)
    return encoded
