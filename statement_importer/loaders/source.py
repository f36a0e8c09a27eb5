"""
Source Module
Resolves what an input byte source is called and reads its bytes.

Accepted sources:
- raw bytes (bytes, bytearray, memoryview)
- filesystem paths (str paths are not accepted, use pathlib.Path)
- objects with a read() method, sync or async (open files, BytesIO,
  FastAPI/Starlette UploadFile)
"""

import asyncio
import inspect
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from ..config import config

logger = logging.getLogger(__name__)


class UnsupportedSourceError(TypeError):
    """Raised when an input is neither a byte buffer, a path nor a readable object."""
    pass


@dataclass(frozen=True)
class SourceInfo:
    """Name, MIME hint and declared size of an input source."""
    name: str
    content_type: Optional[str] = None
    size: Optional[int] = None


def describe_source(
    source: Any,
    file_name: Optional[str] = None,
    content_type: Optional[str] = None
) -> SourceInfo:
    """
    Work out the display name, MIME hint and size of a source without reading it.

    Explicit arguments win over attributes found on the source.

    Args:
        source: Byte source
        file_name: Optional display name
        content_type: Optional MIME type hint

    Returns:
        SourceInfo for the source
    """
    name = file_name
    size = None

    if isinstance(source, os.PathLike):
        path = Path(source)
        name = name or path.name
        if path.is_file():
            size = path.stat().st_size
    elif isinstance(source, (bytes, bytearray, memoryview)):
        size = len(source)
    else:
        # UploadFile exposes filename; open file objects expose name
        attr_name = getattr(source, 'filename', None) or getattr(source, 'name', None)
        if not name and isinstance(attr_name, str) and attr_name:
            name = os.path.basename(attr_name)
        if content_type is None:
            attr_type = getattr(source, 'content_type', None)
            content_type = attr_type if isinstance(attr_type, str) else None
        attr_size = getattr(source, 'size', None)
        size = attr_size if isinstance(attr_size, int) else None

    return SourceInfo(name=name or config.DEFAULT_SOURCE_NAME, content_type=content_type, size=size)


async def read_source_bytes(source: Any) -> bytes:
    """
    Read the full contents of a byte source.

    Args:
        source: Byte source

    Returns:
        File contents

    Raises:
        UnsupportedSourceError: If the source kind is not recognized
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)

    if isinstance(source, os.PathLike):
        path = Path(source)
        logger.debug(f"Reading bytes from path: {path}")
        return await asyncio.to_thread(path.read_bytes)

    read = getattr(source, 'read', None)
    if not callable(read):
        logger.error(f"Unsupported input type: {type(source).__name__}")
        raise UnsupportedSourceError(f"Unsupported input type: {type(source).__name__}")

    if inspect.iscoroutinefunction(read):
        data = await read()
    else:
        # Blocking file reads stay off the event loop
        data = await asyncio.to_thread(read)
        if inspect.isawaitable(data):
            data = await data

    if not isinstance(data, (bytes, bytearray, memoryview)):
        logger.error(f"Source read() returned {type(data).__name__}, expected bytes")
        raise UnsupportedSourceError(f"Source read() returned {type(data).__name__}, expected bytes")

    return bytes(data)
