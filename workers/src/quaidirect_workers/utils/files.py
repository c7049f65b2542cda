"""
Reading uploaded files without blocking the event loop
"""
import asyncio
from pathlib import Path
from typing import BinaryIO, Union

import structlog

from ..exceptions import FileReadError

logger = structlog.get_logger(__name__)

FileSource = Union[str, Path, bytes, bytearray, BinaryIO]


async def read_file_bytes(source: FileSource) -> bytes:
    """
    Return the raw bytes of an upload
    
    Raises:
        FileReadError: if the path or file object cannot be read
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    
    try:
        if isinstance(source, (str, Path)):
            return await asyncio.to_thread(Path(source).read_bytes)
        return await asyncio.to_thread(source.read)
    except (OSError, ValueError) as e:
        logger.warning("Contact file could not be read", error=str(e))
        raise FileReadError() from e
