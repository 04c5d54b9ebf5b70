"""
Byte source services.

Read the data behind a ByteSourceRef. Every read holds its handle only
for the duration of the call.
"""
from pathlib import Path
from typing import Dict, Optional, Union
from urllib.parse import unquote, urlparse
import logging

import aiofiles

from ...exceptions import UnreadableSourceError
from ...share.models import ByteSourceRef


class FileByteSource:
    """
    Reads local files with aiofiles.

    Accepts plain paths and ``file://`` URIs.

    Example:
        >>> source = FileByteSource(max_bytes=10 * 1024 * 1024)
        >>> data = await source.open(ByteSourceRef("file:///tmp/cat.png"))
    """

    def __init__(self, max_bytes: Optional[int] = None):
        """
        Initialize file byte source.

        Args:
            max_bytes: Optional size limit; larger files are unreadable
        """
        self._max_bytes = max_bytes
        self._logger = logging.getLogger('clipboarder.upload.source')

    @staticmethod
    def resolve_path(uri: str) -> Path:
        """Convert a path or file:// URI to a Path."""
        parsed = urlparse(uri)
        if parsed.scheme == 'file':
            return Path(unquote(parsed.path))
        if parsed.scheme and len(parsed.scheme) > 1:
            raise UnreadableSourceError(
                f"Unsupported URI scheme: {parsed.scheme}", uri=uri
            )
        return Path(uri)

    async def open(self, ref: ByteSourceRef) -> bytes:
        """
        Read the whole file.

        Raises:
            UnreadableSourceError: If the file is missing, unreadable,
                empty or larger than the limit
        """
        path = self.resolve_path(ref.uri)
        try:
            async with aiofiles.open(path, 'rb') as f:
                if self._max_bytes is None:
                    data = await f.read()
                else:
                    data = await f.read(self._max_bytes + 1)
        except (IOError, OSError) as e:
            self._logger.error(f"Failed to read {path}: {e}")
            raise UnreadableSourceError(f"Cannot read {path}: {e}", uri=ref.uri) from e

        if not data:
            raise UnreadableSourceError(f"Source is empty: {path}", uri=ref.uri)
        if self._max_bytes is not None and len(data) > self._max_bytes:
            raise UnreadableSourceError(
                f"Source {path} exceeds maximum {self._max_bytes} bytes",
                uri=ref.uri
            )

        self._logger.debug(f"Read {path} ({len(data)} bytes)")
        return data


class MemoryByteSource:
    """
    Serves data the host already holds in memory.

    Example:
        >>> source = MemoryByteSource({"clip://1": b"..."})
        >>> source.add("clip://2", png_bytes)
    """

    def __init__(self, blobs: Optional[Dict[str, Union[bytes, bytearray]]] = None):
        self._blobs: Dict[str, bytes] = {
            uri: bytes(data) for uri, data in (blobs or {}).items()
        }

    def add(self, uri: str, data: Union[bytes, bytearray]) -> ByteSourceRef:
        """Register data under a URI and return a reference to it."""
        self._blobs[uri] = bytes(data)
        return ByteSourceRef(uri=uri)

    def discard(self, uri: str) -> None:
        self._blobs.pop(uri, None)

    async def open(self, ref: ByteSourceRef) -> bytes:
        try:
            data = self._blobs[ref.uri]
        except KeyError:
            raise UnreadableSourceError(f"Unknown source: {ref.uri}", uri=ref.uri) from None
        if not data:
            raise UnreadableSourceError(f"Source is empty: {ref.uri}", uri=ref.uri)
        return data
