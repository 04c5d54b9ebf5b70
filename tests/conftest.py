"""Pytest fixtures for Clipboarder tests."""
import asyncio
import io

import pytest
from PIL import Image

from clipboarder.core.exceptions import UnreadableSourceError
from clipboarder.core.share import ByteSourceRef
from clipboarder.core.upload import MemoryByteSource, Success


def make_png(size=(2, 2)) -> bytes:
    """Render a small solid PNG image."""
    buffer = io.BytesIO()
    Image.new('RGB', size, (200, 30, 30)).save(buffer, format='PNG')
    return buffer.getvalue()


PNG_BYTES = make_png()


class RecordingUploader:
    """Uploader double that records requests and returns canned outcomes."""

    def __init__(self, outcome=None, gate: asyncio.Event = None, error: Exception = None):
        self.outcome = outcome or Success(server_ack=True)
        self.gate = gate
        self.error = error
        self.requests = []
        self.started = asyncio.Event()

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def send(self, request):
        self.requests.append(request)
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.outcome


class BlockingByteSource:
    """Byte source that waits for a gate before returning data."""

    def __init__(self, data: bytes = PNG_BYTES, fail: bool = False):
        self.data = data
        self.fail = fail
        self.gate = asyncio.Event()
        self.opened = asyncio.Event()
        self.released = False

    async def open(self, ref):
        self.opened.set()
        try:
            await self.gate.wait()
            if self.fail:
                raise UnreadableSourceError("broken", uri=ref.uri)
            return self.data
        finally:
            self.released = True


@pytest.fixture
def png_bytes():
    """Returns a tiny valid PNG image."""
    return PNG_BYTES


@pytest.fixture
def uploader():
    """Uploader that acknowledges every request."""
    return RecordingUploader()


@pytest.fixture
def make_uploader():
    """Factory for uploader doubles."""
    return RecordingUploader


@pytest.fixture
def blocking_source():
    """Byte source that blocks until released by the test."""
    return BlockingByteSource()


@pytest.fixture
def memory_source(png_bytes):
    """In-memory byte source holding two images."""
    return MemoryByteSource({
        'mem://cat.png': png_bytes,
        'mem://dog.jpg': b'\xff\xd8\xff\xe0fake-jpeg',
    })


@pytest.fixture
def png_ref():
    """Reference to the in-memory PNG."""
    return ByteSourceRef('mem://cat.png', 'image/png')


@pytest.fixture
def png_file(tmp_path, png_bytes):
    """PNG image written to a temporary file."""
    path = tmp_path / 'cat.png'
    path.write_bytes(png_bytes)
    return path
