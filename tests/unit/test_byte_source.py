"""Tests for byte sources."""
from pathlib import Path

import pytest

from clipboarder.core.exceptions import UnreadableSourceError
from clipboarder.core.share import ByteSourceRef
from clipboarder.core.upload import ByteSource, FileByteSource, MemoryByteSource


class TestFileByteSource:
    """Test suite for FileByteSource."""

    @pytest.fixture
    def source(self):
        """Create source instance."""
        return FileByteSource()

    @pytest.mark.asyncio
    async def test_read_path(self, source, png_file, png_bytes):
        """Test reading a plain path."""
        data = await source.open(ByteSourceRef(str(png_file), 'image/png'))

        assert data == png_bytes

    @pytest.mark.asyncio
    async def test_read_file_uri(self, source, png_file, png_bytes):
        """Test reading a file:// URI."""
        data = await source.open(ByteSourceRef(png_file.as_uri()))

        assert data == png_bytes

    @pytest.mark.asyncio
    async def test_missing_file(self, source, tmp_path):
        """Test missing file is unreadable."""
        ref = ByteSourceRef(str(tmp_path / 'missing.png'))

        with pytest.raises(UnreadableSourceError) as exc_info:
            await source.open(ref)

        assert exc_info.value.uri == ref.uri

    @pytest.mark.asyncio
    async def test_directory(self, source, tmp_path):
        """Test directory is unreadable."""
        with pytest.raises(UnreadableSourceError):
            await source.open(ByteSourceRef(str(tmp_path)))

    @pytest.mark.asyncio
    async def test_empty_file(self, source, tmp_path):
        """Test empty file is unreadable."""
        path = tmp_path / 'empty.png'
        path.write_bytes(b'')

        with pytest.raises(UnreadableSourceError, match="empty"):
            await source.open(ByteSourceRef(str(path)))

    @pytest.mark.asyncio
    async def test_size_limit(self, tmp_path):
        """Test files over the limit are unreadable."""
        path = tmp_path / 'big.bin'
        path.write_bytes(b'x' * 100)
        source = FileByteSource(max_bytes=50)

        with pytest.raises(UnreadableSourceError, match="exceeds"):
            await source.open(ByteSourceRef(str(path)))

    @pytest.mark.asyncio
    async def test_size_limit_exact(self, tmp_path):
        """Test a file exactly at the limit is read."""
        path = tmp_path / 'ok.bin'
        path.write_bytes(b'x' * 50)
        source = FileByteSource(max_bytes=50)

        assert len(await source.open(ByteSourceRef(str(path)))) == 50

    @pytest.mark.asyncio
    async def test_unsupported_scheme(self, source):
        """Test remote URIs are rejected."""
        with pytest.raises(UnreadableSourceError, match="scheme"):
            await source.open(ByteSourceRef('https://example.com/cat.png'))

    def test_resolve_path(self):
        """Test path resolution."""
        assert FileByteSource.resolve_path('file:///tmp/a%20b.png') == Path('/tmp/a b.png')
        assert FileByteSource.resolve_path('relative/c.png') == Path('relative/c.png')


class TestMemoryByteSource:
    """Test suite for MemoryByteSource."""

    @pytest.mark.asyncio
    async def test_read(self, memory_source, png_ref, png_bytes):
        """Test reading registered data."""
        assert await memory_source.open(png_ref) == png_bytes

    @pytest.mark.asyncio
    async def test_add_returns_ref(self):
        """Test add registers data and returns a reference."""
        source = MemoryByteSource()
        ref = source.add('mem://x', bytearray(b'abc'))

        assert await source.open(ref) == b'abc'

    @pytest.mark.asyncio
    async def test_unknown_uri(self, memory_source):
        """Test unknown URI is unreadable."""
        with pytest.raises(UnreadableSourceError, match="Unknown"):
            await memory_source.open(ByteSourceRef('mem://nope'))

    @pytest.mark.asyncio
    async def test_discard(self, memory_source, png_ref):
        """Test discarded data is no longer readable."""
        memory_source.discard(png_ref.uri)

        with pytest.raises(UnreadableSourceError):
            await memory_source.open(png_ref)

    def test_satisfies_protocol(self, memory_source):
        """Test both sources satisfy the ByteSource protocol."""
        assert isinstance(memory_source, ByteSource)
        assert isinstance(FileByteSource(), ByteSource)
