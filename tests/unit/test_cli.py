"""Tests for the command line interface."""
import pytest
from typer.testing import CliRunner

from clipboarder import ClipboarderClient, ErrorKind, Failure, ImageUpload, TextUpload
from clipboarder.cli import main as cli
from clipboarder.cli.main import app, detect_mime_type

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials out of the tests."""
    monkeypatch.delenv('CLIPBOARDER_TOKEN', raising=False)
    monkeypatch.delenv('CLIPBOARDER_URL', raising=False)


@pytest.fixture
def fake_client(monkeypatch, uploader):
    """Route CLI uploads to the recording uploader."""
    def make_client(url, token, insecure=False):
        return ClipboarderClient(access_token=token, uploader=uploader)

    monkeypatch.setattr(cli, 'make_client', make_client)
    return uploader


class TestTextCommand:
    """Tests for `clipboarder text`."""

    def test_requires_token(self):
        """Test missing token fails with a login hint."""
        result = runner.invoke(app, ['text', 'hello'])

        assert result.exit_code == 1
        assert 'Login required' in result.output

    def test_copies_text(self, fake_client):
        """Test a text is uploaded."""
        result = runner.invoke(app, ['text', 'hello', '--token', 'abc'])

        assert result.exit_code == 0, result.output
        assert 'Text copied' in result.output
        assert fake_client.requests == [TextUpload('hello')]

    def test_token_from_env(self, fake_client, monkeypatch):
        """Test the token can come from the environment."""
        monkeypatch.setenv('CLIPBOARDER_TOKEN', 'from-env')

        result = runner.invoke(app, ['text', 'hi'])

        assert result.exit_code == 0, result.output

    def test_multiple_texts(self, fake_client):
        """Test several texts are joined in one upload."""
        result = runner.invoke(app, ['text', 'one', 'two', '--token', 'abc'])

        assert result.exit_code == 0, result.output
        assert 'Texts copied' in result.output
        assert fake_client.requests == [TextUpload('one\ntwo')]

    def test_blank_text(self, fake_client):
        """Test blank text is refused."""
        result = runner.invoke(app, ['text', '  ', '--token', 'abc'])

        assert result.exit_code == 1
        assert fake_client.calls == 0

    def test_upload_failure(self, fake_client):
        """Test a failed upload exits with an error."""
        fake_client.outcome = Failure(ErrorKind.TRANSPORT_FAILURE, 'HTTP 502: Bad Gateway')

        result = runner.invoke(app, ['text', 'hello', '--token', 'abc'])

        assert result.exit_code == 1
        assert 'Bad Gateway' in result.output


class TestImageCommand:
    """Tests for `clipboarder image`."""

    def test_uploads_image(self, fake_client, png_file, png_bytes):
        """Test an image file is uploaded."""
        result = runner.invoke(app, ['image', str(png_file), '--token', 'abc'])

        assert result.exit_code == 0, result.output
        assert 'Image uploaded' in result.output
        assert fake_client.requests == [
            ImageUpload(png_bytes, 'image/png', 'uploaded_image.png')
        ]

    def test_missing_file(self, fake_client, tmp_path):
        """Test a missing file is reported before uploading."""
        result = runner.invoke(app, ['image', str(tmp_path / 'nope.png'), '--token', 'abc'])

        assert result.exit_code == 1
        assert 'File not found' in result.output
        assert fake_client.calls == 0

    def test_multiple_images(self, fake_client, png_file, tmp_path, png_bytes):
        """Test several images are uploaded in order."""
        second = tmp_path / 'second.png'
        second.write_bytes(png_bytes)

        result = runner.invoke(app, ['image', str(png_file), str(second), '--token', 'abc'])

        assert result.exit_code == 0, result.output
        assert 'Images uploaded' in result.output
        assert fake_client.calls == 2


class TestClassifyCommand:
    """Tests for `clipboarder classify`."""

    def test_send_text(self):
        """Test shared text is shown as multi_text."""
        result = runner.invoke(app, ['classify', 'hello', '--action', 'send', '--type', 'text/plain'])

        assert result.exit_code == 0, result.output
        assert 'multi_text' in result.output
        assert 'hello' in result.output

    def test_unsupported(self):
        """Test unsupported combinations exit with an error."""
        result = runner.invoke(app, ['classify', 'x', '--action', 'send', '--type', 'video/mp4'])

        assert result.exit_code == 1
        assert 'Unsupported' in result.output

    def test_image_uri(self):
        """Test an image reference is shown as single_image."""
        result = runner.invoke(app, ['classify', 'cat.png', '--action', 'send', '--type', 'image/png'])

        assert result.exit_code == 0, result.output
        assert 'single_image' in result.output


class TestDetectMimeType:
    """Tests for image type detection."""

    def test_from_extension(self, png_file):
        """Test extension based detection."""
        assert detect_mime_type(png_file) == 'image/png'

    def test_from_content(self, tmp_path, png_bytes):
        """Test Pillow detects images without an extension."""
        path = tmp_path / 'screenshot'
        path.write_bytes(png_bytes)

        assert detect_mime_type(path) == 'image/png'

    def test_not_an_image(self, tmp_path):
        """Test non-images fall back to the guessed type."""
        path = tmp_path / 'notes.txt'
        path.write_text('hello')

        assert detect_mime_type(path) == 'text/plain'


class TestPackage:
    """Tests for the cli package exports."""

    def test_main_is_the_module(self):
        """Test the package attribute resolves to the commands module."""
        assert hasattr(cli, 'make_client')
        assert callable(cli.main)
