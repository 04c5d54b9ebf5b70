"""Tests for transport configuration and token storage."""
import aiohttp

from clipboarder.core.session import MemoryTokenStorage, TokenStorage
from clipboarder.core.transport import SSLConfig, TimeoutConfig, TransportConfig


class TestTransportConfig:
    """Test suite for TransportConfig."""

    def test_defaults(self):
        """Test default endpoints."""
        config = TransportConfig.default()

        assert config.text_url == 'http://localhost:8080/api/content/text'
        assert config.image_url == 'http://localhost:8080/api/content/image'

    def test_trailing_slash_stripped(self):
        """Test base URL normalization."""
        config = TransportConfig(base_url='https://clip.example.com//')

        assert config.text_url == 'https://clip.example.com/api/content/text'

    def test_custom_endpoints(self):
        """Test endpoint overrides."""
        config = TransportConfig(base_url='https://x', image_endpoint='/v2/images')

        assert config.image_url == 'https://x/v2/images'

    def test_insecure(self):
        """Test insecure config disables SSL verification."""
        config = TransportConfig.insecure(base_url='https://self-signed')

        assert config.base_url == 'https://self-signed'
        assert config.get_connector_kwargs()['ssl'] is False

    def test_session_kwargs(self):
        """Test session headers and timeout."""
        config = TransportConfig(extra_headers={'X-Device': 'phone'})
        kwargs = config.get_session_kwargs()

        assert kwargs['headers']['User-Agent'] == 'clipboarder/1.0.0'
        assert kwargs['headers']['X-Device'] == 'phone'
        assert isinstance(kwargs['timeout'], aiohttp.ClientTimeout)

    def test_connector_kwargs(self):
        """Test connection pool settings."""
        kwargs = TransportConfig(limit=3, limit_per_host=2).get_connector_kwargs()

        assert kwargs['limit'] == 3
        assert kwargs['limit_per_host'] == 2


class TestTimeoutConfig:
    """Test suite for TimeoutConfig."""

    def test_to_aiohttp(self):
        """Test conversion to ClientTimeout."""
        timeout = TimeoutConfig(total=5, connect=1, sock_read=2).to_aiohttp_timeout()

        assert timeout.total == 5
        assert timeout.connect == 1
        assert timeout.sock_read == 2


class TestSSLConfig:
    """Test suite for SSLConfig."""

    def test_verify_creates_context(self):
        """Test verification yields an SSL context."""
        context = SSLConfig().create_ssl_context()

        assert context.check_hostname is True

    def test_no_verify(self):
        """Test disabled verification."""
        assert SSLConfig(verify=False).create_ssl_context() is False


class TestMemoryTokenStorage:
    """Test suite for MemoryTokenStorage."""

    def test_empty(self):
        """Test no token by default."""
        assert MemoryTokenStorage().load_token() is None

    def test_empty_string_is_no_token(self):
        """Test empty strings count as logged out."""
        assert MemoryTokenStorage('').load_token() is None

    def test_save_and_clear(self):
        """Test saving and clearing."""
        storage = MemoryTokenStorage()
        storage.save_token('abc')
        assert storage.load_token() == 'abc'

        storage.clear()
        assert storage.load_token() is None

    def test_protocol(self):
        """Test storage satisfies TokenStorage."""
        assert isinstance(MemoryTokenStorage(), TokenStorage)
