"""
Transport configuration module.

Provides configuration for the HTTP uploader talking to the Clipboarder
backend.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import ssl


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Allows customization of SSL behavior for security requirements.
    """
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self):
        """Create SSL context from configuration (False disables checks)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        if self.cert_file:
            context.load_cert_chain(
                self.cert_file,
                keyfile=self.key_file
            )

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Images can be large, so the total timeout is generous.
    """
    total: float = 120.0
    connect: float = 10.0
    sock_read: float = 60.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class TransportConfig:
    """
    Complete transport configuration.

    Example:
        >>> config = TransportConfig(base_url="https://clip.example.com")
        >>> config.text_url
        'https://clip.example.com/api/content/text'
    """
    base_url: str = 'http://localhost:8080'
    text_endpoint: str = '/api/content/text'
    image_endpoint: str = '/api/content/image'

    user_agent: str = 'clipboarder/1.0.0'

    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Logging
    log_level: int = 20  # logging.INFO

    # Connection pool settings
    limit: int = 10
    limit_per_host: int = 4

    def __post_init__(self):
        self.base_url = self.base_url.rstrip('/')

    @classmethod
    def default(cls) -> 'TransportConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def insecure(cls, **kwargs) -> 'TransportConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    @property
    def text_url(self) -> str:
        return f"{self.base_url}{self.text_endpoint}"

    @property
    def image_url(self) -> str:
        return f"{self.base_url}{self.image_endpoint}"

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
