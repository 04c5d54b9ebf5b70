"""Transport configuration."""
from .config import TransportConfig, SSLConfig, TimeoutConfig

__all__ = [
    'TransportConfig',
    'SSLConfig',
    'TimeoutConfig',
]
