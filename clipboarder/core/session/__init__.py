"""
Access token lookup.

Provides:
- TokenStorage: Protocol for token storage implementations
- MemoryTokenStorage: In-memory storage for tests and ad-hoc tokens
"""
from .protocols import TokenStorage
from .memory_session import MemoryTokenStorage

__all__ = [
    'TokenStorage',
    'MemoryTokenStorage',
]
