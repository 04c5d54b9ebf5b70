"""
In-memory token storage implementation.

Provides non-persistent token storage for testing and temporary use.
"""
from typing import Optional

from .protocols import TokenStorage


class MemoryTokenStorage(TokenStorage):
    """
    In-memory token storage.

    Useful for:
    - Unit testing
    - Tokens passed on the command line or via environment
    - Hosts that manage the token lifetime themselves

    Example:
        >>> storage = MemoryTokenStorage("token")
        >>> storage.load_token()
        'token'
    """

    def __init__(self, token: Optional[str] = None):
        self._token = token or None

    def load_token(self) -> Optional[str]:
        return self._token

    def save_token(self, token: Optional[str]) -> None:
        """Replace the stored token (None or empty clears it)."""
        self._token = token or None

    def clear(self) -> None:
        self._token = None
