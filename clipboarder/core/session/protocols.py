"""
Token storage protocol.

The host owns credentials; the client only asks whether a token exists.
"""
from typing import Protocol, Optional, runtime_checkable


@runtime_checkable
class TokenStorage(Protocol):
    """
    Protocol for access token lookup.

    Implementations can use a keyring, an encrypted preference store or
    any other backend. Logging in and refreshing tokens happen elsewhere.
    """

    def load_token(self) -> Optional[str]:
        """
        Return the current access token.

        Returns:
            Token string, or None when the user is not logged in
        """
        ...
