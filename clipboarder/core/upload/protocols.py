"""
Protocol definitions for upload module.

Defines the collaborators the coordinator depends on. Hosts supply their
own implementations; the services package ships default ones.
"""
from typing import Protocol, runtime_checkable

from ..share.models import ByteSourceRef, PayloadKind
from .models import UploadRequest, UploadOutcome


@runtime_checkable
class Uploader(Protocol):
    """Protocol for the network transport that stores shared content."""

    async def send(self, request: UploadRequest) -> UploadOutcome:
        """
        Send one request to the backend.

        Args:
            request: Text or image upload request

        Returns:
            Success or Failure outcome
        """
        ...


@runtime_checkable
class ByteSource(Protocol):
    """Protocol for reading the data behind a ByteSourceRef."""

    async def open(self, ref: ByteSourceRef) -> bytes:
        """
        Read the referenced data into memory.

        The underlying handle must be released before this returns,
        whether it succeeds, fails or is cancelled.

        Args:
            ref: Reference to read

        Returns:
            Complete data

        Raises:
            UnreadableSourceError: If the data cannot be opened or fully read
        """
        ...


@runtime_checkable
class ResultPresenter(Protocol):
    """Protocol for turning an outcome into user-facing text."""

    def present(self, kind: PayloadKind, outcome: UploadOutcome) -> str:
        """
        Render a message for an outcome.

        Args:
            kind: Kind of the payload that was uploaded
            outcome: Terminal outcome of the attempt

        Returns:
            Message to show to the user
        """
        ...


class LoggerProtocol(Protocol):
    """Protocol for logger objects."""

    def debug(self, msg: str) -> None: ...
    def info(self, msg: str) -> None: ...
    def warning(self, msg: str) -> None: ...
    def error(self, msg: str) -> None: ...
