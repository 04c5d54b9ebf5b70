"""
Data models for upload module.

Requests and outcomes are frozen dataclasses; an outcome never changes
once it has been produced.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class TextUpload:
    """
    Text sent to the backend clipboard.

    Attributes:
        content: Text to store
    """
    content: str


@dataclass(frozen=True)
class ImageUpload:
    """
    Image sent to the backend clipboard as a multipart file.

    Attributes:
        data: Raw image bytes
        mime_type: Content type of the image
        filename: File name used in the multipart body
    """
    data: bytes = field(repr=False)
    mime_type: str
    filename: str

    @property
    def size(self) -> int:
        """Returns image size in bytes."""
        return len(self.data)


UploadRequest = Union[TextUpload, ImageUpload]


class ErrorKind(str, Enum):
    """Reason carried by a failed outcome."""

    UNREADABLE = 'unreadable'
    ALREADY_IN_PROGRESS = 'already_in_progress'
    CANCELLED = 'cancelled'
    TRANSPORT_FAILURE = 'transport_failure'


@dataclass(frozen=True)
class Success:
    """
    Upload reached the backend.

    Attributes:
        server_ack: Whether the backend confirmed the copy
    """
    server_ack: bool = True

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """
    Upload did not complete.

    Attributes:
        kind: Failure category
        message: Human readable detail
    """
    kind: ErrorKind
    message: str = ''

    @property
    def ok(self) -> bool:
        return False


UploadOutcome = Union[Success, Failure]


class AttemptState(str, Enum):
    """Lifecycle state of an upload attempt."""

    CREATED = 'created'
    BUILDING = 'building'
    SENT = 'sent'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'
    CANCELLED = 'cancelled'

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset({
    AttemptState.SUCCEEDED,
    AttemptState.FAILED,
    AttemptState.CANCELLED,
})

# Allowed edges of the attempt state machine
TRANSITIONS = {
    AttemptState.CREATED: frozenset({
        AttemptState.BUILDING, AttemptState.FAILED, AttemptState.CANCELLED
    }),
    AttemptState.BUILDING: frozenset({
        AttemptState.SENT, AttemptState.FAILED, AttemptState.CANCELLED
    }),
    AttemptState.SENT: frozenset({
        AttemptState.SUCCEEDED, AttemptState.FAILED, AttemptState.CANCELLED
    }),
    AttemptState.SUCCEEDED: frozenset(),
    AttemptState.FAILED: frozenset(),
    AttemptState.CANCELLED: frozenset(),
}
