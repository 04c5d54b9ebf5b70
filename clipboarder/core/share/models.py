"""
Data models for incoming share requests.

Payloads are frozen dataclasses: once classified they are immutable and
hashable, so equal payloads compare and hash equal.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from ..exceptions import EmptyContentError, UnsupportedShareError


class ActionKind(str, Enum):
    """Kind of share event delivered by the host."""

    PROCESS_TEXT = 'android.intent.action.PROCESS_TEXT'
    SEND = 'android.intent.action.SEND'
    SEND_MULTIPLE = 'android.intent.action.SEND_MULTIPLE'

    @classmethod
    def parse(cls, value: Union[str, 'ActionKind']) -> 'ActionKind':
        """
        Parse an action from its full name or a short name.

        Short names are case-insensitive and accept ``-`` or ``_``:
        ``send``, ``send-multiple``, ``PROCESS_TEXT``.

        Raises:
            UnsupportedShareError: If the value names no known action
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        short = str(value).strip().upper().replace('-', '_')
        if short in cls.__members__:
            return cls.__members__[short]
        raise UnsupportedShareError(f"Unknown share action: {value!r}", action=str(value))


class PayloadKind(str, Enum):
    """Variant tag of a SharePayload."""

    SINGLE_TEXT = 'single_text'
    MULTI_TEXT = 'multi_text'
    SINGLE_IMAGE = 'single_image'
    MULTI_IMAGE = 'multi_image'

    @property
    def is_text(self) -> bool:
        return self in (PayloadKind.SINGLE_TEXT, PayloadKind.MULTI_TEXT)

    @property
    def is_multiple(self) -> bool:
        return self in (PayloadKind.MULTI_TEXT, PayloadKind.MULTI_IMAGE)


@dataclass(frozen=True)
class ByteSourceRef:
    """
    Handle to readable binary data owned by the host.

    Attributes:
        uri: Location understood by a ByteSource (path, file:// URI, key)
        mime_type: MIME type declared for this data, if known
    """
    uri: str
    mime_type: Optional[str] = None


def _require_text(value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise EmptyContentError("Shared text is empty")
    return value


@dataclass(frozen=True)
class SingleText:
    """One selected text."""
    content: str

    def __post_init__(self):
        _require_text(self.content)

    @property
    def kind(self) -> PayloadKind:
        return PayloadKind.SINGLE_TEXT


@dataclass(frozen=True)
class MultiText:
    """
    One or more shared texts, in the order they were shared.

    Example:
        >>> MultiText(["a", "b"]).items
        ('a', 'b')
    """
    items: Tuple[str, ...]

    def __post_init__(self):
        items = tuple(self.items)
        if not items:
            raise EmptyContentError("No text items shared")
        for item in items:
            _require_text(item)
        object.__setattr__(self, 'items', items)

    @property
    def kind(self) -> PayloadKind:
        return PayloadKind.MULTI_TEXT


@dataclass(frozen=True)
class SingleImage:
    """One shared image."""
    source: ByteSourceRef
    declared_mime_type: str

    @property
    def kind(self) -> PayloadKind:
        return PayloadKind.SINGLE_IMAGE


@dataclass(frozen=True)
class MultiImage:
    """Several shared images, in the order they were shared."""
    sources: Tuple[ByteSourceRef, ...]

    def __post_init__(self):
        sources = tuple(self.sources)
        if not sources:
            raise EmptyContentError("No images shared")
        object.__setattr__(self, 'sources', sources)

    @property
    def kind(self) -> PayloadKind:
        return PayloadKind.MULTI_IMAGE


SharePayload = Union[SingleText, MultiText, SingleImage, MultiImage]
DataRef = Union[str, ByteSourceRef]


@dataclass(frozen=True)
class ShareRequest:
    """
    Plain description of a share event, filled in by the host.

    Attributes:
        action: Share action kind
        mime_type: MIME type declared by the sending app
        texts: Text values attached to the event
        streams: Binary data references attached to the event
    """
    action: ActionKind
    mime_type: Optional[str] = None
    texts: Tuple[str, ...] = field(default_factory=tuple)
    streams: Tuple[ByteSourceRef, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'action', ActionKind.parse(self.action))
        object.__setattr__(self, 'texts', tuple(self.texts))
        object.__setattr__(self, 'streams', tuple(self.streams))

    @property
    def refs(self) -> Tuple[DataRef, ...]:
        """All attached data references, texts first."""
        return self.texts + self.streams
