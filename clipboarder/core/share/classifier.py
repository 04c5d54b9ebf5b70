"""
Payload classification.

Turns a raw share event (action, declared MIME type, attached references)
into a validated SharePayload. Pure: no I/O is performed here.
"""
from typing import Optional, Sequence, List, Union

from ..exceptions import UnsupportedShareError
from ..logging import get_logger
from .models import (
    ActionKind,
    ByteSourceRef,
    DataRef,
    MultiImage,
    MultiText,
    SharePayload,
    ShareRequest,
    SingleImage,
    SingleText,
)

logger = get_logger('clipboarder.share.classifier')

TEXT_PLAIN = 'text/plain'
TEXT_PREFIX = 'text/'
IMAGE_PREFIX = 'image/'


class PayloadClassifier:
    """
    Classifies share events into payloads.

    Rules are checked in order and the first match wins:

    1. PROCESS_TEXT with ``text/plain`` and exactly one text -> SingleText
    2. SEND with ``image/*`` and exactly one reference -> SingleImage
    3. SEND with ``text/*`` -> MultiText (also for a single text)
    4. SEND_MULTIPLE with ``image/*`` -> MultiImage
    5. SEND_MULTIPLE with ``text/*`` -> MultiText

    Anything else raises UnsupportedShareError. Text that is blank after
    trimming raises EmptyContentError.

    Example:
        >>> classifier = PayloadClassifier()
        >>> classifier.classify(ActionKind.SEND, "text/plain", ["hello"])
        MultiText(items=('hello',))
    """

    def classify(
        self,
        action: Union[ActionKind, str],
        mime_type: Optional[str],
        refs: Sequence[DataRef]
    ) -> SharePayload:
        """
        Classify a share event.

        Args:
            action: Share action
            mime_type: Declared MIME type, possibly None
            refs: Attached references; ``str`` items are text values,
                ByteSourceRef items are binary streams

        Returns:
            The classified payload

        Raises:
            UnsupportedShareError: If no rule matches
            EmptyContentError: If matched text is blank
        """
        action = ActionKind.parse(action)
        refs = list(refs)

        if not mime_type:
            raise self._unsupported("No MIME type declared", action, mime_type)
        if not refs:
            raise self._unsupported("Share event carries no data", action, mime_type)

        texts = [ref for ref in refs if isinstance(ref, str)]

        if action is ActionKind.PROCESS_TEXT:
            if mime_type == TEXT_PLAIN and len(texts) == 1 and len(refs) == 1:
                payload = SingleText(texts[0])
                logger.debug("Classified selected text")
                return payload

        elif action is ActionKind.SEND:
            if mime_type.startswith(IMAGE_PREFIX) and len(refs) == 1:
                source = self._as_source(refs[0], mime_type)
                logger.debug(f"Classified single image ({mime_type})")
                return SingleImage(
                    source=source,
                    declared_mime_type=source.mime_type
                )
            if mime_type.startswith(TEXT_PREFIX) and texts:
                logger.debug(f"Classified {len(texts)} shared text(s)")
                return MultiText(tuple(texts))

        elif action is ActionKind.SEND_MULTIPLE:
            if mime_type.startswith(IMAGE_PREFIX):
                sources = tuple(self._as_source(ref, mime_type) for ref in refs)
                logger.debug(f"Classified {len(sources)} shared image(s)")
                return MultiImage(sources)
            if mime_type.startswith(TEXT_PREFIX) and texts:
                logger.debug(f"Classified {len(texts)} shared text(s)")
                return MultiText(tuple(texts))

        raise self._unsupported("Unsupported share request", action, mime_type)

    def classify_request(self, request: ShareRequest) -> SharePayload:
        """Classify a ShareRequest built by the host."""
        return self.classify(request.action, request.mime_type, request.refs)

    @staticmethod
    def _as_source(ref: DataRef, mime_type: str) -> ByteSourceRef:
        # A bare string in an image share is the stream URI
        if isinstance(ref, ByteSourceRef):
            if ref.mime_type:
                return ref
            return ByteSourceRef(uri=ref.uri, mime_type=mime_type)
        return ByteSourceRef(uri=ref, mime_type=mime_type)

    @staticmethod
    def _unsupported(
        reason: str,
        action: ActionKind,
        mime_type: Optional[str]
    ) -> UnsupportedShareError:
        logger.debug(f"{reason}: action={action.name}, type={mime_type}")
        return UnsupportedShareError(
            f"{reason} (action={action.name}, type={mime_type})",
            action=action.value,
            mime_type=mime_type
        )


_default_classifier = PayloadClassifier()


def classify(
    action: Union[ActionKind, str],
    mime_type: Optional[str],
    refs: Sequence[DataRef]
) -> SharePayload:
    """Classify a share event with the default classifier."""
    return _default_classifier.classify(action, mime_type, refs)


def classify_request(request: ShareRequest) -> SharePayload:
    """Classify a ShareRequest with the default classifier."""
    return _default_classifier.classify_request(request)
