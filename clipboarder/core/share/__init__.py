"""
Share module.

Typed payload model and the classifier that builds payloads from raw
share events.
"""
from .models import (
    ActionKind,
    PayloadKind,
    ByteSourceRef,
    SingleText,
    MultiText,
    SingleImage,
    MultiImage,
    SharePayload,
    ShareRequest,
    DataRef,
)
from .classifier import PayloadClassifier, classify, classify_request

__all__ = [
    # Models
    'ActionKind',
    'PayloadKind',
    'ByteSourceRef',
    'SingleText',
    'MultiText',
    'SingleImage',
    'MultiImage',
    'SharePayload',
    'ShareRequest',
    'DataRef',

    # Classification
    'PayloadClassifier',
    'classify',
    'classify_request',
]
