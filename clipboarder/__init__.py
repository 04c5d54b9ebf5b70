"""
Clipboarder - Async share ingestion for a cloud clipboard.

Usage:
    >>> from clipboarder import ClipboarderClient, ShareRequest, ActionKind
    >>>
    >>> async with ClipboarderClient(access_token="token") as client:
    ...     result = await client.share(
    ...         ShareRequest(ActionKind.SEND, "text/plain", texts=["hello"])
    ...     )
    ...     print(result.message)
"""
import logging
from .client import ClipboarderClient, ShareResult

# Payload model and classification
from .core.share import (
    ActionKind,
    PayloadKind,
    ByteSourceRef,
    SingleText,
    MultiText,
    SingleImage,
    MultiImage,
    SharePayload,
    ShareRequest,
    PayloadClassifier,
    classify,
)

# Uploads
from .core.upload import (
    UploadCoordinator,
    UploadAttempt,
    AttemptState,
    TextUpload,
    ImageUpload,
    ErrorKind,
    Success,
    Failure,
    Uploader,
    ByteSource,
    ResultPresenter,
    FileByteSource,
    MemoryByteSource,
    HttpUploader,
)
from .core.presenter import DefaultResultPresenter

# Configuration
from .core.transport import TransportConfig, SSLConfig, TimeoutConfig

# Tokens
from .core.session import TokenStorage, MemoryTokenStorage

from .core.exceptions import (
    ClipboarderException,
    ClassificationError,
    UnsupportedShareError,
    EmptyContentError,
    UnreadableSourceError,
    AuthenticationRequiredError,
    InvalidStateTransition,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for clipboarder modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'clipboarder',
        'clipboarder.client',
        'clipboarder.share.classifier',
        'clipboarder.upload.coordinator',
        'clipboarder.upload.http',
        'clipboarder.upload.source',
        'clipboarder.upload.events',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'ClipboarderClient',
    'ShareResult',
    'ActionKind',
    'PayloadKind',
    'ByteSourceRef',
    'SingleText',
    'MultiText',
    'SingleImage',
    'MultiImage',
    'SharePayload',
    'ShareRequest',
    'PayloadClassifier',
    'classify',
    'UploadCoordinator',
    'UploadAttempt',
    'AttemptState',
    'TextUpload',
    'ImageUpload',
    'ErrorKind',
    'Success',
    'Failure',
    'Uploader',
    'ByteSource',
    'ResultPresenter',
    'FileByteSource',
    'MemoryByteSource',
    'HttpUploader',
    'DefaultResultPresenter',
    'TransportConfig',
    'SSLConfig',
    'TimeoutConfig',
    'TokenStorage',
    'MemoryTokenStorage',
    'ClipboarderException',
    'ClassificationError',
    'UnsupportedShareError',
    'EmptyContentError',
    'UnreadableSourceError',
    'AuthenticationRequiredError',
    'InvalidStateTransition',
    'setup_logging',
]
