"""
Upload module for shared content.

The coordinator drives one attempt per payload; transport and byte
reading are pluggable through the protocols below.
"""
from .coordinator import UploadCoordinator, UploadAttempt
from .models import (
    TextUpload,
    ImageUpload,
    UploadRequest,
    ErrorKind,
    Success,
    Failure,
    UploadOutcome,
    AttemptState,
)
from .protocols import (
    Uploader,
    ByteSource,
    ResultPresenter,
)
from .services import (
    FileByteSource,
    MemoryByteSource,
    HttpUploader,
    image_filename,
)

__all__ = [
    # Main classes
    'UploadCoordinator',
    'UploadAttempt',

    # Models
    'TextUpload',
    'ImageUpload',
    'UploadRequest',
    'ErrorKind',
    'Success',
    'Failure',
    'UploadOutcome',
    'AttemptState',

    # Protocols
    'Uploader',
    'ByteSource',
    'ResultPresenter',

    # Services
    'FileByteSource',
    'MemoryByteSource',
    'HttpUploader',
    'image_filename',
]
