"""Upload models."""
from .upload_models import (
    TextUpload,
    ImageUpload,
    UploadRequest,
    ErrorKind,
    Success,
    Failure,
    UploadOutcome,
    AttemptState,
    TERMINAL_STATES,
    TRANSITIONS,
)

__all__ = [
    'TextUpload',
    'ImageUpload',
    'UploadRequest',
    'ErrorKind',
    'Success',
    'Failure',
    'UploadOutcome',
    'AttemptState',
    'TERMINAL_STATES',
    'TRANSITIONS',
]
