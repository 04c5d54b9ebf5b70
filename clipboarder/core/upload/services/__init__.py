"""Upload services module."""
from .byte_source import FileByteSource, MemoryByteSource
from .request_builder import (
    build_image_request,
    build_text_request,
    image_extension,
    image_filename,
)
from .http_uploader import HttpUploader

__all__ = [
    'FileByteSource',
    'MemoryByteSource',
    'build_image_request',
    'build_text_request',
    'image_extension',
    'image_filename',
    'HttpUploader',
]
