"""
Request building.

Turns payload content into transport requests.
"""
from typing import Optional

from ...share.models import MultiText, SingleText
from ..models import ImageUpload, TextUpload

IMAGE_FILENAME_STEM = 'uploaded_image'
TEXT_SEPARATOR = '\n'


def image_extension(mime_type: Optional[str]) -> str:
    """
    Derive a file extension from an image MIME type.

    Example:
        >>> image_extension("image/png")
        'png'
        >>> image_extension("image/svg+xml; charset=utf-8")
        'svg+xml'
    """
    if not mime_type or not mime_type.startswith('image/'):
        return ''
    subtype = mime_type[len('image/'):].split(';', 1)[0].strip()
    # Wildcard types carry no usable extension
    return '' if subtype == '*' else subtype


def image_filename(mime_type: Optional[str]) -> str:
    """Returns the multipart filename for an image of the given type."""
    return f"{IMAGE_FILENAME_STEM}.{image_extension(mime_type)}"


def build_text_request(payload) -> TextUpload:
    """
    Build a text request from a text payload.

    Multiple texts are joined with newlines into a single upload.

    Raises:
        TypeError: If the payload is not a text payload
    """
    if isinstance(payload, SingleText):
        return TextUpload(content=payload.content)
    if isinstance(payload, MultiText):
        return TextUpload(content=TEXT_SEPARATOR.join(payload.items))
    raise TypeError(f"Not a text payload: {type(payload).__name__}")


def build_image_request(data: bytes, mime_type: Optional[str]) -> ImageUpload:
    """Build a multipart image request from image bytes."""
    return ImageUpload(
        data=data,
        mime_type=mime_type or 'application/octet-stream',
        filename=image_filename(mime_type)
    )
