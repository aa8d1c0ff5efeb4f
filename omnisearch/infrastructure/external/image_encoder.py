"""
Image encoding for image searches.

Images travel inside the JSON request as base64 data URLs.
"""

import base64
import mimetypes
import os
from pathlib import PurePath

import aiofiles

from ...core.entities import ImageUpload
from ...core.interfaces import ImageEncoderInterface, ImageSource
from ...shared.exceptions import ImageEncodingError
from ...shared.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def guess_content_type(filename: str) -> str:
    """Guess a MIME type from a file name."""
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or DEFAULT_CONTENT_TYPE


def to_data_url(data: bytes, content_type: str) -> str:
    """
    Build a base64 data URL.

    Args:
        data: Raw bytes
        content_type: MIME type of the data

    Returns:
        str: ``data:<type>;base64,<payload>``
    """
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


class DataUrlImageEncoder(ImageEncoderInterface):
    """Encodes image files or uploads as data URLs."""

    async def encode(self, source: ImageSource) -> str:
        """
        Encode an image.

        Args:
            source: Path to an image file or an in-memory upload

        Returns:
            str: Data URL

        Raises:
            ImageEncodingError: If the file cannot be read or is empty
        """
        if isinstance(source, ImageUpload):
            name = source.filename
            data = source.data
            content_type = source.content_type or guess_content_type(name)
        else:
            path = os.fspath(source)
            name = PurePath(path).name
            content_type = guess_content_type(name)
            try:
                async with aiofiles.open(path, "rb") as f:
                    data = await f.read()
            except OSError as e:
                raise ImageEncodingError(
                    f"Could not read image '{name}': {e.strerror or e}",
                    filename=name
                ) from e

        if not data:
            raise ImageEncodingError(f"Image '{name}' is empty", filename=name)

        logger.debug(
            "Image encoded",
            filename=name,
            content_type=content_type,
            size_bytes=len(data)
        )
        return to_data_url(data, content_type)
