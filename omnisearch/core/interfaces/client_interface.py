"""
Client interface definitions for external service interactions.

This module defines the abstract interfaces that the remote search gateway,
the image encoder and the voice transcriber must follow.
"""

from abc import ABC, abstractmethod
from os import PathLike
from typing import Union

from ..entities import ImageUpload, SearchOutcome, SearchRequest

ImageSource = Union[str, PathLike, ImageUpload]


class SearchGatewayInterface(ABC):
    """Interface for the remote search endpoint."""

    @abstractmethod
    async def submit(self, request: SearchRequest) -> SearchOutcome:
        """
        Send a request to the remote search service.

        Implementations never raise for remote or transport problems; they
        return a Failure outcome instead.

        Args:
            request: Canonical search request

        Returns:
            SearchOutcome: Success or Failure
        """
        pass

    async def aclose(self) -> None:
        """Release network resources held by the gateway."""


class ImageEncoderInterface(ABC):
    """Interface for turning an image into a text-safe payload."""

    @abstractmethod
    async def encode(self, source: ImageSource) -> str:
        """
        Encode an image.

        Args:
            source: Path to an image file or an in-memory upload

        Returns:
            str: Encoded payload

        Raises:
            ImageEncodingError: If the image cannot be read
        """
        pass


class VoiceTranscriberInterface(ABC):
    """Interface for speech capture that yields a transcript."""

    @abstractmethod
    async def transcribe(self) -> str:
        """
        Capture speech and return what was said.

        Returns:
            str: The final transcript
        """
        pass
