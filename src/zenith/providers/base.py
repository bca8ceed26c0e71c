"""
Abstract base class for image generation providers
"""
from abc import ABC, abstractmethod
from typing import Optional

from zenith.schemas import GenerateRequest, GenerateSuccess


class ImageProvider(ABC):
    """Abstract base class for image generation"""

    id: str
    name: str

    @abstractmethod
    async def generate(
        self, request: GenerateRequest, auth_token: Optional[str] = None
    ) -> GenerateSuccess:
        """
        Generate an image for the request

        Args:
            request: Canonical request, provider and model already resolved
            auth_token: Credential for this provider, if any

        Returns:
            GenerateSuccess carrying a url and/or base64 payload

        Raises:
            ProviderError subclasses for protocol failures; transport errors
            from the underlying HTTP library propagate unchanged
        """
        pass
