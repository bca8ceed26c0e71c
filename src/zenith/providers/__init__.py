"""Image generation providers"""
from typing import Optional

from .base import ImageProvider
from .gitee import GiteeProvider
from .huggingface import HuggingFaceProvider

__all__ = ['ImageProvider', 'GiteeProvider', 'HuggingFaceProvider', 'DRIVERS', 'get_driver']

DRIVERS: dict[str, ImageProvider] = {
    GiteeProvider.id: GiteeProvider(),
    HuggingFaceProvider.id: HuggingFaceProvider(),
}


def get_driver(provider_id: str) -> Optional[ImageProvider]:
    return DRIVERS.get(provider_id)
