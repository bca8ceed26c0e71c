"""
Gitee AI provider, OpenAI-compatible image endpoint
"""
import logging
from typing import Callable, Optional

from openai import AsyncOpenAI

from zenith.config import GITEE_TIMEOUT
from zenith.errors import AuthRequired, NoImageReturned
from zenith.registry import PROVIDER_CONFIGS
from zenith.schemas import GenerateRequest, GenerateSuccess

from .base import ImageProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "z-image-turbo"
DEFAULT_STEPS = 9


class GiteeProvider(ImageProvider):
    """Single request/response round trip through the OpenAI SDK"""

    id = "gitee"
    name = "Gitee AI"

    def __init__(self, client_factory: Callable[..., AsyncOpenAI] = AsyncOpenAI):
        self.client_factory = client_factory
        self.base_url = PROVIDER_CONFIGS[self.id].base_url

    async def generate(
        self, request: GenerateRequest, auth_token: Optional[str] = None
    ) -> GenerateSuccess:
        api_key = (auth_token or "").strip()
        if not api_key:
            raise AuthRequired("API Key is required for Gitee AI")

        size = f"{request.width}x{request.height}"
        logger.debug("Calling Gitee AI images.generate, model=%s size=%s", request.model, size)

        async with self.client_factory(
            base_url=self.base_url,
            api_key=api_key,
            timeout=GITEE_TIMEOUT,
            max_retries=0,
        ) as client:
            response = await client.images.generate(
                prompt=request.prompt,
                model=request.model or DEFAULT_MODEL,
                size=size,
                extra_body={
                    "negative_prompt": request.negative_prompt or "",
                    "num_inference_steps": request.steps if request.steps is not None else DEFAULT_STEPS,
                },
            )

        image_data = response.data[0] if response.data else None
        if image_data is None or (not image_data.url and not image_data.b64_json):
            raise NoImageReturned("No image returned from Gitee AI")

        return GenerateSuccess(url=image_data.url, b64_json=image_data.b64_json)
