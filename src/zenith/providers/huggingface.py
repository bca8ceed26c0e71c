"""
HuggingFace provider, Gradio queue/poll protocol against image spaces
"""
import asyncio
import logging
from typing import Optional

import requests

from zenith.config import HF_SPACES
from zenith.errors import NoImageReturned
from zenith.gradio import GradioClient
from zenith.schemas import GenerateRequest, GenerateSuccess
from zenith.utils import define_seed

from .base import ImageProvider

logger = logging.getLogger(__name__)

ENDPOINT = "generate_image"
# Fixed by the spaces' generate_image signature, independent of the model's step default.
FIXED_STEPS = 8


def space_url_for_model(model: Optional[str]) -> str:
    return HF_SPACES["qwen"] if model == "qwen" else HF_SPACES["zImage"]


class HuggingFaceProvider(ImageProvider):
    """Submit to the space queue, then read the event stream for the result"""

    id = "huggingface"
    name = "HuggingFace"

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session

    async def generate(
        self, request: GenerateRequest, auth_token: Optional[str] = None
    ) -> GenerateSuccess:
        seed = define_seed(request.seed)
        data = [request.prompt, request.height, request.width, FIXED_STEPS, seed, False]
        with GradioClient(
            space_url_for_model(request.model), hf_token=auth_token, session=self.session
        ) as client:
            event_id = await asyncio.to_thread(client.submit, ENDPOINT, data)
            result = await asyncio.to_thread(client.fetch_result, ENDPOINT, event_id)

        image = result[0] if isinstance(result, list) and result else None
        image_url = image.get("url") if isinstance(image, dict) else None
        if not image_url:
            raise NoImageReturned("No image returned from HuggingFace")

        used_seed = result[1] if len(result) > 1 else seed
        logger.debug("HuggingFace event %s finished with seed %s", event_id, used_seed)
        return GenerateSuccess(url=image_url, seed=used_seed)
