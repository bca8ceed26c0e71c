"""
Image processing services

Upscaling of generated images through the RealESRGAN Gradio space, and
saving of generated images to disk.

Features:
- 4x upscale returning the same result shape as generation
- Conversion of URLs and data URLs to bytes
- Saving images as JPEG
"""

import asyncio
import logging
import time
from io import BytesIO
from pathlib import Path
from typing import Optional

import requests
from PIL import Image

from zenith.config import HF_SPACES, UPSCALER_ENDPOINT, UPSCALER_MODEL
from zenith.errors import NoImageReturned
from zenith.gradio import GradioClient
from zenith.schemas import ApiFailure, ApiResponse, ApiSuccess, UpscaleResponse
from zenith.utils import decode_data_url, is_http_url

logger = logging.getLogger(__name__)


async def upscale_image(
    url: str,
    scale: int = 4,
    hf_token: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> ApiResponse:
    try:
        data = [{"path": url, "meta": {"_type": "gradio.FileData"}}, UPSCALER_MODEL, scale]
        with GradioClient(HF_SPACES["upscaler"], hf_token=hf_token, session=session) as client:
            result = await asyncio.to_thread(client.call, UPSCALER_ENDPOINT, data)

        image = result[0] if isinstance(result, list) and result else None
        image_url = image.get("url") if isinstance(image, dict) else None
        if not image_url:
            raise NoImageReturned("No image returned from upscaler")
        return ApiSuccess(data=UpscaleResponse(url=image_url))
    except Exception as e:
        logger.warning("Upscale of %s failed: %s", url, e)
        return ApiFailure(error=str(e) or type(e).__name__)


def get_image_bytes(image: str, timeout: float = 30) -> bytes:
    """
    Fetch image bytes from an http(s) URL or a base64 data URL.
    """
    if is_http_url(image):
        resp = requests.get(image, timeout=timeout)
        if resp.status_code != 200:
            raise ValueError(f"Failed to fetch image from {image}")
        return resp.content
    return decode_data_url(image)


def save_image(image: str, directory: Path) -> Path:
    img = Image.open(BytesIO(get_image_bytes(image)))
    if img.mode in ("RGBA", "LA", "P"):
        img = img.convert("RGB")

    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"zenith-{int(time.time() * 1000)}.jpg"
    img.save(path, format="JPEG", quality=95)
    logger.info("Saved image to %s", path)
    return path
