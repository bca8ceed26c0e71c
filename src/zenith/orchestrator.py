"""
Image generator orchestrator

Client-side sequencing on top of the dispatcher: generate, then optionally
upscale, while keeping a human-readable status log and the user's settings.

Responsibilities:
- Load and save user settings as JSON
- Keep aspect ratio presets and width/height in sync
- Run generation and the optional automatic 8K upscale
- Manual 4x upscale, download and delete of the current image

Credentials are held in memory only.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from zenith.config import SETTINGS_PATH
from zenith.registry import PROVIDER_DISPLAY_NAMES, resolve_provider
from zenith.schemas import AuthTokens, GenerateRequest
from zenith.services.generation import dispatch
from zenith.services.images import save_image, upscale_image
from zenith.utils import is_http_url, to_data_url

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "A serene mountain lake at sunrise, mist over the water, photorealistic"
DEFAULT_NEGATIVE_PROMPT = "blurry, low quality, distorted, watermark"


@dataclass(frozen=True)
class AspectRatio:
    label: str
    presets: tuple[tuple[int, int], tuple[int, int]]  # (normal, uhd) as (w, h)


ASPECT_RATIOS: tuple[AspectRatio, ...] = (
    AspectRatio("1:1", ((1024, 1024), (2048, 2048))),
    AspectRatio("16:9", ((1280, 720), (2560, 1440))),
    AspectRatio("9:16", ((720, 1280), (1440, 2560))),
    AspectRatio("4:3", ((1152, 864), (2048, 1536))),
    AspectRatio("3:4", ((864, 1152), (1536, 2048))),
)


class Settings(BaseModel):
    prompt: str = DEFAULT_PROMPT
    negative_prompt: str = DEFAULT_NEGATIVE_PROMPT
    width: int = 1024
    height: int = 1024
    steps: int = 9
    selected_ratio: str = "1:1"
    uhd: bool = False
    upscale8k: bool = False
    api_provider: str = "gitee"


def load_settings(path: Path) -> Settings:
    if not path.exists():
        return Settings()
    try:
        return Settings.model_validate_json(path.read_text(encoding="utf-8"))
    except ValueError:
        logger.warning("Ignoring unreadable settings file %s", path)
        return Settings()


def save_settings(path: Path, settings: Settings):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.model_dump(), indent=2), encoding="utf-8")


class ImageGenerator:

    def __init__(
        self,
        settings_path: Optional[Path] = None,
        api_key: str = "",
        hf_token: str = "",
        model: str = "z-image-turbo",
    ):
        self.settings_path = Path(settings_path or SETTINGS_PATH).expanduser()
        self.settings = load_settings(self.settings_path)
        self.api_key = api_key
        self.hf_token = hf_token
        self.model = model
        self.image_url: Optional[str] = None
        self.is_upscaled = False
        self.is_upscaling = False
        self.loading = False
        self.status: list[str] = ["Ready."]

    def save(self):
        save_settings(self.settings_path, self.settings)

    def update_settings(self, **changes):
        self.settings = self.settings.model_copy(update=changes)
        self.save()

    def add_status(self, msg: str):
        self.status.append(msg)
        logger.info(msg)

    def select_ratio(self, label: str):
        ratio = next((r for r in ASPECT_RATIOS if r.label == label), None)
        if ratio is None:
            raise ValueError(f"Unknown aspect ratio: {label}")
        width, height = ratio.presets[1] if self.settings.uhd else ratio.presets[0]
        self.update_settings(selected_ratio=label, width=width, height=height)

    def toggle_uhd(self, enabled: bool):
        changes = {"uhd": enabled}
        ratio = next((r for r in ASPECT_RATIOS if r.label == self.settings.selected_ratio), None)
        if ratio is not None:
            changes["width"], changes["height"] = ratio.presets[1] if enabled else ratio.presets[0]
        self.update_settings(**changes)

    def _tokens(self) -> AuthTokens:
        provider_id, _ = resolve_provider(self.settings.api_provider)
        if provider_id == "gitee":
            return AuthTokens(api_key=self.api_key)
        return AuthTokens(hf_token=self.hf_token or None)

    async def generate(self) -> Optional[str]:
        """Run one generation. Returns the image URL or None on failure."""
        settings = self.settings
        provider_id, _ = resolve_provider(settings.api_provider)
        if provider_id == "gitee" and not self.api_key:
            self.add_status("Error: Please configure your API Key first")
            return None

        self.loading = True
        self.image_url = None
        self.is_upscaled = False
        self.status = ["Initializing..."]
        try:
            provider_name = PROVIDER_DISPLAY_NAMES.get(settings.api_provider, settings.api_provider)
            self.add_status(f"Sending request to {provider_name}...")

            request = GenerateRequest(
                provider=settings.api_provider,
                model=self.model if provider_id == "gitee" else None,
                prompt=settings.prompt,
                negative_prompt=settings.negative_prompt,
                width=settings.width,
                height=settings.height,
                steps=settings.steps if provider_id == "gitee" else None,
            )
            result = await dispatch(settings.api_provider, request, self._tokens())
            if not result.success:
                self.add_status(f"Error: {result.error}")
                return None

            data = result.data
            generated_url = data.url or (to_data_url(data.b64_json) if data.b64_json else None)
            if not generated_url:
                self.add_status("Error: No image returned")
                return None
            self.add_status("Image generated!")

            if settings.upscale8k and is_http_url(generated_url):
                self.add_status("Upscaling to 8K...")
                up_result = await upscale_image(generated_url, 4, self.hf_token or None)
                if up_result.success:
                    generated_url = up_result.data.url
                    self.add_status("8K upscale complete!")
                else:
                    self.add_status(f"8K upscale failed: {up_result.error}")

            self.image_url = generated_url
            return generated_url
        finally:
            self.loading = False

    async def upscale(self) -> bool:
        if not self.image_url or self.is_upscaling or self.is_upscaled:
            return False
        self.is_upscaling = True
        self.add_status("Upscaling to 4x...")
        try:
            result = await upscale_image(self.image_url, 4, self.hf_token or None)
            if result.success:
                self.image_url = result.data.url
                self.is_upscaled = True
                self.add_status("4x upscale complete!")
                return True
            self.add_status(f"Upscale failed: {result.error}")
            return False
        finally:
            self.is_upscaling = False

    def download(self, directory: Path) -> Optional[Path]:
        if not self.image_url:
            return None
        return save_image(self.image_url, Path(directory))

    def delete(self):
        self.image_url = None
        self.is_upscaled = False
