"""This module holds the configuration variables of the application.

Every value can be overridden from the environment.
"""

import os

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "http://localhost:5173,*").split(",")

GITEE_BASE_URL: str = os.getenv("GITEE_BASE_URL", "https://ai.gitee.com/v1")

HF_SPACES: dict[str, str] = {
    "zImage": os.getenv("HF_ZIMAGE_SPACE", "https://luca115-z-image-turbo.hf.space"),
    "qwen": os.getenv("HF_QWEN_SPACE", "https://mcp-tools-qwen-image-fast.hf.space"),
    "upscaler": os.getenv("HF_UPSCALER_SPACE", "https://tuan2308-upscaler.hf.space"),
}

SUBMIT_TIMEOUT: float = float(os.getenv("SUBMIT_TIMEOUT", "30"))  # seconds
STREAM_TIMEOUT: float = float(os.getenv("STREAM_TIMEOUT", "300"))  # seconds
GITEE_TIMEOUT: float = float(os.getenv("GITEE_TIMEOUT", "120"))  # seconds

UPSCALER_ENDPOINT: str = os.getenv("UPSCALER_ENDPOINT", "realesrgan")
UPSCALER_MODEL: str = os.getenv("UPSCALER_MODEL", "RealESRGAN_x4plus")

SETTINGS_PATH: str = os.getenv("SETTINGS_PATH", "~/.zenith/settings.json")
