import base64
import random
from typing import Optional

MAX_SEED = 2**31 - 1


def define_seed(seed: Optional[int]) -> int:
    """
    Define the seed for random number generation.
    If no seed is given, a new random seed in [0, 2^31 - 1) is generated.
    Otherwise, the provided seed is used.
    """
    return random.randrange(MAX_SEED) if seed is None else seed


def is_http_url(data: str) -> bool:
    """
    Check if the provided data is a plain http(s) URL
    """
    return data.startswith(("http://", "https://"))


def to_data_url(b64_json: str, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{b64_json}"


def remove_b64_header(data: str) -> str:
    """
    Remove the base64 header from a data URL.
    """
    if data.startswith("data:image/"):
        img_b64 = data.split(",", 1)[-1]
        img_b64 = "".join(img_b64.split())
        padding = len(img_b64) % 4
        if padding:
            img_b64 += "=" * (4 - padding)
        return img_b64
    return data


def decode_data_url(data: str) -> bytes:
    return base64.b64decode(remove_b64_header(data))
