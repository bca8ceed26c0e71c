import asyncio
import base64
from io import BytesIO

from PIL import Image

from conftest import FakeResponse, FakeSession
from zenith.config import HF_SPACES, UPSCALER_ENDPOINT
from zenith.services.images import save_image, upscale_image


def test_upscale_returns_url():
    stream = 'event: complete\ndata: [{"url":"http://img/big.png"}]\n'
    session = FakeSession(FakeResponse(json_data={"event_id": "up1"}), stream)

    result = asyncio.run(upscale_image("http://img/1.png", 4, "hf_123", session=session))

    assert result.model_dump() == {"success": True, "data": {"url": "http://img/big.png"}}
    post = session.posts[0]
    assert post["url"] == f"{HF_SPACES['upscaler']}/gradio_api/call/{UPSCALER_ENDPOINT}"
    assert post["json"]["data"][0]["path"] == "http://img/1.png"
    assert post["json"]["data"][-1] == 4
    assert post["headers"]["Authorization"] == "Bearer hf_123"


def test_upscale_failure_is_a_string():
    session = FakeSession(FakeResponse(json_data={"event_id": "up1"}), "event: error\n")
    result = asyncio.run(upscale_image("http://img/1.png", session=session))
    assert result.success is False
    assert result.error == "Quota exhausted, please set HF Token"


def test_save_image_from_data_url(tmp_path):
    buffer = BytesIO()
    Image.new("RGBA", (4, 4), (255, 0, 0, 128)).save(buffer, format="PNG")
    data_url = "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode()

    path = save_image(data_url, tmp_path / "downloads")

    assert path.parent == tmp_path / "downloads"
    assert path.name.startswith("zenith-") and path.suffix == ".jpg"
    with Image.open(path) as saved:
        assert saved.format == "JPEG"
        assert saved.size == (4, 4)
