import asyncio

import httpx
import openai
import pytest

from conftest import FakeOpenAI, FakeResponse, FakeSession, image_item
from zenith.config import HF_SPACES
from zenith.errors import AuthRequired, NoImageReturned
from zenith.providers import GiteeProvider, HuggingFaceProvider
from zenith.schemas import GenerateRequest


def gitee_request(**overrides):
    fields = {"provider": "gitee", "prompt": "a cat", "width": 1024, "height": 768}
    fields.update(overrides)
    return GenerateRequest(**fields)


class TestGiteeProvider:

    def test_single_call_with_size_string(self):
        fake = FakeOpenAI([image_item(url="http://img/1.png")])
        provider = GiteeProvider(client_factory=fake)

        result = asyncio.run(provider.generate(gitee_request(), "  sk-test  "))

        assert result.url == "http://img/1.png"
        assert len(fake.calls) == 1
        call = fake.calls[0]
        assert call["size"] == "1024x768"
        assert call["model"] == "z-image-turbo"
        assert call["extra_body"] == {"negative_prompt": "", "num_inference_steps": 9}
        assert fake.instances[0]["api_key"] == "sk-test"
        assert fake.instances[0]["base_url"] == "https://ai.gitee.com/v1"
        assert fake.instances[0]["max_retries"] == 0

    def test_forwards_negative_prompt_and_steps(self):
        fake = FakeOpenAI([image_item(b64_json="aGVsbG8=")])
        provider = GiteeProvider(client_factory=fake)
        request = gitee_request(model="z-image-turbo", negative_prompt="blurry", steps=20)

        result = asyncio.run(provider.generate(request, "sk-test"))

        assert result.b64_json == "aGVsbG8="
        assert result.url is None
        assert fake.calls[0]["extra_body"] == {"negative_prompt": "blurry", "num_inference_steps": 20}

    @pytest.mark.parametrize("token", [None, "", "   \t"])
    def test_missing_credential_makes_no_call(self, token):
        fake = FakeOpenAI([image_item(url="http://img/1.png")])
        provider = GiteeProvider(client_factory=fake)

        with pytest.raises(AuthRequired, match="API Key is required"):
            asyncio.run(provider.generate(gitee_request(), token))
        assert fake.instances == []
        assert fake.calls == []

    def test_server_error_is_not_retried(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(500, json={"error": {"message": "upstream down"}})

        def client_factory(**kwargs):
            http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            return openai.AsyncOpenAI(http_client=http_client, **kwargs)

        provider = GiteeProvider(client_factory=client_factory)
        with pytest.raises(openai.InternalServerError):
            asyncio.run(provider.generate(gitee_request(), "sk-test"))

        assert len(seen) == 1
        assert str(seen[0].url) == "https://ai.gitee.com/v1/images/generations"

    @pytest.mark.parametrize("data", [[], None, [image_item()]])
    def test_no_image_returned(self, data):
        provider = GiteeProvider(client_factory=FakeOpenAI(data))
        with pytest.raises(NoImageReturned):
            asyncio.run(provider.generate(gitee_request(), "sk-test"))


class TestHuggingFaceProvider:

    def hf_request(self, **overrides):
        fields = {"provider": "huggingface", "model": "z-image", "prompt": "a cat",
                  "width": 1024, "height": 576}
        fields.update(overrides)
        return GenerateRequest(**fields)

    def test_submit_then_poll(self, complete_stream):
        session = FakeSession(FakeResponse(json_data={"event_id": "abc"}), complete_stream)
        provider = HuggingFaceProvider(session=session)

        result = asyncio.run(provider.generate(self.hf_request(seed=7), "hf_123"))

        assert result.url == "http://img/2.png"
        assert result.seed == 7
        post = session.posts[0]
        assert post["url"] == f"{HF_SPACES['zImage']}/gradio_api/call/generate_image"
        assert post["json"] == {"data": ["a cat", 576, 1024, 8, 7, False]}
        assert session.gets[0]["url"].endswith("/gradio_api/call/generate_image/abc")

    def test_qwen_model_selects_qwen_space(self, complete_stream):
        session = FakeSession(FakeResponse(json_data={"event_id": "abc"}), complete_stream)
        provider = HuggingFaceProvider(session=session)

        asyncio.run(provider.generate(self.hf_request(model="qwen")))

        assert session.posts[0]["url"].startswith(HF_SPACES["qwen"])
        assert "Authorization" not in session.posts[0]["headers"]

    def test_random_seed_when_not_given(self, complete_stream):
        session = FakeSession(FakeResponse(json_data={"event_id": "abc"}), complete_stream)
        provider = HuggingFaceProvider(session=session)

        asyncio.run(provider.generate(self.hf_request()))

        seed = session.posts[0]["json"]["data"][4]
        assert isinstance(seed, int)
        assert 0 <= seed < 2**31 - 1

    def test_missing_url_in_payload(self):
        stream = 'event: complete\ndata: [{"path":"/tmp/x.png"},3]\n'
        session = FakeSession(FakeResponse(json_data={"event_id": "abc"}), stream)
        provider = HuggingFaceProvider(session=session)

        with pytest.raises(NoImageReturned, match="No image returned from HuggingFace"):
            asyncio.run(provider.generate(self.hf_request()))

    def test_null_complete_payload(self):
        stream = (
            "event: complete\ndata: null\n\n"
            'event: complete\ndata: [{"url":"http://x/late.png"},1]\n'
        )
        session = FakeSession(FakeResponse(json_data={"event_id": "abc"}), stream)
        provider = HuggingFaceProvider(session=session)

        with pytest.raises(NoImageReturned, match="No image returned from HuggingFace"):
            asyncio.run(provider.generate(self.hf_request()))
