from types import SimpleNamespace

import pytest


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text=""):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._json = json_data
        self.text = text
        self.encoding = None

    def json(self):
        return self._json

    def iter_lines(self, decode_unicode=False):
        return iter(self.text.splitlines())

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeSession:
    """Stands in for requests.Session: one canned submit and one canned stream."""

    def __init__(self, submit_response, stream_text=""):
        self.submit_response = submit_response
        self.stream_text = stream_text
        self.posts = []
        self.gets = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.posts.append({"url": url, "json": json, "headers": dict(headers or {})})
        return self.submit_response

    def get(self, url, headers=None, stream=False, timeout=None):
        self.gets.append({"url": url, "headers": dict(headers or {})})
        return FakeResponse(text=self.stream_text)


class FakeOpenAI:
    """Records constructor kwargs and images.generate calls."""

    def __init__(self, images_data):
        self.images_data = images_data
        self.instances = []
        self.calls = []

    def __call__(self, **kwargs):
        self.instances.append(kwargs)
        fake = self

        class Images:
            async def generate(self, **params):
                fake.calls.append(params)
                return SimpleNamespace(data=fake.images_data)

        class Client:
            images = Images()

            async def __aenter__(self):
                return self

            async def __aexit__(self, *exc):
                return False

        return Client()


def image_item(url=None, b64_json=None):
    return SimpleNamespace(url=url, b64_json=b64_json)


@pytest.fixture()
def complete_stream():
    return 'event: complete\ndata: [{"url":"http://img/2.png"},7]\n'
