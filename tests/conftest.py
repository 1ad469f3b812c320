import base64
import io

import pytest
from PIL import Image

from cinescape.core.studio import StudioState


class FakeImageClient:
    """Records submitted parts and replies with a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else image_response("ZZZZ")
        self.error = error
        self.calls = []

    def generate_content(self, parts, aspect_ratio="16:9"):
        self.calls.append({"parts": parts, "aspect_ratio": aspect_ratio})
        if self.error is not None:
            raise self.error
        return self.response


class FakeBackend:
    """Studio backend that counts invocations instead of calling a model."""

    def __init__(self, image_url="data:image/png;base64,ZZZZ", error=None):
        self.image_url = image_url
        self.error = error
        self.generate_calls = []
        self.expand_calls = []

    @property
    def call_count(self):
        return len(self.generate_calls) + len(self.expand_calls)

    def generate(self, prompt, width, height):
        self.generate_calls.append((prompt, width, height))
        if self.error is not None:
            raise self.error
        return self.image_url

    def expand(self, reference_image, prompt, width, height):
        self.expand_calls.append((reference_image, prompt, width, height))
        if self.error is not None:
            raise self.error
        return self.image_url


def image_response(data, mime_type="image/png"):
    return {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"text": "Here is your background."},
                        {"inlineData": {"mimeType": mime_type, "data": data}},
                    ]
                }
            }
        ]
    }


def png_base64(size=(24, 12)):
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(90, 120, 30)).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def text_only_response():
    return {"candidates": [{"content": {"parts": [{"text": "I cannot draw that."}]}}]}


@pytest.fixture
def fake_client():
    return FakeImageClient()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def state(backend):
    return StudioState(backend)
