import pytest
import requests

from cinescape.core.errors import ConfigurationError
from cinescape.image import client as client_module
from cinescape.image.client import GeminiImageClient, inline_data_part, text_part


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        return self.payload


@pytest.fixture
def captured(monkeypatch):
    calls = []
    state = {"response": FakeResponse({"candidates": []})}

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        return state["response"]

    monkeypatch.setattr(client_module.requests, "post", fake_post)
    return calls, state


def test_generate_content_request_shape(captured):
    calls, _ = captured
    client = GeminiImageClient("secret", model="gemini-2.5-flash-image")

    client.generate_content([text_part("hello"), inline_data_part("AAAA", "image/png")])

    call = calls[0]
    assert call["url"].endswith("/models/gemini-2.5-flash-image:generateContent")
    assert call["headers"]["x-goog-api-key"] == "secret"
    assert call["json"]["contents"] == [
        {
            "parts": [
                {"text": "hello"},
                {"inlineData": {"mimeType": "image/png", "data": "AAAA"}},
            ]
        }
    ]
    assert call["json"]["generationConfig"]["imageConfig"] == {"aspectRatio": "16:9"}
    assert call["timeout"] is None


def test_generate_content_returns_json(captured):
    _, state = captured
    state["response"] = FakeResponse({"candidates": [{"content": {"parts": []}}]})
    result = GeminiImageClient("k").generate_content([text_part("x")])
    assert result == {"candidates": [{"content": {"parts": []}}]}


def test_http_errors_raise(captured):
    _, state = captured
    state["response"] = FakeResponse({"error": {"message": "quota"}}, status_code=429)
    with pytest.raises(requests.HTTPError):
        GeminiImageClient("k").generate_content([text_part("x")])


def test_explicit_timeout_is_forwarded(captured):
    calls, _ = captured
    GeminiImageClient("k", timeout=30.0).generate_content([text_part("x")])
    assert calls[0]["timeout"] == 30.0


def test_from_env_uses_environment_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    assert GeminiImageClient.from_env().api_key == "env-key"


def test_from_env_reads_key_file(monkeypatch, tmp_path):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "gemini.key").write_text("file-key\n")
    assert GeminiImageClient.from_env().api_key == "file-key"


def test_from_env_without_key(monkeypatch, tmp_path):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ConfigurationError):
        GeminiImageClient.from_env()
