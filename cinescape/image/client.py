"""Gemini image-generation HTTP client.

Processing flow:
    1. Caller supplies ordered content parts (text and/or inline data).
    2. Client wraps them in a `generateContent` body with an aspect-ratio hint.
    3. Submit JSON payload to the model endpoint.
    4. Return parsed JSON response or raise on non-2xx status.

Credential handling:
    The API key is passed to the constructor. `from_env` is the only place that
    reads process configuration; callers inject the resulting client into the
    service functions instead of relying on a module-global instance.

Retry behavior:
    None. Each call is attempted once. No timeout is applied unless one was
    configured (`provider_config.REQUEST_TIMEOUT`) or passed explicitly.

Error handling strategy:
    - Missing credential in `from_env` -> `ConfigurationError`.
    - Non-2xx HTTP response -> `requests.HTTPError` via `raise_for_status()`.
    - Connection failures -> propagated `requests` exceptions.

Security considerations:
    The key travels in the `x-goog-api-key` header and is never logged.
"""

import logging

import requests

from cinescape.core.errors import ConfigurationError
from cinescape.image.provider_config import (
    DEFAULT_ASPECT_RATIO,
    GEMINI_KEY_FILE,
    GEMINI_URL_TEMPLATE,
    IMAGE_MODEL,
    REQUEST_TIMEOUT,
    RESPONSE_MODALITIES,
    load_key,
)


logger = logging.getLogger(__name__)


def text_part(text: str) -> dict:
    """Return a text content part."""
    return {"text": text}


def inline_data_part(data: str, mime_type: str) -> dict:
    """Return an inline binary content part carrying base64 `data`."""
    return {"inlineData": {"mimeType": mime_type, "data": data}}


class GeminiImageClient:
    """Transport for `models/{model}:generateContent` image requests.

    Instances hold no per-request state and can be shared between threads.
    """

    def __init__(
        self,
        api_key: str,
        model: str = IMAGE_MODEL,
        url_template: str = GEMINI_URL_TEMPLATE,
        timeout=REQUEST_TIMEOUT,
    ):
        self.api_key = api_key
        self.model = model
        self.url_template = url_template
        self.timeout = timeout

    @classmethod
    def from_env(cls, **kwargs) -> "GeminiImageClient":
        """Build a client from `GEMINI_API_KEY` or `config/gemini.key`.

        Raises:
            ConfigurationError: when no key material is available.
        """
        api_key = load_key(GEMINI_KEY_FILE)
        if not api_key:
            raise ConfigurationError(
                f"Gemini API key missing: set GEMINI_API_KEY or create {GEMINI_KEY_FILE}"
            )
        return cls(api_key, **kwargs)

    @property
    def url(self) -> str:
        return self.url_template.format(model=self.model)

    def build_payload(self, parts: list, aspect_ratio: str = DEFAULT_ASPECT_RATIO) -> dict:
        """Wrap content parts and the aspect-ratio hint into a request body."""
        return {
            "contents": [{"parts": list(parts)}],
            "generationConfig": {
                "responseModalities": list(RESPONSE_MODALITIES),
                "imageConfig": {"aspectRatio": aspect_ratio},
            },
        }

    def generate_content(self, parts: list, aspect_ratio: str = DEFAULT_ASPECT_RATIO) -> dict:
        """Send one generation request and return the parsed JSON response.

        Args:
            parts: Ordered content parts (see `text_part`, `inline_data_part`).
            aspect_ratio: Aspect-ratio hint forwarded in `imageConfig`.

        Returns:
            Provider response dictionary.
        """
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

        logger.debug(
            "Submitting generateContent model=%s parts=%d aspect_ratio=%s",
            self.model,
            len(parts),
            aspect_ratio,
        )

        response = requests.post(
            self.url,
            headers=headers,
            json=self.build_payload(parts, aspect_ratio),
            timeout=self.timeout,
        )

        response.raise_for_status()
        return response.json()
