"""Background generation and expansion over an injected image client.

Role in pipeline:
    - Receives prompt/reference/dimension inputs from the studio.
    - Builds the ordered content parts for create or expand mode.
    - Extracts the first inline image from the model response as a data URI.

Request shaping:
    - Create: one text part, prompt plus fixed style suffix.
    - Expand: instruction text part, then the reference image as inline data
      tagged `image/png` regardless of its real encoding.
    - Both request aspect ratio `16:9`; target width/height are advisory and
      only logged.

Error handling strategy:
    - No inline image in the response -> `GenerationError`.
    - Transport/model exceptions are logged and re-raised unchanged.
    - No retry and no fallback.

Determinism:
    Request construction is deterministic for fixed inputs; generated images
    are not.
"""

import logging
from typing import Protocol

from cinescape.core.errors import GenerationError
from cinescape.image.client import inline_data_part, text_part
from cinescape.image.provider_config import DEFAULT_ASPECT_RATIO, IMAGE_MIME_TYPE
from cinescape.prompting.prompt_builder import build_create_prompt, build_expansion_prompt


logger = logging.getLogger(__name__)

NO_IMAGE_DATA_MESSAGE = "No image data returned from API"


class ImageClientProtocol(Protocol):
    """Minimal transport interface required by the service functions."""

    def generate_content(self, parts: list, aspect_ratio: str = DEFAULT_ASPECT_RATIO) -> dict:
        """Submit content parts and return the raw provider response."""
        ...


def strip_data_uri_header(image: str) -> str:
    """Return the raw base64 payload of a data URI or bare base64 string.

    Everything up to and including the first comma is dropped. Input without a
    comma, or with nothing after it, is returned unchanged.
    """
    _, sep, payload = image.partition(",")
    if sep and payload:
        return payload
    return image


def to_data_uri(data: str, mime_type: str = IMAGE_MIME_TYPE) -> str:
    return f"data:{mime_type};base64,{data}"


def extract_image_data_uri(response: dict) -> str:
    """Return the first inline image of `candidates[0]` as a PNG data URI.

    Raises:
        GenerationError: when no part carries inline data.
    """
    candidates = response.get("candidates") or []
    parts = []
    if candidates:
        parts = (candidates[0].get("content") or {}).get("parts") or []

    for part in parts:
        inline_data = part.get("inlineData")
        if inline_data is None:
            inline_data = part.get("inline_data")
        if inline_data is not None:
            return to_data_uri(inline_data.get("data", ""))

    raise GenerationError(NO_IMAGE_DATA_MESSAGE)


def generate_background(
    client: ImageClientProtocol,
    prompt: str,
    width: int,
    height: int,
) -> str:
    """Generate a background from text only.

    Args:
        client: Injected image transport.
        prompt: Non-empty scene description (validated by the caller).
        width: Advisory target width.
        height: Advisory target height.

    Returns:
        `data:image/png;base64,...` URI of the generated image.
    """
    parts = [text_part(build_create_prompt(prompt))]

    logger.info(
        "Generating background target=%dx%d aspect_ratio=%s",
        width,
        height,
        DEFAULT_ASPECT_RATIO,
    )

    try:
        response = client.generate_content(parts, aspect_ratio=DEFAULT_ASPECT_RATIO)
        return extract_image_data_uri(response)
    except Exception:
        logger.exception("Error generating background")
        raise


def expand_background(
    client: ImageClientProtocol,
    reference_image: str,
    prompt: str,
    target_width: int,
    target_height: int,
) -> str:
    """Generate a wider variant of a reference background.

    Args:
        client: Injected image transport.
        reference_image: Data URI or raw base64 of the reference image.
        prompt: Expansion details embedded into the instruction text.
        target_width: Advisory target width.
        target_height: Advisory target height.

    Returns:
        `data:image/png;base64,...` URI of the expanded image.

    Known quirk:
        The reference is always tagged `image/png`, even for JPEG uploads.
    """
    parts = [
        text_part(build_expansion_prompt(prompt)),
        inline_data_part(strip_data_uri_header(reference_image), IMAGE_MIME_TYPE),
    ]

    logger.info(
        "Expanding background target=%dx%d aspect_ratio=%s",
        target_width,
        target_height,
        DEFAULT_ASPECT_RATIO,
    )

    try:
        response = client.generate_content(parts, aspect_ratio=DEFAULT_ASPECT_RATIO)
        return extract_image_data_uri(response)
    except Exception:
        logger.exception("Error expanding background")
        raise


class BackgroundService:
    """Binds `generate_background`/`expand_background` to one client.

    This is the backend object held by `cinescape.core.studio.StudioState`.
    """

    def __init__(self, client: ImageClientProtocol):
        self.client = client

    def generate(self, prompt: str, width: int, height: int) -> str:
        return generate_background(self.client, prompt, width, height)

    def expand(self, reference_image: str, prompt: str, width: int, height: int) -> str:
        return expand_background(self.client, reference_image, prompt, width, height)
