"""Provider/runtime configuration for the image layer.

Architectural role:
    Centralizes model selection, endpoint templates, and credential lookup for
    `cinescape.image.client`.

Determinism:
    Deterministic for a fixed process environment and key files. Values are
    resolved at import time (plus runtime key-file reads in `load_key`).

Failure behavior:
    Missing key material is represented as `None`; `client.GeminiImageClient.from_env`
    converts it into a `ConfigurationError`.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Hosted image model. It does not accept exact pixel targets, only an
# aspect-ratio hint.
IMAGE_MODEL = os.getenv("CINESCAPE_IMAGE_MODEL", "gemini-2.5-flash-image")

GEMINI_URL_TEMPLATE = os.getenv(
    "CINESCAPE_GEMINI_URL_TEMPLATE",
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
)

GEMINI_KEY_FILE = "config/gemini.key"

# Landscape backgrounds always request 16:9; preset dimensions are advisory.
DEFAULT_ASPECT_RATIO = "16:9"

# Output MIME type used for result data URIs and for tagging reference images.
IMAGE_MIME_TYPE = "image/png"

RESPONSE_MODALITIES = ["IMAGE", "TEXT"]


def _parse_timeout(raw):
    """Return a float timeout in seconds, or `None` when unset/blank."""
    if raw is None or not str(raw).strip():
        return None
    return float(raw)


# No timeout unless the operator sets one; `requests` then waits indefinitely.
REQUEST_TIMEOUT = _parse_timeout(os.getenv("CINESCAPE_REQUEST_TIMEOUT"))


def load_key(path):
    """Load API key from environment override or key file.

    Resolution order:
        1. Environment variable inferred from file stem (for example
           `config/gemini.key` -> `GEMINI_API_KEY`).
        2. Raw file contents at `path`.

    Args:
        path: Configured key file path or `None`.

    Returns:
        Key string or `None` when not available.

    Edge cases:
        - `None` path returns `None`.
        - Missing file returns `None`.
        - Empty file returns `None`.
    """
    if not path:
        return None
    key_name = os.path.splitext(os.path.basename(path))[0].upper() + "_API_KEY"
    env_value = os.getenv(key_name)
    if env_value:
        return env_value
    if not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read().strip() or None
