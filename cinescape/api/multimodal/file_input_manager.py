"""
Reference-image input handling for API adapters.

Architectural role:
- Convert a user-supplied image reference into a base64 data URI.
- Enforce path/size/extension constraints before reading.
- Decode result data URIs back to bytes for export.

Processing lifecycle (`load_reference_image`):
1. Resolve the reference (`data:` URI, `file://` URL, or local path).
2. Data URIs are size-checked and returned unchanged.
3. Local files are validated (existence, size, extension), opened with Pillow
   to confirm they decode, then base64-encoded with a MIME type derived from
   the extension.

Error handling strategy:
- Every rejection raises `ValidationError` with a user-facing message.
- Nothing is written to disk while loading.

Side effects:
- `save_data_uri` writes exactly one file at the requested path.
"""

import base64
import binascii
import io
import os
from typing import Optional
from urllib.parse import urlparse, unquote

from PIL import Image, UnidentifiedImageError

from cinescape.core.errors import ValidationError


# ============================================================
# CONFIG
# ============================================================

MAX_FILE_SIZE_MB = 20
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
IMAGE_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
}


# ============================================================
# PUBLIC ENTRYPOINTS
# ============================================================

def load_reference_image(image_ref: str, allow_paths: bool = True) -> str:
    """
    Return a base64 data URI for a reference image.

    Supported formats:
    - data URI (returned unchanged after size and decode checks)
    - file URL (local host only)
    - plain local path

    With `allow_paths=False` (HTTP bodies) the filesystem is never touched and
    any non-`data:` input is treated as a raw base64 payload, returned
    unchanged after the same checks.
    """
    if not image_ref or not image_ref.strip():
        raise ValidationError("No reference image provided")

    image_ref = image_ref.strip()

    if image_ref.startswith("data:") or not allow_paths:
        _check_encoded_size(image_ref.split(",", 1)[-1])
        describe_image(decode_data_uri(image_ref))
        return image_ref

    path = _resolve_path(image_ref)
    if not path:
        raise ValidationError(f"Reference image not found: {image_ref}")

    mime_type = _validate_file(path)
    describe_image(path)

    with open(path, "rb") as f:
        encoded = base64.b64encode(f.read()).decode("ascii")

    return f"data:{mime_type};base64,{encoded}"


def describe_image(source) -> dict:
    """Open an image (path or raw bytes) with Pillow; return format and size."""
    if isinstance(source, (bytes, bytearray)):
        fp, name = io.BytesIO(source), "reference image"
    else:
        fp, name = source, os.path.basename(source)

    try:
        with Image.open(fp) as img:
            fmt = img.format
            width, height = img.size
            img.verify()
    except (UnidentifiedImageError, OSError) as err:
        raise ValidationError(f"Unreadable image file: {name}") from err

    return {"format": fmt, "width": width, "height": height}


def decode_data_uri(data_uri: str) -> bytes:
    """Decode the base64 payload of a data URI (or bare base64 string)."""
    _, sep, payload = data_uri.partition(",")
    if not sep:
        payload = data_uri
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as err:
        raise ValidationError("Image data is not valid base64") from err


def save_data_uri(data_uri: str, path: str) -> str:
    """Write the decoded image to `path` and return the absolute path."""
    data = decode_data_uri(data_uri)
    target = os.path.abspath(os.path.expanduser(path))
    parent = os.path.dirname(target)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(target, "wb") as f:
        f.write(data)
    return target


# ============================================================
# INPUT RESOLUTION
# ============================================================

def _resolve_path(image_ref: str) -> Optional[str]:
    """
    Resolve a reference to an existing local path.

    Remote `file://` hosts are rejected.
    """
    if image_ref.startswith("file://"):
        parsed = urlparse(image_ref)

        if parsed.netloc not in ("", "localhost"):
            return None

        candidate = _normalize_path(unquote(parsed.path or ""))
    else:
        candidate = _normalize_path(image_ref)

    if candidate and os.path.isfile(candidate):
        return candidate
    return None


def _normalize_path(path: str) -> Optional[str]:
    """Expand and canonicalize a path; return `None` for empty input."""
    if not path:
        return None
    return os.path.realpath(os.path.expanduser(path))


# ============================================================
# VALIDATION
# ============================================================

def _check_encoded_size(encoded: str) -> None:
    """Reject base64 payloads whose decoded size exceeds the limit."""
    padding = 0
    if encoded.endswith("=="):
        padding = 2
    elif encoded.endswith("="):
        padding = 1
    approx_decoded_size = (len(encoded) * 3) // 4 - padding
    if approx_decoded_size > MAX_FILE_SIZE_BYTES:
        raise ValidationError("Reference image exceeds max size limit")


def _validate_file(path: str) -> str:
    """
    Enforce size and type constraints and return the file's MIME type.

    Validation behavior:
    - Rejects files larger than `MAX_FILE_SIZE_MB`.
    - Rejects extensions outside `IMAGE_MIME_TYPES`.
    """
    if os.path.getsize(path) > MAX_FILE_SIZE_BYTES:
        raise ValidationError("Reference image exceeds max size limit")

    _, ext = os.path.splitext(path)
    mime_type = IMAGE_MIME_TYPES.get(ext.lower())
    if not mime_type:
        raise ValidationError("Unsupported file type")

    return mime_type
