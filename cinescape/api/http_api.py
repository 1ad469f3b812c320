"""
HTTP API adapter for CineScape.

Architectural role:
- Expose preset discovery and background generation over HTTP.
- Enforce adapter-level input validation through `StudioState`.
- Delegate request shaping and transport to `cinescape.image.service`.

Endpoint responsibilities:
- `GET /`: health check.
- `GET /v1/resolutions`: list resolution presets.
- `POST /v1/backgrounds`: run one create/expand action, return JSON result.
- `POST /v1/backgrounds/export`: same action, return the PNG as a download.

API request lifecycle (`POST /v1/backgrounds`):
1. Parse body into `BackgroundRequest`.
2. Build a fresh `StudioState` bound to the shared `BackgroundService`.
3. Apply reference, mode, preset, and prompt actions.
4. Validate preconditions (HTTP 400 on failure, no upstream call).
5. Trigger generation (HTTP 502 when the model or transport fails).

Error handling strategy:
- Validation failures return structured HTTP 400 JSON responses.
- Generation/transport failures return HTTP 502 with the error message.
- Missing credentials return HTTP 500 via a registered exception handler.

Side effects:
- Emits debug prints only when `CINESCAPE_DEBUG == "true"`.
- Loads environment variables at import time via `load_dotenv()`.
"""

from dotenv import load_dotenv

load_dotenv()

import os
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from cinescape.api.multimodal.file_input_manager import (
    decode_data_uri,
    load_reference_image,
)
from cinescape.core.errors import ConfigurationError, ValidationError
from cinescape.core.studio import StudioState
from cinescape.core.types import DEFAULT_RESOLUTION, RESOLUTION_OPTIONS
from cinescape.image.client import GeminiImageClient
from cinescape.image.service import BackgroundService

app = FastAPI(title="CineScape", description="Background Creator & Expander")
# Request debug output is opt-in.
DEBUG = os.getenv("CINESCAPE_DEBUG") == "true"


# ============================================================
# Request Schema
# ============================================================

class BackgroundRequest(BaseModel):
    """
    Body for background generation endpoints.

    `reference_image` is a data URI or raw base64 string. Supplying one switches
    the studio to `EXPAND` unless `mode` is given explicitly.
    """
    mode: Optional[str] = None
    prompt: str = ""
    resolution_id: str = DEFAULT_RESOLUTION.id
    reference_image: Optional[str] = None


# ============================================================
# Dependencies
# ============================================================

@lru_cache()
def get_background_service() -> BackgroundService:
    """Return the process-wide service built from environment credentials."""
    return BackgroundService(GeminiImageClient.from_env())


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    return JSONResponse(status_code=500, content={"error": str(exc)})


def _run(body: BackgroundRequest, service: BackgroundService):
    """
    Execute one studio action and return `(state, error_response)`.

    Exactly one of the two values is meaningful: on success the state carries
    the result and `error_response` is `None`.
    """
    if DEBUG:
        print("\n==== API DEBUG START ====")
        print("Mode:", body.mode)
        print("Resolution:", body.resolution_id)
        print("Prompt length:", len(body.prompt))
        print("Reference supplied:", body.reference_image is not None)

    state = StudioState(service)

    try:
        if body.reference_image:
            state.upload_reference(
                load_reference_image(body.reference_image, allow_paths=False)
            )
        if body.mode is not None:
            state.set_mode(body.mode)
        state.select_resolution(body.resolution_id)
        state.set_prompt(body.prompt)
        state.build_request()
    except ValidationError as err:
        return state, JSONResponse(status_code=400, content={"error": str(err)})

    result = state.generate()

    if DEBUG:
        print("Error:", state.error)
        print("==== API DEBUG END ====\n")

    if result is None:
        return state, JSONResponse(status_code=502, content={"error": state.error})

    return state, None


# ============================================================
# Routes
# ============================================================

@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "CineScape is running"}


@app.get("/v1/resolutions")
def list_resolutions():
    """Return all resolution presets in display order."""
    return {
        "object": "list",
        "data": [option.to_dict() for option in RESOLUTION_OPTIONS],
    }


@app.post("/v1/backgrounds")
def create_background(
    body: BackgroundRequest,
    service: BackgroundService = Depends(get_background_service),
):
    """
    Generate or expand a background and return it as a data URI.

    Response formatting:
    - `image_url`, `prompt`, `mode`, `width`, `height`, `filename`.
    """
    state, error_response = _run(body, service)
    if error_response is not None:
        return error_response

    return {
        "image_url": state.result.image_url,
        "prompt": state.result.prompt,
        "mode": state.mode.value,
        "width": state.resolution.width,
        "height": state.resolution.height,
        "filename": state.resolution.export_filename,
    }


@app.post("/v1/backgrounds/export")
def export_background(
    body: BackgroundRequest,
    service: BackgroundService = Depends(get_background_service),
):
    """Generate or expand a background and return the PNG bytes as a download."""
    state, error_response = _run(body, service)
    if error_response is not None:
        return error_response

    try:
        content = decode_data_uri(state.result.image_url)
    except ValidationError as err:
        return JSONResponse(status_code=502, content={"error": str(err)})

    filename = state.resolution.export_filename
    return Response(
        content=content,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
