"""Studio state holder for background creation and expansion.

Architectural role:
    One explicit state object that adapters (CLI, HTTP) drive through a small
    set of named actions. It sits between the adapters and the image service
    backend.

Control-flow model (`generate`):
    1. Validate preconditions (non-empty prompt; reference present in expand
       mode). Failures set `error` and return without touching the backend.
    2. Set `is_loading`, clear `error`.
    3. Dispatch to `backend.generate` or `backend.expand` with the selected
       preset dimensions.
    4. Store the single current `GenerationResult`, or the error message.
    5. Always clear `is_loading`.

Error handling strategy:
    `generate` never raises for validation or generation failures; the error
    sink is `state.error`. Backend exceptions are surfaced by message, with a
    generic fallback when the message is empty.

Concurrency:
    A state object is single-owner. The backend itself is reentrant.
"""

import logging
from typing import Optional, Protocol

from cinescape.core.errors import ValidationError
from cinescape.core.types import (
    DEFAULT_RESOLUTION,
    AppMode,
    GenerationRequest,
    GenerationResult,
    ResolutionOption,
    get_resolution,
)


logger = logging.getLogger(__name__)

EMPTY_PROMPT_MESSAGE = "Please enter a description for your background."
MISSING_REFERENCE_MESSAGE = "Please upload a reference image to expand."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during generation."


class BackgroundBackend(Protocol):
    """Generation backend interface (see `cinescape.image.service.BackgroundService`)."""

    def generate(self, prompt: str, width: int, height: int) -> str:
        ...

    def expand(self, reference_image: str, prompt: str, width: int, height: int) -> str:
        ...


class StudioState:
    """Mode, preset, prompt, reference, result, error, and loading flag.

    Attributes are public for reading; mutate them only through the action
    methods so that transitions stay testable without any rendering layer.
    """

    def __init__(self, backend: BackgroundBackend):
        self.backend = backend
        self.mode: AppMode = AppMode.CREATE
        self.resolution: ResolutionOption = DEFAULT_RESOLUTION
        self.prompt: str = ""
        self.reference_image: Optional[str] = None
        self.result: Optional[GenerationResult] = None
        self.error: Optional[str] = None
        self.is_loading: bool = False

    # =========================================================
    # ACTIONS
    # =========================================================

    def set_mode(self, mode) -> None:
        self.mode = AppMode.parse(mode)

    def select_resolution(self, option) -> None:
        """Select a preset by `ResolutionOption` or by id."""
        if isinstance(option, ResolutionOption):
            self.resolution = option
        else:
            self.resolution = get_resolution(option)

    def set_prompt(self, text: str) -> None:
        self.prompt = text or ""

    def upload_reference(self, data_uri: str) -> None:
        """Store a reference image; switches CREATE mode to EXPAND."""
        self.reference_image = data_uri
        if self.mode == AppMode.CREATE:
            self.mode = AppMode.EXPAND

    def clear_reference(self) -> None:
        self.reference_image = None

    def build_request(self) -> GenerationRequest:
        """Validate preconditions and return the request for the current state.

        Raises:
            ValidationError: empty prompt, or expand mode without reference.
        """
        if not self.prompt.strip():
            raise ValidationError(EMPTY_PROMPT_MESSAGE)
        if self.mode == AppMode.EXPAND and not self.reference_image:
            raise ValidationError(MISSING_REFERENCE_MESSAGE)

        return GenerationRequest(
            mode=self.mode,
            prompt=self.prompt,
            width=self.resolution.width,
            height=self.resolution.height,
            reference_image=self.reference_image if self.mode == AppMode.EXPAND else None,
        )

    def generate(self) -> Optional[GenerationResult]:
        """Run the trigger action.

        Returns:
            The new `GenerationResult`, or `None` when validation or
            generation failed (see `error`).
        """
        try:
            request = self.build_request()
        except ValidationError as err:
            self.error = str(err)
            return None

        self.is_loading = True
        self.error = None

        try:
            if request.mode == AppMode.CREATE:
                image_url = self.backend.generate(request.prompt, request.width, request.height)
            else:
                image_url = self.backend.expand(
                    request.reference_image,
                    request.prompt,
                    request.width,
                    request.height,
                )
            self.result = GenerationResult(image_url=image_url, prompt=request.prompt)
            return self.result
        except Exception as err:
            logger.warning("Generation failed mode=%s: %s", request.mode.value, err)
            self.error = str(err) or UNEXPECTED_ERROR_MESSAGE
            return None
        finally:
            self.is_loading = False

    def snapshot(self) -> dict:
        """Return a plain dict view for adapters."""
        return {
            "mode": self.mode.value,
            "resolution": self.resolution.to_dict(),
            "prompt": self.prompt,
            "has_reference": self.reference_image is not None,
            "result": (
                {"image_url": self.result.image_url, "prompt": self.result.prompt}
                if self.result
                else None
            ),
            "error": self.error,
            "is_loading": self.is_loading,
        }
