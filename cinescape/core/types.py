"""Data contracts for background generation requests and results.

Architectural role:
    Defines the reference data (resolution presets) and per-action records
    consumed by `cinescape.core.studio` and the image service layer.

Lifecycle:
    - `RESOLUTION_OPTIONS` is read-only reference data built at import time.
    - `GenerationRequest` is constructed fresh per trigger action.
    - `GenerationResult` is held as the single current result of a studio.
    Nothing here is persisted.

Determinism:
    Purely structural; no I/O and no mutable module state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from cinescape.core.errors import ValidationError


class AppMode(str, Enum):
    """Generation mode selected in the studio."""

    CREATE = "CREATE"
    EXPAND = "EXPAND"

    @classmethod
    def parse(cls, value) -> "AppMode":
        """Return the mode for an `AppMode` or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValidationError(f"Unknown mode: {value}") from None


# Widths above the base preset are panning extensions.
BASE_WIDTH = 5100


@dataclass(frozen=True)
class ResolutionOption:
    """Target output preset.

    Attributes:
        id: Unique preset identifier.
        width: Target width in pixels (advisory only).
        height: Target height in pixels (advisory only).
        label: Short display label.
        description: One-line display description.
    """

    id: str
    width: int
    height: int
    label: str
    description: str

    @property
    def is_panning(self) -> bool:
        return self.width > BASE_WIDTH

    @property
    def export_filename(self) -> str:
        return f"cinescape-{self.width}x{self.height}.png"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "width": self.width,
            "height": self.height,
            "label": self.label,
            "description": self.description,
        }


RESOLUTION_OPTIONS = (
    ResolutionOption(
        id="base",
        width=5100,
        height=3000,
        label="Base Standard",
        description="Standard Animation Background (5100 x 3000)",
    ),
    ResolutionOption(
        id="pan_sm",
        width=5650,
        height=3000,
        label="Panning Extension (Small)",
        description="Slight horizontal expansion (5650 x 3000)",
    ),
    ResolutionOption(
        id="pan_md",
        width=5700,
        height=3000,
        label="Panning Extension (Medium)",
        description="Medium horizontal expansion (5700 x 3000)",
    ),
    ResolutionOption(
        id="pan_lg",
        width=6000,
        height=3000,
        label="Wide Panoramic",
        description="Large horizontal expansion (6000 x 3000)",
    ),
)

DEFAULT_RESOLUTION = RESOLUTION_OPTIONS[0]


def get_resolution(resolution_id: str) -> ResolutionOption:
    """Look up a preset by id.

    Raises:
        ValidationError: when no preset carries `resolution_id`.
    """
    for option in RESOLUTION_OPTIONS:
        if option.id == resolution_id:
            return option
    raise ValidationError(f"Unknown resolution preset: {resolution_id}")


@dataclass
class GenerationRequest:
    """Inputs for one generate/expand call, built by the studio trigger."""

    mode: AppMode
    prompt: str
    width: int
    height: int
    reference_image: Optional[str] = None


@dataclass
class GenerationResult:
    """Last successful generation.

    Attributes:
        image_url: `data:image/png;base64,...` URI returned by the service.
        prompt: Prompt text the user submitted (without style suffixes).
    """

    image_url: str
    prompt: str
