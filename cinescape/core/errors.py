"""Exception hierarchy shared by the studio, image services, and adapters.

Error classes:
    - `ValidationError`: rejected before any network call (empty prompt, expand
      without reference, unknown preset/mode, unreadable reference file).
    - `GenerationError`: upstream call completed but produced no image payload.
    - `ConfigurationError`: client cannot be built (missing credential).

Transport failures raised by `requests` are not part of this
hierarchy; they propagate unchanged and adapters surface their message.
"""


class CineScapeError(Exception):
    """Base class for all package-defined errors."""


class ValidationError(CineScapeError):
    """User input failed a precondition; no request was sent."""


class GenerationError(CineScapeError):
    """The image model responded without inline image data."""


class ConfigurationError(CineScapeError):
    """Required runtime configuration (for example the API key) is missing."""
