"""Prompt assembly helpers used by the image service layer.

This module only builds prompt strings from user text. Validation, model
selection, and request transport happen outside this module.

Design constraints:
    - Deterministic construction for identical inputs.
    - Fixed ordering of prompt components per mode.
    - No hidden side effects (no I/O, no global state mutation).

Prompt safety model:
    - User text is interpolated as a raw string.
    - Callers are responsible for rejecting empty prompts.
"""


# =========================================================
# CREATE PROMPT
# =========================================================
# Appended verbatim after the user's scene description.

STYLE_SUFFIX = (
    " -- cinematic lighting, high resolution, animation style background art,"
    " detailed environment"
)


def build_create_prompt(prompt: str) -> str:
    """Return the text part for create mode: user prompt plus `STYLE_SUFFIX`.

    The prompt is not stripped or otherwise normalized.
    """
    return prompt + STYLE_SUFFIX


# =========================================================
# EXPANSION PROMPT
# =========================================================
# Component order:
#   1) Reference framing
#   2) Widening instruction for a camera pan
#   3) Style lock
#   4) User context
#   5) Lighting/palette/style preservation

def build_expansion_prompt(prompt: str) -> str:
    """Build the instruction text sent ahead of the reference image.

    Args:
        prompt: User-supplied expansion details.

    Returns:
        Multi-line instruction asking the model for a wider variant of the
        reference scene with identical style.
    """
    return (
        "Input is a reference animation background.\n"
        "Create a new, wider version of this scene extending to the sides for a camera pan.\n"
        "Target style: identical to reference.\n"
        f"Context: {prompt}.\n"
        "Maintain the same lighting, color palette, and art style.\n"
    )
