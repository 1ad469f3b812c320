"""
Interactive CLI adapter for CineScape.

Architectural role:
- Exposes terminal controls equivalent to the studio sidebar: mode toggle,
  reference upload, resolution preset, prompt, and export.
- Delegates all state transitions to `cinescape.core.studio.StudioState`.

Request lifecycle (per input line):
1. Read stdin.
2. Handle local control commands (`exit`/`quit`, `/mode`, `/resolution`,
   `/upload`, `/clear`, `/export`, `/status`, `/help`).
3. Treat any other text as the prompt and trigger generation.
4. Print the result summary or the error message.

Input validation behavior:
- Empty input is ignored.
- Prompt/reference preconditions are enforced by the studio; failures are
  printed and never reach the network layer.

Error handling strategy:
- Missing credentials abort startup with a message.
- EOF and keyboard interrupts terminate the loop without traceback output.

Side effects:
- `/export` writes the current result as a PNG file.
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import sys

from cinescape.api.multimodal.file_input_manager import (
    decode_data_uri,
    describe_image,
    load_reference_image,
    save_data_uri,
)
from cinescape.core.errors import CineScapeError, ConfigurationError
from cinescape.core.studio import StudioState
from cinescape.core.types import AppMode, RESOLUTION_OPTIONS
from cinescape.image.client import GeminiImageClient
from cinescape.image.service import BackgroundService


HELP_TEXT = """
Commands:
 /mode create|expand     switch generation mode
 /resolution [id]        list presets or select one
 /upload <path>          load a reference image (switches to expand mode)
 /clear                  remove the reference image
 /export [path]          save the last result as PNG
 /status                 show current settings
 /help                   show this help
 exit | quit             leave
Any other text is used as the prompt and starts generation.
"""


# =========================================================
# UTF-8 SAFE OUTPUT
# =========================================================

if hasattr(sys.stdout, "reconfigure"):
    try:
        sys.stdout.reconfigure(encoding="utf-8", errors="ignore")
    except Exception:
        pass


# =========================================================
# RENDERING
# =========================================================

def print_resolutions(state: StudioState) -> None:
    print("\nTarget formats:")
    for option in RESOLUTION_OPTIONS:
        marker = " (selected)" if option.id == state.resolution.id else ""
        print(f" - {option.id}: {option.label}, {option.width}px x {option.height}px{marker}")
        print(f"   {option.description}")
    print()


def print_status(state: StudioState) -> None:
    print(f"\nMode: {state.mode.value}")
    print(f"Target: {state.resolution.label} ({state.resolution.width}x{state.resolution.height})")
    print(f"Reference: {'loaded' if state.reference_image else 'none'}")
    if state.result:
        print(f"Last result: {len(state.result.image_url)} chars for prompt {state.result.prompt!r}")
    if state.error:
        print(f"Last error: {state.error}")
    print()


# =========================================================
# COMMANDS
# =========================================================

def handle_command(state: StudioState, line: str) -> bool:
    """
    Apply one input line to the studio.

    Returns:
        `False` when the session should end, otherwise `True`.
    """
    text = line.strip()
    if not text:
        return True

    lowered = text.lower()
    parts = text.split(None, 1)
    command = parts[0].lower()
    argument = parts[1].strip() if len(parts) > 1 else ""

    if lowered in ("exit", "quit"):
        print("Shutting down.")
        return False

    if lowered in ("/help", "help"):
        print(HELP_TEXT)
        return True

    if lowered == "/status":
        print_status(state)
        return True

    if command == "/mode":
        if not argument:
            print(f"\nCurrent mode: {state.mode.value}")
            print("Usage: /mode create|expand\n")
            return True
        try:
            state.set_mode(argument)
        except CineScapeError as err:
            print(f"\n{err}\n")
            return True
        print(f"\nSwitched to mode: {state.mode.value}\n")
        return True

    if command == "/resolution":
        if not argument:
            print_resolutions(state)
            return True
        try:
            state.select_resolution(argument)
        except CineScapeError as err:
            print(f"\n{err}\n")
            return True
        print(f"\nTarget format: {state.resolution.label} ({state.resolution.width}x{state.resolution.height})\n")
        return True

    if command == "/upload":
        if not argument:
            print("\nUsage: /upload <path>\n")
            return True
        try:
            data_uri = load_reference_image(argument)
            info = describe_image(decode_data_uri(data_uri))
        except CineScapeError as err:
            print(f"\n{err}\n")
            return True
        state.upload_reference(data_uri)
        print(f"\nReference loaded: {info['format']} {info['width']}x{info['height']}")
        print(f"Mode: {state.mode.value}\n")
        return True

    if lowered == "/clear":
        state.clear_reference()
        print("\nReference cleared.\n")
        return True

    if command == "/export":
        if not state.result:
            print("\nNo background generated yet.\n")
            return True
        path = argument or state.resolution.export_filename
        try:
            written = save_data_uri(state.result.image_url, path)
        except (CineScapeError, OSError) as err:
            print(f"\nExport failed: {err}\n")
            return True
        print(f"\nExported: {written}\n")
        return True

    # NORMAL PROMPT FLOW

    state.set_prompt(text)
    label = "Generating background" if state.mode == AppMode.CREATE else "Expanding scene"
    print(f"\n{label} ({state.resolution.width}x{state.resolution.height} target)...\n")

    result = state.generate()

    if result is None:
        print(f"Error: {state.error}")
    else:
        print(f"Background ready ({len(result.image_url)} chars). Use /export to save it.")
        print(
            "Resolution note: scale this output to your target "
            f"{state.resolution.width}x{state.resolution.height} canvas in post-production."
        )

    print("\n" + "-" * 60 + "\n")
    return True


# =========================================================
# MAIN
# =========================================================

def main():
    """
    Run the interactive studio session.

    Error handling strategy:
    - Missing credentials abort startup with a message.
    - EOF/interrupt are handled without stack traces.
    """
    logging.basicConfig(level=logging.WARNING)

    try:
        service = BackgroundService(GeminiImageClient.from_env())
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return

    state = StudioState(service)

    print("CineScape started. Background Creator & Expander. (Type '/help' for commands, 'exit' to quit)")
    print_status(state)
    print("-" * 60)

    while True:

        try:
            line = input(f"[{state.mode.value.lower()}] > ")

        except EOFError:
            print("\nSession ended (EOF received).")
            break

        except KeyboardInterrupt:
            print("\nOperation cancelled by user.")
            break

        if not handle_command(state, line):
            break


if __name__ == "__main__":
    main()
