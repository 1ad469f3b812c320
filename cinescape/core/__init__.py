"""Core orchestration package.

Architectural role:
    Exposes the studio state machine that sits between CLI/HTTP adapters and
    the image service layer.

Composition:
    - `studio`: state holder and trigger action.
    - `types`: resolution presets and request/result records.
    - `errors`: package exception hierarchy.
"""
