"""Image generation adapter package.

Scope:
    Provides the Gemini image transport (`client`), its configuration
    (`provider_config`), and the create/expand request shaping (`service`)
    used by the studio.

Non-goals:
    - No file ingestion (see `cinescape.api.multimodal`).
    - No retry, caching, or queueing.
"""
