"""Reference-image input package for API adapters.

Architectural role:
- Converts image references (paths, file URLs, data URIs) into data URIs.
- Applies file access/type/size constraints before reading.

Scope:
- Input/output conversion only; no HTTP endpoint definitions.
"""
