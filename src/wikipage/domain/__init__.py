"""Domain layer — front-matter codec, documents, and the typed page view.

This layer depends only on stdlib and the parsing libraries it wraps
(ruamel.yaml, tomlkit, pydantic, structlog).
It must never import from services, infrastructure, commands, or config.
"""
