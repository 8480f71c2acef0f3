"""Domain layer — keys, namespaces, schemas, converters, and the binder.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
