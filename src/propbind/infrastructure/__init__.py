"""Infrastructure layer — reading property files from disk.

This layer depends on stdlib and third-party parsers (ruamel.yaml).
It must never import from domain, services, commands, or output.
Readers return plain ``{key: raw string}`` dicts; the service layer turns
them into a PropertyNamespace.
"""
