"""Pydantic section models for ``propbind.toml`` with code-baked defaults.

Sparse TOML contract: defaults baked here, propbind.toml only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class SourcesConfig(BaseModel):
    """[sources] section."""

    model_config = {"frozen": True}

    files: tuple[str, ...] = ("application.properties",)
    fallback_to_sample: bool = True


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    entry_points: bool = True
