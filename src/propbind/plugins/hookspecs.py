"""Pluggy hook specifications for propbind.

A single setup-time hook lets plugins contribute custom converters before
the registry is frozen and binding starts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from propbind.domain.converters import TypeConverterRegistry

PROJECT_NAME = "propbind"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class PropbindHookSpec:
    """Hook specifications for the propbind plugin system."""

    @hookspec
    def propbind_register_converters(self, registry: TypeConverterRegistry) -> None:
        """Register custom converters on *registry*.

        Called once, during initialization, for every registered plugin.
        Later registrations for the same type override earlier ones.
        """
