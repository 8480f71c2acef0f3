"""Startup sequence for the example application.

:func:`start` is the explicit initialization phase: it binds every declared
configuration record in one pass and hands the resulting immutable objects
to the components that need them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from propbind.demo.models import (
    MY_SERVICE_PREFIX,
    MY_SERVICE_SCHEMA,
    PEOPLE_PREFIX,
    PEOPLE_SCHEMA,
    MyServiceConfiguration,
    PeopleConfiguration,
)
from propbind.domain.binder import BindingTarget, ConfigBinder
from propbind.domain.converters import TypeConverterRegistry
from propbind.domain.namespace import PropertyNamespace

logger = logging.getLogger(__name__)

SAMPLE_PROPERTIES = Path(__file__).with_name("application.properties")

TARGETS: tuple[BindingTarget, ...] = (
    BindingTarget(MY_SERVICE_PREFIX, MY_SERVICE_SCHEMA),
    BindingTarget(PEOPLE_PREFIX, PEOPLE_SCHEMA),
)


class PeopleService:
    """Logs the bound person configuration when constructed."""

    def __init__(self, people: PeopleConfiguration) -> None:
        self.people = people
        logger.info("First Name: %s", people.firstname)
        logger.info("Last Name: %s", people.last_name)
        logger.info("Hobbies: %s", list(people.hobbies))


@dataclass(frozen=True)
class DemoApplication:
    """The running example application and the configuration it owns."""

    my_service: MyServiceConfiguration
    people: PeopleConfiguration
    people_service: PeopleService

    @property
    def records(self) -> dict[str, Any]:
        """Bound configuration records keyed by prefix."""
        return {MY_SERVICE_PREFIX: self.my_service, PEOPLE_PREFIX: self.people}


def start(namespace: PropertyNamespace, registry: TypeConverterRegistry) -> DemoApplication:
    """Bind all configuration and construct the application's services.

    Raises:
        BindingError: With the issues of every record, so one failed start
            reports all misconfigurations.
    """
    bound = ConfigBinder(registry).bind_all(namespace, TARGETS)
    people = bound[PEOPLE_PREFIX]
    app = DemoApplication(
        my_service=bound[MY_SERVICE_PREFIX],
        people=people,
        people_service=PeopleService(people),
    )
    logger.debug("Application started with %d configuration record(s)", len(bound))
    return app
