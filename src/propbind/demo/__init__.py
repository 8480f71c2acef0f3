"""Example application wiring property files into typed configuration.

``my-service.common-attributes`` binds to :class:`MyServiceConfiguration`
(custom full-name conversion, durations, decimals, currency, and a map of
countries to time zone lists). ``my-service.person`` binds to
:class:`PeopleConfiguration`, which :class:`PeopleService` logs at startup.
"""

from propbind.demo.app import DemoApplication, PeopleService, start
from propbind.demo.models import (
    Country,
    FullName,
    MyServiceConfiguration,
    PeopleConfiguration,
)

__all__ = [
    "Country",
    "DemoApplication",
    "FullName",
    "MyServiceConfiguration",
    "PeopleConfiguration",
    "PeopleService",
    "start",
]
