"""Configuration records for the example application and their schemas."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

from pydantic import BaseModel

from propbind.domain.currency import Currency
from propbind.domain.schema import (
    ConfigurationModel,
    ListField,
    MapField,
    ScalarField,
)

MY_SERVICE_PREFIX = "my-service.common-attributes"
PEOPLE_PREFIX = "my-service.person"


class FullName(BaseModel):
    """A person's name, written in property files as ``"First Last"``."""

    model_config = {"frozen": True}

    first_name: str
    last_name: str


class Country(BaseModel):
    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    iso3_code: str
    timezones: tuple[ZoneInfo, ...]


class MyServiceConfiguration(BaseModel):
    """Shared attributes of the service (``my-service.common-attributes``)."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    author: FullName
    system_email: str
    read_timeout: timedelta
    threshold_limit: Decimal
    currency: Currency
    supported_countries: Mapping[str, Country]


class PeopleConfiguration(BaseModel):
    """``my-service.person``."""

    model_config = {"frozen": True}

    firstname: str
    last_name: str
    hobbies: tuple[str, ...] = ()


COUNTRY_SCHEMA = ConfigurationModel(
    "Country",
    (
        ScalarField("iso3_code", str),
        ListField("timezones", ZoneInfo),
    ),
    factory=Country,
)

MY_SERVICE_SCHEMA = ConfigurationModel(
    "MyServiceConfiguration",
    (
        ScalarField("author", FullName),
        ScalarField("system_email", str),
        ScalarField("read_timeout", timedelta),
        ScalarField("threshold_limit", Decimal),
        ScalarField("currency", Currency),
        MapField("supported_countries", COUNTRY_SCHEMA),
    ),
    factory=MyServiceConfiguration,
)

PEOPLE_SCHEMA = ConfigurationModel(
    "PeopleConfiguration",
    (
        ScalarField("firstname", str),
        ScalarField("last_name", str),
        ListField("hobbies", str, default=()),
    ),
    factory=PeopleConfiguration,
)
