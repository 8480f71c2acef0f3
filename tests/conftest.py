"""Shared pytest fixtures and test helpers for propbind tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from propbind.demo.converters import FullNameConverterPlugin
from propbind.domain.binder import ConfigBinder
from propbind.domain.converters import TypeConverterRegistry
from propbind.domain.namespace import PropertyNamespace

SAMPLE_PROPERTIES = """\
my-service.common-attributes.author=Jane Doe
my-service.common-attributes.system-email=system@example.com
my-service.common-attributes.read-timeout=30s
my-service.common-attributes.threshold-limit=1500.75
my-service.common-attributes.currency=USD
my-service.common-attributes.supported-countries.vn.iso3-code=VNM
my-service.common-attributes.supported-countries.vn.timezones[0]=Asia/Ho_Chi_Minh
my-service.common-attributes.supported-countries.us.iso3-code=USA
my-service.common-attributes.supported-countries.us.timezones[0]=America/New_York
my-service.common-attributes.supported-countries.us.timezones[1]=America/Chicago
my-service.person.firstname=John
my-service.person.last-name=Smith
my-service.person.hobbies=reading, hiking
"""


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """CLI invocations reconfigure the root logger; put it back afterwards."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pb = logging.getLogger("propbind")
    pb_level = pb.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pb.setLevel(pb_level)


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PROPBIND_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> TypeConverterRegistry:
    """Built-in converters only, still writable."""
    return TypeConverterRegistry()


@pytest.fixture
def demo_registry() -> TypeConverterRegistry:
    """Frozen registry with the full-name converter, as the CLI builds it."""
    reg = TypeConverterRegistry()
    FullNameConverterPlugin().propbind_register_converters(registry=reg)
    return reg.freeze()


@pytest.fixture
def binder(registry: TypeConverterRegistry) -> ConfigBinder:
    return ConfigBinder(registry)


@pytest.fixture
def sample_namespace() -> PropertyNamespace:
    from propbind.infrastructure.sources import parse_properties

    return PropertyNamespace(parse_properties(SAMPLE_PROPERTIES))


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project directory holding ``application.properties``.

    CWD is moved there so the CLI picks the file up by default.
    """
    (tmp_path / "application.properties").write_text(SAMPLE_PROPERTIES, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path
