"""Tests for output formatting — human, quiet, and JSON modes."""

from __future__ import annotations

import json

from propbind.output.formatters import OutputSettings, format_result
from propbind.output.renderers import render_quiet, render_result
from propbind.services.result import ServiceError, ServiceResult

PROPS = ServiceResult(
    ok=True,
    op="run",
    data={
        "count": 2,
        "items": [
            {"key": "my-service.person.firstname", "value": "John"},
            {"key": "my-service.person.last-name", "value": "Smith"},
        ],
    },
    meta={"sources": ["application.properties"]},
)

FAILED = ServiceResult(
    ok=False,
    op="run",
    error=ServiceError(
        code="BINDING_FAILED",
        message="1 configuration issue(s) under my-service.person",
        detail={
            "errors": [
                {
                    "code": "MISSING_KEY",
                    "path": "my-service.person.last-name",
                    "message": "Missing required property 'my-service.person.last-name'",
                }
            ]
        },
    ),
)


class TestHumanOutput:
    def test_property_table(self) -> None:
        out = render_result(PROPS)
        assert out.startswith("OK")
        assert "run" in out
        assert "my-service.person.firstname" in out
        assert "Smith" in out
        assert "2 properties" in out

    def test_verbose_shows_meta(self) -> None:
        assert "application.properties" in render_result(PROPS, verbose=True)
        assert "application.properties" not in render_result(PROPS)

    def test_error_lists_issues(self) -> None:
        out = render_result(FAILED)
        assert "ERROR" in out
        assert "MISSING_KEY" in out
        assert "my-service.person.last-name" in out

    def test_values_are_not_markup(self) -> None:
        result = ServiceResult(
            ok=True,
            op="keys",
            data={
                "count": 2,
                "items": [
                    {"key": "app.pattern", "value": "[/x] and [bold]loud"},
                    {"key": "app.tag", "value": "[bold]"},
                ],
            },
        )
        out = render_result(result)
        assert "[/x] and [bold]loud" in out
        assert "[bold]" in out.split("app.tag", 1)[1]

    def test_issue_messages_are_not_markup(self) -> None:
        result = ServiceResult.failure(
            "run",
            "BINDING_FAILED",
            "1 configuration issue(s) under app",
            {
                "errors": [
                    {
                        "code": "CONVERSION_FAILED",
                        "path": "app.port",
                        "message": "Cannot convert '[/x]' to int for 'app.port': invalid",
                    }
                ]
            },
        )
        assert "Cannot convert '[/x]'" in render_result(result)

    def test_converters_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="converters",
            data={
                "count": 1,
                "items": [{"type": "FullName", "source": "custom", "invertible": True}],
            },
        )
        out = render_result(result)
        assert "FullName" in out
        assert "custom" in out

    def test_generic_fallback(self) -> None:
        out = render_result(ServiceResult(ok=True, op="other", data={"answer": 42}))
        assert "answer: 42" in out


class TestQuietOutput:
    def test_properties_as_key_value_lines(self) -> None:
        assert render_quiet(PROPS) == (
            "my-service.person.firstname=John\nmy-service.person.last-name=Smith"
        )

    def test_error_line(self) -> None:
        assert render_quiet(FAILED).startswith("ERROR: run")

    def test_no_items(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="keys", data={"items": []})) == "OK: keys"


class TestFormatResult:
    def test_json_wins(self) -> None:
        out = format_result(PROPS, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(out)["op"] == "run"

    def test_quiet(self) -> None:
        out = format_result(PROPS, settings=OutputSettings(quiet=True))
        assert out.splitlines()[0] == "my-service.person.firstname=John"

    def test_default_settings(self) -> None:
        assert format_result(PROPS).startswith("OK")
