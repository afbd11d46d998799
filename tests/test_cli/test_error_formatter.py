"""Tests for error formatter."""

from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console
from xsd_to_proto.cli.error_formatter import ErrorFormatter, ErrorTable, group_by_declaration
from xsd_to_proto.validation.errors import ValidationLocation, ValidationResult


@pytest.fixture
def string_console() -> Console:
    """Create a console that writes to a string."""
    return Console(file=StringIO(), width=120)


def _output(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


class TestValidationLocation:
    """Tests for splitting a path into declaration and detail."""

    @pytest.mark.parametrize(
        ("path", "declaration", "detail"),
        [
            ("complexTypes[0]", "complexTypes[0]", ""),
            ("complexTypes.Person", "complexTypes.Person", ""),
            (
                "complexTypes.Shipment.sequence.carrier.type",
                "complexTypes.Shipment",
                "sequence.carrier.type",
            ),
            ("elements.order.@id.type", "elements.order", "@id.type"),
        ],
    )
    def test_split(self, path: str, declaration: str, detail: str) -> None:
        """Should split off the top-level declaration."""
        location = ValidationLocation(path)
        assert location.declaration == declaration
        assert location.detail == detail


class TestErrorFormatter:
    """Tests for ErrorFormatter."""

    def test_format_empty_result(self, string_console: Console) -> None:
        """Should show success for empty result."""
        ErrorFormatter(string_console).format_validation_result(ValidationResult())
        assert "Validation passed" in _output(string_console)

    def test_format_with_errors(self, string_console: Console) -> None:
        """Should show errors under their declaration with code and hint."""
        result = ValidationResult()
        result.add_error(
            "E002",
            "complexType name cannot be empty",
            "complexTypes[0]",
            suggestion="Top-level complex types must be named",
        )

        ErrorFormatter(string_console).format_validation_result(result, Path("orders.xsd"))

        output = _output(string_console)
        assert "Validation Failed" in output
        assert "File: orders.xsd" in output
        assert "in 1 declaration" in output
        assert "complexTypes[0]" in output
        assert "[E002]" in output
        assert "hint: Top-level complex types must be named" in output

    def test_groups_by_declaration(self, string_console: Console) -> None:
        """Should list a declaration once, with the path inside it per issue."""
        result = ValidationResult()
        result.add_warning(
            "W002", "Carrier is not declared", "complexTypes.Shipment.sequence.carrier.type"
        )
        result.add_warning("W002", "Depot is not declared", "complexTypes.Shipment.@depot.type")

        ErrorFormatter(string_console).format_validation_result(result)

        output = _output(string_console)
        assert output.count("complexTypes.Shipment") == 1
        assert "at sequence.carrier.type" in output
        assert "at @depot.type" in output
        assert "Warnings: 2  in 1 declaration" in output

    def test_format_with_warnings(self, string_console: Console) -> None:
        """Should use the warnings title when there are no errors."""
        result = ValidationResult()
        result.add_warning("W002", "Type 'tns:Carrier' is not declared", "x")

        ErrorFormatter(string_console).format_validation_result(result)

        output = _output(string_console)
        assert "Validation Warnings" in output
        assert "Warnings: 1" in output
        assert "Errors" not in output


class TestGroupByDeclaration:
    """Tests for group_by_declaration."""

    def test_first_seen_order(self) -> None:
        """Should keep declarations in the order issues first name them."""
        result = ValidationResult()
        result.add_warning("W002", "b", "complexTypes.B.sequence.x.type")
        result.add_error("E001", "a", "elements[0]")
        result.add_warning("W002", "c", "complexTypes.B.@y.type")

        groups = group_by_declaration(result.issues)

        assert list(groups) == ["complexTypes.B", "elements[0]"]
        assert [i.message for i in groups["complexTypes.B"]] == ["b", "c"]


class TestErrorTable:
    """Tests for ErrorTable."""

    def test_print_result(self, string_console: Console) -> None:
        """Should list every issue with its declaration and inner path."""
        result = ValidationResult()
        result.add_error("E001", "element name cannot be empty", "elements[0]")
        result.add_warning("W002", "undeclared", "complexTypes.Shipment.sequence.carrier.type")

        ErrorTable(string_console).print_result(result)

        output = _output(string_console)
        assert "Validation Issues" in output
        assert "Declaration" in output
        assert "E001" in output
        assert "W002" in output
        assert "elements[0]" in output
        assert "complexTypes.Shipment" in output
        assert "sequence.carrier.type" in output
