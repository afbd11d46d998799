"""Tests for case conversion and the name registry."""

import pytest
from xsd_to_proto.config import FieldNamingStyle
from xsd_to_proto.transform.naming import (
    NameRegistry,
    format_field_name,
    nested_message_name,
    split_words,
    to_camel_case,
    to_pascal_case,
    to_screaming_snake_case,
    to_snake_case,
    with_numeric_suffix,
)


class TestCaseConversion:
    """Tests for the case conversion helpers."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("firstName", "first_name"),
            ("FirstName", "first_name"),
            ("first_name", "first_name"),
            ("zip-code", "zip_code"),
            ("order.line", "order_line"),
            ("id", "id"),
        ],
    )
    def test_snake_case(self, name: str, expected: str) -> None:
        """Should convert to snake_case."""
        assert to_snake_case(name) == expected

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("person", "Person"),
            ("first_name", "FirstName"),
            ("firstName", "FirstName"),
            ("order-line.item", "OrderLineItem"),
        ],
    )
    def test_pascal_case(self, name: str, expected: str) -> None:
        """Should convert to PascalCase."""
        assert to_pascal_case(name) == expected

    def test_camel_case(self) -> None:
        """Should convert to camelCase."""
        assert to_camel_case("first_name") == "firstName"
        assert to_camel_case("FirstName") == "firstName"
        assert to_camel_case("") == ""

    def test_screaming_snake_case(self) -> None:
        """Should convert to SCREAMING_SNAKE_CASE."""
        assert to_screaming_snake_case("FixtureType") == "FIXTURE_TYPE"
        assert to_screaming_snake_case("Status") == "STATUS"

    def test_split_words(self) -> None:
        """Should split on separators and before uppercase letters."""
        assert split_words("firstName") == ["first", "Name"]
        assert split_words("order-line.item_id") == ["order", "line", "item", "id"]
        assert split_words("__") == []

    def test_format_field_name_styles(self) -> None:
        """Should apply the requested field naming style."""
        assert format_field_name("firstName") == "first_name"
        assert format_field_name("firstName", FieldNamingStyle.CAMEL) == "firstName"
        assert format_field_name("first_name", FieldNamingStyle.PASCAL) == "FirstName"


class TestNameRegistry:
    """Tests for unique message, enum and enum value names."""

    def test_first_name_wins(self) -> None:
        """Should keep the first name and suffix later ones from 2."""
        names = NameRegistry()
        assert names.reserve_message_name("Person") == "Person"
        assert names.reserve_message_name("person") == "Person2"

    def test_messages_and_enums_share_namespace(self) -> None:
        """Should not hand an enum's name to a message."""
        names = NameRegistry()
        assert names.reserve_enum_name("Priority") == "Priority"
        assert names.reserve_message_name("priority") == "Priority2"
        assert names.enum_names == frozenset({"Priority"})
        assert names.message_names == frozenset({"Priority2"})

    def test_rename_map(self) -> None:
        """Should record original to final names."""
        names = NameRegistry()
        names.reserve_enum_name("Status")
        names.reserve_message_name("status")
        assert names.renames == {"Status": "Status", "status": "Status2"}

    def test_resolve_exact_then_pascal(self) -> None:
        """Should try the exact name before its PascalCase form."""
        names = NameRegistry()
        names.reserve_message_name("Person")
        names.reserve_message_name("order_line")

        assert names.resolve("Person") == "Person"
        assert names.resolve("person") == "Person"
        assert names.resolve("order_line") == "OrderLine"
        assert names.resolve("Unknown") is None

    def test_enum_values_prefixed(self) -> None:
        """Should prefix values with the enum name in SCREAMING_SNAKE_CASE."""
        names = NameRegistry()
        assert names.reserve_enum_value_name("FixtureType", "match") == "FIXTURE_TYPE_MATCH"
        assert (
            names.reserve_enum_value_name("FixtureType", "", sentinel=True)
            == "FIXTURE_TYPE_UNSPECIFIED"
        )

    def test_enum_value_collision_suffix(self) -> None:
        """Should suffix repeated value names from 2."""
        names = NameRegistry()
        assert names.reserve_enum_value_name("Color", "red") == "COLOR_RED"
        assert names.reserve_enum_value_name("Color", "RED") == "COLOR_RED2"
        assert names.reserve_enum_value_name("Color", "Red") == "COLOR_RED3"


class TestNestedNames:
    """Tests for names scoped to an enclosing message."""

    def test_numeric_suffix(self) -> None:
        """Should return the name itself, or the first free suffix from 2."""
        taken = {"Contact", "Contact2"}
        assert with_numeric_suffix("Phone", taken.__contains__) == "Phone"
        assert with_numeric_suffix("Contact", taken.__contains__) == "Contact3"

    def test_nested_name_avoids_taken(self) -> None:
        """Should PascalCase the name and skip top-level and sibling names."""
        assert nested_message_name("contact", set()) == "Contact"
        assert nested_message_name("address", {"Address", "Order"}) == "Address2"

    def test_nested_name_not_registered(self) -> None:
        """Should leave the file-wide registry untouched."""
        names = NameRegistry()
        nested_message_name("contact", names.message_names)

        assert names.renames == {}
        assert not names.is_type_name_used("Contact")
