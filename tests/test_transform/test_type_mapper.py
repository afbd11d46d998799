"""Tests for the XSD to proto type mapper."""

import pytest
from xsd_to_proto.transform.type_mapper import (
    DURATION,
    TIMESTAMP,
    XSD_TO_PROTO,
    TypeMapper,
    clean_type_name,
    is_builtin_type,
    required_imports,
)


class TestCleanTypeName:
    """Tests for namespace prefix removal."""

    def test_prefixed(self) -> None:
        """Should drop the prefix up to the last colon."""
        assert clean_type_name("xs:string") == "string"
        assert clean_type_name("tns:Address") == "Address"

    def test_unprefixed(self) -> None:
        """Should leave unprefixed names alone."""
        assert clean_type_name("Address") == "Address"

    def test_empty(self) -> None:
        """Should map the empty name to itself."""
        assert clean_type_name("") == ""


class TestMapType:
    """Tests for TypeMapper.map_type."""

    @pytest.mark.parametrize(
        ("xsd_type", "proto_type"),
        [
            ("string", "string"),
            ("anyURI", "string"),
            ("boolean", "bool"),
            ("int", "int32"),
            ("integer", "int32"),
            ("unsignedByte", "int32"),
            ("long", "int64"),
            ("unsignedInt", "int64"),
            ("unsignedLong", "uint64"),
            ("unsignedShort", "uint32"),
            ("float", "float"),
            ("decimal", "double"),
            ("dateTime", TIMESTAMP),
            ("date", TIMESTAMP),
            ("time", TIMESTAMP),
            ("duration", DURATION),
            ("base64Binary", "bytes"),
            ("hexBinary", "bytes"),
        ],
    )
    def test_builtin_types(self, xsd_type: str, proto_type: str) -> None:
        """Should map built-in types with and without a prefix identically."""
        mapper = TypeMapper()
        assert mapper.map_type(xsd_type) == proto_type
        assert mapper.map_type(f"xs:{xsd_type}") == proto_type
        assert mapper.map_type(f"xsd:{xsd_type}") == proto_type

    def test_custom_reference_passes_through(self) -> None:
        """Should return unknown names cleaned but unchanged."""
        assert TypeMapper().map_type("tns:Address") == "Address"
        assert TypeMapper().map_type("ArrayOfItem") == "ArrayOfItem"

    def test_unknown_builtin_lookalike_passes_through(self) -> None:
        """Should not fail for XSD types outside the table."""
        assert TypeMapper().map_type("xs:gYear") == "gYear"

    def test_empty_name(self) -> None:
        """Should map the empty name to the empty name."""
        assert TypeMapper().map_type("") == ""

    def test_every_table_entry_is_builtin(self) -> None:
        """Should report each table key as built-in."""
        for xsd_type in XSD_TO_PROTO:
            assert is_builtin_type(f"xs:{xsd_type}")


class TestCustomMappings:
    """Tests for custom type overrides."""

    def test_constructor_mappings(self) -> None:
        """Should prefer custom mappings over the built-in table."""
        mapper = TypeMapper({"dateTime": "string", "gYear": "int32"})
        assert mapper.map_type("xs:dateTime") == "string"
        assert mapper.map_type("xs:gYear") == "int32"
        assert mapper.map_type("xs:date") == TIMESTAMP

    def test_add_custom_mapping_cleans_key(self) -> None:
        """Should register overrides under the cleaned name."""
        mapper = TypeMapper()
        mapper.add_custom_mapping("tns:Money", "int64")

        assert mapper.has_custom_mapping("Money")
        assert mapper.has_custom_mapping("other:Money")
        assert mapper.map_type("Money") == "int64"

    def test_custom_mappings_returns_copy(self) -> None:
        """Should not expose the internal table."""
        mapper = TypeMapper({"gYear": "int32"})
        mapper.custom_mappings["gDay"] = "int32"
        assert not mapper.has_custom_mapping("gDay")


class TestRequiredImports:
    """Tests for well-known type import collection."""

    def test_timestamp_and_duration(self) -> None:
        """Should return sorted, deduplicated imports."""
        imports = required_imports([TIMESTAMP, "string", DURATION, TIMESTAMP])
        assert imports == [
            "google/protobuf/duration.proto",
            "google/protobuf/timestamp.proto",
        ]

    def test_struct_types_share_one_import(self) -> None:
        """Should map Struct, Value and ListValue to struct.proto once."""
        imports = required_imports(
            ["google.protobuf.Struct", "google.protobuf.Value", "google.protobuf.ListValue"]
        )
        assert imports == ["google/protobuf/struct.proto"]

    def test_other_well_known_types(self) -> None:
        """Should cover Any, Empty and FieldMask."""
        imports = required_imports(
            ["google.protobuf.Any", "google.protobuf.Empty", "google.protobuf.FieldMask"]
        )
        assert imports == [
            "google/protobuf/any.proto",
            "google/protobuf/empty.proto",
            "google/protobuf/field_mask.proto",
        ]

    def test_no_imports(self) -> None:
        """Should return an empty list for scalar and local types only."""
        assert required_imports(["string", "int32", "Address"]) == []

    def test_static_alias(self) -> None:
        """Should be reachable through the mapper as well."""
        assert TypeMapper.required_imports([TIMESTAMP]) == ["google/protobuf/timestamp.proto"]
