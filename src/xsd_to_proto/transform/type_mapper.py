"""Map XSD built-in types to Protobuf scalar and well-known types."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

TIMESTAMP = "google.protobuf.Timestamp"
DURATION = "google.protobuf.Duration"

# Mapping from XSD built-in type names (without namespace prefix) to proto types
XSD_TO_PROTO: dict[str, str] = {
    # Strings
    "string": "string",
    "normalizedString": "string",
    "token": "string",
    "NMTOKEN": "string",
    "Name": "string",
    "NCName": "string",
    "ID": "string",
    "IDREF": "string",
    "anyURI": "string",
    # Boolean
    "boolean": "bool",
    # Integers
    "int": "int32",
    "integer": "int32",
    "short": "int32",
    "byte": "int32",
    "unsignedByte": "int32",
    "long": "int64",
    "unsignedInt": "int64",
    "unsignedLong": "uint64",
    "unsignedShort": "uint32",
    # Floating point
    "float": "float",
    "double": "double",
    "decimal": "double",
    # Date and time
    "dateTime": TIMESTAMP,
    "date": TIMESTAMP,
    "time": TIMESTAMP,
    "duration": DURATION,
    # Binary
    "base64Binary": "bytes",
    "hexBinary": "bytes",
}

# Well-known types and the file each one needs to import
WELL_KNOWN_IMPORTS: dict[str, str] = {
    TIMESTAMP: "google/protobuf/timestamp.proto",
    DURATION: "google/protobuf/duration.proto",
    "google.protobuf.Any": "google/protobuf/any.proto",
    "google.protobuf.Empty": "google/protobuf/empty.proto",
    "google.protobuf.Struct": "google/protobuf/struct.proto",
    "google.protobuf.Value": "google/protobuf/struct.proto",
    "google.protobuf.ListValue": "google/protobuf/struct.proto",
    "google.protobuf.FieldMask": "google/protobuf/field_mask.proto",
}


def clean_type_name(type_name: str) -> str:
    """Remove the namespace prefix from a type name.

    Examples
    --------
        >>> clean_type_name("xs:string")
        'string'
        >>> clean_type_name("Address")
        'Address'

    """
    _, _, local = type_name.rpartition(":")
    return local


def is_builtin_type(type_name: str) -> bool:
    """Check whether a (possibly prefixed) name is an XSD built-in type."""
    return clean_type_name(type_name) in XSD_TO_PROTO


def required_imports(proto_types: Iterable[str]) -> list[str]:
    """Collect the well-known type imports needed by the given proto types.

    Args:
    ----
        proto_types: Resolved proto type names, in any order.

    Returns:
    -------
        Sorted, deduplicated list of import paths.

    """
    return sorted({WELL_KNOWN_IMPORTS[t] for t in proto_types if t in WELL_KNOWN_IMPORTS})


class TypeMapper:
    """Resolve XSD type names to proto type names.

    Custom mappings take precedence over the built-in table. Names that are
    neither custom nor built-in are returned cleaned but otherwise
    unchanged; they are references to messages or enums of the schema and
    are resolved by the converter.
    """

    def __init__(self, custom_mappings: Mapping[str, str] | None = None) -> None:
        """Initialize the mapper.

        Args:
        ----
            custom_mappings: Optional XSD type name (unprefixed) to proto
                type overrides.

        """
        self._custom_mappings: dict[str, str] = dict(custom_mappings or {})

    @property
    def custom_mappings(self) -> dict[str, str]:
        """Return a copy of the custom mapping table."""
        return dict(self._custom_mappings)

    def add_custom_mapping(self, xsd_type: str, proto_type: str) -> None:
        """Register an override for an XSD type name."""
        self._custom_mappings[clean_type_name(xsd_type)] = proto_type

    def has_custom_mapping(self, type_name: str) -> bool:
        """Check whether a (possibly prefixed) name has a custom override."""
        return clean_type_name(type_name) in self._custom_mappings

    def map_type(self, xsd_type: str) -> str:
        """Map an XSD type name to a proto type name.

        Examples
        --------
            >>> TypeMapper().map_type("xs:dateTime")
            'google.protobuf.Timestamp'
            >>> TypeMapper().map_type("tns:Address")
            'Address'

        """
        clean = clean_type_name(xsd_type)

        if clean in self._custom_mappings:
            return self._custom_mappings[clean]

        return XSD_TO_PROTO.get(clean, clean)

    clean_type_name = staticmethod(clean_type_name)
    is_builtin = staticmethod(is_builtin_type)
    required_imports = staticmethod(required_imports)
