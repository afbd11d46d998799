"""XSD model to Protobuf IR conversion.

The conversion runs in three passes over the schema's own declarations:
    1. Simple types with enumerations become enums
    2. Named complex types become messages (ArrayOf wrappers are skipped)
    3. Top-level elements with inline complex types become messages

References between types are resolved through the rename map the passes
build, so a field always uses the final (possibly suffixed) name of the
type it refers to.

Primary Class:
    XsdToProtoConverter: Main converter class

Example:
-------
    >>> from xsd_to_proto.models import load_schema
    >>> from xsd_to_proto.transform import XsdToProtoConverter
    >>>
    >>> schema = load_schema("orders.xsd")
    >>> proto_file = XsdToProtoConverter().convert(schema)
    >>> print(f"Package: {proto_file.package}")
    >>> print(f"Messages: {len(proto_file.messages)}")


"""

from xsd_to_proto.transform.converter import (
    ConversionContext,
    XsdToProtoConverter,
    array_wrapper_element,
    determine_attribute_label,
    determine_field_label,
    generate_package_name,
    is_array_wrapper,
    plan_type_names,
)
from xsd_to_proto.transform.errors import ConversionError, StructuralError, TypeMappingError
from xsd_to_proto.transform.naming import (
    NameRegistry,
    format_field_name,
    to_camel_case,
    to_pascal_case,
    to_screaming_snake_case,
    to_snake_case,
)
from xsd_to_proto.transform.type_mapper import TypeMapper, clean_type_name, is_builtin_type

__all__ = [
    "ConversionContext",
    "ConversionError",
    "NameRegistry",
    "StructuralError",
    "TypeMapper",
    "TypeMappingError",
    "XsdToProtoConverter",
    "array_wrapper_element",
    "clean_type_name",
    "determine_attribute_label",
    "determine_field_label",
    "format_field_name",
    "generate_package_name",
    "is_array_wrapper",
    "is_builtin_type",
    "plan_type_names",
    "to_camel_case",
    "to_pascal_case",
    "to_screaming_snake_case",
    "to_snake_case",
]
