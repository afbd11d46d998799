"""Intermediate Representation (IR) of the generated Protobuf file.

The IR sits between the converter and the renderer:

1. Names are final (unique, style-formatted)
2. Type references are resolved to proto scalar, well-known or local types
3. Field and enum value numbers are assigned
4. Uses frozen dataclasses, immutable once emitted
"""

from xsd_to_proto.ir.proto import (
    PROTO3_SYNTAX,
    FieldLabel,
    ProtoEnum,
    ProtoEnumValue,
    ProtoField,
    ProtoFile,
    ProtoMessage,
)

__all__ = [
    "PROTO3_SYNTAX",
    "FieldLabel",
    "ProtoEnum",
    "ProtoEnumValue",
    "ProtoField",
    "ProtoFile",
    "ProtoMessage",
]
