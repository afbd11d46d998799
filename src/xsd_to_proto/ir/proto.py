"""IR models for the generated Protobuf file.

This module defines the output of the converter: a proto3 file with its
messages, enums and fields. The renderer turns these into `.proto` text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

PROTO3_SYNTAX = "proto3"


class FieldLabel(Enum):
    """Semantic label of a field.

    proto3 has no required fields on the wire; REQUIRED is kept to document
    the source schema's intent. Only REPEATED changes the rendered field.
    """

    OPTIONAL = "optional"
    REQUIRED = "required"
    REPEATED = "repeated"


@dataclass(frozen=True)
class ProtoField:
    """A field in a Protobuf message.

    Attributes
    ----------
        name: Field name after naming-style formatting.
        type: Scalar, well-known or message/enum type name.
        number: Field number, 1..N within the message.
        label: Semantic label (optional, required, repeated).
        options: Field options (rendered in brackets).

    """

    name: str
    type: str
    number: int
    label: FieldLabel = FieldLabel.OPTIONAL
    options: dict[str, str] = field(default_factory=dict)

    @property
    def is_repeated(self) -> bool:
        """Check whether the field is a repeated field."""
        return self.label == FieldLabel.REPEATED


@dataclass(frozen=True)
class ProtoEnumValue:
    """A value of a Protobuf enum."""

    name: str
    number: int


@dataclass(frozen=True)
class ProtoEnum:
    """A Protobuf enum definition.

    The value numbered 0 is always the ``<PREFIX>_UNSPECIFIED`` sentinel.
    """

    name: str
    values: tuple[ProtoEnumValue, ...] = ()


@dataclass(frozen=True)
class ProtoMessage:
    """A Protobuf message definition.

    Attributes
    ----------
        name: Unique message name.
        fields: Fields in field-number order.
        messages: Nested message definitions.
        enums: Nested enum definitions.

    """

    name: str
    fields: tuple[ProtoField, ...] = ()
    messages: tuple[ProtoMessage, ...] = ()
    enums: tuple[ProtoEnum, ...] = ()

    def iter_fields(self) -> list[ProtoField]:
        """Return this message's fields followed by those of nested messages."""
        result = list(self.fields)
        for nested in self.messages:
            result.extend(nested.iter_fields())
        return result


@dataclass(frozen=True)
class ProtoFile:
    """A complete proto3 file.

    Attributes
    ----------
        package: Package name derived from the target namespace.
        syntax: Always "proto3".
        options: File options such as go_package (one value per key).
        messages: Top-level messages in emission order.
        enums: Top-level enums in emission order.
        imports: Sorted, deduplicated import paths.

    """

    package: str
    syntax: str = PROTO3_SYNTAX
    options: dict[str, str] = field(default_factory=dict)
    messages: tuple[ProtoMessage, ...] = ()
    enums: tuple[ProtoEnum, ...] = ()
    imports: tuple[str, ...] = ()

    def get_message(self, name: str) -> ProtoMessage | None:
        """Look up a top-level message by name."""
        return next((m for m in self.messages if m.name == name), None)

    def get_enum(self, name: str) -> ProtoEnum | None:
        """Look up a top-level enum by name."""
        return next((e for e in self.enums if e.name == name), None)
