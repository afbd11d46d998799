"""Main XSD to Protobuf converter."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field, replace

from xsd_to_proto.config import ConverterOptions
from xsd_to_proto.ir.proto import (
    FieldLabel,
    ProtoEnum,
    ProtoEnumValue,
    ProtoField,
    ProtoFile,
    ProtoMessage,
)
from xsd_to_proto.models.xsd import (
    Attribute,
    ComplexType,
    Element,
    InlineComplexType,
    InlineSimpleType,
    Schema,
    SimpleType,
    TypeReference,
)
from xsd_to_proto.transform.errors import (
    PASS_COMPLEX_TYPES,
    PASS_ELEMENTS,
    ConversionError,
    StructuralError,
    TypeMappingError,
)
from xsd_to_proto.transform.naming import (
    NameRegistry,
    format_field_name,
    nested_message_name,
    to_pascal_case,
)
from xsd_to_proto.transform.type_mapper import (
    TypeMapper,
    clean_type_name,
    is_builtin_type,
    required_imports,
)

logger = logging.getLogger(__name__)

ARRAY_WRAPPER_PREFIX = "ArrayOf"
DEFAULT_PACKAGE = "generated"
# Proto type for elements and attributes that declare no type at all
UNTYPED_PROTO_TYPE = "string"


def is_repeated_occurrence(max_occurs: str) -> bool:
    """Check whether a maxOccurs value allows more than one occurrence."""
    return max_occurs == "unbounded" or (max_occurs != "" and max_occurs != "1")


def determine_field_label(min_occurs: str, max_occurs: str) -> FieldLabel:
    """Determine a field label from element occurrence bounds.

    Unspecified bounds mean exactly one, i.e. REQUIRED.
    """
    if is_repeated_occurrence(max_occurs):
        return FieldLabel.REPEATED

    if min_occurs == "0":
        return FieldLabel.OPTIONAL

    return FieldLabel.REQUIRED


def determine_attribute_label(use: str) -> FieldLabel:
    """Determine a field label from an attribute's ``use``."""
    if use == "required":
        return FieldLabel.REQUIRED
    return FieldLabel.OPTIONAL


def array_wrapper_element(complex_type: ComplexType) -> Element | None:
    """Return the repeated element of an ``ArrayOfX`` wrapper type.

    A wrapper is named ``ArrayOf...`` and its content is a single sequence
    holding a single repeated element typed by reference.

    Returns
    -------
        The wrapped element, or None if the type is not a wrapper.

    """
    if not clean_type_name(complex_type.name).startswith(ARRAY_WRAPPER_PREFIX):
        return None

    sequence = complex_type.sequence
    if sequence is None or complex_type.choice is not None or len(sequence.elements) != 1:
        return None

    element = sequence.elements[0]
    if isinstance(element.content, TypeReference) and is_repeated_occurrence(element.max_occurs):
        return element
    return None


def is_array_wrapper(complex_type: ComplexType) -> bool:
    """Check whether a complex type follows the ``ArrayOfX`` wrapper pattern."""
    return array_wrapper_element(complex_type) is not None


def plan_type_names(schema: Schema) -> frozenset[str]:
    """Return the final top-level message and enum names of a schema.

    Names are reserved in conversion order (enums, complex types, elements
    with inline complex types), so the result matches what ``convert``
    emits at top level.
    """
    names = NameRegistry()
    for simple_type in schema.simple_types:
        if simple_type.enumeration_values:
            names.reserve_enum_name(simple_type.name)
    for complex_type in schema.complex_types:
        if not is_array_wrapper(complex_type):
            names.reserve_message_name(complex_type.name)
    for element in schema.elements:
        if element.complex_type is not None:
            names.reserve_message_name(element.complex_type.name or element.name)
    return names.message_names | names.enum_names


def generate_package_name(target_namespace: str) -> str:
    """Derive a proto package name from a schema's target namespace.

    Examples
    --------
        >>> generate_package_name("http://example.com/simple")
        'simple'
        >>> generate_package_name("urn:example:orders")
        'orders'
        >>> generate_package_name("")
        'generated'

    """
    if not target_namespace:
        return DEFAULT_PACKAGE

    if target_namespace.startswith(("http://", "https://")):
        path = target_namespace.removeprefix("http://").removeprefix("https://")
        parts = path.split("/")

        if len(parts) == 2:
            return parts[1]

        if len(parts) > 1 and parts[-1]:
            return parts[-1]

        package_parts: list[str] = []
        if parts[0]:
            package_parts.extend(parts[0].split("."))
        package_parts.extend(part for part in parts[1:] if part)
        return ".".join(package_parts)

    if target_namespace.startswith("./"):
        parts = target_namespace.removeprefix("./").split("/")
        return ".".join(part for part in parts if part)

    if target_namespace.startswith("urn:"):
        segments = [part for part in target_namespace.split(":") if part]
        return segments[-1]

    return target_namespace.replace("/", ".").replace("_", ".").removeprefix(".")


@dataclass
class ConversionContext:
    """Mutable state of a single conversion.

    A fresh context is created for every ``convert()`` call, so a converter
    never carries names from one schema into the next.
    """

    schema: Schema
    names: NameRegistry = field(default_factory=NameRegistry)
    # Top-level complex and simple type names, imported schemas included
    declared_types: frozenset[str] = frozenset()
    # Name -> simple type, for simple types that do not become enums
    simple_aliases: dict[str, SimpleType] = field(default_factory=dict)
    # Final top-level message and enum names; nested messages avoid them
    top_level_names: frozenset[str] = frozenset()

    @classmethod
    def for_schema(cls, schema: Schema) -> ConversionContext:
        """Create a context with the schema's declarations indexed."""
        aliases: dict[str, SimpleType] = {}
        for declaring_schema in schema.iter_schemas():
            for simple_type in declaring_schema.simple_types:
                if simple_type.name and not simple_type.enumeration_values:
                    aliases.setdefault(simple_type.name, simple_type)

        return cls(
            schema=schema,
            declared_types=frozenset(schema.declared_type_names()),
            simple_aliases=aliases,
            top_level_names=plan_type_names(schema),
        )


class XsdToProtoConverter:
    """Convert a decoded XSD schema to a Protobuf file model.

    The converter itself only holds options; all per-conversion state lives
    in a ConversionContext, so one instance can convert any number of
    schemas, including concurrently.

    Usage:
        converter = XsdToProtoConverter()
        proto_file = converter.convert(schema)
    """

    def __init__(self, options: ConverterOptions | None = None) -> None:
        """Initialize the converter.

        Args:
        ----
            options: Conversion options. Defaults to ConverterOptions().

        """
        self._options = options or ConverterOptions()
        self._type_mapper = TypeMapper(self._options.custom_type_mappings)

    @property
    def options(self) -> ConverterOptions:
        """Return the conversion options."""
        return self._options

    @property
    def type_mapper(self) -> TypeMapper:
        """Return the type mapper used for XSD built-in types."""
        return self._type_mapper

    def convert(self, schema: Schema) -> ProtoFile:
        """Convert a schema to a ProtoFile.

        Only the schema's own declarations are converted; imported and
        included schemas are left alone.

        Args:
        ----
            schema: Decoded XSD schema.

        Returns:
        -------
            ProtoFile ready for rendering.

        Raises:
        ------
            ConversionError: If a complex type or element cannot be
                converted. The first error aborts the conversion.

        """
        ctx = ConversionContext.for_schema(schema)

        # Enums first, so they win unsuffixed names over messages
        enums = self._process_simple_types(ctx)

        messages = self._process_complex_types(ctx)
        messages.extend(self._process_elements(ctx))

        imports = required_imports(
            proto_field.type for message in messages for proto_field in message.iter_fields()
        )

        logger.debug(
            "Converted schema %r: %d messages, %d enums, %d imports",
            schema.target_namespace,
            len(messages),
            len(enums),
            len(imports),
        )

        return ProtoFile(
            package=generate_package_name(schema.target_namespace),
            options=dict(self._options.file_options),
            messages=tuple(messages),
            enums=tuple(enums),
            imports=tuple(imports),
        )

    def _process_simple_types(self, ctx: ConversionContext) -> list[ProtoEnum]:
        """Convert enumerated simple types into enums."""
        enums: list[ProtoEnum] = []

        for simple_type in ctx.schema.simple_types:
            if simple_type.enumeration_values:
                enums.append(self._convert_simple_type_to_enum(ctx, simple_type))

        return enums

    def _process_complex_types(self, ctx: ConversionContext) -> list[ProtoMessage]:
        """Convert top-level complex types into messages, skipping array wrappers."""
        messages: list[ProtoMessage] = []

        for complex_type in ctx.schema.complex_types:
            if is_array_wrapper(complex_type):
                logger.debug("Skipping array wrapper type %r", complex_type.name)
                continue

            try:
                message_name = ctx.names.reserve_message_name(complex_type.name)
                messages.append(self._convert_complex_type(ctx, complex_type, message_name))
            except ConversionError as e:
                raise type(e)(
                    f"failed to convert complex type '{complex_type.name}': {e}",
                    entity=complex_type.name,
                    pass_number=PASS_COMPLEX_TYPES,
                ) from e

        return messages

    def _process_elements(self, ctx: ConversionContext) -> list[ProtoMessage]:
        """Convert top-level elements with inline complex types into messages."""
        messages: list[ProtoMessage] = []

        for element in ctx.schema.elements:
            content = element.content
            if isinstance(content, (TypeReference, InlineSimpleType)):
                continue
            if not isinstance(content, InlineComplexType):
                raise TypeError(f"Unsupported element content: {type(content).__name__}")

            try:
                messages.append(self._convert_element_to_message(ctx, element))
            except ConversionError as e:
                raise type(e)(
                    f"failed to convert element '{element.name}': {e}",
                    entity=element.name,
                    pass_number=PASS_ELEMENTS,
                ) from e

        return messages

    def _convert_simple_type_to_enum(
        self,
        ctx: ConversionContext,
        simple_type: SimpleType,
    ) -> ProtoEnum:
        """Convert an enumerated simple type to an enum with a zero sentinel.

        Args:
        ----
            ctx: The conversion context.
            simple_type: Simple type with at least one enumeration.

        Returns:
        -------
            ProtoEnum with ``<PREFIX>_UNSPECIFIED = 0`` followed by the
            source values numbered from 1.

        """
        enum_name = ctx.names.reserve_enum_name(simple_type.name)

        values = [
            ProtoEnumValue(
                name=ctx.names.reserve_enum_value_name(enum_name, "", sentinel=True),
                number=0,
            )
        ]
        for number, value in enumerate(simple_type.enumeration_values, start=1):
            values.append(
                ProtoEnumValue(
                    name=ctx.names.reserve_enum_value_name(enum_name, value),
                    number=number,
                )
            )

        return ProtoEnum(name=enum_name, values=tuple(values))

    def _convert_element_to_message(
        self,
        ctx: ConversionContext,
        element: Element,
    ) -> ProtoMessage:
        """Convert a top-level element with an inline complex type to a message.

        The message takes the inline type's name if it has one, otherwise
        the element's name.

        Raises
        ------
            StructuralError: If the element has no inline complex type.

        """
        complex_type = element.complex_type
        if complex_type is None:
            raise StructuralError(
                f"element '{element.name}' has no complex type",
                entity=element.name,
                pass_number=PASS_ELEMENTS,
            )

        message_name = ctx.names.reserve_message_name(complex_type.name or element.name)
        return self._convert_complex_type(ctx, complex_type, message_name)

    def _convert_complex_type(
        self,
        ctx: ConversionContext,
        complex_type: ComplexType,
        message_name: str,
    ) -> ProtoMessage:
        """Convert a complex type to a message.

        Fields are numbered from 1 in the order: sequence elements, choice
        elements, attributes.

        Args:
        ----
            ctx: The conversion context.
            complex_type: The complex type to convert.
            message_name: Final, already reserved name of the message.

        Returns:
        -------
            The converted message, with nested messages for inline complex
            field types.

        """
        numbers = itertools.count(1)
        fields: list[ProtoField] = []
        nested: list[ProtoMessage] = []

        if complex_type.sequence is not None:
            for element in complex_type.sequence.elements:
                fields.append(self._convert_element_to_field(ctx, element, numbers, nested))

        if complex_type.choice is not None:
            for element in complex_type.choice.elements:
                proto_field = self._convert_element_to_field(ctx, element, numbers, nested)
                # Only one alternative is ever set
                fields.append(replace(proto_field, label=FieldLabel.OPTIONAL))

        for attribute in complex_type.attributes:
            fields.append(self._convert_attribute_to_field(ctx, attribute, next(numbers)))

        return ProtoMessage(name=message_name, fields=tuple(fields), messages=tuple(nested))

    def _convert_element_to_field(
        self,
        ctx: ConversionContext,
        element: Element,
        numbers: Iterator[int],
        nested: list[ProtoMessage],
    ) -> ProtoField:
        """Convert a sequence or choice element to a field.

        Args:
        ----
            ctx: The conversion context.
            element: The child element.
            numbers: Field number counter of the enclosing message.
            nested: Nested messages of the enclosing message; inline complex
                types are appended here.

        Returns:
        -------
            The converted field.

        """
        field_name = format_field_name(element.name, self._options.field_style)
        label = determine_field_label(element.min_occurs, element.max_occurs)
        content = element.content

        if isinstance(content, TypeReference):
            array_type = self._array_element_type(ctx, content.type_name)
            if array_type is not None:
                logger.debug(
                    "Collapsing %r of type %r into repeated %s",
                    element.name,
                    content.type_name,
                    array_type,
                )
                return ProtoField(
                    name=field_name,
                    type=array_type,
                    number=next(numbers),
                    label=FieldLabel.REPEATED,
                )
            proto_type = self._resolve_type(ctx, content.type_name)

        elif isinstance(content, InlineSimpleType):
            proto_type = self._resolve_simple_type(ctx, content.simple_type, set())

        elif isinstance(content, InlineComplexType):
            taken = {message.name for message in nested} | ctx.top_level_names
            nested_name = nested_message_name(content.complex_type.name or element.name, taken)
            nested_message = self._convert_complex_type(ctx, content.complex_type, nested_name)
            nested.append(nested_message)
            proto_type = nested_message.name

        else:
            raise TypeError(f"Unsupported element content: {type(content).__name__}")

        return ProtoField(name=field_name, type=proto_type, number=next(numbers), label=label)

    def _convert_attribute_to_field(
        self,
        ctx: ConversionContext,
        attribute: Attribute,
        number: int,
    ) -> ProtoField:
        """Convert an attribute to a field."""
        return ProtoField(
            name=format_field_name(attribute.name, self._options.field_style),
            type=self._resolve_type(ctx, attribute.type_name),
            number=number,
            label=determine_attribute_label(attribute.use),
        )

    def _resolve_type(
        self,
        ctx: ConversionContext,
        type_name: str,
        seen: set[str] | None = None,
    ) -> str:
        """Resolve a declared type name to the proto type a field uses.

        Built-in types go through the type mapper. Other names are looked up
        in the rename map (exact name, then PascalCase) first, so a type the
        schema declares always wins over a custom mapping of the same name.
        Custom mappings come next, then non-enum simple types, whose base
        type is used. Anything left is passed through as written, without
        its prefix.

        Raises
        ------
            TypeMappingError: In strict mode, for a reference to a type the
                schema does not declare.

        """
        if not type_name:
            return UNTYPED_PROTO_TYPE

        if is_builtin_type(type_name):
            return self._type_mapper.map_type(type_name)

        clean = clean_type_name(type_name)
        renamed = ctx.names.resolve(clean)
        if renamed is not None:
            return renamed

        proto_type = self._type_mapper.map_type(type_name)
        if self._type_mapper.has_custom_mapping(type_name):
            return proto_type

        simple_type = ctx.simple_aliases.get(clean)
        if simple_type is not None:
            return self._resolve_simple_type(ctx, simple_type, seen if seen is not None else set())

        if self._options.strict_types and clean not in ctx.declared_types:
            raise TypeMappingError(
                f"type '{type_name}' is not declared in the schema",
                entity=type_name,
            )

        return proto_type

    def _resolve_simple_type(
        self,
        ctx: ConversionContext,
        simple_type: SimpleType,
        seen: set[str],
    ) -> str:
        """Resolve a non-enum simple type to the proto type of its base.

        Unions, lists and simple types without a restriction base are
        carried as strings.
        """
        restriction = simple_type.restriction
        if restriction is None or not restriction.base:
            return UNTYPED_PROTO_TYPE

        if simple_type.name:
            if simple_type.name in seen:
                return UNTYPED_PROTO_TYPE
            seen.add(simple_type.name)

        return self._resolve_type(ctx, restriction.base, seen)

    def _array_element_type(self, ctx: ConversionContext, type_name: str) -> str | None:
        """Return the element type of an ``ArrayOf`` wrapper reference.

        The schema is scanned for a complex type with the same cleaned name
        that follows the wrapper pattern. Built-in element types are mapped;
        custom element types are PascalCased without consulting the rename
        map.

        Returns
        -------
            The proto element type, or None if ``type_name`` is not a wrapper.

        """
        clean = clean_type_name(type_name)
        if not clean.startswith(ARRAY_WRAPPER_PREFIX):
            return None

        for complex_type in ctx.schema.complex_types:
            if clean_type_name(complex_type.name) != clean:
                continue
            element = array_wrapper_element(complex_type)
            if element is None:
                continue

            element_type = element.type_name

            if is_builtin_type(element_type):
                return self._type_mapper.map_type(element_type)
            return to_pascal_case(clean_type_name(element_type))

        return None
