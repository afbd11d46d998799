"""Validators for type references."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from xsd_to_proto.models.xsd import (
    ComplexType,
    Element,
    InlineComplexType,
    InlineSimpleType,
    SimpleType,
    TypeReference,
)
from xsd_to_proto.transform.type_mapper import clean_type_name, is_builtin_type
from xsd_to_proto.validation.base import BaseValidator
from xsd_to_proto.validation.errors import ErrorCodes, ValidationResult

if TYPE_CHECKING:
    from xsd_to_proto.models.xsd import Schema


class TypeReferenceValidator(BaseValidator):
    """Validates that type references point to declared or built-in types.

    Types declared by imported and included schemas count as declared.
    Undeclared references are converted as-is, which usually yields a
    `.proto` file that does not compile, so they are reported as warnings.
    """

    def __init__(self, known_types: Iterable[str] = ()) -> None:
        """Initialize the validator.

        Args:
        ----
            known_types: Extra type names to accept, e.g. the keys of the
                custom type mappings.

        """
        self.known_types = frozenset(clean_type_name(t) for t in known_types)

    def validate(
        self,
        schema: Schema,
        result: ValidationResult,
    ) -> None:
        """Validate all type references of the schema."""
        declared = schema.declared_type_names() | self.known_types

        for element in schema.elements:
            self._check_element(element, f"elements.{element.name}", declared, result)

        for complex_type in schema.complex_types:
            self._check_complex_type(
                complex_type, f"complexTypes.{complex_type.name}", declared, result
            )

        for simple_type in schema.simple_types:
            self._check_simple_type(
                simple_type, f"simpleTypes.{simple_type.name}", declared, result
            )

    def _check_reference(
        self,
        type_name: str,
        path: str,
        declared: set[str] | frozenset[str],
        result: ValidationResult,
    ) -> None:
        if not type_name or is_builtin_type(type_name):
            return

        if clean_type_name(type_name) in declared:
            return

        result.add_warning(
            code=ErrorCodes.W002_UNDECLARED_TYPE,
            message=f"Type '{type_name}' is not declared in the schema",
            path=path,
            suggestion="Declare the type, import its schema, or add a custom type mapping",
            referenced_type=type_name,
        )

    def _check_element(
        self,
        element: Element,
        path: str,
        declared: set[str] | frozenset[str],
        result: ValidationResult,
    ) -> None:
        content = element.content
        if isinstance(content, TypeReference):
            self._check_reference(content.type_name, f"{path}.type", declared, result)
        elif isinstance(content, InlineComplexType):
            self._check_complex_type(content.complex_type, path, declared, result)
        elif isinstance(content, InlineSimpleType):
            self._check_simple_type(content.simple_type, path, declared, result)
        else:
            raise TypeError(f"Unsupported element content: {type(content).__name__}")

    def _check_complex_type(
        self,
        complex_type: ComplexType,
        path: str,
        declared: set[str] | frozenset[str],
        result: ValidationResult,
    ) -> None:
        for compositor_name, compositor in (
            ("sequence", complex_type.sequence),
            ("choice", complex_type.choice),
        ):
            if compositor is None:
                continue
            for element in compositor.elements:
                self._check_element(
                    element, f"{path}.{compositor_name}.{element.name}", declared, result
                )

        for attribute in complex_type.attributes:
            self._check_reference(
                attribute.type_name, f"{path}.@{attribute.name}.type", declared, result
            )

    def _check_simple_type(
        self,
        simple_type: SimpleType,
        path: str,
        declared: set[str] | frozenset[str],
        result: ValidationResult,
    ) -> None:
        if simple_type.restriction is not None:
            self._check_reference(
                simple_type.restriction.base, f"{path}.restriction.base", declared, result
            )
        if simple_type.list_type is not None:
            self._check_reference(
                simple_type.list_type.item_type, f"{path}.list.itemType", declared, result
            )
        if simple_type.union is not None:
            for member in simple_type.union.member_types.split():
                self._check_reference(member, f"{path}.union.memberTypes", declared, result)
