"""Validators for top-level declaration names."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from xsd_to_proto.transform.converter import is_array_wrapper
from xsd_to_proto.transform.naming import to_pascal_case
from xsd_to_proto.validation.base import BaseValidator
from xsd_to_proto.validation.errors import ErrorCodes, ValidationResult

if TYPE_CHECKING:
    from xsd_to_proto.models.xsd import Schema


class DeclarationNameValidator(BaseValidator):
    """Validates that top-level declarations are named."""

    def validate(
        self,
        schema: Schema,
        result: ValidationResult,
    ) -> None:
        """Report elements, complex types and simple types without a name."""
        for i, element in enumerate(schema.elements):
            if not element.name:
                result.add_error(
                    code=ErrorCodes.E001_EMPTY_ELEMENT_NAME,
                    message="element name cannot be empty",
                    path=f"elements[{i}]",
                    suggestion="Add a 'name' attribute to the element",
                )

        for i, complex_type in enumerate(schema.complex_types):
            if not complex_type.name:
                result.add_error(
                    code=ErrorCodes.E002_EMPTY_COMPLEX_TYPE_NAME,
                    message="complexType name cannot be empty",
                    path=f"complexTypes[{i}]",
                    suggestion="Top-level complex types must be named",
                )

        for i, simple_type in enumerate(schema.simple_types):
            if not simple_type.name:
                result.add_error(
                    code=ErrorCodes.E003_EMPTY_SIMPLE_TYPE_NAME,
                    message="simpleType name cannot be empty",
                    path=f"simpleTypes[{i}]",
                    suggestion="Top-level simple types must be named",
                )


class TypeNameCollisionValidator(BaseValidator):
    """Warns about declarations that end up with the same generated name.

    Enums and messages share one namespace, and names are compared after
    PascalCase conversion, so ``order_line`` and ``OrderLine`` collide.
    """

    def validate(
        self,
        schema: Schema,
        result: ValidationResult,
    ) -> None:
        """Report groups of declarations that map to the same type name."""
        groups: dict[str, list[tuple[str, str]]] = defaultdict(list)

        for simple_type in schema.simple_types:
            if simple_type.name and simple_type.enumeration_values:
                groups[to_pascal_case(simple_type.name)].append(
                    (simple_type.name, f"simpleTypes.{simple_type.name}")
                )

        for complex_type in schema.complex_types:
            if complex_type.name and not is_array_wrapper(complex_type):
                groups[to_pascal_case(complex_type.name)].append(
                    (complex_type.name, f"complexTypes.{complex_type.name}")
                )

        for element in schema.elements:
            complex_type = element.complex_type
            if complex_type is None:
                continue
            name = complex_type.name or element.name
            if name:
                groups[to_pascal_case(name)].append((name, f"elements.{element.name}"))

        for final_name, declarations in groups.items():
            if len(declarations) < 2:
                continue

            names = ", ".join(f"'{name}'" for name, _ in declarations)
            renamed = ", ".join(f"'{final_name}{n}'" for n in range(2, len(declarations) + 1))
            result.add_warning(
                code=ErrorCodes.W001_TYPE_NAME_COLLISION,
                message=f"Declarations {names} all map to type name '{final_name}'",
                path=declarations[1][1],
                suggestion=f"Later declarations will be emitted as {renamed}",
                final_name=final_name,
                declarations=[name for name, _ in declarations],
            )
