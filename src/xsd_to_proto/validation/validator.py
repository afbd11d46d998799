"""Main validator combining all validation rules."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from xsd_to_proto.validation.base import CompositeValidator
from xsd_to_proto.validation.errors import ValidationResult, ValidationSeverity
from xsd_to_proto.validation.name_validators import (
    DeclarationNameValidator,
    TypeNameCollisionValidator,
)
from xsd_to_proto.validation.reference_validators import TypeReferenceValidator

if TYPE_CHECKING:
    from xsd_to_proto.models.xsd import Schema


class SchemaValidator:
    """Main validator for decoded schemas.

    Errors mark schemas the converter cannot handle; warnings mark schemas
    that convert, but not quite as written (renamed types, references left
    unresolved).
    """

    def __init__(self, strict: bool = False, known_types: Iterable[str] = ()) -> None:
        """Initialize validator.

        Args:
        ----
            strict: If True, treat warnings as errors.
            known_types: Type names to accept without a declaration, e.g.
                custom-mapped types.

        """
        self.strict = strict
        self._validator = CompositeValidator(
            [
                DeclarationNameValidator(),
                TypeNameCollisionValidator(),
                TypeReferenceValidator(known_types),
            ]
        )

    def validate(self, schema: Schema) -> ValidationResult:
        """Validate a schema.

        Args:
        ----
            schema: The schema to validate.

        Returns:
        -------
            ValidationResult with all issues found.

        """
        result = ValidationResult()
        self._validator.validate(schema, result)
        return result

    def validate_and_raise(self, schema: Schema) -> ValidationResult:
        """Validate and raise exception if invalid.

        Returns
        -------
            The validation result, which may still hold warnings.

        Raises
        ------
            ValidationError: If validation fails.

        """
        result = self.validate(schema)

        if not result.is_valid:
            raise ValidationError(result)

        if self.strict and result.warnings:
            raise ValidationError(result)

        return result


class ValidationError(Exception):
    """Raised when validation fails."""

    def __init__(self, result: ValidationResult) -> None:
        """Initialize with validation result.

        Args:
        ----
            result: The validation result containing issues.

        """
        self.result = result
        error_count = len(result.errors)
        warning_count = len(result.warnings)

        parts = []
        if error_count:
            parts.append(f"{error_count} error(s)")
        if warning_count:
            parts.append(f"{warning_count} warning(s)")

        message = f"Validation failed: {', '.join(parts)}"
        super().__init__(message)

    def format_issues(self) -> str:
        """Format all issues as a string, errors first."""
        lines = [f"ERROR: {issue}" for issue in self.result.errors]
        lines.extend(f"WARNING: {issue}" for issue in self.result.warnings)
        return "\n".join(lines)

    @property
    def errors_only(self) -> list[str]:
        """Get only error messages."""
        return [
            str(issue) for issue in self.result.issues if issue.severity == ValidationSeverity.ERROR
        ]
