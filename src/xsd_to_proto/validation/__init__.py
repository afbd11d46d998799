"""Validation module for decoded XSD schemas."""

from xsd_to_proto.validation.errors import (
    ErrorCodes,
    ValidationIssue,
    ValidationLocation,
    ValidationResult,
    ValidationSeverity,
)
from xsd_to_proto.validation.validator import (
    SchemaValidator,
    ValidationError,
)

__all__ = [
    "ErrorCodes",
    "SchemaValidator",
    "ValidationError",
    "ValidationIssue",
    "ValidationLocation",
    "ValidationResult",
    "ValidationSeverity",
]
