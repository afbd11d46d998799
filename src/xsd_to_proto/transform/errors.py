"""Conversion error types."""

from __future__ import annotations

# Conversion passes, in execution order
PASS_ENUMS = 1
PASS_COMPLEX_TYPES = 2
PASS_ELEMENTS = 3


class ConversionError(Exception):
    """A schema could not be converted.

    Attributes
    ----------
        entity: Name of the schema entity being converted, if known.
        pass_number: Conversion pass the error occurred in (1 enums,
            2 complex types, 3 top-level elements), if known.

    """

    def __init__(
        self,
        message: str,
        entity: str | None = None,
        pass_number: int | None = None,
    ) -> None:
        """Initialize ConversionError.

        Args:
        ----
            message: Error message describing what went wrong.
            entity: Name of the offending schema entity.
            pass_number: Conversion pass number.

        """
        self.entity = entity
        self.pass_number = pass_number
        super().__init__(message)


class TypeMappingError(ConversionError):
    """A type reference could not be mapped (strict type resolution only)."""


class StructuralError(ConversionError):
    """The schema's structure does not allow the requested conversion."""
