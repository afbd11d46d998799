"""Schema validator interface and composition."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from xsd_to_proto.validation.errors import ValidationResult

if TYPE_CHECKING:
    from xsd_to_proto.models.xsd import Schema

logger = logging.getLogger(__name__)


class BaseValidator(ABC):
    """A check over the declarations of one decoded schema."""

    @abstractmethod
    def validate(self, schema: Schema, result: ValidationResult) -> None:
        """Add the issues found in ``schema`` to ``result``.

        Imported schemas are context only; issues are reported for the
        root schema's own declarations.
        """
        ...


class CompositeValidator(BaseValidator):
    """Run several schema checks in order against one result."""

    def __init__(self, validators: list[BaseValidator] | None = None) -> None:
        self.validators = validators or []

    def add(self, validator: BaseValidator) -> None:
        self.validators.append(validator)

    def validate(self, schema: Schema, result: ValidationResult) -> None:
        """Run every validator and log how many issues each one added."""
        for validator in self.validators:
            before = len(result.issues)
            validator.validate(schema, result)
            logger.debug(
                "%s reported %d issue(s) for %s",
                type(validator).__name__,
                len(result.issues) - before,
                schema.target_namespace or "<no namespace>",
            )
