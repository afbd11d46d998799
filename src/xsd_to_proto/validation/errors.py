"""Validation issue types.

Codes starting with ``E`` mark schemas the converter cannot handle; codes
starting with ``W`` mark schemas that convert, but not exactly as written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationLocation:
    """Dotted path of a declaration, e.g. ``complexTypes.Person.sequence.address``.

    Unnamed top-level declarations are addressed by index, e.g.
    ``complexTypes[0]``.
    """

    path: str

    def __str__(self) -> str:
        return self.path

    def _split(self) -> tuple[str, str]:
        head, _, rest = self.path.partition(".")
        if "[" in head or not rest:
            return head, rest
        name, _, detail = rest.partition(".")
        return f"{head}.{name}", detail

    @property
    def declaration(self) -> str:
        """Top-level declaration the path starts at, e.g. ``complexTypes.Person``."""
        return self._split()[0]

    @property
    def detail(self) -> str:
        """Remainder of the path inside the declaration, e.g. ``sequence.address``."""
        return self._split()[1]


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation issue."""

    code: str
    message: str
    severity: ValidationSeverity
    location: ValidationLocation | None = None
    suggestion: str | None = None
    context: dict[str, Any] = field(default_factory=dict)
    """Machine-readable details, e.g. the referenced type name."""

    def __str__(self) -> str:
        """Format as ``[CODE] SEVERITY message at path (hint: ...)``."""
        text = f"[{self.code}] {self.severity.value.upper()} {self.message}"
        if self.location:
            text += f" at {self.location}"
        if self.suggestion:
            text += f" (hint: {self.suggestion})"
        return text


@dataclass
class ValidationResult:
    """Issues found in one schema, in the order they were reported."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return self._by_severity(ValidationSeverity.ERROR)

    @property
    def warnings(self) -> list[ValidationIssue]:
        return self._by_severity(ValidationSeverity.WARNING)

    @property
    def is_valid(self) -> bool:
        """Check if the schema can be converted (warnings are OK)."""
        return not self.errors

    def codes(self) -> list[str]:
        """Return the codes of all issues, in order."""
        return [i.code for i in self.issues]

    def add(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def add_error(
        self,
        code: str,
        message: str,
        path: str,
        suggestion: str | None = None,
        **context: Any,
    ) -> None:
        """Report an error at ``path``; extra keywords become the issue context."""
        self._report(ValidationSeverity.ERROR, code, message, path, suggestion, context)

    def add_warning(
        self,
        code: str,
        message: str,
        path: str,
        suggestion: str | None = None,
        **context: Any,
    ) -> None:
        """Report a warning at ``path``; extra keywords become the issue context."""
        self._report(ValidationSeverity.WARNING, code, message, path, suggestion, context)

    def merge(self, other: ValidationResult) -> None:
        """Append the issues of another result."""
        self.issues.extend(other.issues)

    def _by_severity(self, severity: ValidationSeverity) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == severity]

    def _report(
        self,
        severity: ValidationSeverity,
        code: str,
        message: str,
        path: str,
        suggestion: str | None,
        context: dict[str, Any],
    ) -> None:
        self.add(
            ValidationIssue(
                code=code,
                message=message,
                severity=severity,
                location=ValidationLocation(path),
                suggestion=suggestion,
                context=context,
            )
        )


class ErrorCodes:
    """Validation codes reported by the schema validators."""

    # Unnamed top-level declarations
    E001_EMPTY_ELEMENT_NAME = "E001"
    E002_EMPTY_COMPLEX_TYPE_NAME = "E002"
    E003_EMPTY_SIMPLE_TYPE_NAME = "E003"

    # Declarations that map to an already used message or enum name
    W001_TYPE_NAME_COLLISION = "W001"
    # References to types no loaded schema declares
    W002_UNDECLARED_TYPE = "W002"
