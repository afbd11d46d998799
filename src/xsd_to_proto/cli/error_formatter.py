"""Validation result formatting with Rich.

Issues are grouped by the top-level XSD declaration they were found in
(``complexTypes.Shipment``, ``elements[0]``, ...), so every problem of one
type is listed together, in the order the schema declares them.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from xsd_to_proto.validation.errors import ValidationSeverity

if TYPE_CHECKING:
    from xsd_to_proto.validation.errors import ValidationIssue, ValidationResult

SCHEMA_LEVEL = "(schema)"

_SEVERITY_STYLES = {
    ValidationSeverity.ERROR: "red",
    ValidationSeverity.WARNING: "yellow",
}


def group_by_declaration(issues: list[ValidationIssue]) -> dict[str, list[ValidationIssue]]:
    """Group issues by declaration, keeping first-seen declaration order.

    Issues without a location are collected under ``(schema)``.
    """
    groups: dict[str, list[ValidationIssue]] = {}
    for issue in issues:
        key = issue.location.declaration if issue.location else SCHEMA_LEVEL
        groups.setdefault(key, []).append(issue)
    return groups


class ErrorFormatter:
    """Print a validation summary followed by issues per declaration."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def format_validation_result(
        self,
        result: ValidationResult,
        source_path: Path | None = None,
    ) -> None:
        """Format and print validation result.

        Args:
        ----
            result: The validation result to format.
            source_path: Path to the XSD file (for display).

        """
        if not result.issues:
            self.console.print("[green]✓ Validation passed[/green]")
            return

        # Errors first within each declaration
        ordered = result.errors + result.warnings
        groups = group_by_declaration(ordered)

        self.console.print(self._build_summary(result, len(groups), source_path))
        self.console.print()

        for declaration, issues in groups.items():
            self.console.print(f"[bold]{escape(declaration)}[/bold]", highlight=False)
            for issue in issues:
                self._print_issue(issue)
            self.console.print()

    def _build_summary(
        self,
        result: ValidationResult,
        declarations: int,
        source_path: Path | None,
    ) -> Panel:
        errors = len(result.errors)
        warnings = len(result.warnings)
        title = "Validation Failed" if errors else "Validation Warnings"

        content = Text()
        if source_path:
            content.append(f"File: {source_path}\n", style="dim")

        counts: list[tuple[str, str]] = []
        if errors:
            counts.append((f"Errors: {errors}", "red bold"))
        if warnings:
            counts.append((f"Warnings: {warnings}", "yellow"))
        for i, (label, style) in enumerate(counts):
            if i:
                content.append("  ")
            content.append(label, style=style)

        noun = "declaration" if declarations == 1 else "declarations"
        content.append(f"  in {declarations} {noun}", style="dim")

        return Panel(content, title=title, border_style="red" if errors else "yellow")

    def _print_issue(self, issue: ValidationIssue) -> None:
        color = _SEVERITY_STYLES[issue.severity]
        self.console.print(
            f"  [{color} bold]{issue.severity.value.upper()}[/{color} bold] "
            f"[{color}]\\[{issue.code}][/{color}] "
            f"{escape(issue.message)}",
            highlight=False,
        )

        if issue.location and issue.location.detail:
            detail = escape(issue.location.detail)
            self.console.print(f"    [dim]at {detail}[/dim]", highlight=False)

        if issue.suggestion:
            hint = escape(issue.suggestion)
            self.console.print(f"    [green]hint: {hint}[/green]", highlight=False)


class ErrorTable:
    """Display validation issues as a table, one section per declaration."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize error table formatter."""
        self.console = console or Console(stderr=True)

    def print_result(self, result: ValidationResult) -> None:
        """Print validation result as table."""
        table = Table(title="Validation Issues")

        table.add_column("Declaration", style="bold")
        table.add_column("Code", style="cyan", width=6)
        table.add_column("Severity", width=8)
        table.add_column("Path", style="dim")
        table.add_column("Message")

        groups = group_by_declaration(result.issues)
        for i, (declaration, issues) in enumerate(groups.items()):
            if i:
                table.add_section()
            for j, issue in enumerate(issues):
                color = _SEVERITY_STYLES[issue.severity]
                table.add_row(
                    escape(declaration) if j == 0 else "",
                    issue.code,
                    f"[{color}]{issue.severity.value.upper()}[/{color}]",
                    escape(issue.location.detail if issue.location else "") or "-",
                    escape(issue.message),
                )

        self.console.print(table)
