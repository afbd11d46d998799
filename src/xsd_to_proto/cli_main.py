"""Command-line interface for the xsd-to-proto converter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from xsd_to_proto import __version__
from xsd_to_proto.config import ConverterOptions, FieldNamingStyle, load_options
from xsd_to_proto.models import Schema, load_schema_with_imports

# Create Typer app
app = typer.Typer(
    name="xsd-to-proto",
    help="Convert XML Schema (XSD) files to Protocol Buffer (proto3) definitions.",
    add_completion=True,
    no_args_is_help=True,
)

# Rich consoles for output
console = Console()
error_console = Console(stderr=True, style="bold red")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"xsd-to-proto version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send library log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def parse_file_options(values: list[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` command-line items into a dictionary.

    Raises
    ------
        typer.BadParameter: If an item has no ``=`` or an empty key.

    """
    result: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{item}'", param_hint="--option")
        result[key] = value.strip()
    return result


def build_options(
    config: Path | None = None,
    go_package: str | None = None,
    file_options: list[str] | None = None,
    field_style: FieldNamingStyle | None = None,
    strict: bool = False,
    no_header: bool = False,
) -> ConverterOptions:
    """Assemble converter options from an options file and command-line flags.

    Flags override values from the file; ``--option`` entries and
    ``--go-package`` are merged into the file's ``file_options``.
    """
    options = load_options(config) if config is not None else ConverterOptions()
    data = options.model_dump()

    merged_file_options = dict(options.file_options)
    merged_file_options.update(parse_file_options(file_options or []))
    if go_package:
        merged_file_options["go_package"] = go_package
    data["file_options"] = merged_file_options

    if field_style is not None:
        data["field_style"] = field_style
    if strict:
        data["strict_types"] = True
    if no_header:
        data["include_header"] = False

    return ConverterOptions.model_validate(data)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Convert XML Schema (XSD) files to Protocol Buffer (proto3) definitions.

    Simple types with enumerations become enums, complex types and elements
    with inline complex types become messages.
    """


@app.command()
def convert(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input XSD file to convert.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output .proto file path. Defaults to input filename with .proto extension.",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    go_package: Annotated[
        str | None,
        typer.Option(
            "--go-package",
            "-p",
            help="Value of the go_package file option.",
        ),
    ] = None,
    file_options: Annotated[
        list[str] | None,
        typer.Option(
            "--option",
            help="Extra file option as KEY=VALUE. May be repeated.",
        ),
    ] = None,
    field_style: Annotated[
        FieldNamingStyle | None,
        typer.Option(
            "--field-style",
            help="Naming style for generated field names.",
            case_sensitive=False,
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail on references to types the schema does not declare.",
        ),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Converter options file (YAML or JSON).",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            help="Do not emit the generated-code header comment.",
        ),
    ] = False,
    to_stdout: Annotated[
        bool,
        typer.Option(
            "--stdout",
            help="Print the generated file instead of writing it.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Show detailed conversion progress.",
        ),
    ] = False,
) -> None:
    """Convert an XSD file to a proto3 file.

    The schema and everything it imports or includes is loaded and
    validated before conversion.

    Examples
    --------
        xsd-to-proto convert orders.xsd
        xsd-to-proto convert orders.xsd -o api/orders.proto
        xsd-to-proto convert orders.xsd -p example.com/orders/v1
        xsd-to-proto convert orders.xsd --option java_package=com.example.orders
        xsd-to-proto convert orders.xsd --field-style camel --stdout

    """
    from xsd_to_proto.cli.exception_handler import handle_exceptions

    configure_logging(verbose)

    @handle_exceptions(verbose)
    def run() -> None:
        _run_convert(
            input_file,
            output,
            build_options(config, go_package, file_options, field_style, strict, no_header),
            to_stdout,
            verbose,
        )

    run()


def _run_convert(
    input_file: Path,
    output: Path | None,
    options: ConverterOptions,
    to_stdout: bool,
    verbose: bool,
) -> None:
    from xsd_to_proto.cli.error_formatter import ErrorFormatter
    from xsd_to_proto.converters import ProtoWriter, default_output_path
    from xsd_to_proto.transform import XsdToProtoConverter
    from xsd_to_proto.validation import SchemaValidator

    # Status output goes to stderr when the proto text goes to stdout
    status_console = Console(stderr=True) if to_stdout else console

    schema = load_schema_with_imports(input_file)
    if verbose:
        status_console.print(f"  [dim]Namespace: {schema.target_namespace or '-'}[/dim]")
        status_console.print(f"  [dim]Imported schemas: {len(schema.imported_schemas)}[/dim]")

    validator = SchemaValidator(known_types=options.custom_type_mappings)
    result = validator.validate_and_raise(schema)
    if result.warnings:
        ErrorFormatter(Console(stderr=True)).format_validation_result(result, input_file)

    proto_file = XsdToProtoConverter(options).convert(schema)
    if verbose:
        status_console.print(f"  [dim]Package: {proto_file.package}[/dim]")
        status_console.print(f"  [dim]Enums: {len(proto_file.enums)}[/dim]")
        status_console.print(f"  [dim]Messages: {len(proto_file.messages)}[/dim]")

    writer = ProtoWriter(include_header=options.include_header, source_name=input_file.name)

    if to_stdout:
        typer.echo(writer.render(proto_file), nl=False)
        return

    output_path = writer.write(proto_file, output or default_output_path(input_file))
    console.print(
        f"\n[bold green]✓ Generated {output_path.name}[/bold green] [dim]({output_path})[/dim]\n"
    )


@app.command()
def validate(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input XSD file to validate.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only output errors, no success messages.",
        ),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Treat warnings as errors.",
        ),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format for validation results: text, table.",
        ),
    ] = "text",
) -> None:
    """Validate an XSD file for conversion.

    Reports unnamed declarations (errors), type names that will be renamed
    and references to undeclared types (warnings).

    Examples
    --------
        xsd-to-proto validate orders.xsd
        xsd-to-proto validate orders.xsd --quiet
        xsd-to-proto validate orders.xsd --format table

    """
    from xsd_to_proto.cli.error_formatter import ErrorFormatter, ErrorTable
    from xsd_to_proto.models import LoaderError
    from xsd_to_proto.validation import SchemaValidator

    configure_logging(False)

    try:
        schema = load_schema_with_imports(input_file)
    except LoaderError as e:
        error_console.print(f"\n✗ Failed to load {input_file.name}")
        error_console.print(str(e), markup=False)
        raise typer.Exit(code=1) from None

    result = SchemaValidator(strict=strict).validate(schema)

    if not result.is_valid or result.warnings:
        if output_format == "table":
            ErrorTable(error_console).print_result(result)
        else:
            ErrorFormatter(Console(stderr=True)).format_validation_result(result, input_file)

        if not result.is_valid or strict:
            raise typer.Exit(code=1)

    if not quiet:
        if result.warnings:
            console.print(
                f"\n[bold yellow]⚠ {input_file.name} is valid with warnings[/bold yellow]\n"
            )
        else:
            console.print(f"\n[bold green]✓ {input_file.name} is valid[/bold green]\n")


def _print_summary(schema: Schema) -> None:
    """Print a summary of a loaded schema."""
    from xsd_to_proto.transform import generate_package_name, is_array_wrapper

    table = Table(title="Schema Summary", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Target Namespace", schema.target_namespace or "-")
    table.add_row("Package", generate_package_name(schema.target_namespace))

    enum_count = sum(1 for s in schema.simple_types if s.enumeration_values)
    wrapper_count = sum(1 for c in schema.complex_types if is_array_wrapper(c))

    table.add_row("", "")  # Spacer
    table.add_row("Elements", str(len(schema.elements)))
    table.add_row("Complex Types", str(len(schema.complex_types)))
    table.add_row("Array Wrappers", str(wrapper_count))
    table.add_row("Simple Types", str(len(schema.simple_types)))
    table.add_row("Enumerations", str(enum_count))

    table.add_row("", "")  # Spacer
    table.add_row("Imports", str(len(schema.imports)))
    table.add_row("Includes", str(len(schema.includes)))
    table.add_row("Loaded Schemas", str(len(schema.imported_schemas)))

    console.print(table)


@app.command()
def info(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input XSD file to inspect.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
) -> None:
    """Display information about an XSD file.

    Examples
    --------
        xsd-to-proto info orders.xsd

    """
    from xsd_to_proto.cli.exception_handler import handle_exceptions

    configure_logging(False)

    @handle_exceptions()
    def run() -> None:
        schema = load_schema_with_imports(input_file)
        console.print(
            Panel.fit(
                f"[bold]XML Schema[/bold]\nFile: {input_file}",
                title="File Info",
            )
        )
        _print_summary(schema)

    run()


if __name__ == "__main__":
    app()
