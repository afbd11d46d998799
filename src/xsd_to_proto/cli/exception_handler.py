"""CLI exception handling."""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel

from xsd_to_proto.models.loader import LoaderError
from xsd_to_proto.transform.errors import ConversionError
from xsd_to_proto.validation.validator import ValidationError

T = TypeVar("T")

console = Console(stderr=True)


def handle_exceptions(
    verbose: bool = False,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Handle exceptions in CLI commands with formatted output.

    Every handled exception is printed and turned into exit code 1.

    Args:
    ----
        verbose: Whether to show full tracebacks.

    Returns:
    -------
        Decorator function.

    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: object, **kwargs: object) -> T:
            try:
                return func(*args, **kwargs)
            except (typer.Exit, typer.Abort, typer.BadParameter):
                raise
            except ValidationError as e:
                _handle_validation_error(e, verbose)
                raise typer.Exit(1) from None
            except LoaderError as e:
                _handle_loader_error(e, verbose)
                raise typer.Exit(1) from None
            except ConversionError as e:
                _handle_conversion_error(e, verbose)
                raise typer.Exit(1) from None
            except PydanticValidationError as e:
                _handle_pydantic_error(e, verbose)
                raise typer.Exit(1) from None
            except PermissionError as e:
                _handle_permission_error(e, verbose)
                raise typer.Exit(1) from None
            except Exception as e:
                _handle_generic_error(e, verbose)
                raise typer.Exit(1) from None

        return wrapper

    return decorator


def _print_traceback(verbose: bool) -> None:
    if verbose:
        console.print("\n[dim]Traceback:[/dim]")
        console.print(traceback.format_exc(), markup=False, highlight=False)


def _handle_validation_error(error: ValidationError, verbose: bool) -> None:
    """Handle schema validation errors."""
    from xsd_to_proto.cli.error_formatter import ErrorFormatter

    ErrorFormatter(console).format_validation_result(error.result)


def _handle_loader_error(error: LoaderError, verbose: bool) -> None:
    """Handle schema and options loading errors."""
    console.print(Panel(f"[red]{error}[/red]", title="Load Error", border_style="red"))
    _print_traceback(verbose)


def _handle_conversion_error(error: ConversionError, verbose: bool) -> None:
    """Handle conversion errors."""
    body = f"[red]{error}[/red]"
    if error.pass_number is not None:
        body += f"\n\nPass: {error.pass_number}"
    console.print(Panel(body, title="Conversion Failed", border_style="red"))
    _print_traceback(verbose)


def _handle_pydantic_error(error: PydanticValidationError, verbose: bool) -> None:
    """Handle invalid converter options."""
    console.print("[red bold]Invalid Options[/red bold]")
    console.print()

    for err in error.errors():
        location = ".".join(str(x) for x in err["loc"]) or "options"
        console.print(f"[red]✗[/red] {location}: {err['msg']}", highlight=False)

    if verbose:
        console.print("[dim]Full error:[/dim]")
        console.print(str(error), markup=False)


def _handle_permission_error(error: PermissionError, verbose: bool) -> None:
    """Handle permission errors."""
    filename = error.filename or "unknown"
    console.print(
        Panel(
            f"[red]Permission denied: {filename}[/red]\n\nCheck file permissions and try again.",
            title="Error",
            border_style="red",
        )
    )


def _handle_generic_error(error: Exception, verbose: bool) -> None:
    """Handle unexpected errors."""
    console.print(
        Panel(
            f"[red]An unexpected error occurred:[/red]\n{error}",
            title="Error",
            border_style="red",
        )
    )

    if verbose:
        _print_traceback(verbose)
    else:
        console.print("\n[dim]Use --verbose for full traceback[/dim]")
