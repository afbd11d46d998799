"""CLI module for xsd-to-proto."""

from xsd_to_proto.cli.error_formatter import ErrorFormatter, ErrorTable
from xsd_to_proto.cli.exception_handler import handle_exceptions
from xsd_to_proto.cli_main import app

__all__ = [
    "app",
    "ErrorFormatter",
    "ErrorTable",
    "handle_exceptions",
]
