"""Render ProtoFile IR as proto3 source text.

Rendering is template based (jinja2); the template lives in the package's
``templates`` directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from xsd_to_proto import __version__
from xsd_to_proto.ir.proto import ProtoFile

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
FILE_TEMPLATE = "file.proto.j2"
PROTO_SUFFIX = ".proto"


def proto_string(value: str) -> str:
    """Quote a value as a proto string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _get_template_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["proto_string"] = proto_string
    return env


def default_output_path(input_path: Path | str) -> Path:
    """Return the default output path for an input schema.

    Examples
    --------
        >>> default_output_path("schemas/orders.xsd")
        PosixPath('schemas/orders.proto')

    """
    return Path(input_path).with_suffix(PROTO_SUFFIX)


class ProtoWriter:
    """Write ProtoFile IR as `.proto` files.

    Usage:
        writer = ProtoWriter(source_name="orders.xsd")
        writer.write(proto_file, Path("orders.proto"))

    Or for in-memory rendering:
        text = writer.render(proto_file)
    """

    def __init__(self, include_header: bool = True, source_name: str | None = None) -> None:
        """Initialize the writer.

        Args:
        ----
            include_header: Emit the "Code generated ... DO NOT EDIT." comment.
            source_name: Source schema name shown in the header, if any.

        """
        self._include_header = include_header
        self._source_name = source_name
        self._env = _get_template_env()

    def header_lines(self) -> list[str]:
        """Return the header comment lines, without the ``//`` markers."""
        if not self._include_header:
            return []

        lines = [f"Code generated by xsd-to-proto {__version__}. DO NOT EDIT."]
        if self._source_name:
            lines.append(f"source: {self._source_name}")
        return lines

    def render(self, proto_file: ProtoFile) -> str:
        """Render a ProtoFile to proto3 source text.

        Returns
        -------
            The file content, ending with a newline.

        """
        template = self._env.get_template(FILE_TEMPLATE)
        return template.render(file=proto_file, header=self.header_lines())

    def write(self, proto_file: ProtoFile, output_path: Path | str) -> Path:
        """Render a ProtoFile and write it to disk.

        Args:
        ----
            proto_file: The file to render.
            output_path: Output file path. Parent directories will be created.

        Returns:
        -------
            The path written to.

        """
        output_path = Path(output_path)
        content = self.render(proto_file)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")

        logger.debug("Wrote %d bytes to %s", len(content.encode("utf-8")), output_path)
        return output_path
