"""Tests for the proto3 writer."""

from pathlib import Path

from xsd_to_proto import __version__
from xsd_to_proto.converters import ProtoWriter, default_output_path, proto_string
from xsd_to_proto.ir import (
    FieldLabel,
    ProtoEnum,
    ProtoEnumValue,
    ProtoField,
    ProtoFile,
    ProtoMessage,
)


def _demo_file() -> ProtoFile:
    return ProtoFile(
        package="demo",
        options={"java_package": "com.example.demo", "go_package": "example.com/demo"},
        imports=("google/protobuf/timestamp.proto",),
        enums=(
            ProtoEnum(
                name="Color",
                values=(
                    ProtoEnumValue(name="COLOR_UNSPECIFIED", number=0),
                    ProtoEnumValue(name="COLOR_RED", number=1),
                ),
            ),
        ),
        messages=(
            ProtoMessage(
                name="Shirt",
                fields=(
                    ProtoField(name="color", type="Color", number=1),
                    ProtoField(
                        name="sizes", type="string", number=2, label=FieldLabel.REPEATED
                    ),
                    ProtoField(
                        name="made_at",
                        type="google.protobuf.Timestamp",
                        number=3,
                        label=FieldLabel.REQUIRED,
                    ),
                ),
            ),
        ),
    )


class TestRender:
    """Tests for ProtoWriter.render."""

    def test_full_layout(self) -> None:
        """Should render sections in order, separated by blank lines."""
        text = ProtoWriter(include_header=False).render(_demo_file())

        assert text == (
            'syntax = "proto3";\n'
            "\n"
            "package demo;\n"
            "\n"
            'import "google/protobuf/timestamp.proto";\n'
            "\n"
            'option go_package = "example.com/demo";\n'
            'option java_package = "com.example.demo";\n'
            "\n"
            "enum Color {\n"
            "  COLOR_UNSPECIFIED = 0;\n"
            "  COLOR_RED = 1;\n"
            "}\n"
            "\n"
            "message Shirt {\n"
            "  Color color = 1;\n"
            "  repeated string sizes = 2;\n"
            "  google.protobuf.Timestamp made_at = 3;\n"
            "}\n"
        )

    def test_minimal_file(self) -> None:
        """Should render just syntax and package for an empty file."""
        text = ProtoWriter(include_header=False).render(ProtoFile(package="empty"))
        assert text == 'syntax = "proto3";\n\npackage empty;\n'

    def test_header(self) -> None:
        """Should start with the generated-code header."""
        text = ProtoWriter(source_name="demo.xsd").render(ProtoFile(package="demo"))

        lines = text.splitlines()
        assert lines[0] == f"// Code generated by xsd-to-proto {__version__}. DO NOT EDIT."
        assert lines[1] == "// source: demo.xsd"
        assert lines[2] == ""
        assert lines[3] == 'syntax = "proto3";'

    def test_header_without_source(self) -> None:
        """Should omit the source line when no source name is given."""
        writer = ProtoWriter()
        assert writer.header_lines() == [
            f"Code generated by xsd-to-proto {__version__}. DO NOT EDIT."
        ]

    def test_no_header(self) -> None:
        """Should start with the syntax line when the header is disabled."""
        text = ProtoWriter(include_header=False, source_name="x.xsd").render(ProtoFile("p"))
        assert text.startswith('syntax = "proto3";')

    def test_nested_message_indented(self) -> None:
        """Should indent nested messages inside their parent."""
        proto_file = ProtoFile(
            package="demo",
            messages=(
                ProtoMessage(
                    name="Customer",
                    fields=(ProtoField(name="contact", type="Contact", number=1),),
                    messages=(
                        ProtoMessage(
                            name="Contact",
                            fields=(ProtoField(name="phone", type="string", number=1),),
                        ),
                    ),
                ),
            ),
        )

        text = ProtoWriter(include_header=False).render(proto_file)

        assert text.endswith(
            "message Customer {\n"
            "  Contact contact = 1;\n"
            "\n"
            "  message Contact {\n"
            "    string phone = 1;\n"
            "  }\n"
            "}\n"
        )

    def test_field_options(self) -> None:
        """Should render field options in brackets."""
        proto_file = ProtoFile(
            package="demo",
            messages=(
                ProtoMessage(
                    name="Legacy",
                    fields=(
                        ProtoField(
                            name="code",
                            type="string",
                            number=1,
                            options={"deprecated": "true"},
                        ),
                    ),
                ),
            ),
        )

        text = ProtoWriter(include_header=False).render(proto_file)
        assert "  string code = 1 [deprecated = true];\n" in text

    def test_option_values_escaped(self) -> None:
        """Should escape quotes in option values."""
        assert proto_string('say "hi"') == '"say \\"hi\\""'
        assert proto_string("a\\b") == '"a\\\\b"'


class TestWrite:
    """Tests for ProtoWriter.write."""

    def test_write_creates_parents(self, tmp_path: Path) -> None:
        """Should create parent directories and write UTF-8 text."""
        output = tmp_path / "out" / "nested" / "demo.proto"

        written = ProtoWriter(include_header=False).write(_demo_file(), output)

        assert written == output
        assert output.read_text(encoding="utf-8").startswith('syntax = "proto3";')

    def test_write_matches_render(self, tmp_path: Path) -> None:
        """Should write exactly what render returns."""
        writer = ProtoWriter(source_name="demo.xsd")
        output = writer.write(_demo_file(), str(tmp_path / "demo.proto"))
        assert output.read_text(encoding="utf-8") == writer.render(_demo_file())


class TestDefaultOutputPath:
    """Tests for default_output_path."""

    def test_replaces_suffix(self) -> None:
        """Should swap the extension for .proto in the same directory."""
        assert default_output_path(Path("schemas/orders.xsd")) == Path("schemas/orders.proto")

    def test_accepts_str(self) -> None:
        """Should accept string paths."""
        assert default_output_path("orders.xml") == Path("orders.proto")
