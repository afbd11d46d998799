"""Converters for turning IR data into `.proto` files.

This package provides the final stage of the conversion pipeline:
rendering the ProtoFile IR as proto3 source text.

Primary Classes:
    ProtoWriter: Renders and writes `.proto` files

Example:
-------
    >>> from xsd_to_proto.converters import ProtoWriter
    >>> from xsd_to_proto.transform import XsdToProtoConverter
    >>>
    >>> # Assuming schema is a loaded Schema
    >>> proto_file = XsdToProtoConverter().convert(schema)
    >>>
    >>> writer = ProtoWriter(source_name="orders.xsd")
    >>> writer.write(proto_file, "orders.proto")
    >>>
    >>> # Get text without writing to file
    >>> text = writer.render(proto_file)


"""

from xsd_to_proto.converters.proto_writer import ProtoWriter, default_output_path, proto_string

__all__ = [
    "ProtoWriter",
    "default_output_path",
    "proto_string",
]
