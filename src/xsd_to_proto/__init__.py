"""xsd-to-proto: Converter from XML Schema Definition (XSD) files to proto3 schemas.

This package provides tools for:
- Loading XSD documents (with imports and includes) into typed models
- Converting the schema tree to a Protobuf file model
- Rendering the model as `.proto` source text

Quick Start:
    >>> from xsd_to_proto.models import load_schema_with_imports
    >>> from xsd_to_proto.transform import XsdToProtoConverter
    >>> from xsd_to_proto.converters import ProtoWriter
    >>>
    >>> schema = load_schema_with_imports("orders.xsd")
    >>> proto_file = XsdToProtoConverter().convert(schema)
    >>> ProtoWriter().write(proto_file, "orders.proto")

Modules:
    models: Pydantic models for the decoded XSD tree and the XSD loader
    transform: XSD to Protobuf conversion (type mapping, naming, converter)
    ir: Protobuf file model produced by the converter
    converters: `.proto` rendering and file output
    validation: Minimal schema checks run before conversion
    cli: Command-line interface
"""

__version__ = "0.1.0"
