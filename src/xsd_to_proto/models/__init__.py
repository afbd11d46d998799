"""Pydantic models for decoded XSD documents and the XSD loader.

The models describe the subset of XML Schema the converter understands.
They are frozen: the loader builds them once and every later stage only
reads them.

Primary Entry Points:
    load_schema(path): Load one XSD file
    load_schema_with_imports(path): Load an XSD file and everything it imports
    parse_schema(text): Decode XSD text already in memory
    Schema: Root model for the entire document

Example:
-------
    >>> from xsd_to_proto.models import load_schema
    >>> schema = load_schema("orders.xsd")
    >>> print(f"Namespace: {schema.target_namespace}")
    >>> print(f"Complex types: {len(schema.complex_types)}")

Model Hierarchy:
    Schema (root)
    ├── Import / Include - references to other schema files
    ├── Element - top-level element declarations
    │   └── content: TypeReference | InlineComplexType | InlineSimpleType
    ├── ComplexType - sequence / choice compositors and attributes
    └── SimpleType - restriction (enumerations), union, list
"""

from xsd_to_proto.models.loader import (
    LoaderError,
    derive_path_from_namespace,
    load_schema,
    load_schema_with_imports,
    parse_schema,
)
from xsd_to_proto.models.xsd import (
    XSD_NAMESPACE,
    Attribute,
    ComplexType,
    Compositor,
    Element,
    ElementContent,
    Enumeration,
    Import,
    Include,
    InlineComplexType,
    InlineSimpleType,
    Restriction,
    Schema,
    SimpleType,
    TypeReference,
    Union,
    XsdList,
)

__all__ = [
    # Loader
    "LoaderError",
    "derive_path_from_namespace",
    "load_schema",
    "load_schema_with_imports",
    "parse_schema",
    # Models
    "XSD_NAMESPACE",
    "Attribute",
    "ComplexType",
    "Compositor",
    "Element",
    "ElementContent",
    "Enumeration",
    "Import",
    "Include",
    "InlineComplexType",
    "InlineSimpleType",
    "Restriction",
    "Schema",
    "SimpleType",
    "TypeReference",
    "Union",
    "XsdList",
]
