"""XSD file loading utilities."""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from xsd_to_proto.models.xsd import (
    XSD_NAMESPACE,
    Attribute,
    ComplexType,
    Compositor,
    Element,
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

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = frozenset({".xsd", ".xml"})


class LoaderError(Exception):
    """Error during XSD file loading."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize LoaderError.

        Args:
        ----
            message: Error message describing what went wrong.
            path: Optional path to the file that caused the error.

        """
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


def _qname(local: str) -> str:
    return f"{{{XSD_NAMESPACE}}}{local}"


def _children(node: etree._Element, local: str) -> list[etree._Element]:
    return node.findall(_qname(local))


def _optional_int(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError as e:
        raise LoaderError(f"Invalid length facet: {value!r}") from e


def _parse_restriction(node: etree._Element) -> Restriction:
    pattern = node.find(_qname("pattern"))
    min_length = node.find(_qname("minLength"))
    max_length = node.find(_qname("maxLength"))
    return Restriction(
        base=node.get("base", ""),
        enumerations=[
            Enumeration(value=e.get("value", "")) for e in _children(node, "enumeration")
        ],
        pattern=pattern.get("value") if pattern is not None else None,
        min_length=_optional_int(min_length.get("value")) if min_length is not None else None,
        max_length=_optional_int(max_length.get("value")) if max_length is not None else None,
    )


def _parse_simple_type(node: etree._Element) -> SimpleType:
    restriction = node.find(_qname("restriction"))
    union = node.find(_qname("union"))
    list_node = node.find(_qname("list"))
    return SimpleType(
        name=node.get("name", ""),
        restriction=_parse_restriction(restriction) if restriction is not None else None,
        union=Union(member_types=union.get("memberTypes", "")) if union is not None else None,
        list_type=XsdList(item_type=list_node.get("itemType", ""))
        if list_node is not None
        else None,
    )


def _parse_compositor(node: etree._Element) -> Compositor:
    return Compositor(
        elements=[_parse_element(e) for e in _children(node, "element")],
        min_occurs=node.get("minOccurs", ""),
        max_occurs=node.get("maxOccurs", ""),
    )


def _parse_complex_type(node: etree._Element) -> ComplexType:
    sequence = node.find(_qname("sequence"))
    choice = node.find(_qname("choice"))
    return ComplexType(
        name=node.get("name", ""),
        sequence=_parse_compositor(sequence) if sequence is not None else None,
        choice=_parse_compositor(choice) if choice is not None else None,
        attributes=[
            Attribute(
                name=a.get("name", ""),
                type_name=a.get("type", ""),
                use=a.get("use", ""),
            )
            for a in _children(node, "attribute")
        ],
    )


def _parse_element(node: etree._Element) -> Element:
    # An inline definition takes precedence over a type attribute.
    complex_node = node.find(_qname("complexType"))
    simple_node = node.find(_qname("simpleType"))

    content: TypeReference | InlineComplexType | InlineSimpleType
    if complex_node is not None:
        content = InlineComplexType(complex_type=_parse_complex_type(complex_node))
    elif simple_node is not None:
        content = InlineSimpleType(simple_type=_parse_simple_type(simple_node))
    else:
        content = TypeReference(type_name=node.get("type", ""))

    return Element(
        name=node.get("name", ""),
        min_occurs=node.get("minOccurs", ""),
        max_occurs=node.get("maxOccurs", ""),
        content=content,
    )


def _parse_schema_root(root: etree._Element) -> Schema:
    if root.tag != _qname("schema"):
        raise LoaderError(f"Expected <xs:schema> root element, got {root.tag}")

    return Schema(
        target_namespace=root.get("targetNamespace", ""),
        element_form_default=root.get("elementFormDefault", ""),
        attribute_form_default=root.get("attributeFormDefault", ""),
        imports=[
            Import(
                namespace=i.get("namespace", ""),
                schema_location=i.get("schemaLocation", ""),
            )
            for i in _children(root, "import")
        ],
        includes=[
            Include(schema_location=i.get("schemaLocation", ""))
            for i in _children(root, "include")
        ],
        elements=[_parse_element(e) for e in _children(root, "element")],
        complex_types=[_parse_complex_type(c) for c in _children(root, "complexType")],
        simple_types=[_parse_simple_type(s) for s in _children(root, "simpleType")],
    )


def parse_schema(source: bytes | str) -> Schema:
    """Decode XSD text into a Schema model.

    Args:
    ----
        source: XSD document as bytes or text.

    Returns:
    -------
        Decoded Schema (imports and includes are recorded, not followed).

    Raises:
    ------
        LoaderError: If the text is not well-formed XML, not an XSD schema,
            or has a length facet that is not an integer.

    """
    data = source.encode("utf-8") if isinstance(source, str) else source
    try:
        root = etree.fromstring(data)
    except etree.XMLSyntaxError as e:
        raise LoaderError(f"XML parsing error: {e}") from e

    return _parse_schema_root(root)


def _check_path(path: Path) -> None:
    if not path.exists():
        raise LoaderError(f"File not found: {path}", path)

    if not path.is_file():
        raise LoaderError(f"Not a file: {path}", path)

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise LoaderError(
            f"Unsupported file extension: {suffix}. Use .xsd or .xml",
            path,
        )


def load_schema(path: Path | str) -> Schema:
    """Load a single XSD file without following imports or includes.

    Args:
    ----
        path: Path to the XSD file.

    Returns:
    -------
        Decoded Schema model.

    Raises:
    ------
        LoaderError: If the file cannot be read or parsed.

    """
    path = Path(path)
    _check_path(path)

    try:
        tree = etree.parse(str(path))
    except etree.XMLSyntaxError as e:
        raise LoaderError(f"XML parsing error: {e}", path) from e
    except OSError as e:
        raise LoaderError(f"File read error: {e}", path) from e

    try:
        return _parse_schema_root(tree.getroot())
    except LoaderError as e:
        raise LoaderError(str(e), path) from e


def derive_path_from_namespace(namespace: str, base_dir: Path) -> Path | None:
    """Derive an import file path from a namespace URI.

    ``./a/b`` becomes ``a.b.xsd``, ``http://host/a`` becomes ``host.a.xsd``
    and anything else has its slashes replaced with dots. The result is
    relative to ``base_dir``.
    """
    if not namespace:
        return None

    path = namespace
    if path.startswith("./"):
        path = path[len("./") :]
    elif path.startswith("http://"):
        path = path[len("http://") :]
    elif path.startswith("https://"):
        path = path[len("https://") :]

    return base_dir / (path.replace("/", ".") + ".xsd")


def load_schema_with_imports(path: Path | str) -> Schema:
    """Load an XSD file and, recursively, the schemas it imports and includes.

    Every file is loaded at most once, so import cycles terminate. Imports
    whose target file does not exist are skipped; missing includes are an
    error.

    Args:
    ----
        path: Path to the root XSD file.

    Returns:
    -------
        Root Schema with ``imported_schemas`` populated.

    Raises:
    ------
        LoaderError: If the root file or an included file cannot be loaded.

    """
    return _load_recursive(Path(path), set())


def _already_loaded(path: Path, processed: set[Path]) -> bool:
    if path.resolve() in processed:
        logger.debug("Skipping already loaded schema %s", path.resolve())
        return True
    return False


def _load_recursive(path: Path, processed: set[Path]) -> Schema:
    processed.add(path.resolve())

    schema = load_schema(path)
    logger.debug(
        "Loaded %s: %d elements, %d complex types, %d simple types",
        path,
        len(schema.elements),
        len(schema.complex_types),
        len(schema.simple_types),
    )

    base_dir = path.parent
    imported: list[Schema] = []

    for imp in schema.imports:
        import_path: Path | None
        if imp.schema_location:
            import_path = base_dir / imp.schema_location
        else:
            import_path = derive_path_from_namespace(imp.namespace, base_dir)

        if import_path is None:
            continue
        if not import_path.exists():
            logger.warning("Import %s not found, skipping", import_path)
            continue
        if _already_loaded(import_path, processed):
            continue

        try:
            imported_schema = _load_recursive(import_path, processed)
        except LoaderError as e:
            raise LoaderError(f"Failed to process import {import_path}: {e}", path) from e
        imported.append(imported_schema)

    for inc in schema.includes:
        if not inc.schema_location:
            continue
        include_path = base_dir / inc.schema_location
        if _already_loaded(include_path, processed):
            continue
        try:
            included_schema = _load_recursive(include_path, processed)
        except LoaderError as e:
            raise LoaderError(
                f"Failed to process include {inc.schema_location}: {e}", path
            ) from e
        imported.append(included_schema)

    if not imported:
        return schema
    return schema.model_copy(update={"imported_schemas": imported})
