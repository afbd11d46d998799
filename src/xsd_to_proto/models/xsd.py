"""Models for the decoded XSD schema tree.

These models mirror the subset of XML Schema that the converter understands:
top-level elements, complex types (sequence, choice, attributes) and simple
types (restrictions with enumerations, unions, lists). They are produced by
the loader and consumed read-only by the converter.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

XSD_NAMESPACE = "http://www.w3.org/2001/XMLSchema"


class _XsdModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class Enumeration(_XsdModel):
    """A single `<xs:enumeration value="..."/>` facet."""

    value: str


class Restriction(_XsdModel):
    """A `<xs:restriction>` of a simple type.

    Only enumerations drive the conversion; the remaining facets are kept
    for inspection.
    """

    base: str = ""
    enumerations: list[Enumeration] = Field(default_factory=list)
    pattern: str | None = None
    min_length: int | None = None
    max_length: int | None = None


class Union(_XsdModel):
    """A `<xs:union memberTypes="...">` of a simple type."""

    member_types: str = ""


class XsdList(_XsdModel):
    """A `<xs:list itemType="...">` of a simple type."""

    item_type: str = ""


class SimpleType(_XsdModel):
    """An XSD simple type definition."""

    name: str = ""
    restriction: Restriction | None = None
    union: Union | None = None
    list_type: XsdList | None = None

    @property
    def enumeration_values(self) -> list[str]:
        """Return the enumeration values in source order (empty if none)."""
        if self.restriction is None:
            return []
        return [e.value for e in self.restriction.enumerations]


class Attribute(_XsdModel):
    """An XSD attribute declaration."""

    name: str = ""
    type_name: str = ""
    use: str = ""

    @property
    def is_required(self) -> bool:
        """Check whether the attribute is declared with use="required"."""
        return self.use == "required"


class Compositor(_XsdModel):
    """An ordered group of elements (`<xs:sequence>` or `<xs:choice>`)."""

    elements: list[Element] = Field(default_factory=list)
    min_occurs: str = ""
    max_occurs: str = ""


class ComplexType(_XsdModel):
    """An XSD complex type definition.

    Attributes
    ----------
        name: Type name, empty for anonymous (inline) types.
        sequence: Optional ordered sequence of child elements.
        choice: Optional choice of child elements (may coexist with a sequence).
        attributes: Attribute declarations in source order.

    """

    name: str = ""
    sequence: Compositor | None = None
    choice: Compositor | None = None
    attributes: list[Attribute] = Field(default_factory=list)


class TypeReference(_XsdModel):
    """Element content typed by reference (`type="tns:Foo"`)."""

    kind: Literal["reference"] = "reference"
    type_name: str = ""


class InlineComplexType(_XsdModel):
    """Element content defined by an inline `<xs:complexType>`."""

    kind: Literal["complex"] = "complex"
    complex_type: ComplexType


class InlineSimpleType(_XsdModel):
    """Element content defined by an inline `<xs:simpleType>`."""

    kind: Literal["simple"] = "simple"
    simple_type: SimpleType


ElementContent = Annotated[
    TypeReference | InlineComplexType | InlineSimpleType,
    Field(discriminator="kind"),
]


class Element(_XsdModel):
    """An XSD element declaration.

    The element's content is exactly one of: a type reference, an inline
    complex type, or an inline simple type. For convenience the model also
    accepts the shorthand keys ``type_name``, ``complex_type`` and
    ``simple_type`` and folds them into ``content``.

    Example:
    -------
        >>> Element(name="age", type_name="xs:int", min_occurs="0")
        >>> Element(name="person", complex_type=ComplexType(...))

    """

    name: str = ""
    min_occurs: str = ""
    max_occurs: str = ""
    content: ElementContent = Field(default_factory=TypeReference)

    @model_validator(mode="before")
    @classmethod
    def _fold_content_shorthand(cls, data: Any) -> Any:
        """Fold shorthand content keys into the tagged ``content`` field."""
        if not isinstance(data, dict):
            return data

        shorthand = {
            key: data[key] for key in ("type_name", "complex_type", "simple_type") if key in data
        }
        if not shorthand:
            return data
        if "content" in data or len(shorthand) > 1:
            raise ValueError(
                "Element content must be given once: use one of 'content', "
                "'type_name', 'complex_type' or 'simple_type'"
            )

        data = {k: v for k, v in data.items() if k not in shorthand}
        key, value = next(iter(shorthand.items()))
        if key == "type_name":
            data["content"] = TypeReference(type_name=value)
        elif key == "complex_type":
            data["content"] = InlineComplexType(complex_type=value)
        else:
            data["content"] = InlineSimpleType(simple_type=value)
        return data

    @property
    def type_name(self) -> str:
        """Declared type name, empty unless the element is typed by reference."""
        if isinstance(self.content, TypeReference):
            return self.content.type_name
        return ""

    @property
    def complex_type(self) -> ComplexType | None:
        """Inline complex type, if the element defines one."""
        if isinstance(self.content, InlineComplexType):
            return self.content.complex_type
        return None

    @property
    def simple_type(self) -> SimpleType | None:
        """Inline simple type, if the element defines one."""
        if isinstance(self.content, InlineSimpleType):
            return self.content.simple_type
        return None


class Import(_XsdModel):
    """An `<xs:import>` directive."""

    namespace: str = ""
    schema_location: str = ""


class Include(_XsdModel):
    """An `<xs:include>` directive."""

    schema_location: str = ""


class Schema(_XsdModel):
    """Root of a decoded XSD document.

    ``imported_schemas`` is filled by the loader when imports and includes
    are followed; the converter only looks at this schema's own
    declarations.
    """

    target_namespace: str = ""
    element_form_default: str = ""
    attribute_form_default: str = ""
    imports: list[Import] = Field(default_factory=list)
    includes: list[Include] = Field(default_factory=list)
    elements: list[Element] = Field(default_factory=list)
    complex_types: list[ComplexType] = Field(default_factory=list)
    simple_types: list[SimpleType] = Field(default_factory=list)
    imported_schemas: list[Schema] = Field(default_factory=list)

    def iter_schemas(self) -> Iterator[Schema]:
        """Yield this schema, then its imported and included schemas depth first."""
        yield self
        for imported in self.imported_schemas:
            yield from imported.iter_schemas()

    def declared_type_names(self, include_imported: bool = True) -> set[str]:
        """Return the names of all top-level complex and simple types.

        Args:
        ----
            include_imported: Also collect names from imported and included
                schemas.

        """
        schemas = self.iter_schemas() if include_imported else iter([self])
        names: set[str] = set()
        for schema in schemas:
            names.update(c.name for c in schema.complex_types if c.name)
            names.update(s.name for s in schema.simple_types if s.name)
        return names


Compositor.model_rebuild()
ComplexType.model_rebuild()
InlineComplexType.model_rebuild()
Element.model_rebuild()
Schema.model_rebuild()
