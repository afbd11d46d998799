"""Case conversion and unique-name bookkeeping for generated proto names.

Case conversion works on tokens rather than regular expressions: a name is
split on ``_``, ``-`` and ``.``, then each piece is split again before every
uppercase letter that is not its first character. ``firstName`` and
``first_name`` therefore both tokenize to ``["first", "Name"]`` /
``["first", "name"]`` and format identically.

Only message, enum and enum value names are made unique. Field names are
formatted but never deduplicated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Container

from xsd_to_proto.config import FieldNamingStyle

logger = logging.getLogger(__name__)

_SEPARATORS = frozenset("_-.")

UNSPECIFIED_SUFFIX = "UNSPECIFIED"


def _split_camel_case(piece: str) -> list[str]:
    tokens: list[str] = []
    current: list[str] = []

    for i, ch in enumerate(piece):
        if i > 0 and ch.isupper() and current:
            tokens.append("".join(current))
            current = []
        current.append(ch)

    if current:
        tokens.append("".join(current))
    return tokens


def split_words(name: str) -> list[str]:
    """Split a name into word tokens.

    Examples
    --------
        >>> split_words("firstName")
        ['first', 'Name']
        >>> split_words("order-line.item_id")
        ['order', 'line', 'item', 'id']

    """
    pieces: list[str] = []
    current: list[str] = []

    for ch in name:
        if ch in _SEPARATORS:
            if current:
                pieces.append("".join(current))
                current = []
        else:
            current.append(ch)

    if current:
        pieces.append("".join(current))

    return [token for piece in pieces for token in _split_camel_case(piece)]


def _capitalize(token: str) -> str:
    return token[:1].upper() + token[1:].lower()


def to_pascal_case(name: str) -> str:
    """Convert a name to PascalCase (``first_name`` -> ``FirstName``)."""
    return "".join(_capitalize(token) for token in split_words(name))


def to_camel_case(name: str) -> str:
    """Convert a name to camelCase (``first_name`` -> ``firstName``)."""
    tokens = split_words(name)
    if not tokens:
        return ""
    return tokens[0].lower() + "".join(_capitalize(token) for token in tokens[1:])


def to_snake_case(name: str) -> str:
    """Convert a name to snake_case (``firstName`` -> ``first_name``).

    An underscore goes before every uppercase character except the first,
    and ``-`` and ``.`` become underscores.
    """
    chars: list[str] = []
    for i, ch in enumerate(name):
        if i > 0 and ch.isupper():
            chars.append("_")
        chars.append("_" if ch in "-." else ch)
    return "".join(chars).lower()


def to_screaming_snake_case(name: str) -> str:
    """Convert a name to SCREAMING_SNAKE_CASE (``FixtureType`` -> ``FIXTURE_TYPE``)."""
    return to_snake_case(name).upper()


def with_numeric_suffix(name: str, is_taken: Callable[[str], bool]) -> str:
    """Return ``name``, or the first of ``name2``, ``name3``, ... that is not taken."""
    if not is_taken(name):
        return name

    suffix = 2
    while is_taken(f"{name}{suffix}"):
        suffix += 1
    return f"{name}{suffix}"


def nested_message_name(original: str, taken: Container[str]) -> str:
    """Name a message nested inside another message.

    Nested names live in their parent's scope and are never added to the
    file-wide registry. ``taken`` must hold the parent's other nested names
    and every top-level type name, so that a nested message never shadows a
    top-level type a sibling field refers to.
    """
    return with_numeric_suffix(to_pascal_case(original), taken.__contains__)


def format_field_name(name: str, style: FieldNamingStyle = FieldNamingStyle.SNAKE) -> str:
    """Format a field name in the requested style."""
    if style == FieldNamingStyle.PASCAL:
        return to_pascal_case(name)
    if style == FieldNamingStyle.CAMEL:
        return to_camel_case(name)
    return to_snake_case(name)


class NameRegistry:
    """Track the names handed out during one conversion.

    Messages and enums share one namespace: a message cannot take a name an
    enum already holds and vice versa. Enum value names are unique across
    all enums of the file. The rename map records, for each source type
    name, the final name it was emitted under.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._message_names: set[str] = set()
        self._enum_names: set[str] = set()
        self._enum_value_names: set[str] = set()
        self._renames: dict[str, str] = {}

    @property
    def renames(self) -> dict[str, str]:
        """Return a copy of the original-to-final type name map."""
        return dict(self._renames)

    @property
    def message_names(self) -> frozenset[str]:
        """Return the message names reserved so far."""
        return frozenset(self._message_names)

    @property
    def enum_names(self) -> frozenset[str]:
        """Return the enum names reserved so far."""
        return frozenset(self._enum_names)

    def is_type_name_used(self, name: str) -> bool:
        """Check whether a message or enum already holds ``name``."""
        return name in self._message_names or name in self._enum_names

    def _unique_type_name(self, original: str) -> str:
        formatted = to_pascal_case(original)
        final = with_numeric_suffix(formatted, self.is_type_name_used)
        if final != formatted:
            logger.debug("Name %r already taken, using %r for %r", formatted, final, original)
        return final

    def reserve_message_name(self, original: str) -> str:
        """Reserve a unique top-level message name for a source type name.

        Returns
        -------
            The final PascalCase message name, suffixed with 2, 3, ... on
            collision.

        """
        final = self._unique_type_name(original)
        self._message_names.add(final)
        self._renames[original] = final
        return final

    def reserve_enum_name(self, original: str) -> str:
        """Reserve a unique enum name for a source simple type name."""
        final = self._unique_type_name(original)
        self._enum_names.add(final)
        self._renames[original] = final
        return final

    def reserve_enum_value_name(self, enum_name: str, value: str, sentinel: bool = False) -> str:
        """Reserve a unique, prefixed enum value name.

        Args:
        ----
            enum_name: Final (already unique) name of the enum.
            value: Source enumeration value; ignored for the sentinel.
            sentinel: Build the ``<PREFIX>_UNSPECIFIED`` zero value.

        Returns:
        -------
            ``<PREFIX>_<VALUE>``, suffixed with 2, 3, ... if another enum
            value of the file already uses it.

        """
        prefix = to_screaming_snake_case(enum_name)
        candidate = f"{prefix}_{UNSPECIFIED_SUFFIX}" if sentinel else f"{prefix}_{value.upper()}"

        final = candidate
        suffix = 2
        while final in self._enum_value_names:
            final = f"{candidate}{suffix}"
            suffix += 1

        self._enum_value_names.add(final)
        return final

    def resolve(self, clean_name: str) -> str | None:
        """Resolve a cleaned type reference through the rename map.

        The exact name is tried first, then its PascalCase form, so that a
        reference may differ in case or separators from its declaration.
        """
        if clean_name in self._renames:
            return self._renames[clean_name]
        return self._renames.get(to_pascal_case(clean_name))
