"""Converter configuration.

Options can be built in code, loaded from a YAML/JSON file, or assembled by
the CLI from a file plus command-line overrides.

Example:
-------
    ```yaml
    field_style: camel
    strict_types: false
    custom_type_mappings:
      gYear: int32
    file_options:
      go_package: example.com/orders/v1
    ```

"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from xsd_to_proto.models.loader import LoaderError


class FieldNamingStyle(str, Enum):
    """Naming style applied to generated field names."""

    SNAKE = "snake"
    CAMEL = "camel"
    PASCAL = "pascal"


class ConverterOptions(BaseModel):
    """Options controlling a conversion."""

    model_config = ConfigDict(extra="forbid")

    field_style: Annotated[
        FieldNamingStyle,
        Field(description="Naming style for generated field names"),
    ] = FieldNamingStyle.SNAKE
    custom_type_mappings: Annotated[
        dict[str, str],
        Field(description="XSD type name (without prefix) to proto type overrides"),
    ] = Field(default_factory=dict)
    strict_types: Annotated[
        bool,
        Field(description="Fail on references to types the schema does not declare"),
    ] = False
    file_options: Annotated[
        dict[str, str],
        Field(description="File-level options, e.g. go_package"),
    ] = Field(default_factory=dict)
    include_header: Annotated[
        bool,
        Field(description="Emit the generated-code header comment"),
    ] = True


def load_options_file(path: Path) -> dict[str, Any]:
    """Load a YAML or JSON options file and return the raw dictionary.

    Raises
    ------
        LoaderError: If the file cannot be read or does not hold a mapping.

    """
    if not path.is_file():
        raise LoaderError(f"File not found: {path}", path)

    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise LoaderError(
            f"Unsupported file extension: {suffix}. Use .yaml, .yml, or .json",
            path,
        )

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LoaderError(f"YAML parsing error: {e}", path) from e
    except OSError as e:
        raise LoaderError(f"File read error: {e}", path) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise LoaderError(
            f"Expected dictionary at root level, got {type(data).__name__}",
            path,
        )

    return data


def load_options(path: Path | str) -> ConverterOptions:
    """Load and validate converter options from a YAML/JSON file.

    Raises
    ------
        LoaderError: If the file cannot be loaded or its content is invalid.

    """
    path = Path(path)
    data = load_options_file(path)

    try:
        return ConverterOptions.model_validate(data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise LoaderError(f"Invalid options: {details}", path) from e
