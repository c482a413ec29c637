"""Build schema models from plain data (dicts, YAML, JSON).

Plain-data schemas use the camelCase field names:

    type: object
    properties:
      name: {type: string, minLength: 2, description: Name}
      ids:
        type: array
        items: {type: number}
        every: "item > 0"

Type tags are checked in a first pass so an unknown tag anywhere in the
tree is reported as UnsupportedTypeError with the path of the offending
node. Everything else is left to pydantic; its errors are re-raised as
SchemaDefinitionError.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import TypeAdapter, ValidationError

from shapeguard.contracts import (
    Schema,
    SchemaDefinitionError,
    SchemaType,
    SchemaVariant,
    UnsupportedTypeError,
)
from shapeguard.contracts.errors import PathSegment

_SCHEMA_ADAPTER: TypeAdapter[SchemaVariant] = TypeAdapter(Schema)

_KNOWN_TAGS = frozenset(tag.value for tag in SchemaType)


def _check_tags(node: Any, path: tuple[PathSegment, ...]) -> None:
    """Reject unknown type tags anywhere in a plain-data schema."""
    if not isinstance(node, Mapping):
        raise SchemaDefinitionError(
            f"Schema must be a mapping, got {type(node).__name__}",
            path=path,
        )
    tag = node.get("type")
    if tag not in _KNOWN_TAGS:
        raise UnsupportedTypeError(tag, path=path)

    if tag == SchemaType.OBJECT.value:
        properties = node.get("properties")
        if isinstance(properties, Mapping):
            for name, child in properties.items():
                _check_tags(child, (*path, name))
    elif tag == SchemaType.ARRAY.value and "items" in node:
        _check_tags(node["items"], (*path, "items"))


def _apply_default_description(node: Mapping[str, Any], default: str) -> dict[str, Any]:
    """Copy of ``node`` with ``description`` filled in at every level."""
    filled = dict(node)
    filled.setdefault("description", default)
    if isinstance(filled.get("properties"), Mapping):
        filled["properties"] = {
            name: _apply_default_description(child, default)
            for name, child in filled["properties"].items()
        }
    if isinstance(filled.get("items"), Mapping):
        filled["items"] = _apply_default_description(filled["items"], default)
    return filled


def parse_schema(
    data: Mapping[str, Any],
    *,
    default_description: str | None = None,
) -> SchemaVariant:
    """Parse a plain-data schema into a schema model.

    Args:
        data: Schema mapping in camelCase form
        default_description: Description given to every node that has none

    Returns:
        The schema model for the root variant

    Raises:
        UnsupportedTypeError: A node has an absent or unknown type tag
        SchemaDefinitionError: A node has malformed fields
    """
    _check_tags(data, ())
    if default_description is not None:
        data = _apply_default_description(data, default_description)

    try:
        return _SCHEMA_ADAPTER.validate_python(data)
    except ValidationError as e:
        errors = [
            (".".join(str(loc) for loc in error["loc"]), error["msg"])
            for error in e.errors()
        ]
        summary = "; ".join(f"{loc}: {msg}" for loc, msg in errors)
        raise SchemaDefinitionError(f"Invalid schema: {summary}", errors=errors) from e


def load_schema_file(
    path: Path,
    *,
    default_description: str | None = None,
) -> SchemaVariant:
    """Load a schema from a YAML or JSON file.

    ``.json`` files are read with json; anything else with yaml.safe_load
    (YAML is a superset of JSON).

    Raises:
        FileNotFoundError: If the file doesn't exist
        SchemaDefinitionError: If the file is not parseable or not a mapping
        UnsupportedTypeError: If a node has an unknown type tag
    """
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaDefinitionError(f"Cannot parse schema file {path}: {e}") from e

    return parse_schema(data, default_description=default_description)
