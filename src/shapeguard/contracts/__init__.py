"""Shared contracts: schema descriptors, enums, and structured errors.

Import pattern:
    from shapeguard.contracts import StringSchema, ErrorKind, ValidationFailure
"""

from shapeguard.contracts.enums import ErrorKind, PredicateName, SchemaType
from shapeguard.contracts.errors import (
    SchemaDefinitionError,
    SchemaError,
    ShapeguardError,
    UnsupportedTypeError,
    ValidationFailure,
    format_path,
)
from shapeguard.contracts.schema import (
    DEFAULT_DESCRIPTION,
    SCHEMA_MODELS,
    ArraySchema,
    BaseSchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    Predicate,
    Schema,
    SchemaVariant,
    StringSchema,
)

__all__ = [
    # enums
    "ErrorKind",
    "PredicateName",
    "SchemaType",
    # errors
    "SchemaDefinitionError",
    "SchemaError",
    "ShapeguardError",
    "UnsupportedTypeError",
    "ValidationFailure",
    "format_path",
    # schema
    "DEFAULT_DESCRIPTION",
    "SCHEMA_MODELS",
    "ArraySchema",
    "BaseSchema",
    "BooleanSchema",
    "NumberSchema",
    "ObjectSchema",
    "Predicate",
    "Schema",
    "SchemaVariant",
    "StringSchema",
]
