"""shapeguard: validate untrusted data against declarative schemas.

Usage:
    from shapeguard import ObjectSchema, NumberSchema, validate

    schema = ObjectSchema(properties={"a": NumberSchema()})
    validate({"a": 1, "b": 2}, schema)  # {"a": 1}
"""

from shapeguard.contracts import (
    ArraySchema,
    BooleanSchema,
    ErrorKind,
    NumberSchema,
    ObjectSchema,
    Schema,
    SchemaDefinitionError,
    SchemaError,
    ShapeguardError,
    StringSchema,
    UnsupportedTypeError,
    ValidationFailure,
)
from shapeguard.core.loader import load_schema_file, parse_schema
from shapeguard.engine import (
    format_result_type,
    result_type,
    validate,
    validate_array,
    validate_boolean,
    validate_number,
    validate_object,
    validate_string,
)

__version__ = "0.1.0"

__all__ = [
    "ArraySchema",
    "BooleanSchema",
    "ErrorKind",
    "NumberSchema",
    "ObjectSchema",
    "Schema",
    "SchemaDefinitionError",
    "SchemaError",
    "ShapeguardError",
    "StringSchema",
    "UnsupportedTypeError",
    "ValidationFailure",
    "__version__",
    "format_result_type",
    "load_schema_file",
    "parse_schema",
    "result_type",
    "validate",
    "validate_array",
    "validate_boolean",
    "validate_number",
    "validate_object",
    "validate_string",
]
