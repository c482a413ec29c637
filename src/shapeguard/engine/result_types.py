"""Mapping from schema shape to the shape of the validated result.

Static checkers see the mapping through the overloads on validate();
this module provides the same mapping at runtime:

- result_type() builds a real typing object (``str | None``,
  ``list[int | float]``, a TypedDict for objects) usable with
  ``typing.get_type_hints`` and friends
- format_result_type() renders it as readable text for the CLI
"""

from typing import Any, TypedDict

from shapeguard.contracts import (
    ArraySchema,
    BaseSchema,
    ObjectSchema,
    SchemaType,
    UnsupportedTypeError,
)

_SCALAR_TYPES: dict[SchemaType, Any] = {
    SchemaType.STRING: str,
    SchemaType.NUMBER: int | float,
    SchemaType.BOOLEAN: bool,
}

_SCALAR_NAMES: dict[SchemaType, str] = {
    SchemaType.STRING: "str",
    SchemaType.NUMBER: "int | float",
    SchemaType.BOOLEAN: "bool",
}


def _schema_type(schema: BaseSchema) -> SchemaType:
    tag = getattr(schema, "type", None)
    try:
        return SchemaType(tag)
    except ValueError:
        raise UnsupportedTypeError(tag) from None


def _typed_dict_name(schema: ObjectSchema) -> str:
    if schema.description and schema.description.isidentifier():
        return schema.description[0].upper() + schema.description[1:]
    return "ValidObject"


def result_type(schema: BaseSchema) -> Any:
    """Return the Python type a successful validate() call produces.

    Example:
        >>> result_type(ArraySchema(items=NumberSchema()))
        list[int | float]
    """
    schema_type = _schema_type(schema)
    base: Any
    if schema_type in _SCALAR_TYPES:
        base = _SCALAR_TYPES[schema_type]
    elif isinstance(schema, ObjectSchema):
        fields = {name: result_type(child) for name, child in schema.properties.items()}
        base = TypedDict(_typed_dict_name(schema), fields)  # type: ignore[operator]
    elif isinstance(schema, ArraySchema):
        base = list[result_type(schema.items)]  # type: ignore[misc]
    else:
        raise UnsupportedTypeError(schema_type.value)

    if schema.nullable:
        return base | None
    return base


def format_result_type(schema: BaseSchema) -> str:
    """Render the result type of ``schema`` as text.

    Objects render inline as ``{name: type, ...}`` in declaration order.
    """
    schema_type = _schema_type(schema)
    if schema_type in _SCALAR_NAMES:
        text = _SCALAR_NAMES[schema_type]
    elif isinstance(schema, ObjectSchema):
        fields = ", ".join(
            f"{name}: {format_result_type(child)}" for name, child in schema.properties.items()
        )
        text = f"{{{fields}}}"
    elif isinstance(schema, ArraySchema):
        text = f"list[{format_result_type(schema.items)}]"
    else:
        raise UnsupportedTypeError(schema_type.value)

    if schema.nullable:
        return f"{text} | None"
    return text
