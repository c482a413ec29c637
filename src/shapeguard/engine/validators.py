"""The validator: recursive dispatch over the five schema variants.

validate() is the only entry point callers need. It resolves the schema
(plain mappings are parsed first), dispatches on the type tag, and returns
newly built, confirmed-valid data or raises ValidationFailure for the first
violated constraint.

Every type-specific validator follows the same order:
1. Missing check - None is rejected unless nullable; a nullable None is
   returned immediately and no other rule runs
2. Runtime type check
3. Constraint checks in a fixed order, first failure wins

Object and array validators recurse through _dispatch() and relocate
child failures under the property name or element index.
"""

import json
from collections.abc import Callable, Mapping
from typing import Any, overload

from shapeguard.contracts import (
    ArraySchema,
    BaseSchema,
    BooleanSchema,
    ErrorKind,
    NumberSchema,
    ObjectSchema,
    PredicateName,
    SchemaType,
    SchemaVariant,
    StringSchema,
    UnsupportedTypeError,
    ValidationFailure,
)
from shapeguard.core.dates import is_valid_date, parse_date


def _failure(schema: BaseSchema, kind: ErrorKind, message: str) -> ValidationFailure:
    return ValidationFailure(kind, message, description=schema.label)


def _is_missing(value: Any, schema: BaseSchema) -> bool:
    """Apply the shared null policy.

    Returns True when the value is missing and the schema allows it, in
    which case the caller must return the value untouched.

    Raises:
        ValidationFailure: MISSING_VALUE if missing and not nullable
    """
    if value is not None:
        return False
    if not schema.nullable:
        raise _failure(schema, ErrorKind.MISSING_VALUE, f"{schema.label} is required.")
    return True


def _type_mismatch(schema: BaseSchema) -> ValidationFailure:
    return _failure(
        schema,
        ErrorKind.TYPE_MISMATCH,
        f"{schema.label} must be of type {schema.schema_type.value}.",
    )


def validate_string(value: Any, schema: StringSchema) -> str | None:
    """Validate a text value against a string schema."""
    if _is_missing(value, schema):
        return None
    if not isinstance(value, str):
        raise _type_mismatch(schema)

    label = schema.label
    if schema.min_length is not None and len(value) < schema.min_length:
        raise _failure(
            schema,
            ErrorKind.LENGTH_TOO_SHORT,
            f"{label} must be at least {schema.min_length} characters long.",
        )
    if schema.max_length is not None and len(value) > schema.max_length:
        raise _failure(
            schema,
            ErrorKind.LENGTH_TOO_LONG,
            f"{label} must be at most {schema.max_length} characters long.",
        )
    if schema.regex is not None and schema.regex.search(value) is None:
        raise _failure(
            schema,
            ErrorKind.PATTERN_MISMATCH,
            f"{label} must match the pattern ({schema.regex.pattern}).",
        )
    if schema.date_format and not is_valid_date(parse_date(value, schema.date_format)):
        raise _failure(
            schema,
            ErrorKind.INVALID_DATE,
            f"{label} must match the date format ({schema.date_format}).",
        )
    if schema.starts_with is not None and not value.startswith(schema.starts_with):
        raise _failure(
            schema,
            ErrorKind.AFFIX_MISMATCH,
            f"{label} must start with ({schema.starts_with}).",
        )
    if schema.ends_with is not None and not value.endswith(schema.ends_with):
        raise _failure(
            schema,
            ErrorKind.AFFIX_MISMATCH,
            f"{label} must end with ({schema.ends_with}).",
        )
    if schema.includes is not None and schema.includes not in value:
        raise _failure(
            schema,
            ErrorKind.CONTAINMENT_MISMATCH,
            f"{label} must contain ({schema.includes}).",
        )
    if schema.in_ is not None and value not in schema.in_:
        raise _failure(
            schema,
            ErrorKind.NOT_IN_ALLOW_LIST,
            f"{label} must be one of the following values ({json.dumps(list(schema.in_))}).",
        )
    if schema.not_in is not None and value in schema.not_in:
        raise _failure(
            schema,
            ErrorKind.IN_DENY_LIST,
            f"{label} must not be any of the following values ({json.dumps(list(schema.not_in))}).",
        )
    return value


def validate_number(value: Any, schema: NumberSchema) -> int | float | None:
    """Validate a numeric value against a number schema.

    ``bool`` is rejected even though it subclasses ``int``.
    """
    if _is_missing(value, schema):
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise _type_mismatch(schema)

    label = schema.label
    if schema.min is not None and value < schema.min:
        raise _failure(schema, ErrorKind.BELOW_MINIMUM, f"{label} must be at least {schema.min}.")
    if schema.max is not None and value > schema.max:
        raise _failure(schema, ErrorKind.ABOVE_MAXIMUM, f"{label} must be at most {schema.max}.")
    if schema.in_ is not None and value not in schema.in_:
        raise _failure(
            schema,
            ErrorKind.NOT_IN_ALLOW_LIST,
            f"{label} must be one of the following values ({json.dumps(list(schema.in_))}).",
        )
    if schema.not_in is not None and value in schema.not_in:
        raise _failure(
            schema,
            ErrorKind.IN_DENY_LIST,
            f"{label} must not be any of the following values ({json.dumps(list(schema.not_in))}).",
        )
    return value


def validate_boolean(value: Any, schema: BooleanSchema) -> bool | None:
    if _is_missing(value, schema):
        return None
    if not isinstance(value, bool):
        raise _type_mismatch(schema)
    return value


def validate_object(value: Any, schema: ObjectSchema) -> dict[str, Any] | None:
    """Validate a record, keeping only declared properties.

    Properties are validated in declaration order; an absent key is read
    as None. The first failing property aborts with its name prepended to
    the failure path. Undeclared keys never reach the result.
    """
    if _is_missing(value, schema):
        return None
    if not isinstance(value, Mapping):
        raise _type_mismatch(schema)

    result: dict[str, Any] = {}
    for name, property_schema in schema.properties.items():
        try:
            result[name] = _dispatch(value.get(name), property_schema)
        except ValidationFailure as e:
            raise e.with_prefix(name) from None
    return result


def validate_array(value: Any, schema: ArraySchema) -> list[Any] | None:
    """Validate an ordered sequence element by element.

    Missing elements are kept when ``items`` is nullable and fail with
    MISSING_VALUE otherwise. The first failing element aborts with its
    index prepended to the failure path.

    The some/every/none predicates roll over the validated elements; once
    a predicate's outcome is decided it is not called again. They are
    judged together after every element has validated.
    """
    if _is_missing(value, schema):
        return None
    if not isinstance(value, list | tuple):
        raise _type_mismatch(schema)

    label = schema.label
    if schema.min_length is not None and len(value) < schema.min_length:
        raise _failure(
            schema,
            ErrorKind.LENGTH_TOO_SHORT,
            f"{label} must contain at least {schema.min_length} items.",
        )
    if schema.max_length is not None and len(value) > schema.max_length:
        raise _failure(
            schema,
            ErrorKind.LENGTH_TOO_LONG,
            f"{label} must contain at most {schema.max_length} items.",
        )

    # Outcome per configured predicate; "some" starts unsatisfied
    satisfied = {name: name is not PredicateName.SOME for name in schema.predicates()}

    result: list[Any] = []
    for index, element in enumerate(value):
        try:
            valid = _dispatch(element, schema.items)
        except ValidationFailure as e:
            raise e.with_prefix(index) from None

        if schema.some is not None and not satisfied[PredicateName.SOME]:
            satisfied[PredicateName.SOME] = bool(schema.some(valid))
        if schema.every is not None and satisfied[PredicateName.EVERY]:
            satisfied[PredicateName.EVERY] = bool(schema.every(valid))
        if schema.none is not None and satisfied[PredicateName.NONE]:
            satisfied[PredicateName.NONE] = not schema.none(valid)

        result.append(valid)

    failed = [name.value for name, ok in satisfied.items() if not ok]
    if failed:
        raise _failure(
            schema,
            ErrorKind.PREDICATE_UNSATISFIED,
            f"{label} does not satisfy the given conditions ({', '.join(failed)}).",
        )
    return result


_VALIDATORS: dict[SchemaType, Callable[[Any, Any], Any]] = {
    SchemaType.STRING: validate_string,
    SchemaType.NUMBER: validate_number,
    SchemaType.BOOLEAN: validate_boolean,
    SchemaType.OBJECT: validate_object,
    SchemaType.ARRAY: validate_array,
}


def _dispatch(value: Any, schema: SchemaVariant) -> Any:
    """Route to the validator registered for the schema's type tag."""
    tag = getattr(schema, "type", None)
    try:
        validator = _VALIDATORS[SchemaType(tag)]
    except ValueError:
        raise UnsupportedTypeError(tag) from None
    return validator(value, schema)


def _resolve(schema: Any) -> SchemaVariant:
    """Accept schema models as-is; parse plain mappings into models."""
    if isinstance(schema, BaseSchema):
        return schema  # type: ignore[return-value]
    if isinstance(schema, Mapping):
        from shapeguard.core.loader import parse_schema

        return parse_schema(schema)
    raise UnsupportedTypeError(getattr(schema, "type", type(schema).__name__))


@overload
def validate(value: Any, schema: StringSchema) -> str | None: ...


@overload
def validate(value: Any, schema: NumberSchema) -> int | float | None: ...


@overload
def validate(value: Any, schema: BooleanSchema) -> bool | None: ...


@overload
def validate(value: Any, schema: ObjectSchema) -> dict[str, Any] | None: ...


@overload
def validate(value: Any, schema: ArraySchema) -> list[Any] | None: ...


@overload
def validate(value: Any, schema: Mapping[str, Any]) -> Any: ...


def validate(value: Any, schema: Any) -> Any:
    """Validate ``value`` against ``schema`` and return the validated value.

    Args:
        value: Untrusted input data
        schema: A schema model, or a plain mapping in the documented
            camelCase form (parsed with parse_schema)

    Returns:
        Newly built data conforming to the schema. Objects contain exactly
        the declared properties. A nullable missing value returns None.

    Raises:
        ValidationFailure: The value violates the schema
        UnsupportedTypeError: The schema carries an unknown type tag
        SchemaDefinitionError: A plain mapping schema is malformed
    """
    return _dispatch(value, _resolve(schema))
