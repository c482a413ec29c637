"""Schema descriptors: the five variants of the closed schema union.

Schemas are frozen pydantic models. They are plain data - no variant
carries behaviour of its own; validation lives in shapeguard.engine.

Field names are snake_case in Python, with the camelCase names of the
plain-data form accepted as aliases:

    StringSchema(min_length=2, starts_with="A")
    StringSchema.model_validate({"type": "string", "minLength": 2})

List-valued constraints are stored as tuples and object properties as a
read-only mapping, so a constructed schema cannot be mutated through them.
"""

import re
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
)

from shapeguard.contracts.enums import PredicateName, SchemaType

# Label used in messages when a schema has no description
DEFAULT_DESCRIPTION = "value"

Predicate = Callable[[Any], bool]
Number = int | float


class BaseSchema(BaseModel):
    """Fields shared by every schema variant."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    nullable: bool = False
    description: str | None = None

    @property
    def schema_type(self) -> SchemaType:
        """The variant tag as a SchemaType."""
        return SchemaType(getattr(self, "type"))

    @property
    def label(self) -> str:
        """Description used in error messages."""
        if self.description is None:
            return DEFAULT_DESCRIPTION
        return self.description


class StringSchema(BaseSchema):
    """Text value with length, pattern, date, affix and membership rules.

    ``regex`` uses search semantics: the pattern may match anywhere unless
    anchored.
    """

    type: Literal["string"] = "string"
    min_length: int | None = Field(default=None, ge=0, alias="minLength")
    max_length: int | None = Field(default=None, ge=0, alias="maxLength")
    regex: re.Pattern[str] | None = None
    date_format: str | None = Field(default=None, alias="dateFormat")
    starts_with: str | None = Field(default=None, alias="startsWith")
    ends_with: str | None = Field(default=None, alias="endsWith")
    includes: str | None = None
    in_: tuple[str, ...] | None = Field(default=None, alias="in")
    not_in: tuple[str, ...] | None = Field(default=None, alias="notIn")


class NumberSchema(BaseSchema):
    """Numeric value with inclusive bounds and membership rules."""

    type: Literal["number"] = "number"
    min: Number | None = None
    max: Number | None = None
    in_: tuple[Number, ...] | None = Field(default=None, alias="in")
    not_in: tuple[Number, ...] | None = Field(default=None, alias="notIn")


class BooleanSchema(BaseSchema):
    type: Literal["boolean"] = "boolean"


class ObjectSchema(BaseSchema):
    """Record with declared properties.

    Declaration order of ``properties`` is the validation order, so it
    decides which property's error is reported first.
    """

    type: Literal["object"] = "object"
    properties: Mapping[str, "Schema"]

    @field_validator("properties", mode="after")
    @classmethod
    def freeze_properties(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(v))

    @field_serializer("properties")
    def dump_properties(self, v: Mapping[str, Any]) -> dict[str, Any]:
        return dict(v)


class ArraySchema(BaseSchema):
    """Ordered sequence whose elements all match ``items``.

    ``some``/``every``/``none`` are callables over validated elements.
    In plain-data schemas they may be given as expression strings over
    ``item`` (e.g. ``"item % 2 == 0"``); those are compiled with
    ExpressionParser when the schema is built.
    """

    type: Literal["array"] = "array"
    items: "Schema"
    min_length: int | None = Field(default=None, ge=0, alias="minLength")
    max_length: int | None = Field(default=None, ge=0, alias="maxLength")
    some: Predicate | None = None
    every: Predicate | None = None
    none: Predicate | None = None

    @field_validator("some", "every", "none", mode="before")
    @classmethod
    def compile_expression(cls, v: Any, info: ValidationInfo) -> Any:
        """Compile expression strings into predicates at schema build time."""
        if not isinstance(v, str):
            return v

        from shapeguard.engine.expression_parser import (
            ExpressionParser,
            ExpressionSecurityError,
            ExpressionSyntaxError,
        )

        try:
            return ExpressionParser(v)
        except ExpressionSyntaxError as e:
            raise ValueError(f"Invalid {info.field_name} predicate syntax: {e}") from e
        except ExpressionSecurityError as e:
            raise ValueError(f"Forbidden construct in {info.field_name} predicate: {e}") from e

    def predicates(self) -> dict[PredicateName, Predicate]:
        """Configured predicates keyed by name, in some/every/none order."""
        configured = {
            PredicateName.SOME: self.some,
            PredicateName.EVERY: self.every,
            PredicateName.NONE: self.none,
        }
        return {name: fn for name, fn in configured.items() if fn is not None}


SchemaVariant = StringSchema | NumberSchema | BooleanSchema | ObjectSchema | ArraySchema

Schema = Annotated[SchemaVariant, Field(discriminator="type")]

ObjectSchema.model_rebuild()
ArraySchema.model_rebuild()

SCHEMA_MODELS: dict[SchemaType, type[BaseSchema]] = {
    SchemaType.STRING: StringSchema,
    SchemaType.NUMBER: NumberSchema,
    SchemaType.BOOLEAN: BooleanSchema,
    SchemaType.OBJECT: ObjectSchema,
    SchemaType.ARRAY: ArraySchema,
}
