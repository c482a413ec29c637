"""Tests for schema descriptor models."""

import re

import pytest
from pydantic import ValidationError


class TestSchemaConstruction:
    """Schemas accept both snake_case names and camelCase aliases."""

    def test_snake_case_names(self) -> None:
        from shapeguard.contracts import StringSchema

        schema = StringSchema(min_length=2, max_length=5, starts_with="a", in_=["ab"])
        assert schema.min_length == 2
        assert schema.starts_with == "a"
        assert schema.in_ == ("ab",)

    def test_camel_case_aliases(self) -> None:
        from shapeguard.contracts import StringSchema

        schema = StringSchema.model_validate(
            {"type": "string", "minLength": 1, "dateFormat": "yyyy-MM-dd", "notIn": ["x"]}
        )
        assert schema.min_length == 1
        assert schema.date_format == "yyyy-MM-dd"
        assert schema.not_in == ("x",)

    def test_regex_string_is_compiled(self) -> None:
        from shapeguard.contracts import StringSchema

        schema = StringSchema.model_validate({"type": "string", "regex": r"^\d+$"})
        assert isinstance(schema.regex, re.Pattern)
        assert schema.regex.pattern == r"^\d+$"

    def test_defaults(self) -> None:
        from shapeguard.contracts import DEFAULT_DESCRIPTION, BooleanSchema

        schema = BooleanSchema()
        assert schema.type == "boolean"
        assert schema.nullable is False
        assert schema.description is None
        assert schema.label == DEFAULT_DESCRIPTION

    def test_label_uses_description(self) -> None:
        from shapeguard.contracts import NumberSchema

        assert NumberSchema(description="price").label == "price"

    def test_unknown_field_rejected(self) -> None:
        from shapeguard.contracts import NumberSchema

        with pytest.raises(ValidationError):
            NumberSchema.model_validate({"type": "number", "minimum": 3})

    def test_negative_length_rejected(self) -> None:
        from shapeguard.contracts import StringSchema

        with pytest.raises(ValidationError):
            StringSchema(min_length=-1)

    def test_nested_children_from_dicts(self) -> None:
        from shapeguard.contracts import ArraySchema, ObjectSchema, StringSchema

        schema = ObjectSchema(
            properties={"tags": {"type": "array", "items": {"type": "string"}}}
        )
        tags = schema.properties["tags"]
        assert isinstance(tags, ArraySchema)
        assert isinstance(tags.items, StringSchema)


class TestSchemaImmutability:
    """Schemas are frozen once constructed."""

    def test_cannot_assign_field(self) -> None:
        from shapeguard.contracts import NumberSchema

        schema = NumberSchema(min=1)
        with pytest.raises(ValidationError):
            schema.min = 2  # type: ignore[misc]

    def test_list_constraints_stored_as_tuples(self) -> None:
        from shapeguard.contracts import NumberSchema

        allowed = [1, 2, 3]
        schema = NumberSchema(in_=allowed)
        allowed.append(4)
        assert schema.in_ == (1, 2, 3)

    def test_properties_are_read_only(self) -> None:
        from shapeguard.contracts import NumberSchema, ObjectSchema, StringSchema

        declared = {"a": NumberSchema()}
        schema = ObjectSchema(properties=declared)

        with pytest.raises(TypeError):
            schema.properties["b"] = StringSchema()  # type: ignore[index]
        declared["b"] = StringSchema()
        assert list(schema.properties) == ["a"]

    def test_properties_dump_as_dict(self) -> None:
        from shapeguard.contracts import NumberSchema, ObjectSchema

        schema = ObjectSchema(properties={"a": NumberSchema(min=1)})
        dumped = schema.model_dump(by_alias=True)
        assert isinstance(dumped["properties"], dict)
        assert dumped["properties"]["a"]["min"] == 1


class TestArrayPredicates:
    """Array predicates may be callables or expression strings."""

    def test_callable_predicate_kept(self) -> None:
        from shapeguard.contracts import ArraySchema, NumberSchema, PredicateName

        def is_even(x: int) -> bool:
            return x % 2 == 0

        schema = ArraySchema(items=NumberSchema(), every=is_even)
        assert schema.every is is_even
        assert schema.predicates() == {PredicateName.EVERY: is_even}

    def test_expression_predicate_compiled(self) -> None:
        from shapeguard.contracts import ArraySchema, NumberSchema

        schema = ArraySchema(items=NumberSchema(), some="item > 10")
        assert schema.some is not None
        assert schema.some(11) is True
        assert schema.some(3) is False

    def test_forbidden_expression_rejected(self) -> None:
        from shapeguard.contracts import ArraySchema, NumberSchema

        with pytest.raises(ValidationError, match="Forbidden construct in none predicate"):
            ArraySchema(items=NumberSchema(), none="__import__('os')")

    def test_bad_syntax_rejected(self) -> None:
        from shapeguard.contracts import ArraySchema, NumberSchema

        with pytest.raises(ValidationError, match="Invalid every predicate syntax"):
            ArraySchema(items=NumberSchema(), every="item >")

    def test_no_predicates(self) -> None:
        from shapeguard.contracts import ArraySchema, BooleanSchema

        assert ArraySchema(items=BooleanSchema()).predicates() == {}
