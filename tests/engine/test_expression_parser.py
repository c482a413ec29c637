"""Tests for the safe predicate expression parser."""

import pytest

from shapeguard.engine.expression_parser import (
    ExpressionParser,
    ExpressionSecurityError,
    ExpressionSyntaxError,
)


class TestExpressionParserBasicOperations:
    """Test basic allowed operations."""

    def test_numeric_comparison(self) -> None:
        parser = ExpressionParser("item >= 0.85")
        assert parser.evaluate(0.9) is True
        assert parser.evaluate(0.85) is True
        assert parser.evaluate(0.8) is False

    def test_modulo(self) -> None:
        parser = ExpressionParser("item % 2 == 0")
        assert parser.evaluate(4) is True
        assert parser.evaluate(3) is False

    def test_arithmetic(self) -> None:
        assert ExpressionParser("item['qty'] * item['price'] >= 100").evaluate(
            {"qty": 5, "price": 20}
        ) is True
        assert ExpressionParser("item // 10 == 4").evaluate(42) is True
        assert ExpressionParser("item / 4 - 1 + 2 == 3").evaluate(8) is True

    def test_unary_minus(self) -> None:
        parser = ExpressionParser("-item < 0")
        assert parser.evaluate(5) is True
        assert parser.evaluate(-5) is False

    def test_string_equality(self) -> None:
        parser = ExpressionParser("item != 'deleted'")
        assert parser.evaluate("active") is True
        assert parser.evaluate("deleted") is False


class TestExpressionParserBooleanOperations:
    """Test boolean and/or/not operations."""

    def test_and_operator(self) -> None:
        parser = ExpressionParser("item > 0 and item < 10")
        assert parser.evaluate(5) is True
        assert parser.evaluate(10) is False

    def test_or_operator(self) -> None:
        parser = ExpressionParser("item == 'a' or item == 'b'")
        assert parser.evaluate("b") is True
        assert parser.evaluate("c") is False

    def test_not_operator(self) -> None:
        parser = ExpressionParser("not item['disabled']")
        assert parser.evaluate({"disabled": False}) is True
        assert parser.evaluate({"disabled": True}) is False

    def test_short_circuit(self) -> None:
        # Right side would raise KeyError if evaluated
        parser = ExpressionParser("item.get('x') is not None and item['x'] > 1")
        assert parser.evaluate({}) is False


class TestExpressionParserMembership:
    """Test membership operations (in, not in)."""

    def test_in_list(self) -> None:
        parser = ExpressionParser("item in ['active', 'pending']")
        assert parser.evaluate("active") is True
        assert parser.evaluate("deleted") is False

    def test_not_in_tuple(self) -> None:
        parser = ExpressionParser("item not in (1, 2, 3)")
        assert parser.evaluate(5) is True
        assert parser.evaluate(2) is False

    def test_in_set(self) -> None:
        parser = ExpressionParser("item in {'a', 'b'}")
        assert parser.evaluate("b") is True

    def test_dict_literal(self) -> None:
        parser = ExpressionParser("item in {'a': 1, 'b': 2}")
        assert parser.evaluate("a") is True
        assert parser.evaluate("c") is False


class TestExpressionParserItemAccess:
    """Test subscripts, item.get() and len()."""

    def test_item_get(self) -> None:
        parser = ExpressionParser("item.get('status', 'unknown') == 'unknown'")
        assert parser.evaluate({}) is True
        assert parser.evaluate({"status": "active"}) is False

    def test_nested_subscript(self) -> None:
        parser = ExpressionParser("item['data']['nested'] == 'value'")
        assert parser.evaluate({"data": {"nested": "value"}}) is True

    def test_slice(self) -> None:
        parser = ExpressionParser("item[:3] == 'INV'")
        assert parser.evaluate("INV-001") is True

    def test_len(self) -> None:
        parser = ExpressionParser("len(item) > 2")
        assert parser.evaluate("abc") is True
        assert parser.evaluate([1]) is False

    def test_is_none(self) -> None:
        parser = ExpressionParser("item is None")
        assert parser.evaluate(None) is True
        assert parser.evaluate(0) is False


class TestExpressionParserAdvanced:
    """Ternaries and comparison chains."""

    def test_ternary(self) -> None:
        parser = ExpressionParser("'high' if item >= 0.8 else 'low'")
        assert parser.evaluate(0.9) == "high"
        assert parser.evaluate(0.5) == "low"

    def test_chained_comparison(self) -> None:
        parser = ExpressionParser("0 < item < 100")
        assert parser.evaluate(50) is True
        assert parser.evaluate(0) is False
        assert parser.evaluate(100) is False


class TestExpressionParserCallable:
    """Parsers are usable directly as predicates."""

    def test_call_returns_bool(self) -> None:
        parser = ExpressionParser("item.get('tags')")
        assert parser({"tags": ["a"]}) is True
        assert parser({"tags": []}) is False

    def test_expression_property(self) -> None:
        assert ExpressionParser("item == 1").expression == "item == 1"

    def test_repr(self) -> None:
        assert repr(ExpressionParser("item == 1")) == 'ExpressionParser("item == 1")'


class TestExpressionParserEvaluationErrors:
    """Predicates that cannot be evaluated for an item are False."""

    @pytest.mark.parametrize(
        ("text", "item"),
        [
            ("item > 0", None),
            ("item['k'] == 1", {}),
            ("item[3] == 1", [1]),
            ("item.get('k') == 1", 5),
            ("10 / item > 1", 0),
        ],
    )
    def test_call_returns_false(self, text: str, item: object) -> None:
        assert ExpressionParser(text)(item) is False

    def test_evaluate_still_raises(self) -> None:
        with pytest.raises(KeyError):
            ExpressionParser("item['k'] == 1").evaluate({})


class TestExpressionParserSecurityRejections:
    """Test that forbidden constructs are rejected at parse time."""

    def test_reject_import(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Forbidden function call"):
            ExpressionParser("__import__('os')")

    def test_reject_eval(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Forbidden"):
            ExpressionParser("eval('1')")

    def test_reject_other_names(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Forbidden name"):
            ExpressionParser("row == 'value'")

    def test_reject_builtin_reference(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Forbidden name"):
            ExpressionParser("item == open")

    def test_reject_lambda(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Lambda expressions"):
            ExpressionParser("(lambda: True)()")

    def test_reject_list_comprehension(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="List comprehensions"):
            ExpressionParser("[x for x in item]")

    def test_reject_dict_comprehension(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Dict comprehensions"):
            ExpressionParser("{k: v for k, v in item}")

    def test_reject_set_comprehension(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Set comprehensions"):
            ExpressionParser("{x for x in item}")

    def test_reject_generator_expression(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Generator expressions"):
            ExpressionParser("(x for x in item)")

    def test_reject_dunder_attribute(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Forbidden item attribute"):
            ExpressionParser("item.__class__")

    def test_reject_other_methods(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Forbidden item attribute"):
            ExpressionParser("item.keys()")

    def test_reject_method_on_literal(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Forbidden method call"):
            ExpressionParser("'x'.upper() == item")

    def test_reject_walrus(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Assignment expressions"):
            ExpressionParser("(x := 5)")

    def test_reject_fstring(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="F-string"):
            ExpressionParser("f'{item}' == '1'")

    def test_reject_get_arity(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="requires 1 or 2 arguments"):
            ExpressionParser("item.get()")
        with pytest.raises(ExpressionSecurityError, match="requires 1 or 2 arguments"):
            ExpressionParser("item.get('a', 'b', 'c')")

    def test_reject_len_arity(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="exactly 1 argument"):
            ExpressionParser("len(item, item)")

    def test_reject_keyword_arguments(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="keyword arguments"):
            ExpressionParser("item.get(key='field')")

    def test_reject_starred(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Starred expressions"):
            ExpressionParser("[*item]")

    def test_reject_dict_spread(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Dict spread"):
            ExpressionParser("{'key': 1, **item}")

    def test_reject_power_operator(self) -> None:
        with pytest.raises(ExpressionSecurityError, match="Forbidden operator"):
            ExpressionParser("item ** 100000 > 1")


class TestExpressionParserSyntaxErrors:
    """Test syntax error handling."""

    @pytest.mark.parametrize("text", ["item['field ==", "item ==", "(item == 1"])
    def test_invalid_syntax(self, text: str) -> None:
        with pytest.raises(ExpressionSyntaxError, match="Invalid syntax"):
            ExpressionParser(text)
