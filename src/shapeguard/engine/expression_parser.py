"""Safe expression parser for array element predicates.

Plain-data schemas (YAML/JSON) cannot carry Python callables, so the
``some``/``every``/``none`` predicates are written as expressions over the
element under test, bound to the name ``item``:

    every: "item % 2 == 0"
    some: "item.get('role') == 'admin'"
    none: "len(item) > 20"

The expression is parsed with ``ast`` and checked against a whitelist
BEFORE it is ever evaluated. Evaluation walks the checked tree directly;
``eval``/``compile`` are never used.

Allowed:
- Literals (str, int, float, bool, None) and list/tuple/set/dict displays
- Comparisons, including chains, ``in``/``not in``, ``is``/``is not``
- Boolean ``and``/``or``/``not`` and the ternary ``a if cond else b``
- Arithmetic ``+ - * / // %`` and unary ``-``/``+``
- Subscripts (``item['key']``, ``item[0]``)
- ``item.get(key)`` / ``item.get(key, default)`` and ``len(x)``

Everything else is rejected with ExpressionSecurityError at parse time.
"""

import ast
import operator
from collections.abc import Callable
from typing import Any

ITEM_NAME = "item"

_BINARY_OPS: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
}

_UNARY_OPS: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
    ast.Not: operator.not_,
}

_COMPARE_OPS: dict[type[ast.cmpop], Callable[[Any, Any], bool]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.Is: operator.is_,
    ast.IsNot: operator.is_not,
    ast.In: lambda a, b: a in b,
    ast.NotIn: lambda a, b: a not in b,
}

# Raised by well-formed expressions applied to an item of the wrong shape
_EVALUATION_ERRORS = (TypeError, KeyError, IndexError, AttributeError, ZeroDivisionError)

# Node types rejected outright, with the message prefix used in the error
_FORBIDDEN_NODES: dict[type[ast.AST], str] = {
    ast.Lambda: "Lambda expressions are not allowed",
    ast.ListComp: "List comprehensions are not allowed",
    ast.DictComp: "Dict comprehensions are not allowed",
    ast.SetComp: "Set comprehensions are not allowed",
    ast.GeneratorExp: "Generator expressions are not allowed",
    ast.NamedExpr: "Assignment expressions are not allowed",
    ast.JoinedStr: "F-string expressions are not allowed",
    ast.Starred: "Starred expressions are not allowed",
    ast.Await: "Await expressions are not allowed",
    ast.Yield: "Yield expressions are not allowed",
    ast.YieldFrom: "Yield expressions are not allowed",
}


class ExpressionSyntaxError(Exception):
    """Raised when an expression is not valid Python expression syntax."""

    pass


class ExpressionSecurityError(Exception):
    """Raised when an expression uses a construct outside the whitelist."""

    pass


class _ExpressionValidator(ast.NodeVisitor):
    """Walks a parsed expression and rejects anything not whitelisted."""

    def generic_visit(self, node: ast.AST) -> None:
        for forbidden, message in _FORBIDDEN_NODES.items():
            if isinstance(node, forbidden):
                raise ExpressionSecurityError(message)
        allowed = (
            ast.Expression,
            ast.Constant,
            ast.List,
            ast.Tuple,
            ast.Set,
            ast.Dict,
            ast.Compare,
            ast.BoolOp,
            ast.UnaryOp,
            ast.BinOp,
            ast.IfExp,
            ast.Subscript,
            ast.Slice,
            ast.Load,
            ast.boolop,
            ast.cmpop,
        )
        if isinstance(node, ast.BinOp) and type(node.op) not in _BINARY_OPS:
            raise ExpressionSecurityError(f"Forbidden operator: {type(node.op).__name__}")
        if isinstance(node, ast.UnaryOp) and type(node.op) not in _UNARY_OPS:
            raise ExpressionSecurityError(f"Forbidden operator: {type(node.op).__name__}")
        if isinstance(node, ast.operator | ast.unaryop):
            return
        if not isinstance(node, allowed):
            raise ExpressionSecurityError(f"Forbidden construct: {type(node).__name__}")
        super().generic_visit(node)

    def visit_Dict(self, node: ast.Dict) -> None:
        if any(key is None for key in node.keys):
            raise ExpressionSecurityError("Dict spread (**) is not allowed")
        self.generic_visit(node)

    def visit_Name(self, node: ast.Name) -> None:
        if node.id != ITEM_NAME:
            raise ExpressionSecurityError(f"Forbidden name: {node.id!r}")

    def visit_Attribute(self, node: ast.Attribute) -> None:
        # Only reachable as the callee of item.get(...), handled in visit_Call
        raise ExpressionSecurityError(f"Forbidden {ITEM_NAME} attribute: {node.attr!r}")

    def visit_Call(self, node: ast.Call) -> None:
        if node.keywords:
            raise ExpressionSecurityError("Function calls with keyword arguments are not allowed")

        func = node.func
        if isinstance(func, ast.Attribute):
            if not (isinstance(func.value, ast.Name) and func.value.id == ITEM_NAME):
                raise ExpressionSecurityError(f"Forbidden method call: {ast.unparse(func)}")
            if func.attr != "get":
                raise ExpressionSecurityError(f"Forbidden {ITEM_NAME} attribute: {func.attr!r}")
            if len(node.args) not in (1, 2):
                raise ExpressionSecurityError(f"{ITEM_NAME}.get() requires 1 or 2 arguments")
        elif isinstance(func, ast.Name) and func.id == "len":
            if len(node.args) != 1:
                raise ExpressionSecurityError("len() requires exactly 1 argument")
        else:
            if not isinstance(func, ast.Name):
                self.visit(func)
            raise ExpressionSecurityError(f"Forbidden function call: {ast.unparse(func)}")

        for arg in node.args:
            self.visit(arg)


class ExpressionParser:
    """Parses and evaluates a whitelisted predicate expression.

    Instances are callable, so a parser can be stored directly as an
    array schema predicate:

        parser = ExpressionParser("item > 0")
        parser(5)  # True

    Raises:
        ExpressionSyntaxError: If the text does not parse
        ExpressionSecurityError: If the text uses a forbidden construct
    """

    def __init__(self, expression: str) -> None:
        self._expression = expression
        try:
            self._tree = ast.parse(expression, mode="eval")
        except SyntaxError as e:
            raise ExpressionSyntaxError(f"Invalid syntax: {e.msg}") from e
        _ExpressionValidator().visit(self._tree)

    @property
    def expression(self) -> str:
        """The original expression text."""
        return self._expression

    def evaluate(self, item: Any) -> Any:
        """Evaluate the expression with ``item`` bound to the given value."""
        return self._eval(self._tree.body, item)

    def __call__(self, item: Any) -> bool:
        """Predicate form: truthiness of the result.

        An expression that cannot be evaluated for this item (``None > 0``,
        a missing key, division by zero) counts as False, so a null or
        partial element never escapes validation as a raw exception.
        """
        try:
            return bool(self.evaluate(item))
        except _EVALUATION_ERRORS:
            return False

    def __repr__(self) -> str:
        return f'ExpressionParser("{self._expression}")'

    def _eval(self, node: ast.expr, item: Any) -> Any:
        if isinstance(node, ast.Constant):
            return node.value
        if isinstance(node, ast.Name):
            return item
        if isinstance(node, ast.List):
            return [self._eval(elt, item) for elt in node.elts]
        if isinstance(node, ast.Tuple):
            return tuple(self._eval(elt, item) for elt in node.elts)
        if isinstance(node, ast.Set):
            return {self._eval(elt, item) for elt in node.elts}
        if isinstance(node, ast.Dict):
            return {
                self._eval(key, item): self._eval(value, item)
                for key, value in zip(node.keys, node.values)
                if key is not None
            }
        if isinstance(node, ast.BoolOp):
            return self._eval_bool_op(node, item)
        if isinstance(node, ast.UnaryOp):
            return _UNARY_OPS[type(node.op)](self._eval(node.operand, item))
        if isinstance(node, ast.BinOp):
            left = self._eval(node.left, item)
            right = self._eval(node.right, item)
            return _BINARY_OPS[type(node.op)](left, right)
        if isinstance(node, ast.Compare):
            return self._eval_compare(node, item)
        if isinstance(node, ast.IfExp):
            if self._eval(node.test, item):
                return self._eval(node.body, item)
            return self._eval(node.orelse, item)
        if isinstance(node, ast.Subscript):
            return self._eval(node.value, item)[self._eval_slice(node.slice, item)]
        if isinstance(node, ast.Call):
            args = [self._eval(arg, item) for arg in node.args]
            if isinstance(node.func, ast.Attribute):
                return item.get(*args)
            return len(args[0])
        # Unreachable for validated trees
        raise ExpressionSecurityError(f"Forbidden construct: {type(node).__name__}")

    def _eval_slice(self, node: ast.expr, item: Any) -> Any:
        if isinstance(node, ast.Slice):
            return slice(
                self._eval(node.lower, item) if node.lower else None,
                self._eval(node.upper, item) if node.upper else None,
                self._eval(node.step, item) if node.step else None,
            )
        return self._eval(node, item)

    def _eval_bool_op(self, node: ast.BoolOp, item: Any) -> Any:
        if isinstance(node.op, ast.And):
            result: Any = True
            for value in node.values:
                result = self._eval(value, item)
                if not result:
                    return result
            return result
        result = False
        for value in node.values:
            result = self._eval(value, item)
            if result:
                return result
        return result

    def _eval_compare(self, node: ast.Compare, item: Any) -> bool:
        left = self._eval(node.left, item)
        for op, comparator in zip(node.ops, node.comparators):
            right = self._eval(comparator, item)
            if not _COMPARE_OPS[type(op)](left, right):
                return False
            left = right
        return True
