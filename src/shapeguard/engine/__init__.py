"""Validation engine: dispatcher, type-specific validators, result types."""

from shapeguard.engine.expression_parser import (
    ExpressionParser,
    ExpressionSecurityError,
    ExpressionSyntaxError,
)
from shapeguard.engine.result_types import format_result_type, result_type
from shapeguard.engine.validators import (
    validate,
    validate_array,
    validate_boolean,
    validate_number,
    validate_object,
    validate_string,
)

__all__ = [
    "ExpressionParser",
    "ExpressionSecurityError",
    "ExpressionSyntaxError",
    "format_result_type",
    "result_type",
    "validate",
    "validate_array",
    "validate_boolean",
    "validate_number",
    "validate_object",
    "validate_string",
]
