"""
Core math modules для калькулятора

Арифметика произвольной точности с явной политикой ошибок.
"""

# Decimal Arithmetic
from src.core.math.decimal_arithmetic import (
    # Precision constants
    DIVISION_PRECISION,
    EXACT_POWER_DIGITS_LIMIT,
    EXACT_PRECISION,
    INT64_MAX,
    INT64_MIN,
    PLAIN_RENDER_LIMIT,
    ROUNDING_MODES,
    # Contexts
    division_context,
    exact_context,
    result_range_guard,
    rounding_context,
    # Predicates and conversions
    is_integer,
    is_zero,
    parse_decimal,
    to_int64,
    # Operations
    add,
    divide,
    multiply,
    negate,
    power,
    remainder,
    subtract,
    # Post-processing
    format_decimal,
    round_decimal,
)

__all__ = [
    # Precision constants
    "DIVISION_PRECISION",
    "EXACT_POWER_DIGITS_LIMIT",
    "EXACT_PRECISION",
    "INT64_MAX",
    "INT64_MIN",
    "PLAIN_RENDER_LIMIT",
    "ROUNDING_MODES",
    # Contexts
    "division_context",
    "exact_context",
    "result_range_guard",
    "rounding_context",
    # Predicates and conversions
    "is_integer",
    "is_zero",
    "parse_decimal",
    "to_int64",
    # Operations
    "add",
    "divide",
    "multiply",
    "negate",
    "power",
    "remainder",
    "subtract",
    # Post-processing
    "format_decimal",
    "round_decimal",
]
