"""
Domain models and value objects.

Contains the closed sets the evaluator works with: named constants,
operators with their precedence/associativity, and tokens.
"""

from src.core.domain.math_constants import MathConstant, list_constants
from src.core.domain.operators import (
    Associativity,
    Operator,
    is_operator_symbol,
    operator_associativity,
    operator_precedence,
    should_pop_operator,
)
from src.core.domain.tokens import (
    LEFT_PAREN,
    RIGHT_PAREN,
    IdentifierToken,
    LeftParenToken,
    NumberToken,
    OperatorToken,
    RightParenToken,
    Token,
    format_tokens,
    is_paren_symbol,
    paren_token,
)

__all__ = [
    # Constant table
    "MathConstant",
    "list_constants",
    # Operators
    "Associativity",
    "Operator",
    "is_operator_symbol",
    "operator_associativity",
    "operator_precedence",
    "should_pop_operator",
    # Tokens
    "Token",
    "NumberToken",
    "IdentifierToken",
    "OperatorToken",
    "LeftParenToken",
    "RightParenToken",
    "LEFT_PAREN",
    "RIGHT_PAREN",
    "format_tokens",
    "is_paren_symbol",
    "paren_token",
]
