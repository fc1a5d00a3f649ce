"""
qdirac: Dirac (bra-ket) notation parser and evaluator.

    >>> from qdirac import interpret
    >>> print(interpret("(|0> + |1>) / | |0> + |1> |"))
    0.7071067811865475+0i
    0.7071067811865475+0i
"""

from qdirac.errors import (
    DiracError,
    DimensionMismatchError,
    DivisionByZeroError,
    EvalError,
    InvalidOperandError,
    LexError,
    ParseError,
    ShapeMismatchError,
)
from qdirac.evaluator import EvalValue, Kind, evaluate, evaluate_tensor, interpret
from qdirac.lexer import Token, TokenKind, tokenize
from qdirac.parser import Parser, parse
from qdirac.scalar import format_complex
from qdirac.tensor import Tensor

__version__ = "0.1.0"

__all__ = [
    "DiracError", "LexError", "ParseError", "EvalError",
    "ShapeMismatchError", "DimensionMismatchError", "InvalidOperandError",
    "DivisionByZeroError",
    "Token", "TokenKind", "tokenize",
    "Parser", "parse",
    "EvalValue", "Kind", "evaluate", "evaluate_tensor", "interpret",
    "Tensor", "format_complex",
]
