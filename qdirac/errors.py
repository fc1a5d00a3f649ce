# errors.py

"""
Error taxonomy for the Dirac-notation pipeline.

Every failure raised by the lexer, parser or evaluator derives from
DiracError (itself a ValueError), so callers can catch the whole family
with a single except clause and still tell the stages apart.
"""


class DiracError(ValueError):
    pass


class LexError(DiracError):
    """Unrecognised character at ``offset``."""

    def __init__(self, offset: int, message: str):
        self.offset = offset
        self.message = message
        super().__init__(f"{message} at offset {offset}")


class ParseError(DiracError):
    """Unexpected token: ``expected`` describes what the grammar wanted,
    ``found`` what was actually there."""

    def __init__(self, offset: int, expected: str, found: str):
        self.offset = offset
        self.expected = expected
        self.found = found
        super().__init__(f"expected {expected}, found {found} at offset {offset}")


class EvalError(DiracError):
    kind = "EvalError"

    def __init__(self, message: str, offset=None):
        self.message = message
        self.offset = offset
        if offset is not None:
            message = f"{message} at offset {offset}"
        super().__init__(message)


class ShapeMismatchError(EvalError):
    kind = "ShapeMismatch"

    def __init__(self, lhs, rhs, message=None, offset=None):
        self.lhs = tuple(lhs)
        self.rhs = tuple(rhs)
        if message is None:
            message = f"shape mismatch: {self.lhs} vs {self.rhs}"
        super().__init__(message, offset)


class DimensionMismatchError(EvalError):
    kind = "DimensionMismatch"


class InvalidOperandError(EvalError):
    kind = "InvalidOperand"


class DivisionByZeroError(EvalError, ZeroDivisionError):
    kind = "DivisionByZero"
