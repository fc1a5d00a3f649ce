# evaluator.py

"""
Tree-walking evaluator.

Every runtime value is an EvalValue: a Tensor plus a Kind tag. The tag,
not the shape, decides what an operator means, since a 1x1 tensor may be a
scalar and a 1-wide row may be a bra or a generic matrix row. The
juxtaposition rules live in one table, ``juxtapose_handlers``, keyed by the
(left, right) kinds.
"""

import logging
from enum import Enum

from qdirac.ast import (
    BinOpASTNode,
    BinOpKind,
    ConjTransposeASTNode,
    GroupASTNode,
    KetASTNode,
    NegASTNode,
    NormASTNode,
    ScalarASTNode,
)
from qdirac.errors import (
    DimensionMismatchError,
    DivisionByZeroError,
    EvalError,
    InvalidOperandError,
    ShapeMismatchError,
)
from qdirac.parser import parse
from qdirac.scalar import is_zero
from qdirac.tensor import MAX_TENSOR_ENTRIES, Tensor

_LOGGER = logging.getLogger(__name__)


class Kind(Enum):
    KET = "ket"
    BRA = "bra"
    SCALAR = "scalar"
    MATRIX = "matrix"


class EvalValue:
    __slots__ = ("tensor", "kind")

    def __init__(self, tensor: Tensor, kind: Kind):
        self.tensor = tensor
        self.kind = kind

    @property
    def shape(self):
        return self.tensor.shape

    def __eq__(self, other):
        if not isinstance(other, EvalValue):
            return NotImplemented
        return self.kind is other.kind and self.tensor == other.tensor

    __hash__ = None

    def __repr__(self):
        return f"EvalValue({self.kind.name}, {self.tensor!r})"


def _describe(value: EvalValue) -> str:
    rows, cols = value.shape
    return f"{value.kind.value} {rows}x{cols}"


def _check_size(rows, cols, node):
    if rows * cols > MAX_TENSOR_ENTRIES:
        raise DimensionMismatchError(
            f"result would be {rows}x{cols}, more than {MAX_TENSOR_ENTRIES} entries",
            node.offset,
        )


# ------------------------------------------------------------------------
# Juxtaposition: meaning chosen from the operand kinds
# ------------------------------------------------------------------------
def _scale_right(left, right, node):
    return EvalValue(right.tensor.scale(left.tensor.item()), right.kind)


def _scale_left(left, right, node):
    return EvalValue(left.tensor.scale(right.tensor.item()), left.kind)


def _inner_product(left, right, node):
    if left.tensor.size != right.tensor.size:
        raise ShapeMismatchError(
            left.shape, right.shape,
            f"inner product of {_describe(left)} with {_describe(right)}: dimensions differ",
            node.offset,
        )
    return EvalValue(Tensor.scalar(left.tensor.inner(right.tensor)), Kind.SCALAR)


def _outer_product(left, right, node):
    _check_size(left.tensor.rows, right.tensor.cols, node)
    return EvalValue(left.tensor.matmul(right.tensor), Kind.MATRIX)


juxtapose_handlers = {
    (Kind.BRA, Kind.KET): _inner_product,
    (Kind.KET, Kind.BRA): _outer_product,
}


def juxtapose(left: EvalValue, right: EvalValue, node) -> EvalValue:
    if left.kind is Kind.SCALAR:
        handler = _scale_right
    elif right.kind is Kind.SCALAR:
        handler = _scale_left
    else:
        handler = juxtapose_handlers.get((left.kind, right.kind))
    if handler is None:
        raise InvalidOperandError(
            f"cannot juxtapose {_describe(left)} with {_describe(right)}"
            + (" (use 'x' for the kronecker product)"
               if left.kind is right.kind and left.kind is not Kind.MATRIX else ""),
            node.offset,
        )
    _LOGGER.debug("juxtapose %s, %s -> %s", left.kind.name, right.kind.name, handler.__name__)
    return handler(left, right, node)


# ------------------------------------------------------------------------
# Binary operators
# ------------------------------------------------------------------------
def _elementwise(op, left, right, node):
    if left.shape != right.shape:
        raise ShapeMismatchError(
            left.shape, right.shape,
            f"cannot {op} {_describe(left)} and {_describe(right)}",
            node.offset,
        )
    tensor = left.tensor + right.tensor if op == "add" else left.tensor - right.tensor
    kind = left.kind if left.kind is right.kind else Kind.MATRIX
    return EvalValue(tensor, kind)


def _kron(left, right, node):
    _check_size(left.tensor.rows * right.tensor.rows, left.tensor.cols * right.tensor.cols, node)
    if left.kind is right.kind and left.kind in (Kind.KET, Kind.BRA):
        kind = left.kind
    else:
        kind = Kind.MATRIX
    return EvalValue(left.tensor.kron(right.tensor), kind)


def _divide(left, right, node):
    if right.kind is not Kind.SCALAR:
        raise InvalidOperandError(
            f"cannot divide {_describe(left)} by {_describe(right)}: divisor must be a scalar",
            node.offset,
        )
    divisor = right.tensor.item()
    if is_zero(divisor):
        raise DivisionByZeroError(f"division of {_describe(left)} by zero", node.offset)
    return EvalValue(left.tensor / divisor, left.kind)


binop_handlers = {
    BinOpKind.ADD: lambda l, r, node: _elementwise("add", l, r, node),
    BinOpKind.SUB: lambda l, r, node: _elementwise("subtract", l, r, node),
    BinOpKind.KRON: _kron,
    BinOpKind.DIV: _divide,
    BinOpKind.JUXTAPOSE: juxtapose,
}


# ------------------------------------------------------------------------
# Node evaluation
# ------------------------------------------------------------------------
_DAGGER_KIND = {
    Kind.KET: Kind.BRA,
    Kind.BRA: Kind.KET,
    Kind.SCALAR: Kind.SCALAR,
    Kind.MATRIX: Kind.MATRIX,
}


def _eval_ket(node):
    try:
        tensor = Tensor.basis(node.bits)
    except EvalError as e:
        raise type(e)(e.message, node.offset) from None
    return EvalValue(tensor, Kind.KET)


def _eval_norm(node, value):
    if value.kind is Kind.MATRIX:
        raise DimensionMismatchError(
            f"norm is only defined for kets, bras and scalars, got {_describe(value)}",
            node.offset,
        )
    # sqrt of Re <x|x>
    return EvalValue(Tensor.scalar(value.tensor.norm()), Kind.SCALAR)


def _eval_binop(node, left, right):
    return binop_handlers[node.op](left, right, node)


def _eval_dagger(node, value):
    return EvalValue(value.tensor.dag(), _DAGGER_KIND[value.kind])


def _eval_neg(node, value):
    return EvalValue(-value.tensor, value.kind)


# Each handler receives the node followed by the values of its children.
node_handlers = {
    KetASTNode: _eval_ket,
    ScalarASTNode: lambda node: EvalValue(Tensor.scalar(node.value), Kind.SCALAR),
    GroupASTNode: lambda node, value: value,
    NormASTNode: _eval_norm,
    ConjTransposeASTNode: _eval_dagger,
    NegASTNode: _eval_neg,
    BinOpASTNode: _eval_binop,
}


def evaluate(node) -> EvalValue:
    """
    Evaluate an AST bottom-up. Raises an EvalError subclass on failure.

    The walk is post-order over an explicit stack, so arbitrarily long
    operator chains do not consume Python stack frames.
    """
    values = []
    stack = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        handler = node_handlers.get(type(current))
        if handler is None:
            raise TypeError(f"Not an AST node: {current!r}")
        children = current.children()
        if children and not expanded:
            stack.append((current, True))
            stack.extend((child, False) for child in reversed(children))
            continue
        if children:
            args = values[-len(children):]
            del values[-len(children):]
            values.append(handler(current, *args))
        else:
            values.append(handler(current))
    return values.pop()


def evaluate_tensor(node):
    """Evaluate and return ``(tensor, (rows, cols))``."""
    tensor = evaluate(node).tensor
    return tensor, tensor.shape


def interpret(text: str) -> Tensor:
    """Parse and evaluate ``text`` in one step."""
    try:
        return evaluate(parse(text)).tensor
    except EvalError as e:
        _LOGGER.debug("evaluation of %r failed: %s", text, e)
        raise
