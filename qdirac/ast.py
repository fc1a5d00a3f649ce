# ast.py

"""
Abstract syntax tree for Dirac-notation expressions.

Each node owns its children outright (a strict tree) and remembers the
source offset of its first token, so evaluation errors can point back into
the text. Nodes carry no semantics of their own: BinOpASTNode with
JUXTAPOSE is produced for every implicit adjacency, and whether that means
scaling, an inner product or an outer product is decided by the evaluator
from the operand kinds.
"""

from enum import Enum


class BinOpKind(Enum):
    ADD = "+"
    SUB = "-"
    KRON = "x"
    JUXTAPOSE = "juxtapose"
    DIV = "/"


class ASTNode:
    fields = ()

    def __init__(self, offset=0):
        self.offset = offset

    def children(self):
        return [getattr(self, f) for f in self.fields if isinstance(getattr(self, f), ASTNode)]

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self.fields)

    __hash__ = None


class KetASTNode(ASTNode):
    """Basis ket literal |bits>."""
    fields = ("bits",)

    def __init__(self, bits: str, offset=0):
        super().__init__(offset)
        self.bits = bits

    def __repr__(self):
        return f"|{self.bits}>"


class ScalarASTNode(ASTNode):
    fields = ("value",)

    def __init__(self, value: complex, offset=0):
        super().__init__(offset)
        self.value = complex(value)

    def __repr__(self):
        if self.value.imag == 0:
            return f"{self.value.real:g}"
        return f"{self.value}"


class GroupASTNode(ASTNode):
    fields = ("inner",)

    def __init__(self, inner: ASTNode, offset=0):
        super().__init__(offset)
        self.inner = inner

    def __repr__(self):
        return f"({self.inner!r})"


class NormASTNode(ASTNode):
    fields = ("inner",)

    def __init__(self, inner: ASTNode, offset=0):
        super().__init__(offset)
        self.inner = inner

    def __repr__(self):
        return f"|{self.inner!r}|"


class ConjTransposeASTNode(ASTNode):
    fields = ("inner",)

    def __init__(self, inner: ASTNode, offset=0):
        super().__init__(offset)
        self.inner = inner

    def __repr__(self):
        if isinstance(self.inner, KetASTNode):
            return f"<{self.inner.bits}|"
        return f"{self.inner!r}'"


class NegASTNode(ASTNode):
    fields = ("inner",)

    def __init__(self, inner: ASTNode, offset=0):
        super().__init__(offset)
        self.inner = inner

    def __repr__(self):
        return f"-{self.inner!r}"


class BinOpASTNode(ASTNode):
    fields = ("op", "left", "right")

    def __init__(self, op: BinOpKind, left: ASTNode, right: ASTNode, offset=None):
        super().__init__(left.offset if offset is None else offset)
        self.op = op
        self.left = left
        self.right = right

    def __repr__(self):
        if self.op is BinOpKind.JUXTAPOSE:
            return f"[{self.left!r} {self.right!r}]"
        return f"[{self.left!r} {self.op.value} {self.right!r}]"


def bra(bits: str, offset=0) -> ConjTransposeASTNode:
    """A literal <bits| is the conjugate transpose of |bits>."""
    return ConjTransposeASTNode(KetASTNode(bits, offset), offset)

