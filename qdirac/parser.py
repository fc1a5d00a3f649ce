# parser.py

"""
Recursive-descent parser for Dirac notation.

Precedence, loosest first:

    additive   + -            (left)
    juxt       adjacency, * . (left)
    kron       x              (left)
    quotient   /              (left)
    unary      prefix -
    postfix    '
    primary    |bits>  <bits|  |expr|  (expr)  number

The '|' ambiguity is settled with a two-token peek: PIPE BITSTRING RANGLE
is a ket, any other PIPE in primary position opens a norm. In adjacency
position a PIPE that is not a ket starts a new norm only outside any
enclosing norm; inside one it is the closing bar.
"""

import logging

from qdirac.ast import (
    BinOpASTNode,
    BinOpKind,
    ConjTransposeASTNode,
    GroupASTNode,
    KetASTNode,
    NegASTNode,
    NormASTNode,
    ScalarASTNode,
    bra as make_bra,
)
from qdirac.errors import ParseError
from qdirac.lexer import TokenKind, tokenize

_LOGGER = logging.getLogger(__name__)

_PRIMARY_START = (TokenKind.NUMBER, TokenKind.LPAREN, TokenKind.LANGLE)
_PRODUCT_OPS = (TokenKind.STAR, TokenKind.DOT)

# Parentheses, norms and prefix minus each recurse; cap how deep they stack.
MAX_NESTING_DEPTH = 64


class Parser:
    def __init__(self, tokens):
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            raise ValueError("Token list must end with EOF")
        self.tokens = tokens
        self.pos = 0
        # number of norms opened since the nearest enclosing parenthesis
        self.norm_depth = 0
        self.depth = 0

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------
    def peek(self, ahead=0):
        return self.tokens[min(self.pos + ahead, len(self.tokens) - 1)]

    def advance(self):
        tok = self.peek()
        if tok.kind is not TokenKind.EOF:
            self.pos += 1
        return tok

    def expect(self, kind, expected=None):
        tok = self.peek()
        if tok.kind is not kind:
            raise ParseError(tok.offset, expected or repr(kind.value), tok.describe())
        return self.advance()

    def at_ket(self, ahead=0):
        return (
            self.peek(ahead).kind is TokenKind.PIPE
            and self.peek(ahead + 1).kind is TokenKind.BITSTRING
            and self.peek(ahead + 2).kind is TokenKind.RANGLE
        )

    def enter(self, tok):
        if self.depth >= MAX_NESTING_DEPTH:
            raise ParseError(
                tok.offset, f"at most {MAX_NESTING_DEPTH} levels of nesting", tok.describe()
            )
        self.depth += 1

    def leave(self):
        self.depth -= 1

    def starts_operand(self):
        """True when the next token begins an operand juxtaposed to the previous one."""
        kind = self.peek().kind
        if kind in _PRIMARY_START:
            return True
        if kind is TokenKind.PIPE:
            return self.at_ket() or self.norm_depth == 0
        return False

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------
    def parse(self):
        if self.peek().kind is TokenKind.EOF:
            raise ParseError(self.peek().offset, "expression", "end of input")
        node = self.additive()
        tok = self.peek()
        if tok.kind is not TokenKind.EOF:
            raise ParseError(tok.offset, "end of input", tok.describe())
        return node

    def additive(self):
        left = self.juxt()
        while self.peek().kind in (TokenKind.PLUS, TokenKind.MINUS):
            op = BinOpKind.ADD if self.advance().kind is TokenKind.PLUS else BinOpKind.SUB
            left = BinOpASTNode(op, left, self.juxt())
        return left

    def juxt(self):
        left = self.kron()
        while True:
            if self.peek().kind in _PRODUCT_OPS:
                self.advance()
            elif not self.starts_operand():
                break
            left = BinOpASTNode(BinOpKind.JUXTAPOSE, left, self.kron())
        return left

    def kron(self):
        left = self.quotient()
        while self.peek().kind is TokenKind.KRON:
            self.advance()
            left = BinOpASTNode(BinOpKind.KRON, left, self.quotient())
        return left

    def quotient(self):
        left = self.unary()
        while self.peek().kind is TokenKind.SLASH:
            self.advance()
            left = BinOpASTNode(BinOpKind.DIV, left, self.unary())
        return left

    def unary(self):
        if self.peek().kind is TokenKind.MINUS:
            tok = self.advance()
            self.enter(tok)
            operand = self.unary()
            self.leave()
            return NegASTNode(operand, tok.offset)
        return self.postfix()

    def postfix(self):
        node = self.primary()
        while self.peek().kind is TokenKind.QUOTE:
            self.advance()
            node = ConjTransposeASTNode(node, node.offset)
        return node

    def primary(self):
        tok = self.peek()
        if tok.kind is TokenKind.PIPE:
            if self.at_ket():
                return self.ket()
            nxt = self.peek(1)
            if nxt.kind is TokenKind.NUMBER and self.peek(2).kind is TokenKind.RANGLE:
                raise ParseError(nxt.offset, "bit-string of 0/1", nxt.describe())
            return self.norm()
        if tok.kind is TokenKind.LANGLE:
            return self.bra()
        if tok.kind is TokenKind.LPAREN:
            return self.group()
        if tok.kind is TokenKind.NUMBER:
            self.advance()
            return ScalarASTNode(float(tok.text), tok.offset)
        raise ParseError(tok.offset, "expression", tok.describe())

    def ket(self):
        start = self.expect(TokenKind.PIPE)
        bits = self.expect(TokenKind.BITSTRING, "bit-string")
        self.expect(TokenKind.RANGLE, "'>'")
        return KetASTNode(bits.text, start.offset)

    def bra(self):
        start = self.expect(TokenKind.LANGLE)
        bits = self.expect(TokenKind.BITSTRING, "bit-string")
        node = make_bra(bits.text, start.offset)
        if self.at_ket():
            # <a|b>: the bar closes the bra and opens the ket
            _LOGGER.debug("shared bar at offset %d", self.peek().offset)
            return BinOpASTNode(BinOpKind.JUXTAPOSE, node, self.ket())
        self.expect(TokenKind.PIPE, "'|' to close bra")
        return node

    def norm(self):
        start = self.expect(TokenKind.PIPE)
        self.enter(start)
        self.norm_depth += 1
        inner = self.additive()
        self.norm_depth -= 1
        self.leave()
        self.expect(TokenKind.PIPE, "'|' to close norm")
        return NormASTNode(inner, start.offset)

    def group(self):
        start = self.expect(TokenKind.LPAREN)
        self.enter(start)
        saved, self.norm_depth = self.norm_depth, 0
        inner = self.additive()
        self.norm_depth = saved
        self.leave()
        self.expect(TokenKind.RPAREN, "')'")
        return GroupASTNode(inner, start.offset)


def parse(text: str):
    """Parse ``text`` into an AST. Raises LexError or ParseError."""
    node = Parser(tokenize(text)).parse()
    _LOGGER.debug("parsed %r into %s", text, type(node).__name__)
    return node
