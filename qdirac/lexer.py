# lexer.py

"""
Tokenizer for Dirac notation.

Every '|' becomes a generic PIPE token: whether it opens a ket, closes a
bra or delimits a norm is left to the parser. The one piece of context the
lexer does use is the basis label: a run of basis characters directly after
'|' that is closed by '>', or directly after '<' that is closed by '|', is
emitted as a single BITSTRING token. Anywhere else digits are numbers and
'+'/'-' are operators, which keeps ``| 1 |`` (a norm) apart from ``|1>``.
"""

import re
from enum import Enum

from qdirac.errors import LexError

BASIS_CHARS = "01+-"
DIGITS = "0123456789"

_NUMBER_RE = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_BASIS_AFTER_PIPE_RE = re.compile(r"\s*([01+\-]+)\s*(?=>)")
_BASIS_AFTER_LANGLE_RE = re.compile(r"\s*([01+\-]+)\s*(?=\|)")


class TokenKind(Enum):
    PIPE = "|"
    LANGLE = "<"
    RANGLE = ">"
    BITSTRING = "bit-string"
    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    KRON = "x"
    DOT = "."
    QUOTE = "'"
    LPAREN = "("
    RPAREN = ")"
    EOF = "end of input"


_SINGLE_CHAR_TOKENS = {
    "|": TokenKind.PIPE,
    "<": TokenKind.LANGLE,
    ">": TokenKind.RANGLE,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "x": TokenKind.KRON,
    ".": TokenKind.DOT,
    "'": TokenKind.QUOTE,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


class Token:
    __slots__ = ("kind", "text", "offset")

    def __init__(self, kind: TokenKind, text: str, offset: int):
        self.kind = kind
        self.text = text
        self.offset = offset

    def describe(self) -> str:
        """Human-readable form used in parse error messages."""
        if self.kind is TokenKind.EOF:
            return "end of input"
        if self.kind in (TokenKind.BITSTRING, TokenKind.NUMBER):
            return f"{self.kind.value} {self.text!r}"
        return repr(self.text)

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.text, self.offset) == (other.kind, other.text, other.offset)

    def __repr__(self):
        return f"Token({self.kind.name}, {self.text!r}, {self.offset})"


def tokenize(text: str):
    """
    Split ``text`` into a list of tokens ending with EOF.

    Raises LexError on the first character that cannot start a token.
    """
    tokens = []
    pos = 0
    n = len(text)
    while pos < n:
        ch = text[pos]
        if ch.isspace():
            pos += 1
            continue

        if ch in "|<":
            tokens.append(Token(_SINGLE_CHAR_TOKENS[ch], ch, pos))
            pos += 1
            basis_re = _BASIS_AFTER_PIPE_RE if ch == "|" else _BASIS_AFTER_LANGLE_RE
            m = basis_re.match(text, pos)
            if m:
                tokens.append(Token(TokenKind.BITSTRING, m.group(1), m.start(1)))
                pos = m.end()
            continue

        if ch in DIGITS or (ch == "." and pos + 1 < n and text[pos + 1] in DIGITS):
            m = _NUMBER_RE.match(text, pos)
            tokens.append(Token(TokenKind.NUMBER, m.group(0), pos))
            pos = m.end()
            continue

        kind = _SINGLE_CHAR_TOKENS.get(ch)
        if kind is None:
            raise LexError(pos, f"unrecognized character {ch!r}")
        tokens.append(Token(kind, ch, pos))
        pos += 1

    tokens.append(Token(TokenKind.EOF, "", n))
    return tokens
