import contextlib
import io
import unittest
from itertools import product

import numpy as np

import cli
import main
from qdirac import (
    DimensionMismatchError,
    DiracError,
    DivisionByZeroError,
    EvalError,
    InvalidOperandError,
    Kind,
    LexError,
    ParseError,
    ShapeMismatchError,
    Tensor,
    TokenKind,
    evaluate,
    evaluate_tensor,
    format_complex,
    interpret,
    parse,
    tokenize,
)
from qdirac.ast import (
    BinOpASTNode,
    BinOpKind,
    ConjTransposeASTNode,
    GroupASTNode,
    KetASTNode,
    NegASTNode,
    NormASTNode,
    ScalarASTNode,
    bra,
)
from qdirac.parser import MAX_NESTING_DEPTH
from qdirac.tensor import MAX_REGISTER_BITS, MAX_TENSOR_ENTRIES

SQRT_HALF = 1 / np.sqrt(2)


def column(*values):
    return np.array(values, dtype=complex).reshape(-1, 1)


def kinds(text):
    return [t.kind for t in tokenize(text)]


# -------------------------------------------------------------------
# Complex scalar display
# -------------------------------------------------------------------
class TestFormatComplex(unittest.TestCase):
    def test_examples(self):
        self.assertEqual(format_complex(0.7071067811865475), "0.7071067811865475+0i")
        self.assertEqual(format_complex(-1), "-1+0i")
        self.assertEqual(format_complex(1j), "0+1i")
        self.assertEqual(format_complex(3 - 2.5j), "3-2.5i")
        self.assertEqual(format_complex(np.complex128(-0.5 + 0.25j)), "-0.5+0.25i")

    def test_negative_zero_prints_as_zero(self):
        self.assertEqual(format_complex(complex(-0.0, -0.0)), "0+0i")


# -------------------------------------------------------------------
# Tensor kernel
# -------------------------------------------------------------------
class TestTensor(unittest.TestCase):
    def test_basis_is_one_hot(self):
        for n in range(1, 5):
            for bits in product("01", repeat=n):
                label = "".join(bits)
                t = Tensor.basis(label)
                expected = np.zeros((2 ** n, 1), dtype=complex)
                expected[int(label, 2), 0] = 1
                self.assertEqual(t.shape, (2 ** n, 1))
                np.testing.assert_array_equal(t.data, expected)

    def test_hadamard_labels(self):
        np.testing.assert_allclose(Tensor.basis("+").data, column(SQRT_HALF, SQRT_HALF))
        np.testing.assert_allclose(Tensor.basis("-").data, column(SQRT_HALF, -1j * SQRT_HALF))
        self.assertAlmostEqual(Tensor.basis("+-").norm(), 1.0)

    def test_register_limit(self):
        with self.assertRaises(DimensionMismatchError):
            Tensor.basis("0" * (MAX_REGISTER_BITS + 1))

    def test_shape_must_match_data(self):
        with self.assertRaises(ValueError):
            Tensor([1, 2, 3], (2, 2))

    def test_values_are_immutable(self):
        t = Tensor.basis("0")
        with self.assertRaises(ValueError):
            t.data[0, 0] = 5
        src = np.array([1, 0], dtype=complex)
        t = Tensor(src)
        src[0] = 7
        self.assertEqual(t[0, 0], 1)

    def test_kron_layout(self):
        a = Tensor([[1, 2], [3, 4]])
        b = Tensor([[0, 1], [1, 0]])
        k = a.kron(b)
        self.assertEqual(k.shape, (4, 4))
        for i1, j1, i2, j2 in product(range(2), repeat=4):
            self.assertEqual(k[i1 * 2 + i2, j1 * 2 + j2], a[i1, j1] * b[i2, j2])

    def test_kron_associative(self):
        a, b, c = Tensor.basis("1"), Tensor.basis("0"), Tensor.basis("1")
        self.assertEqual(a.kron(b).kron(c), a.kron(b.kron(c)))
        self.assertEqual(a.kron(b).kron(c), Tensor.basis("101"))

    def test_dag_is_involutive(self):
        m = Tensor([[1 + 2j, 3], [0, -1j], [2, 2 - 1j]])
        self.assertEqual(m.dag().shape, (2, 3))
        self.assertEqual(m.dag()[0, 0], 1 - 2j)
        self.assertEqual(m.dag().dag(), m)

    def test_elementwise_shape_mismatch(self):
        with self.assertRaises(ShapeMismatchError) as ctx:
            Tensor.basis("0") + Tensor.basis("00")
        self.assertEqual(ctx.exception.lhs, (2, 1))
        self.assertEqual(ctx.exception.rhs, (4, 1))

    def test_division(self):
        t = Tensor.basis("1") / 2
        np.testing.assert_allclose(t.data, column(0, 0.5))
        with self.assertRaises(DivisionByZeroError):
            Tensor.basis("1") / 0

    def test_matmul_and_proj(self):
        p = Tensor.basis("1").proj()
        np.testing.assert_allclose(p.data, [[0, 0], [0, 1]])
        np.testing.assert_allclose(p.matmul(Tensor.basis("1")).data, column(0, 1))
        with self.assertRaises(ShapeMismatchError):
            Tensor.basis("1").matmul(Tensor.basis("1"))

    def test_data_transfer(self):
        t = Tensor([[1 + 1j, 2], [3, -4j]])
        shape, pairs = t.to_data()
        self.assertEqual(shape, (2, 2))
        self.assertEqual(pairs, [(1.0, 1.0), (2.0, 0.0), (3.0, 0.0), (0.0, -4.0)])
        self.assertEqual(Tensor.from_data(shape, pairs), t)

    def test_render_and_format_state(self):
        t = Tensor.basis("1") * 3
        self.assertEqual(t.render(), "0+0i\n3+0i")
        self.assertEqual(Tensor.basis("10").format_state(), "1.000|10⟩")


# -------------------------------------------------------------------
# Lexer
# -------------------------------------------------------------------
class TestLexer(unittest.TestCase):
    def test_ket_and_bra(self):
        K = TokenKind
        self.assertEqual(kinds("|0>"), [K.PIPE, K.BITSTRING, K.RANGLE, K.EOF])
        self.assertEqual(kinds("<01|"), [K.LANGLE, K.BITSTRING, K.PIPE, K.EOF])
        self.assertEqual(
            kinds("<0|1>"),
            [K.LANGLE, K.BITSTRING, K.PIPE, K.BITSTRING, K.RANGLE, K.EOF],
        )

    def test_whitespace_inside_ket(self):
        toks = tokenize("|  10 >")
        self.assertEqual(toks[1].kind, TokenKind.BITSTRING)
        self.assertEqual(toks[1].text, "10")
        self.assertEqual(toks[1].offset, 3)

    def test_digits_outside_basis_are_numbers(self):
        K = TokenKind
        self.assertEqual(kinds("| 1 |"), [K.PIPE, K.NUMBER, K.PIPE, K.EOF])
        self.assertEqual(kinds("|10.5|"), [K.PIPE, K.NUMBER, K.PIPE, K.EOF])
        self.assertEqual(kinds("|2>"), [K.PIPE, K.NUMBER, K.RANGLE, K.EOF])

    def test_numbers(self):
        for text in ("12", "0.5", ".5", "3.", "1e-3", "2.5E+2"):
            toks = tokenize(text)
            self.assertEqual(toks[0].kind, TokenKind.NUMBER, text)
            self.assertEqual(toks[0].text, text)

    def test_operators(self):
        K = TokenKind
        self.assertEqual(
            kinds("(|0>' x 2 * 3 / 4 - 5 + 6)"),
            [K.LPAREN, K.PIPE, K.BITSTRING, K.RANGLE, K.QUOTE, K.KRON, K.NUMBER,
             K.STAR, K.NUMBER, K.SLASH, K.NUMBER, K.MINUS, K.NUMBER, K.PLUS,
             K.NUMBER, K.RPAREN, K.EOF],
        )

    def test_dot_operator(self):
        K = TokenKind
        self.assertEqual(
            kinds("<1| . |0>"),
            [K.LANGLE, K.BITSTRING, K.PIPE, K.DOT, K.PIPE, K.BITSTRING, K.RANGLE, K.EOF],
        )
        self.assertEqual(kinds("<0|.|0>")[3], K.DOT)
        self.assertEqual(kinds("2 . .5"), [K.NUMBER, K.DOT, K.NUMBER, K.EOF])

    def test_hadamard_label_vs_operator(self):
        toks = tokenize("|+> + |->")
        self.assertEqual(
            [(t.kind, t.text) for t in toks[:4]],
            [(TokenKind.PIPE, "|"), (TokenKind.BITSTRING, "+"),
             (TokenKind.RANGLE, ">"), (TokenKind.PLUS, "+")],
        )
        self.assertEqual(toks[5].text, "-")
        self.assertEqual(toks[5].kind, TokenKind.BITSTRING)

    def test_unrecognized_character(self):
        with self.assertRaises(LexError) as ctx:
            tokenize("|0> & |1>")
        self.assertEqual(ctx.exception.offset, 4)
        with self.assertRaises(LexError):
            tokenize("2i")

    def test_eof_offset(self):
        toks = tokenize("3 |0>")
        self.assertEqual(toks[-1].kind, TokenKind.EOF)
        self.assertEqual(toks[-1].offset, 5)
        self.assertEqual(toks[1].offset, 2)


# -------------------------------------------------------------------
# Parser
# -------------------------------------------------------------------
def J(left, right):
    return BinOpASTNode(BinOpKind.JUXTAPOSE, left, right)


class TestParser(unittest.TestCase):
    def test_primaries(self):
        self.assertEqual(parse("|01>"), KetASTNode("01"))
        self.assertEqual(parse("<1|"), ConjTransposeASTNode(KetASTNode("1")))
        self.assertEqual(parse("2.5"), ScalarASTNode(2.5))
        self.assertEqual(parse("(|0>)"), GroupASTNode(KetASTNode("0")))
        self.assertEqual(parse("| |0> |"), NormASTNode(KetASTNode("0")))

    def test_juxtaposition(self):
        self.assertEqual(parse("3|0>"), J(ScalarASTNode(3), KetASTNode("0")))
        self.assertEqual(parse("|1><0|"), J(KetASTNode("1"), bra("0")))
        self.assertEqual(parse("3 * |0>"), parse("3|0>"))
        self.assertEqual(parse("|0>|1>"), J(KetASTNode("0"), KetASTNode("1")))

    def test_shared_bar_inner_product(self):
        self.assertEqual(parse("<0|1>"), J(bra("0"), KetASTNode("1")))
        self.assertEqual(parse("<0|1>"), parse("<0| |1>"))
        self.assertEqual(
            parse("<0|1>'"),
            ConjTransposeASTNode(J(bra("0"), KetASTNode("1"))),
        )

    def test_precedence(self):
        k0, k1 = KetASTNode("0"), KetASTNode("1")
        self.assertEqual(
            parse("3|0> x |1>"),
            J(ScalarASTNode(3), BinOpASTNode(BinOpKind.KRON, k0, k1)),
        )
        self.assertEqual(
            parse("|0> / 2 x |1>"),
            BinOpASTNode(BinOpKind.KRON, BinOpASTNode(BinOpKind.DIV, k0, ScalarASTNode(2)), k1),
        )
        self.assertEqual(
            parse("|0> + 2|1>"),
            BinOpASTNode(BinOpKind.ADD, k0, J(ScalarASTNode(2), k1)),
        )
        self.assertEqual(
            parse("|0> - |1> - |0>"),
            BinOpASTNode(BinOpKind.SUB, BinOpASTNode(BinOpKind.SUB, k0, k1), k0),
        )
        self.assertEqual(parse("-|0>'"), NegASTNode(ConjTransposeASTNode(k0)))
        self.assertEqual(parse("|0>''"), ConjTransposeASTNode(ConjTransposeASTNode(k0)))

    def test_norm_disambiguation(self):
        self.assertEqual(
            parse("(|0> + |1>) / | |0> + |1> |"),
            BinOpASTNode(
                BinOpKind.DIV,
                GroupASTNode(BinOpASTNode(BinOpKind.ADD, KetASTNode("0"), KetASTNode("1"))),
                NormASTNode(BinOpASTNode(BinOpKind.ADD, KetASTNode("0"), KetASTNode("1"))),
            ),
        )
        self.assertEqual(parse("||1>|"), NormASTNode(KetASTNode("1")))
        self.assertEqual(parse("|<1||"), NormASTNode(bra("1")))
        self.assertEqual(parse("| 1 |"), NormASTNode(ScalarASTNode(1)))
        self.assertEqual(
            parse("2 | |0> |"),
            J(ScalarASTNode(2), NormASTNode(KetASTNode("0"))),
        )

    def test_offsets(self):
        node = parse("3 + |01>")
        self.assertEqual(node.offset, 0)
        self.assertEqual(node.right.offset, 4)

    def test_errors(self):
        cases = {
            "": 0,
            "(|0>": 4,
            "|0>)": 3,
            "()": 1,
            "|0>-": 4,
            "|0>/|0>*": 8,
            "<0|-": 4,
            "| |0>": 5,
        }
        for text, offset in cases.items():
            with self.assertRaises(ParseError, msg=text) as ctx:
                parse(text)
            self.assertEqual(ctx.exception.offset, offset, text)

    def test_malformed_bitstring(self):
        with self.assertRaises(ParseError) as ctx:
            parse("|012>")
        self.assertIn("bit-string", ctx.exception.expected)
        self.assertEqual(ctx.exception.offset, 1)

    def test_unmatched_paren_reports_expected(self):
        with self.assertRaises(ParseError) as ctx:
            parse("(|0>")
        self.assertEqual(ctx.exception.expected, "')'")
        self.assertEqual(ctx.exception.found, "end of input")


# -------------------------------------------------------------------
# Evaluator
# -------------------------------------------------------------------
class TestEvaluator(unittest.TestCase):
    def assertTensor(self, text, expected, shape=None):
        tensor = interpret(text)
        expected = np.asarray(expected, dtype=complex)
        if shape is not None:
            self.assertEqual(tensor.shape, shape, text)
        np.testing.assert_allclose(tensor.data, expected.reshape(tensor.shape), atol=1e-12)

    # concrete scenarios
    def test_plus_state(self):
        self.assertTensor("(|0> + |1>) / | |0> + |1> |", column(SQRT_HALF, SQRT_HALF), (2, 1))
        self.assertEqual(
            interpret("(|0> + |1>) / | |0> + |1> |").render(),
            "0.7071067811865475+0i\n0.7071067811865475+0i",
        )

    def test_minus_state(self):
        self.assertTensor("(|0> - |1>) / | |0> - |1> |", column(SQRT_HALF, -SQRT_HALF), (2, 1))

    def test_inner_product(self):
        value = evaluate(parse("<0|1>"))
        self.assertIs(value.kind, Kind.SCALAR)
        self.assertEqual(value.tensor.item(), 0)
        for a, b in product(["00", "01", "10", "11"], repeat=2):
            self.assertEqual(interpret(f"<{a}|{b}>").item(), 1 if a == b else 0)

    def test_outer_product(self):
        value = evaluate(parse("|1><0|"))
        self.assertIs(value.kind, Kind.MATRIX)
        self.assertTensor("|1><0|", [[0, 0], [1, 0]], (2, 2))

    def test_scaling(self):
        self.assertTensor("3|0>", column(3, 0), (2, 1))
        self.assertTensor("|0>3", column(3, 0), (2, 1))
        self.assertTensor("2 3 |1>", column(0, 6), (2, 1))

    def test_adjacent_kets_fail(self):
        with self.assertRaises(InvalidOperandError) as ctx:
            interpret("|0>|1>")
        self.assertEqual(ctx.exception.kind, "InvalidOperand")
        with self.assertRaises(InvalidOperandError):
            interpret("<0| <1|")
        with self.assertRaises(InvalidOperandError):
            interpret("|0><0| |1><1|")

    # properties
    def test_register_equals_kronecker(self):
        self.assertEqual(interpret("|01>"), interpret("|0> x |1>"))
        self.assertEqual(interpret("|110>"), interpret("|1> x |1> x |0>"))
        self.assertEqual(interpret("(|1> x |1>) x |0>"), interpret("|1> x (|1> x |0>)"))
        self.assertTrue(interpret("|+->").allclose(interpret("|+> x |->")))

    def test_kronecker_bilinear(self):
        lhs = interpret("(2|0> + |1>) x |1>")
        rhs = interpret("2 (|0> x |1>) + |1> x |1>")
        self.assertTrue(lhs.allclose(rhs))

    def test_kronecker_kinds(self):
        self.assertIs(evaluate(parse("|0> x |1>")).kind, Kind.KET)
        self.assertIs(evaluate(parse("<0| x <1|")).kind, Kind.BRA)
        self.assertIs(evaluate(parse("|0> x <1|")).kind, Kind.MATRIX)

    def test_norm(self):
        self.assertAlmostEqual(interpret("||1>|").item(), 1)
        self.assertAlmostEqual(interpret("| 3|+> |").item(), 3)
        self.assertAlmostEqual(interpret("|-2 |0>|").item(), 2)
        self.assertAlmostEqual(interpret("||1>| - |<1||").item(), 0)
        self.assertAlmostEqual(interpret("| |0> + |1> |").item(), np.sqrt(2))
        norm = interpret("| |0> - 2|1> |").item()
        self.assertEqual(norm.imag, 0)
        self.assertGreaterEqual(norm.real, 0)

    def test_norm_of_matrix_fails(self):
        with self.assertRaises(DimensionMismatchError):
            interpret("| |0><1| |")

    def test_conj_transpose(self):
        self.assertTensor("|0>' - <0|", [[0, 0]], (1, 2))
        self.assertTensor("<0|' - |0>", column(0, 0), (2, 1))
        self.assertEqual(interpret("(|0> + 2|1>)''"), interpret("|0> + 2|1>"))
        self.assertIs(evaluate(parse("|0>'")).kind, Kind.BRA)
        self.assertIs(evaluate(parse("<0|'")).kind, Kind.KET)
        self.assertIs(evaluate(parse("(|0><1|)'")).kind, Kind.MATRIX)
        self.assertTensor("(|0><1|)'", [[0, 0], [1, 0]], (2, 2))

    def test_hadamard_label_products(self):
        self.assertAlmostEqual(interpret("<+|+>").item(), 1)
        self.assertAlmostEqual(interpret("<-|->").item(), 1)
        self.assertAlmostEqual(interpret("<+|->").item(), (1 - 1j) / 2)
        self.assertAlmostEqual(interpret("<-|1>").item(), 1j * SQRT_HALF)

    def test_minus_label_dagger_conjugates(self):
        value = evaluate(parse("(|->)'"))
        self.assertIs(value.kind, Kind.BRA)
        np.testing.assert_allclose(value.tensor.data, [[SQRT_HALF, 1j * SQRT_HALF]])
        self.assertEqual(interpret("(|->)'"), interpret("<-|"))

    def test_dot_is_explicit_juxtaposition(self):
        self.assertEqual(interpret("<0| . |1>"), interpret("<0|1>"))
        self.assertEqual(interpret("<1| . |1>").item(), 1)
        self.assertTensor("|0> . <1|", [[0, 1], [0, 0]], (2, 2))
        self.assertTensor("2 . |1>", column(0, 2), (2, 1))
        with self.assertRaises(ParseError):
            interpret("|0> . ")

    def test_long_chains(self):
        self.assertEqual(interpret(" + ".join(["1"] * 1000)).item(), 1000)
        self.assertTensor(" + ".join(["|1>"] * 1000), column(0, 1000))
        self.assertEqual(interpret(" ".join(["<0|0>"] * 1000)).item(), 1)

    def test_nesting_limit(self):
        depth = MAX_NESTING_DEPTH
        self.assertEqual(interpret("(" * depth + "|0>" + ")" * depth), Tensor.basis("0"))
        self.assertEqual(interpret("-" * depth + "2").item(), 2)
        with self.assertRaises(ParseError) as ctx:
            interpret("(" * 125 + "1" + ")" * 125)
        self.assertEqual(ctx.exception.offset, depth)
        with self.assertRaises(ParseError) as ctx:
            interpret("-" * 125 + "1")
        self.assertEqual(ctx.exception.offset, depth)

    def test_tensor_size_limit(self):
        bits = MAX_REGISTER_BITS
        extra = (MAX_TENSOR_ENTRIES >> bits).bit_length()
        with self.assertRaises(DimensionMismatchError) as ctx:
            interpret("|" + "0" * bits + "> x |" + "0" * extra + ">")
        self.assertEqual(ctx.exception.kind, "DimensionMismatch")
        with self.assertRaises(DimensionMismatchError):
            interpret("|" + "0" * bits + "><" + "0" * bits + "|")

    def test_addition_kinds(self):
        value = evaluate(parse("|0><0| + |1><1|"))
        self.assertIs(value.kind, Kind.MATRIX)
        np.testing.assert_allclose(value.tensor.data, np.eye(2))
        self.assertIs(evaluate(parse("|0> + |1>")).kind, Kind.KET)

    def test_shape_mismatch(self):
        with self.assertRaises(ShapeMismatchError) as ctx:
            interpret("|0> + |00>")
        self.assertEqual(ctx.exception.lhs, (2, 1))
        self.assertEqual(ctx.exception.rhs, (4, 1))
        self.assertEqual(ctx.exception.kind, "ShapeMismatch")
        with self.assertRaises(ShapeMismatchError):
            interpret("<0|00>")
        with self.assertRaises(ShapeMismatchError):
            interpret("|0> - <0|")

    def test_division(self):
        self.assertTensor("|1> / 4", column(0, 0.25))
        with self.assertRaises(DivisionByZeroError) as ctx:
            interpret("|0> / <0|1>")
        self.assertEqual(ctx.exception.kind, "DivisionByZero")
        with self.assertRaises(DivisionByZeroError):
            interpret("|0> / (2 - 2)")
        with self.assertRaises(InvalidOperandError):
            interpret("|0> / |0>")

    def test_scalar_arithmetic(self):
        self.assertEqual(interpret("2 + 2").item(), 4)
        self.assertEqual(interpret("(2 + 2) * 3").item(), 12)
        self.assertEqual(interpret("2 + 2 * 3").item(), 8)
        self.assertEqual(interpret("3(3)").item(), 9)
        self.assertEqual(interpret("2 / 2").item(), 1)
        self.assertEqual(interpret("-3").item(), -3)

    def test_register_limit_reports_offset(self):
        with self.assertRaises(DimensionMismatchError) as ctx:
            interpret("2 |" + "0" * (MAX_REGISTER_BITS + 1) + ">")
        self.assertEqual(ctx.exception.offset, 2)

    def test_evaluate_tensor(self):
        tensor, shape = evaluate_tensor(parse("(|1><0|) x |1>"))
        self.assertEqual(shape, (4, 2))
        self.assertEqual(tensor.shape, shape)

    def test_error_family(self):
        for text in ("|0> ? 1", "(|0>", "|0>|1>"):
            with self.assertRaises(DiracError):
                interpret(text)
        self.assertTrue(issubclass(EvalError, ValueError))
        self.assertTrue(issubclass(DivisionByZeroError, ZeroDivisionError))


# -------------------------------------------------------------------
# Console
# -------------------------------------------------------------------
class TestConsole(unittest.TestCase):
    def test_run_stream(self):
        out = io.StringIO()
        failures = cli.run_stream(["3|0>\n", "\n", "|0>|1>\n", "<0|0>"], out)
        self.assertEqual(failures, 1)
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[:2], ["3+0i", "0+0i"])
        self.assertTrue(lines[2].startswith("Cannot interpret '|0>|1>' as dirac notation:"))
        self.assertEqual(lines[3], "1+0i")

    def test_run_stream_survives_deep_nesting(self):
        out = io.StringIO()
        deep = "(" * 125 + "1" + ")" * 125
        failures = cli.run_stream([deep, "<0|0>"], out)
        self.assertEqual(failures, 1)
        lines = out.getvalue().splitlines()
        self.assertTrue(lines[0].startswith("Cannot interpret"))
        self.assertIn("levels of nesting", lines[0])
        self.assertEqual(lines[1], "1+0i")

    def test_color_toggle(self):
        self.assertEqual(cli.color_text("x", "red", enabled=False), "x")
        self.assertNotEqual(cli.color_text("x", "red"), "x")
        self.assertEqual(cli.DiracConsole(color=False).paint(">> ", "yellow"), ">> ")

    def test_console_commands(self):
        console = cli.DiracConsole()
        self.assertEqual(console.command("SHAPE"), "shape display on")
        self.assertEqual(console.evaluate("|1>"), "shape 2x1\n0+0i\n1+0i")
        self.assertEqual(console.command("BASIS"), "basis display on")
        self.assertEqual(console.evaluate("|1>").splitlines()[-1], "1.000|1⟩")
        self.assertIn("[1] |1>", console.command("HISTORY"))
        self.assertIsNone(console.command("|0>"))

    def test_main_expression(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            status = main.main(["--no-color", "-e", "<0|0>"])
        self.assertEqual(status, 0)
        self.assertEqual(buf.getvalue(), "1+0i\n")
        self.assertTrue(cli.DiracConsole().color)
        self.assertNotEqual(cli.color_text("x", "red"), "x")

    def test_main_expression_error(self):
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            status = main.main(["--no-color", "-e", "|0"])
        self.assertEqual(status, 1)
        self.assertIn("Cannot interpret '|0'", err.getvalue())


if __name__ == "__main__":
    unittest.main()
