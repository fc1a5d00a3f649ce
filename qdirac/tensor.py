# tensor.py

"""
Dense complex tensor kernel.

A Tensor is a 2-D complex128 array with an explicit (rows, cols) shape.
Kets are (n, 1) columns, bras are (1, n) rows, outer products give general
matrices and scalars are 1x1. Tensors are values: the constructor copies
its input, the backing array is read-only and every operation returns a
new Tensor.
"""

import math
import os

import numpy as np

from qdirac.errors import (
    DimensionMismatchError,
    DivisionByZeroError,
    ShapeMismatchError,
)
from qdirac.scalar import as_complex, format_complex, is_zero

# Longest basis label a ket literal may have; the dense vector has 2**n
# entries.
MAX_REGISTER_BITS = int(os.environ.get("QDIRAC_MAX_REGISTER_BITS", "16"))

# Largest tensor a kronecker or outer product may produce.
MAX_TENSOR_ENTRIES = int(os.environ.get("QDIRAC_MAX_TENSOR_ENTRIES", str(2 ** 20)))

# Amplitudes below this are hidden by format_state().
DISPLAY_TOLERANCE = 1e-12

# Single-qubit basis columns, keyed by their label character.
BASIS_VECTORS = {
    "0": np.array([1, 0], dtype=complex),
    "1": np.array([0, 1], dtype=complex),
    "+": np.array([1, 1], dtype=complex) / np.sqrt(2),
    "-": np.array([1, -1j], dtype=complex) / np.sqrt(2),
}


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


class Tensor:
    def __init__(self, data, shape=None):
        """
        Build a tensor from anything numpy can turn into a complex array.

        A 1-D input without an explicit shape becomes a column vector; with
        an explicit shape the input is reshaped row-major, and its size must
        equal rows * cols.
        """
        arr = np.array(data, dtype=complex, copy=True)
        if shape is None:
            if arr.ndim == 0:
                shape = (1, 1)
            elif arr.ndim == 1:
                shape = (arr.shape[0], 1)
            elif arr.ndim == 2:
                shape = arr.shape
            else:
                raise ValueError(f"Tensor data must be at most 2-D, got {arr.ndim}-D")
        rows, cols = (int(n) for n in shape)
        if rows < 1 or cols < 1:
            raise ValueError(f"Invalid tensor shape {(rows, cols)}")
        if arr.size != rows * cols:
            raise ValueError(
                f"Tensor data has {arr.size} entries, shape {(rows, cols)} needs {rows * cols}"
            )
        self._data = _frozen(arr.reshape(rows, cols))

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def scalar(cls, value):
        return cls([[as_complex(value)]])

    @classmethod
    def basis(cls, label: str):
        """
        Column vector for a basis label such as "0", "101" or "+-".

        A pure 0/1 label is the one-hot vector of dimension 2**n with its 1 at
        the label read as a binary numeral (most significant bit first);
        labels containing '+' or '-' are the kronecker product of the
        single-character states, which agrees with the one-hot rule on 0/1.
        """
        if not label:
            raise ValueError("Basis label must not be empty")
        if len(label) > MAX_REGISTER_BITS:
            raise DimensionMismatchError(
                f"register |{label}> has {len(label)} qubits, "
                f"limit is {MAX_REGISTER_BITS} (2**{len(label)} entries)"
            )
        unknown = set(label) - set(BASIS_VECTORS)
        if unknown:
            raise ValueError(
                f"Cannot decode {''.join(sorted(unknown))!r} into a qubit state: "
                "only 0, 1, + and - are supported"
            )
        if set(label) <= {"0", "1"}:
            vec = np.zeros(2 ** len(label), dtype=complex)
            vec[int(label, 2)] = 1.0
            return cls(vec)
        vec = BASIS_VECTORS[label[0]]
        for c in label[1:]:
            vec = np.kron(vec, BASIS_VECTORS[c])
        return cls(vec)

    @classmethod
    def from_data(cls, shape, pairs):
        """Inverse of to_data(): (rows, cols) plus row-major (re, im) pairs."""
        return cls([complex(re, im) for re, im in pairs], shape)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def shape(self):
        return self._data.shape

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def size(self) -> int:
        return self._data.size

    def item(self) -> complex:
        if self.shape != (1, 1):
            raise ValueError(f"item() needs a 1x1 tensor, got shape {self.shape}")
        return complex(self._data[0, 0])

    def __getitem__(self, index):
        i, j = index
        return complex(self._data[i, j])

    def __iter__(self):
        """Entries in row-major order."""
        return (complex(z) for z in self._data.ravel())

    def to_data(self):
        return self.shape, [(z.real, z.imag) for z in self]

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def _check_same_shape(self, other, op):
        if self.shape != other.shape:
            raise ShapeMismatchError(
                self.shape, other.shape,
                f"cannot {op} tensors of shape {self.shape} and {other.shape}",
            )

    def __add__(self, other):
        if not isinstance(other, Tensor):
            return NotImplemented
        self._check_same_shape(other, "add")
        return Tensor(self._data + other._data)

    def __sub__(self, other):
        if not isinstance(other, Tensor):
            return NotImplemented
        self._check_same_shape(other, "subtract")
        return Tensor(self._data - other._data)

    def __neg__(self):
        return Tensor(-self._data)

    def scale(self, factor):
        return Tensor(self._data * as_complex(factor))

    def __mul__(self, factor):
        if isinstance(factor, Tensor):
            return NotImplemented
        return self.scale(factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        if isinstance(divisor, Tensor):
            divisor = divisor.item()
        if is_zero(divisor):
            raise DivisionByZeroError("division by zero scalar")
        return Tensor(self._data / as_complex(divisor))

    def matmul(self, other):
        """Standard matrix product; inner dimensions must agree."""
        if self.cols != other.rows:
            raise ShapeMismatchError(
                self.shape, other.shape,
                f"cannot multiply {self.shape} by {other.shape}",
            )
        return Tensor(self._data @ other._data)

    __matmul__ = matmul

    def kron(self, other):
        """Kronecker product, entry (i1*r2+i2, j1*c2+j2) = self[i1,j1]*other[i2,j2]."""
        return Tensor(np.kron(self._data, other._data))

    def dag(self):
        """Conjugate transpose."""
        return Tensor(self._data.conj().T)

    def inner(self, other) -> complex:
        """
        Sum of products of corresponding entries, with no implicit
        conjugation: a bra already carries conjugated amplitudes.
        """
        if self.size != other.size:
            raise ShapeMismatchError(
                self.shape, other.shape,
                f"inner product needs equal dimensions, got {self.shape} and {other.shape}",
            )
        return complex(np.sum(self._data.ravel() * other._data.ravel()))

    def norm(self) -> float:
        """Frobenius norm; for a vector this is the usual 2-norm."""
        return float(np.linalg.norm(self._data))

    def proj(self):
        """Projector |v><v| for a column vector v."""
        return self.matmul(self.dag())

    # ------------------------------------------------------------------
    # Comparison and display
    # ------------------------------------------------------------------
    def __eq__(self, other):
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def allclose(self, other, atol=1e-12) -> bool:
        return self.shape == other.shape and bool(np.allclose(self._data, other._data, atol=atol))

    def render(self) -> str:
        """One element per line, row-major, as re±|im|i."""
        return "\n".join(format_complex(z) for z in self)

    def format_state(self, tol=DISPLAY_TOLERANCE) -> str:
        """
        Expand a column vector over the computational basis, e.g.
        ``0.707|00⟩ + 0.707|11⟩``. Non-vectors fall back to render().
        """
        if self.cols != 1 or self.rows & (self.rows - 1):
            return self.render()
        n = int(math.log2(self.rows))
        terms = []
        for k, amp in enumerate(self):
            if abs(amp) < tol:
                continue
            bits = format(k, f"0{n}b") if n else ""
            if abs(amp.imag) < tol:
                coeff = f"{amp.real:.3f}"
            else:
                coeff = f"({amp.real:.3f}{'+' if amp.imag >= 0 else '-'}{abs(amp.imag):.3f}j)"
            terms.append(f"{coeff}|{bits}⟩")
        return " + ".join(terms) if terms else "0"

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f"Tensor(shape={self.shape}, data={[format_complex(z) for z in self]})"
