# qreg/matrix.py
from dataclasses import dataclass
from typing import Sequence
import numpy as np
from . import backends
from .errors import DimensionMismatch

def _is_pow2(d: int) -> bool:
    return d > 0 and (d & (d - 1)) == 0

@dataclass(eq=False)
class ComplexMatrix:
    """Dense square complex matrix of size 2^k (an operator on k qubits)."""
    data: np.ndarray  # shape (2**k, 2**k), dtype complex64/128

    def __post_init__(self):
        # own the storage; callers keep no handle on it
        self.data = np.array(self.data)
        if not np.iscomplexobj(self.data):
            self.data = self.data.astype(np.complex64)
        if self.data.ndim != 2 or self.data.shape[0] != self.data.shape[1]:
            raise ValueError(f"matrix must be square, got shape {self.data.shape}")
        if not _is_pow2(self.data.shape[0]):
            raise ValueError(f"matrix size must be a power of two, got {self.data.shape[0]}")

    # ---------------- construction ----------------

    @staticmethod
    def zero(size: int, dtype=np.complex64) -> "ComplexMatrix":
        return ComplexMatrix(np.zeros((size, size), dtype=dtype))

    @staticmethod
    def identity(size: int, dtype=np.complex64) -> "ComplexMatrix":
        return ComplexMatrix(np.eye(size, dtype=dtype))

    @staticmethod
    def from_rows(rows: Sequence[Sequence[complex]], dtype=np.complex64) -> "ComplexMatrix":
        return ComplexMatrix(np.array(rows, dtype=dtype))

    # ---------------- properties ----------------

    @property
    def size(self) -> int:
        return self.data.shape[0]

    @property
    def num_qubits(self) -> int:
        return self.size.bit_length() - 1

    @property
    def dtype(self):
        return self.data.dtype

    def __getitem__(self, idx):
        return self.data[idx]

    def copy(self) -> "ComplexMatrix":
        return ComplexMatrix(self.data)

    def freeze(self) -> "ComplexMatrix":
        """Make the storage read-only; in-place operations then raise ValueError."""
        self.data.flags.writeable = False
        return self

    def _check_writeable(self):
        if not self.data.flags.writeable:
            raise ValueError("matrix is read-only (owned by a Gate); operate on a copy()")

    def as_numpy(self) -> np.ndarray:
        return self.data

    def allclose(self, other: "ComplexMatrix", atol=1e-6) -> bool:
        return self.size == other.size and np.allclose(self.data, other.data, atol=atol, rtol=0)

    def is_unitary(self, atol=1e-5) -> bool:
        prod = self.data.conj().T @ self.data
        return np.allclose(prod, np.eye(self.size), atol=atol, rtol=0)

    # ---------------- arithmetic ----------------

    def scalar_multiply(self, c: complex, backend=None) -> "ComplexMatrix":
        """Multiply every entry by c in place."""
        self._check_writeable()
        backends.load(backend).scale_inplace(self.data, self.dtype.type(c))
        return self

    def scalar_multiply_copy(self, c: complex, backend=None) -> "ComplexMatrix":
        return self.copy().scalar_multiply(c, backend=backend)

    def multiply(self, other: "ComplexMatrix", backend=None) -> "ComplexMatrix":
        """Matrix product self @ other."""
        if self.size != other.size:
            raise DimensionMismatch(f"cannot multiply {self.size}x{self.size} by {other.size}x{other.size}")
        out = np.zeros_like(self.data)
        backends.load(backend).matmul(self.data, other.data.astype(self.dtype, copy=False), out)
        return ComplexMatrix(out)

    @staticmethod
    def add(a: "ComplexMatrix", b: "ComplexMatrix", backend=None) -> "ComplexMatrix":
        if a.size != b.size:
            raise DimensionMismatch(f"cannot add {a.size}x{a.size} and {b.size}x{b.size}")
        out = np.zeros_like(a.data)
        backends.load(backend).add(a.data, b.data.astype(a.dtype, copy=False), out)
        return ComplexMatrix(out)

    def tensor_product(self, other: "ComplexMatrix", backend=None) -> "ComplexMatrix":
        """
        Kronecker product self ⊗ other. For self (p x p) and other (q x q) the
        result is pq x pq with C[i*q+k, j*q+l] = self[i,j] * other[k,l].
        """
        p, q = self.size, other.size
        out = np.zeros((p * q, p * q), dtype=self.dtype)
        backends.load(backend).kron(self.data, other.data.astype(self.dtype, copy=False), out)
        return ComplexMatrix(out)

    def conjugate_transpose(self, backend=None) -> "ComplexMatrix":
        """Replace self with its conjugate transpose (in place)."""
        self._check_writeable()
        backends.load(backend).conj_transpose_inplace(self.data)
        return self
