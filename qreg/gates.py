# qreg/gates.py
from dataclasses import dataclass
import numpy as np
from .matrix import ComplexMatrix
from .errors import InvalidGateSize

# Qubit 0 is the leftmost tensor factor (most significant bit of the basis
# index), matching QuantumRegister.add.

@dataclass(frozen=True, eq=False)
class Gate:
    matrix: ComplexMatrix
    num_qubits: int

    def __post_init__(self):
        if self.matrix.size != 1 << self.num_qubits:
            raise ValueError(f"{self.matrix.size}x{self.matrix.size} matrix cannot act on {self.num_qubits} qubits")
        # gates are immutable: keep a private read-only copy
        object.__setattr__(self, "matrix", self.matrix.copy().freeze())

    @staticmethod
    def custom(matrix: ComplexMatrix) -> "Gate":
        return Gate(matrix, matrix.num_qubits)

    @property
    def dimension(self) -> int:
        return self.matrix.size

    def as_numpy(self) -> np.ndarray:
        return self.matrix.as_numpy()

    def allclose(self, other: "Gate", atol=1e-6) -> bool:
        return self.matrix.allclose(other.matrix, atol=atol)

# ---------------- fixed 2x2 ----------------

def I(dtype=np.complex64) -> Gate:
    return Gate(ComplexMatrix.identity(2, dtype=dtype), 1)

def identity(num_qubits: int, dtype=np.complex64) -> Gate:
    return Gate(ComplexMatrix.identity(1 << num_qubits, dtype=dtype), num_qubits)

def X(dtype=np.complex64) -> Gate:
    return Gate(ComplexMatrix.from_rows([[0, 1],
                                         [1, 0]], dtype=dtype), 1)

def Y(dtype=np.complex64) -> Gate:
    return Gate(ComplexMatrix.from_rows([[0, -1j],
                                         [1j, 0]], dtype=dtype), 1)

def Z(dtype=np.complex64) -> Gate:
    return Gate(ComplexMatrix.from_rows([[1, 0],
                                         [0, -1]], dtype=dtype), 1)

def H(dtype=np.complex64) -> Gate:
    s = np.sqrt(0.5)
    return Gate(ComplexMatrix.from_rows([[s, s],
                                         [s, -s]], dtype=dtype), 1)

def phase(theta: float, dtype=np.complex64) -> Gate:
    """diag(1, e^{2*pi*i*theta}); theta is a fraction of a full turn."""
    return Gate(ComplexMatrix.from_rows([[1, 0],
                                         [0, np.exp(2j * np.pi * theta)]], dtype=dtype), 1)

def T(dtype=np.complex64) -> Gate:
    return phase(0.125, dtype=dtype)

def CNOT(dtype=np.complex64) -> Gate:
    # 4x4 in order 00,01,10,11 (control is qubit 0, the left factor)
    mat = np.eye(4, dtype=dtype)
    # swap |10> <-> |11>
    mat[2,2] = 0; mat[3,3] = 0
    mat[2,3] = 1; mat[3,2] = 1
    return Gate(ComplexMatrix(mat), 2)

# ---------------- synthesised n-qubit gates ----------------

def _check_index(k: int, num_qubits: int):
    if not (0 <= k < num_qubits):
        raise ValueError(f"qubit index {k} out of range for {num_qubits} qubits")

def _check_single(gate: Gate):
    if gate.dimension != 2:
        raise InvalidGateSize(f"expected a 2x2 gate, got {gate.dimension}x{gate.dimension}")

def multi_controlled(control: int, target: int, num_qubits: int, gate: Gate) -> Gate:
    """
    Apply `gate` to `target` iff `control` is |1>, on a num_qubits register.

    Built as |0><0|_c ⊗ I_t ⊗ I... + |1><1|_c ⊗ U_t ⊗ I..., with each factor
    placed at its qubit position.
    """
    if control == target:
        raise ValueError("control and target must differ")
    _check_index(control, num_qubits)
    _check_index(target, num_qubits)
    _check_single(gate)

    dtype = gate.matrix.dtype
    eye = ComplexMatrix.identity(2, dtype=dtype)
    proj0 = ComplexMatrix.from_rows([[1, 0], [0, 0]], dtype=dtype)
    proj1 = ComplexMatrix.from_rows([[0, 0], [0, 1]], dtype=dtype)
    inner = gate.matrix

    if control == 0:
        zero_branch, one_branch = proj0.copy(), proj1.copy()
    elif target == 0:
        zero_branch, one_branch = eye.copy(), inner.copy()
    else:
        zero_branch, one_branch = eye.copy(), eye.copy()

    for k in range(1, num_qubits):
        if k == control:
            zero_branch = zero_branch.tensor_product(proj0)
            one_branch = one_branch.tensor_product(proj1)
        elif k == target:
            zero_branch = zero_branch.tensor_product(eye)
            one_branch = one_branch.tensor_product(inner)
        else:
            zero_branch = zero_branch.tensor_product(eye)
            one_branch = one_branch.tensor_product(eye)

    return Gate(ComplexMatrix.add(zero_branch, one_branch), num_qubits)

def multi_cnot(control: int, target: int, num_qubits: int, dtype=np.complex64) -> Gate:
    return multi_controlled(control, target, num_qubits, X(dtype=dtype))

def single_qubit(target: int, num_qubits: int, gate: Gate) -> Gate:
    """Embed a 2x2 gate at `target`: I ⊗ ... ⊗ U ⊗ ... ⊗ I."""
    _check_single(gate)
    _check_index(target, num_qubits)
    eye = ComplexMatrix.identity(2, dtype=gate.matrix.dtype)
    out = gate.matrix.copy() if target == 0 else eye.copy()
    for k in range(1, num_qubits):
        out = out.tensor_product(gate.matrix if k == target else eye)
    return Gate(out, num_qubits)

def multi_h(num_qubits: int, dtype=np.complex64) -> Gate:
    """H on every qubit (H tensored with itself num_qubits - 1 times)."""
    if num_qubits < 1:
        raise ValueError("num_qubits must be at least 1")
    h = H(dtype=dtype).matrix
    out = h.copy()
    for _ in range(num_qubits - 1):
        out = out.tensor_product(h)
    return Gate(out, num_qubits)

def qft(num_qubits: int, dtype=np.complex64) -> Gate:
    """
    Quantum Fourier transform on num_qubits qubits.

    F[i, j] = w^(i*j) / sqrt(k) with k = 2^n and w = e^(2*pi*i/k). Each row is
    accumulated by repeated multiplication by w^i.
    """
    k = 1 << num_qubits
    ctype = np.dtype(dtype).type
    norm = ctype(1.0 / np.sqrt(k))
    mat = np.zeros((k, k), dtype=dtype)
    for i in range(k):
        step = ctype(np.exp(2j * np.pi * i / k))
        acc = step
        for j in range(k):
            if i == 0 or j == 0:
                mat[i, j] = norm
            else:
                mat[i, j] = acc * norm
                acc = acc * step
    return Gate(ComplexMatrix(mat), num_qubits)

def inverse_qft(num_qubits: int, dtype=np.complex64) -> Gate:
    m = qft(num_qubits, dtype=dtype).matrix.copy()
    m.conjugate_transpose()
    return Gate(m, num_qubits)
