# qreg/register.py
import logging
from dataclasses import dataclass
from typing import List
import numpy as np
from . import backends, sampling
from .errors import DimensionMismatch
from .qubit import Qubit, normalized

logger = logging.getLogger(__name__)

@dataclass(eq=False)
class QuantumRegister:
    """
    Joint state of every qubit composed so far: a unit vector of length 2^n.

    Qubit 0 is the first qubit composed and the most significant bit of the
    basis index. Individual qubits are not retained once added; the state
    vector is the only source of truth.
    """
    psi: np.ndarray  # shape (2**n,), dtype complex64/128

    def __post_init__(self):
        psi = np.asarray(self.psi)
        if not np.iscomplexobj(psi):
            psi = psi.astype(np.complex64)
        N = psi.shape[0] if psi.ndim == 1 else 0
        if N == 0 or (N & (N - 1)) != 0:
            raise ValueError(f"state length must be a power of two, got shape {psi.shape}")
        self.psi = normalized(psi)

    # ---------------- construction ----------------

    @staticmethod
    def empty(dtype=np.complex64) -> "QuantumRegister":
        """Zero-qubit register; grow it with add()."""
        return QuantumRegister(np.ones(1, dtype=dtype))

    @staticmethod
    def from_qubit(qubit: Qubit) -> "QuantumRegister":
        return QuantumRegister(qubit.amps.copy())

    @staticmethod
    def from_int(index: int, size: int, dtype=np.complex64) -> "QuantumRegister":
        """Basis state |index> in a space of `size` (= 2^n) basis states."""
        if size <= 0 or (size & (size - 1)) != 0:
            raise ValueError(f"size must be a power of two, got {size}")
        if not (0 <= index < size):
            raise ValueError(f"basis index {index} out of range for size {size}")
        psi = np.zeros(size, dtype=dtype)
        psi[index] = 1.0 + 0.0j
        return QuantumRegister(psi)

    @staticmethod
    def from_vector(vec, dtype=np.complex64) -> "QuantumRegister":
        return QuantumRegister(np.array(vec, dtype=dtype))

    @staticmethod
    def uniform(size: int, dtype=np.complex64) -> "QuantumRegister":
        """Equal superposition over `size` basis states."""
        return QuantumRegister(np.ones(size, dtype=dtype))

    # ---------------- inspection ----------------

    @property
    def n(self) -> int:
        return self.psi.shape[0].bit_length() - 1

    @property
    def dtype(self):
        return self.psi.dtype

    def __len__(self) -> int:
        return self.psi.shape[0]

    def norm2(self) -> float:
        return float(np.vdot(self.psi, self.psi).real)

    def check_normalized(self, tol=1e-5):
        n2 = self.norm2()
        if not (abs(1.0 - n2) <= tol):
            raise AssertionError(f"Normalization failed: ||psi||^2={n2}")

    def probabilities(self) -> np.ndarray:
        return np.abs(self.psi) ** 2

    def copy(self) -> "QuantumRegister":
        return QuantumRegister(self.psi.copy())

    def as_numpy(self) -> np.ndarray:
        return self.psi

    # ---------------- evolution ----------------

    def add(self, qubit: Qubit, backend=None) -> "QuantumRegister":
        """Compose one more qubit: new[i] = old[i // 2] * qubit[i % 2]."""
        out = np.zeros(2 * self.psi.shape[0], dtype=self.dtype)
        backends.load(backend).kron_vec(self.psi, qubit.amps.astype(self.dtype, copy=False), out)
        self.psi = normalized(out)
        return self

    def apply(self, gate, backend=None) -> "QuantumRegister":
        """
        Replace the state with gate @ state (dense matrix-vector product).
        Accepts a Gate or a bare ComplexMatrix. On DimensionMismatch the state
        is left untouched.
        """
        matrix = getattr(gate, "matrix", gate)
        if matrix.size != self.psi.shape[0]:
            raise DimensionMismatch(
                f"{matrix.size}x{matrix.size} gate cannot act on a state of length {self.psi.shape[0]}")
        out = np.zeros_like(self.psi)
        backends.load(backend).matvec(matrix.data.astype(self.dtype, copy=False), self.psi, out)
        self.psi = normalized(out)
        return self

    # ---------------- measurement ----------------

    def peek(self, rng=None, rule: str = sampling.MAGNITUDE) -> int:
        """Sample an outcome index without collapsing the state."""
        return sampling.sample_index(sampling.weights(self.psi, rule), sampling.draw(rng))

    def measure(self, rng=None, rule: str = sampling.MAGNITUDE) -> int:
        """
        Sample an outcome index and collapse onto that basis vector.

        The default rule accumulates |amplitude| per basis state, so the
        masses need not sum to 1; pass rule="born" for |amplitude|^2.
        """
        idx = self.peek(rng=rng, rule=rule)
        psi = np.zeros_like(self.psi)
        psi[idx] = 1.0 + 0.0j
        self.psi = psi
        logger.debug("measured |%d> on %d qubit(s)", idx, self.n)
        return idx

    def qubit_norms(self, rule: str = sampling.MAGNITUDE, backend=None) -> List[Qubit]:
        """
        Marginal single-qubit amplitudes, one Qubit per position.

        For qubit i the index range is cut into blocks of len / 2^(i+1); basis
        states in even blocks feed amplitude 0 and odd blocks amplitude 1.
        Under "magnitude" the |a| are summed; under "born" the |a|^2 are summed
        and square-rooted. Phases are not recovered; display only.
        """
        sampling.check_rule(rule)
        n = self.n
        out = np.zeros((n, 2), dtype=np.float64)
        backends.load(backend).marginal_sums(self.psi, n, rule == sampling.BORN, out)
        if rule == sampling.BORN:
            out = np.sqrt(out)
        return [Qubit(out[i].astype(self.dtype)) for i in range(n)]
