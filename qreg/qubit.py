# qreg/qubit.py
from dataclasses import dataclass
from typing import List
import numpy as np
from . import sampling
from .errors import ZeroNormState

def normalized(vec: np.ndarray) -> np.ndarray:
    """Return vec scaled to unit Euclidean norm."""
    nrm = float(np.linalg.norm(vec))
    if nrm == 0.0:
        raise ZeroNormState("Zero norm state")
    return (vec / nrm).astype(vec.dtype, copy=False)

@dataclass(eq=False)
class Qubit:
    amps: np.ndarray  # shape (2,), |amps[0]|^2 + |amps[1]|^2 == 1

    def __post_init__(self):
        amps = np.asarray(self.amps)
        if not np.iscomplexobj(amps):
            amps = amps.astype(np.complex64)
        if amps.shape != (2,):
            raise ValueError(f"a qubit has exactly two amplitudes, got shape {amps.shape}")
        self.amps = normalized(amps)

    @staticmethod
    def zero(dtype=np.complex64) -> "Qubit":
        return Qubit(np.array([1, 0], dtype=dtype))

    @staticmethod
    def one(dtype=np.complex64) -> "Qubit":
        return Qubit(np.array([0, 1], dtype=dtype))

    @staticmethod
    def from_amplitudes(a0: complex, a1: complex, dtype=np.complex64) -> "Qubit":
        return Qubit(np.array([a0, a1], dtype=dtype))

    @staticmethod
    def from_int(j: int, num_qubits: int, dtype=np.complex64) -> List["Qubit"]:
        """
        Basis qubits spelling |j> in binary, most significant bit first, so that
        composing them in order into a register yields the basis state j.
        """
        if not (0 <= j < (1 << num_qubits)):
            raise ValueError(f"basis index {j} out of range for {num_qubits} qubits")
        return [Qubit.one(dtype) if (j >> (num_qubits - 1 - k)) & 1 else Qubit.zero(dtype)
                for k in range(num_qubits)]

    @property
    def a0(self):
        return self.amps[0]

    @property
    def a1(self):
        return self.amps[1]

    @property
    def dtype(self):
        return self.amps.dtype

    def allclose(self, other: "Qubit", atol=1e-6) -> bool:
        return np.allclose(self.amps, other.amps, atol=atol, rtol=0)

    def measure(self, rng=None, rule: str = sampling.MAGNITUDE) -> int:
        """Collapse to |0> or |1> and return the classical bit."""
        bit = sampling.sample_index(sampling.weights(self.amps, rule), sampling.draw(rng))
        self.amps = np.zeros(2, dtype=self.dtype)
        self.amps[bit] = 1
        return bit

    def __repr__(self) -> str:
        return f"Qubit({complex(self.a0):.3f}|0> + {complex(self.a1):.3f}|1>)"
