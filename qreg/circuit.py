# qreg/circuit.py
import logging
from dataclasses import dataclass, field
from typing import List, NamedTuple
import numpy as np
from . import gates as G
from .errors import DimensionMismatch
from .gates import Gate
from .qubit import Qubit
from .register import QuantumRegister

logger = logging.getLogger(__name__)

class StepFailure(NamedTuple):
    index: int
    error: DimensionMismatch

@dataclass(eq=False)
class QuantumCircuit:
    n: int
    gates: List[Gate] = field(default_factory=list)
    dtype: type = np.complex64

    @staticmethod
    def empty(n: int, dtype=np.complex64) -> "QuantumCircuit":
        return QuantumCircuit(n, [], dtype)

    def __len__(self) -> int:
        return len(self.gates)

    def __iter__(self):
        return iter(self.gates)

    def add_gate(self, gate: Gate) -> "QuantumCircuit":
        if gate.num_qubits != self.n:
            logger.debug("appending %d-qubit gate to %d-qubit circuit", gate.num_qubits, self.n)
        self.gates.append(gate)
        return self

    # builders for the declared register size
    def h(self, k: int): return self.add_gate(G.single_qubit(k, self.n, G.H(self.dtype)))
    def x(self, k: int): return self.add_gate(G.single_qubit(k, self.n, G.X(self.dtype)))
    def y(self, k: int): return self.add_gate(G.single_qubit(k, self.n, G.Y(self.dtype)))
    def z(self, k: int): return self.add_gate(G.single_qubit(k, self.n, G.Z(self.dtype)))
    def t(self, k: int): return self.add_gate(G.single_qubit(k, self.n, G.T(self.dtype)))
    def phase(self, k: int, theta: float): return self.add_gate(G.single_qubit(k, self.n, G.phase(theta, self.dtype)))
    def cnot(self, c: int, t: int): return self.add_gate(G.multi_cnot(c, t, self.n, self.dtype))
    def controlled(self, c: int, t: int, gate: Gate): return self.add_gate(G.multi_controlled(c, t, self.n, gate))
    def h_all(self): return self.add_gate(G.multi_h(self.n, self.dtype))
    def qft(self): return self.add_gate(G.qft(self.n, self.dtype))
    def iqft(self): return self.add_gate(G.inverse_qft(self.n, self.dtype))

    def _step(self, i: int, register: QuantumRegister, backend, failures: List[StepFailure]):
        try:
            register.apply(self.gates[i], backend=backend)
        except DimensionMismatch as e:
            logger.warning("Error in applying gate %d: %s", i, e)
            failures.append(StepFailure(i, e))

    def run(self, register: QuantumRegister, backend=None, check_norm=True, check_norm_tol=1e-5) -> List[StepFailure]:
        """
        Apply every gate in order. A gate whose size does not match the
        register is reported and skipped; the remaining gates still run.
        """
        failures: List[StepFailure] = []
        for i in range(len(self.gates)):
            self._step(i, register, backend, failures)
        logger.debug("ran %d gate(s), %d failed", len(self.gates), len(failures))
        if check_norm:
            register.check_normalized(tol=check_norm_tol)
        return failures

    def run_with_tracking(self, register: QuantumRegister, backend=None) -> List[List[Qubit]]:
        """Like run(), recording register.qubit_norms() before each gate."""
        snapshots: List[List[Qubit]] = []
        failures: List[StepFailure] = []
        for i in range(len(self.gates)):
            snapshots.append(register.qubit_norms(backend=backend))
            self._step(i, register, backend, failures)
        return snapshots
