# qreg/tests/test_circuit.py
import numpy as np
from qreg import gates as G
from qreg.circuit import QuantumCircuit, StepFailure
from qreg.errors import DimensionMismatch
from qreg.matrix import ComplexMatrix
from qreg.qubit import Qubit
from qreg.register import QuantumRegister

def almost(p, q, tol=1e-6):
    return np.allclose(p, q, atol=tol, rtol=0)

def test_builders_append_in_order():
    c = QuantumCircuit.empty(2)
    assert c.h(0).x(1).cnot(0, 1) is c
    assert len(c) == 3
    assert all(g.num_qubits == 2 for g in c)
    assert c.gates[0].allclose(G.single_qubit(0, 2, G.H()))
    assert c.gates[2].allclose(G.multi_cnot(0, 1, 2))

def test_add_gate_is_fluent():
    c = QuantumCircuit.empty(1)
    c.add_gate(G.X()).add_gate(G.H())
    assert len(c) == 2

def test_run_applies_gates_in_sequence():
    c = QuantumCircuit.empty(2).x(0).cnot(0, 1)
    reg = QuantumRegister.from_int(0, 4)
    assert c.run(reg) == []
    assert almost(reg.as_numpy(), [0, 0, 0, 1])

def test_run_reports_failure_and_continues():
    c = QuantumCircuit.empty(2)
    c.x(0)
    c.add_gate(G.multi_h(3))
    c.x(1)
    reg = QuantumRegister.from_int(0, 4)
    failures = c.run(reg)
    assert len(failures) == 1
    assert isinstance(failures[0], StepFailure)
    assert failures[0].index == 1
    assert isinstance(failures[0].error, DimensionMismatch)
    assert almost(reg.as_numpy(), [0, 0, 0, 1])

def test_run_with_tracking_snapshots_before_each_gate():
    c = QuantumCircuit.empty(2).x(0).x(1)
    reg = QuantumRegister.from_int(0, 4)
    snaps = c.run_with_tracking(reg)
    assert len(snaps) == 2
    assert snaps[0][0].allclose(Qubit.zero()) and snaps[0][1].allclose(Qubit.zero())
    assert snaps[1][0].allclose(Qubit.one()) and snaps[1][1].allclose(Qubit.zero())
    assert almost(reg.as_numpy(), [0, 0, 0, 1])

def test_run_with_tracking_survives_bad_gate():
    c = QuantumCircuit.empty(1).add_gate(G.CNOT()).add_gate(G.X())
    reg = QuantumRegister.from_qubit(Qubit.zero())
    snaps = c.run_with_tracking(reg)
    assert len(snaps) == 2
    assert snaps[1][0].allclose(Qubit.zero())
    assert almost(reg.as_numpy(), [0, 1])

def test_qft_round_trip_circuit():
    c = QuantumCircuit.empty(3).qft().iqft()
    reg = QuantumRegister.from_int(6, 8)
    c.run(reg)
    assert almost(reg.as_numpy(), np.eye(8)[6], tol=1e-4)

def test_four_qubit_circuit_measures_in_range():
    n = 4
    c = (QuantumCircuit.empty(n)
         .h(0).h(1).t(0)
         .cnot(0, 3).cnot(1, 3).cnot(2, 3))
    reg = QuantumRegister.from_qubit(Qubit.one())
    for _ in range(n - 1):
        reg.add(Qubit.zero())
    snaps = c.run_with_tracking(reg)
    assert len(snaps) == 6 and all(len(s) == n for s in snaps)
    res = reg.measure(np.random.default_rng(3))
    assert 0 <= res < 16
    assert almost(np.abs(reg.as_numpy()), np.eye(16)[res])

def test_controlled_builder():
    c = QuantumCircuit.empty(2).x(1).controlled(1, 0, G.Z())
    reg = QuantumRegister.from_vector([0, 0, 1, 1])  # (|10> + |11>)/sqrt2
    c.run(reg)
    # X on qubit 1 -> (|11> + |10>)/sqrt2, CZ flips the |11> sign
    s = np.sqrt(0.5)
    assert almost(reg.as_numpy(), [0, 0, s, -s])

def test_editing_source_matrix_does_not_change_queued_gate():
    m = ComplexMatrix.identity(2)
    c = QuantumCircuit.empty(1).add_gate(G.Gate.custom(m))
    m.scalar_multiply(0)
    reg = QuantumRegister.from_qubit(Qubit.one())
    assert c.run(reg) == []
    assert almost(reg.as_numpy(), [0, 1])
