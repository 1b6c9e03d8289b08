# qreg/tests/test_register.py
import numpy as np
import pytest
from qreg import gates as G
from qreg import sampling
from qreg.errors import DimensionMismatch, ZeroNormState
from qreg.matrix import ComplexMatrix
from qreg.qubit import Qubit
from qreg.register import QuantumRegister

def almost(p, q, tol=1e-6):
    return np.allclose(p, q, atol=tol, rtol=0)

class FixedRng:
    """Stands in for numpy.random.Generator with a fixed draw."""
    def __init__(self, u):
        self.u = u
    def random(self):
        return self.u

def test_from_qubit_is_normalized():
    reg = QuantumRegister.from_qubit(Qubit.from_amplitudes(3, 4j))
    assert abs(reg.norm2() - 1.0) < 1e-6
    assert almost(reg.as_numpy(), [0.6, 0.8j])
    assert reg.n == 1

def test_add_is_kronecker_product():
    q1 = Qubit.from_amplitudes(1, 2)
    q2 = Qubit.from_amplitudes(1j, 1)
    q3 = Qubit.from_amplitudes(0.3, -0.7)
    reg = QuantumRegister.from_qubit(q1).add(q2).add(q3)
    expect = np.kron(np.kron(q1.amps, q2.amps), q3.amps)
    assert reg.n == 3 and len(reg) == 8
    assert almost(reg.as_numpy(), expect)
    assert abs(reg.norm2() - 1.0) < 1e-6

def test_empty_register_grows_by_add():
    reg = QuantumRegister.empty()
    assert reg.n == 0
    reg.add(Qubit.one())
    assert almost(reg.as_numpy(), [0, 1])

def test_from_int():
    reg = QuantumRegister.from_int(5, 8)
    expect = np.zeros(8); expect[5] = 1
    assert almost(reg.as_numpy(), expect)
    with pytest.raises(ValueError):
        QuantumRegister.from_int(0, 6)
    with pytest.raises(ValueError):
        QuantumRegister.from_int(8, 8)

def test_basis_qubits_compose_to_from_int():
    reg = QuantumRegister.empty()
    for q in Qubit.from_int(5, 3):
        reg.add(q)
    assert almost(reg.as_numpy(), QuantumRegister.from_int(5, 8).as_numpy())

def test_uniform():
    reg = QuantumRegister.uniform(4)
    assert almost(reg.as_numpy(), 0.5*np.ones(4))

def test_zero_vector_rejected():
    with pytest.raises(ZeroNormState):
        QuantumRegister.from_vector([0, 0])
    with pytest.raises(ZeroNormState):
        Qubit.from_amplitudes(0, 0)

def test_apply_size_mismatch_leaves_state():
    reg = QuantumRegister.from_qubit(Qubit.one()).add(Qubit.zero())
    before = reg.as_numpy().copy()
    with pytest.raises(DimensionMismatch):
        reg.apply(G.multi_h(3))
    assert almost(reg.as_numpy(), before, tol=0)

def test_apply_keeps_unit_norm():
    reg = QuantumRegister.from_qubit(Qubit.from_amplitudes(0.2, 0.9j))
    reg.add(Qubit.from_amplitudes(1, 1)).add(Qubit.zero())
    for g in [G.multi_h(3), G.multi_cnot(0, 2, 3), G.single_qubit(1, 3, G.T()), G.qft(3)]:
        reg.apply(g)
        assert abs(reg.norm2() - 1.0) < 1e-5

def test_apply_renormalizes_non_unitary_operator():
    # |0><0| on |+> leaves |0> after renormalisation
    reg = QuantumRegister.from_qubit(Qubit.from_amplitudes(1, 1))
    reg.apply(G.Gate.custom(ComplexMatrix.from_rows([[1, 0], [0, 0]])))
    assert almost(reg.as_numpy(), [1, 0])

def test_measure_collapsed_state_is_deterministic():
    reg = QuantumRegister.from_int(3, 4)
    rng = np.random.default_rng(0)
    assert all(reg.measure(rng) == 3 for _ in range(50))
    assert all(reg.measure(FixedRng(0.0)) == 3 for _ in range(3))

def test_measure_collapses_to_basis_vector():
    reg = QuantumRegister.uniform(8)
    idx = reg.measure(np.random.default_rng(7))
    expect = np.zeros(8); expect[idx] = 1
    assert almost(reg.as_numpy(), expect)
    assert reg.measure(np.random.default_rng(99)) == idx

def test_measure_is_reproducible_with_seeded_rng():
    outcomes = []
    for _ in range(2):
        rng = np.random.default_rng(1234)
        outcomes.append([QuantumRegister.uniform(8).measure(rng) for _ in range(20)])
    assert outcomes[0] == outcomes[1]

def test_peek_does_not_mutate():
    reg = QuantumRegister.uniform(4)
    before = reg.as_numpy().copy()
    idx = reg.peek(FixedRng(0.3))
    assert 0 <= idx < 4
    assert almost(reg.as_numpy(), before, tol=0)

def test_magnitude_rule_differs_from_born_rule():
    # |a0| = 0.9487, |a0|^2 = 0.9: a draw of 0.92 lands on different outcomes
    reg = QuantumRegister.from_vector([np.sqrt(0.9), np.sqrt(0.1)])
    assert reg.peek(FixedRng(0.92)) == 0
    assert reg.peek(FixedRng(0.92), rule=sampling.BORN) == 1
    # magnitude "probabilities" of an even superposition exceed 1
    assert sampling.weights(QuantumRegister.uniform(4).as_numpy()).sum() > 1.9
    assert abs(sampling.weights(QuantumRegister.uniform(4).as_numpy(), sampling.BORN).sum() - 1.0) < 1e-6

def test_unknown_rule_rejected():
    with pytest.raises(ValueError):
        QuantumRegister.uniform(2).measure(rule="squared")

def test_sample_index_falls_back_to_last_nonzero():
    w = np.array([0.5, 0.4, 0.0])
    assert sampling.sample_index(w, 0.95) == 1
    assert sampling.sample_index(w, 0.0) == 0

def test_qubit_norms_of_basis_state():
    reg = QuantumRegister.from_int(2, 4)  # |10>
    q0, q1 = reg.qubit_norms()
    assert q0.allclose(Qubit.one())
    assert q1.allclose(Qubit.zero())

def test_qubit_norms_of_product_state():
    plus = Qubit.from_amplitudes(1, 1)
    reg = QuantumRegister.from_qubit(plus).add(Qubit.zero()).add(Qubit.one())
    for rule in sampling.RULES:
        q0, q1, q2 = reg.qubit_norms(rule=rule)
        assert q0.allclose(plus)
        assert q1.allclose(Qubit.zero())
        assert q2.allclose(Qubit.one())

def test_qubit_norms_magnitude_vs_born():
    # amplitudes (0.6, 0, 0, 0.8): qubit 0 sums |a| of indices {0,1} vs {2,3}
    reg = QuantumRegister.from_vector([0.6, 0, 0, 0.8])
    mag = reg.qubit_norms()[0]
    born = reg.qubit_norms(rule=sampling.BORN)[0]
    assert almost(mag.amps, [0.6, 0.8])
    assert almost(born.amps, [0.6, 0.8])
    reg = QuantumRegister.from_vector([0.5, 0.5, 0.5, 0.5])
    assert almost(reg.qubit_norms()[0].amps, np.sqrt([0.5, 0.5]))

def test_qubit_measure():
    q = Qubit.from_amplitudes(np.sqrt(0.9), np.sqrt(0.1))
    assert q.measure(FixedRng(0.92)) == 0
    assert q.allclose(Qubit.zero())
    q = Qubit.from_amplitudes(np.sqrt(0.9), np.sqrt(0.1))
    assert q.measure(FixedRng(0.92), rule=sampling.BORN) == 1
    assert q.allclose(Qubit.one())

def test_copy_is_independent():
    reg = QuantumRegister.uniform(4)
    other = reg.copy()
    other.measure(FixedRng(0.1))
    assert almost(reg.as_numpy(), 0.5*np.ones(4))
