# qregsim/tests/test_correctness_small.py
import numpy as np
from qregsim.circuit import Circuit
from qregsim import gates as G

def almost(p, q, tol=1e-9):
    return np.allclose(p, q, atol=tol, rtol=0)

def probs(psi):
    return np.abs(psi)**2

def basis(n, idx):
    e = np.zeros(1 << n); e[idx] = 1.0
    return e

def test_h_on_zero():
    st = Circuit.empty(1).h(0).run().state
    assert almost(probs(st.as_numpy()), np.array([0.5, 0.5]))

def test_x_flips():
    # |0> -> X -> |1>
    st = Circuit.empty(1).x(0).run().state
    assert almost(probs(st.as_numpy()), np.array([0.0, 1.0]))

def test_cnot_control_off_noop():
    # |00> --(CNOT c=1,t=0)--> stays |00>
    st = Circuit.empty(2).cnot(1,0).run().state
    assert almost(probs(st.as_numpy()), basis(2, 0))

def test_cnot_control_on_flips():
    # Prepare |10> by X on qubit 1 (control), then CNOT(1->0): |10> -> |11>
    st = Circuit.empty(2).x(1).cnot(1,0).run().state
    assert almost(probs(st.as_numpy()), basis(2, 3))

def test_cnot_non_adjacent_qubits():
    # control on qubit 3, target on qubit 0, qubits 1 and 2 untouched
    st = Circuit.empty(4).x(3).x(1).cnot(3,0).run().state
    assert almost(probs(st.as_numpy()), basis(4, 0b1011))

def test_ccnot_scattered_qubits():
    st = Circuit.empty(5).x(4).x(0).ccnot(4,0,2).run().state
    assert almost(probs(st.as_numpy()), basis(5, 0b10101))

def test_y_and_z_phases():
    st = Circuit.empty(1).y(0).run().state
    assert almost(st.as_numpy(), np.array([0, 1j]))
    st = Circuit.empty(1).x(0).z(0).run().state
    assert almost(st.as_numpy(), np.array([0, -1]))

def test_phase_gate():
    phi = 0.3
    st = Circuit.empty(1).h(0).phase(0, phi).run().state
    s = np.sqrt(0.5)
    assert almost(st.as_numpy(), np.array([s, s*np.exp(1j*phi)]))

def test_sqswap_twice_is_swap():
    st = Circuit.empty(2).x(0).sqswap(0,1).sqswap(0,1).run().state
    assert almost(probs(st.as_numpy()), basis(2, 0b10))

def test_rx_pi_is_x_up_to_phase():
    st = Circuit.empty(1).rx(0, np.pi).run().state
    assert almost(probs(st.as_numpy()), np.array([0.0, 1.0]))

def test_custom_gate_matches_kron():
    # a random 2-qubit unitary on (q2, q0) against the explicit kron construction
    rng = np.random.default_rng(5)
    A = rng.normal(size=(4, 4)) + 1j*rng.normal(size=(4, 4))
    U, _ = np.linalg.qr(A)
    c = Circuit.empty(3).h(0).h(1).rx(2, 0.7)
    before = c.run().state.as_numpy().copy()
    after = c.gate(U, 2, 0).run().state.as_numpy()

    # reference: reorder axes so that (q2, q0) are contiguous, apply U, reorder back
    psi = before.reshape(2, 2, 2)            # axes (q2, q1, q0)
    psi = psi.transpose(0, 2, 1).reshape(4, 2)  # rows: q2 q0, cols: q1
    psi = (U @ psi).reshape(2, 2, 2).transpose(0, 2, 1).reshape(8)
    assert almost(after, psi)

def test_normalization():
    c = Circuit.empty(3).h(0).h(1).cnot(1,0).sqswap(2,0).ccnot(0,2,1).rz(2, 1.1)
    st = c.run().state
    assert abs(1.0 - st.norm2()) < 1e-9

def test_normalization_long_random_sequence():
    rng = np.random.default_rng(11)
    catalog = list(G.CATALOG.values())
    c = Circuit.empty(4)
    for _ in range(200):
        spec = catalog[int(rng.integers(0, len(catalog)))]
        qs = [int(q) for q in rng.choice(4, size=spec.arity, replace=False)]
        c.gate(spec.matrix, *qs)
    st = c.run().state
    assert abs(1.0 - st.norm2()) < 1e-9

def test_complex64_state():
    st = Circuit.empty(2).h(0).cnot(0,1).run(dtype=np.complex64).state
    assert st.dtype == np.complex64
    assert almost(probs(st.as_numpy()), np.array([0.5, 0, 0, 0.5]), tol=1e-6)
