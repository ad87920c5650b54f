# qregsim/tests/test_errors.py
import numpy as np
import pytest
from qregsim import (
    QuantumSimulator, Qubit, State, Circuit,
    InvalidQubitIndex, DuplicateQubit, DimensionMismatch, InvalidQubitCount, NormalizationError,
)
from qregsim import gates as G
from qregsim.apply_serial import apply_gate
from qregsim.measure import measure

def prepared():
    st = State.zero(3)
    apply_gate(st, G.H, [0])
    apply_gate(st, G.H, [2])
    return st

def test_index_out_of_range():
    st = prepared()
    before = st.psi.copy()
    with pytest.raises(InvalidQubitIndex):
        apply_gate(st, G.CNOT, [Qubit(0), Qubit(3)])
    with pytest.raises(InvalidQubitIndex):
        apply_gate(st, G.X, [-1])
    with pytest.raises(InvalidQubitIndex):
        measure(st, Qubit(7))
    assert np.array_equal(st.psi, before)

def test_index_error_is_an_index_error():
    with pytest.raises(IndexError):
        apply_gate(State.zero(1), G.X, [1])

def test_duplicate_qubit_rejected_before_mutation():
    st = prepared()
    before = st.psi.copy()
    with pytest.raises(DuplicateQubit):
        apply_gate(st, G.CCNOT, [0, 2, 0])
    with pytest.raises(DuplicateQubit):
        apply_gate(st, G.SWAP, [Qubit(1), 1])
    assert np.array_equal(st.psi, before)

def test_dimension_mismatch():
    st = prepared()
    before = st.psi.copy()
    with pytest.raises(DimensionMismatch):
        apply_gate(st, G.CNOT, [0])
    with pytest.raises(DimensionMismatch):
        apply_gate(st, G.H, [0, 1])
    with pytest.raises(DimensionMismatch):
        apply_gate(st, np.ones((4, 2)), [0, 1])
    assert np.array_equal(st.psi, before)

def test_not_enough_qubits():
    st = State.zero(2)
    with pytest.raises(InvalidQubitCount):
        apply_gate(st, G.CCNOT, [0, 1, 2])
    with pytest.raises(InvalidQubitCount):
        apply_gate(st, np.eye(1), [])

def test_register_needs_a_qubit():
    with pytest.raises(InvalidQubitCount):
        QuantumSimulator(0)

def test_check_normalized():
    st = State.zero(1)
    st.check_normalized()
    st.psi[0] = 2.0
    with pytest.raises(NormalizationError):
        st.check_normalized()

def test_catalog_matrices_are_read_only():
    with pytest.raises(ValueError):
        G.CNOT[0, 0] = 5
    assert G.CATALOG["CNOT"].roles == ("control", "target")
    assert G.CATALOG["CCNOT"].arity == 3

def test_circuit_unknown_backend():
    with pytest.raises(NotImplementedError):
        Circuit.empty(1).h(0).run(backend="gpu")
