# qregsim/apply_serial.py
import numpy as np
from .state import State
from .bitaddr import check_qubits, expand, masks, spread
from .gates import check_matrix

def apply_single_qubit(state: State, U2: np.ndarray, k: int):
    """Apply 2x2 gate U2 to qubit k (little-endian: bit k)."""
    (k,) = check_qubits([k], state.n)
    U2 = check_matrix(U2, 1)
    psi = state.psi
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    # iterate blocks of size 2^(k+1), update pairs (i0, i1=i0+step)
    for base in range(0, N, block):
        for off in range(step):
            i0 = base + off
            i1 = i0 + step
            a0 = psi[i0]
            a1 = psi[i1]
            psi[i0] = U2[0,0]*a0 + U2[0,1]*a1
            psi[i1] = U2[1,0]*a0 + U2[1,1]*a1

def apply_gate(state: State, U: np.ndarray, qubits):
    """Apply a 2^k x 2^k gate U to the ordered qubit list (qubits[0] is the matrix MSB).

    Each compressed index selects one slice of 2^k amplitudes; the slices
    partition the state, so every amplitude is read and written exactly once.
    """
    qs = check_qubits(qubits, state.n)
    k = len(qs)
    U = check_matrix(U, k)
    if k == 1:
        apply_single_qubit(state, U, qs[0])
        return

    psi = state.psi
    gap = masks(qs)
    # pattern offsets do not depend on the compressed index
    offs = np.array([expand(qs, 0, p, gap) for p in range(1 << k)], dtype=np.int64)
    for c in range(psi.shape[0] >> k):
        idx = spread(c, gap) | offs
        psi[idx] = U @ psi[idx]
