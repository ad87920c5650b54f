# qregsim/apply_numba.py
import functools
import math
from contextlib import contextmanager
import numpy as np
from numba import config, njit, prange, set_num_threads, get_num_threads
from .state import State
from .bitaddr import check_qubits, expand, masks, pair_masks
from .gates import check_matrix
from .measure import Outcome, choose, clamp
from .logging_config import get_logger

logger = get_logger(__name__)

# ---------- low-level kernels (Numba JIT) ----------

@njit(parallel=True, fastmath=True)
def _single_qubit_kernel(psi, U2, k):
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    nblocks = N // block
    for b in prange(nblocks):
        base = b * block
        for off in range(step):
            i0 = base + off
            i1 = i0 + step
            a0 = psi[i0]
            a1 = psi[i1]
            psi[i0] = U2[0,0]*a0 + U2[0,1]*a1
            psi[i1] = U2[1,0]*a0 + U2[1,1]*a1

@njit(parallel=True, fastmath=True)
def _gate_kernel(psi, U, gap, offs, k):
    # one slice of len(offs) amplitudes per compressed index c
    dim = offs.shape[0]
    ngroups = psi.shape[0] >> k
    for c in prange(ngroups):
        base = np.int64(0)
        for j in range(gap.shape[0]):
            base |= (np.int64(c) << j) & gap[j]
        v = np.empty(dim, dtype=psi.dtype)
        for p in range(dim):
            v[p] = psi[base | offs[p]]
        for a in range(dim):
            acc = U[a, 0] * v[0]
            for b in range(1, dim):
                acc += U[a, b] * v[b]
            psi[base | offs[a]] = acc

@njit(parallel=True, fastmath=True)
def _prob_zero_kernel(psi, q, upper, lower):
    p0 = 0.0
    for c in prange(psi.shape[0] >> 1):
        i0 = ((np.int64(c) << 1) & upper) | (np.int64(c) & lower)
        a = psi[i0]
        p0 += a.real*a.real + a.imag*a.imag
    return p0

@njit(parallel=True, fastmath=True)
def _collapse_kernel(psi, q, upper, lower, keep_one, norm):
    bit = np.int64(1) << q
    for c in prange(psi.shape[0] >> 1):
        i0 = ((np.int64(c) << 1) & upper) | (np.int64(c) & lower)
        i1 = i0 | bit
        if keep_one:
            psi[i1] = psi[i1] / norm
            psi[i0] = 0
        else:
            psi[i0] = psi[i0] / norm
            psi[i1] = 0

# ---------- user-facing apply helpers ----------

def pool_size() -> int:
    return config.NUMBA_NUM_THREADS

def clamp_threads(n: int) -> int:
    """Fit a requested thread count into [1, pool]."""
    return max(1, min(int(n), pool_size()))

@contextmanager
def thread_limit(n):
    """Run the enclosed kernels on at most n threads, then restore the previous count."""
    if n is None:
        yield
        return
    prev = get_num_threads()
    set_num_threads(clamp_threads(n))
    try:
        yield
    finally:
        set_num_threads(prev)

def with_threads(fn, n):
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        with thread_limit(n):
            return fn(*args, **kwargs)
    return wrapper

def apply_gate(state: State, U: np.ndarray, qubits):
    qs = check_qubits(qubits, state.n)
    k = len(qs)
    U = np.array(check_matrix(U, k), dtype=state.dtype)  # writable copy for the kernels
    if k == 1:
        _single_qubit_kernel(state.psi, U, qs[0])
        return
    gap_list = masks(qs)
    gap = np.array(gap_list, dtype=np.int64)
    offs = np.array([expand(qs, 0, p, gap_list) for p in range(1 << k)], dtype=np.int64)
    _gate_kernel(state.psi, U, gap, offs, k)

def probability_zero(state: State, qubit) -> float:
    (q,) = check_qubits([qubit], state.n)
    upper, lower = pair_masks(q)
    return clamp(float(_prob_zero_kernel(state.psi, q, np.int64(upper), np.int64(lower))))

def measure(state: State, qubit, rng: np.random.Generator = None) -> Outcome:
    if rng is None:
        rng = np.random.default_rng()
    (q,) = check_qubits([qubit], state.n)
    p0 = probability_zero(state, q)
    outcome = choose(p0, rng.random())
    upper, lower = pair_masks(q)
    if outcome == Outcome.ZERO:
        _collapse_kernel(state.psi, q, np.int64(upper), np.int64(lower), False, math.sqrt(p0))
    else:
        _collapse_kernel(state.psi, q, np.int64(upper), np.int64(lower), True, math.sqrt(1.0 - p0))
    logger.debug("measured qubit %d -> %s (p0=%.6f)", q, outcome.name, p0)
    return outcome
