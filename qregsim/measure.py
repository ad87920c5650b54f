# qregsim/measure.py
"""Single-qubit projective measurement in the computational basis."""
from enum import IntEnum
import math
import numpy as np

from .state import State
from .bitaddr import check_qubits, index_pair, pair_masks
from .logging_config import get_logger

logger = get_logger(__name__)

class Outcome(IntEnum):
    ZERO = 0
    ONE = 1

def clamp(p0: float) -> float:
    # rounding can push the sum of squares slightly outside [0, 1]
    return min(1.0, max(0.0, p0))

def choose(p0: float, r: float) -> Outcome:
    """Inverse-CDF draw: P(ZERO) = p0 for r uniform in [0, 1)."""
    return Outcome.ZERO if p0 > r else Outcome.ONE

def probability_zero(state: State, qubit) -> float:
    (q,) = check_qubits([qubit], state.n)
    psi = state.psi
    upper, lower = pair_masks(q)
    p0 = 0.0
    for c in range(psi.shape[0] >> 1):
        i0, _ = index_pair(c, q, upper, lower)
        a = psi[i0]
        p0 += a.real*a.real + a.imag*a.imag
    return clamp(p0)

def collapse(state: State, qubit, outcome: Outcome, p0: float):
    """Project onto ``outcome`` and renormalize the surviving branch."""
    (q,) = check_qubits([qubit], state.n)
    psi = state.psi
    upper, lower = pair_masks(q)
    if outcome == Outcome.ZERO:
        norm = math.sqrt(p0)
    else:
        norm = math.sqrt(1.0 - p0)
    for c in range(psi.shape[0] >> 1):
        i0, i1 = index_pair(c, q, upper, lower)
        if outcome == Outcome.ZERO:
            psi[i0] /= norm
            psi[i1] = 0
        else:
            psi[i1] /= norm
            psi[i0] = 0

def measure(state: State, qubit, rng: np.random.Generator = None) -> Outcome:
    if rng is None:
        rng = np.random.default_rng()
    p0 = probability_zero(state, qubit)
    outcome = choose(p0, rng.random())
    collapse(state, qubit, outcome, p0)
    logger.debug("measured qubit %d -> %s (p0=%.6f)", int(qubit), outcome.name, p0)
    return outcome
