# qregsim/gates.py
"""Gate catalog: immutable unitary matrices grouped by arity.

Matrix rows/columns are ordered by the binary value of the gate's qubits with
the first-listed qubit as the most significant bit, so CNOT expects
``(control, target)`` and CCNOT ``(control1, control2, target)``.
"""
from dataclasses import dataclass
from typing import Dict, Tuple
import numpy as np

from .errors import DimensionMismatch

def _frozen(mat, dtype=np.complex128) -> np.ndarray:
    mat = np.array(mat, dtype=dtype)
    mat.flags.writeable = False
    return mat

def check_matrix(U, k: int) -> np.ndarray:
    """Return U as a 2^k x 2^k ndarray or raise DimensionMismatch."""
    U = np.asarray(U)
    dim = 1 << k
    if U.shape != (dim, dim):
        raise DimensionMismatch(U.shape, k)
    return U

# ----------------------------- factories -----------------------------

def phase(phi: float, dtype=np.complex128) -> np.ndarray:
    return _frozen([[1, 0],
                    [0, np.exp(1j*phi)]], dtype)

def RZ(theta: float, dtype=np.complex128) -> np.ndarray:
    return _frozen([[np.exp(-0.5j*theta), 0],
                    [0, np.exp(+0.5j*theta)]], dtype)

def RX(theta: float, dtype=np.complex128) -> np.ndarray:
    c = np.cos(theta/2.0)
    s = -1j*np.sin(theta/2.0)
    return _frozen([[c, s],
                    [s, c]], dtype)

# ----------------------------- constants -----------------------------

_s = np.sqrt(0.5)

H = _frozen([[_s, _s],
             [_s, -_s]])

X = _frozen([[0, 1],
             [1, 0]])

Y = _frozen([[0, -1j],
             [1j, 0]])

Z = _frozen([[1, 0],
             [0, -1]])

ID = _frozen(np.eye(2))

# |00>,|01>,|10>,|11> with the control as the MSB: swap |10> <-> |11>
CNOT = _frozen([[1, 0, 0, 0],
                [0, 1, 0, 0],
                [0, 0, 0, 1],
                [0, 0, 1, 0]])

SWAP = _frozen([[1, 0, 0, 0],
                [0, 0, 1, 0],
                [0, 1, 0, 0],
                [0, 0, 0, 1]])

SQSWAP = _frozen([[1, 0, 0, 0],
                  [0, 0.5 + 0.5j, 0.5 - 0.5j, 0],
                  [0, 0.5 - 0.5j, 0.5 + 0.5j, 0],
                  [0, 0, 0, 1]])

CCNOT = _frozen(np.eye(8)[[0, 1, 2, 3, 4, 5, 7, 6]])

@dataclass(frozen=True)
class GateSpec:
    name: str
    matrix: np.ndarray
    roles: Tuple[str, ...]

    @property
    def arity(self) -> int:
        return len(self.roles)

CATALOG: Dict[str, GateSpec] = {
    "H":      GateSpec("H", H, ("target",)),
    "X":      GateSpec("X", X, ("target",)),
    "Y":      GateSpec("Y", Y, ("target",)),
    "Z":      GateSpec("Z", Z, ("target",)),
    "ID":     GateSpec("ID", ID, ("target",)),
    "CNOT":   GateSpec("CNOT", CNOT, ("control", "target")),
    "SWAP":   GateSpec("SWAP", SWAP, ("qubit1", "qubit2")),
    "SQSWAP": GateSpec("SQSWAP", SQSWAP, ("qubit1", "qubit2")),
    "CCNOT":  GateSpec("CCNOT", CCNOT, ("control1", "control2", "target")),
}

# parametrised single-qubit gates, built per call
PARAMETRIC = {
    "PHASE": phase,
    "RZ": RZ,
    "RX": RX,
}
