# qregsim/state.py
import numpy as np
from dataclasses import dataclass
from typing import List

from .errors import InvalidQubitCount, NormalizationError

@dataclass(frozen=True)
class Qubit:
    index: int  # bit position in the register, 0 is the LSB

    def __int__(self):
        return self.index

    def __index__(self):
        return self.index

@dataclass
class State:
    n: int
    psi: np.ndarray  # shape (2**n,), dtype complex64/128

    @staticmethod
    def zero(n: int, dtype=np.complex128) -> "State":
        if n < 1:
            raise InvalidQubitCount(f"a register needs at least one qubit, got {n}")
        N = 1 << n
        psi = np.zeros(N, dtype=dtype)
        psi[0] = 1.0 + 0.0j
        return State(n=n, psi=psi)

    @property
    def dtype(self):
        return self.psi.dtype

    def qubits(self) -> List[Qubit]:
        return [Qubit(k) for k in range(self.n)]

    def norm2(self) -> float:
        return float(np.vdot(self.psi, self.psi).real)

    def check_normalized(self, tol=1e-9):
        n2 = self.norm2()
        if not (abs(1.0 - n2) <= tol):
            raise NormalizationError(f"Normalization failed: ||psi||^2={n2}")

    def copy(self) -> "State":
        return State(self.n, self.psi.copy())

    def as_numpy(self) -> np.ndarray:
        return self.psi
