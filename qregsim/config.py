# qregsim/config.py
"""
Configuration for a simulated register.
"""
from dataclasses import dataclass
from typing import Optional
import numpy as np

BACKENDS = ("serial", "numba")
DTYPES = (np.complex64, np.complex128)


@dataclass(frozen=True)
class SimulatorConfig:
    """Settings shared by QuantumSimulator and Circuit.run."""

    backend: str = "serial"
    dtype: type = np.complex128
    seed: Optional[int] = None  # None draws fresh OS entropy
    norm_tol: float = 1e-9
    num_threads: Optional[int] = None  # numba backend only

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise NotImplementedError(f"Unknown backend: {self.backend}")
        if np.dtype(self.dtype) not in DTYPES:
            raise ValueError(f"State dtype must be complex64 or complex128, got {np.dtype(self.dtype).name}")

    def rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)


DEFAULT_CONFIG = SimulatorConfig()
