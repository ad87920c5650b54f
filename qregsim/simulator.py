# qregsim/simulator.py
"""The register object callers drive: allocate, apply gates, measure.

Memory grows as 2^n complex amplitudes, so around 30 qubits is the practical
ceiling on a workstation. ``QuantumSimulator.new(n)`` starts in |0...0>, but
only the ray is physical; prepare qubits explicitly with ``set`` when a
definite starting value matters.
"""
from typing import List, Optional
import numpy as np

from .state import Qubit, State
from .config import DEFAULT_CONFIG, SimulatorConfig
from .gates import CATALOG, GateSpec, RX, RZ, X, phase
from .measure import Outcome
from .logging_config import get_logger

logger = get_logger(__name__)

def load_backend(name: str, num_threads: Optional[int] = None):
    """Return (apply_gate, measure, probability_zero) for a backend name."""
    if name == "serial":
        from .apply_serial import apply_gate
        from .measure import measure, probability_zero
    elif name == "numba":
        try:
            from .apply_numba import apply_gate, measure, probability_zero, with_threads
        except ImportError as e:
            raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
        if num_threads is not None:
            # scoped to each call so one register never changes another's thread count
            apply_gate, measure, probability_zero = (
                with_threads(fn, num_threads) for fn in (apply_gate, measure, probability_zero))
    else:
        raise NotImplementedError(f"Unknown backend: {name}")
    return apply_gate, measure, probability_zero

class QuantumSimulator:
    def __init__(self, n: int, config: Optional[SimulatorConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.state = State.zero(n, dtype=self.config.dtype)
        self.rng = self.config.rng()
        self._apply, self._measure, self._p0 = load_backend(self.config.backend, self.config.num_threads)
        logger.debug("allocated %d-qubit register (backend=%s, dtype=%s)",
                     n, self.config.backend, np.dtype(self.config.dtype).name)

    @classmethod
    def new(cls, n: int, config: Optional[SimulatorConfig] = None) -> "QuantumSimulator":
        return cls(n, config)

    @property
    def dimension(self) -> int:
        return self.state.n

    def get_qubits(self) -> List[Qubit]:
        return self.state.qubits()

    # ---------------- generalized application ----------------

    def apply(self, matrix: np.ndarray, qubits):
        self._apply(self.state, matrix, qubits)

    def apply_single(self, matrix, qubit):
        self.apply(matrix, [qubit])

    def apply_double(self, matrix, qubit1, qubit2):
        self.apply(matrix, [qubit1, qubit2])

    def apply_triple(self, matrix, qubit1, qubit2, qubit3):
        self.apply(matrix, [qubit1, qubit2, qubit3])

    # ---------------- measurement ----------------

    def measure(self, qubit) -> Outcome:
        return self._measure(self.state, qubit, self.rng)

    def probability_zero(self, qubit) -> float:
        return self._p0(self.state, qubit)

    def set(self, qubit, value):
        """Force ``qubit`` into the basis state ``value`` (Outcome or 0/1)."""
        if self.measure(qubit) != Outcome(int(value)):
            self.apply(X, [qubit])

    # ---------------- parametrised gates ----------------

    def phase(self, qubit, phi: float):
        self.apply(phase(phi), [qubit])

    def rz(self, qubit, theta: float):
        self.apply(RZ(theta), [qubit])

    def rx(self, qubit, theta: float):
        self.apply(RX(theta), [qubit])

def _shorthand(spec: GateSpec):
    def gate(self, *qubits):
        if len(qubits) != spec.arity:
            raise TypeError(f"{spec.name} takes {spec.arity} qubit(s) {spec.roles}, got {len(qubits)}")
        self.apply(spec.matrix, qubits)
    gate.__name__ = spec.name.lower()
    gate.__qualname__ = f"QuantumSimulator.{gate.__name__}"
    gate.__doc__ = f"Apply {spec.name} to ({', '.join(spec.roles)})."
    return gate

# h, x, y, z, id, cnot, swap, sqswap, ccnot
for _spec in CATALOG.values():
    setattr(QuantumSimulator, _spec.name.lower(), _shorthand(_spec))

# ---------------- functional interface ----------------

def new(n: int, config: Optional[SimulatorConfig] = None) -> QuantumSimulator:
    return QuantumSimulator(n, config)

def get_qubits(sim: QuantumSimulator) -> List[Qubit]:
    return sim.get_qubits()

def apply_gate(sim: QuantumSimulator, matrix: np.ndarray, qubits):
    sim.apply(matrix, qubits)

def measure(sim: QuantumSimulator, qubit) -> Outcome:
    return sim.measure(qubit)
