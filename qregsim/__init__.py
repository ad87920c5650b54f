from .errors import (
    QuantumError, InvalidQubitIndex, DuplicateQubit, DimensionMismatch,
    InvalidQubitCount, NormalizationError,
)
from .state import Qubit, State
from .measure import Outcome
from .config import SimulatorConfig
from .simulator import QuantumSimulator
from .circuit import Circuit, Result
from . import gates

__version__ = "0.1.0"
