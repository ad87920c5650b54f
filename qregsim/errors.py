# qregsim/errors.py
"""Typed failures raised at the boundary of the engine entry points."""


class QuantumError(Exception):
    """Base class for every error raised by qregsim."""


class InvalidQubitIndex(QuantumError, IndexError):
    def __init__(self, index, n):
        super().__init__(f"qubit index {index} out of range for a {n}-qubit register")
        self.index = index
        self.n = n


class DuplicateQubit(QuantumError, ValueError):
    def __init__(self, index):
        super().__init__(f"qubit {index} appears more than once in the qubit list")
        self.index = index


class DimensionMismatch(QuantumError, ValueError):
    def __init__(self, shape, k):
        dim = 1 << k
        super().__init__(f"gate matrix of shape {shape} does not act on {k} qubit(s); expected ({dim}, {dim})")
        self.shape = shape
        self.k = k


class InvalidQubitCount(QuantumError, ValueError):
    pass


class NormalizationError(QuantumError, AssertionError):
    pass
