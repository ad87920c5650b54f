# qregsim/circuit.py
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import numpy as np
from .state import State
from .config import SimulatorConfig
from .measure import Outcome
from .simulator import QuantumSimulator
from . import gates as G

Op = Tuple[str, Tuple]  # e.g., ("H",(k,)) or ("CNOT",(c,t)) or ("RZ",(k,theta)) or ("GATE",(U,qs))

@dataclass
class Result:
    state: State
    measurements: List[Tuple[int, Outcome]] = field(default_factory=list)  # (qubit, outcome) in op order

@dataclass
class Circuit:
    n: int
    ops: List[Op]

    @staticmethod
    def empty(n:int) -> "Circuit":
        return Circuit(n, [])

    def h(self, k:int): self.ops.append(("H",(k,))); return self
    def x(self, k:int): self.ops.append(("X",(k,))); return self
    def y(self, k:int): self.ops.append(("Y",(k,))); return self
    def z(self, k:int): self.ops.append(("Z",(k,))); return self
    def cnot(self, c:int, t:int): self.ops.append(("CNOT",(c,t))); return self
    def swap(self, a:int, b:int): self.ops.append(("SWAP",(a,b))); return self
    def sqswap(self, a:int, b:int): self.ops.append(("SQSWAP",(a,b))); return self
    def ccnot(self, c1:int, c2:int, t:int): self.ops.append(("CCNOT",(c1,c2,t))); return self
    def phase(self, k:int, phi:float): self.ops.append(("PHASE",(k,phi))); return self
    def rz(self, k:int, theta:float): self.ops.append(("RZ",(k,theta))); return self
    def rx(self, k:int, theta:float): self.ops.append(("RX",(k,theta))); return self
    def gate(self, U:np.ndarray, *qs:int): self.ops.append(("GATE",(U,qs))); return self
    def measure(self, k:int): self.ops.append(("MEASURE",(k,))); return self

    def run(self, backend:str="serial", dtype=np.complex128, check_norm=True, num_threads=None,
            check_norm_tol=None, seed:Optional[int]=None) -> Result:
        config = SimulatorConfig(backend=backend, dtype=dtype, seed=seed, num_threads=num_threads)
        sim = QuantumSimulator(self.n, config)
        res = Result(sim.state)

        for name, args in self.ops:
            if name in G.CATALOG:
                sim.apply(G.CATALOG[name].matrix, args)
            elif name in G.PARAMETRIC:
                k, theta = args
                sim.apply(G.PARAMETRIC[name](theta), [k])
            elif name == "GATE":
                U, qs = args
                sim.apply(U, qs)
            elif name == "MEASURE":
                (k,) = args
                res.measurements.append((k, sim.measure(k)))
            else:
                raise ValueError(f"Unknown gate {name}")

        if check_norm:
            if check_norm_tol is None:
                check_norm_tol = 1e-5 if np.dtype(dtype) == np.complex64 else config.norm_tol
            sim.state.check_normalized(tol=check_norm_tol)
        return res
