# qregsim/bench.py
import argparse, csv, logging, os, time, platform
from datetime import datetime
import numpy as np
from .circuit import Circuit
from .logging_config import setup_logging, get_logger

logger = get_logger(__name__)

DATA_DIR = os.path.join(os.getcwd(), "data")

HEADER = ["qubits","depth","backend","threads","gates","wall_ms","dtype","python","timestamp"]

def write_rows(path, rows):
    """Create/overwrite CSV with header and the given rows."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=HEADER)
        w.writeheader()
        w.writerows(rows)

# ---------------------------------------------------------------------

def random_circuit(n, depth, seed=0):
    """Alternate layers of random 1-qubit gates and entangling CNOT/CCNOT gates."""
    rng = np.random.default_rng(seed)
    c = Circuit.empty(n)
    for layer in range(depth):
        if layer % 2 == 0:
            for k in range(n):
                if rng.integers(0, 2) == 0:
                    c.h(k)
                else:
                    c.x(k)
        else:
            for k in range(0, n-1, 2):
                if n >= 3 and rng.integers(0, 3) == 0:
                    a, b, t = (int(q) for q in rng.choice(n, size=3, replace=False))
                    c.ccnot(a, b, t)
                elif rng.integers(0, 2) == 0:
                    c.cnot(k, k+1)
                else:
                    c.cnot(k+1, k)
    return c

def time_run(circ, backend, threads=None, dtype=np.complex128):
    t0 = time.perf_counter()
    circ.run(backend=backend, dtype=dtype, num_threads=threads, check_norm=False)
    return (time.perf_counter() - t0) * 1e3  # ms

def row(n, depth, backend, threads, circ, wall, dtype):
    return {
        "qubits": n, "depth": depth, "backend": backend, "threads": threads or 0,
        "gates": len(circ.ops), "wall_ms": f"{wall:.3f}", "dtype": np.dtype(dtype).name,
        "python": platform.python_version(),
        "timestamp": datetime.now().isoformat(timespec="seconds"),
    }

# ---------------------------------------------------------------------

def bench_qubits(ns, depth, backend, threads, dtype):
    rows = []
    for i, n in enumerate(ns):
        circ = random_circuit(n, depth, seed=42)
        if i == 0 and backend == "numba":
            time_run(circ, backend, threads, dtype)  # JIT warmup
        wall = time_run(circ, backend, threads, dtype)
        rows.append(row(n, depth, backend, threads, circ, wall, dtype))
        logger.info("n=%d  wall=%.2f ms", n, wall)
    return rows

def bench_depth(n, depths, backend, threads, dtype):
    rows = []
    if backend == "numba":
        time_run(random_circuit(n, min(depths), seed=7), backend, threads, dtype)
    for d in depths:
        circ = random_circuit(n, d, seed=7)
        wall = time_run(circ, backend, threads, dtype)
        rows.append(row(n, d, backend, threads, circ, wall, dtype))
        logger.info("depth=%d  wall=%.2f ms", d, wall)
    return rows

# ---------------------------------------------------------------------
def main(argv=None):
    p = argparse.ArgumentParser(description="qregsim benchmarks → data/<backend>/*.csv")
    p.add_argument("--backend", type=str, default="serial", choices=["serial","numba"])
    p.add_argument("--threads", type=int, default=None)
    p.add_argument("--dtype", type=str, default="complex128", choices=["complex64","complex128"])
    p.add_argument("--out", type=str, default=DATA_DIR)
    p.add_argument("--log-level", type=str, default="INFO")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_qubits = sub.add_parser("qubits")
    p_qubits.add_argument("--ns", type=str, required=True)
    p_qubits.add_argument("--depth", type=int, default=20)

    p_depth = sub.add_parser("depth")
    p_depth.add_argument("--n", type=int, default=8)
    p_depth.add_argument("--depths", type=str, default="10,50,100")

    args = p.parse_args(argv)
    setup_logging(getattr(logging, args.log_level.upper(), logging.INFO))
    dtype = np.dtype(args.dtype).type

    if args.cmd == "qubits":
        ns = [int(x) for x in args.ns.split(",")]
        logger.info("qubit scaling: backend=%s ns=%s depth=%d", args.backend, ns, args.depth)
        rows = bench_qubits(ns, args.depth, args.backend, args.threads, dtype)
    else:
        ds = [int(x) for x in args.depths.split(",")]
        logger.info("depth scaling: backend=%s n=%d depths=%s", args.backend, args.n, ds)
        rows = bench_depth(args.n, ds, args.backend, args.threads, dtype)

    out_path = os.path.join(args.out, args.backend, f"{args.cmd}.csv")
    write_rows(out_path, rows)
    logger.info("wrote %d rows to %s", len(rows), out_path)

if __name__ == "__main__":
    main()
