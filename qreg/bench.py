# qreg/bench.py
"""
Qubit-count sweep for dense gate application.

For every n the operators are synthesised once, outside the timed region,
then QuantumRegister.apply is timed per gate kind. Results go to
<out>/<backend>/qubits.csv, one row per (n, gate).

    python -m qreg.bench --ns 2-10 --backend serial --backend numba
"""
import argparse
import csv
import logging
import os
import time
import numpy as np
from . import backends
from . import gates as G
from .register import QuantumRegister

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")

FIELDS = ["qubits", "gate", "backend", "threads", "repeats", "best_ms", "mean_ms"]

# gate kind -> n-qubit operator
GATES = {
    "h_all": G.multi_h,
    "cnot": lambda n: G.multi_cnot(0, n - 1, n) if n > 1 else G.X(),
    "qft": G.qft,
}


def parse_ns(text: str):
    """'2,4,8' or an inclusive range '2-10'."""
    if "-" in text:
        lo, hi = (int(x) for x in text.split("-", 1))
        return list(range(lo, hi + 1))
    return [int(x) for x in text.split(",")]


def threads_for(backend: str) -> int:
    if backend != "numba":
        return 1
    from .kernels_numba import get_threads
    return get_threads()


def time_apply(gate, backend, repeats=3):
    """Best and mean wall time in ms of gate @ |0...0>; the first call is a warmup."""
    reg = QuantumRegister.from_int(0, gate.dimension)
    reg.apply(gate, backend=backend)
    times = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        reg.apply(gate, backend=backend)
        times.append((time.perf_counter() - t0) * 1e3)
    return min(times), float(np.mean(times))


def sweep(ns, backend, repeats=3, kinds=None):
    """Yield one result row per qubit count and gate kind."""
    kinds = kinds or list(GATES)
    threads = threads_for(backend)
    for n in ns:
        built = {kind: GATES[kind](n) for kind in kinds}
        for kind, gate in built.items():
            best, mean = time_apply(gate, backend, repeats)
            logger.info("  n=%-2d %-6s best=%9.3f ms  mean=%9.3f ms", n, kind, best, mean)
            yield {"qubits": n, "gate": kind, "backend": backend, "threads": threads,
                   "repeats": repeats, "best_ms": f"{best:.4f}", "mean_ms": f"{mean:.4f}"}


def run(ns, backend, out_dir=DATA_DIR, repeats=3, kinds=None):
    """Sweep and write the CSV; returns its path."""
    path = os.path.join(out_dir, backend, "qubits.csv")
    os.makedirs(os.path.dirname(path), exist_ok=True)
    logger.info("[%s] n=%s -> %s", backend, ",".join(map(str, ns)), path)
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDS)
        writer.writeheader()
        writer.writerows(sweep(ns, backend, repeats, kinds))
    return path


def main(argv=None):
    p = argparse.ArgumentParser(description="time dense gate application against qubit count")
    p.add_argument("--ns", type=parse_ns, default=parse_ns("2-9"))
    p.add_argument("--backend", action="append", choices=backends.BACKENDS,
                   help="repeatable; defaults to the configured backend")
    p.add_argument("--gate", action="append", choices=sorted(GATES), dest="kinds")
    p.add_argument("--repeats", type=int, default=3)
    p.add_argument("--threads", type=int, help="numba thread count")
    p.add_argument("--out", default=DATA_DIR)
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")

    if args.threads:
        from .kernels_numba import set_threads
        set_threads(args.threads)
    return [run(args.ns, be, args.out, args.repeats, args.kinds)
            for be in args.backend or [backends.get_default()]]


if __name__ == "__main__":
    main()
