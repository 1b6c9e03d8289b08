# qreg/plot_results.py
import csv, logging, os
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from .bench import DATA_DIR

logger = logging.getLogger(__name__)

def load_rows(path):
    with open(path, "r") as f:
        rows = list(csv.DictReader(f))
    for row in rows:
        row["qubits"] = int(row["qubits"])
        row["best_ms"] = float(row["best_ms"])
    return rows

def by_gate(rows):
    """{gate kind: {qubits: best_ms}}"""
    out = {}
    for r in rows:
        out.setdefault(r["gate"], {})[r["qubits"]] = r["best_ms"]
    return out

def _plot(series, title, out_path):
    """series: {label: {n: ms}}, drawn on a log time axis."""
    fig, ax = plt.subplots()
    for label, pts in sorted(series.items()):
        ns = sorted(pts)
        ax.plot(ns, [pts[n] for n in ns], marker="o", label=label)
    ax.set_xlabel("Qubits (n)")
    ax.set_ylabel("Best apply time (ms, log scale)")
    ax.set_yscale("log")
    ax.set_title(title)
    ax.grid(True, which="both", ls="--", lw=0.5)
    ax.legend()
    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path

def plot_backend(path):
    backend = os.path.basename(os.path.dirname(path))
    out = os.path.join(os.path.dirname(path), f"runtime_vs_qubits_{backend}.png")
    return _plot(by_gate(load_rows(path)), f"Dense apply [{backend}]", out)

def plot_compare(data_dir, gate="qft"):
    """One gate kind, every backend that has a sweep."""
    series = {}
    for be in sorted(os.listdir(data_dir)):
        path = os.path.join(data_dir, be, "qubits.csv")
        if os.path.exists(path):
            pts = by_gate(load_rows(path)).get(gate)
            if pts:
                series[be] = pts
    if len(series) < 2:
        return None
    return _plot(series, f"{gate}: backends compared",
                 os.path.join(data_dir, f"runtime_vs_qubits_{gate}_compare.png"))

def main(data_dir=DATA_DIR):
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    if not os.path.isdir(data_dir):
        logger.info("No benchmark data under %s", data_dir)
        return []
    written = []
    for be in sorted(os.listdir(data_dir)):
        path = os.path.join(data_dir, be, "qubits.csv")
        if os.path.exists(path):
            logger.info("Plotting %s", path)
            written.append(plot_backend(path))
    out = plot_compare(data_dir)
    if out:
        written.append(out)
    logger.info("Saved %d plot(s) under %s", len(written), data_dir)
    return written

if __name__ == "__main__":
    main()
