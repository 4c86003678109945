# flowcomp/plotting.py
from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .calibration import load_calibration
from .config import DEFAULT_MODEL_FILE
from .errors import FlowCompError
from .flow_model import FlowModel


def plot_model(model: FlowModel, out_path: Path, samples: int = 200) -> Path:
    """Spline curve with its calibration points; saved to ``out_path``."""
    xs, ys = model.sample(samples)
    points = model.describe()

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.plot(xs, ys, label="natural cubic spline")
    ax.scatter([p[0] for p in points], [p[1] for p in points], color="C1", zorder=3,
               label="calibration points")
    ax.axhline(1.0, linestyle="--", color="grey", linewidth=0.8, label="no compensation")
    ax.set_xlabel("Extrusion length (mm)")
    ax.set_ylabel("Flow multiplier")
    ax.set_title("Small area flow compensation model")
    ax.legend()
    fig.tight_layout()
    fig.savefig(out_path, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return out_path


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Plot the flow compensation model.")
    ap.add_argument("-m", "--model-file", default=DEFAULT_MODEL_FILE, help="Calibration table")
    ap.add_argument("-o", "--out", default="flow_model.png", help="Output image")
    ap.add_argument("--samples", type=int, default=200)
    args = ap.parse_args(argv)

    try:
        model = FlowModel(load_calibration(args.model_file))
    except FlowCompError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code

    path = plot_model(model, Path(args.out), args.samples)
    print(f"Saved {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
