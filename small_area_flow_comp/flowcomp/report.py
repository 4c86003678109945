# flowcomp/report.py
"""
Summary of a CSV adjustment log written by ``flowcomp --csv``.

Usage:
    flowcomp-report adjustments.csv
"""
from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

REQUIRED_COLUMNS = {"line", "old_e", "new_e", "length_mm", "multiplier"}


def summarize(csv_path: Path) -> Dict[str, float]:
    df = pd.read_csv(csv_path)
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"{csv_path} is missing columns: {sorted(missing)}")

    for col in ("old_e", "new_e", "length_mm", "multiplier"):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    df = df.dropna(subset=["old_e", "new_e"])

    if len(df) == 0:
        return {"adjusted_lines": 0, "total_old_e": 0.0, "total_new_e": 0.0, "e_removed": 0.0,
                "mean_multiplier": float("nan"), "min_multiplier": float("nan"),
                "max_multiplier": float("nan"), "mean_length_mm": float("nan")}

    total_old = float(df["old_e"].sum())
    total_new = float(df["new_e"].sum())
    return {
        "adjusted_lines": int(len(df)),
        "total_old_e": round(total_old, 5),
        "total_new_e": round(total_new, 5),
        "e_removed": round(total_old - total_new, 5),
        "mean_multiplier": float(df["multiplier"].mean()),
        "min_multiplier": float(df["multiplier"].min()),
        "max_multiplier": float(df["multiplier"].max()),
        "mean_length_mm": float(df["length_mm"].mean()),
    }


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Summarize a flowcomp CSV adjustment log.")
    ap.add_argument("csv", help="CSV written by flowcomp --csv")
    args = ap.parse_args(argv)

    path = Path(args.csv)
    if not path.exists():
        print(f"ERROR: CSV not found: {path}", file=sys.stderr)
        return 1

    stats = summarize(path)
    print(f"Summary for {path}:")
    for key, value in stats.items():
        print(f"  {key}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
