#!/usr/bin/env python3
"""Plot the average and maximum edit cost across refinement iterations."""

import argparse
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from .constants import (
    COST_COLORS,
    FIGURES_FOLDER,
    PLOT_DPI,
    PLOT_GRID_ALPHA,
    PLOT_TITLE_FONTSIZE,
    PLOT_XLABEL_FONTSIZE,
    PLOT_YLABEL_FONTSIZE,
    TRACE_CSV,
)


def load_trace(trace_path: Path) -> pd.DataFrame:
    """Load the per-iteration cost trace written by run_autoalign.py."""
    if not trace_path.exists():
        raise FileNotFoundError(
            f"Trace file not found: {trace_path}. Run run_autoalign.py with --trace first."
        )
    df = pd.read_csv(trace_path)
    if df.empty:
        raise ValueError(f"No iterations recorded in {trace_path}")
    return df.sort_values("iteration")


def selected_iteration(df: pd.DataFrame) -> int:
    """Iteration whose cost function the refinement kept.

    The final pass is the one that failed to improve, so the kept cost
    function is the one used in the pass before it.
    """
    return int(df["iteration"].iloc[-2]) if len(df) > 1 else int(df["iteration"].iloc[0])


def plot_costs(df: pd.DataFrame, output_dir: Path) -> Path:
    """Average cost (left) and maximum edit cost (right) per iteration."""
    _, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 5))
    selected = selected_iteration(df)

    for ax, column, label in (
        (ax1, "average_cost", "Average alignment cost"),
        (ax2, "max_cost", "Maximum edit cost"),
    ):
        ax.plot(
            df["iteration"],
            df[column],
            color=COST_COLORS[column],
            linewidth=2.5,
            marker="o",
            markersize=6,
            label=label,
        )
        ax.axvline(
            x=selected,
            color=COST_COLORS["selected"],
            linestyle="--",
            linewidth=2,
            label=f"Kept (iteration {selected})",
        )
        ax.set_xlabel("Iteration", fontsize=PLOT_XLABEL_FONTSIZE)
        ax.set_ylabel(label, fontsize=PLOT_YLABEL_FONTSIZE)
        ax.legend(loc="best", framealpha=0.9)
        ax.grid(True, alpha=PLOT_GRID_ALPHA)

    ax1.set_title("Average Cost vs Iteration", fontsize=PLOT_TITLE_FONTSIZE, fontweight="bold")
    ax2.set_title("Max Edit Cost vs Iteration", fontsize=PLOT_TITLE_FONTSIZE, fontweight="bold")

    plt.tight_layout()
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / "convergence.png"
    plt.savefig(output_path, dpi=PLOT_DPI, bbox_inches="tight")
    print(f"Saved: {output_path}")
    plt.close()
    return output_path


def main() -> None:
    parser = argparse.ArgumentParser(description="Plot refinement convergence.")
    parser.add_argument(
        "--trace", type=Path, default=TRACE_CSV, help=f"Trace CSV (default: {TRACE_CSV})"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=FIGURES_FOLDER,
        help=f"Figure directory (default: {FIGURES_FOLDER})",
    )
    args = parser.parse_args()

    df = load_trace(args.trace)
    print(f"Loaded {len(df)} iterations from {args.trace}")
    plot_costs(df, args.output_dir)


if __name__ == "__main__":
    main()
