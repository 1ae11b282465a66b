#!/usr/bin/env python3
"""Run the complete alignment workflow."""

import argparse
import subprocess
import sys

from .constants import CORPUS_PATH

STEPS = [
    ("Plotting convergence", "scripts.plot_convergence"),
]


def run(module: str, args: list[str] | None = None) -> None:
    """Run a script."""
    cmd = [sys.executable, "-m", module] + (args or [])
    subprocess.run(cmd, check=True)


def main() -> None:
    """Run the complete alignment workflow."""
    parser = argparse.ArgumentParser(description="Run the complete alignment workflow.")
    parser.add_argument(
        "-i",
        "--input",
        type=str,
        default=str(CORPUS_PATH),
        help=f"Paired-sequence corpus (default: {CORPUS_PATH})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Worker processes for refinement (default: run in-process)",
    )
    opts = parser.parse_args()

    align_args = ["-i", opts.input, "-m", "-u", "--trace"]
    if opts.workers:
        align_args += ["--workers", str(opts.workers)]

    print("\n=== Aligning corpus ===")
    run("scripts.run_autoalign", align_args)

    for name, module in STEPS:
        print(f"\n=== {name} ===")
        run(module)

    print("\n=== Workflow complete ===")


if __name__ == "__main__":
    main()
