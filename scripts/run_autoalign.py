#!/usr/bin/env python3
"""Learn edit costs from a paired-sequence corpus and write its alignments."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import pandas as pd

from .constants import CONFIG_YAML, HUMAN_OUTPUT, MACHINE_OUTPUT, TRACE_CSV

# Ensure repository modules are importable when invoked as a script
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from autoalign.algorithms import ConvergenceTrace, autoalign_from_config  # pylint: disable=C0413
from autoalign.types import AutoalignConfig  # pylint: disable=C0413
from autoalign.types.config import SCORING_METHODS, SEED_METHODS  # pylint: disable=C0413
from autoalign.utils import (  # pylint: disable=C0413
    csv_text_from_alignments,
    load_config,
    pretty_text_from_alignments,
    read_pairs,
    sort_alignments,
)


def to_console(message: str) -> None:
    """Print a timestamped progress line."""
    print(f"[{datetime.now().strftime('%H:%M:%S')}] {message}")


class ConsoleTrace(ConvergenceTrace):
    """Convergence trace that also reports each iteration on stdout."""

    def on_iteration(self, iteration: int, average_cost: float, max_cost: float) -> None:
        super().on_iteration(iteration, average_cost, max_cost)
        to_console(f"avg.unnorm.cost: {average_cost}")


def build_config(args: argparse.Namespace) -> AutoalignConfig:
    """Load the YAML config if any, then apply command-line overrides."""
    config_path = Path(args.config) if args.config else CONFIG_YAML
    config = load_config(config_path) if config_path.exists() else AutoalignConfig()

    overrides = {
        "seed": args.seed,
        "scoring": args.scoring,
        "pmi_k": args.pmi_k,
        "max_iterations": args.max_iterations,
        "max_alignments": args.max_alignments,
        "workers": args.workers,
    }
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Align paired sequences with edit costs learned from the corpus."
    )
    parser.add_argument(
        "-i",
        "--input",
        type=str,
        required=True,
        help="Input file; format: LEFT, RIGHT with white-space separated symbols.",
    )
    parser.add_argument(
        "-m",
        "--machine",
        nargs="?",
        const=str(MACHINE_OUTPUT),
        help="Machine-readable output; format: LEFT, RIGHT, SCORE.",
    )
    parser.add_argument(
        "-u",
        "--human",
        nargs="?",
        const=str(HUMAN_OUTPUT),
        help="Human-readable output; format: SCORE LEFT \\n RIGHT.",
    )
    parser.add_argument("-c", "--config", type=str, help="YAML run configuration.")
    parser.add_argument("--seed", choices=SEED_METHODS, help="Initial cost estimator.")
    parser.add_argument("--scoring", choices=SCORING_METHODS, help="Cost scoring method.")
    parser.add_argument("--pmi-k", type=float, help="Exponent for the pmi scoring method.")
    parser.add_argument("--max-iterations", type=int, help="Refinement iteration cap.")
    parser.add_argument(
        "--max-alignments", type=int, help="Cap on tied-optimal alignments per pair."
    )
    parser.add_argument("--workers", type=int, help="Worker processes for refinement.")
    parser.add_argument(
        "--trace",
        nargs="?",
        const=str(TRACE_CSV),
        help="Write the per-iteration average cost to this CSV file.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress details.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    input_path = Path(args.input)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    config = build_config(args)
    pairs = read_pairs(input_path)
    to_console(f"read {len(pairs)} pairs from {input_path}")

    trace = ConsoleTrace()
    alignments = autoalign_from_config(pairs, config, observer=trace)

    if args.machine:
        write_text(Path(args.machine), csv_text_from_alignments(sort_alignments(alignments, by="alpha")))
        to_console(f"wrote {len(alignments)} alignments to {args.machine}")

    if args.human:
        write_text(Path(args.human), pretty_text_from_alignments(sort_alignments(alignments, by="score")))
        to_console(f"wrote {len(alignments)} alignments to {args.human}")

    if not args.machine and not args.human:
        print(pretty_text_from_alignments(sort_alignments(alignments, by="score")))
        to_console(f"wrote {len(alignments)} alignments to console")

    if args.trace:
        trace_path = Path(args.trace)
        trace_path.parent.mkdir(parents=True, exist_ok=True)
        pd.DataFrame(trace.records()).to_csv(trace_path, index=False)
        to_console(f"wrote {trace.iterations} iterations to {trace_path}")


if __name__ == "__main__":
    main()
