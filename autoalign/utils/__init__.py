"""Utility functions for the project."""

from .corpus import pairs_from_lines, read_pairs
from .config import config_to_dict, config_from_dict, load_config, save_config
from .formatting import (
    by_alpha,
    by_score,
    csv_text_from_alignments,
    pretty_text_from_alignments,
    sort_alignments,
)

__all__ = [
    "pairs_from_lines",
    "read_pairs",
    "config_to_dict",
    "config_from_dict",
    "load_config",
    "save_config",
    "by_alpha",
    "by_score",
    "csv_text_from_alignments",
    "pretty_text_from_alignments",
    "sort_alignments",
]
