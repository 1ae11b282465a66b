"""
Simple Good-Turing re-estimation of frequencies (Gale & Sampson, 1995).

Given the frequencies of counts, i.e. how many distinct items were observed
exactly r times, this module returns a smoothed count r* for every observed r,
plus the total mass reserved for items never observed:

- p0 = n_1 / N is the probability of all unseen items together; the count
  returned under key 0 is therefore p0 * N = n_1.
- For small r the Turing estimate (r + 1) * n_{r+1} / n_r is used while it is
  significantly different from the smoothed estimate.
- Otherwise the count is read off a log-log regression of the averaged
  frequencies Z_r = n_r / (0.5 * (t - q)), where q and t are the neighbouring
  observed counts.
- Estimates are renormalised so that observed items share 1 - p0 of the mass.

Counts may be fractional. The Turing estimate then only applies when r + 1 is
itself an observed count.

With a single distinct count the regression is undefined; the raw counts are
returned and no mass is reserved for unseen items.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping

import numpy as np

logger = logging.getLogger(__name__)

# 95% confidence factor for switching from Turing to smoothed estimates
CONFIDENCE_FACTOR = 1.96


def _averaged_frequencies(counts: List[float], freqs: Mapping[float, float]) -> np.ndarray:
    """Compute Z_r, spreading each n_r over the gap to its neighbouring counts."""
    z = np.zeros(len(counts), dtype=float)
    for idx, r in enumerate(counts):
        q = counts[idx - 1] if idx > 0 else 0.0
        t = counts[idx + 1] if idx < len(counts) - 1 else 2.0 * r - q
        z[idx] = freqs[r] / (0.5 * (t - q))
    return z


def _fit_log_log(counts: List[float], z: np.ndarray) -> float:
    """Return the slope b of log Z_r = a + b log r."""
    slope, _intercept = np.polyfit(np.log(np.asarray(counts)), np.log(z), 1)
    return float(slope)


def simple_good_turing(freq_of_counts: Mapping[float, float]) -> Dict[float, float]:
    """Smooth raw counts using their frequencies.

    Args:
        freq_of_counts: Map from an observed count r > 0 to n_r, the number of
            distinct items observed exactly r times.

    Returns:
        Map from each observed count r to its smoothed count, and from 0 to
        the total count reserved for unseen items. The smoothed counts of all
        items plus the key-0 count add up to the original total N.
    """
    freqs = {float(r): float(n) for r, n in freq_of_counts.items() if r > 0 and n > 0}
    if not freqs:
        return {0: 0.0}

    counts = sorted(freqs)
    total = sum(r * freqs[r] for r in counts)
    zero_mass = freqs.get(1.0, 0.0)

    if len(counts) < 2:
        # Raw counts already sum to N
        logger.debug("Only one distinct count (%s); returning raw counts", counts[0])
        smoothed: Dict[float, float] = {r: r for r in counts}
        smoothed[0] = 0.0
        return smoothed

    slope = _fit_log_log(counts, _averaged_frequencies(counts, freqs))
    if slope > -1.0:
        logger.debug("Log-log slope %.4f is above -1; estimates may be unreliable", slope)

    estimates: Dict[float, float] = {}
    use_smoothed = False
    for r in counts:
        y = r * math.pow(1.0 + 1.0 / r, slope + 1.0)
        n_r = freqs[r]
        n_next = freqs.get(r + 1.0)

        if n_next is None:
            use_smoothed = True

        if use_smoothed:
            estimates[r] = y
            continue

        x = (r + 1.0) * n_next / n_r
        spread = CONFIDENCE_FACTOR * math.sqrt(
            (r + 1.0) ** 2 * (n_next / n_r**2) * (1.0 + n_next / n_r)
        )
        if abs(x - y) <= spread:
            use_smoothed = True
            estimates[r] = y
        else:
            estimates[r] = x

    p0 = zero_mass / total
    normaliser = sum(freqs[r] * estimates[r] for r in counts)

    smoothed = {r: (1.0 - p0) * estimates[r] / normaliser * total for r in counts}
    smoothed[0] = p0 * total
    return smoothed


__all__ = ["simple_good_turing", "CONFIDENCE_FACTOR"]
