"""
Cesàro π Estimation

Cesàro's theorem: two independently chosen random integers are coprime
with probability 6/π². Inverting it turns the coprimality rate r of a
sequence's consecutive pairs into an estimate of π:

    π ≈ sqrt(6 / r)

The closer the sequence is to uniform and independent, the closer the
estimate lands to π. A poorly parameterised LCG drifts visibly; the
reference sequence shows what to expect from an ideal source of the same
length.
"""

import math

from .models import CesaroReport, Sequence
from .modular import gcd


def count_coprime_pairs(sequence: Sequence) -> int:
    """Number of consecutive pairs (x[i], x[i+1]) with gcd == 1."""
    return sum(
        1 for left, right in zip(sequence, sequence[1:])
        if gcd(left, right) == 1
    )


def estimate_pi(sequence: Sequence) -> CesaroReport:
    """
    Estimate π from the consecutive-pair coprimality rate.

    Args:
        sequence: Values to pair up; len - 1 pairs are formed

    Returns:
        CesaroReport. pi_estimate is None (undefined) when no pair is
        coprime, including the zero-pair case of a sequence shorter than 2.
    """
    total = max(0, len(sequence) - 1)
    coprime = count_coprime_pairs(sequence)

    if coprime == 0:
        return CesaroReport(pi_estimate=None, coprime_pair_count=0, total_pair_count=total)

    ratio = coprime / total
    return CesaroReport(
        pi_estimate=math.sqrt(6 / ratio),
        coprime_pair_count=coprime,
        total_pair_count=total,
    )
