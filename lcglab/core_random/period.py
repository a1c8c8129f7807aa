"""
Period Detection

Finds the smallest cycle observable inside a finite sequence.

A repeated value alone is not a cycle: x[j] == x[i] is accepted as the
start of a period j - i only if the window x[i:j] is replicated by
x[j:2j - i], cut off at the end of the sequence. Coincidental repeats
(common in truly random sequences over a small range) are skipped and
the scan carries on.

Each index is checked against at most two earlier positions, each over
a window no longer than the sequence, so the cost is O(n^2) in the worst
case. The search horizon is the sequence itself, never the modulus.
"""

from typing import Dict

from .models import PeriodReport, Sequence


def _window_repeats(sequence: Sequence, start: int, repeat: int) -> bool:
    """Check that sequence[start:repeat] is replicated from repeat onward."""
    end = min(len(sequence), 2 * repeat - start)
    offset = repeat - start
    for k in range(repeat, end):
        if sequence[k] != sequence[k - offset]:
            return False
    return True


def detect_period(sequence: Sequence) -> PeriodReport:
    """
    Detect the period of a finite sequence.

    Scans the sequence in order, remembering where each value was first
    and most recently seen. On a repeat the nearest occurrence is tried
    before the first one, so a short cycle that starts after an earlier
    coincidental occurrence is still found.

    Args:
        sequence: Values to scan

    Returns:
        PeriodReport with the confirmed period, or the undetermined state
        (period == len(sequence), cycle_confirmed False) when no cycle is
        confirmed within the window
    """
    first_seen: Dict[int, int] = {}
    last_seen: Dict[int, int] = {}

    for j, value in enumerate(sequence):
        if value in first_seen:
            nearest, first = last_seen[value], first_seen[value]
            for i in ((nearest, first) if nearest != first else (first,)):
                if _window_repeats(sequence, i, j):
                    return PeriodReport(
                        period=j - i,
                        cycle_confirmed=True,
                        cycle_start=i,
                        first_repeat_index=j,
                    )
        else:
            first_seen[value] = j
        last_seen[value] = j

    return PeriodReport.undetermined(len(sequence))
