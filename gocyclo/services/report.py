"""
Text output for ranked measurements.

`write_stats` and `format_average` render results the way a command-line
front end prints them; `select_stats` applies the same top/over cut-off
for callers that want the measurements rather than text.
"""

import math
from typing import List, Sequence, TextIO

from gocyclo.models import Measurement
from gocyclo.services.analysis import average


def select_stats(sorted_stats: Sequence[Measurement], top: int = -1, over: int = 0) -> List[Measurement]:
    """
    Leading measurements of a complexity-sorted sequence.

    Stops after `top` items (a negative value means no limit) or at the
    first measurement whose complexity is not above `over`.
    """
    selected = []
    for i, stat in enumerate(sorted_stats):
        if i == top or stat.complexity <= over:
            break
        selected.append(stat)
    return selected


def write_stats(out: TextIO, sorted_stats: Sequence[Measurement], top: int = -1, over: int = 0) -> int:
    """Write one line per selected measurement and return how many were written."""
    selected = select_stats(sorted_stats, top=top, over=over)
    for stat in selected:
        out.write(f"{stat}\n")
    return len(selected)


def format_average(stats: Sequence[Measurement], show_label: bool = True) -> str:
    value = average(stats)
    text = "NaN" if math.isnan(value) else f"{value:.3g}"
    if show_label:
        return f"Average: {text}"
    return text
