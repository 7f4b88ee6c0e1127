"""Top-N process rankings."""

import math
from collections.abc import Sequence

from systop.models import ProcessSnapshot, RankedProcessList, Snapshot

TOP_N = 15


def _processes(source: Snapshot | Sequence[ProcessSnapshot]) -> Sequence[ProcessSnapshot]:
    if isinstance(source, Snapshot):
        return source.processes
    return source


def _cpu_key(proc: ProcessSnapshot) -> float:
    # NaN is placed last
    value = proc.cpu_percent
    return -math.inf if math.isnan(value) else value


def top_by_cpu(source: Snapshot | Sequence[ProcessSnapshot], n: int = TOP_N) -> RankedProcessList:
    """
    Return up to n processes with the highest CPU usage.

    Ties keep their order from the source collection; NaN values sort last.
    """
    if n <= 0:
        return ()
    ranked = sorted(_processes(source), key=_cpu_key, reverse=True)
    return tuple(ranked[:n])


def top_by_memory(source: Snapshot | Sequence[ProcessSnapshot], n: int = TOP_N) -> RankedProcessList:
    """Return up to n processes with the largest resident memory, stable on ties."""
    if n <= 0:
        return ()
    ranked = sorted(_processes(source), key=lambda p: p.memory_rss, reverse=True)
    return tuple(ranked[:n])
