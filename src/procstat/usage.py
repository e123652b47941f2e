"""
Rate calculations over pairs of snapshots.

All functions are pure apart from :func:`process_memory_percent`, which
reads the current system memory total.
"""

from procstat.config import ProcFS, system_ticks_per_second
from procstat.memory import read_memory
from procstat.models import CPUStat, ProcessCPUStat, ProcessInfo


def cpu_usage_percent(a: CPUStat | None, b: CPUStat | None) -> float:
    """
    Busy share of the ticks elapsed between two CPU snapshots.

    The snapshots may be passed in either order. They carry no timestamp,
    so the one with the smaller total is taken as the earlier sample; this
    is wrong if the counters were reset between the two reads.

    Comparing against an all-zero snapshot yields the busy share since
    boot, which is what a first call without a previous sample returns.

    Returns:
        A percentage, 0.0 if either snapshot is missing or no ticks
        elapsed between them.
    """
    if a is None or b is None or (a.total == 0 and b.total == 0):
        return 0.0
    if a.total > b.total:
        a, b = b, a

    delta_total = b.total - a.total
    if delta_total == 0:
        # Stalled pair: the cumulative total stands in for the delta and,
        # with no ticks elapsed, none of them were busy.
        delta_total = b.total
        delta_idle = delta_total
    else:
        delta_idle = b.idle_total - a.idle_total

    return (delta_total - delta_idle) / delta_total * 100.0


def process_cpu_usage_percent(
    a: ProcessCPUStat | None,
    b: ProcessCPUStat | None,
    ticks_per_second: int | None = None,
) -> float:
    """
    CPU used by a process between two snapshots, as a percentage of one core.

    Snapshots are ordered by their capture uptime. When both were taken at
    the same instant the later one is compared against the process start.

    Args:
        a: One snapshot of the process.
        b: Another snapshot of the same process.
        ticks_per_second: Kernel tick rate. Defaults to the system value.
    """
    if a is None or b is None or (a.total == 0 and b.total == 0):
        return 0.0
    tps = ticks_per_second or system_ticks_per_second()

    if (a.uptime, a.total) > (b.uptime, b.total):
        a, b = b, a

    elapsed = b.uptime - a.uptime
    if elapsed == 0:
        elapsed = b.uptime - b.start / tps
    if elapsed <= 0:
        return 0.0

    return 100.0 * (b.total - a.total) / tps / elapsed


def process_lifetime_cpu_percent(stat: ProcessCPUStat, ticks_per_second: int | None = None) -> float:
    """CPU used by a process since it started, as a percentage of one core."""
    tps = ticks_per_second or system_ticks_per_second()
    elapsed = stat.uptime - stat.start / tps
    if elapsed <= 0:
        return 0.0
    return 100.0 * stat.total / tps / elapsed


def process_memory_percent(process: ProcessInfo, procfs: ProcFS | None = None) -> float:
    """Resident memory of ``process`` as a percentage of system memory."""
    memory = read_memory(procfs if procfs is not None else process.procfs)
    if memory.total == 0:
        return 0.0
    return 100.0 * process.memory.resident / memory.total
