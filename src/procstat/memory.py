"""Reader for /proc/meminfo."""

from procstat._io import open_record
from procstat.config import ProcFS, resolve
from procstat.errors import MalformedRecord
from procstat.models import MemorySnapshot
from procstat.schema import parse_uint

# meminfo key (lowercased) -> MemorySnapshot.from_counters argument
MEMINFO_KEYS = {
    "memtotal": "total",
    "memfree": "free",
    "cached": "cached",
    "buffers": "buffers",
    "active": "active",
    "inactive": "inactive",
    "swaptotal": "swap_total",
    "swapfree": "swap_free",
    "swapcached": "swap_cached",
}


def read_memory(procfs: ProcFS | None = None) -> MemorySnapshot:
    """
    Read system memory accounting.

    Values are in KiB as reported by the kernel. Unknown keys are ignored.

    Raises:
        NotAccessible: If /proc/meminfo cannot be read.
        MalformedRecord: If a line has fewer than two fields or a
            non-numeric value.
    """
    procfs = resolve(procfs)
    path = procfs.proc("meminfo")

    counters: dict[str, int] = {}
    with open_record(path) as fh:
        for line in fh:
            fields = line.split()
            if len(fields) < 2:
                raise MalformedRecord(path, f"short line {line.rstrip()!r}")
            try:
                value = parse_uint(fields[1])
            except ValueError as exc:
                raise MalformedRecord(path, f"{fields[0]} {exc}") from exc

            name = MEMINFO_KEYS.get(fields[0].rstrip(":").lower())
            if name is not None:
                counters[name] = value

    return MemorySnapshot.from_counters(**counters)
