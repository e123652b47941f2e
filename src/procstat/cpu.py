"""Readers for /proc/stat CPU counters and /proc/cpuinfo."""

from pathlib import Path

from procstat._io import open_record, read_uint
from procstat.config import ProcFS, resolve
from procstat.errors import MalformedRecord, NotFound
from procstat.models import CPUInfo, CPUStat
from procstat.schema import CPU_STAT, parse_uint

CPU_PREFIX = "cpu"

_FREQ_DIR = ("devices", "system", "cpu", "cpu0", "cpufreq")

# cpuinfo keys whose first occurrence describes the CPU
IDENTITY_KEYS = frozenset({"model name", "model", "cpu family", "vendor_id", "stepping", "cache size", "flags"})


def read_cpu_stat(procfs: ProcFS | None = None) -> tuple[CPUStat, list[CPUStat]]:
    """
    Read the aggregate and per-core tick counters.

    Args:
        procfs: Filesystem configuration. Defaults to the live system.

    Returns:
        The system-wide snapshot and the per-core snapshots in file order.

    Raises:
        NotAccessible: If /proc/stat cannot be read.
        MalformedRecord: If any cpu line does not match the expected layout,
            or the aggregate line is missing.
    """
    procfs = resolve(procfs)
    path = procfs.proc("stat")

    aggregate: CPUStat | None = None
    cores: list[CPUStat] = []
    with open_record(path) as fh:
        for line in fh:
            tokens = line.split()
            if not tokens or not tokens[0].startswith(CPU_PREFIX):
                continue
            stat = CPUStat.from_ticks(**CPU_STAT.extract(tokens, path))
            if tokens[0] == CPU_PREFIX:
                aggregate = stat
            else:
                cores.append(stat)

    if aggregate is None:
        raise MalformedRecord(path, "no aggregate cpu line")
    return aggregate, cores


def read_core_stat(index: int, procfs: ProcFS | None = None) -> CPUStat:
    """
    Read the tick counters of one core.

    ``index`` is the position of the core among the per-core lines, not the
    number in its label.

    Raises:
        NotFound: If there is no core at ``index``.
    """
    _, cores = read_cpu_stat(procfs)
    if not 0 <= index < len(cores):
        raise NotFound(index, kind="cpu core")
    return cores[index]


def _parse_uint_value(value: str, key: str, path: Path) -> int:
    try:
        return parse_uint(value)
    except ValueError as exc:
        raise MalformedRecord(path, f"{key}: {exc}") from exc


def read_cpu_info(procfs: ProcFS | None = None) -> CPUInfo:
    """
    Read CPU identity, topology and frequency limits.

    Identity fields come from the first stanza that carries them. The
    thread count is the number of ``processor`` lines; sockets and physical
    cores are counted as distinct ``physical id`` and ``core id`` values.

    Raises:
        NotAccessible: If cpuinfo or a frequency limit file cannot be read.
        MalformedRecord: On a line without exactly one colon, or a
            non-numeric value for a numeric key.
    """
    procfs = resolve(procfs)
    min_freq = read_uint(procfs.sys(*_FREQ_DIR, "cpuinfo_min_freq"))
    max_freq = read_uint(procfs.sys(*_FREQ_DIR, "cpuinfo_max_freq"))

    path = procfs.proc("cpuinfo")
    first: dict[str, str] = {}
    threads = 0
    sockets: set[int] = set()
    cores: set[int] = set()
    with open_record(path) as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            parts = line.split(":")
            if len(parts) != 2:
                raise MalformedRecord(path, f"cannot split {line!r} into key and value")
            key = parts[0].strip().lower()
            value = parts[1].strip()

            if key == "processor":
                threads += 1
            elif key == "physical id":
                sockets.add(_parse_uint_value(value, key, path))
            elif key == "core id":
                cores.add(_parse_uint_value(value, key, path))
            elif key in IDENTITY_KEYS:
                first.setdefault(key, value)

    cache_size = 0
    if "cache size" in first:
        cache_fields = first["cache size"].split()
        if len(cache_fields) != 2:
            raise MalformedRecord(path, f"cache size: unexpected value {first['cache size']!r}")
        cache_size = _parse_uint_value(cache_fields[0], "cache size", path)

    model = _parse_uint_value(first["model"], "model", path) if "model" in first else 0
    family = _parse_uint_value(first["cpu family"], "cpu family", path) if "cpu family" in first else 0

    return CPUInfo(
        name=first.get("model name", ""),
        vendor_id=first.get("vendor_id", ""),
        model=model,
        family=family,
        stepping=first.get("stepping", ""),
        cache_size=cache_size,
        flags=tuple(first.get("flags", "").split()),
        min_freq=min_freq,
        max_freq=max_freq,
        core_count=len(cores),
        thread_count=threads,
        socket_count=len(sockets),
    )
